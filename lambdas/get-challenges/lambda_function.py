"""
AWS Lambda function for retrieving challenges.

Routes:
------
GET /challenges                 - every public challenge plus the caller's own
GET /challenges/{challengeId}   - a single challenge, if public or owned by the caller

Output Format:
-------------
List (200): [{challenge object}, ...]
Single (200): {challenge object}
Error (400/401/500): {"status": ..., "message": "..."}
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.events import get_path_parameter, get_user_id
from pelodata.responses import api_handler, json_response
from pelodata.service import CHALLENGES, ResourceService
from pelodata.store import ItemRepository

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    user_id = get_user_id(event)
    challenge_id = get_path_parameter(event, CHALLENGES.path_parameter)

    config = Config.from_env()
    service = ResourceService(CHALLENGES, ItemRepository.from_config(config))

    logger.info("Received request: user_id=%s, challenge_id=%s", user_id, challenge_id)
    if challenge_id:
        return json_response(200, service.get(challenge_id, user_id).to_dict())

    challenges = service.list(user_id)
    return json_response(200, [challenge.to_dict() for challenge in challenges])
