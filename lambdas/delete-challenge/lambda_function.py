"""
AWS Lambda function for deleting a challenge.

Route:
-----
DELETE /challenges/{challengeId}

Rules:
-----
- only the user who created the challenge may delete it

Output Format:
-------------
Success (200):
{
    "status": 200,
    "message": "Challenge deleted"
}

Error:
- 400 UserID or challengeId missing, or the challenge doesn't exist
- 401 the caller did not create the challenge
- 500 DynamoDB failure
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

    logger.info("Deleting challenge %s for user %s", challenge_id, user_id)
    service.delete(challenge_id, user_id)
    return json_response(200, {'status': 200, 'message': 'Challenge deleted'})
