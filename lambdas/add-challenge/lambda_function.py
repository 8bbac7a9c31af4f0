"""
AWS Lambda function for creating a workout challenge.
Challenges follow the same name rules as programs: unique among public
challenges when public, unique among the caller's challenges when private.

Input Format:
------------
{
    "headers": {
        "UserID": "string"                # Required
    },
    "body": {
        "name": "string",                 # Required
        "description": "string",
        "public": boolean,
        "equipmentNeeded": ["string", ...],
        "difficulty": number,             # Required: must be > 0
        "startDate": "YYYY-MM-DD",        # Required: today or later
        "endDate": "YYYY-MM-DD",          # Required: not before startDate
        "numWorkoutGoal": integer,        # Required: must be > 0
        "workoutTypes": ["string", ...]   # Required: non-empty
    }
}

Output Format:
-------------
Success (200): the stored challenge, including generated "id" and "createdBy"

Error (400, 500):
{
    "status": 400/500,
    "message": "Error message"
}
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.events import get_user_id, parse_body
from pelodata.responses import api_handler, json_response
from pelodata.service import CHALLENGES, ResourceService
from pelodata.store import ItemRepository

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    """Handle a new challenge submission."""
    user_id = get_user_id(event)
    body = parse_body(event)

    config = Config.from_env()
    service = ResourceService(CHALLENGES, ItemRepository.from_config(config))

    logger.info("Creating challenge for user %s", user_id)
    challenge = service.create(body, user_id)
    return json_response(200, challenge.to_dict())
