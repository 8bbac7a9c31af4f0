"""
AWS Lambda function for creating a custom workout program.
Validates the program, checks that its name is free, and stores it in DynamoDB.

Input Format:
------------
{
    "headers": {
        "UserID": "string"                # Required: caller's Peloton user id
    },
    "body": {
        "name": "string",                 # Required: unique per scope (see below)
        "description": "string",
        "public": boolean,                # Default false
        "equipmentNeeded": ["string", ...],
        "numWeeks": integer,              # Required: must be > 0
        "workouts": [                     # Required: one list of classes per week
            [{workout object} | "workout id", ...],
            ...
        ]
    }
}

Name scope:
- public programs must have a name no other public program uses
- private programs must have a name none of the caller's programs use

Workout references:
- a bare "workout id" string is stored and returned as a full workout
  object with that id and every other field at its default

Output Format:
-------------
Success (200):
{
    "statusCode": 200,
    "body": {
        "id": "string",                   # Generated
        "name": "string",
        "description": "string",
        "public": boolean,
        "equipmentNeeded": ["string", ...],
        "numWeeks": integer,
        "workouts": [[{workout object}, ...], ...],
        "createdBy": "string",            # Always the UserID header
        "createdDate": "YYYY-MM-DDTHH:MM:SSZ"
    }
}

Error (400, 500):
{
    "statusCode": 400/500,
    "body": {
        "status": 400/500,
        "message": "Error message"
    }
}

Known Limitations:
-----------------
- The name check is a table scan followed by a separate put, so two
  simultaneous requests for the same name can both succeed.
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.events import get_user_id, parse_body
from pelodata.responses import api_handler, json_response
from pelodata.service import PROGRAMS, ResourceService
from pelodata.store import ItemRepository

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    """Handle a new program submission."""
    user_id = get_user_id(event)
    body = parse_body(event)

    config = Config.from_env()
    service = ResourceService(PROGRAMS, ItemRepository.from_config(config))

    logger.info("Creating program for user %s", user_id)
    program = service.create(body, user_id)
    return json_response(200, program.to_dict())
