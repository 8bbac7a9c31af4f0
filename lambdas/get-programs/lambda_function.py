"""
AWS Lambda function for retrieving custom workout programs.

Routes:
------
GET /programs               - every public program plus the caller's own
GET /programs/{programId}   - a single program, if public or owned by the caller

Input Format:
------------
{
    "headers": {"UserID": "string"},      # Required
    "pathParameters": {"programId": "string"}   # Optional
}

Output Format:
-------------
List (200): [{program object}, ...]       # [] when nothing is visible
Single (200): {program object}

Error:
- 400 UserID missing, or program not found
- 401 program is private and owned by someone else
- 500 DynamoDB failure
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.events import get_path_parameter, get_user_id
from pelodata.responses import api_handler, json_response
from pelodata.service import PROGRAMS, ResourceService
from pelodata.store import ItemRepository

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    user_id = get_user_id(event)
    program_id = get_path_parameter(event, PROGRAMS.path_parameter)

    config = Config.from_env()
    service = ResourceService(PROGRAMS, ItemRepository.from_config(config))

    logger.info("Received request: user_id=%s, program_id=%s", user_id, program_id)
    if program_id:
        return json_response(200, service.get(program_id, user_id).to_dict())

    programs = service.list(user_id)
    return json_response(200, [program.to_dict() for program in programs])
