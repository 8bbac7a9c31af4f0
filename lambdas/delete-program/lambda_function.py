"""
AWS Lambda function for deleting a program.

Route:
-----
DELETE /programs/{programId}

Rules:
-----
- only the user who created the program may delete it

Output Format:
-------------
Success (200):
{
    "status": 200,
    "message": "Program deleted"
}

Error:
- 400 UserID or programId missing, or the program doesn't exist
- 401 the caller did not create the program
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

    logger.info("Deleting program %s for user %s", program_id, user_id)
    service.delete(program_id, user_id)
    return json_response(200, {'status': 200, 'message': 'Program deleted'})
