"""
AWS Lambda function for removing a bookmark from a Peloton class.
Proxies POST /api/favorites/delete with the caller's session cookie.

Input Format:
------------
{
    "headers": {"Cookie": "string"},      # Peloton session cookie
    "body": {"ride_id": "string"}         # Required
}

Output Format:
-------------
Success: Peloton's status and headers, empty body
Error:
- 400 {"status": 400, "message": "ride_id is required in request body"}
- Peloton's own status and body when Peloton rejects the request
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.events import get_ride_id
from pelodata.peloton import PelotonClient, forwarded_headers
from pelodata.responses import api_handler, empty_response

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

UNBOOKMARK_PATH = '/api/favorites/delete'


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    ride_id = get_ride_id(event)
    logger.info("Removing bookmark from class %s", ride_id)

    client = PelotonClient.from_config(Config.from_env())
    response = client.post(UNBOOKMARK_PATH, headers=forwarded_headers(event),
                           json_body={'ride_id': ride_id})
    return empty_response(response.status_code, response.multi_value_headers)
