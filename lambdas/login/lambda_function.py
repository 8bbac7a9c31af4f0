"""
AWS Lambda function for logging a user in through Peloton.
Proxies POST /auth/login and hands Peloton's session cookie back to the app.

Input Format:
------------
{
    "body": {
        "username_or_email": "string",    # Required
        "password": "string"              # Required
    }
}

Output Format:
-------------
Success (200):
{
    "statusCode": 200,
    "multiValueHeaders": {"Set-Cookie": ["peloton_session_id=...", ...], ...},
    "body": {
        "user_id": "string",
        "session_id": "string"
    }
}

Error:
- 400 {"status": 400, "message": "..."} for a missing or malformed body
- Peloton's own status and body for rejected credentials
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.errors import MalformedBody, ValidationFailed
from pelodata.events import parse_body
from pelodata.peloton import PelotonClient
from pelodata.responses import api_handler, json_response

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

LOGIN_PATH = '/auth/login'


def get_credentials(body: Dict[str, Any]) -> Dict[str, str]:
    username = body.get('username_or_email') or ''
    password = body.get('password') or ''
    if not isinstance(username, str) or not isinstance(password, str):
        raise MalformedBody()

    credentials = {'username_or_email': username.strip(), 'password': password.strip()}
    if not credentials['username_or_email'] or not credentials['password']:
        raise ValidationFailed("username and password must be provided")
    return credentials


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    credentials = get_credentials(parse_body(event))

    client = PelotonClient.from_config(Config.from_env())
    response = client.post(LOGIN_PATH, json_body=credentials)

    payload = response.json() or {}
    logger.info("Logged in Peloton user %s", payload.get('user_id'))
    return json_response(
        200,
        {'user_id': payload.get('user_id', ''), 'session_id': payload.get('session_id', '')},
        multi_value_headers=response.multi_value_headers,
    )
