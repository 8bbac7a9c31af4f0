"""
AWS Lambda function for fetching a Peloton user's public profile.
Proxies GET /api/user/{userId}.

Input Format:
------------
{
    "pathParameters": {"userId": "string"}    # Required: Peloton user id
}

Output Format:
-------------
Success (200):
{
    "id": "string",
    "username": "string",
    "location": "string",
    "total_workouts": integer,
    "workout_counts": [
        {"name": "string", "count": integer, "icon_url": "string"},
        ...
    ]
}
"""

import logging
from typing import Any, Dict
from urllib.parse import quote

from pelodata.config import Config
from pelodata.errors import ValidationFailed
from pelodata.events import get_path_parameter
from pelodata.peloton import PelotonClient
from pelodata.responses import api_handler, json_response

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


def format_user(payload: Dict[str, Any]) -> Dict[str, Any]:
    return {
        'id': payload.get('id', ''),
        'username': payload.get('username', ''),
        'location': payload.get('location', ''),
        'total_workouts': payload.get('total_workouts', 0),
        'workout_counts': [
            {
                'name': count.get('name', ''),
                'count': count.get('count', 0),
                'icon_url': count.get('icon_url', ''),
            }
            for count in payload.get('workout_counts') or []
        ],
    }


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    user_id = get_path_parameter(event, 'userId')
    if not user_id:
        raise ValidationFailed("userId must be provided")

    logger.info("Fetching Peloton profile for user %s", user_id)
    client = PelotonClient.from_config(Config.from_env())
    response = client.get(f"/api/user/{quote(user_id, safe='')}")

    return json_response(200, format_user(response.json() or {}),
                         multi_value_headers=response.multi_value_headers)
