"""
AWS Lambda function for recommending a Peloton class to another user.

Input Format:
------------
{
    "headers": {
        "UserID": "string"                # Required: the recommender
    },
    "body": {
        "recommendedFor": "string",       # Required: must differ from UserID
        "workout": {                      # Required: snapshot of the class
            "id": "string",
            "title": "string",
            "description": "string",
            "difficulty_estimate": number,
            "duration": integer,
            "image_url": "string",
            "instructor_id": "string",
            "instructor_name": "string",
            "original_air_time": integer
        }
    }
}

The same user may not recommend the same workout to the same person twice.

Output Format:
-------------
Success (200):
{
    "id": "string",
    "createdBy": "string",
    "recommendedFor": "string",
    "workout": {workout object}
}

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
from pelodata.service import RECOMMENDATIONS, ResourceService
from pelodata.store import ItemRepository

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    """Handle a new recommendation."""
    user_id = get_user_id(event)
    body = parse_body(event)

    config = Config.from_env()
    service = ResourceService(RECOMMENDATIONS, ItemRepository.from_config(config))

    recommendation = service.create(body, user_id)
    logger.info("User %s recommended workout %s to %s",
                user_id, recommendation.workout.id, recommendation.recommended_for)
    return json_response(200, recommendation.to_dict())
