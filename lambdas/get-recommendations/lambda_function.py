"""
AWS Lambda function for retrieving class recommendations.

Routes:
------
GET /recommendations?type=forMe|byMe|all
GET /recommendations/{recommendationId}

Input Format:
------------
{
    "headers": {"UserID": "string"},                # Required
    "pathParameters": {"recommendationId": "string"},   # Optional
    "queryStringParameters": {
        "type": "string"      # Optional, case-insensitive (default: "forMe")
                              # forMe - recommendations made to the caller
                              # byMe  - recommendations made by the caller
                              # all   - both
    }
}

A single recommendation is only visible to the user who made it and the user
it was made for.

Output Format:
-------------
List (200): [{recommendation object}, ...]
Single (200): {recommendation object}
Error (400/401/500): {"status": ..., "message": "..."}
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.events import get_path_parameter, get_query_parameters, get_user_id
from pelodata.responses import api_handler, json_response
from pelodata.service import RECOMMENDATIONS, ResourceService, recommendation_scope
from pelodata.store import ItemRepository

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    user_id = get_user_id(event)
    recommendation_id = get_path_parameter(event, RECOMMENDATIONS.path_parameter)
    rec_type = get_query_parameters(event).get('type')

    logger.info("Received request: user_id=%s, recommendation_id=%s, type=%s",
                user_id, recommendation_id, rec_type)

    config = Config.from_env()
    service = ResourceService(RECOMMENDATIONS, ItemRepository.from_config(config))

    if recommendation_id:
        return json_response(200, service.get(recommendation_id, user_id).to_dict())

    recommendations = service.list(user_id, recommendation_scope(rec_type, user_id))
    return json_response(200, [rec.to_dict() for rec in recommendations])
