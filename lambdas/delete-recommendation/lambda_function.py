"""
AWS Lambda function for deleting a recommendation.

Route:
-----
DELETE /recommendations/{recommendationId}

Rules:
-----
- the user who made the recommendation or the user it was made for may delete it

Output Format:
-------------
Success (200):
{
    "status": 200,
    "message": "Recommendation deleted"
}

Error:
- 400 UserID or recommendationId missing, or the recommendation doesn't exist
- 401 the caller neither made nor received the recommendation
- 500 DynamoDB failure
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.events import get_path_parameter, get_user_id
from pelodata.responses import api_handler, json_response
from pelodata.service import RECOMMENDATIONS, ResourceService
from pelodata.store import ItemRepository

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    user_id = get_user_id(event)
    recommendation_id = get_path_parameter(event, RECOMMENDATIONS.path_parameter)

    config = Config.from_env()
    service = ResourceService(RECOMMENDATIONS, ItemRepository.from_config(config))

    logger.info("Deleting recommendation %s for user %s", recommendation_id, user_id)
    service.delete(recommendation_id, user_id)
    return json_response(200, {'status': 200, 'message': 'Recommendation deleted'})
