"""
AWS Lambda function for listing Peloton's browse categories (cycling, yoga, ...).
Proxies GET /api/browse_categories?library_type=on_demand.

Output Format:
-------------
Success (200):
{
    "browse_categories": [
        {
            "id": "string",
            "name": "string",
            "slug": "string",
            "list_order": integer,
            "icon_url": "string",
            "portal_image_url": "string"
        },
        ...
    ]
}
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.peloton import PelotonClient
from pelodata.responses import api_handler, json_response

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

CATEGORIES_PATH = '/api/browse_categories'
CATEGORY_FIELDS = {
    'id': '', 'name': '', 'slug': '', 'list_order': 0, 'icon_url': '', 'portal_image_url': '',
}


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    client = PelotonClient.from_config(Config.from_env())
    response = client.get(CATEGORIES_PATH, params={'library_type': 'on_demand'})

    categories = [
        {key: category.get(key, default) for key, default in CATEGORY_FIELDS.items()}
        for category in (response.json() or {}).get('browse_categories') or []
    ]
    logger.info("Retrieved %s browse categories", len(categories))
    return json_response(200, {'browse_categories': categories},
                         multi_value_headers=response.multi_value_headers)
