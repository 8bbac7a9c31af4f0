"""
AWS Lambda function for fetching the class-library filter and sort options.
Proxies GET /api/ride/filters?library_type=on_demand.

Query Parameters:
----------------
include_icon_images - "true"/"false", whether Peloton includes icon images
browse_category     - workout category, e.g. cycling, yoga

Output Format:
-------------
Success (200):
{
    "filters": [
        {
            "name": "string",
            "display_name": "string",
            "type": "string",
            "user_specific": boolean,
            "values": [
                {"value": "string", "display_name": "string",
                 "list_order": integer, "display_image_url": "string"},
                ...
            ]
        },
        ...
    ],
    "sorts": [
        {"value": {"sort": "string", "desc": boolean},
         "display_name": "string", "slug": "string"},
        ...
    ]
}
"""

import logging
from typing import Any, Dict

from pelodata.config import Config
from pelodata.errors import ValidationFailed
from pelodata.events import get_query_parameters
from pelodata.peloton import PelotonClient
from pelodata.responses import api_handler, json_response
from pelodata.validation import parse_bool

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

FILTERS_PATH = '/api/ride/filters'


def build_query(query_params: Dict[str, str]) -> Dict[str, str]:
    params = {'library_type': 'on_demand'}
    if 'include_icon_images' in query_params:
        include_icons = parse_bool(query_params['include_icon_images'])
        if include_icons is None:
            raise ValidationFailed("include_icon_images must be true or false")
        params['include_icon_images'] = str(include_icons).lower()
    if 'browse_category' in query_params:
        params['browse_category'] = query_params['browse_category']
    return params


def format_filters(payload: Dict[str, Any]) -> Dict[str, Any]:
    filters = []
    for item in payload.get('filters') or []:
        filters.append({
            'name': item.get('name', ''),
            'display_name': item.get('display_name', ''),
            'type': item.get('type', ''),
            'user_specific': bool(item.get('user_specific', False)),
            'values': [
                {
                    'value': value.get('value', ''),
                    'display_name': value.get('display_name', ''),
                    'list_order': value.get('list_order', 0),
                    'display_image_url': value.get('display_image_url', ''),
                }
                for value in item.get('values') or []
            ],
        })

    sorts = []
    for item in payload.get('sorts') or []:
        value = item.get('value') or {}
        sorts.append({
            'value': {'sort': value.get('sort', ''), 'desc': bool(value.get('desc', False))},
            'display_name': item.get('display_name', ''),
            'slug': item.get('slug', ''),
        })

    return {'filters': filters, 'sorts': sorts}


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    params = build_query(get_query_parameters(event))
    logger.info("Received request: params=%s", params)

    client = PelotonClient.from_config(Config.from_env())
    response = client.get(FILTERS_PATH, params=params)

    return json_response(200, format_filters(response.json() or {}),
                         multi_value_headers=response.multi_value_headers)
