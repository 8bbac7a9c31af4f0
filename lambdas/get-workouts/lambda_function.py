"""
AWS Lambda function for browsing the Peloton on-demand class library.
Proxies GET /api/v2/ride/archived and attaches each class's instructor name.

Input Format:
------------
{
    "headers": {
        "Cookie": "string"                # Optional: Peloton session cookie
    },
    "queryStringParameters": {            # All optional
        "category": "string",             # Forwarded as browse_category (cycling, yoga, ...)
        "content_format": "string",       # audio, video
        "is_favorite_ride": "boolean",    # Only bookmarked classes
        "has_workout": "boolean",         # Only classes already taken
        "duration": "integer",            # Class length in seconds (> 0)
        "class_type_id": "string",
        "instructor_id": "string",
        "super_genre_id": "string",       # Music genre
        "limit": "integer",               # Page size (> 0)
        "page": "integer",                # Page number, starts at 0
        "sort_by": "string",              # original_air_time, trending, popularity,
                                          # top_rated, difficulty
        "desc": "boolean"
    }
}

Output Format:
-------------
Success (200):
{
    "data": [
        {
            "id": "string",
            "title": "string",
            "description": "string",
            "difficulty_estimate": number,
            "duration": integer,
            "image_url": "string",
            "instructor_id": "string",
            "instructor_name": "string",
            "original_air_time": integer
        },
        ...
    ],
    "page": integer,
    "total": integer,
    "count": integer,
    "page_count": integer,
    "instructors": [{"id": "string", "name": "string"}, ...]
}

Error:
- 400 {"status": 400, "message": "..."} for an invalid query parameter
- Peloton's own status and body when Peloton rejects the request
"""

import logging
from typing import Any, Dict, List

from pelodata.config import Config
from pelodata.errors import ValidationFailed
from pelodata.events import get_query_parameters
from pelodata.models import Workout
from pelodata.peloton import PelotonClient, forwarded_headers
from pelodata.responses import api_handler, json_response
from pelodata.validation import parse_bool, parse_int

# Set up logging
logger = logging.getLogger()
logger.setLevel(logging.INFO)

WORKOUTS_PATH = '/api/v2/ride/archived'

# (incoming name, Peloton name, value kind), in the order they are forwarded
QUERY_PARAMETERS = [
    ('category', 'browse_category', 'text'),
    ('content_format', 'content_format', 'text'),
    ('is_favorite_ride', 'is_favorite_ride', 'bool'),
    ('has_workout', 'has_workout', 'bool'),
    ('duration', 'duration', 'positive'),
    ('class_type_id', 'class_type_id', 'text'),
    ('instructor_id', 'instructor_id', 'text'),
    ('super_genre_id', 'super_genre_id', 'text'),
    ('limit', 'limit', 'positive'),
    ('page', 'page', 'non_negative'),
    ('sort_by', 'sort_by', 'text'),
    ('desc', 'desc', 'bool'),
]


def build_query(query_params: Dict[str, str]) -> Dict[str, str]:
    """Validate the caller's filters and translate them to Peloton's names."""
    params = {}
    for name, upstream_name, kind in QUERY_PARAMETERS:
        if name not in query_params:
            continue
        value = query_params[name]

        match kind:
            case 'bool':
                parsed = parse_bool(value)
                if parsed is None:
                    raise ValidationFailed(f"{name} must be true or false")
                params[upstream_name] = str(parsed).lower()
            case 'positive':
                parsed = parse_int(value, minimum=1)
                if parsed is None:
                    raise ValidationFailed(f"{name} must be a number greater than 0")
                params[upstream_name] = str(parsed)
            case 'non_negative':
                parsed = parse_int(value, minimum=0)
                if parsed is None:
                    raise ValidationFailed(f"{name} must be a number 0 or greater")
                params[upstream_name] = str(parsed)
            case _:
                params[upstream_name] = value
    return params


def project_workout(entry: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only the workout fields the app uses, filling gaps with defaults."""
    defaults = Workout().to_dict()
    return {
        field: entry.get(field) if entry.get(field) is not None else default
        for field, default in defaults.items()
    }


def attach_instructor_names(payload: Dict[str, Any]) -> Dict[str, Any]:
    """Reshape Peloton's archive page, joining instructor names onto each class."""
    instructors: List[Dict[str, Any]] = [
        {'id': instructor.get('id', ''), 'name': instructor.get('name', '')}
        for instructor in payload.get('instructors') or []
    ]
    names = {instructor['id']: instructor['name'] for instructor in instructors}

    workouts = []
    for entry in payload.get('data') or []:
        workout = project_workout(entry)
        if workout['instructor_id'] in names:
            workout['instructor_name'] = names[workout['instructor_id']]
        workouts.append(workout)

    return {
        'data': workouts,
        'page': payload.get('page', 0),
        'total': payload.get('total', 0),
        'count': payload.get('count', 0),
        'page_count': payload.get('page_count', 0),
        'instructors': instructors,
    }


@api_handler
def lambda_handler(event: Dict[str, Any], _: Any) -> Dict[str, Any]:
    """Handle a class library request."""
    params = build_query(get_query_parameters(event))
    logger.info("Received request: params=%s", params)

    client = PelotonClient.from_config(Config.from_env())
    response = client.get(WORKOUTS_PATH, headers=forwarded_headers(event), params=params)

    return json_response(
        200,
        attach_instructor_names(response.json() or {}),
        multi_value_headers=response.multi_value_headers,
    )
