"""
Helpers for pulling identity and parameters out of API Gateway proxy events.

Input Format:
------------
{
    "headers": {"UserID": "string", "Cookie": "string", ...},
    "pathParameters": {"programId": "string", ...},
    "queryStringParameters": {"type": "string", ...},
    "body": "string" | {...},
    "isBase64Encoded": boolean
}
"""

import base64
import json
from typing import Any, Dict, Optional

from pelodata.errors import MalformedBody, MissingIdentity, ValidationFailed

IDENTITY_HEADER = "UserID"


def get_header(event: Dict[str, Any], name: str) -> Optional[str]:
    """Case-insensitive header lookup; HTTP APIs lower-case header names."""
    headers = event.get('headers') or {}
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def get_user_id(event: Dict[str, Any]) -> str:
    """Return the caller's identity from the UserID header, trimmed."""
    user_id = (get_header(event, IDENTITY_HEADER) or "").strip()
    if not user_id:
        raise MissingIdentity()
    return user_id


def get_path_parameter(event: Dict[str, Any], name: str) -> str:
    path_params = event.get('pathParameters') or {}
    return (path_params.get(name) or "").strip()


def get_query_parameters(event: Dict[str, Any]) -> Dict[str, str]:
    return dict(event.get('queryStringParameters') or {})


def parse_body(event: Dict[str, Any]) -> Dict[str, Any]:
    """
    Decode the request body into a dict.

    The body may already be a dict (direct invocation), a JSON string, or a
    base64-encoded JSON string. Anything that is not a JSON object raises
    MalformedBody.
    """
    body = event.get('body')
    if isinstance(body, dict):
        return body
    if not body:
        raise MalformedBody()

    try:
        if event.get('isBase64Encoded'):
            body = base64.b64decode(body).decode('utf-8')
        parsed = json.loads(body)
    except ValueError as e:  # also oversized integer literals
        raise MalformedBody() from e

    if not isinstance(parsed, dict):
        raise MalformedBody()
    return parsed


def get_ride_id(event: Dict[str, Any]) -> str:
    """Return the trimmed ``ride_id`` from the body of a bookmark request."""
    try:
        ride_id = parse_body(event).get('ride_id')
    except MalformedBody as e:
        raise ValidationFailed("ride_id is required in request body") from e
    if not isinstance(ride_id, str) or not ride_id.strip():
        raise ValidationFailed("ride_id is required in request body")
    return ride_id.strip()
