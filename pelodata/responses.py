"""
Response construction for every Lambda function.

Output Format:
-------------
Success (200):
{
    "statusCode": 200,
    "headers": {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*"
    },
    "body": <record, list of records, or upstream payload>
}

Error (400, 401, 500, or upstream status):
{
    "statusCode": 400/401/500,
    "headers": {...},
    "body": {
        "status": 400/401/500,
        "message": "Error message"
    }
}
"""

import functools
import json
import logging
from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

from pelodata.errors import PelodataError, UpstreamError

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    'Content-Type': 'application/json',
    'Access-Control-Allow-Origin': '*'
}


class DecimalEncoder(json.JSONEncoder):
    """JSON encoder that turns DynamoDB Decimals into ints or floats."""

    def default(self, o):
        if isinstance(o, Decimal):
            return int(o) if o == o.to_integral_value() else float(o)
        return super().default(o)


@dataclass(frozen=True)
class ErrorEnvelope:
    status: int
    message: str

    def to_response(self) -> Dict[str, Any]:
        return json_response(self.status, asdict(self))


def json_response(status_code: int, body: Any,
                  headers: Optional[Dict[str, str]] = None,
                  multi_value_headers: Optional[Dict[str, List[str]]] = None) -> Dict[str, Any]:
    response = {
        'statusCode': status_code,
        'headers': {**JSON_HEADERS, **(headers or {})},
        'body': json.dumps(body, cls=DecimalEncoder)
    }
    if multi_value_headers:
        response['multiValueHeaders'] = multi_value_headers
    return response


def empty_response(status_code: int,
                   multi_value_headers: Optional[Dict[str, List[str]]] = None) -> Dict[str, Any]:
    response = {
        'statusCode': status_code,
        'headers': dict(JSON_HEADERS),
        'body': ''
    }
    if multi_value_headers:
        response['multiValueHeaders'] = multi_value_headers
    return response


def error_response(status_code: int, message: str) -> Dict[str, Any]:
    return ErrorEnvelope(status_code, message).to_response()


def upstream_error_response(error: UpstreamError) -> Dict[str, Any]:
    """Pass the upstream status and body through when the upstream sent one."""
    if not error.body:
        return error_response(error.status_code, error.message)
    return {
        'statusCode': error.status_code,
        'headers': dict(JSON_HEADERS),
        'body': error.body
    }


def api_handler(func: Callable[[Dict[str, Any], Any], Dict[str, Any]]):
    """
    Wrap a lambda_handler so that every failure becomes exactly one envelope.

    PelodataError subclasses map to their own status code and message;
    anything else is logged and answered with a 500.
    """
    @functools.wraps(func)
    def wrapper(event, context):
        try:
            return func(event or {}, context)
        except UpstreamError as e:
            logger.error("Upstream error (%s): %s", e.status_code, e.message)
            return upstream_error_response(e)
        except PelodataError as e:
            if e.status_code >= 500:
                logger.error("Request failed: %s", e.message)
            else:
                logger.warning("Request rejected (%s): %s", e.status_code, e.message)
            return error_response(e.status_code, e.message)
        except Exception as e:  # pylint: disable=broad-exception-caught
            logger.error("Error in lambda_handler: %s", str(e), exc_info=True)
            return error_response(500, 'Internal server error')
    return wrapper
