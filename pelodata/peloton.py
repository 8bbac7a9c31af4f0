"""
Client for the Peloton REST API.

Requests are blocking and never retried. Any answer above 399 is raised as
an UpstreamError carrying Peloton's own status, body and headers so that the
function can hand them back to the caller unchanged.
"""

import json
import logging
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import requests

from pelodata.config import DEFAULT_PELOTON_URL
from pelodata.errors import UpstreamError
from pelodata.events import get_header

logger = logging.getLogger(__name__)

PLATFORM_HEADERS = {'Peloton-Platform': 'web'}

# Headers that describe the upstream transfer rather than the payload; the
# functions re-serialize bodies so these must not be replayed.
_SKIPPED_HEADERS = {'content-length', 'content-encoding', 'transfer-encoding', 'connection'}


@dataclass
class PelotonResponse:
    status_code: int
    body: bytes = b''
    multi_value_headers: Dict[str, List[str]] = field(default_factory=dict)

    def json(self) -> Any:
        try:
            return json.loads(self.body or b'null')
        except ValueError as e:
            raise UpstreamError(f"Unable to unmarshal response: {e}") from e


def forwarded_headers(event: Dict[str, Any]) -> Dict[str, str]:
    """Headers from the inbound request that Peloton needs (the session cookie)."""
    cookie = get_header(event, 'Cookie')
    return {'Cookie': cookie} if cookie else {}


def multi_value_headers(response: requests.Response) -> Dict[str, List[str]]:
    """Collect response headers as name -> [values], keeping repeated Set-Cookie headers."""
    raw_headers = getattr(response.raw, 'headers', None)
    if raw_headers is not None and hasattr(raw_headers, 'getlist'):
        pairs = [(name, raw_headers.getlist(name)) for name in raw_headers.keys()]
    else:
        pairs = [(name, [value]) for name, value in response.headers.items()]
    return {name: values for name, values in pairs if name.lower() not in _SKIPPED_HEADERS}


class PelotonClient:
    """Sends requests to the Peloton API on behalf of the caller."""

    def __init__(self, base_url: str = DEFAULT_PELOTON_URL,
                 session: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip('/')
        self.session = session or requests.Session()

    @classmethod
    def from_config(cls, config) -> "PelotonClient":
        return cls(config.peloton_base_url)

    def request(self, method: str, path: str,
                headers: Optional[Dict[str, str]] = None,
                params: Optional[Dict[str, str]] = None,
                json_body: Optional[Dict[str, Any]] = None) -> PelotonResponse:
        if not path.startswith('/'):
            path = f"/{path}"
        url = f"{self.base_url}{path}"

        try:
            response = self.session.request(
                method,
                url,
                headers={**PLATFORM_HEADERS, **(headers or {})},
                params=params or None,
                json=json_body,
            )
        except requests.RequestException as e:
            logger.error("Error calling Peloton %s %s: %s", method, path, str(e))
            raise UpstreamError(f"Unable to reach Peloton: {e}") from e

        response_headers = multi_value_headers(response)
        if response.status_code > 399:
            logger.warning("Peloton %s %s returned %s", method, path, response.status_code)
            raise UpstreamError(
                f"Error communicating with Peloton: {response.status_code} {response.reason}",
                status_code=response.status_code,
                body=response.text or None,
                headers=response_headers,
            )

        logger.info("Peloton %s %s returned %s", method, path, response.status_code)
        return PelotonResponse(
            status_code=response.status_code,
            body=response.content,
            multi_value_headers=response_headers,
        )

    def get(self, path: str, **kwargs) -> PelotonResponse:
        return self.request('GET', path, **kwargs)

    def post(self, path: str, **kwargs) -> PelotonResponse:
        return self.request('POST', path, **kwargs)
