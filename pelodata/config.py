"""Runtime configuration, read from the Lambda environment once per invocation."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from pelodata.errors import ConfigurationError

DEFAULT_PELOTON_URL = "https://api.onepeloton.com"


@dataclass(frozen=True)
class Config:
    table_region: Optional[str] = None
    table_name: Optional[str] = None
    peloton_base_url: str = DEFAULT_PELOTON_URL

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config from environment variables (``os.environ`` by default)."""
        environ = os.environ if environ is None else environ
        return cls(
            table_region=environ.get("table_region") or None,
            table_name=environ.get("table_name") or None,
            peloton_base_url=(environ.get("peloton_base_url") or DEFAULT_PELOTON_URL).rstrip("/"),
        )

    def require_table(self) -> None:
        """Raise ConfigurationError unless both table settings are present."""
        if not self.table_region:
            raise ConfigurationError("table_region env var doesn't exist")
        if not self.table_name:
            raise ConfigurationError("table_name env var doesn't exist")
