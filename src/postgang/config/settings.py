"""Runtime settings for the Bring API client."""

import logging
import os
from dataclasses import dataclass
from typing import Mapping, Optional

from postgang.config.constants import (
    API_BASE_URL,
    API_COUNTRY_CODE,
    API_DEFAULT_TIMEOUT,
    API_PATH_TEMPLATE,
    ENV_API_TIMEOUT,
    ENV_API_URL,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class APIConfig:
    """Connection settings for the mailbox delivery dates endpoint."""

    base_url: str = API_BASE_URL
    country_code: str = API_COUNTRY_CODE
    timeout: float = API_DEFAULT_TIMEOUT

    def delivery_dates_url(self, postal_code) -> str:
        """Build the endpoint URL for one postal code."""
        return API_PATH_TEMPLATE.format(
            base_url=self.base_url.rstrip("/"),
            country_code=self.country_code,
            postal_code=postal_code,
        )

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "APIConfig":
        """Create settings from environment variables, falling back to defaults.

        Args:
            environ: Mapping to read from (default: os.environ).

        Returns:
            An APIConfig instance.
        """
        env = os.environ if environ is None else environ
        base_url = env.get(ENV_API_URL) or API_BASE_URL

        timeout = float(API_DEFAULT_TIMEOUT)
        raw_timeout = env.get(ENV_API_TIMEOUT)
        if raw_timeout:
            try:
                timeout = float(raw_timeout)
            except ValueError:
                logger.warning(
                    "Ignoring invalid %s value %r, using %s seconds",
                    ENV_API_TIMEOUT, raw_timeout, timeout
                )

        return cls(base_url=base_url, timeout=timeout)


API_CONFIG = APIConfig()
