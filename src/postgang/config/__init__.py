"""Configuration module for postgang."""

from postgang.config.settings import API_CONFIG, APIConfig
from postgang.config.constants import (
    ICS_PRODID,
    EVENT_URL,
    NORWEGIAN_WEEKDAYS,
    ENV_API_UID,
    ENV_API_KEY,
    ENV_LOG_LEVEL,
    KEYRING_SERVICE_NAME,
    KEYRING_ACCOUNT_NAME,
)

__all__ = [
    "API_CONFIG",
    "APIConfig",
    "ICS_PRODID",
    "EVENT_URL",
    "NORWEGIAN_WEEKDAYS",
    "ENV_API_UID",
    "ENV_API_KEY",
    "ENV_LOG_LEVEL",
    "KEYRING_SERVICE_NAME",
    "KEYRING_ACCOUNT_NAME",
]
