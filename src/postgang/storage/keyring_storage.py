"""Keyring-based secure storage for the API key."""

import logging
from typing import Optional

import keyring

from postgang.config.constants import KEYRING_SERVICE_NAME, KEYRING_ACCOUNT_NAME

logger = logging.getLogger(__name__)


def load_from_keyring() -> Optional[str]:
    """Load the API key from the OS keyring if available.

    Any backend failure is logged and treated as "no key stored".

    Returns:
        The API key if found, None otherwise.
    """
    try:
        return keyring.get_password(KEYRING_SERVICE_NAME, KEYRING_ACCOUNT_NAME)
    except Exception as e:
        logger.warning("Keyring lookup failed: %s", e)
        return None
