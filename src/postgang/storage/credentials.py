"""High-level API credential resolution."""

import logging
import os
from pathlib import Path
from typing import Mapping, Optional, Tuple

from postgang.config.constants import ENV_API_KEY, ENV_API_UID
from postgang.core.models import ApiCredentials
from postgang.exceptions.errors import CredentialsError
from postgang.storage.env_storage import get_env_file_path, load_from_env_file
from postgang.storage.keyring_storage import load_from_keyring
from postgang.utils.masking import mask_key

logger = logging.getLogger(__name__)


def get_api_uid_source(
    uid: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
) -> Tuple[Optional[str], str]:
    """Determine where the API identity comes from.

    Returns:
        Tuple of (api_uid, source_description).
    """
    if uid:
        return uid, "Command line"

    env = os.environ if environ is None else environ
    if env.get(ENV_API_UID):
        return env[ENV_API_UID], f"Environment Variable ({ENV_API_UID})"

    path = env_file or get_env_file_path()
    file_uid = load_from_env_file(path)["uid"]
    if file_uid:
        return file_uid, f"User Config: {path}"

    return None, "No API UID Found"


def get_api_key_source(
    key: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
    use_keyring: bool = True,
) -> Tuple[Optional[str], str]:
    """Determine where the API key comes from.

    Returns:
        Tuple of (api_key, source_description).
    """
    if key:
        return key, "Command line"

    env = os.environ if environ is None else environ
    if env.get(ENV_API_KEY):
        return env[ENV_API_KEY], f"Environment Variable ({ENV_API_KEY})"

    path = env_file or get_env_file_path()
    file_key = load_from_env_file(path)["key"]
    if file_key:
        return file_key, f"User Config: {path}"

    if use_keyring:
        keyring_key = load_from_keyring()
        if keyring_key:
            return keyring_key, "OS Keyring"

    return None, "No API Key Found"


def load_api_credentials(
    uid: Optional[str] = None,
    key: Optional[str] = None,
    environ: Optional[Mapping[str, str]] = None,
    env_file: Optional[Path] = None,
    use_keyring: bool = True,
) -> ApiCredentials:
    """Resolve the Bring API identity and key.

    Priority for each value:
        1. Explicit argument (command-line flag)
        2. POSTGANG_API_UID / POSTGANG_API_KEY environment variables
        3. User config .env
        4. OS keyring (key only)

    Args:
        uid: API identity given on the command line.
        key: API key given on the command line.
        environ: Environment mapping (default: os.environ).
        env_file: .env file to consult (default: per-user config file).
        use_keyring: Whether to consult the OS keyring for the key.

    Returns:
        The resolved credentials.

    Raises:
        CredentialsError: If either value cannot be found.
    """
    api_uid, uid_source = get_api_uid_source(uid, environ, env_file)
    api_key, key_source = get_api_key_source(key, environ, env_file, use_keyring)

    missing = []
    if not api_uid:
        missing.append(f"API UID (--api-uid or {ENV_API_UID})")
    if not api_key:
        missing.append(f"API key (--api-key or {ENV_API_KEY})")
    if missing:
        raise CredentialsError("Missing " + " and ".join(missing))

    logger.debug("Using API UID from %s", uid_source)
    logger.debug("Using API key %s from %s", mask_key(api_key), key_source)
    return ApiCredentials(uid=api_uid, key=api_key)
