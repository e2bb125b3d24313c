"""API credential storage and resolution for postgang."""

from postgang.storage.credentials import (
    load_api_credentials,
    get_api_key_source,
    get_api_uid_source,
)
from postgang.storage.env_storage import (
    get_user_config_dir,
    get_env_file_path,
)

__all__ = [
    "load_api_credentials",
    "get_api_key_source",
    "get_api_uid_source",
    "get_user_config_dir",
    "get_env_file_path",
]
