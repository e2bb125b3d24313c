"""Centralized constants for postgang.

Everything that ends up in the generated calendar text lives here. The
calendar identifiers and field layout are relied upon by calendar clients
to recognize events across regenerations, so changing any of these values
breaks compatibility with previously published calendars.
"""

# ICS calendar constants
ICS_PRODID = "-//Aasan//Aasan Postgang//EN"
ICS_VERSION = "2.0"
ICS_CALSCALE = "GREGORIAN"
ICS_METHOD = "PUBLISH"

# Event constants
EVENT_URL = "https://www.posten.no/levering-av-post/"
EVENT_TRANSP = "TRANSPARENT"
EVENT_UID_PREFIX = "postgang"
EVENT_SUMMARY_TEMPLATE = "{postal_code}: Posten kommer {weekday} {day}."

# Norwegian weekday names indexed by ISO weekday (1 = Monday, 7 = Sunday)
NORWEGIAN_WEEKDAYS = {
    1: "mandag",
    2: "tirsdag",
    3: "onsdag",
    4: "torsdag",
    5: "fredag",
    6: "lørdag",
    7: "søndag",
}

# Postal code validation
POSTAL_CODE_LENGTH = 4
INVALID_POSTAL_CODE_MESSAGE = (
    "Invalid postal code format for Norway. "
    "Postal code must be numeric and consist of 4 digits"
)

# JSON field holding the list of delivery dates
DELIVERY_DATES_FIELD = "delivery_dates"

# Bring API
API_BASE_URL = "https://api.bring.com/address/api"
API_COUNTRY_CODE = "no"
API_PATH_TEMPLATE = "{base_url}/{country_code}/postal-codes/{postal_code}/mailbox-delivery-dates"
API_DEFAULT_TIMEOUT = 30  # seconds
HEADER_UID = "X-Mybring-API-Uid"
HEADER_KEY = "X-Mybring-API-Key"
AUTH_ERROR_STATUS_CODES = frozenset({401, 403})

# Environment variable names
ENV_API_UID = "POSTGANG_API_UID"
ENV_API_KEY = "POSTGANG_API_KEY"
ENV_API_URL = "POSTGANG_API_URL"
ENV_API_TIMEOUT = "POSTGANG_API_TIMEOUT"
ENV_LOG_LEVEL = "POSTGANG_LOG_LEVEL"

# Key storage constants
APP_CONFIG_DIR_NAME = "postgang"
KEYRING_SERVICE_NAME = "postgang"
KEYRING_ACCOUNT_NAME = "mybring_api_key"

# Logging
DEFAULT_LOG_LEVEL = "WARNING"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Path meaning "read from standard input"
STDIN_PATH = "-"
