"""
postgang - Norwegian mailbox delivery days as iCalendar

Converts mailbox delivery dates for a Norwegian postal code, fetched from
the Bring API or read from a JSON file, into an iCalendar document with one
all-day event per delivery day.
"""

__version__ = "0.1.0"

# Public API - import commonly used components
from postgang.config.settings import API_CONFIG, APIConfig
from postgang.exceptions.errors import (
    InvalidPostalCodeError,
    SourceError,
    SourceNetworkError,
    SourceAuthError,
    SourceIOError,
    SourceMalformedError,
)
from postgang.core.models import ApiCredentials, DeliveryDateSet, PostalCode
from postgang.core.date_source import from_api, from_file
from postgang.core.ics_builder import build_calendar, render_calendar

__all__ = [
    # Version
    "__version__",
    # Config
    "API_CONFIG",
    "APIConfig",
    # Exceptions
    "InvalidPostalCodeError",
    "SourceError",
    "SourceNetworkError",
    "SourceAuthError",
    "SourceIOError",
    "SourceMalformedError",
    # Core
    "ApiCredentials",
    "DeliveryDateSet",
    "PostalCode",
    "from_api",
    "from_file",
    "build_calendar",
    "render_calendar",
]
