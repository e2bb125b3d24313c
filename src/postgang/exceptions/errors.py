"""Exception types raised by postgang."""

from typing import Optional


class PostgangError(Exception):
    """Base class for all postgang errors."""


class InvalidPostalCodeError(PostgangError, ValueError):
    """Raised when a string is not a valid Norwegian postal code."""


class CredentialsError(PostgangError):
    """Raised when API credentials cannot be resolved."""


class SourceError(PostgangError):
    """Raised when delivery dates cannot be obtained from a source.

    Attributes:
        kind: Short machine-readable name of the failure category.
        source: Description of where the data came from (URL or path).
    """

    kind = "source"

    def __init__(self, message: str, source: Optional[str] = None):
        self.source = source
        super().__init__(message)


class SourceNetworkError(SourceError):
    """Transport failure or unexpected HTTP status from the API."""

    kind = "network"

    def __init__(self, message: str, source: Optional[str] = None,
                 status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, source)


class SourceAuthError(SourceError):
    """The API rejected the supplied credentials."""

    kind = "auth"

    def __init__(self, message: str, source: Optional[str] = None,
                 status_code: Optional[int] = None):
        self.status_code = status_code
        super().__init__(message, source)


class SourceIOError(SourceError):
    """The input file could not be read."""

    kind = "io"


class SourceMalformedError(SourceError):
    """The payload is not valid JSON or does not hold valid delivery dates."""

    kind = "malformed"
