"""Custom exceptions for postgang."""

from postgang.exceptions.errors import (
    PostgangError,
    InvalidPostalCodeError,
    CredentialsError,
    SourceError,
    SourceNetworkError,
    SourceAuthError,
    SourceIOError,
    SourceMalformedError,
)

__all__ = [
    "PostgangError",
    "InvalidPostalCodeError",
    "CredentialsError",
    "SourceError",
    "SourceNetworkError",
    "SourceAuthError",
    "SourceIOError",
    "SourceMalformedError",
]
