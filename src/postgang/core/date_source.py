"""Delivery date sources: the Bring API and local JSON documents."""

import json
import logging
import sys
from pathlib import Path
from typing import Any, Optional, TextIO, Union

import requests

from postgang.config.constants import (
    AUTH_ERROR_STATUS_CODES,
    DELIVERY_DATES_FIELD,
    HEADER_KEY,
    HEADER_UID,
    STDIN_PATH,
)
from postgang.config.settings import API_CONFIG, APIConfig
from postgang.core.models import ApiCredentials, DeliveryDateSet, PostalCode
from postgang.exceptions.errors import (
    SourceAuthError,
    SourceIOError,
    SourceMalformedError,
    SourceNetworkError,
)
from postgang.utils.date_parsing import parse_iso_date
from postgang.utils.masking import mask_key

logger = logging.getLogger(__name__)


def parse_delivery_dates(payload: Any, source: Optional[str] = None) -> DeliveryDateSet:
    """Validate a decoded JSON payload and collect its delivery dates.

    Args:
        payload: Decoded JSON; must be an object with a ``delivery_dates``
            list of ``YYYY-MM-DD`` strings.
        source: Where the payload came from, for error messages.

    Returns:
        The unique delivery dates.

    Raises:
        SourceMalformedError: If the structure or any date string is invalid.
    """
    if not isinstance(payload, dict):
        raise SourceMalformedError(
            f"Expected a JSON object, got {type(payload).__name__}", source
        )
    if DELIVERY_DATES_FIELD not in payload:
        raise SourceMalformedError(
            f"Missing required field '{DELIVERY_DATES_FIELD}'", source
        )

    raw_dates = payload[DELIVERY_DATES_FIELD]
    if not isinstance(raw_dates, list):
        raise SourceMalformedError(
            f"Field '{DELIVERY_DATES_FIELD}' must be a list, "
            f"got {type(raw_dates).__name__}",
            source,
        )

    dates = set()
    for index, raw in enumerate(raw_dates):
        try:
            dates.add(parse_iso_date(raw))
        except ValueError as e:
            raise SourceMalformedError(
                f"Invalid delivery date at index {index}: {e}", source
            ) from e

    if len(dates) != len(raw_dates):
        logger.debug("Dropped %d duplicate date(s)", len(raw_dates) - len(dates))
    return DeliveryDateSet.from_dates(dates)


def from_file(path: Union[str, Path]) -> DeliveryDateSet:
    """Read delivery dates from a JSON document.

    Args:
        path: Path to the document, or ``-`` for standard input.

    Returns:
        The unique delivery dates.

    Raises:
        SourceIOError: If the file cannot be read.
        SourceMalformedError: If the content is not valid JSON or does not
            hold valid delivery dates.
    """
    if str(path) == STDIN_PATH:
        logger.debug("Reading delivery dates from standard input")
        return from_stream(sys.stdin, source="<stdin>")

    path = Path(path)
    logger.debug("Reading delivery dates from file: %s", path)
    try:
        text = path.read_text(encoding="utf-8")
    except UnicodeDecodeError as e:
        raise SourceMalformedError(f"{path}: not valid UTF-8 text: {e}", str(path)) from e
    except OSError as e:
        reason = e.strerror or str(e)
        raise SourceIOError(f"{path}: {reason}", str(path)) from e

    return _loads(text, str(path))


def from_stream(stream: TextIO, source: str = "<stream>") -> DeliveryDateSet:
    """Read delivery dates from an open text stream.

    Raises:
        SourceIOError: If reading the stream fails.
        SourceMalformedError: If the content is invalid.
    """
    try:
        text = stream.read()
    except UnicodeDecodeError as e:
        raise SourceMalformedError(f"{source}: not valid UTF-8 text: {e}", source) from e
    except OSError as e:
        raise SourceIOError(f"{source}: {e}", source) from e
    return _loads(text, source)


def from_api(
    postal_code: Union[PostalCode, str],
    credentials: ApiCredentials,
    config: APIConfig = API_CONFIG,
    session: Optional[requests.Session] = None,
) -> DeliveryDateSet:
    """Fetch delivery dates for a postal code from the Bring API.

    A single request is made; failures are not retried.

    Args:
        postal_code: Postal code to look up.
        credentials: Bring API identity and key.
        config: Endpoint and timeout settings.
        session: Optional session to send the request with. A new one is
            created and closed when omitted.

    Returns:
        The unique delivery dates.

    Raises:
        SourceNetworkError: On transport failure or an unexpected HTTP status.
        SourceAuthError: If the API rejects the credentials.
        SourceMalformedError: If the response body does not hold valid dates.
    """
    postal_code = PostalCode.parse(postal_code)
    url = config.delivery_dates_url(postal_code)
    headers = {
        "accept": "application/json",
        HEADER_UID: credentials.uid,
        HEADER_KEY: credentials.key,
    }
    logger.debug(
        "Requesting %s (uid=%s, key=%s)",
        url, credentials.uid, mask_key(credentials.key)
    )

    owns_session = session is None
    if owns_session:
        session = requests.Session()
    try:
        response = session.get(url, headers=headers, timeout=config.timeout)
    except requests.RequestException as e:
        raise SourceNetworkError(f"Request to {url} failed: {e}", url) from e
    finally:
        if owns_session:
            session.close()

    logger.debug("Got response status: %s", response.status_code)
    _check_response_status(response, url)

    try:
        payload = response.json()
    except ValueError as e:
        raise SourceMalformedError(f"Response from {url} is not valid JSON: {e}", url) from e

    dates = parse_delivery_dates(payload, url)
    logger.debug("Got %d delivery date(s) for %s", len(dates), postal_code)
    return dates


def _check_response_status(response: requests.Response, url: str) -> None:
    """Map HTTP error statuses to source errors."""
    status = response.status_code
    if status in AUTH_ERROR_STATUS_CODES:
        raise SourceAuthError(
            f"Credentials rejected by {url} (HTTP {status})", url, status_code=status
        )
    try:
        response.raise_for_status()
    except requests.HTTPError as e:
        raise SourceNetworkError(
            f"Unexpected response from {url}: {e}", url, status_code=status
        ) from e


def _loads(text: str, source: str) -> DeliveryDateSet:
    """Decode JSON text and collect its delivery dates."""
    try:
        payload = json.loads(text)
    except json.JSONDecodeError as e:
        raise SourceMalformedError(f"{source}: invalid JSON: {e}", source) from e
    dates = parse_delivery_dates(payload, source)
    logger.debug("Read %d delivery date(s) from %s", len(dates), source)
    return dates
