"""Date parsing utilities."""

import re
from datetime import date

from dateutil import parser as dateutil_parser

# Calendar date in extended ISO-8601 form, e.g. 2023-02-06
ISO_DATE_PATTERN = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_iso_date(value: str) -> date:
    """Parse a ``YYYY-MM-DD`` string into a date.

    Only the extended calendar date form is accepted. Week dates, ordinal
    dates, basic format and date-times are rejected.

    Args:
        value: The date string.

    Returns:
        The parsed date.

    Raises:
        ValueError: If the value is not a string in ``YYYY-MM-DD`` form or
            does not name a real calendar day.
    """
    if not isinstance(value, str) or not ISO_DATE_PATTERN.fullmatch(value):
        raise ValueError(f"Expected a date in YYYY-MM-DD format, got {value!r}")
    return dateutil_parser.isoparse(value).date()
