"""ICS calendar building for mailbox delivery dates."""

import logging
from datetime import date, datetime, timedelta
from typing import Iterable, List, Optional, Union

import pytz
from icalendar import Calendar, Event, vText

from postgang.config.constants import (
    EVENT_SUMMARY_TEMPLATE,
    EVENT_UID_PREFIX,
    ICS_CALSCALE,
    ICS_METHOD,
    ICS_PRODID,
    ICS_VERSION,
    NORWEGIAN_WEEKDAYS,
)
from postgang.core.models import CalendarEvent, DeliveryDateSet, PostalCode

logger = logging.getLogger(__name__)

# All-day events cover the half-open range [start, start + 1 day)
ALL_DAY = timedelta(days=1)


def norwegian_weekday(day: date) -> str:
    """Return the lowercase Norwegian name of the day's weekday."""
    return NORWEGIAN_WEEKDAYS[day.isoweekday()]


def event_uid(postal_code: Union[PostalCode, str], day: date) -> str:
    """Derive the stable event identifier for a postal code and date.

    The identifier depends only on its arguments so calendar clients can
    match regenerated events with the ones they already have.
    """
    return f"{EVENT_UID_PREFIX}-{PostalCode.parse(postal_code)}-{day.isoformat()}"


def event_summary(postal_code: Union[PostalCode, str], day: date) -> str:
    """Build the event title, e.g. ``0357: Posten kommer mandag 6.``."""
    return EVENT_SUMMARY_TEMPLATE.format(
        postal_code=PostalCode.parse(postal_code),
        weekday=norwegian_weekday(day),
        day=day.day,
    )


def generation_timestamp() -> datetime:
    """Return the current UTC time truncated to whole seconds."""
    return datetime.now(pytz.utc).replace(microsecond=0)


def build_event(
    postal_code: Union[PostalCode, str],
    day: date,
    generated_at: datetime,
) -> CalendarEvent:
    """Create the calendar event for a single delivery date.

    Args:
        postal_code: Postal code the date applies to.
        day: The delivery date.
        generated_at: Timestamp shared by every event in the document.

    Returns:
        A CalendarEvent value.
    """
    return CalendarEvent(
        start=day,
        end=day + ALL_DAY,
        summary=event_summary(postal_code, day),
        uid=event_uid(postal_code, day),
        stamp=generated_at,
    )


def build_events(
    postal_code: Union[PostalCode, str],
    delivery_dates: Iterable[date],
    generated_at: datetime,
) -> List[CalendarEvent]:
    """Create one event per unique date, in ascending date order."""
    dates = _normalize_dates_input(delivery_dates)
    return [build_event(postal_code, day, generated_at) for day in dates]


def build_calendar(
    postal_code: Union[PostalCode, str],
    delivery_dates: Iterable[date],
    generated_at: Optional[datetime] = None,
) -> Calendar:
    """Build an icalendar Calendar holding one all-day event per delivery date.

    Args:
        postal_code: Postal code the dates apply to.
        delivery_dates: A DeliveryDateSet or any iterable of dates.
        generated_at: Timestamp for DTSTAMP (default: now, in UTC).

    Returns:
        The populated Calendar.
    """
    postal_code = PostalCode.parse(postal_code)
    stamp = _normalize_timestamp(generated_at)

    cal = _create_ics_calendar()
    events = build_events(postal_code, delivery_dates, stamp)
    for event in events:
        cal.add_component(_create_ics_event(event))

    logger.debug(
        "Built calendar for %s with %d event(s), stamped %s",
        postal_code, len(events), stamp.isoformat()
    )
    return cal


def render_calendar(
    postal_code: Union[PostalCode, str],
    delivery_dates: Iterable[date],
    generated_at: Optional[datetime] = None,
) -> str:
    """Render delivery dates as iCalendar text.

    Args:
        postal_code: Postal code the dates apply to.
        delivery_dates: A DeliveryDateSet or any iterable of dates.
        generated_at: Timestamp for DTSTAMP (default: now, in UTC).

    Returns:
        ICS content with CRLF line endings.
    """
    return _format_ics_output(build_calendar(postal_code, delivery_dates, generated_at))


def _normalize_dates_input(delivery_dates: Iterable[date]) -> List[date]:
    """Return the unique dates in ascending order."""
    if isinstance(delivery_dates, DeliveryDateSet):
        return delivery_dates.sorted_dates()
    return sorted(set(delivery_dates))


def _normalize_timestamp(generated_at: Optional[datetime]) -> datetime:
    """Return a UTC timestamp with second precision.

    Naive datetimes are taken to be UTC already.
    """
    if generated_at is None:
        return generation_timestamp()
    if generated_at.tzinfo is None:
        generated_at = pytz.utc.localize(generated_at)
    return generated_at.astimezone(pytz.utc).replace(microsecond=0)


def _create_ics_calendar() -> Calendar:
    """Create a new ICS calendar with the publishing headers.

    Returns:
        A new Calendar object with required headers.
    """
    cal = Calendar()
    cal.add("VERSION", ICS_VERSION)
    cal.add("PRODID", ICS_PRODID)
    cal.add("CALSCALE", ICS_CALSCALE)
    cal.add("METHOD", ICS_METHOD)
    return cal


def _create_ics_event(event: CalendarEvent) -> Event:
    """Create an ICS event component.

    Properties are added in their serialized order.

    Args:
        event: The event to convert.

    Returns:
        An Event component ready to add to a calendar.
    """
    ve = Event()
    ve.add("DTSTAMP", event.stamp)
    ve.add("DTEND", event.end)
    ve.add("DTSTART", event.start)
    ve.add("SUMMARY", vText(event.summary))
    ve.add("TRANSP", event.transp)
    ve.add("UID", event.uid)
    ve.add("URL", event.url)
    return ve


def _format_ics_output(cal: Calendar) -> str:
    """Format calendar to ICS string with proper line endings.

    Args:
        cal: The Calendar object to format.

    Returns:
        ICS content string with CRLF line endings.
    """
    # Keep insertion order; sorted output would reorder the event fields
    raw_ical = cal.to_ical(sorted=False)
    decoded_ical = raw_ical.decode("utf-8")
    # Ensure CRLF line endings per RFC5545
    return decoded_ical.replace("\r\n", "\n").replace("\n", "\r\n")
