"""Core business logic for postgang."""

from postgang.core.models import ApiCredentials, CalendarEvent, DeliveryDateSet, PostalCode
from postgang.core.date_source import from_api, from_file, from_stream, parse_delivery_dates
from postgang.core.ics_builder import build_calendar, build_event, render_calendar

__all__ = [
    "ApiCredentials",
    "CalendarEvent",
    "DeliveryDateSet",
    "PostalCode",
    "from_api",
    "from_file",
    "from_stream",
    "parse_delivery_dates",
    "build_calendar",
    "build_event",
    "render_calendar",
]
