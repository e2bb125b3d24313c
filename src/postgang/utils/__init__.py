"""Utility functions for postgang."""

from postgang.utils.masking import mask_key
from postgang.utils.date_parsing import parse_iso_date

__all__ = [
    "mask_key",
    "parse_iso_date",
]
