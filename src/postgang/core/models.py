"""Value types for postal codes, delivery dates and calendar events."""

from dataclasses import dataclass
from datetime import date, datetime
from typing import FrozenSet, Iterable, Iterator, List

from postgang.config.constants import (
    EVENT_TRANSP,
    EVENT_URL,
    INVALID_POSTAL_CODE_MESSAGE,
    POSTAL_CODE_LENGTH,
)
from postgang.exceptions.errors import InvalidPostalCodeError
from postgang.utils.masking import mask_key


@dataclass(frozen=True)
class PostalCode:
    """A Norwegian postal code: exactly four ASCII digits.

    The digits are kept as text so leading zeros survive (``0357``).
    """

    value: str

    def __post_init__(self):
        if (
            not isinstance(self.value, str)
            or len(self.value) != POSTAL_CODE_LENGTH
            or not all("0" <= c <= "9" for c in self.value)
        ):
            raise InvalidPostalCodeError(INVALID_POSTAL_CODE_MESSAGE)

    @classmethod
    def parse(cls, value) -> "PostalCode":
        """Create a PostalCode from a string, passing PostalCode values through.

        Args:
            value: Candidate postal code.

        Returns:
            A validated PostalCode.

        Raises:
            InvalidPostalCodeError: If the value is not four ASCII digits.
        """
        if isinstance(value, cls):
            return value
        return cls(value)

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class DeliveryDateSet:
    """Unique mailbox delivery dates for one postal code.

    The set itself is unordered; use :meth:`sorted_dates` or iterate to get
    ascending calendar order.
    """

    dates: FrozenSet[date] = frozenset()

    @classmethod
    def from_dates(cls, dates: Iterable[date]) -> "DeliveryDateSet":
        """Build a set from any iterable of dates, dropping duplicates."""
        return cls(frozenset(dates))

    def sorted_dates(self) -> List[date]:
        """Return the dates in ascending calendar order."""
        return sorted(self.dates)

    def __iter__(self) -> Iterator[date]:
        return iter(self.sorted_dates())

    def __len__(self) -> int:
        return len(self.dates)

    def __contains__(self, item) -> bool:
        return item in self.dates


@dataclass(frozen=True)
class CalendarEvent:
    """One all-day delivery event, ready to be serialized."""

    start: date
    end: date
    summary: str
    uid: str
    stamp: datetime
    url: str = EVENT_URL
    transp: str = EVENT_TRANSP


@dataclass(frozen=True)
class ApiCredentials:
    """Identity and key for the Bring API."""

    uid: str
    key: str

    def __repr__(self) -> str:
        return f"ApiCredentials(uid={self.uid!r}, key={mask_key(self.key)!r})"
