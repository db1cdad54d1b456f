"""Resident record types and the add notification.

Defines the ResidencyStatus enumeration, the immutable Person record kept
by the directory, and the PersonAdded event emitted once per add.
"""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

LIVES_HERE_MESSAGE: str = "This person lives here!"
MOVED_AWAY_MESSAGE: str = "This person relocated to another area!"
NOT_FOUND_MESSAGE: str = "This person does not exist in the registry"


class ResidencyStatus(str, Enum):
    """Whether a resident currently lives in the area."""

    LIVES_HERE = "lives_here"
    MOVED_AWAY = "moved_away"

    @property
    def message(self) -> str:
        """Return the status message reported for this value."""
        return _STATUS_MESSAGES[self]


_STATUS_MESSAGES: dict[ResidencyStatus, str] = {
    ResidencyStatus.LIVES_HERE: LIVES_HERE_MESSAGE,
    ResidencyStatus.MOVED_AWAY: MOVED_AWAY_MESSAGE,
}


@dataclass(frozen=True)
class Person:
    """A single resident record.

    Attributes
    ----------
    name:
        Lookup key for the record. Not required to be unique.
    age:
        Age in whole years.
    residency_status:
        The :class:`ResidencyStatus` recorded when the person was added.
    """

    name: str
    age: int
    residency_status: ResidencyStatus

    @property
    def lives_here(self) -> bool:
        return self.residency_status is ResidencyStatus.LIVES_HERE


@dataclass(frozen=True)
class PersonAdded:
    """Notification emitted each time a record is added.

    Attributes
    ----------
    name:
        Name of the added person.
    age:
        Age of the added person.
    residency_status:
        Status of the added person.
    sequence:
        Zero-based position of the new record in the directory's append
        log, i.e. the order in which adds were applied.
    """

    name: str
    age: int
    residency_status: ResidencyStatus
    sequence: int

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-serialisable representation of the event."""
        return {
            "sequence": self.sequence,
            "name": self.name,
            "age": self.age,
            "residency_status": self.residency_status.value,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> PersonAdded:
        """Rebuild an event from :meth:`to_dict` output.

        Raises
        ------
        KeyError
            If a required field is missing.
        TypeError
            If ``name`` is not a string, or ``age`` or ``sequence`` is not
            an integer.
        ValueError
            If ``age`` or ``sequence`` is negative, or ``residency_status``
            is not a known value.
        """
        name = data["name"]
        if not isinstance(name, str):
            raise TypeError(f"name must be a string, got {type(name).__name__}")
        return cls(
            name=name,
            age=_non_negative_int("age", data["age"]),
            residency_status=ResidencyStatus(data["residency_status"]),
            sequence=_non_negative_int("sequence", data["sequence"]),
        )


def _non_negative_int(field_name: str, value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{field_name} must be an integer, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{field_name} must be non-negative, got {value}")
    return value


__all__ = [
    "LIVES_HERE_MESSAGE",
    "MOVED_AWAY_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "Person",
    "PersonAdded",
    "ResidencyStatus",
]
