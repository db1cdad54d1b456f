"""Directory sub-package for resident-directory.

Provides the resident record types and the in-memory ResidentDirectory
with its append log and latest-wins name index.
"""
from __future__ import annotations

from resident_directory.directory.models import (
    LIVES_HERE_MESSAGE,
    MOVED_AWAY_MESSAGE,
    NOT_FOUND_MESSAGE,
    Person,
    PersonAdded,
    ResidencyStatus,
)
from resident_directory.directory.store import PersonAddedSink, ResidentDirectory

__all__ = [
    "LIVES_HERE_MESSAGE",
    "MOVED_AWAY_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "Person",
    "PersonAdded",
    "PersonAddedSink",
    "ResidencyStatus",
    "ResidentDirectory",
]
