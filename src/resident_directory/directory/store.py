"""In-memory resident directory.

ResidentDirectory owns two views over the same records:

Append log
    Every add, in the order it was applied. Re-adding a name appends a
    second row; nothing is ever removed or rewritten.
Name index
    Latest-wins mapping from name to the most recently added record for
    that name.

The two views diverge when a name is reused. Status lookups read the
index; the resident count reads the log, so it counts add events recorded
as living here rather than distinct people.
"""
from __future__ import annotations

import logging
import threading
from typing import Callable

from resident_directory.directory.models import (
    NOT_FOUND_MESSAGE,
    Person,
    PersonAdded,
    ResidencyStatus,
)

logger = logging.getLogger(__name__)

PersonAddedSink = Callable[[PersonAdded], None]


class ResidentDirectory:
    """Records residents of an area and answers status and count queries.

    Parameters
    ----------
    sink:
        Optional callable that receives a :class:`PersonAdded` for every
        successful add. It is called synchronously, under the directory
        lock, so events arrive exactly once each and in the order adds
        were applied. Exceptions raised by the sink propagate to the
        caller of :meth:`add_new_person` after the record is stored.

    Example
    -------
    ::

        directory = ResidentDirectory()
        directory.add_new_person("Cyndie", 23, ResidencyStatus.LIVES_HERE)
        directory.get_residency_status("Cyndie")  # "This person lives here!"
        directory.count_residents()               # 1
    """

    def __init__(self, sink: PersonAddedSink | None = None) -> None:
        self._lock = threading.RLock()
        self._residents: list[Person] = []
        self._name_index: dict[str, Person] = {}
        self._sink = sink

    def set_sink(self, sink: PersonAddedSink | None) -> None:
        """Replace the notification sink. Earlier adds are not re-emitted."""
        with self._lock:
            self._sink = sink

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def add_new_person(
        self,
        name: str,
        age: int,
        residency_status: ResidencyStatus | str,
    ) -> None:
        """Add a resident record and emit a :class:`PersonAdded` event.

        The record is appended to the log and written to the name index
        as one atomic step. An existing index entry under ``name`` is
        replaced without any signal.

        Parameters
        ----------
        name:
            Name of the person. Any string, including the empty string.
        age:
            Age of the person as a non-negative integer.
        residency_status:
            A :class:`ResidencyStatus` or its string value.

        Raises
        ------
        TypeError
            If ``name`` is not a string or ``age`` is not an integer.
        ValueError
            If ``age`` is negative or ``residency_status`` is not a known
            value.
        """
        if not isinstance(name, str):
            raise TypeError(f"name must be a string, got {type(name).__name__}")
        if isinstance(age, bool) or not isinstance(age, int):
            raise TypeError(f"age must be an integer, got {type(age).__name__}")
        if age < 0:
            raise ValueError(f"age must be non-negative, got {age}")
        status = ResidencyStatus(residency_status)
        person = Person(name=name, age=age, residency_status=status)

        with self._lock:
            sequence = len(self._residents)
            self._residents.append(person)
            if name in self._name_index:
                logger.debug("Name %r re-added; index now points at row %d", name, sequence)
            self._name_index[name] = person
            logger.debug("Added %r (age=%d, status=%s) at row %d", name, age, status.value, sequence)
            if self._sink is not None:
                self._sink(
                    PersonAdded(
                        name=name,
                        age=age,
                        residency_status=status,
                        sequence=sequence,
                    )
                )

    # ------------------------------------------------------------------
    # Queries
    # ------------------------------------------------------------------

    def get_residency_status(self, name: str) -> str:
        """Return the status message for the latest record under ``name``.

        Returns
        -------
        str
            ``"This person lives here!"``, ``"This person relocated to
            another area!"``, or ``"This person does not exist in the
            registry"`` when no add for ``name`` has ever occurred.
        """
        person = self.lookup(name)
        if person is None:
            return NOT_FOUND_MESSAGE
        return person.residency_status.message

    def count_residents(self) -> int:
        """Return the number of logged adds whose status is LIVES_HERE.

        Superseded rows for a re-added name are still counted.
        """
        with self._lock:
            return sum(1 for person in self._residents if person.lives_here)

    def lookup(self, name: str) -> Person | None:
        """Return the latest record for ``name``, or None if never added."""
        with self._lock:
            return self._name_index.get(name)

    @property
    def residents(self) -> list[Person]:
        """Return a copy of the append log in insertion order."""
        with self._lock:
            return list(self._residents)

    def names(self) -> list[str]:
        """Return a sorted list of all indexed names."""
        with self._lock:
            return sorted(self._name_index)

    def __contains__(self, name: object) -> bool:
        with self._lock:
            return name in self._name_index

    def __len__(self) -> int:
        """Return the number of rows in the append log."""
        with self._lock:
            return len(self._residents)


__all__ = [
    "PersonAddedSink",
    "ResidentDirectory",
]
