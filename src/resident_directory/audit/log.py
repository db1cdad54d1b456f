"""Append-only audit log of PersonAdded events.

AuditLog is the consumer side of the directory's add notification. Pass
an instance as a ResidentDirectory sink to capture every add; optionally
back it with a JSON Lines file (one event object per line) so history
survives the process and can be replayed into a fresh directory.
"""
from __future__ import annotations

import json
import logging
import threading
from pathlib import Path

from resident_directory.directory.models import PersonAdded
from resident_directory.directory.store import ResidentDirectory

logger = logging.getLogger(__name__)


class AuditLogError(ValueError):
    """Raised when an audit log file cannot be parsed.

    Attributes
    ----------
    path:
        The file being read.
    line_number:
        One-based number of the offending line.
    """

    def __init__(self, path: Path, line_number: int, reason: str) -> None:
        self.path = path
        self.line_number = line_number
        super().__init__(f"{path}:{line_number}: invalid audit log entry ({reason})")


class AuditLog:
    """Ordered record of directory add events.

    Parameters
    ----------
    path:
        Optional JSON Lines file. When set, every recorded event is
        appended to it immediately. Existing content is not read; use
        :meth:`load` to resume from a file.

    Example
    -------
    ::

        audit = AuditLog()
        directory = ResidentDirectory(sink=audit)
        directory.add_new_person("Jordan", 24, ResidencyStatus.MOVED_AWAY)
        audit.events()[0].name  # "Jordan"
    """

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._events: list[PersonAdded] = []
        self._lock = threading.Lock()

    @classmethod
    def load(cls, path: Path) -> AuditLog:
        """Open an audit log file, reading any events it already holds.

        A missing file yields an empty log that will create the file on
        the first recorded event. Blank lines are ignored.

        Raises
        ------
        AuditLogError
            If a line is not valid JSON or lacks a required field.
        """
        audit = cls(path)
        if not path.exists():
            return audit
        with path.open(encoding="utf-8") as handle:
            for line_number, line in enumerate(handle, start=1):
                if not line.strip():
                    continue
                try:
                    event = PersonAdded.from_dict(json.loads(line))
                except json.JSONDecodeError as exc:
                    raise AuditLogError(path, line_number, exc.msg) from exc
                except KeyError as exc:
                    raise AuditLogError(path, line_number, f"missing field {exc}") from exc
                except (TypeError, ValueError) as exc:
                    raise AuditLogError(path, line_number, str(exc)) from exc
                audit._events.append(event)
        logger.debug("Loaded %d audit events from %s", len(audit._events), path)
        return audit

    @property
    def path(self) -> Path | None:
        return self._path

    def __call__(self, event: PersonAdded) -> None:
        self.record(event)

    def record(self, event: PersonAdded) -> None:
        """Append ``event`` to the log, and to the backing file if any."""
        with self._lock:
            if self._path is not None:
                self._path.parent.mkdir(parents=True, exist_ok=True)
                with self._path.open("a", encoding="utf-8") as handle:
                    handle.write(json.dumps(event.to_dict(), sort_keys=True) + "\n")
            self._events.append(event)
        logger.debug("Recorded audit event #%d for %r", event.sequence, event.name)

    def events(self) -> list[PersonAdded]:
        """Return a copy of all recorded events in order."""
        with self._lock:
            return list(self._events)

    def replay(self, directory: ResidentDirectory | None = None) -> ResidentDirectory:
        """Re-apply every recorded event to a directory.

        Events are applied in the order they were recorded, which restores
        both the append log and the latest-wins index. The events are not
        recorded into this log again.

        Parameters
        ----------
        directory:
            Directory to apply events to. A new, sink-less directory is
            created when omitted.

        Returns
        -------
        ResidentDirectory
            The directory the events were applied to.
        """
        target = directory if directory is not None else ResidentDirectory()
        events = self.events()
        for event in events:
            target.add_new_person(event.name, event.age, event.residency_status)
        logger.debug("Replayed %d audit events", len(events))
        return target

    def __len__(self) -> int:
        with self._lock:
            return len(self._events)


__all__ = [
    "AuditLog",
    "AuditLogError",
]
