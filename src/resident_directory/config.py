"""YAML configuration for resident-directory.

Loads a DirectoryConfig from a YAML file or string and builds a
ResidentDirectory wired to an AuditLog from it.
"""
from __future__ import annotations

import io
import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Union

import yaml

from resident_directory.audit.log import AuditLog
from resident_directory.directory.models import ResidencyStatus
from resident_directory.directory.store import ResidentDirectory

logger = logging.getLogger(__name__)

# Default configuration embedded as a YAML string so the loader works
# without an external file.
_DEFAULT_CONFIG_YAML = """\
log_level: WARNING
# JSON Lines file used to persist add events between runs
audit_log: null
# Residents added on startup, e.g.
#   - {name: Cyndie, age: 23, status: lives_here}
seed: []
"""

_LOG_LEVELS = ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG")


class ConfigError(ValueError):
    """Raised when configuration is malformed."""


@dataclass(frozen=True)
class SeedResident:
    """A resident added when the directory is built."""

    name: str
    age: int
    status: ResidencyStatus


@dataclass
class DirectoryConfig:
    """Settings for building a directory.

    Attributes
    ----------
    log_level:
        Logging level name used by the CLI.
    audit_log:
        JSON Lines file backing the audit log, or None for in-memory only.
    seed:
        Residents to add when the audit log holds no history yet.
    """

    log_level: str = "WARNING"
    audit_log: Path | None = None
    seed: list[SeedResident] = field(default_factory=list)


def load_config(source: Union[str, Path, None] = None) -> DirectoryConfig:
    """Load configuration from a YAML file path, YAML text, or the defaults.

    Parameters
    ----------
    source:
        A :class:`~pathlib.Path`, a string naming an existing file, a raw
        YAML string, or None for the built-in defaults.

    Raises
    ------
    ConfigError
        If the document is not a mapping or any value is invalid.
    """
    if source is None:
        text = _DEFAULT_CONFIG_YAML
    elif isinstance(source, Path):
        text = source.read_text(encoding="utf-8")
    elif "\n" not in source and Path(source).is_file():
        text = Path(source).read_text(encoding="utf-8")
    else:
        text = source

    try:
        data = yaml.safe_load(io.StringIO(text))
    except yaml.YAMLError as exc:
        raise ConfigError(f"Configuration is not valid YAML: {exc}") from exc
    if data is None:
        data = {}
    if not isinstance(data, dict):
        raise ConfigError("Configuration YAML must be a mapping.")
    return _parse_config(data)


def _parse_config(data: dict[str, Any]) -> DirectoryConfig:
    log_level = str(data.get("log_level", "WARNING")).upper()
    if log_level not in _LOG_LEVELS:
        raise ConfigError(
            f"Unknown log_level {log_level!r}; expected one of {', '.join(_LOG_LEVELS)}."
        )

    audit_log = data.get("audit_log")
    seed_entries = data.get("seed") or []
    if not isinstance(seed_entries, list):
        raise ConfigError("'seed' must be a list of residents.")

    return DirectoryConfig(
        log_level=log_level,
        audit_log=Path(audit_log) if audit_log else None,
        seed=[_parse_seed(index, entry) for index, entry in enumerate(seed_entries)],
    )


def _parse_seed(index: int, entry: Any) -> SeedResident:
    if not isinstance(entry, dict):
        raise ConfigError(f"seed[{index}] must be a mapping.")
    missing = [key for key in ("name", "age", "status") if key not in entry]
    if missing:
        raise ConfigError(f"seed[{index}] is missing {', '.join(missing)}.")
    try:
        status = ResidencyStatus(entry["status"])
    except ValueError as exc:
        raise ConfigError(f"seed[{index}] has unknown status {entry['status']!r}.") from exc
    age = entry["age"]
    if isinstance(age, bool) or not isinstance(age, int) or age < 0:
        raise ConfigError(f"seed[{index}] age must be a non-negative integer.")
    return SeedResident(name=str(entry["name"]), age=age, status=status)


def build_directory(config: DirectoryConfig) -> tuple[ResidentDirectory, AuditLog]:
    """Build a directory and its audit log from ``config``.

    History in the configured audit log file is replayed first. Seed
    residents are added only when that history is empty, so a persisted
    store is seeded once rather than on every build. Seed adds are
    recorded in the audit log like any other add.

    Returns
    -------
    tuple[ResidentDirectory, AuditLog]
        The directory and the audit log wired as its sink.
    """
    audit = AuditLog.load(config.audit_log) if config.audit_log else AuditLog()
    # Replay sink-less so existing history is not recorded twice.
    directory = audit.replay()
    directory.set_sink(audit)
    seeded = config.seed if len(directory) == 0 else []
    for resident in seeded:
        directory.add_new_person(resident.name, resident.age, resident.status)
    logger.debug("Built directory with %d rows (%d seeded)", len(directory), len(seeded))
    return directory, audit


__all__ = [
    "ConfigError",
    "DirectoryConfig",
    "SeedResident",
    "build_directory",
    "load_config",
]
