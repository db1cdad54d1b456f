"""resident-directory - Directory of an area's residents and their residency status.

Public API
----------
The stable public surface is everything exported from this module.
Anything inside submodules not re-exported here is considered private
and may change without notice.

Example
-------
>>> import resident_directory
>>> resident_directory.__version__
'0.1.0'

Directory
---------
>>> from resident_directory import ResidentDirectory, ResidencyStatus
>>> directory = ResidentDirectory()
>>> directory.add_new_person("Cyndie", 23, ResidencyStatus.LIVES_HERE)
>>> directory.get_residency_status("Cyndie")
'This person lives here!'
>>> directory.count_residents()
1

Audit
-----
>>> from resident_directory import AuditLog
>>> audit = AuditLog()
>>> directory = ResidentDirectory(sink=audit)

Configuration
-------------
>>> from resident_directory import load_config, build_directory
"""
from __future__ import annotations

__version__: str = "0.1.0"

# ---------------------------------------------------------------------------
# Directory
# ---------------------------------------------------------------------------
from resident_directory.directory.models import (
    LIVES_HERE_MESSAGE,
    MOVED_AWAY_MESSAGE,
    NOT_FOUND_MESSAGE,
    Person,
    PersonAdded,
    ResidencyStatus,
)
from resident_directory.directory.store import PersonAddedSink, ResidentDirectory

# ---------------------------------------------------------------------------
# Audit
# ---------------------------------------------------------------------------
from resident_directory.audit.log import AuditLog, AuditLogError

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------
from resident_directory.config import (
    ConfigError,
    DirectoryConfig,
    SeedResident,
    build_directory,
    load_config,
)

__all__ = [
    "__version__",
    # Directory
    "LIVES_HERE_MESSAGE",
    "MOVED_AWAY_MESSAGE",
    "NOT_FOUND_MESSAGE",
    "Person",
    "PersonAdded",
    "PersonAddedSink",
    "ResidencyStatus",
    "ResidentDirectory",
    # Audit
    "AuditLog",
    "AuditLogError",
    # Configuration
    "ConfigError",
    "DirectoryConfig",
    "SeedResident",
    "build_directory",
    "load_config",
]
