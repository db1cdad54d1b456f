"""Audit sub-package for resident-directory.

Provides the append-only AuditLog that consumes PersonAdded events and
can replay them into a directory.
"""
from __future__ import annotations

from resident_directory.audit.log import AuditLog, AuditLogError

__all__ = [
    "AuditLog",
    "AuditLogError",
]
