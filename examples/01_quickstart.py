#!/usr/bin/env python3
"""Example: Quickstart - resident-directory

Minimal working example: add residents, query their status, count the
people living here, and rebuild the directory from its audit log.

Usage:
    python examples/01_quickstart.py

Requirements:
    pip install resident-directory
"""
from __future__ import annotations

import resident_directory
from resident_directory import AuditLog, ResidencyStatus, ResidentDirectory


def main() -> None:
    print(f"resident-directory version: {resident_directory.__version__}")

    # Step 1: Add residents, capturing every add in an audit log
    audit = AuditLog()
    directory = ResidentDirectory(sink=audit)
    directory.add_new_person("Cyndie", 23, ResidencyStatus.LIVES_HERE)
    directory.add_new_person("Jordan", 24, ResidencyStatus.MOVED_AWAY)
    directory.add_new_person("Jackson", 28, ResidencyStatus.LIVES_HERE)

    # Step 2: Query status by name
    for name in ("Cyndie", "Jordan", "Unknown"):
        print(f"  {name:<8} {directory.get_residency_status(name)}")

    # Step 3: Count add events recorded as living here
    print(f"\nResidents living here: {directory.count_residents()}")

    # Step 4: Re-adding a name replaces the latest record but keeps history
    directory.add_new_person("Cyndie", 24, ResidencyStatus.MOVED_AWAY)
    print(f"\nAfter Cyndie moved away:")
    print(f"  Status : {directory.get_residency_status('Cyndie')}")
    print(f"  Count  : {directory.count_residents()}")
    print(f"  Rows   : {len(directory)}")

    # Step 5: Rebuild from the audit log
    rebuilt = audit.replay()
    print(f"\nReplayed {len(audit)} events; rows match: {rebuilt.residents == directory.residents}")


if __name__ == "__main__":
    main()
