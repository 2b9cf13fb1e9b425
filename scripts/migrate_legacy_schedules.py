"""Upgrade legacy single-leave vacation schedules to the list format.

Safe to run more than once; the app also runs it on startup unless
MIGRATE_LEGACY_SCHEDULES=0.
"""

from __future__ import annotations

import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.vacation_system.vacation_system.container import build_container
from src.vacation_system.vacation_system.vacations.migration import migrate_legacy_schedules


def main() -> None:
    settings = importlib.import_module(get_settings_module())
    container = build_container(db_config=dict(settings.DB_CONFIG))

    result = migrate_legacy_schedules(container.schedules_repo)
    print(f"OK: Upgraded {result.upgraded} legacy schedule(s)")
    if result.skipped:
        print("Left unreadable legacy schedule(s) as is: " + ", ".join(result.skipped))


if __name__ == "__main__":
    main()
