"""Write the initial roster (and an empty audit log) to MySQL.

Refuses to overwrite existing state unless --force is given.
"""

from __future__ import annotations

import argparse
import importlib
import sys
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from config import get_settings_module

from src.payroll_hub.payroll_hub.core.logging_config import configure_logging
from src.payroll_hub.payroll_hub.database.connection import DBConfig, DatabaseConnection
from src.payroll_hub.payroll_hub.state.model import seed_state
from src.payroll_hub.payroll_hub.state.mysql_state_repository import MySQLStateRepository


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--force", action="store_true", help="replace state that is already stored")
    args = parser.parse_args(argv)

    settings = importlib.import_module(get_settings_module())
    configure_logging(level=getattr(settings, "LOG_LEVEL", "INFO"))
    config = DBConfig.from_mapping(settings.DB_CONFIG)
    repo = MySQLStateRepository(DatabaseConnection.get_instance(config))

    if repo.load_state() is not None and not args.force:
        print(f"SKIP: {config.describe()} already holds state (use --force to reset)")
        return 1

    state = seed_state()
    repo.save_state(state)
    print(f"OK: Seeded {len(state.employees)} employees -> {config.describe()}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
