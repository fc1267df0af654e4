"""Create the organisation's first Tribe Lead.

Every other user is created through the API by the Tribe Lead, so the very
first one has to be inserted directly.

Usage: python scripts/create_tribe_lead.py "Ada Admin" ada@company.com
"""

from __future__ import annotations

import argparse
import importlib
import logging
import sys
import uuid
from pathlib import Path

REPO_ROOT = Path(__file__).resolve().parents[1]
PACKAGE_ROOT = REPO_ROOT / "src" / "office_presence"
if str(PACKAGE_ROOT) not in sys.path:
    sys.path.insert(0, str(PACKAGE_ROOT))

from dotenv import load_dotenv

from office_presence.common.validators import require_email, require_non_empty
from office_presence.config import get_settings_module
from office_presence.core.enums import Role
from office_presence.database.connection import DBConfig, DatabaseConnection
from office_presence.users.mysql_user_repository import MySQLUserRepository

logger = logging.getLogger("create_tribe_lead")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument("name")
    parser.add_argument("email")
    args = parser.parse_args(argv)

    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(name)s: %(message)s")

    settings = importlib.import_module(get_settings_module())
    users = MySQLUserRepository(DatabaseConnection.get_instance(DBConfig.from_dict(dict(settings.DB_CONFIG))))

    existing = users.list_by_role(Role.TRIBE_LEAD)
    if existing:
        logger.info("Tribe Lead already exists: %s <%s>", existing[0].name, existing[0].email)
        return 0

    email = require_email(args.email)
    if users.get_by_email(email):
        logger.error("A user with email %s already exists", email)
        return 1

    user = users.create_user(
        user_id=str(uuid.uuid4()),
        name=require_non_empty(args.name, "Name"),
        email=email,
        role=Role.TRIBE_LEAD,
        manager_id=None,
    )
    logger.info("Tribe Lead created: id=%s email=%s", user.user_id, user.email)
    return 0


if __name__ == "__main__":
    sys.exit(main())
