#!/usr/bin/env python3
"""Create the first Labsy super admin.

The person must already have a Firebase account (sign up through the client
app first). The new admin row is bound to that Firebase user and is active
immediately. Refuses to run once any admin account exists.

    python scripts/create_super_admin.py ops@labsy.app --name "Ops Lead"
"""

import argparse
import logging
import sys

from sqlmodel import Session

from app.admin.service import bootstrap_super_admin
from app.auth.service import get_firebase_auth_service
from app.core.exceptions import AppException
from app.core.firebase import init_firebase
from app.core.logging import configure_logging
from app.db.engine import engine

logger = logging.getLogger("scripts.create_super_admin")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create the first super admin.")
    parser.add_argument("email", help="email of an existing Firebase user")
    parser.add_argument("--name", help="display name (defaults to Firebase's)")
    args = parser.parse_args(argv)

    configure_logging()
    init_firebase()

    with Session(engine) as session:
        try:
            admin = bootstrap_super_admin(
                session, get_firebase_auth_service(), args.email, args.name
            )
        except AppException as e:
            logger.error("Could not create super admin: %s", e.message)
            return 1

    print(f"Super admin created: {admin.email} (employee id {admin.employee_id})")
    return 0


if __name__ == "__main__":
    sys.exit(main())
