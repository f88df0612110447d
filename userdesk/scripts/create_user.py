"""
Create a user directly in the database (e.g. the first admin; registration
over HTTP always creates role 'user'). Run from project root:
  python -m userdesk.scripts.create_user "FULL NAME" EMAIL PASSWORD [role]
Example:
  python -m userdesk.scripts.create_user "Site Admin" admin@example.com 'S3cure!pass' admin
"""
import argparse
import logging
import sys

from pydantic import ValidationError as SchemaValidationError

from userdesk.core.database import SessionLocal
from userdesk.core.errors import DuplicateEmail
from userdesk.models import UserRole
from userdesk.schemas.auth import RegisterRequest
from userdesk.services.users import create_user

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Userdesk user.")
    parser.add_argument("full_name", help="Full name (3-150 chars)")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help="Password (8-128 chars, mixed case, digit, symbol)")
    parser.add_argument(
        "role",
        nargs="?",
        default=UserRole.USER.value,
        choices=[r.value for r in UserRole],
    )
    args = parser.parse_args(argv)

    try:
        data = RegisterRequest(
            full_name=args.full_name,
            email=args.email,
            password=args.password,
        )
    except SchemaValidationError as e:
        for err in e.errors():
            field = ".".join(str(p) for p in err["loc"])
            print(f"{field}: {err['msg']}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        user = create_user(db, data.full_name, str(data.email), data.password, role=args.role)
    except DuplicateEmail:
        print(f"User '{data.email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    logger.info("Created user id=%s with role '%s'", user.id, user.role)
    return 0


if __name__ == "__main__":
    sys.exit(main())
