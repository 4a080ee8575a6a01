"""
Create a user (e.g. first admin). Run from project root:
  python -m postboard.scripts.create_user NAME EMAIL PASSWORD [role]
Example:
  python -m postboard.scripts.create_user "Site Admin" admin@example.org your-secure-password admin
"""
import argparse
import logging
import sys

from postboard.core.abilities import Role
from postboard.core.database import SessionLocal
from postboard.core.errors import ValidationFailed
from postboard.core.security import hash_password
from postboard.models import User
from postboard.schemas.users import UserCreateRequest
from postboard.services.validation import Unique, commit_unique, validate_payload

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        description="Create a Postboard user. Registration only creates 'user' accounts; use this for admins."
    )
    parser.add_argument("name", help="Display name (1-255 chars)")
    parser.add_argument("email", help="Unique email address")
    parser.add_argument("password", help="Password (at least 6 chars)")
    parser.add_argument(
        "role",
        nargs="?",
        default=Role.USER.value,
        choices=[r.value for r in Role],
    )
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        data = validate_payload(
            {
                "name": args.name.strip(),
                "email": args.email.strip(),
                "password": args.password,
                "role": args.role,
            },
            UserCreateRequest,
            db=db,
            unique=[Unique("email", User.email)],
        )
        user = User(
            name=data["name"],
            email=data["email"],
            password_hash=hash_password(data["password"]),
            role=data["role"],
        )
        db.add(user)
        commit_unique(db, "email")
        logger.info("Created user id=%s role=%s", user.id, user.role)
        print(f"Created user '{user.email}' with role '{user.role}'.")
        return 0
    except ValidationFailed as e:
        for field, messages in (e.errors or {}).items():
            for message in messages:
                print(f"{field}: {message}", file=sys.stderr)
        return 1
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
