"""
Create an API user. Run from project root:
  python -m app.scripts.create_user USERNAME EMAIL PASSWORD [--role ROLE ...]
Example:
  python -m app.scripts.create_user acme ops@acme.com your-secure-password --role ROLE_ADMIN
"""
import argparse
import sys

from app.core.database import SessionLocal
from app.core.security import (
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USERNAME_MAX_LEN,
    hash_password,
)
from app.models.user import User
from app.services.customer_validation import is_valid_email


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a BileMo API user (no registration endpoint).")
    parser.add_argument("username", help=f"Username (1-{USERNAME_MAX_LEN} chars)")
    parser.add_argument("email", help="Contact email (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("--role", action="append", default=[], dest="roles", help="Extra role (repeatable)")
    args = parser.parse_args(argv)

    username = args.username.strip()
    if not username or len(username) > USERNAME_MAX_LEN:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not is_valid_email(args.email):
        print(f"Invalid email '{args.email}'.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        existing = (
            db.query(User)
            .filter((User.username == username) | (User.email == args.email))
            .first()
        )
        if existing:
            print(f"A user with username '{username}' or email '{args.email}' already exists.", file=sys.stderr)
            return 1
        user = User(
            username=username,
            email=args.email,
            roles=args.roles,
            password_hash=hash_password(args.password),
        )
        db.add(user)
        db.commit()
        print(f"Created user '{username}' with roles {user.get_roles()}.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
