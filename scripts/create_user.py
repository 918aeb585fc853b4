"""Utility script to register a notification recipient in the database."""

from __future__ import annotations

import argparse

from sqlalchemy.exc import SQLAlchemyError

from app.application.use_cases.users import create_user
from app.infrastructure.database import SessionLocal, initialize_database


def parse_args() -> argparse.Namespace:
    """Parse command line arguments for user creation."""

    parser = argparse.ArgumentParser(
        description="Create a user that can receive push notifications.",
    )
    parser.add_argument("--email", required=True, help="Email address of the user")
    parser.add_argument(
        "--role",
        default="customer",
        help="Role alias of the user (default: customer)",
    )
    parser.add_argument("--name", default=None, help="Display name (optional)")
    parser.add_argument(
        "--approved",
        action="store_true",
        help="Mark the user as approved so customers can be notified.",
    )
    return parser.parse_args()


def main() -> None:
    """Create a user using the provided command line arguments."""

    args = parse_args()
    initialize_database()

    session = SessionLocal()
    try:
        user = create_user(
            session,
            email=args.email,
            role_alias=args.role,
            is_approved=args.approved,
            name=args.name,
        )
    except ValueError as exc:
        session.rollback()
        raise SystemExit(f"Could not create the user: {exc}") from exc
    except SQLAlchemyError as exc:
        session.rollback()
        raise SystemExit(f"Error saving the user to the database: {exc}") from exc
    else:
        print(
            "User created:\n"
            f"  ID: {user.id}\n"
            f"  Email: {user.email}\n"
            f"  Role: {user.role.alias}\n"
            f"  Approved: {'yes' if user.is_approved else 'no'}"
        )
    finally:
        session.close()


if __name__ == "__main__":
    main()
