"""Issue an admin bearer token and print it to stdout.

Admins have no account to log in with; operators mint their tokens here.

Usage:
    python -m backend.print_admin_token [--minutes N]
"""
import argparse
import uuid

from backend.auth.roles import Role
from backend.auth.tokens import TokenStore
from backend.core import config
from backend.database import Base, SessionLocal, engine
from backend.models import token  # noqa: F401

DEFAULT_ADMIN_TOKEN_MINUTES = 60 * 24 * 30


def issue_admin_token(minutes: int = DEFAULT_ADMIN_TOKEN_MINUTES) -> str:
    store = TokenStore(config.load_token_settings())
    db = SessionLocal()
    try:
        return store.issue(db, uuid.uuid4(), Role.ADMIN, expires_minutes=minutes)
    finally:
        db.close()


def positive_minutes(value: str) -> int:
    minutes = int(value)
    if minutes <= 0:
        raise argparse.ArgumentTypeError('must be a positive number of minutes')
    return minutes


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description=__doc__.splitlines()[0])
    parser.add_argument('--minutes', type=positive_minutes, default=DEFAULT_ADMIN_TOKEN_MINUTES)
    args = parser.parse_args(argv)

    Base.metadata.create_all(bind=engine, tables=[token.Token.__table__])
    print(issue_admin_token(args.minutes))


if __name__ == "__main__":
    main()
