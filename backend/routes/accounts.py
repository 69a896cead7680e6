"""User account helpers shared by the adopter and shelter routes."""

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from backend.auth.passwords import hash_password
from backend.core.exceptions import Conflict
from backend.models.user import User

EMAIL_IN_USE_MESSAGE = 'Email already in use'


def ensure_email_available(db: Session, email: str) -> None:
    if db.query(User.id).filter(User.email == email).first() is not None:
        raise Conflict(EMAIL_IN_USE_MESSAGE)


def new_user(db: Session, email: str, password: str | None) -> User:
    ensure_email_available(db, email)
    return User(email=email, password=hash_password(password) if password else None)


def apply_account_changes(db: Session, user: User, changes: dict) -> None:
    """Pop ``email``/``password`` out of ``changes`` and apply them to ``user``."""
    email = changes.pop('email', None)
    password = changes.pop('password', None)

    if email and email != user.email:
        ensure_email_available(db, email)
        user.email = email
    if password:
        user.password = hash_password(password)


def commit_or_conflict(db: Session, message: str = EMAIL_IN_USE_MESSAGE) -> None:
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise Conflict(message) from exc
