"""Login, Google sign-in, profile lookup and logout.

Functions here raise the errors from ``backend.core.exceptions``; routes turn
their results into response envelopes.
"""

import logging
import uuid
from dataclasses import dataclass

from sqlalchemy.orm import Session, joinedload

from backend.auth import google
from backend.auth.passwords import burn_verification, verify_password
from backend.auth.roles import Identity, Role, role_for_user
from backend.auth.tokens import TokenStore
from backend.core.exceptions import (
    AdminProfileRejected,
    InvalidCredentials,
    InvalidExternalToken,
    NotFound,
)
from backend.models.adopter import Adopter
from backend.models.shelter import Shelter
from backend.models.user import User

logger = logging.getLogger(__name__)

PROFILE_MODELS = {
    Role.ADOPTER: Adopter,
    Role.SHELTER: Shelter,
}


@dataclass(frozen=True)
class LoginResult:
    token: str
    profile_id: uuid.UUID
    role: Role
    message: str


@dataclass(frozen=True)
class ExternalLoginResult:
    message: str
    token: str | None = None
    identity: google.ExternalIdentity | None = None


def normalize_email(email: str) -> str:
    return email.strip().lower()


def find_user_by_email(db: Session, email: str) -> User | None:
    return (
        db.query(User)
        .options(joinedload(User.adopter), joinedload(User.shelter))
        .filter(User.email == normalize_email(email))
        .first()
    )


def login(db: Session, store: TokenStore, email: str, password: str) -> LoginResult:
    user = find_user_by_email(db, email)
    if user is None:
        burn_verification(password)
        raise InvalidCredentials()

    role = role_for_user(user)
    profile = user.shelter if role is Role.SHELTER else user.adopter
    if not verify_password(password, user.password) or profile is None:
        raise InvalidCredentials()

    token = store.issue(db, profile.id, role)
    logger.info("%s %s logged in", role.label, profile.id)
    return LoginResult(
        token=token,
        profile_id=profile.id,
        role=role,
        message=f"{role.label} logged in successfully!",
    )


def login_with_external_identity(db: Session, store: TokenStore, provider_token: str | None) -> ExternalLoginResult:
    identity = google.resolve_external_identity(provider_token)
    if identity is None:
        raise InvalidExternalToken()

    adopter = (
        db.query(Adopter)
        .filter(Adopter.google_id == identity.google_id)
        .first()
    )
    if adopter is None:
        # Not registered yet; the client uses these fields to prefill sign-up.
        return ExternalLoginResult(message="User registered with google", identity=identity)

    token = store.issue(db, adopter.id, Role.ADOPTER)
    return ExternalLoginResult(message="User logged in successfully with google", token=token)


def get_profile(db: Session, identity: Identity) -> Adopter | Shelter:
    if identity.role is Role.ADMIN:
        raise AdminProfileRejected("Why are you trying to retrieve your profile admin? lol")

    model = PROFILE_MODELS[identity.role]
    try:
        profile_id = uuid.UUID(identity.subject_id)
    except ValueError as exc:
        raise NotFound.for_model(identity.role.label, identity.subject_id) from exc

    profile = db.get(model, profile_id)
    if profile is None:
        raise NotFound.for_model(identity.role.label, identity.subject_id)
    return profile


def logout(db: Session, store: TokenStore, token: str | None) -> None:
    if token:
        store.revoke(db, token)
