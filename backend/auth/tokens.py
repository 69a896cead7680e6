"""Issuing, resolving and revoking bearer tokens.

A token is a signed JWT carrying the subject id and role. Signature and
expiry are checked on every request, and the token must also still have a row
in the ``tokens`` table: deleting the row is how logout revokes it.
"""

import logging
import uuid

import jwt
from sqlalchemy.orm import Session

from backend.auth import jwt_handler
from backend.auth.roles import Identity, Role
from backend.core.config import TokenSettings
from backend.core.exceptions import Unauthenticated
from backend.models.token import Token

logger = logging.getLogger(__name__)


class TokenStore:
    def __init__(self, settings: TokenSettings):
        self.settings = settings

    def issue(
        self,
        db: Session,
        subject_id,
        role: Role,
        expires_minutes: int | None = None,
    ) -> str:
        token_id = uuid.uuid4()
        content = jwt_handler.create_access_token(
            self.settings,
            subject=str(subject_id),
            role=Role(role).value,
            token_id=str(token_id),
            expires_minutes=expires_minutes,
        )
        db.add(Token(id=token_id, content=content))
        db.commit()
        return content

    def resolve(self, db: Session, content: str) -> Identity:
        try:
            payload = jwt_handler.decode_access_token(self.settings, content)
        except jwt.ExpiredSignatureError as exc:
            raise Unauthenticated() from exc
        except jwt.InvalidTokenError as exc:
            logger.warning("Rejected malformed bearer token: %s", exc)
            raise Unauthenticated() from exc

        try:
            role = Role(payload["role"])
        except ValueError as exc:
            raise Unauthenticated() from exc

        stored = db.query(Token.id).filter(Token.content == content).first()
        if stored is None:
            raise Unauthenticated()

        return Identity(subject_id=payload["sub"], role=role)

    def revoke(self, db: Session, content: str) -> None:
        db.query(Token).filter(Token.content == content).delete(synchronize_session=False)
        db.commit()
