from datetime import datetime, timedelta, timezone

import jwt

from backend.core.config import TokenSettings


def create_access_token(
    settings: TokenSettings,
    subject: str,
    role: str,
    token_id: str,
    expires_minutes: int | None = None,
) -> str:
    now = datetime.now(timezone.utc)
    expire_minutes = settings.expires_minutes if expires_minutes is None else expires_minutes
    payload = {
        "sub": subject,
        "role": role,
        "jti": token_id,
        "iat": now,
        "exp": now + timedelta(minutes=expire_minutes),
    }
    return jwt.encode(payload, settings.secret_key, algorithm=settings.algorithm)


def decode_access_token(settings: TokenSettings, token: str) -> dict:
    return jwt.decode(
        token,
        settings.secret_key,
        algorithms=[settings.algorithm],
        options={"require": ["sub", "role", "exp"]},
    )
