"""Resolve a Google ID token into the identity fields we store on adopters.

No verification happens locally: the token is handed to Google's tokeninfo
endpoint and we trust its answer.
"""

import logging
from dataclasses import asdict, dataclass

import httpx

from backend.core import config

logger = logging.getLogger(__name__)

GOOGLE_TOKENINFO_URL = "https://oauth2.googleapis.com/tokeninfo"


@dataclass(frozen=True)
class ExternalIdentity:
    google_id: str
    email: str
    first_name: str
    last_name: str
    picture: str | None = None

    def as_dict(self) -> dict:
        return asdict(self)


def resolve_external_identity(
    provider_token: str | None,
    *,
    client_id: str | None = None,
    timeout: float | None = None,
) -> ExternalIdentity | None:
    """Return the identity behind ``provider_token``, or None if Google won't vouch for it."""
    if not provider_token:
        return None

    client_id = config.GOOGLE_CLIENT_ID if client_id is None else client_id
    timeout = config.GOOGLE_TOKENINFO_TIMEOUT_SECONDS if timeout is None else timeout
    if not client_id:
        logger.warning("GOOGLE_CLIENT_ID is not configured; refusing Google sign-in")
        return None

    try:
        response = httpx.get(
            GOOGLE_TOKENINFO_URL,
            params={"id_token": provider_token},
            timeout=timeout,
        )
        response.raise_for_status()
        claims = response.json()
    except httpx.HTTPStatusError as exc:
        logger.warning("Google rejected ID token (status %s)", exc.response.status_code)
        return None
    except httpx.HTTPError as exc:
        logger.warning("Google tokeninfo request failed: %s", exc)
        return None
    except ValueError:
        logger.warning("Google tokeninfo returned a non-JSON body")
        return None

    if not isinstance(claims, dict) or not claims.get("sub"):
        return None
    if claims.get("aud") != client_id:
        logger.warning("Google ID token issued for another client: %s", claims.get("aud"))
        return None

    return ExternalIdentity(
        google_id=claims["sub"],
        email=claims.get("email", ""),
        first_name=claims.get("given_name", ""),
        last_name=claims.get("family_name", ""),
        picture=claims.get("picture"),
    )
