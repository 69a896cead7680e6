from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from backend.auth.roles import Identity, Role
from backend.auth.tokens import TokenStore
from backend.core.exceptions import Unauthenticated, Unauthorized
from backend.database import get_db

security = HTTPBearer(auto_error=False)


def get_token_store(request: Request) -> TokenStore:
    return request.app.state.token_store


def get_bearer_token(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> str | None:
    if credentials is None:
        return None
    return credentials.credentials


def get_current_identity(
    token: str | None = Depends(get_bearer_token),
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
) -> Identity:
    if not token:
        raise Unauthenticated()
    return store.resolve(db, token)


def require_role(*roles: Role):
    """Dependency letting through admins plus the given roles.

    With no roles the endpoint is admin only.
    """
    required = roles[0].value if roles else Role.ADMIN.value

    def dependency(identity: Identity = Depends(get_current_identity)) -> Identity:
        if identity.role is Role.ADMIN or identity.role in roles:
            return identity
        raise Unauthorized(f"You have to be a {required} to perform this operation")

    return dependency


def ensure_self(identity: Identity, resource_id) -> None:
    if identity.role is Role.ADMIN:
        return
    if identity.subject_id != str(resource_id):
        raise Unauthorized("You can only perform this operation for yourself")
