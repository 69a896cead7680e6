from fastapi import APIRouter, Depends
from pydantic import BaseModel
from sqlalchemy.orm import Session

from backend.auth import service
from backend.auth.dependencies import get_bearer_token, get_current_identity, get_token_store
from backend.auth.roles import Identity, Role
from backend.auth.tokens import TokenStore
from backend.core.responses import envelope
from backend.database import get_db
from backend.routes.adopter_routes import AdopterResponse
from backend.routes.shelter_routes import ShelterResponse

router = APIRouter(tags=['auth'])

PROFILE_RESPONSES = {
    Role.ADOPTER: AdopterResponse,
    Role.SHELTER: ShelterResponse,
}


class LoginRequest(BaseModel):
    email: str
    password: str


class GoogleLoginRequest(BaseModel):
    token: str | None = None


@router.post('/login')
def login(
    payload: LoginRequest,
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
):
    result = service.login(db, store, payload.email, payload.password)
    return envelope(200, result.message, token=result.token, data=result.profile_id)


@router.post('/google')
def google_login(
    payload: GoogleLoginRequest,
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
):
    result = service.login_with_external_identity(db, store, payload.token)
    data = result.identity.as_dict() if result.identity is not None else None
    return envelope(200, result.message, token=result.token, data=data)


@router.get('/profile')
def profile(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
):
    found = service.get_profile(db, identity)
    data = PROFILE_RESPONSES[identity.role].model_validate(found)
    return envelope(200, 'Profile retrieved successfully!', data=data)


@router.post('/logout')
def logout(
    token: str | None = Depends(get_bearer_token),
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
):
    service.logout(db, store, token)
    return envelope(200, 'User logged out successfully!')


@router.get('/verify')
def verify():
    return envelope(200, 'Auth service is up')
