from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator, model_validator
from sqlalchemy.orm import Session, joinedload

from backend.auth import google
from backend.auth.dependencies import ensure_self, get_token_store, require_role
from backend.auth.roles import Identity, Role
from backend.auth.tokens import TokenStore
from backend.core.exceptions import Conflict, InvalidExternalToken, NotFound
from backend.core.responses import envelope
from backend.database import get_db
from backend.models.adopter import Adopter
from backend.routes.accounts import apply_account_changes, commit_or_conflict, new_user

router = APIRouter(tags=['adopter'])

MIN_ADOPTER_AGE = 18
MIN_PASSWORD_LENGTH = 8
HOUSE_TYPES = {'house', 'apartment', 'farm', 'other'}


def _normalize_house_type(value: str | None) -> str | None:
    if value is None:
        return None
    normalized = value.strip().lower()
    if normalized not in HOUSE_TYPES:
        raise ValueError(f'House type must be one of: {", ".join(sorted(HOUSE_TYPES))}.')
    return normalized


class AdopterCreateRequest(BaseModel):
    model_config = ConfigDict(extra='forbid')

    email: EmailStr
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    google_token: str | None = None
    first_name: str = Field(min_length=1)
    last_name: str = Field(min_length=1)
    description: str = ''
    age: int = Field(ge=MIN_ADOPTER_AGE, le=120)
    house_type: str
    has_pets: bool = False
    has_children: bool = False
    time_at_home: float = Field(ge=0, le=24)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)
    address: str = Field(min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator('house_type')
    @classmethod
    def validate_house_type(cls, value: str) -> str:
        return _normalize_house_type(value)

    @model_validator(mode='after')
    def require_password_or_google_token(self) -> 'AdopterCreateRequest':
        if not self.password and not self.google_token:
            raise ValueError('Either a password or a google_token is required.')
        return self


class AdopterUpdateRequest(BaseModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    first_name: str | None = Field(default=None, min_length=1)
    last_name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    age: int | None = Field(default=None, ge=MIN_ADOPTER_AGE, le=120)
    house_type: str | None = None
    has_pets: bool | None = None
    has_children: bool | None = None
    time_at_home: float | None = Field(default=None, ge=0, le=24)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)
    address: str | None = Field(default=None, min_length=1)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return value.strip().lower() if value is not None else None

    @field_validator('house_type')
    @classmethod
    def validate_house_type(cls, value: str | None) -> str | None:
        return _normalize_house_type(value)


class AdopterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    first_name: str
    last_name: str
    description: str | None = None
    age: int | None = None
    house_type: str | None = None
    has_pets: bool
    has_children: bool
    time_at_home: float | None = None
    latitude: float | None = None
    longitude: float | None = None
    address: str | None = None
    google_id: str | None = None


def get_adopter_or_404(db: Session, adopter_id: UUID) -> Adopter:
    adopter = (
        db.query(Adopter)
        .options(joinedload(Adopter.user))
        .filter(Adopter.id == adopter_id)
        .first()
    )
    if adopter is None:
        raise NotFound.for_model('Adopter', adopter_id)
    return adopter


@router.get('')
def list_adopters(
    _: Identity = Depends(require_role()),
    db: Session = Depends(get_db),
):
    adopters = db.query(Adopter).options(joinedload(Adopter.user)).all()
    data = [AdopterResponse.model_validate(adopter) for adopter in adopters]
    return envelope(200, 'Adopters retrieved successfully!', data=data)


@router.get('/{adopter_id}')
def get_adopter(
    adopter_id: UUID,
    _: Identity = Depends(require_role(Role.SHELTER)),
    db: Session = Depends(get_db),
):
    adopter = get_adopter_or_404(db, adopter_id)
    return envelope(200, 'Adopter retrieved successfully!', data=AdopterResponse.model_validate(adopter))


@router.post('')
def create_adopter(
    payload: AdopterCreateRequest,
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
):
    google_id = None
    if payload.google_token:
        identity = google.resolve_external_identity(payload.google_token)
        if identity is None:
            raise InvalidExternalToken()
        google_id = identity.google_id
        if db.query(Adopter.id).filter(Adopter.google_id == google_id).first():
            raise Conflict('Google account already registered')

    user = new_user(db, payload.email, payload.password)
    adopter = Adopter(
        user=user,
        google_id=google_id,
        **payload.model_dump(exclude={'email', 'password', 'google_token'}),
    )
    db.add(user)
    commit_or_conflict(db)
    db.refresh(adopter)

    token = store.issue(db, adopter.id, Role.ADOPTER)
    return envelope(201, 'Adopter created successfully!', token=token, data=adopter.id)


@router.put('/{adopter_id}')
def update_adopter(
    adopter_id: UUID,
    payload: AdopterUpdateRequest,
    identity: Identity = Depends(require_role(Role.ADOPTER)),
    db: Session = Depends(get_db),
):
    ensure_self(identity, adopter_id)
    adopter = get_adopter_or_404(db, adopter_id)

    changes = payload.model_dump(exclude_unset=True)
    apply_account_changes(db, adopter.user, changes)
    for field, value in changes.items():
        if value is not None:
            setattr(adopter, field, value)
    commit_or_conflict(db)
    db.refresh(adopter)

    return envelope(200, 'Adopter updated successfully!', data=AdopterResponse.model_validate(adopter))


@router.delete('/{adopter_id}')
def delete_adopter(
    adopter_id: UUID,
    identity: Identity = Depends(require_role(Role.ADOPTER)),
    db: Session = Depends(get_db),
):
    ensure_self(identity, adopter_id)
    adopter = get_adopter_or_404(db, adopter_id)

    db.delete(adopter.user)
    db.commit()
    return envelope(200, 'Adopter deleted successfully!')
