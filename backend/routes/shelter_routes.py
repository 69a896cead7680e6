from uuid import UUID

from fastapi import APIRouter, Depends
from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator
from sqlalchemy.orm import Session, joinedload

from backend.auth.dependencies import ensure_self, get_token_store, require_role
from backend.auth.roles import Identity, Role
from backend.auth.tokens import TokenStore
from backend.core.exceptions import NotFound
from backend.core.responses import envelope
from backend.database import get_db
from backend.models.shelter import Shelter
from backend.routes.accounts import apply_account_changes, commit_or_conflict, new_user

router = APIRouter(tags=['shelter'])

MIN_PASSWORD_LENGTH = 8


class ShelterCreateRequest(BaseModel):
    email: EmailStr
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)
    name: str = Field(min_length=1)
    description: str = ''
    phone: str = Field(min_length=7, max_length=20)
    address: str = Field(min_length=1)
    latitude: float = Field(ge=-90, le=90)
    longitude: float = Field(ge=-180, le=180)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str) -> str:
        return value.strip().lower()

    @field_validator('name', 'address')
    @classmethod
    def strip_text(cls, value: str) -> str:
        normalized = value.strip()
        if not normalized:
            raise ValueError('Must not be blank.')
        return normalized


class ShelterUpdateRequest(BaseModel):
    email: EmailStr | None = None
    password: str | None = Field(default=None, min_length=MIN_PASSWORD_LENGTH)
    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    phone: str | None = Field(default=None, min_length=7, max_length=20)
    address: str | None = Field(default=None, min_length=1)
    latitude: float | None = Field(default=None, ge=-90, le=90)
    longitude: float | None = Field(default=None, ge=-180, le=180)

    @field_validator('email')
    @classmethod
    def normalize_email(cls, value: str | None) -> str | None:
        return value.strip().lower() if value is not None else None


class ShelterResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: UUID
    email: str | None = None
    name: str
    description: str | None = None
    phone: str | None = None
    address: str | None = None
    latitude: float | None = None
    longitude: float | None = None


def get_shelter_or_404(db: Session, shelter_id: UUID) -> Shelter:
    shelter = (
        db.query(Shelter)
        .options(joinedload(Shelter.user))
        .filter(Shelter.id == shelter_id)
        .first()
    )
    if shelter is None:
        raise NotFound.for_model('Shelter', shelter_id)
    return shelter


@router.get('')
def list_shelters(
    _: Identity = Depends(require_role()),
    db: Session = Depends(get_db),
):
    shelters = db.query(Shelter).options(joinedload(Shelter.user)).all()
    data = [ShelterResponse.model_validate(shelter) for shelter in shelters]
    return envelope(200, 'Shelters retrieved successfully!', data=data)


@router.get('/{shelter_id}')
def get_shelter(
    shelter_id: UUID,
    _: Identity = Depends(require_role(Role.ADOPTER)),
    db: Session = Depends(get_db),
):
    shelter = get_shelter_or_404(db, shelter_id)
    return envelope(200, 'Shelter retrieved successfully!', data=ShelterResponse.model_validate(shelter))


@router.post('')
def create_shelter(
    payload: ShelterCreateRequest,
    db: Session = Depends(get_db),
    store: TokenStore = Depends(get_token_store),
):
    user = new_user(db, payload.email, payload.password)
    shelter = Shelter(user=user, **payload.model_dump(exclude={'email', 'password'}))
    db.add(user)
    commit_or_conflict(db)
    db.refresh(shelter)

    token = store.issue(db, shelter.id, Role.SHELTER)
    return envelope(201, 'Shelter created successfully!', token=token, data=shelter.id)


@router.put('/{shelter_id}')
def update_shelter(
    shelter_id: UUID,
    payload: ShelterUpdateRequest,
    identity: Identity = Depends(require_role(Role.SHELTER)),
    db: Session = Depends(get_db),
):
    ensure_self(identity, shelter_id)
    shelter = get_shelter_or_404(db, shelter_id)

    changes = payload.model_dump(exclude_unset=True)
    apply_account_changes(db, shelter.user, changes)
    for field, value in changes.items():
        if value is not None:
            setattr(shelter, field, value)
    commit_or_conflict(db)
    db.refresh(shelter)

    return envelope(200, 'Shelter updated successfully!', data=ShelterResponse.model_validate(shelter))


@router.delete('/{shelter_id}')
def delete_shelter(
    shelter_id: UUID,
    identity: Identity = Depends(require_role(Role.SHELTER)),
    db: Session = Depends(get_db),
):
    ensure_self(identity, shelter_id)
    shelter = get_shelter_or_404(db, shelter_id)

    db.delete(shelter.user)
    db.commit()
    return envelope(200, 'Shelter deleted successfully!')
