"""User model definitions."""

import uuid

from sqlalchemy import Column, String, Uuid
from sqlalchemy.orm import relationship

from backend.database import Base
from backend.models.adopter import Adopter
from backend.models.shelter import Shelter


class User(Base):
    """Login identity. Owns at most one adopter or shelter profile."""
    __tablename__ = "users"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    email = Column(String, unique=True, index=True, nullable=False)
    password = Column(String, nullable=True)  # argon2 hash, empty for google-only adopters

    adopter = relationship(
        Adopter,
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
    shelter = relationship(
        Shelter,
        back_populates="user",
        uselist=False,
        cascade="all, delete-orphan",
    )
