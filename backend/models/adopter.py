"""Adopter model definitions."""

import uuid

from sqlalchemy import Boolean, Column, Float, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship

from backend.database import Base


class Adopter(Base):
    """Profile of a person looking to adopt."""
    __tablename__ = "adopters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    first_name = Column(String, nullable=False)
    last_name = Column(String, nullable=False)
    description = Column(Text, default="")
    age = Column(Integer)
    house_type = Column(String)
    has_pets = Column(Boolean, default=False)
    has_children = Column(Boolean, default=False)
    time_at_home = Column(Float)  # hours per day
    latitude = Column(Float)
    longitude = Column(Float)
    address = Column(String)
    google_id = Column(String, unique=True, index=True, nullable=True)

    user = relationship("User", back_populates="adopter")

    @property
    def email(self) -> str | None:
        return self.user.email if self.user is not None else None
