"""Shelter model definitions."""

import uuid

from sqlalchemy import Column, Float, ForeignKey, String, Text, Uuid
from sqlalchemy.orm import relationship

from backend.database import Base


class Shelter(Base):
    """Profile of an organization offering animals for adoption."""
    __tablename__ = "shelters"

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    user_id = Column(Uuid, ForeignKey("users.id", ondelete="CASCADE"), unique=True, nullable=False)
    name = Column(String, nullable=False)
    description = Column(Text, default="")
    phone = Column(String)
    address = Column(String)
    latitude = Column(Float)
    longitude = Column(Float)

    user = relationship("User", back_populates="shelter")

    @property
    def email(self) -> str | None:
        return self.user.email if self.user is not None else None
