"""Token model definitions."""

from sqlalchemy import Column, String, Uuid

from backend.database import Base


class Token(Base):
    """Issued bearer token. Deleting the row revokes the token."""
    __tablename__ = "tokens"

    id = Column(Uuid, primary_key=True)
    content = Column(String, unique=True, index=True, nullable=False)
