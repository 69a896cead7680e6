import enum
from dataclasses import dataclass


class Role(str, enum.Enum):
    ADOPTER = "adopter"
    SHELTER = "shelter"
    ADMIN = "admin"

    @property
    def label(self) -> str:
        return self.value.capitalize()


@dataclass(frozen=True)
class Identity:
    """Who a bearer token speaks for."""

    subject_id: str
    role: Role


def role_for_user(user) -> Role:
    """Shelter only when the user has a shelter and no adopter profile."""
    if user.adopter is None and user.shelter is not None:
        return Role.SHELTER
    return Role.ADOPTER
