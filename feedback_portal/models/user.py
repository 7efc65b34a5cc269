"""User model definitions."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class Role(str, Enum):
    STUDENT = 'student'
    ADMIN = 'admin'


class User(BaseModel):
    """Represents a portal user."""

    id: str
    name: str
    email: str
    password: str  # plaintext, compared by exact match
    role: Role = Role.STUDENT
    is_blocked: bool = False
    created_at: datetime
    profile_picture: str | None = None
    phone_number: str | None = None
    date_of_birth: str | None = None
    address: str | None = None
