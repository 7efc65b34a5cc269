"""Course model definitions."""

from datetime import datetime

from pydantic import BaseModel


class Course(BaseModel):
    """Represents a course students can leave feedback on."""

    id: str
    name: str
    description: str
    link: str | None = None
    thumbnail: str | None = None
    created_at: datetime
