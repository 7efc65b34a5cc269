"""Feedback model definitions."""

from datetime import datetime

from pydantic import BaseModel, Field

MIN_RATING = 1
MAX_RATING = 5


class Feedback(BaseModel):
    """Represents a student's rating and comment on a course."""

    id: str
    student_id: str
    # Captured when the feedback is written; not kept in sync with the user.
    student_name: str
    course_id: str
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING, strict=True)
    message: str
    created_at: datetime
