from datetime import datetime, timedelta, timezone

import pytest

from feedback_portal.database import Store
from feedback_portal.models.course import Course
from feedback_portal.models.feedback import Feedback
from feedback_portal.models.user import Role, User

START = datetime(2026, 1, 5, 9, 0, tzinfo=timezone.utc)


class TickingClock:
    """Returns a strictly increasing timestamp on every call."""

    def __init__(self, start: datetime = START) -> None:
        self.current = start

    def __call__(self) -> datetime:
        self.current += timedelta(seconds=1)
        return self.current


@pytest.fixture
def store() -> Store:
    db = Store(latency_ms=0, auth_failure_latency_ms=0, clock=TickingClock())
    try:
        yield db
    finally:
        db.close()


def make_user(number: int, name: str | None = None, role: Role = Role.STUDENT, **overrides) -> User:
    fields = {
        'id': f'user-{number}',
        'name': name or f'Student {number}',
        'email': f'student{number}@example.com',
        'password': 'Password@123!',
        'role': role,
        'created_at': START,
    }
    fields.update(overrides)
    return User(**fields)


def make_course(number: int, name: str | None = None) -> Course:
    return Course(
        id=f'course-{number}',
        name=name or f'Course {number}',
        description=f'About course {number}.',
        created_at=START,
    )


def make_feedback(number: int, student: User, course_id: str, rating: int = 3, minutes: int = 0) -> Feedback:
    return Feedback(
        id=f'feedback-{number}',
        student_id=student.id,
        student_name=student.name,
        course_id=course_id,
        rating=rating,
        message=f'Feedback {number}',
        created_at=START + timedelta(minutes=minutes),
    )
