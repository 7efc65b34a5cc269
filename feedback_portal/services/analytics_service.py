"""Admin dashboard aggregates over the store's collections."""

from decimal import ROUND_HALF_UP, Decimal

from pydantic import BaseModel

from feedback_portal.database import Store
from feedback_portal.models.user import Role

TWO_PLACES = Decimal('0.01')


class DashboardStats(BaseModel):
    student_count: int
    feedback_count: int
    course_count: int


class CourseRating(BaseModel):
    course_name: str
    average_rating: float


def average_rating(total: int, count: int) -> float:
    """Mean rounded half-up to two places. No ratings averages to 0.0."""
    # Half-up on the float mean itself, so 121/40 (3.0249999...) gives 3.02.
    mean = Decimal(total / (count or 1))
    return float(mean.quantize(TWO_PLACES, rounding=ROUND_HALF_UP))


async def dashboard_stats(db: Store) -> DashboardStats:
    async with db.operation():
        return DashboardStats(
            student_count=sum(1 for user in db.users.values() if user.role == Role.STUDENT),
            feedback_count=len(db.feedback),
            course_count=len(db.courses),
        )


async def course_ratings(db: Store) -> list[CourseRating]:
    async with db.operation():
        totals: dict[str, list[int]] = {}
        for feedback in db.feedback.values():
            tally = totals.setdefault(feedback.course_id, [0, 0])
            tally[0] += feedback.rating
            tally[1] += 1

        ratings = [
            CourseRating(course_name=course.name, average_rating=average_rating(*totals.get(course.id, (0, 0))))
            for course in db.courses.values()
        ]

    return sorted(ratings, key=lambda rating: rating.average_rating, reverse=True)
