import logging
from typing import Any, Iterable, Mapping

from pydantic import BaseModel, Field, field_validator

from feedback_portal.core.errors import NotFoundError
from feedback_portal.core.pagination import Page, paginate
from feedback_portal.core.validation import reject_null, require_text
from feedback_portal.database import FEEDBACK_ID_PREFIX, Store
from feedback_portal.models.feedback import MAX_RATING, MIN_RATING, Feedback

logger = logging.getLogger(__name__)

DEFAULT_STUDENT_PAGE_SIZE = 5
DEFAULT_FEEDBACK_PAGE_SIZE = 10


class CreateFeedbackRequest(BaseModel):
    student_id: str
    student_name: str
    course_id: str
    rating: int = Field(ge=MIN_RATING, le=MAX_RATING, strict=True)
    message: str

    @field_validator('student_id', 'course_id')
    @classmethod
    def validate_reference(cls, value: str) -> str:
        return require_text(value, 'Reference')

    @field_validator('message')
    @classmethod
    def validate_message(cls, value: str) -> str:
        return require_text(value, 'Feedback message')


class UpdateFeedbackRequest(BaseModel):
    """Fields a student may revise. The author and timestamps stay fixed."""

    course_id: str | None = None
    rating: int | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING, strict=True)
    message: str | None = None

    @field_validator('course_id', 'rating')
    @classmethod
    def keep_value(cls, value, info):
        return reject_null(value, info.field_name)

    @field_validator('message')
    @classmethod
    def validate_message(cls, value: str | None) -> str:
        return require_text(reject_null(value, 'Feedback message'), 'Feedback message')


class FeedbackFilter(BaseModel):
    """Optional criteria, AND-ed. Empty values such as '' or 0 mean no filter."""

    course_id: str | None = None
    rating: int | None = Field(default=None, ge=MIN_RATING, le=MAX_RATING)

    @field_validator('course_id', 'rating', mode='before')
    @classmethod
    def empty_to_none(cls, value):
        return value or None

    def matches(self, feedback: Feedback) -> bool:
        if self.course_id is not None and feedback.course_id != self.course_id:
            return False
        if self.rating is not None and feedback.rating != self.rating:
            return False
        return True


def newest_first(records: Iterable[Feedback]) -> list[Feedback]:
    # sorted() is stable, so equal timestamps keep stored order.
    return sorted(records, key=lambda feedback: feedback.created_at, reverse=True)


def _copies(records: Iterable[Feedback]) -> list[Feedback]:
    return [feedback.model_copy(deep=True) for feedback in records]


async def get_feedback(db: Store, feedback_id: str) -> Feedback:
    async with db.operation():
        feedback = db.feedback.get(feedback_id)
        if feedback is None:
            raise NotFoundError('Feedback')
        return feedback.model_copy(deep=True)


async def list_feedback_by_student(
    db: Store,
    student_id: str,
    page: int = 1,
    page_size: int | None = DEFAULT_STUDENT_PAGE_SIZE,
) -> Page[Feedback]:
    async with db.operation():
        owned = (feedback for feedback in db.feedback.values() if feedback.student_id == student_id)
        return paginate(_copies(newest_first(owned)), page, page_size)


async def list_all_feedback(
    db: Store,
    page: int = 1,
    page_size: int | None = DEFAULT_FEEDBACK_PAGE_SIZE,
    filters: FeedbackFilter | Mapping[str, Any] | None = None,
) -> Page[Feedback]:
    if filters is None:
        criteria = FeedbackFilter()
    elif isinstance(filters, FeedbackFilter):
        criteria = filters
    else:
        criteria = FeedbackFilter.model_validate(filters)

    async with db.operation():
        matching = (feedback for feedback in db.feedback.values() if criteria.matches(feedback))
        return paginate(_copies(newest_first(matching)), page, page_size)


async def list_feedback_raw(db: Store) -> list[Feedback]:
    """All feedback in stored order, most recently inserted first."""
    async with db.operation():
        return _copies(db.feedback.values())


async def create_feedback(db: Store, fields: CreateFeedbackRequest | Mapping[str, Any]) -> Feedback:
    data = fields if isinstance(fields, CreateFeedbackRequest) else CreateFeedbackRequest.model_validate(fields)

    async with db.operation():
        feedback = Feedback(
            id=db.next_id(FEEDBACK_ID_PREFIX, db.feedback),
            created_at=db.now(),
            **data.model_dump(),
        )
        db.prepend_feedback(feedback)
        logger.info('Student %s left feedback %s on %s.', feedback.student_id, feedback.id, feedback.course_id)

        return feedback.model_copy(deep=True)


async def update_feedback(
    db: Store,
    feedback_id: str,
    fields: UpdateFeedbackRequest | Mapping[str, Any],
) -> Feedback:
    data = fields if isinstance(fields, UpdateFeedbackRequest) else UpdateFeedbackRequest.model_validate(fields)
    changes = data.model_dump(exclude_unset=True)

    async with db.operation():
        feedback = db.feedback.get(feedback_id)
        if feedback is None:
            raise NotFoundError('Feedback')

        updated = Feedback.model_validate({**feedback.model_dump(), **changes})
        db.feedback[feedback_id] = updated

        return updated.model_copy(deep=True)


async def delete_feedback(db: Store, feedback_id: str) -> bool:
    async with db.operation():
        db.feedback.pop(feedback_id, None)
        return True
