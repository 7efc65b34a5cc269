import logging
from typing import Any, Mapping

from pydantic import BaseModel, field_validator

from feedback_portal.core.errors import NotFoundError
from feedback_portal.core.validation import reject_null, require_text
from feedback_portal.database import COURSE_ID_PREFIX, Store
from feedback_portal.models.course import Course

logger = logging.getLogger(__name__)

UNKNOWN_COURSE_NAME = 'Unknown Course'


class CreateCourseRequest(BaseModel):
    name: str
    description: str
    link: str | None = None
    thumbnail: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return require_text(value, 'Course name')

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str) -> str:
        return require_text(value, 'Description')

    @field_validator('link', 'thumbnail')
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


class UpdateCourseRequest(BaseModel):
    name: str | None = None
    description: str | None = None
    link: str | None = None
    thumbnail: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str | None) -> str:
        return require_text(reject_null(value, 'Course name'), 'Course name')

    @field_validator('description')
    @classmethod
    def validate_description(cls, value: str | None) -> str:
        return require_text(reject_null(value, 'Description'), 'Description')

    @field_validator('link', 'thumbnail')
    @classmethod
    def blank_to_none(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


def _request(model: type[BaseModel], fields: BaseModel | Mapping[str, Any]) -> BaseModel:
    return fields if isinstance(fields, model) else model.model_validate(fields)


async def list_courses(db: Store) -> list[Course]:
    async with db.operation():
        return [course.model_copy(deep=True) for course in db.courses.values()]


async def get_course(db: Store, course_id: str) -> Course:
    async with db.operation():
        course = db.courses.get(course_id)
        if course is None:
            raise NotFoundError('Course')
        return course.model_copy(deep=True)


async def course_name(db: Store, course_id: str) -> str:
    """Display name for a course reference, tolerating deleted courses."""
    async with db.operation():
        course = db.courses.get(course_id)
        return course.name if course is not None else UNKNOWN_COURSE_NAME


async def create_course(db: Store, fields: CreateCourseRequest | Mapping[str, Any]) -> Course:
    data = _request(CreateCourseRequest, fields)

    async with db.operation():
        course = Course(
            id=db.next_id(COURSE_ID_PREFIX, db.courses),
            created_at=db.now(),
            **data.model_dump(),
        )
        db.courses[course.id] = course
        logger.info('Created course %s (%s).', course.id, course.name)

        return course.model_copy(deep=True)


async def update_course(db: Store, course_id: str, fields: UpdateCourseRequest | Mapping[str, Any]) -> Course:
    changes = _request(UpdateCourseRequest, fields).model_dump(exclude_unset=True)

    async with db.operation():
        course = db.courses.get(course_id)
        if course is None:
            raise NotFoundError('Course')

        updated = Course.model_validate({**course.model_dump(), **changes})
        db.courses[course_id] = updated

        return updated.model_copy(deep=True)


async def delete_course(db: Store, course_id: str) -> bool:
    # Feedback pointing at the course is left in place.
    async with db.operation():
        if db.courses.pop(course_id, None) is not None:
            logger.info('Deleted course %s.', course_id)
        return True
