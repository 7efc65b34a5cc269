import logging
from typing import Any, Mapping

from pydantic import BaseModel, field_validator

from feedback_portal.core.errors import EmailExistsError, NotFoundError
from feedback_portal.core.pagination import Page, paginate
from feedback_portal.core.validation import reject_null, require_text, validate_email
from feedback_portal.database import Store
from feedback_portal.models.user import User

logger = logging.getLogger(__name__)

DEFAULT_USER_PAGE_SIZE = 10


class UpdateUserRequest(BaseModel):
    """Profile fields a user may change. Anything else supplied is ignored."""

    name: str | None = None
    email: str | None = None
    profile_picture: str | None = None
    phone_number: str | None = None
    date_of_birth: str | None = None
    address: str | None = None

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str | None) -> str:
        return require_text(reject_null(value, 'Name'), 'Name')

    @field_validator('email')
    @classmethod
    def check_email(cls, value: str | None) -> str:
        return validate_email(reject_null(value, 'Email'))


def user_sort_key(user: User) -> tuple[str, str]:
    return user.name.casefold(), user.name


async def get_user(db: Store, user_id: str) -> User:
    async with db.operation():
        user = db.users.get(user_id)
        if user is None:
            raise NotFoundError('User')
        return user.model_copy(deep=True)


async def update_user(db: Store, user_id: str, fields: UpdateUserRequest | Mapping[str, Any]) -> User:
    data = fields if isinstance(fields, UpdateUserRequest) else UpdateUserRequest.model_validate(fields)
    changes = data.model_dump(exclude_unset=True)

    async with db.operation():
        user = db.users.get(user_id)
        if user is None:
            raise NotFoundError('User')

        email = changes.get('email')
        if email is not None and email != user.email and any(
            other.email == email for other in db.users.values() if other.id != user_id
        ):
            raise EmailExistsError()

        updated = User.model_validate({**user.model_dump(), **changes})
        db.users[user_id] = updated

        return updated.model_copy(deep=True)


async def set_user_blocked(db: Store, user_id: str, blocked: bool) -> User:
    async with db.operation():
        user = db.users.get(user_id)
        if user is None:
            raise NotFoundError('User')

        updated = user.model_copy(update={'is_blocked': bool(blocked)})
        db.users[user_id] = updated
        logger.info('%s user %s.', 'Blocked' if updated.is_blocked else 'Unblocked', user_id)

        return updated.model_copy(deep=True)


async def delete_user(db: Store, user_id: str) -> bool:
    async with db.operation():
        if db.users.pop(user_id, None) is None:
            return True

        owned = [feedback_id for feedback_id, feedback in db.feedback.items() if feedback.student_id == user_id]
        for feedback_id in owned:
            del db.feedback[feedback_id]
        logger.info('Deleted user %s and %d feedback records.', user_id, len(owned))

        return True


async def list_users(db: Store, page: int = 1, page_size: int | None = DEFAULT_USER_PAGE_SIZE) -> Page[User]:
    async with db.operation():
        ordered = sorted(db.users.values(), key=user_sort_key)
        return paginate([user.model_copy(deep=True) for user in ordered], page, page_size)
