import logging

from pydantic import BaseModel, field_validator

from feedback_portal.core.errors import (
    AccountBlockedError,
    EmailExistsError,
    InvalidCredentialsError,
    NotFoundError,
    WrongOldPasswordError,
)
from feedback_portal.core.validation import require_text, validate_email, validate_password_strength
from feedback_portal.database import USER_ID_PREFIX, Store
from feedback_portal.models.user import Role, User

logger = logging.getLogger(__name__)


class RegisterRequest(BaseModel):
    name: str
    email: str
    password: str

    @field_validator('name')
    @classmethod
    def validate_name(cls, value: str) -> str:
        return require_text(value, 'Name')

    @field_validator('email')
    @classmethod
    def check_email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator('password')
    @classmethod
    def validate_password(cls, value: str) -> str:
        return validate_password_strength(value)


class ChangePasswordRequest(BaseModel):
    old_password: str
    new_password: str

    @field_validator('new_password')
    @classmethod
    def validate_new_password(cls, value: str) -> str:
        return validate_password_strength(value)


def find_user_by_email(db: Store, email: str) -> User | None:
    return next((user for user in db.users.values() if user.email == email), None)


async def authenticate(db: Store, email: str, password: str) -> User:
    async with db.operation(failure_latency_ms=db.auth_failure_latency_ms):
        user = next(
            (candidate for candidate in db.users.values()
             if candidate.email == email and candidate.password == password),
            None,
        )
        if user is None:
            logger.info('Rejected login for %s: invalid credentials.', email)
            raise InvalidCredentialsError()
        if user.is_blocked:
            logger.info('Rejected login for %s: account blocked.', email)
            raise AccountBlockedError()

        return user.model_copy(deep=True)


async def register(db: Store, name: str, email: str, password: str) -> User:
    data = RegisterRequest(name=name, email=email, password=password)

    async with db.operation(failure_latency_ms=db.auth_failure_latency_ms):
        if find_user_by_email(db, data.email) is not None:
            raise EmailExistsError()

        user = User(
            id=db.next_id(USER_ID_PREFIX, db.users),
            name=data.name,
            email=data.email,
            password=data.password,
            role=Role.STUDENT,
            is_blocked=False,
            created_at=db.now(),
        )
        db.users[user.id] = user
        logger.info('Registered student %s.', user.id)

        return user.model_copy(deep=True)


async def change_password(db: Store, user_id: str, old_password: str, new_password: str) -> bool:
    data = ChangePasswordRequest(old_password=old_password, new_password=new_password)

    async with db.operation():
        user = db.users.get(user_id)
        if user is None:
            raise NotFoundError('User')
        if user.password != data.old_password:
            raise WrongOldPasswordError()

        db.users[user_id] = user.model_copy(update={'password': data.new_password})

        return True
