import asyncio

import pytest
from pydantic import ValidationError

from feedback_portal.core.errors import (
    AccountBlockedError,
    EmailExistsError,
    InvalidCredentialsError,
    NotFoundError,
    WrongOldPasswordError,
)
from feedback_portal.database import Store
from feedback_portal.models.user import Role
from feedback_portal.services import auth_service

from conftest import make_user


@pytest.fixture
def seeded(store: Store) -> Store:
    store.load(
        users=[
            make_user(1, name='Admin User', role=Role.ADMIN, email='admin@example.com'),
            make_user(2, name='Student User', email='student@example.com'),
            make_user(3, name='Blocked Student', email='blocked@example.com', is_blocked=True),
        ]
    )
    return store


def test_authenticate_returns_copy_of_matching_user(seeded: Store) -> None:
    user = asyncio.run(auth_service.authenticate(seeded, 'student@example.com', 'Password@123!'))

    assert user.id == 'user-2'
    assert user.password == 'Password@123!'

    user.name = 'Changed'
    assert seeded.users['user-2'].name == 'Student User'


def test_authenticate_rejects_wrong_password(seeded: Store) -> None:
    with pytest.raises(InvalidCredentialsError) as exception_info:
        asyncio.run(auth_service.authenticate(seeded, 'student@example.com', 'wrong'))

    assert exception_info.value.detail == 'Invalid credentials.'
    assert exception_info.value.status_code == 401


def test_authenticate_rejects_blocked_account(seeded: Store) -> None:
    with pytest.raises(AccountBlockedError) as exception_info:
        asyncio.run(auth_service.authenticate(seeded, 'blocked@example.com', 'Password@123!'))

    assert exception_info.value.detail == 'Your account is blocked.'


def test_authenticate_reports_invalid_credentials_for_blocked_account_with_wrong_password(seeded: Store) -> None:
    with pytest.raises(InvalidCredentialsError):
        asyncio.run(auth_service.authenticate(seeded, 'blocked@example.com', 'wrong'))


def test_register_creates_unblocked_student(seeded: Store) -> None:
    user = asyncio.run(auth_service.register(seeded, ' New Student ', 'new@example.com', 'Secret@123'))

    assert user.id == 'user-4'
    assert user.name == 'New Student'
    assert user.role == Role.STUDENT
    assert user.is_blocked is False
    assert list(seeded.users)[-1] == 'user-4'


def test_register_rejects_existing_email_without_mutation(seeded: Store) -> None:
    with pytest.raises(EmailExistsError) as exception_info:
        asyncio.run(auth_service.register(seeded, 'Copy', 'student@example.com', 'Secret@123'))

    assert exception_info.value.status_code == 409
    assert len(seeded.users) == 3


def test_register_matches_email_case_sensitively(seeded: Store) -> None:
    user = asyncio.run(auth_service.register(seeded, 'Shouty', 'STUDENT@example.com', 'Secret@123'))

    assert user.email == 'STUDENT@example.com'
    assert len(seeded.users) == 4


@pytest.mark.parametrize(
    ('name', 'email', 'password'),
    [
        ('   ', 'new@example.com', 'Secret@123'),
        ('New', 'not-an-email', 'Secret@123'),
        ('New', 'new@example.com', 'short1!'),
        ('New', 'new@example.com', 'NoDigits!!'),
        ('New', 'new@example.com', 'NoSpecial123'),
    ],
)
def test_register_rejects_malformed_input(seeded: Store, name: str, email: str, password: str) -> None:
    with pytest.raises(ValidationError):
        asyncio.run(auth_service.register(seeded, name, email, password))

    assert len(seeded.users) == 3


def test_change_password_replaces_stored_password(seeded: Store) -> None:
    assert asyncio.run(auth_service.change_password(seeded, 'user-2', 'Password@123!', 'Fresh@4567')) is True

    user = asyncio.run(auth_service.authenticate(seeded, 'student@example.com', 'Fresh@4567'))
    assert user.id == 'user-2'

    with pytest.raises(InvalidCredentialsError):
        asyncio.run(auth_service.authenticate(seeded, 'student@example.com', 'Password@123!'))


def test_change_password_rejects_wrong_old_password(seeded: Store) -> None:
    with pytest.raises(WrongOldPasswordError) as exception_info:
        asyncio.run(auth_service.change_password(seeded, 'user-2', 'nope', 'Fresh@4567'))

    assert exception_info.value.detail == 'Invalid current password.'
    assert seeded.users['user-2'].password == 'Password@123!'


def test_change_password_rejects_unknown_user(seeded: Store) -> None:
    with pytest.raises(NotFoundError) as exception_info:
        asyncio.run(auth_service.change_password(seeded, 'user-99', 'Password@123!', 'Fresh@4567'))

    assert exception_info.value.detail == 'User not found.'


def test_registered_email_is_stored_and_matched_exactly(seeded: Store) -> None:
    registered = asyncio.run(auth_service.register(seeded, 'Spacey', 'new@example.com ', 'Secret@123'))

    user = asyncio.run(auth_service.authenticate(seeded, 'new@example.com ', 'Secret@123'))

    assert registered.email == 'new@example.com '
    assert user.id == registered.id
    with pytest.raises(InvalidCredentialsError):
        asyncio.run(auth_service.authenticate(seeded, 'new@example.com', 'Secret@123'))
