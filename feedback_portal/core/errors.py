"""Errors raised by store operations.

Each error carries a user-facing ``detail`` and the HTTP-style ``status_code``
a presentation layer would map it to.
"""


class StoreError(Exception):
    status_code = 400
    detail = 'Store operation failed.'

    def __init__(self, detail: str | None = None) -> None:
        if detail is not None:
            self.detail = detail
        super().__init__(self.detail)


class NotFoundError(StoreError):
    status_code = 404

    def __init__(self, entity: str) -> None:
        self.entity = entity
        super().__init__(f'{entity} not found.')


class InvalidCredentialsError(StoreError):
    status_code = 401
    detail = 'Invalid credentials.'


class AccountBlockedError(StoreError):
    status_code = 403
    detail = 'Your account is blocked.'


class EmailExistsError(StoreError):
    status_code = 409
    detail = 'Email already exists.'


class WrongOldPasswordError(StoreError):
    status_code = 400
    detail = 'Invalid current password.'
