import re

PASSWORD_PATTERN = re.compile(r'^(?=.*[A-Za-z])(?=.*\d)(?=.*[@$!%*#?&])[A-Za-z\d@$!%*#?&]{8,}$')
EMAIL_PATTERN = re.compile(r'\S+@\S+\.\S+')


def require_text(value: str, field_name: str) -> str:
    normalized = value.strip()
    if not normalized:
        raise ValueError(f'{field_name} is required.')
    return normalized


def validate_email(value: str) -> str:
    # Stored as given; logins and duplicate checks compare emails exactly.
    if not EMAIL_PATTERN.search(value):
        raise ValueError('Please enter a valid email.')
    return value


def reject_null(value, field_name: str):
    if value is None:
        raise ValueError(f'{field_name} cannot be cleared.')
    return value


def validate_password_strength(value: str) -> str:
    if not PASSWORD_PATTERN.match(value):
        raise ValueError('Password must be at least 8 characters, with 1 number and 1 special character.')
    return value
