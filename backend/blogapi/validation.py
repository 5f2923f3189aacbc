"""Field-level input validators.

Every validator is a pure function returning a (possibly empty) ordered list
of ``{"message": ...}`` entries.  None of them raise; callers gather the
lists from all fields and fail the whole operation when anything came back.
"""

from __future__ import annotations

from email_validator import EmailNotValidError, validate_email as _check_email_syntax

from blogapi.errors import FieldErrors

MIN_PASSWORD_LENGTH = 5
MIN_TEXT_LENGTH = 5
# bcrypt only considers the first 72 bytes and rejects longer inputs.
MAX_PASSWORD_BYTES = 72


def _is_empty(value: str | None) -> bool:
    return value is None or not str(value).strip()


def _too_short(value: str | None, minimum: int) -> bool:
    return _is_empty(value) or len(str(value)) < minimum


def validate_email(email: str | None) -> FieldErrors:
    if _is_empty(email):
        return [{"message": "invalid email"}]
    try:
        _check_email_syntax(str(email), check_deliverability=False)
    except EmailNotValidError:
        return [{"message": "invalid email"}]
    return []


def validate_password(password: str | None) -> FieldErrors:
    # Whitespace is significant in passwords; only the raw length counts.
    if not password or len(str(password)) < MIN_PASSWORD_LENGTH:
        return [{"message": "short password"}]
    if len(str(password).encode()) > MAX_PASSWORD_BYTES:
        return [{"message": "password too long"}]
    return []


def validate_user_input(email: str | None, password: str | None) -> FieldErrors:
    return validate_email(email) + validate_password(password)


def validate_post_fields(title: str | None, content: str | None) -> FieldErrors:
    errors: FieldErrors = []
    if _too_short(title, MIN_TEXT_LENGTH):
        errors.append({"message": "invalid title"})
    if _too_short(content, MIN_TEXT_LENGTH):
        errors.append({"message": "invalid content"})
    return errors
