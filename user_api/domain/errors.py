"""Business-rule failures raised by the service layer."""
from __future__ import annotations


class UserError(Exception):
    """Base class for expected user-management failures."""

    code = "bad_request"
    status = 400


class ValidationError(UserError):
    code = "validation_error"


class DuplicateEmailError(UserError):
    code = "duplicate_email"

    def __init__(self, email: str) -> None:
        super().__init__(f"User with email {email} already exists")
        self.email = email


class NotFoundError(UserError):
    code = "not_found"
    status = 404

    def __init__(self, user_id: int) -> None:
        super().__init__(f"User with ID {user_id} not found")
        self.user_id = user_id
