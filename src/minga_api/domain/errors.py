"""
minga_api.domain.errors

Classified business failures raised by use-cases.

Responsibilities:
- Carry a human-readable message for every failure.
- Let the transport layer tell validation, conflict, and not-found apart from
  infrastructure failures by type alone.
"""

from __future__ import annotations


class UserError(Exception):
    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class UserValidationError(UserError):
    pass


class InvalidEmailError(UserValidationError):
    def __init__(self) -> None:
        super().__init__("Invalid email format")


class InvalidNameError(UserValidationError):
    def __init__(self) -> None:
        super().__init__("Name must be at least 2 characters long")


class DuplicateEmailError(UserError):
    def __init__(self, email: str) -> None:
        super().__init__("User with this email already exists")
        self.email = email


class UserNotFoundError(UserError):
    def __init__(self, user_id: str) -> None:
        super().__init__("User not found")
        self.user_id = user_id


# --- Module Notes -----------------------------------------------------------
# Infrastructure errors live in `minga_api.datastores.errors` and are never raised from here.
