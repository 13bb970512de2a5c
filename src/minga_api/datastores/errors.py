"""
minga_api.datastores.errors

Infrastructure-level failures raised by datastore clients and row decoding.

These are never classified into business errors here; use-cases decide what a
given infrastructure failure means.
"""

from __future__ import annotations

from neo4j.exceptions import ConstraintError
from sqlalchemy.exc import IntegrityError

# Driver error types raised when a store-level constraint rejects a write.
_INTEGRITY_ERRORS: tuple[type[BaseException], ...] = (IntegrityError, ConstraintError)


class DatastoreError(Exception):
    pass


class QueryError(DatastoreError):
    """
    A statement failed to execute (syntax, constraint violation, connection loss...).
    The driver error is kept on `original` and chained as `__cause__`.
    """

    def __init__(self, statement: str, original: BaseException) -> None:
        super().__init__(f"query failed: {original}")
        self.statement = statement
        self.original = original

    @property
    def is_integrity_violation(self) -> bool:
        return isinstance(self.original, _INTEGRITY_ERRORS)


class ClientClosedError(DatastoreError):
    def __init__(self, name: str) -> None:
        super().__init__(f"{name} client is closed")
        self.name = name


class RowDecodeError(DatastoreError):
    def __init__(self, entity: str, detail: str) -> None:
        super().__init__(f"cannot decode {entity} row: {detail}")
        self.entity = entity
        self.detail = detail
