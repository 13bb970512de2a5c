"""
minga_api.db.models

Relational schema for users.
"""

from __future__ import annotations

import uuid
from datetime import UTC, datetime

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from minga_api.db.base import Base


def _new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    # Microsecond precision on every backend; SQLite's CURRENT_TIMESTAMP only has seconds.
    return datetime.now(UTC)


class UserRecord(Base):
    __tablename__ = "users"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)
    # The unique index is the final arbiter for concurrent creates with the same email.
    email: Mapped[str] = mapped_column(String(320), nullable=False, unique=True, index=True)
    name: Mapped[str] = mapped_column(String(256), nullable=False)

    # Writers set both columns from one `utcnow()` value; server defaults cover manual inserts.
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now(), index=True
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, server_default=func.now()
    )


# --- Module Notes -----------------------------------------------------------
# `created_at` is indexed because listing is always newest-first.
