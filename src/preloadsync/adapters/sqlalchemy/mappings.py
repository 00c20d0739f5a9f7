"""SQLAlchemy table metadata for domain states."""

from __future__ import annotations

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, Dialect, MetaData, String, Table, Text, TypeDecorator

from preloadsync.domain.errors import UnknownStatusError
from preloadsync.domain.model import PreloadStatus


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


class PreloadStatusType(TypeDecorator[PreloadStatus]):
    """Closed status enumeration stored as text.

    ``unknown`` is refused on the way in; anything unrecognised coming out raises
    ``UnknownStatusError`` instead of leaking a free-form string into the domain.
    """

    impl = String(32)
    cache_ok = True

    def process_bind_param(self, value: PreloadStatus | None, dialect: Dialect) -> str | None:
        _ = dialect
        if value is None:
            return None
        status = PreloadStatus(value)
        if status is PreloadStatus.UNKNOWN:
            raise ValueError("The unknown status cannot be persisted")
        return status.value

    def process_result_value(self, value: str | None, dialect: Dialect) -> PreloadStatus:
        _ = dialect
        try:
            status = PreloadStatus(value)
        except ValueError:
            raise UnknownStatusError(value) from None
        if status is PreloadStatus.UNKNOWN:
            raise UnknownStatusError(value)
        return status


metadata = MetaData(
    naming_convention={
        "ix": "ix_%(column_0_label)s",
        "uq": "uq_%(table_name)s_%(column_0_label)s",
        "ck": "ck_%(table_name)s_%(constraint_name)s",
        "fk": "fk_%(table_name)s_%(column_0_label)s_%(referred_table_name)s",
        "pk": "pk_%(table_name)s",
    }
)

# The domain name is the key; it is not duplicated as a value column.
domain_state_table = Table(
    "domain_state",
    metadata,
    Column("name", String, primary_key=True),
    Column("status", PreloadStatusType, nullable=False, index=True),
    Column("message", Text, nullable=True),
    Column("submission_date", UTCDateTime, nullable=True),
)
