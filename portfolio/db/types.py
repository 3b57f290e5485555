"""Custom SQLAlchemy types used by the persistence layer."""
from __future__ import annotations

import json
from datetime import datetime, timezone
from typing import Iterable, List, Optional

from sqlalchemy.dialects import postgresql
from sqlalchemy.types import JSON, DateTime, Text, TypeDecorator


class StringList(TypeDecorator[List[str]]):
    """Ordered list of strings.

    Uses a native ``text[]`` column on PostgreSQL and JSON elsewhere
    (e.g. SQLite during tests).
    """

    cache_ok = True
    impl = JSON

    def load_dialect_impl(self, dialect):  # type: ignore[override]
        if dialect.name == "postgresql":
            return dialect.type_descriptor(postgresql.ARRAY(Text()))
        return dialect.type_descriptor(JSON(none_as_null=True))

    def process_bind_param(self, value, dialect):  # type: ignore[override]
        if value is None:
            return None
        if isinstance(value, str) or not isinstance(value, Iterable):
            raise TypeError(f"StringList expects an iterable of strings, got {type(value)!r}")
        return [str(v) for v in value]

    def process_result_value(self, value, dialect):  # type: ignore[override]
        if value is None:
            return []
        if isinstance(value, str):
            # Some drivers hand back the JSON text unparsed
            parsed = json.loads(value)
            return [str(v) for v in parsed] if isinstance(parsed, list) else []
        return [str(v) for v in value]


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone-aware datetime that always round-trips as UTC.

    SQLite drops tzinfo on storage; values read back are re-tagged as UTC so
    API output is consistent across dialects.
    """

    cache_ok = True
    impl = DateTime(timezone=True)

    def process_bind_param(self, value: Optional[datetime], dialect):  # type: ignore[override]
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect):  # type: ignore[override]
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)
