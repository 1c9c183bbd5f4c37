# 📄 File: social_platform/shared/infrastructure/database/types.py
#
# 🧭 Purpose (Layman Explanation):
# Makes sure every date and time we save comes back exactly as it went in, in UTC,
# no matter which database engine is underneath.
#
# 🧪 Purpose (Technical Summary):
# Column types shared by all ORM models: a timezone-aware DateTime that normalizes to UTC
# on the way in and re-attaches UTC on the way out for backends (SQLite) that drop tzinfo.
#
# 🔗 Dependencies:
# - sqlalchemy.types (TypeDecorator, DateTime, Uuid)
#
# 🔄 Connected Modules / Calls From:
# - All module ORM models (infrastructure/database/models.py)

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy.types import DateTime, TypeDecorator, Uuid


class UTCDateTime(TypeDecorator):
    """
    Timezone-aware timestamp column.

    Naive values are assumed to already be UTC. Values read back are
    always timezone-aware UTC datetimes.
    """

    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)

    def process_result_value(self, value: Optional[datetime], dialect) -> Optional[datetime]:
        if value is None:
            return None
        if value.tzinfo is None:
            return value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc)


def uuid_column_type() -> Uuid:
    """UUID column stored natively on PostgreSQL and as CHAR(32) elsewhere; values are str."""
    return Uuid(as_uuid=False)
