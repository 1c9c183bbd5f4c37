# 📄 File: social_platform/shared/utils/helpers.py

# 🧭 Purpose (Layman Explanation):
# Little time and ID helpers so every part of the platform agrees on "now" (always UTC)
# and on what a fresh identifier looks like.

# 🧪 Purpose (Technical Summary):
# UTC clock access, UUID generation and a strictly increasing timestamp helper used
# by entity mutators so updated_at never repeats or goes backwards.

# 🔗 Dependencies:
# - uuid: Unique identifier generation
# - datetime: Timezone-aware timestamps

# 🔄 Connected Modules / Calls From:
# Used by: domain models (defaults and mutators), services (expiry and cutoff computation)

import uuid
from datetime import date, datetime, timedelta, timezone
from typing import Optional

_MICROSECOND = timedelta(microseconds=1)


def utc_now() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(timezone.utc)


def generate_uuid() -> str:
    """Generate a random UUID4 string identifier."""
    return str(uuid.uuid4())


def next_timestamp(previous: Optional[datetime]) -> datetime:
    """
    Return the current UTC time, nudged forward if needed so it is strictly
    later than ``previous``.

    Args:
        previous: Last recorded timestamp, may be None

    Returns:
        datetime: Timestamp strictly greater than ``previous``
    """
    now = utc_now()
    if previous is not None and now <= previous:
        return previous + _MICROSECOND
    return now


def age_on(birth_date: date, today: date) -> int:
    """Whole years between ``birth_date`` and ``today``."""
    years = today.year - birth_date.year
    if (today.month, today.day) < (birth_date.month, birth_date.day):
        years -= 1
    return years


def as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Treat naive datetimes as UTC and convert aware ones to UTC."""
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
