"""
Expiry helpers for presigned URLs.

Durations are given either as a ``timedelta`` or as ``(time, TimeUnit)``.
"""

import math
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Optional, Union

from oss_template.exceptions import CallerMisuseError

# Backends reject presigned URLs valid for longer than this (SigV4 limit)
MAX_PRESIGN_EXPIRY = timedelta(days=7)
DEFAULT_EXPIRY_MINUTES = 10


class TimeUnit(str, Enum):
    DAYS = "days"
    HOURS = "hours"
    MINUTES = "minutes"
    SECONDS = "seconds"
    MILLISECONDS = "milliseconds"


Expiry = Union[int, float, timedelta]


def to_timedelta(time: Expiry, unit: TimeUnit = TimeUnit.MINUTES) -> timedelta:
    """Convert ``time`` in ``unit`` to a timedelta; timedeltas pass through."""
    if isinstance(time, timedelta):
        duration = time
    else:
        duration = timedelta(**{TimeUnit(unit).value: time})
    if duration < timedelta(0):
        raise CallerMisuseError(f"expiry must not be negative: {duration}")
    return duration


def to_seconds(time: Expiry, unit: TimeUnit = TimeUnit.MINUTES) -> int:
    """
    Whole seconds for ``ExpiresIn``.

    Fractional seconds round up, and any positive duration is at least 1s.
    """
    return max(1, math.ceil(to_timedelta(time, unit).total_seconds()))


def expiration_from(
    time: Expiry,
    unit: TimeUnit = TimeUnit.MINUTES,
    now: Optional[datetime] = None,
) -> datetime:
    """Absolute UTC instant ``time`` from ``now``."""
    if now is None:
        now = datetime.now(timezone.utc)
    return now + to_timedelta(time, unit)
