# Meeting Reminders - Calendar Reminder Offsets
# Copyright (c) 2025-2026 Slash Daemon slashdaemon@protonmail.com
#
# This program is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 of the License.
#
# This program is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE. See the
# GNU Affero General Public License for more details.
#
# You should have received a copy of the GNU Affero General Public License
# along with this program. If not, see <https://www.gnu.org/licenses/>.
#
# Commercial licensing: [slashdaemon@protonmail.com]

"""
Reminder Schedule Module

Turns an Offset plus a meeting start time into the instant a reminder
should wake up. Also resolves human-entered instants ("tomorrow at 10am")
for tools that need a meeting start or a "now" to compute against.
"""

import logging
from datetime import datetime, timedelta
from typing import Optional

import dateparser
import pytz

from .offset import Offset

logger = logging.getLogger("meetingReminders.schedule")


class InstantParseError(ValueError):
    """Raised when a date/time expression cannot be parsed."""

    pass


def next_reminder_time(
    offset: Offset,
    meeting_start: datetime,
    now: Optional[datetime] = None,
) -> datetime:
    """
    Calculate when a reminder should next wake up.

    Args:
        offset: The reminder offset
        meeting_start: Scheduled start of the meeting
        now: Current instant (defaults to the current UTC time, only used
            for offsets relative to now)

    Returns:
        meeting_start or now, shifted by offset.seconds
    """
    if offset.from_now:
        base = now if now is not None else datetime.now(pytz.UTC)
    else:
        base = meeting_start
    return base + timedelta(seconds=offset.seconds)


def validate_timezone(tz_name: str) -> bool:
    """
    Validate that a timezone name is valid.

    Args:
        tz_name: IANA timezone name (e.g., "America/Los_Angeles")

    Returns:
        True if valid, False otherwise
    """
    try:
        pytz.timezone(tz_name)
        return True
    except pytz.UnknownTimeZoneError:
        return False


def parse_instant(expr: str, timezone: str = "UTC") -> datetime:
    """
    Parse a date/time expression into a timezone-aware UTC datetime.

    Args:
        expr: Expression like "2026-03-02 10:00" or "tomorrow at 10am"
        timezone: IANA timezone the expression is written in

    Returns:
        The instant in UTC

    Raises:
        InstantParseError: If the expression cannot be parsed
    """
    expr = expr.strip()
    if not expr:
        raise InstantParseError("Empty time expression")

    if not validate_timezone(timezone):
        logger.warning(f"Invalid timezone '{timezone}', falling back to UTC")
        timezone = "UTC"

    settings = {
        'TIMEZONE': timezone,
        'RETURN_AS_TIMEZONE_AWARE': True,
        'PREFER_DATES_FROM': 'future',
    }

    parsed = dateparser.parse(expr, settings=settings)
    if parsed is None:
        raise InstantParseError(
            f"Could not parse time expression: '{expr}'. "
            "Try formats like '2026-03-02 10:00' or 'tomorrow at 10am'."
        )

    if parsed.tzinfo is None:
        parsed = pytz.timezone(timezone).localize(parsed)

    return parsed.astimezone(pytz.UTC)
