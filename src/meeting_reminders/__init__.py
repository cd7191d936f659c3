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
Meeting Reminders Package

Reminder offsets for calendar meetings: parsing, canonical text, display
ordering, wake-up time calculation and settings validation.
"""

from .offset import (
    Offset,
    OffsetParseError,
    MalformedOffsetError,
    NonPositiveMagnitudeError,
    InternalInconsistencyError,
    ParseErrorKind,
    parse_offset,
    format_offset,
    compare_offsets,
    offset_sort_key,
    sort_offsets,
    parse_offset_list,
    format_offset_list,
)
from .schedule import (
    InstantParseError,
    next_reminder_time,
    parse_instant,
    validate_timezone,
)
from .config import ReminderSettings, SettingsError, DEFAULT_MEETING_URL_REGEX

__all__ = [
    "Offset",
    "OffsetParseError",
    "MalformedOffsetError",
    "NonPositiveMagnitudeError",
    "InternalInconsistencyError",
    "ParseErrorKind",
    "parse_offset",
    "format_offset",
    "compare_offsets",
    "offset_sort_key",
    "sort_offsets",
    "parse_offset_list",
    "format_offset_list",
    "InstantParseError",
    "next_reminder_time",
    "parse_instant",
    "validate_timezone",
    "ReminderSettings",
    "SettingsError",
    "DEFAULT_MEETING_URL_REGEX",
]
