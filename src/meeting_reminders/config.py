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
Reminder Settings Configuration

Scalar settings handed over by the settings store: default reminder time,
calendar search frequency, reminder sound, meeting filters and the list of
snooze times. Values can be overridden via environment variables and are
checked by validate() before being saved back.
"""

import logging
import os
import re
from dataclasses import dataclass, replace
from typing import Optional

from .offset import (
    MAX_OFFSET_SECONDS,
    Offset,
    OffsetParseError,
    format_offset_list,
    parse_offset_list,
    sort_offsets,
)

logger = logging.getLogger("meetingReminders.config")

# Finds online meeting join links in a meeting body
DEFAULT_MEETING_URL_REGEX = (
    r"(?P<url>https://("
    r"teams\.microsoft\.com/l/meetup-join"
    r"|[\w.-]*zoom\.us/j"
    r"|meet\.google\.com"
    r")/[^\s<>\"']+)"
)

DEFAULT_SNOOZE_TIMES = format_offset_list([
    Offset(-300, False),
    Offset(-60, False),
    Offset(60, False),
    Offset(30, True),
    Offset(300, True),
])

# Sound setting placeholders
SOUND_DEFAULT = "(default)"
SOUND_NONE = "(none)"

# Calendar search frequency bounds, in minutes
MIN_SEARCH_FREQUENCY_MINS = 1
MAX_SEARCH_FREQUENCY_MINS = 24 * 60


class SettingsError(ValueError):
    """Raised when reminder settings fail validation."""

    pass


class InvalidMeetingUrlRegexError(SettingsError):
    pass


class InvalidSubjectExcludeRegexError(SettingsError):
    pass


class InvalidReminderSoundError(SettingsError):
    pass


class InvalidSnoozeTimesError(SettingsError):
    pass


@dataclass
class ReminderSettings:
    """Configuration for meeting reminders."""

    # Seconds before the meeting start to remind (0 = no default reminder)
    default_reminder_secs: int = 300

    # How often the calendar is searched for upcoming meetings
    search_frequency_secs: int = 3600

    # Path to a .wav file, "(default)" or "" for silence
    reminder_sound: str = SOUND_DEFAULT

    # Meeting filters ("" = use the default / exclude nothing)
    meeting_url_regex: str = ""
    subject_exclude_regex: str = ""

    # Comma-joined reminder offsets offered when a reminder fires
    snooze_times: str = DEFAULT_SNOOZE_TIMES

    @classmethod
    def from_env(cls) -> "ReminderSettings":
        """Create settings from environment variables with defaults."""
        return cls(
            default_reminder_secs=int(os.getenv("REMINDER_DEFAULT_SECS", "300")),
            search_frequency_secs=int(
                os.getenv("REMINDER_SEARCH_FREQUENCY_SECS", "3600")
            ),
            reminder_sound=os.getenv("REMINDER_SOUND", SOUND_DEFAULT),
            meeting_url_regex=os.getenv("REMINDER_MEETING_URL_REGEX", ""),
            subject_exclude_regex=os.getenv("REMINDER_SUBJECT_EXCLUDE_REGEX", ""),
            snooze_times=os.getenv("REMINDER_SNOOZE_TIMES", DEFAULT_SNOOZE_TIMES),
        )

    def validate(self) -> "ReminderSettings":
        """
        Check the settings and return a normalized copy.

        The default meeting URL regex is stored as "" so that later changes
        to the default apply, and "(none)" is stored as "" for the sound.
        Search frequency is rounded to whole minutes within bounds.

        Raises:
            SettingsError: If any setting is invalid
        """
        meeting_regex = self.meeting_url_regex
        if meeting_regex == DEFAULT_MEETING_URL_REGEX:
            meeting_regex = ""
        if meeting_regex:
            try:
                pattern = re.compile(meeting_regex)
            except re.error as e:
                raise InvalidMeetingUrlRegexError(f"Invalid meeting URL regex: {e}") from e
            if "url" not in pattern.groupindex:
                raise InvalidMeetingUrlRegexError(
                    "Invalid meeting URL regex: the meeting regex must include a regex "
                    f"group named 'url' e.g. '{DEFAULT_MEETING_URL_REGEX}'"
                )

        if self.subject_exclude_regex:
            try:
                re.compile(self.subject_exclude_regex)
            except re.error as e:
                raise InvalidSubjectExcludeRegexError(
                    f"Invalid subject exclude regex: {e}"
                ) from e

        sound = "" if self.reminder_sound == SOUND_NONE else self.reminder_sound
        if sound not in ("", SOUND_DEFAULT) and not os.path.isfile(sound):
            raise InvalidReminderSoundError(
                "Reminder .wav path does not exist. "
                "Provide a valid .wav path, empty string or (default)."
            )

        if self.default_reminder_secs < 0:
            raise SettingsError(
                f"Default reminder time cannot be negative: {self.default_reminder_secs}"
            )
        if self.default_reminder_secs > MAX_OFFSET_SECONDS:
            raise SettingsError(
                f"Default reminder time is too large: {self.default_reminder_secs}"
            )

        try:
            snooze_offsets = parse_offset_list(self.snooze_times)
        except OffsetParseError as e:
            raise InvalidSnoozeTimesError(f"Invalid snooze times: {e}") from e

        search_mins = max(
            MIN_SEARCH_FREQUENCY_MINS,
            min(self.search_frequency_secs // 60, MAX_SEARCH_FREQUENCY_MINS),
        )
        if search_mins * 60 != self.search_frequency_secs:
            logger.info(
                f"Search frequency {self.search_frequency_secs}s adjusted to {search_mins} min"
            )

        return replace(
            self,
            meeting_url_regex=meeting_regex,
            reminder_sound=sound,
            search_frequency_secs=search_mins * 60,
            snooze_times=format_offset_list(snooze_offsets),
        )

    @property
    def meeting_url_pattern(self) -> re.Pattern:
        """Compiled meeting URL regex, falling back to the default."""
        return re.compile(self.meeting_url_regex or DEFAULT_MEETING_URL_REGEX)

    @property
    def subject_exclude_pattern(self) -> Optional[re.Pattern]:
        """Compiled subject exclude regex, or None to exclude nothing."""
        if not self.subject_exclude_regex:
            return None
        return re.compile(self.subject_exclude_regex)

    def snooze_offsets(self) -> list[Offset]:
        """Configured snooze times in display order."""
        return sort_offsets(parse_offset_list(self.snooze_times))

    def default_offset(self) -> Optional[Offset]:
        """The default reminder as an offset before the meeting start."""
        if self.default_reminder_secs <= 0:
            return None
        return Offset(-self.default_reminder_secs, False)
