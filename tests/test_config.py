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

"""Tests for reminder settings configuration."""

import sys
from pathlib import Path
from unittest.mock import patch

import pytest

# Add src to path for imports
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from meeting_reminders.config import (
    DEFAULT_MEETING_URL_REGEX,
    DEFAULT_SNOOZE_TIMES,
    InvalidMeetingUrlRegexError,
    InvalidReminderSoundError,
    InvalidSnoozeTimesError,
    InvalidSubjectExcludeRegexError,
    ReminderSettings,
    SettingsError,
)
from meeting_reminders.offset import MalformedOffsetError, Offset


class TestReminderSettings:
    """Test settings defaults and environment loading."""

    def test_default_settings(self):
        settings = ReminderSettings()
        assert settings.default_reminder_secs == 300
        assert settings.search_frequency_secs == 3600
        assert settings.reminder_sound == "(default)"
        assert settings.meeting_url_regex == ""
        assert settings.subject_exclude_regex == ""
        assert settings.snooze_times == DEFAULT_SNOOZE_TIMES

    def test_from_env_default(self):
        with patch.dict("os.environ", {}, clear=True):
            settings = ReminderSettings.from_env()
            assert settings == ReminderSettings()

    def test_from_env_custom_values(self):
        with patch.dict("os.environ", {
            "REMINDER_DEFAULT_SECS": "120",
            "REMINDER_SEARCH_FREQUENCY_SECS": "600",
            "REMINDER_SOUND": "(none)",
            "REMINDER_SUBJECT_EXCLUDE_REGEX": "^Canceled:",
            "REMINDER_SNOOZE_TIMES": "5m,1m before start",
        }, clear=True):
            settings = ReminderSettings.from_env()
            assert settings.default_reminder_secs == 120
            assert settings.search_frequency_secs == 600
            assert settings.reminder_sound == "(none)"
            assert settings.subject_exclude_regex == "^Canceled:"
            assert settings.snooze_times == "5m,1m before start"

    def test_from_env_non_numeric(self):
        with patch.dict("os.environ", {"REMINDER_DEFAULT_SECS": "soon"}, clear=True):
            with pytest.raises(ValueError):
                ReminderSettings.from_env()

    def test_default_snooze_times_are_canonical(self):
        assert ReminderSettings().validate().snooze_times == DEFAULT_SNOOZE_TIMES


class TestValidateSettings:
    """Test validation and normalization before saving."""

    def test_defaults_are_valid(self):
        assert ReminderSettings().validate() == ReminderSettings()

    def test_validate_returns_copy(self):
        settings = ReminderSettings(reminder_sound="(none)")
        validated = settings.validate()
        assert validated.reminder_sound == ""
        assert settings.reminder_sound == "(none)"

    def test_default_meeting_regex_normalized(self):
        settings = ReminderSettings(meeting_url_regex=DEFAULT_MEETING_URL_REGEX).validate()
        assert settings.meeting_url_regex == ""

    def test_custom_meeting_regex_kept(self):
        regex = r"(?P<url>https://meet\.example\.com/\S+)"
        assert ReminderSettings(meeting_url_regex=regex).validate().meeting_url_regex == regex

    def test_meeting_regex_requires_url_group(self):
        with pytest.raises(InvalidMeetingUrlRegexError, match="named 'url'"):
            ReminderSettings(meeting_url_regex=r"https://\S+").validate()

    def test_meeting_regex_must_compile(self):
        with pytest.raises(InvalidMeetingUrlRegexError) as exc_info:
            ReminderSettings(meeting_url_regex="(?P<url>[").validate()
        assert exc_info.value.__cause__ is not None

    def test_subject_regex_must_compile(self):
        with pytest.raises(InvalidSubjectExcludeRegexError):
            ReminderSettings(subject_exclude_regex="(unclosed").validate()

    def test_sound_placeholders(self):
        assert ReminderSettings(reminder_sound="").validate().reminder_sound == ""
        assert ReminderSettings(reminder_sound="(default)").validate().reminder_sound == "(default)"

    def test_sound_path_must_exist(self, tmp_path):
        with pytest.raises(InvalidReminderSoundError):
            ReminderSettings(reminder_sound=str(tmp_path / "missing.wav")).validate()

    def test_existing_sound_path(self, tmp_path):
        wav = tmp_path / "ding.wav"
        wav.write_bytes(b"RIFF")
        assert ReminderSettings(reminder_sound=str(wav)).validate().reminder_sound == str(wav)

    def test_negative_default_reminder(self):
        with pytest.raises(SettingsError):
            ReminderSettings(default_reminder_secs=-1).validate()

    def test_too_large_default_reminder(self):
        with pytest.raises(SettingsError, match="too large"):
            ReminderSettings(default_reminder_secs=2**31).validate()

    def test_search_frequency_whole_minutes(self):
        assert ReminderSettings(search_frequency_secs=150).validate().search_frequency_secs == 120

    def test_search_frequency_clamped(self):
        assert ReminderSettings(search_frequency_secs=10).validate().search_frequency_secs == 60
        assert ReminderSettings(search_frequency_secs=10**7).validate().search_frequency_secs == 86400

    def test_snooze_times_normalized(self):
        settings = ReminderSettings(snooze_times="5m,,10m before start").validate()
        assert settings.snooze_times == "Remind in 5 minutes,Remind 10 minutes before start time"

    def test_invalid_snooze_times(self):
        with pytest.raises(InvalidSnoozeTimesError) as exc_info:
            ReminderSettings(snooze_times="5m,whenever").validate()
        assert isinstance(exc_info.value.__cause__, MalformedOffsetError)

    def test_all_errors_are_settings_errors(self):
        for error in (
            InvalidMeetingUrlRegexError,
            InvalidSubjectExcludeRegexError,
            InvalidReminderSoundError,
            InvalidSnoozeTimesError,
        ):
            assert issubclass(error, SettingsError)


class TestSettingsHelpers:
    """Test derived values used by the calendar scanner."""

    def test_default_meeting_url_pattern(self):
        body = "Join: https://teams.microsoft.com/l/meetup-join/abc123 today"
        match = ReminderSettings().meeting_url_pattern.search(body)
        assert match.group("url") == "https://teams.microsoft.com/l/meetup-join/abc123"

    def test_default_pattern_finds_zoom(self):
        body = "<https://us02web.zoom.us/j/123456789>"
        match = ReminderSettings().meeting_url_pattern.search(body)
        assert match.group("url") == "https://us02web.zoom.us/j/123456789"

    def test_custom_meeting_url_pattern(self):
        settings = ReminderSettings(meeting_url_regex=r"(?P<url>https://meet\.example\.com/\S+)")
        match = settings.meeting_url_pattern.search("at https://meet.example.com/room1")
        assert match.group("url") == "https://meet.example.com/room1"

    def test_subject_exclude_pattern(self):
        assert ReminderSettings().subject_exclude_pattern is None
        pattern = ReminderSettings(subject_exclude_regex="^Canceled:").subject_exclude_pattern
        assert pattern.search("Canceled: Standup")
        assert not pattern.search("Standup")

    def test_snooze_offsets_sorted(self):
        assert ReminderSettings().snooze_offsets() == [
            Offset(60, False),
            Offset(-60, False),
            Offset(-300, False),
            Offset(300, True),
            Offset(30, True),
        ]

    def test_default_offset(self):
        assert ReminderSettings(default_reminder_secs=120).default_offset() == Offset(-120, False)
        assert ReminderSettings(default_reminder_secs=0).default_offset() is None
