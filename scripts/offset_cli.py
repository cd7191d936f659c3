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
Reminder Offset CLI

Command-line tool for checking reminder offsets and settings.

Usage:
    # Show the canonical form of one or more offsets
    python scripts/offset_cli.py parse "5m" "10 minutes after start"

    # Sort a comma-separated list into display order
    python scripts/offset_cli.py sort "5m,30s before start,1h after start"

    # When would a reminder wake up for a meeting?
    python scripts/offset_cli.py next "5m before start" --start "tomorrow 10am"

    # Validate settings from the environment / .env
    python scripts/offset_cli.py settings
"""

import argparse
import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

# Add src to path for imports
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", "src"))

from meeting_reminders import (
    InstantParseError,
    OffsetParseError,
    ReminderSettings,
    format_offset,
    format_offset_list,
    next_reminder_time,
    parse_instant,
    parse_offset,
    parse_offset_list,
    sort_offsets,
)


def describe_direction(seconds: int, from_now: bool) -> str:
    """Short description of what an offset is relative to."""
    if from_now:
        return "from now"
    return "before start" if seconds < 0 else "after start"


def cmd_parse(texts: list[str]) -> int:
    """Print the canonical form of each offset."""
    status = 0
    for text in texts:
        try:
            offset = parse_offset(text)
        except OffsetParseError as e:
            print(f"{text!r}: error ({e.kind.value}): {e}")
            status = 1
            continue
        print(
            f"{text!r}: {format_offset(offset)} "
            f"[seconds={offset.seconds}, {describe_direction(offset.seconds, offset.from_now)}]"
        )
    return status


def cmd_sort(list_text: str) -> int:
    """Print a comma-separated list of offsets in display order."""
    try:
        offsets = sort_offsets(parse_offset_list(list_text))
    except OffsetParseError as e:
        print(f"Error: {e}")
        return 1

    if not offsets:
        print("No offsets.")
        return 0

    for i, offset in enumerate(offsets, 1):
        print(f"{i:>3}. {format_offset(offset)}")
    print()
    print(f"Encoded: {format_offset_list(offsets)}")
    return 0


def cmd_next(text: str, start: str, now: Optional[str], timezone: str) -> int:
    """Print when a reminder would next wake up."""
    try:
        offset = parse_offset(text)
        meeting_start = parse_instant(start, timezone)
        current = parse_instant(now, timezone) if now else None
    except (OffsetParseError, InstantParseError) as e:
        print(f"Error: {e}")
        return 1

    wakeup = next_reminder_time(offset, meeting_start, current)
    print(f"Offset:        {format_offset(offset)}")
    print(f"Meeting start: {meeting_start.isoformat()}")
    print(f"Wake up at:    {wakeup.isoformat()}")
    return 0


def cmd_settings() -> int:
    """Validate and print the reminder settings."""
    try:
        settings = ReminderSettings.from_env().validate()
    except ValueError as e:  # SettingsError or a non-numeric env var
        print(f"Error: {e}")
        return 1

    default_offset = settings.default_offset()
    print("Reminder settings")
    print("=" * 40)
    print(f"Default reminder:     {format_offset(default_offset) if default_offset else '(none)'}")
    print(f"Search frequency:     {settings.search_frequency_secs // 60} min")
    print(f"Reminder sound:       {settings.reminder_sound or '(none)'}")
    print(f"Meeting URL regex:    {settings.meeting_url_regex or '(default)'}")
    print(f"Subject exclude:      {settings.subject_exclude_regex or '(none)'}")
    print("Snooze times:")
    for offset in settings.snooze_offsets():
        print(f"  - {format_offset(offset)}")
    return 0


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Reminder offset CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # parse command
    parse_parser = subparsers.add_parser("parse", help="Show canonical offset text")
    parse_parser.add_argument("texts", nargs="+", help="Offset text, e.g. '5m before start'")

    # sort command
    sort_parser = subparsers.add_parser("sort", help="Sort a comma-separated offset list")
    sort_parser.add_argument("list_text", help="Comma-separated offsets")

    # next command
    next_parser = subparsers.add_parser("next", help="Calculate the next wake-up time")
    next_parser.add_argument("text", help="Offset text")
    next_parser.add_argument("--start", required=True, help="Meeting start, e.g. 'tomorrow 10am'")
    next_parser.add_argument("--now", help="Current time (defaults to now)")
    next_parser.add_argument("--timezone", default="UTC", help="IANA timezone for --start/--now")

    # settings command
    subparsers.add_parser("settings", help="Validate settings from the environment")

    return parser


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 0

    if args.command == "parse":
        return cmd_parse(args.texts)
    elif args.command == "sort":
        return cmd_sort(args.list_text)
    elif args.command == "next":
        return cmd_next(args.text, args.start, args.now, args.timezone)
    elif args.command == "settings":
        return cmd_settings()
    return 0


if __name__ == "__main__":
    load_dotenv()
    logging.basicConfig(
        level=logging.INFO,
        format="%(message)s",
    )
    sys.exit(main())
