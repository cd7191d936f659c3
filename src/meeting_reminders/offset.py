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
Reminder Offset Module

Parses human-authored reminder offsets ("5m", "10 minutes after start",
"30s before start") into Offset values, renders them back into canonical
text, orders them for display, and converts lists of them to and from a
single comma-joined settings string.
"""

import logging
import math
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

logger = logging.getLogger("meetingReminders.offset")

# Seconds per unit letter
UNIT_SECONDS = {
    "s": 1,
    "m": 60,
    "h": 60 * 60,
}

# <number><unit>, e.g. "5m", "1.5 h", "30 seconds"
OFFSET_PATTERN = re.compile(r"(\d+(?:\.\d*)?|\.\d+)\s*([smh])", re.IGNORECASE)

# Any of these makes the offset relative to the meeting start time
START_RELATIVE_KEYWORDS = ("start", "after", "before")

# Largest offset magnitude, in seconds (about 68 years)
MAX_OFFSET_SECONDS = 2**31 - 1

LIST_SEPARATOR = ","


class ParseErrorKind(str, Enum):
    """Distinguishable reasons an offset could not be parsed."""

    MALFORMED_OFFSET = "malformed_offset"
    NON_POSITIVE_MAGNITUDE = "non_positive_magnitude"


class OffsetParseError(ValueError):
    """Raised when reminder offset text cannot be parsed."""

    kind: ParseErrorKind

    def __init__(self, message: str, text: str):
        super().__init__(message)
        self.text = text


class MalformedOffsetError(OffsetParseError):
    """The text has no recognizable <number><unit> token."""

    kind = ParseErrorKind.MALFORMED_OFFSET


class NonPositiveMagnitudeError(OffsetParseError):
    """The offset works out to less than one second."""

    kind = ParseErrorKind.NON_POSITIVE_MAGNITUDE


class InternalInconsistencyError(RuntimeError):
    """Raised when formatted text does not parse back to the same offset."""

    pass


@dataclass(frozen=True)
class Offset:
    """
    A reminder wake-up time relative to now or to a meeting's start time.

    seconds is negative for "before start" and positive for "after start".
    Offsets measured from now are always positive.
    """

    seconds: int
    from_now: bool

    def __post_init__(self):
        if isinstance(self.seconds, bool) or not isinstance(self.seconds, int):
            raise TypeError(f"Offset seconds must be an int, got {self.seconds!r}")
        if self.seconds == 0:
            raise ValueError("Offset seconds must be non-zero")
        if abs(self.seconds) > MAX_OFFSET_SECONDS:
            raise ValueError(
                f"Offset seconds must be at most {MAX_OFFSET_SECONDS}: {self.seconds}"
            )
        if self.from_now and self.seconds < 0:
            raise ValueError(
                f"Offset relative to now cannot be negative: {self.seconds}"
            )

    def __str__(self) -> str:
        return format_offset(self)


def parse_offset(text: str) -> Offset:
    """
    Parse reminder offset text into an Offset.

    The grammar is loose: the first <number><unit> token anywhere in the
    text gives the magnitude, and the words "start", "after" or "before"
    anywhere in the text make it relative to the meeting start. Without
    "after", a start-relative offset is before the start.

    Args:
        text: Text such as "5m", "Remind 10 minutes after start time"

    Returns:
        The parsed Offset

    Raises:
        MalformedOffsetError: If no <number><unit> token is present, or the
            offset is larger than MAX_OFFSET_SECONDS
        NonPositiveMagnitudeError: If the offset is less than one second
    """
    if not isinstance(text, str):
        raise TypeError(f"Offset text must be a string, got {type(text).__name__}")

    match = OFFSET_PATTERN.search(text)
    if not match:
        logger.debug(f"Rejected reminder offset '{text}': no <number><unit>")
        raise MalformedOffsetError(
            f"Invalid reminder time '{text}': must contain <number> s|m|h", text
        )

    text_lower = text.lower()
    start_relative = any(k in text_lower for k in START_RELATIVE_KEYWORDS)

    secs = float(match.group(1)) * UNIT_SECONDS[match.group(2).lower()]
    if not math.isfinite(secs) or round(secs) > MAX_OFFSET_SECONDS:
        raise MalformedOffsetError(f"Invalid reminder time '{text}': number is too large", text)

    if secs < 1:
        logger.debug(f"Rejected reminder offset '{text}': {secs}s is under one second")
        raise NonPositiveMagnitudeError(
            f"Invalid reminder time '{text}': must be at least 1 second", text
        )

    if start_relative and "after" not in text_lower:
        secs = -secs

    return Offset(seconds=round(secs), from_now=not start_relative)


def _pluralize(count: int, unit: str) -> str:
    return f"{count} {unit}" if count == 1 else f"{count} {unit}s"


def format_offset(offset: Offset) -> str:
    """
    Render an Offset as canonical text.

    Whole minutes are shown as minutes, anything else as seconds. Hours are
    never used, so "1h" renders as "Remind in 60 minutes".

    Raises:
        InternalInconsistencyError: If the text does not parse back to offset
    """
    abs_secs = abs(offset.seconds)

    if abs_secs >= 60 and abs_secs % 60 == 0:
        amount = _pluralize(abs_secs // 60, "minute")
    else:
        amount = _pluralize(abs_secs, "second")

    if offset.from_now:
        text = f"Remind in {amount}"
    elif offset.seconds < 0:
        text = f"Remind {amount} before start time"
    else:
        text = f"Remind {amount} after start time"

    # Sanity check: the canonical text must round-trip
    reparsed = parse_offset(text)
    if reparsed != offset:
        logger.error(f"Offset {offset!r} formatted as '{text}' which parses as {reparsed!r}")
        raise InternalInconsistencyError(
            f"Error in reminder offset format/parse for: '{text}'"
        )
    return text


def offset_sort_key(offset: Offset) -> tuple:
    """
    Display ordering key.

    Start-relative offsets come first, then offsets from now. Within each
    group larger seconds come first, so small/soon entries end up last.
    """
    return (offset.from_now, -offset.seconds)


def compare_offsets(a: Offset, b: Offset) -> int:
    """Three-way compare of two offsets in display order (-1, 0 or 1)."""
    key_a, key_b = offset_sort_key(a), offset_sort_key(b)
    if key_a < key_b:
        return -1
    if key_a > key_b:
        return 1
    return 0


def sort_offsets(offsets: Iterable[Offset]) -> list[Offset]:
    """Return offsets in display order."""
    return sorted(offsets, key=offset_sort_key)


def parse_offset_list(text: Optional[str]) -> list[Offset]:
    """
    Parse a comma-separated list of reminder offsets.

    Empty segments are skipped. The first invalid segment fails the whole
    list with its OffsetParseError.
    """
    if not text:
        return []

    offsets = []
    for segment in text.split(LIST_SEPARATOR):
        if not segment.strip():
            continue
        offsets.append(parse_offset(segment))
    return offsets


def format_offset_list(offsets: Iterable[Offset]) -> str:
    """Join the canonical text of each offset with commas."""
    return LIST_SEPARATOR.join(format_offset(o) for o in offsets)
