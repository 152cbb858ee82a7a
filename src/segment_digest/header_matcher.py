"""Header triple detection for digest text.

A header is three consecutive non-blank lines: title, category and a date
line ending in a clock time such as ``Apr 25, 2025 02:10 AM``. The scan is a
single forward pass over logical lines with a three-line window, so the cost
stays linear in the size of the text no matter how many date-like lines it
contains.
"""

from __future__ import annotations

import re
from collections import deque
from typing import Iterator, NamedTuple

from segment_digest.models import HeaderMatch

# Shortest prefix of a line that ends in HH:MM AM/PM (at least one char before the time).
# ASCII digits only
DATE_LINE_PATTERN = re.compile(r".+?[0-9]{2}:[0-9]{2} [AP]M")


class LogicalLine(NamedTuple):
    """A non-blank line with surrounding whitespace removed."""
    start: int
    text: str


def iter_logical_lines(text: str) -> Iterator[LogicalLine]:
    """Yield every non-blank line of text with the offset of its first character."""
    pos = 0
    length = len(text)
    while pos <= length:
        newline = text.find("\n", pos)
        line_end = length if newline == -1 else newline
        raw = text[pos:line_end]
        stripped = raw.strip()
        if stripped:
            yield LogicalLine(pos + len(raw) - len(raw.lstrip()), stripped)
        if newline == -1:
            break
        pos = newline + 1


def match_date_line(line: str) -> str | None:
    """Return the date part of a line, or None if the line has no clock time."""
    match = DATE_LINE_PATTERN.match(line)
    if match is None:
        return None
    return match.group(0)


def iter_header_matches(text: str) -> Iterator[HeaderMatch]:
    """Yield non-overlapping header matches in order of appearance.

    Title and category are always exactly one line each. Anything after the
    clock time on the date line is not part of the header; it is fed back to
    the window as a line of its own.
    """
    window: deque[LogicalLine] = deque(maxlen=3)

    for line in iter_logical_lines(text):
        window.append(line)
        if len(window) < 3:
            continue

        date = match_date_line(window[2].text)
        if date is None:
            continue

        title, category, date_line = window
        end = date_line.start + len(date)
        yield HeaderMatch(
            start=title.start,
            end=end,
            title=title.text,
            category=category.text,
            date=date.strip(),
        )

        window.clear()
        remainder = date_line.text[len(date):]
        if remainder.strip():
            window.append(LogicalLine(end + len(remainder) - len(remainder.lstrip()), remainder.strip()))
