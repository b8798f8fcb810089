"""Delimiter-based text extraction.

Helpers for scraping the substring between two markers out of a page,
e.g. a token embedded in HTML or a value in a JavaScript literal. Matching
is left to right, non-overlapping and minimal: each match ends at the first
``end`` that follows its ``start``.
"""

from dataclasses import dataclass
from typing import Iterator, Optional


@dataclass
class ScanCursor:
    """Offset into the scanned text, advanced past each successful match."""

    offset: int = 0


def find_between(text: str, start: str, end: str, cursor: ScanCursor) -> Optional[str]:
    """Find the text between ``start`` and ``end`` from ``cursor.offset`` on.

    On success ``cursor.offset`` is moved just past the matched ``end`` so
    that the next call continues with the following match. When nothing is
    found the cursor is moved to the end of ``text``.

    Args:
        text: Text to search in
        start: Starting marker
        end: Ending marker
        cursor: Scan position, updated in place

    Returns:
        Extracted text or None if not found

    Example:
        >>> cursor = ScanCursor()
        >>> find_between("a[1]b[2]c", "[", "]", cursor), cursor.offset
        ('1', 3)
    """
    offset = cursor.offset
    if offset < 0 or offset >= len(text):
        cursor.offset = len(text)
        return None

    start_idx = text.find(start, offset)
    if start_idx < 0:
        cursor.offset = len(text)
        return None

    content_idx = start_idx + len(start)
    if content_idx >= len(text):
        cursor.offset = len(text)
        return None

    end_idx = text.find(end, content_idx)
    if end_idx < 0:
        cursor.offset = len(text)
        return None

    cursor.offset = end_idx + len(end)
    return text[content_idx:end_idx]


def extract_between(text: str, start: str, end: str) -> Optional[str]:
    """Extract the first text between two markers.

    Args:
        text: Text to search in
        start: Starting marker
        end: Ending marker

    Returns:
        Extracted text or None if not found
    """
    return find_between(text, start, end, ScanCursor())


class BetweenIterator:
    """Lazy, forward-only iterator over every match of :func:`find_between`.

    Iteration stops at the first miss. A match that does not move the
    cursor (only possible with empty markers) is yielded once and then ends
    the iteration. The iterator cannot be rewound; create a new one to scan
    the text again.
    """

    def __init__(self, text: str, start: str, end: str):
        self.text = text
        self.start = start
        self.end = end
        self._cursor = ScanCursor()
        self._done = False

    def __iter__(self) -> Iterator[str]:
        return self

    def __next__(self) -> str:
        if self._done:
            raise StopIteration

        before = self._cursor.offset
        match = find_between(self.text, self.start, self.end, self._cursor)
        if match is None:
            self._done = True
            raise StopIteration

        if self._cursor.offset <= before:
            self._done = True
        return match


def find_all_between(text: str, start: str, end: str) -> BetweenIterator:
    """Iterate over every text between ``start`` and ``end``.

    Example:
        >>> list(find_all_between("<x>A</x><x>B</x>", "<x>", "</x>"))
        ['A', 'B']
    """
    return BetweenIterator(text, start, end)
