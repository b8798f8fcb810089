"""Test doubles shared by the pyhttpget test suite."""

from typing import List

import httpx


class TrackingStream(httpx.SyncByteStream):
    """Response body that records whether it was read and closed."""

    def __init__(self, chunks: List[bytes]):
        self.chunks = chunks
        self.was_read = False
        self.was_closed = False

    def __iter__(self):
        self.was_read = True
        yield from self.chunks

    def close(self):
        self.was_closed = True


class RecordingSink:
    """Binary sink that keeps every write separately."""

    def __init__(self):
        self.writes: List[bytes] = []

    def write(self, data: bytes) -> int:
        self.writes.append(data)
        return len(data)

    def getvalue(self) -> bytes:
        return b"".join(self.writes)
