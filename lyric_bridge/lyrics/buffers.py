from __future__ import annotations

from contextlib import contextmanager
import io
from threading import Lock
from typing import Iterator


class TextBufferPool:
    """
    Reusable StringIO buffers for serializers.

    A buffer is reset when acquired and returned to the pool on every exit path;
    it never carries text from one use to the next.
    """

    def __init__(self, max_idle: int = 8):
        self.max_idle = max_idle
        self._idle: list[io.StringIO] = []
        self._lock = Lock()

    @contextmanager
    def acquire(self) -> Iterator[io.StringIO]:
        with self._lock:
            buf = self._idle.pop() if self._idle else io.StringIO()
        buf.seek(0)
        buf.truncate(0)
        try:
            yield buf
        finally:
            with self._lock:
                if len(self._idle) < self.max_idle:
                    self._idle.append(buf)

    @property
    def idle_count(self) -> int:
        with self._lock:
            return len(self._idle)


default_pool = TextBufferPool()
