from __future__ import annotations

from .types import LyricPayload, SongItem


class LyricsSource:
    name: str

    def search(self, word: str, num: int = 10) -> list[SongItem]:
        raise NotImplementedError

    def fetch(self, *, id: str | None = None, mid: str | None = None) -> LyricPayload:
        raise NotImplementedError
