from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class SongItem:
    """One search hit, numbered from 1 in result order."""
    n: int
    song: str
    singer: str
    id: int
    mid: str
    album: str

    @property
    def display(self) -> str:
        if self.singer and self.song:
            return f"{self.singer} - {self.song}"
        return self.song or self.singer or "Unknown song"


@dataclass(frozen=True, slots=True)
class LyricPayload:
    code: int
    message: str
    lrc: str = ""
    trans: str = ""
    yrc: str = ""
    roma: str = ""

    @property
    def ok(self) -> bool:
        return self.code == 200
