from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True, slots=True)
class WordInfo:
    text: str
    start_ms: int
    duration_ms: int

    @property
    def end_ms(self) -> int:
        return self.start_ms + self.duration_ms


@dataclass(frozen=True, slots=True)
class LineInfo:
    words: tuple[WordInfo, ...]
    start_ms: int
    end_ms: int  # header start + header duration

    @property
    def content_end_ms(self) -> int:
        """End of the last word, falling back to the header end."""
        if self.words:
            return self.words[-1].end_ms
        return self.end_ms

    @property
    def text(self) -> str:
        return "".join(w.text for w in self.words)


@dataclass(frozen=True, slots=True)
class DivInfo:
    start_ms: int
    end_ms: int
    lines: tuple[LineInfo, ...]


@dataclass(frozen=True, slots=True)
class MetaLine:
    time_ms: int
    text: str


@dataclass(frozen=True, slots=True)
class LyricSources:
    """Raw upstream text plus display strings for one conversion."""

    lrc: str = ""
    yrc: str = ""
    translation: str = ""
    romanization: str = ""
    song: str = ""
    singer: str = ""
    album: str = ""


@dataclass(frozen=True, slots=True)
class ConversionResult:
    lrc: str | None = None
    eslrc: str | None = None
    ttml: str | None = None
    # output name -> failure message
    errors: dict[str, str] = field(default_factory=dict)
