from __future__ import annotations

from dataclasses import dataclass
import logging
import re
from typing import Iterable

from .errors import MalformedLineError
from .model import LineInfo, MetaLine, WordInfo
from .timecodec import lrc_time_to_ms

logger = logging.getLogger(__name__)

META_TAGS = ("ti", "ar", "al", "by", "offset", "kana", "re", "ve")

# Substrings the upstream injects into translation lines (credits, app banner)
DEFAULT_WATERMARKS: tuple[str, ...] = ("QQ音乐", "制作")

_META_RE = re.compile(r"^\[(" + "|".join(META_TAGS) + r"):(.*?)\]$")
_META_PREFIXES = tuple(f"[{tag}:" for tag in META_TAGS)
_LRC_LINE_RE = re.compile(r"^\[(\d{2}):(\d{2})\.(\d{2,3})\](.*)$")
_YRC_LINE_RE = re.compile(r"^\[(\d+),(\d+)\](.*)$")  # [start,duration]words
_YRC_WORD_RE = re.compile(r"(.*?)\((\d+),(\d+)\)")  # text(start,duration)


@dataclass(frozen=True, slots=True)
class YrcParseStats:
    lines_total: int
    lines_parsed: int
    lines_malformed: int
    lines_empty: int


def is_metadata_line(line: str) -> bool:
    return line.startswith(_META_PREFIXES)


def parse_meta(text: str) -> dict[str, str]:
    """
    Collect [ti:], [ar:], [al:] ... tags. Last occurrence of a key wins.
    """
    meta: dict[str, str] = {}
    for raw in text.split("\n"):
        m = _META_RE.match(raw.strip())
        if m:
            meta[m.group(1).strip()] = m.group(2).strip()
    logger.debug("Parsed %d metadata tags", len(meta))
    return meta


def parse_lrc_timeline(text: str, *, watermarks: Iterable[str] = DEFAULT_WATERMARKS) -> list[MetaLine]:
    """
    Parse line-synced LRC (translations, romaji-as-LRC) into MetaLines sorted by time.

    Lines that are empty, a bare "//" placeholder, or carry a watermark are dropped.
    """
    if not text.strip():
        return []

    marks = tuple(w for w in watermarks if w)
    out: list[MetaLine] = []
    for raw in text.split("\n"):
        line = raw.strip()
        if not line or is_metadata_line(line):
            continue

        m = _LRC_LINE_RE.match(line)
        if not m:
            continue

        content = m.group(4).strip()
        if not content or content == "//":
            continue
        if any(w in content for w in marks):
            continue

        out.append(MetaLine(time_ms=lrc_time_to_ms(m.group(1), m.group(2), m.group(3)), text=content))

    out.sort(key=lambda e: e.time_ms)
    return out


def lrc_line_time(line: str) -> int | None:
    """Start time of a single "[mm:ss.xx]text" line, or None."""
    m = _LRC_LINE_RE.match(line)
    if not m:
        return None
    return lrc_time_to_ms(m.group(1), m.group(2), m.group(3))


def parse_yrc_line(line: str, *, log: logging.Logger | None = None) -> LineInfo:
    log = log or logger
    m = _YRC_LINE_RE.match(line)
    if not m:
        raise MalformedLineError(f"Invalid YRC line format: {line}")

    start = int(m.group(1))
    duration = int(m.group(2))
    content = m.group(3)

    words: list[WordInfo] = []
    matched = False
    for wm in _YRC_WORD_RE.finditer(content):
        matched = True
        text = wm.group(1)
        w_start = int(wm.group(2))
        w_dur = int(wm.group(3))
        if w_dur == 0:
            if not text.strip():
                continue
            log.debug("Zero duration word %r at %dms, corrected to 1ms", text, w_start)
            w_dur = 1
        words.append(WordInfo(text=text, start_ms=w_start, duration_ms=w_dur))

    if not matched and content:
        # no word timings: the whole line is one word
        words.append(WordInfo(text=content, start_ms=start, duration_ms=duration or 1))

    return LineInfo(words=tuple(words), start_ms=start, end_ms=start + duration)


def parse_yrc_with_stats(text: str, *, log: logging.Logger | None = None) -> tuple[list[LineInfo], YrcParseStats]:
    log = log or logger
    lines: list[LineInfo] = []
    total = 0
    malformed = 0
    empty = 0

    for raw in text.split("\n"):
        line = raw.strip()
        if not line.startswith("[") or is_metadata_line(line):
            continue
        total += 1

        try:
            info = parse_yrc_line(line, log=log)
        except MalformedLineError as e:
            malformed += 1
            log.warning("Skipping YRC line: %s", e)
            continue

        if not info.words:
            empty += 1
            continue
        lines.append(info)

    stats = YrcParseStats(
        lines_total=total,
        lines_parsed=len(lines),
        lines_malformed=malformed,
        lines_empty=empty,
    )
    return lines, stats


def parse_yrc(text: str, *, log: logging.Logger | None = None) -> list[LineInfo]:
    """
    Parse word-synced YRC text. Malformed lines and lines without words are skipped.
    """
    lines, _stats = parse_yrc_with_stats(text, log=log)
    return lines
