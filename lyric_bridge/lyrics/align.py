from __future__ import annotations

from typing import Sequence

from .model import DivInfo, LineInfo, MetaLine

TRANSLATION_MAX_DRIFT_MS = 500
ROMAJI_MAX_DRIFT_MS = 100
PARAGRAPH_GAP_MS = 1000
DURATION_PAD_MS = 1000


def find_closest_line(t_ms: int, lines: Sequence[MetaLine], max_drift_ms: int = TRANSLATION_MAX_DRIFT_MS) -> str:
    """
    Text of the entry nearest to t_ms, or "" if nothing is closer than max_drift_ms.

    Linear scan: callers may pass unsorted sequences. Ties keep the earliest entry.
    """
    best: MetaLine | None = None
    min_diff = max_drift_ms
    for line in lines:
        diff = abs(line.time_ms - t_ms)
        if diff < min_diff:
            min_diff = diff
            best = line
    return best.text if best is not None else ""


def match_romaji_line(t_ms: int, lines: Sequence[LineInfo], max_drift_ms: int = ROMAJI_MAX_DRIFT_MS) -> LineInfo | None:
    # first line in range wins, even when a later one is closer
    for line in lines:
        if abs(line.start_ms - t_ms) <= max_drift_ms:
            return line
    return None


def group_into_divs(lines: Sequence[LineInfo], max_gap_ms: int = PARAGRAPH_GAP_MS) -> list[DivInfo]:
    """
    Split lines into paragraphs wherever the silence between two lines exceeds max_gap_ms.
    """
    if not lines:
        return []

    divs: list[DivInfo] = []
    current: list[LineInfo] = [lines[0]]
    for prev, line in zip(lines, lines[1:]):
        gap = line.start_ms - prev.content_end_ms
        if gap > max_gap_ms:
            divs.append(_close_div(current))
            current = [line]
        else:
            current.append(line)
    divs.append(_close_div(current))
    return divs


def _close_div(lines: list[LineInfo]) -> DivInfo:
    return DivInfo(start_ms=lines[0].start_ms, end_ms=lines[-1].content_end_ms, lines=tuple(lines))


def estimate_duration(lines: Sequence[LineInfo], pad_ms: int = DURATION_PAD_MS) -> int:
    if not lines:
        return 0
    return max(line.content_end_ms for line in lines) + pad_ms
