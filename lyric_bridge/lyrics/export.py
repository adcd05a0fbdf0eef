from __future__ import annotations

from typing import Iterable, Mapping, Sequence
from xml.sax.saxutils import escape, quoteattr

from .align import (
    DURATION_PAD_MS,
    PARAGRAPH_GAP_MS,
    ROMAJI_MAX_DRIFT_MS,
    TRANSLATION_MAX_DRIFT_MS,
    estimate_duration,
    find_closest_line,
    group_into_divs,
    match_romaji_line,
)
from .buffers import TextBufferPool, default_pool
from .errors import NoTimedLinesError
from .model import LineInfo, MetaLine
from .parse import DEFAULT_WATERMARKS, is_metadata_line, lrc_line_time, parse_lrc_timeline
from .timecodec import ms_to_enhanced_time, ms_to_lrc_time, ms_to_ttml_time

TTML_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<tt xmlns="http://www.w3.org/ns/ttml" xmlns:ttm="http://www.w3.org/ns/ttml#metadata"'
    ' xmlns:itunes="http://music.apple.com/lyric-ttml-internal" itunes:timing="Word">\n'
    "    <head>\n"
    "        <metadata>\n"
    '            <ttm:agent type="person" xml:id="v1"/>\n'
    "        </metadata>\n"
    "    </head>\n"
)


def merge_lrc_with_translation(
    lrc: str,
    translation: str,
    *,
    watermarks: Iterable[str] = DEFAULT_WATERMARKS,
    max_drift_ms: int = TRANSLATION_MAX_DRIFT_MS,
    pool: TextBufferPool = default_pool,
) -> str:
    """
    Interleave translation lines under the original LRC lines.

    Without a translation the original text is returned untouched.
    """
    if not translation.strip():
        return lrc

    translations = parse_lrc_timeline(translation, watermarks=watermarks)
    with pool.acquire() as buf:
        for raw in lrc.split("\n"):
            line = raw.strip()
            if not line:
                continue
            buf.write(line + "\n")

            if is_metadata_line(line):
                continue
            t_ms = lrc_line_time(line)
            if t_ms is None:
                continue
            text = find_closest_line(t_ms, translations, max_drift_ms)
            if text:
                buf.write(f"{ms_to_lrc_time(t_ms)}{text}\n")
        return buf.getvalue()


def export_enhanced_lrc(
    lines: Sequence[LineInfo],
    meta: Mapping[str, str],
    translations: Sequence[MetaLine] = (),
    *,
    max_drift_ms: int = TRANSLATION_MAX_DRIFT_MS,
    pool: TextBufferPool = default_pool,
) -> str:
    """
    [mm:ss.xx]<mm:ss.xx>word<mm:ss.xx>word...<end> per line, optionally followed
    by the translation under the same line timestamp.
    """
    if not lines:
        raise NoTimedLinesError("No usable timed lines for enhanced LRC")

    with pool.acquire() as buf:
        for k, v in meta.items():
            if k != "kana":
                buf.write(f"[{k}:{v}]\n")

        for line in lines:
            stamp = ms_to_lrc_time(line.start_ms)
            buf.write(stamp)
            for word in line.words:
                buf.write(ms_to_enhanced_time(word.start_ms))
                buf.write(word.text)
            buf.write(ms_to_enhanced_time(line.content_end_ms))
            buf.write("\n")

            if translations:
                text = find_closest_line(line.start_ms, translations, max_drift_ms)
                if text:
                    buf.write(f"{stamp}{text}\n")
        return buf.getvalue()


def _romaji_text(line: LineInfo) -> str:
    return "".join(w.text for w in line.words if w.text.strip()).strip()


def export_ttml(
    lines: Sequence[LineInfo],
    translations: Sequence[MetaLine] = (),
    romaji: Sequence[LineInfo] = (),
    *,
    translation_lang: str = "zh-CN",
    paragraph_gap_ms: int = PARAGRAPH_GAP_MS,
    translation_max_drift_ms: int = TRANSLATION_MAX_DRIFT_MS,
    romaji_max_drift_ms: int = ROMAJI_MAX_DRIFT_MS,
    duration_pad_ms: int = DURATION_PAD_MS,
    pool: TextBufferPool = default_pool,
) -> str:
    if not lines:
        raise NoTimedLinesError("No usable timed lines for TTML")

    divs = group_into_divs(lines, paragraph_gap_ms)
    dur = ms_to_ttml_time(estimate_duration(lines, duration_pad_ms))
    lang_attr = quoteattr(translation_lang)

    with pool.acquire() as buf:
        buf.write(TTML_HEADER)
        buf.write(f'    <body dur="{dur}">\n')

        key = 1
        for i, div in enumerate(divs):
            buf.write(f'        <div begin="{ms_to_ttml_time(div.start_ms)}" end="{ms_to_ttml_time(div.end_ms)}">\n')
            for line in div.lines:
                buf.write(
                    f'            <p begin="{ms_to_ttml_time(line.start_ms)}" end="{ms_to_ttml_time(line.content_end_ms)}"'
                    f' ttm:agent="v1" itunes:key="L{key}">\n'
                )
                for word in line.words:
                    buf.write(
                        f'                <span begin="{ms_to_ttml_time(word.start_ms)}"'
                        f' end="{ms_to_ttml_time(word.end_ms)}">{escape(word.text)}</span>\n'
                    )

                trans = find_closest_line(line.start_ms, translations, translation_max_drift_ms)
                if trans:
                    buf.write(f'                <span ttm:role="x-translation" xml:lang={lang_attr}>{escape(trans)}</span>\n')

                roma_line = match_romaji_line(line.start_ms, romaji, romaji_max_drift_ms)
                if roma_line is not None:
                    roma = _romaji_text(roma_line)
                    if roma:
                        buf.write(f'                <span ttm:role="x-roman">{escape(roma)}</span>\n')

                buf.write("            </p>\n")
                key += 1

            buf.write("        </div>\n")
            if i < len(divs) - 1:
                buf.write("\n")

        buf.write("    </body>\n</tt>\n")
        return buf.getvalue()
