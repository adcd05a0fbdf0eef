from __future__ import annotations


def parse_fraction_ms(frac: str) -> int:
    # "12" -> 120ms (centiseconds), "123" -> 123ms
    value = int(frac)
    if len(frac) == 2:
        value *= 10
    return value


def lrc_time_to_ms(mm: str, ss: str, frac: str) -> int:
    return (int(mm) * 60 + int(ss)) * 1000 + parse_fraction_ms(frac)


def _split_centis(ms: int) -> tuple[int, int, int]:
    ms = max(ms, 0)
    m, rem = divmod(ms, 60_000)
    s, ms2 = divmod(rem, 1_000)
    return m, s, ms2 // 10


def ms_to_lrc_time(ms: int) -> str:
    m, s, cs = _split_centis(ms)
    return f"[{m:02d}:{s:02d}.{cs:02d}]"


def ms_to_enhanced_time(ms: int) -> str:
    m, s, cs = _split_centis(ms)
    return f"<{m:02d}:{s:02d}.{cs:02d}>"


def ms_to_ttml_time(ms: int) -> str:
    # mm:ss.mmm, or hh:mm:ss.mmm past the first hour
    ms = max(ms, 0)
    h, rem = divmod(ms, 3_600_000)
    m, rem = divmod(rem, 60_000)
    s, ms2 = divmod(rem, 1_000)
    if h > 0:
        return f"{h:02d}:{m:02d}:{s:02d}.{ms2:03d}"
    return f"{m:02d}:{s:02d}.{ms2:03d}"
