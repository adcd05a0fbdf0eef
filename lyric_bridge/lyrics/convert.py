from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Callable, Sequence

from .align import DURATION_PAD_MS, PARAGRAPH_GAP_MS, ROMAJI_MAX_DRIFT_MS, TRANSLATION_MAX_DRIFT_MS
from .buffers import TextBufferPool, default_pool
from .errors import LyricsConversionError
from .export import export_enhanced_lrc, export_ttml, merge_lrc_with_translation
from .model import ConversionResult, LineInfo, LyricSources, MetaLine
from .parse import DEFAULT_WATERMARKS, parse_lrc_timeline, parse_meta, parse_yrc

if TYPE_CHECKING:
    from lyric_bridge.config import AppConfig

logger = logging.getLogger(__name__)


class LyricConverter:
    """
    Raw upstream text -> merged LRC, enhanced LRC and TTML.

    Each output is produced independently: a failing format is logged and
    reported in ConversionResult.errors while the others are still returned.
    """

    def __init__(
        self,
        cfg: AppConfig | None = None,
        *,
        log: logging.Logger | None = None,
        pool: TextBufferPool = default_pool,
    ):
        self.log = log or logger
        self.pool = pool
        self.watermarks = cfg.watermarks if cfg else DEFAULT_WATERMARKS
        self.paragraph_gap_ms = cfg.paragraph_gap_ms if cfg else PARAGRAPH_GAP_MS
        self.translation_max_drift_ms = cfg.translation_max_drift_ms if cfg else TRANSLATION_MAX_DRIFT_MS
        self.romaji_max_drift_ms = cfg.romaji_max_drift_ms if cfg else ROMAJI_MAX_DRIFT_MS
        self.duration_pad_ms = cfg.duration_pad_ms if cfg else DURATION_PAD_MS
        self.translation_lang = cfg.translation_lang if cfg else "zh-CN"

    def convert(self, src: LyricSources) -> ConversionResult:
        errors: dict[str, str] = {}

        lrc: str | None = None
        if src.lrc:
            lrc = self._attempt("lrc", errors, lambda: self.merged_lrc(src))

        eslrc: str | None = None
        ttml: str | None = None
        if src.yrc:
            # parsed once, shared by both word-level writers
            lines = parse_yrc(src.yrc, log=self.log)
            translations = parse_lrc_timeline(src.translation, watermarks=self.watermarks)
            self.log.debug("Parsed %d main lines, %d translation lines", len(lines), len(translations))
            ttml = self._attempt(
                "ttml",
                errors,
                lambda: self.ttml(lines, translations, parse_yrc(src.romanization, log=self.log)),
            )
            eslrc = self._attempt("eslrc", errors, lambda: self.enhanced_lrc(lines, parse_meta(src.lrc), translations))

        return ConversionResult(lrc=lrc, eslrc=eslrc, ttml=ttml, errors=errors)

    def _attempt(self, name: str, errors: dict[str, str], fn: Callable[[], str]) -> str | None:
        try:
            return fn()
        except LyricsConversionError as e:
            self.log.error("%s conversion failed: %s", name, e)
            errors[name] = str(e)
            return None

    def merged_lrc(self, src: LyricSources) -> str:
        return merge_lrc_with_translation(
            src.lrc,
            src.translation,
            watermarks=self.watermarks,
            max_drift_ms=self.translation_max_drift_ms,
            pool=self.pool,
        )

    def enhanced_lrc(self, lines: Sequence[LineInfo], meta: dict[str, str], translations: Sequence[MetaLine]) -> str:
        return export_enhanced_lrc(
            lines,
            meta,
            translations,
            max_drift_ms=self.translation_max_drift_ms,
            pool=self.pool,
        )

    def ttml(self, lines: Sequence[LineInfo], translations: Sequence[MetaLine], romaji: Sequence[LineInfo]) -> str:
        return export_ttml(
            lines,
            translations,
            romaji,
            translation_lang=self.translation_lang,
            paragraph_gap_ms=self.paragraph_gap_ms,
            translation_max_drift_ms=self.translation_max_drift_ms,
            romaji_max_drift_ms=self.romaji_max_drift_ms,
            duration_pad_ms=self.duration_pad_ms,
            pool=self.pool,
        )
