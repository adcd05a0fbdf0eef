from __future__ import annotations

import logging
from dataclasses import dataclass

from lyric_bridge.config import AppConfig
from lyric_bridge.lyrics.convert import LyricConverter
from lyric_bridge.lyrics.model import ConversionResult, LyricSources
from lyric_bridge.lyrics.parse import parse_meta

from .base import LyricsSource
from .errors import LyricsNotFound, SongIndexOutOfRange, UpstreamError
from .tencent import TencentLyricSource
from .types import LyricPayload, SongItem

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class LyricsResponse:
    song: str
    singer: str
    album: str
    result: ConversionResult

    def to_dict(self) -> dict[str, str]:
        # failed or absent outputs become empty strings
        return {
            "song": self.song,
            "singer": self.singer,
            "album": self.album,
            "lrc": self.result.lrc or "",
            "eslrc": self.result.eslrc or "",
            "ttml": self.result.ttml or "",
        }


class LyricsService:
    def __init__(self, cfg: AppConfig, source: LyricsSource | None = None):
        self.cfg = cfg
        self.source = source or TencentLyricSource(
            base_url=cfg.upstream_base_url,
            timeout_s=cfg.api_timeout_s,
            max_retries=cfg.api_max_retries,
            backoff_base_s=cfg.api_backoff_base_s,
        )
        self.converter = LyricConverter(cfg)

    def search(self, word: str, num: int | None = None) -> list[SongItem]:
        return self.source.search(word, num or self.cfg.search_limit)

    def get_by_word(self, word: str, n: int) -> LyricsResponse:
        """Search for `word` and convert the lyrics of the n-th hit (1-based)."""
        songs = self.search(word)
        if n < 1 or len(songs) < n:
            raise SongIndexOutOfRange(f"Search '{word}' found only {len(songs)} songs")

        song = songs[n - 1]
        logger.info("Selected #%d: %s", n, song.display)
        payload = self.source.fetch(mid=song.mid)
        if not payload.ok:
            raise LyricsNotFound(f"No lyrics for {song.display}: {payload.message}")
        return self._respond(song.song, song.singer, song.album, payload)

    def get_by_id(self, *, id: str | None = None, mid: str | None = None) -> LyricsResponse:
        payload = self.source.fetch(id=id, mid=mid)
        if not payload.ok:
            raise UpstreamError(f"Upstream error code {payload.code}: {payload.message}")

        # no search step: recover display strings from the LRC tags
        meta = parse_meta(payload.lrc)
        return self._respond(meta.get("ti", ""), meta.get("ar", ""), meta.get("al", ""), payload)

    def _respond(self, song: str, singer: str, album: str, payload: LyricPayload) -> LyricsResponse:
        result = self.converter.convert(
            LyricSources(
                lrc=payload.lrc,
                yrc=payload.yrc,
                translation=payload.trans,
                romanization=payload.roma,
                song=song,
                singer=singer,
                album=album,
            )
        )
        return LyricsResponse(song=song, singer=singer, album=album, result=result)
