from __future__ import annotations

import logging
import time
from typing import Any

import requests

from .base import LyricsSource
from .errors import MissingSongKey, UpstreamError
from .types import LyricPayload, SongItem

logger = logging.getLogger(__name__)


class TencentLyricSource(LyricsSource):
    """
    Client for the vkeys Tencent music mirror:
      GET {base}?word=..&num=..      -> song search
      GET {base}/lyric?id=.. | mid=.. -> lrc / trans / yrc / roma
    """

    name = "tencent"

    def __init__(self, *, base_url: str, timeout_s: float, max_retries: int, backoff_base_s: float):
        self.base_url = base_url.rstrip("/")
        self.timeout_s = timeout_s
        self.max_retries = max(max_retries, 1)
        self.backoff_base_s = backoff_base_s

    def _get_json(self, url: str, params: dict[str, Any]) -> dict[str, Any]:
        for attempt in range(1, self.max_retries + 1):
            try:
                r = requests.get(url, params=params, timeout=self.timeout_s)
                r.raise_for_status()
            except requests.RequestException as e:
                logger.warning("%s error (attempt %s/%s): %s", self.name, attempt, self.max_retries, e)
                if attempt == self.max_retries:
                    raise UpstreamError(f"Upstream request failed: {e}") from e
                time.sleep(self.backoff_base_s * attempt)
                continue

            # a malformed body is not retried
            try:
                return r.json()
            except ValueError as e:
                raise UpstreamError(f"Upstream returned invalid JSON: {e}") from e
        raise UpstreamError("Upstream request failed")

    def search(self, word: str, num: int = 10) -> list[SongItem]:
        logger.info("Searching songs: %s (num=%d)", word, num)
        data = self._get_json(self.base_url, {"word": word, "num": num})
        if data.get("code") != 200:
            raise UpstreamError(f"Search API error: {data.get('message', '')}")

        out: list[SongItem] = []
        for i, item in enumerate(data.get("data") or [], start=1):
            out.append(
                SongItem(
                    n=i,
                    song=item.get("song", ""),
                    singer=item.get("singer", ""),
                    id=int(item.get("id") or 0),
                    mid=item.get("mid", ""),
                    album=item.get("album", ""),
                )
            )
        return out

    def fetch(self, *, id: str | None = None, mid: str | None = None) -> LyricPayload:
        if id:
            params = {"id": id}
        elif mid:
            params = {"mid": mid}
        else:
            raise MissingSongKey("Either id or mid is required")

        data = self._get_json(f"{self.base_url}/lyric", params)
        body = data.get("data") or {}
        return LyricPayload(
            code=int(data.get("code") or 0),
            message=str(data.get("message") or ""),
            lrc=body.get("lrc") or "",
            trans=body.get("trans") or "",
            yrc=body.get("yrc") or "",
            roma=body.get("roma") or "",
        )
