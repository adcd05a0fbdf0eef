from __future__ import annotations

import json
from dataclasses import dataclass
import logging
import os
from pathlib import Path

from lyric_bridge.lyrics.parse import DEFAULT_WATERMARKS

logger = logging.getLogger(__name__)

DEFAULT_UPSTREAM_BASE_URL = "https://api.vkeys.cn/v2/music/tencent"


def _config_dir() -> Path:
    xdg = os.getenv("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / "lyric-bridge"
    return Path.home() / ".config" / "lyric-bridge"


@dataclass(frozen=True)
class AppConfig:
    config_dir: Path

    # Upstream
    upstream_base_url: str
    api_timeout_s: float
    api_max_retries: int
    api_backoff_base_s: float
    search_limit: int

    # Conversion
    watermarks: tuple[str, ...]
    paragraph_gap_ms: int = 1000
    translation_max_drift_ms: int = 500
    romaji_max_drift_ms: int = 100
    duration_pad_ms: int = 1000
    translation_lang: str = "zh-CN"


def load_config() -> AppConfig:
    config_dir = _config_dir()
    return AppConfig(
        config_dir=config_dir,
        upstream_base_url=os.getenv("LYRIC_BRIDGE_UPSTREAM_URL", DEFAULT_UPSTREAM_BASE_URL).rstrip("/"),
        api_timeout_s=float(os.getenv("LYRIC_BRIDGE_API_TIMEOUT", "10.0")),
        api_max_retries=int(os.getenv("LYRIC_BRIDGE_API_MAX_RETRIES", "2")),
        api_backoff_base_s=float(os.getenv("LYRIC_BRIDGE_API_BACKOFF_BASE", "0.5")),
        search_limit=int(os.getenv("LYRIC_BRIDGE_SEARCH_LIMIT", "10")),
        watermarks=_load_watermarks(config_dir),
        paragraph_gap_ms=int(os.getenv("LYRIC_BRIDGE_PARAGRAPH_GAP_MS", "1000")),
        translation_max_drift_ms=int(os.getenv("LYRIC_BRIDGE_TRANSLATION_DRIFT_MS", "500")),
        romaji_max_drift_ms=int(os.getenv("LYRIC_BRIDGE_ROMAJI_DRIFT_MS", "100")),
        duration_pad_ms=int(os.getenv("LYRIC_BRIDGE_DURATION_PAD_MS", "1000")),
        translation_lang=os.getenv("LYRIC_BRIDGE_TRANSLATION_LANG", "zh-CN"),
    )


def _load_watermarks(config_dir: Path) -> tuple[str, ...]:
    # Priority: config.json → LYRIC_BRIDGE_WATERMARKS (comma separated) → defaults
    cfg_path = config_dir / "config.json"
    if cfg_path.exists():
        try:
            data = json.loads(cfg_path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            logger.warning("Ignoring unreadable config %s: %s", cfg_path, e)
        else:
            if not isinstance(data, dict):
                logger.warning("Ignoring unreadable config %s: expected a JSON object", cfg_path)
            elif isinstance(data.get("watermarks"), list):
                return tuple(str(m) for m in data["watermarks"] if str(m).strip())
    env_marks = os.getenv("LYRIC_BRIDGE_WATERMARKS")
    if env_marks is not None:
        return tuple(m.strip() for m in env_marks.split(",") if m.strip())
    return DEFAULT_WATERMARKS
