from __future__ import annotations

import pytest

from lyric_bridge.config import DEFAULT_UPSTREAM_BASE_URL, load_config
from lyric_bridge.lyrics.parse import DEFAULT_WATERMARKS


@pytest.fixture(autouse=True)
def _clean_env(tmp_path, monkeypatch):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    for name in ("LYRIC_BRIDGE_WATERMARKS", "LYRIC_BRIDGE_UPSTREAM_URL", "LYRIC_BRIDGE_PARAGRAPH_GAP_MS"):
        monkeypatch.delenv(name, raising=False)


class TestLoadConfig:
    """Test env driven settings and watermark priority."""

    def test_defaults(self, tmp_path):
        cfg = load_config()
        assert cfg.upstream_base_url == DEFAULT_UPSTREAM_BASE_URL
        assert cfg.watermarks == DEFAULT_WATERMARKS
        assert cfg.paragraph_gap_ms == 1000
        assert cfg.translation_max_drift_ms == 500
        assert cfg.romaji_max_drift_ms == 100
        assert cfg.config_dir == tmp_path / "lyric-bridge"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("LYRIC_BRIDGE_UPSTREAM_URL", "http://localhost:9000/api/")
        monkeypatch.setenv("LYRIC_BRIDGE_WATERMARKS", "foo, bar ,,")
        monkeypatch.setenv("LYRIC_BRIDGE_PARAGRAPH_GAP_MS", "1500")
        cfg = load_config()
        assert cfg.upstream_base_url == "http://localhost:9000/api"
        assert cfg.watermarks == ("foo", "bar")
        assert cfg.paragraph_gap_ms == 1500

    def test_config_file_beats_env(self, tmp_path, monkeypatch):
        (tmp_path / "lyric-bridge").mkdir()
        (tmp_path / "lyric-bridge" / "config.json").write_text('{"watermarks": ["credit", ""]}', encoding="utf-8")
        monkeypatch.setenv("LYRIC_BRIDGE_WATERMARKS", "foo")
        assert load_config().watermarks == ("credit",)

    def test_broken_config_file_falls_back(self, tmp_path):
        (tmp_path / "lyric-bridge").mkdir()
        (tmp_path / "lyric-bridge" / "config.json").write_text("{not json", encoding="utf-8")
        assert load_config().watermarks == DEFAULT_WATERMARKS

    def test_non_object_config_file_falls_back(self, tmp_path, caplog):
        (tmp_path / "lyric-bridge").mkdir()
        (tmp_path / "lyric-bridge" / "config.json").write_text('["credit"]', encoding="utf-8")
        with caplog.at_level("WARNING"):
            assert load_config().watermarks == DEFAULT_WATERMARKS
        assert "Ignoring unreadable config" in caplog.text
