import logging
from pathlib import Path

from lyric_bridge.config import AppConfig
from lyric_bridge.lyrics.convert import LyricConverter
from lyric_bridge.lyrics.model import LyricSources

LRC = "[ti:Song]\n[ar:Singer]\n[kana:1す]\n[00:01.00]Hi there\n"
YRC = "[ti:Song]\n[1000,2000]Hi(1000,500)there(1600,400)\n"
TRANS = "[00:01.00]你好\n[00:02.00]QQ音乐\n"


def test_convert_all_formats():
    res = LyricConverter().convert(LyricSources(lrc=LRC, yrc=YRC, translation=TRANS))
    assert res.errors == {}
    assert res.lrc == "[ti:Song]\n[ar:Singer]\n[kana:1す]\n[00:01.00]Hi there\n[00:01.00]你好\n"
    assert res.eslrc == (
        "[ti:Song]\n[ar:Singer]\n"
        "[00:01.00]<00:01.00>Hi<00:01.60>there<00:02.00>\n"
        "[00:01.00]你好\n"
    )
    assert 'xml:lang="zh-CN">你好</span>' in res.ttml


def test_lrc_only():
    res = LyricConverter().convert(LyricSources(lrc=LRC))
    assert res.lrc == LRC
    assert res.eslrc is None
    assert res.ttml is None
    assert res.errors == {}


def test_failing_formats_do_not_discard_others(caplog):
    log = logging.getLogger("tests.injected")
    with caplog.at_level(logging.ERROR):
        res = LyricConverter(log=log).convert(LyricSources(lrc=LRC, yrc="[bad]\n"))
    assert res.lrc == LRC
    assert res.ttml is None
    assert res.eslrc is None
    assert set(res.errors) == {"ttml", "eslrc"}
    assert any(r.name == "tests.injected" for r in caplog.records)


def test_config_thresholds_are_used():
    cfg = AppConfig(
        config_dir=Path("/nonexistent"),
        upstream_base_url="http://localhost",
        api_timeout_s=1.0,
        api_max_retries=1,
        api_backoff_base_s=0.0,
        search_limit=5,
        watermarks=("你好",),
        translation_lang="en",
    )
    res = LyricConverter(cfg).convert(LyricSources(yrc=YRC, translation="[00:01.00]你好\n[00:01.20]hello\n"))
    assert 'xml:lang="en">hello</span>' in res.ttml


def test_yrc_parsed_once_for_both_writers(caplog):
    with caplog.at_level(logging.WARNING):
        res = LyricConverter().convert(LyricSources(yrc="[x,1]bad\n" + YRC))
    assert res.ttml and res.eslrc
    assert sum("Invalid YRC line format" in r.getMessage() for r in caplog.records) == 1
