import pytest

from lyric_bridge.lyrics.errors import NoTimedLinesError
from lyric_bridge.lyrics.export import export_enhanced_lrc, export_ttml, merge_lrc_with_translation
from lyric_bridge.lyrics.model import MetaLine
from lyric_bridge.lyrics.parse import parse_yrc

YRC = "[1000,2000]Hi(1000,500)there(1600,400)"


def test_enhanced_lrc_single_line():
    out = export_enhanced_lrc(parse_yrc(YRC), {})
    assert out == "[00:01.00]<00:01.00>Hi<00:01.60>there<00:02.00>\n"


def test_enhanced_lrc_meta_and_translation():
    meta = {"ti": "Song", "kana": "1そんぐ", "ar": "A"}
    out = export_enhanced_lrc(parse_yrc(YRC), meta, [MetaLine(1100, "你好")])
    assert out.splitlines() == [
        "[ti:Song]",
        "[ar:A]",
        "[00:01.00]<00:01.00>Hi<00:01.60>there<00:02.00>",
        "[00:01.00]你好",
    ]


def test_enhanced_lrc_without_lines_fails():
    with pytest.raises(NoTimedLinesError):
        export_enhanced_lrc([], {"ti": "x"})


def test_ttml_single_line():
    out = export_ttml(parse_yrc(YRC))
    assert out.startswith('<?xml version="1.0" encoding="UTF-8"?>\n<tt ')
    assert '<body dur="00:03.000">' in out
    assert '<div begin="00:01.000" end="00:02.000">' in out
    assert '<p begin="00:01.000" end="00:02.000" ttm:agent="v1" itunes:key="L1">' in out
    assert '<span begin="00:01.000" end="00:01.500">Hi</span>' in out
    assert '<span begin="00:01.600" end="00:02.000">there</span>' in out
    assert out.count("<span ") == 2
    assert out.endswith("    </body>\n</tt>\n")


def test_ttml_line_keys_run_across_paragraphs():
    yrc = "[0,500]a(0,500)\n[400,500]b(400,500)\n[10000,500]c(10000,500)\n"
    out = export_ttml(parse_yrc(yrc))
    assert out.count("<div ") == 2
    assert "</div>\n\n        <div " in out
    for key in ("L1", "L2", "L3"):
        assert f'itunes:key="{key}"' in out


def test_ttml_translation_and_romaji_overlays():
    roma = parse_yrc("[1050,500]ha(1050,200) (1250,0)ro(1300,100)\n[1000,500]no(1000,500)")
    out = export_ttml(parse_yrc(YRC), [MetaLine(1400, "你好")], roma, translation_lang="zh-Hans")
    assert '<span ttm:role="x-translation" xml:lang="zh-Hans">你好</span>' in out
    assert '<span ttm:role="x-roman">haro</span>' in out


def test_ttml_blank_romaji_is_omitted_and_text_escaped():
    roma = parse_yrc("[1000,500]  (1000,100)")
    out = export_ttml(parse_yrc("[1000,2000]R&B(1000,800)<3(1900,100)"), romaji=roma)
    assert "x-roman" not in out
    assert ">R&amp;B</span>" in out
    assert ">&lt;3</span>" in out


def test_ttml_without_lines_fails():
    with pytest.raises(NoTimedLinesError):
        export_ttml(parse_yrc("[bad]\n"))


def test_merge_passthrough_without_translation():
    lrc = "[ti:x]\r\n[00:01.00]a\n\n"
    assert merge_lrc_with_translation(lrc, "") == lrc
    assert merge_lrc_with_translation(lrc, "  \n") == lrc


def test_merge_interleaves_translation():
    lrc = "[ti:Song]\n[00:01.00]hello\n\n[00:03.50]world\ngarbage\n"
    trans = "[00:01.10]你好\n[00:09.00]远\n"
    assert merge_lrc_with_translation(lrc, trans) == (
        "[ti:Song]\n[00:01.00]hello\n[00:01.00]你好\n[00:03.50]world\ngarbage\n"
    )


def test_merge_reencodes_label_at_centiseconds():
    out = merge_lrc_with_translation("[00:01.005]x", "[00:01.00]y")
    assert out == "[00:01.005]x\n[00:01.00]y\n"


def test_merge_keeps_form_feed_inside_line():
    out = merge_lrc_with_translation("[00:01.00]a\x0cb\n", "[00:01.00]y\n")
    assert out == "[00:01.00]a\x0cb\n[00:01.00]y\n"
