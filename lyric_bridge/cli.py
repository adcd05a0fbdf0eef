from __future__ import annotations

import json
from pathlib import Path
import typer

from lyric_bridge.config import load_config
from lyric_bridge.logging_setup import setup_logging
from lyric_bridge.lyrics.convert import LyricConverter
from lyric_bridge.lyrics.model import LyricSources
from lyric_bridge.lyrics.parse import parse_lrc_timeline, parse_meta, parse_yrc_with_stats
from lyric_bridge.sources.errors import MissingSongKey, UpstreamError
from lyric_bridge.sources.service import LyricsResponse, LyricsService


app = typer.Typer(no_args_is_help=True, add_completion=False)

FORMATS = ("lrc", "eslrc", "ttml", "json")


def _read(path: Path | None) -> str:
    return path.read_text(encoding="utf-8") if path else ""


def _emit(data: str, out: Path | None) -> None:
    if out:
        out.write_text(data, encoding="utf-8")
    else:
        typer.echo(data, nl=False)


def _render(resp: LyricsResponse, fmt: str) -> str:
    fmt_l = fmt.lower()
    if fmt_l not in FORMATS:
        raise typer.BadParameter("format must be one of: " + ", ".join(FORMATS))
    if fmt_l == "json":
        return json.dumps(resp.to_dict(), ensure_ascii=False, indent=2) + "\n"
    text = getattr(resp.result, fmt_l)
    if text is None:
        reason = resp.result.errors.get(fmt_l, "no input for this format")
        typer.echo(f"Error: {fmt_l} unavailable: {reason}", err=True)
        raise typer.Exit(code=1)
    return text


@app.command()
def convert(
    lrc: Path | None = typer.Option(None, "--lrc", help="Line-synced LRC file"),
    yrc: Path | None = typer.Option(None, "--yrc", help="Word-synced YRC file"),
    trans: Path | None = typer.Option(None, "--trans", help="Translation LRC file"),
    roma: Path | None = typer.Option(None, "--roma", help="Romanization YRC file"),
    fmt: str = typer.Option("ttml", "--format", case_sensitive=False, help="lrc|eslrc|ttml|json"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Convert local LRC/YRC files to merged LRC, enhanced LRC or TTML."""
    setup_logging(debug)
    cfg = load_config()
    src = LyricSources(lrc=_read(lrc), yrc=_read(yrc), translation=_read(trans), romanization=_read(roma))
    meta = parse_meta(src.lrc)
    result = LyricConverter(cfg).convert(src)
    resp = LyricsResponse(song=meta.get("ti", ""), singer=meta.get("ar", ""), album=meta.get("al", ""), result=result)
    _emit(_render(resp, fmt), out)


@app.command()
def parse(
    path: Path,
    kind: str = typer.Option("yrc", "--kind", case_sensitive=False, help="yrc|lrc"),
):
    """Parse a YRC or LRC file and print stats."""
    text = path.read_text(encoding="utf-8")
    if kind.lower() == "yrc":
        lines, stats = parse_yrc_with_stats(text)
        typer.echo(f"lines_total={stats.lines_total}")
        typer.echo(f"lines_parsed={stats.lines_parsed}")
        typer.echo(f"lines_malformed={stats.lines_malformed}")
        typer.echo(f"lines_empty={stats.lines_empty}")
        typer.echo(f"words_total={sum(len(ln.words) for ln in lines)}")
    elif kind.lower() == "lrc":
        cfg = load_config()
        timeline = parse_lrc_timeline(text, watermarks=cfg.watermarks)
        typer.echo(f"timed_lines={len(timeline)}")
        typer.echo(f"tags={parse_meta(text)}")
    else:
        raise typer.BadParameter("kind must be one of: yrc, lrc")


@app.command()
def search(
    word: str,
    limit: int | None = typer.Option(None, "--limit", "-n", help="Maximum results to show"),
    json_output: bool = typer.Option(False, "--json", help="Output as JSON"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Search upstream songs. Use the printed number with `fetch --word ... -n`."""
    setup_logging(debug)
    service = LyricsService(load_config())
    try:
        results = service.search(word, num=limit)
    except UpstreamError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    if not results:
        typer.echo("No results found")
        return

    if json_output:
        typer.echo(
            json.dumps(
                [
                    {"n": r.n, "song": r.song, "singer": r.singer, "id": r.id, "mid": r.mid, "album": r.album}
                    for r in results
                ],
                indent=2,
                ensure_ascii=False,
            )
        )
    else:
        for r in results:
            typer.echo(f"{r.n}. {r.display}")
            if r.album:
                typer.echo(f"   Album: {r.album}")
            typer.echo(f"   ID: {r.id}  MID: {r.mid}")


@app.command()
def fetch(
    song_id: str | None = typer.Option(None, "--id", help="Upstream numeric song id"),
    mid: str | None = typer.Option(None, "--mid", help="Upstream song mid"),
    word: str | None = typer.Option(None, "--word", "-w", help="Search keyword"),
    n: int = typer.Option(1, "-n", help="Pick the n-th search result (1-based)"),
    fmt: str = typer.Option("json", "--format", case_sensitive=False, help="lrc|eslrc|ttml|json"),
    out: Path | None = typer.Option(None, "--out", help="Output file (default: stdout)"),
    debug: bool = typer.Option(False, "--debug", help="Enable debug logging"),
):
    """Fetch lyrics from upstream (by id/mid or keyword) and convert them."""
    setup_logging(debug)
    service = LyricsService(load_config())
    try:
        if word:
            resp = service.get_by_word(word, n)
        else:
            resp = service.get_by_id(id=song_id, mid=mid)
    except MissingSongKey:
        typer.echo("Error: provide --id, --mid or --word", err=True)
        raise typer.Exit(code=2)
    except UpstreamError as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    _emit(_render(resp, fmt), out)


def main() -> None:
    app()


if __name__ == "__main__":
    main()
