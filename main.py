"""
Compatibility entrypoint.

Prefer running:
  - `lyric-bridge convert --yrc song.yrc --format ttml`
or:
  - `python -m lyric_bridge`
"""

from lyric_bridge.cli import main as cli_main


def cli() -> None:
    cli_main()


if __name__ == "__main__":
    cli()
