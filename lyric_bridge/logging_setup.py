from __future__ import annotations

import logging
import os


def setup_logging(debug: bool) -> None:
    # DEBUG=true also switches on debug output
    debug = debug or os.getenv("DEBUG", "").lower() == "true"
    level = logging.DEBUG if debug else logging.INFO
    level_name = os.getenv("LYRIC_BRIDGE_LOG_LEVEL")
    if level_name:
        level = getattr(logging, level_name.upper(), level)

    logging.basicConfig(
        level=level,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    )
