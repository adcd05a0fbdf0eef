from __future__ import annotations

from .convert import LyricConverter
from .model import ConversionResult, LyricSources

__all__ = ["ConversionResult", "LyricConverter", "LyricSources"]
