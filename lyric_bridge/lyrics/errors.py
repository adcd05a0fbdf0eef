class LyricsConversionError(ValueError):
    pass


class MalformedLineError(LyricsConversionError):
    pass


class NoTimedLinesError(LyricsConversionError):
    pass
