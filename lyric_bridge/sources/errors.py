class UpstreamError(RuntimeError):
    pass


class LyricsNotFound(UpstreamError):
    pass


class SongIndexOutOfRange(UpstreamError):
    pass


class MissingSongKey(ValueError):
    pass
