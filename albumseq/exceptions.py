"""Custom exceptions for albumseq."""


class AlbumseqError(Exception):
    """Base class for all albumseq errors."""

    pass


class ConfigurationError(AlbumseqError, ValueError):
    """Raised when engine inputs violate their preconditions."""

    pass


class ParseError(AlbumseqError, ValueError):
    """Raised when user supplied text cannot be parsed."""

    pass


class DurationParseError(ParseError):
    """Raised when a duration is neither MM:SS nor decimal minutes."""

    pass


class ConstraintParseError(ParseError):
    """Raised when a constraint kind or its arguments are invalid."""

    pass


class TooManyTracksError(AlbumseqError):
    """Raised when a tracklist is too large to enumerate exhaustively."""

    def __init__(self, track_count: int, max_tracks: int):
        self.track_count = track_count
        self.max_tracks = max_tracks
        super().__init__(
            f"{track_count} tracks exceed the limit of {max_tracks} "
            f"({track_count}! orderings would be evaluated)"
        )


class ContextError(AlbumseqError):
    """Raised when the context file cannot be read, parsed or written."""

    pass


class NotFoundError(AlbumseqError, LookupError):
    """Raised when a named tracklist, medium or constraint does not exist."""

    pass
