"""Error taxonomy for the archive core."""


class ArchiveError(Exception):
    """Base class for archive errors."""


class MalformedEncodingError(ArchiveError, ValueError):
    """Payload text is not valid base64."""


class ParseError(ArchiveError, ValueError):
    """Export document text could not be parsed."""


class PreconditionError(ArchiveError, ValueError):
    """An argument violates an operation's precondition."""
