"""Error taxonomy shared by the queue store, the access gate and the web layer."""


class NowPlayingError(Exception):
    """Base class for all application errors."""


class ValidationError(NowPlayingError):
    """A required field is missing or a field value is not allowed."""


class Unauthorized(NowPlayingError):
    """Credential is missing, malformed, expired or has a bad signature."""


class NotFound(NowPlayingError):
    """Operation referenced an unknown song id."""


class StorageError(NowPlayingError):
    """Backing file could not be read, decoded or written."""
