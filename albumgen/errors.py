"""
Exceptions raised by the album pipeline.
"""


class AlbumError(Exception):
    """Base class for album pipeline errors."""
    pass


class RootUnreadableError(AlbumError):
    """Raised when the album root directory cannot be listed."""

    def __init__(self, root: str, reason: str = ''):
        self.root = root
        self.reason = reason
        message = f"Root directory could not be read: {root}"
        if reason:
            message = f"{message} ({reason})"
        super().__init__(message)


class PipelineInvariantError(AlbumError):
    """Raised when completion accounting is violated (a programming error)."""
    pass
