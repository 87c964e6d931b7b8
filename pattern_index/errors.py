class PatternIndexError(Exception):
    """Base class for pattern index build failures."""


class MissingDirectoryError(PatternIndexError, FileNotFoundError):
    """Raised when the configured source directory does not exist."""

    def __init__(self, path):
        self.path = path
        super().__init__(f"Pattern source directory not found: {path}")
