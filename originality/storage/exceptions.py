class StorageError(Exception):
    """Base exception for artifact storage errors."""


class StorageIOError(StorageError):
    """Raised when a directory or file cannot be created, written or read."""


class ArtifactNotFoundError(StorageError):
    """Raised when a stored artifact does not exist at the resolved path."""
