# hrdesk/errors.py


class HRDeskError(Exception):
    """Base class for every error raised by hrdesk."""


class StorageError(HRDeskError):
    """The storage medium could not read or write a collection."""

    def __init__(self, key: str, message: str):
        self.key = key
        super().__init__(f"{key}: {message}")


class DocumentReadError(HRDeskError):
    """A document file could not be read for upload."""

    def __init__(self, path, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Could not read {path}: {cause}")
