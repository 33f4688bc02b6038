"""Errors raised by the shared storage layer."""


class StorageError(Exception):
    """Base class for shared storage failures."""


class SnapshotDecodeError(StorageError):
    """The persisted snapshot could not be decoded into categories."""


class SnapshotEncodeError(StorageError):
    """The category list could not be serialized."""


class StorageUnavailableError(StorageError):
    """The shared storage region could not be opened or written."""
