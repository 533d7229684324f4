"""
Storage exceptions.
"""


class StorageError(Exception):
    """Raised when the underlying key-value store fails."""


class SerializationError(StorageError):
    """Raised when a stored blob cannot be encoded or decoded."""
