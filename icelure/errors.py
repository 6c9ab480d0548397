"""Exception types for Ice Lure Notes."""

from typing import Optional


class IceLureError(Exception):
    """Base class for all application errors."""


class EntryValidationError(IceLureError):
    """Raised when raw user input cannot become an Entry."""

    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class PersistenceError(IceLureError):
    """A failed read, write or decode against the key-value store.

    The entry store never raises these. They are reported through its
    error channel instead.
    """

    def __init__(self, operation: str, key: Optional[str], message: str):
        self.operation = operation
        self.key = key
        self.message = message
        target = f" '{key}'" if key else ""
        super().__init__(f"{operation}{target} failed: {message}")


class ConfigError(IceLureError):
    """Raised when the configuration file is malformed."""
