"""
Exception types for microchess.
"""


class MicrochessError(Exception):
    """Base class for all microchess errors."""
    pass


class ConfigError(MicrochessError):
    """Raised when a required setting or credential is missing."""
    pass


class StoreReadError(MicrochessError):
    """Raised when the persisted store is missing, unparseable or has the wrong shape."""
    pass


class PersistError(MicrochessError):
    """Raised when the store could not be written after all retry attempts."""
    pass


class PathSecurityError(MicrochessError):
    """Raised when a requested path escapes the permitted base directory."""
    pass


class EntryLookupError(MicrochessError):
    """Raised when a stored entry cannot be selected by index."""
    pass


class UploadError(MicrochessError):
    """Raised when the bin-storage endpoint rejects or fails an upload."""
    pass
