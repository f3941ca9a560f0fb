"""favicache specific exceptions."""


class CacheAdapterError(Exception):
    """Exception raised when a cache adapter operation fails."""

    pass


class CacheEntryError(ValueError):
    """Exception raised for cache entries that can't be deserialized."""

    pass


class InvalidBackendError(Exception):
    """Raised when an unknown store backend is configured."""

    pass
