"""Protocol for store adapters."""

from typing import Protocol


class StoreAdapter(Protocol):
    """A protocol describing a durable key/value slot."""

    def get(self, key: str) -> bytes | None:  # pragma: no cover
        """Get the value associated with the key. Returns `None` if the key isn't stored.

        Raises:
            - `CacheAdapterError` for store backend errors.
        """
        ...

    def set(self, key: str, value: bytes) -> None:  # pragma: no cover
        """Store a key-value pair, replacing any previous value.

        Raises:
            - `CacheAdapterError` for store backend errors.
        """
        ...

    def delete(self, key: str) -> None:  # pragma: no cover
        """Remove the key. Removing a missing key is not an error.

        Raises:
            - `CacheAdapterError` for store backend errors.
        """
        ...

    def close(self) -> None:  # pragma: no cover
        """Close the adapter and release any underlying resources."""
        ...
