"""In-memory store adapter."""


class MemoryAdapter:
    """A store adapter that keeps values in a process-local dict.

    Values do not survive a restart. Useful for tests and for running
    without a writable location.
    """

    data: dict[str, bytes]

    def __init__(self, data: dict[str, bytes] | None = None) -> None:
        self.data = dict(data) if data else {}

    def get(self, key: str) -> bytes | None:  # noqa: D102
        return self.data.get(key)

    def set(self, key: str, value: bytes) -> None:  # noqa: D102
        self.data[key] = bytes(value)

    def delete(self, key: str) -> None:  # noqa: D102
        self.data.pop(key, None)

    def close(self) -> None:  # noqa: D102
        pass
