"""No-operation adapter that disables persistence."""


class NoCacheAdapter:  # pragma: no cover
    """A store adapter that doesn't store or return anything."""

    def get(self, key: str) -> bytes | None:  # noqa: D102
        return None

    def set(self, key: str, value: bytes) -> None:  # noqa: D102
        pass

    def delete(self, key: str) -> None:  # noqa: D102
        pass

    def close(self) -> None:  # noqa: D102
        pass
