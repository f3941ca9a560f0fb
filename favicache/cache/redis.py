"""Redis store adapter."""

from redis import Redis, RedisError

from favicache.exceptions import CacheAdapterError


def create_redis_client(
    server: str,
    socket_connect_timeout: int,
    socket_timeout: int,
    db: int = 0,
) -> Redis:
    """Create a synchronous Redis client.

    Args:
        - `server`: the URL to the Redis endpoint.
        - `socket_connect_timeout`: the timeout in seconds to connect to the Redis server.
        - `socket_timeout`: the timeout in seconds to interact with the Redis server.
        - `db`: the ID (`SELECT db`) of the DB to which the client connects.
    """
    client: Redis = Redis.from_url(
        server,
        db=db,
        socket_connect_timeout=socket_connect_timeout,
        socket_timeout=socket_timeout,
    )
    return client


class RedisAdapter:
    """A store adapter that keeps key-value pairs in Redis.

    Values are stored without an expiry; entry expiry is handled by the
    resolution cache on read.
    """

    client: Redis

    def __init__(self, client: Redis) -> None:
        self.client = client

    def get(self, key: str) -> bytes | None:
        """Get the value associated with the key from Redis. Returns `None` if the key isn't in
        Redis.

        Raises:
            - `CacheAdapterError` if Redis returns an error.
        """
        try:
            return self.client.get(key)  # type: ignore [return-value]
        except RedisError as exc:
            raise CacheAdapterError(f"Failed to get `{repr(key)}` with error: `{exc}`") from exc

    def set(self, key: str, value: bytes) -> None:
        """Store a key-value pair in Redis.

        Raises:
            - `CacheAdapterError` if Redis returns an error.
        """
        try:
            self.client.set(key, value)
        except RedisError as exc:
            raise CacheAdapterError(f"Failed to set `{repr(key)}` with error: `{exc}`") from exc

    def delete(self, key: str) -> None:
        """Delete the key from Redis.

        Raises:
            - `CacheAdapterError` if Redis returns an error.
        """
        try:
            self.client.delete(key)
        except RedisError as exc:
            raise CacheAdapterError(
                f"Failed to delete `{repr(key)}` with error: `{exc}`"
            ) from exc

    def close(self) -> None:
        """Close the Redis connection."""
        self.client.close()
