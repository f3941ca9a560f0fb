"""Build the favicon resolution components from settings."""

from enum import Enum, unique

from dynaconf.base import LazySettings

from favicache.cache.file import FileAdapter
from favicache.cache.memory import MemoryAdapter
from favicache.cache.none import NoCacheAdapter
from favicache.cache.protocol import StoreAdapter
from favicache.cache.redis import RedisAdapter, create_redis_client
from favicache.candidates import CandidateGenerator, parse_provider_mode
from favicache.configs import settings as default_settings
from favicache.driver import ResolutionDriver
from favicache.exceptions import InvalidBackendError
from favicache.resolution_cache import ResolutionCache


@unique
class BackendType(str, Enum):
    """Enum for store backend type."""

    FILE = "file"
    REDIS = "redis"
    MEMORY = "memory"
    NONE = "none"


def create_adapter(settings: LazySettings = default_settings) -> StoreAdapter:
    """Create the store adapter configured in `favicon.cache.backend`.

    Exceptions:
      - `InvalidBackendError` if the backend type is unknown.
    """
    cache_settings = settings.favicon.cache
    match cache_settings.backend:
        case BackendType.FILE:
            return FileAdapter(cache_settings.file_root)
        case BackendType.REDIS:
            return RedisAdapter(
                create_redis_client(
                    settings.redis.server,
                    settings.redis.socket_connect_timeout_sec,
                    settings.redis.socket_timeout_sec,
                    db=settings.redis.db,
                )
            )
        case BackendType.MEMORY:
            return MemoryAdapter()
        case BackendType.NONE:
            return NoCacheAdapter()
        case _:
            raise InvalidBackendError(f"Unknown store backend: {cache_settings.backend}")


def create_resolution_cache(
    adapter: StoreAdapter | None = None, settings: LazySettings = default_settings
) -> ResolutionCache:
    """Create a resolution cache on top of `adapter`, or the configured one."""
    cache_settings = settings.favicon.cache
    return ResolutionCache(
        adapter if adapter is not None else create_adapter(settings),
        namespace=cache_settings.namespace,
        version=cache_settings.version,
        success_ttl_sec=cache_settings.success_ttl_sec,
        failure_ttl_sec=cache_settings.failure_ttl_sec,
        max_entries=cache_settings.max_entries,
    )


def create_generator(
    provider: str | None = None, settings: LazySettings = default_settings
) -> CandidateGenerator:
    """Create a candidate generator for `provider`, or the configured provider mode."""
    return CandidateGenerator(
        parse_provider_mode(provider if provider is not None else settings.favicon.provider),
        icon_size=settings.favicon.icon_size,
    )


def create_driver(
    adapter: StoreAdapter | None = None, settings: LazySettings = default_settings
) -> ResolutionDriver:
    """Create a resolution driver wired to the configured cache and provider mode."""
    return ResolutionDriver(
        create_resolution_cache(adapter, settings),
        create_generator(settings=settings),
    )
