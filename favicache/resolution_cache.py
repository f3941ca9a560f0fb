"""Persistent record of favicon resolution outcomes, keyed by domain.

The whole store is one JSON object kept in a single durable slot:

    key:   "<namespace>:favicon-cache:<version>"
    value: {"<domain>": {"src": str, "at": int, "ok": bool, "provider": str}}

It is read once on first access and written back in full on every
mutation. Expiry and eviction are lazy: expired entries are dropped when
they are read and the size bound is enforced when an entry is written.

Multiple processes sharing a slot are not coordinated, the last write wins.
"""

import logging
import time
from typing import Any, Callable, Final

import orjson
from pydantic import BaseModel, Field, ValidationError, model_validator

from favicache.cache.protocol import StoreAdapter
from favicache.candidates import UNKNOWN_PROVIDER
from favicache.domain import get_domain
from favicache.exceptions import CacheAdapterError, CacheEntryError

logger = logging.getLogger(__name__)

CACHE_KEY: Final[str] = "{namespace}:favicon-cache:{version}"

DEFAULT_NAMESPACE: Final[str] = "bw"
DEFAULT_VERSION: Final[str] = "v2"
DEFAULT_SUCCESS_TTL_SEC: Final[int] = 7 * 24 * 60 * 60
DEFAULT_FAILURE_TTL_SEC: Final[int] = 10 * 60
DEFAULT_MAX_ENTRIES: Final[int] = 500

EXHAUSTED_PROVIDER: Final[str] = "chain-exhausted"


def now_ms() -> int:
    """Return the current time as milliseconds since the epoch."""
    return int(time.time() * 1000)


class CacheEntry(BaseModel):
    """Last known resolution outcome for a domain."""

    domain: str = Field(default="", exclude=True)
    src: str = ""
    at: int = 0
    ok: bool
    provider: str | None = None

    @model_validator(mode="after")
    def check_negative_src(self) -> "CacheEntry":
        """Negative outcomes never carry an address."""
        if not self.ok and self.src:
            raise ValueError("a failed resolution must have an empty `src`")
        return self


class ResolutionCache:
    """Domain keyed store of favicon resolution outcomes with TTL expiry and a size bound.

    None of the public operations raise. Unusable URLs make them no-ops and
    store backend errors are logged.
    """

    adapter: StoreAdapter
    key: str
    success_ttl_ms: int
    failure_ttl_ms: int
    max_entries: int
    clock: Callable[[], int]
    _entries: dict[str, CacheEntry] | None

    def __init__(
        self,
        adapter: StoreAdapter,
        namespace: str = DEFAULT_NAMESPACE,
        version: str = DEFAULT_VERSION,
        success_ttl_sec: int = DEFAULT_SUCCESS_TTL_SEC,
        failure_ttl_sec: int = DEFAULT_FAILURE_TTL_SEC,
        max_entries: int = DEFAULT_MAX_ENTRIES,
        clock: Callable[[], int] = now_ms,
    ) -> None:
        """Initialize the cache. Nothing is read from the adapter until first access.

        Raises:
            - `ValueError` if the failure TTL isn't shorter than the success TTL, or
              `max_entries` is not positive.
        """
        if failure_ttl_sec >= success_ttl_sec:
            raise ValueError(
                f"failure TTL ({failure_ttl_sec}s) must be shorter than"
                f" success TTL ({success_ttl_sec}s)"
            )
        if max_entries < 1:
            raise ValueError(f"max_entries must be positive, got {max_entries}")

        self.adapter = adapter
        self.key = CACHE_KEY.format(namespace=namespace, version=version)
        self.success_ttl_ms = success_ttl_sec * 1000
        self.failure_ttl_ms = failure_ttl_sec * 1000
        self.max_entries = max_entries
        self.clock = clock
        self._entries = None

    def load(self) -> None:
        """Read the store from the adapter, replacing whatever is held in memory.

        A missing, unreadable or corrupt blob leaves an empty store. Entries that
        fail validation are dropped individually.
        """
        try:
            blob = self.adapter.get(self.key)
        except CacheAdapterError as exc:
            logger.warning(f"Failed to read favicon cache `{self.key}`: {exc}")
            blob = None

        self._entries = self._decode(blob)
        logger.debug(f"Loaded {len(self._entries)} favicon cache entries from `{self.key}`")

    def get(self, url: str | None) -> str | None:
        """Return the cached icon address for the domain of `url`.

        Only a fresh, successful entry yields an address. Expired entries are
        removed as a side effect.
        """
        entry = self._fresh_entry(get_domain(url))
        if entry is None or not entry.ok:
            return None
        return entry.src

    def is_negative(self, url: str | None) -> bool:
        """Return True when the domain of `url` has a fresh failure entry."""
        entry = self._fresh_entry(get_domain(url))
        return entry is not None and not entry.ok

    def entry(self, url: str | None) -> CacheEntry | None:
        """Return the fresh entry of either outcome for the domain of `url`."""
        return self._fresh_entry(get_domain(url))

    def remember(self, url: str | None, src: str, provider: str = UNKNOWN_PROVIDER) -> bool:
        """Record that `src` is a working icon for the domain of `url`.

        Return whether an entry was written. URLs without a domain and empty
        addresses leave the store untouched.
        """
        domain = get_domain(url)
        if not domain or not src or not isinstance(src, str):
            return False
        self._write(
            CacheEntry(domain=domain, src=src, at=self.clock(), ok=True, provider=provider)
        )
        return True

    def remember_failure(self, url: str | None, provider: str = EXHAUSTED_PROVIDER) -> None:
        """Record that no icon could be resolved for the domain of `url`."""
        domain = get_domain(url)
        if not domain:
            return
        self._write(
            CacheEntry(domain=domain, src="", at=self.clock(), ok=False, provider=provider)
        )

    def is_expired(self, entry: CacheEntry, now: int | None = None) -> bool:
        """Return True when `entry` is older than the TTL of its outcome."""
        ttl = self.success_ttl_ms if entry.ok else self.failure_ttl_ms
        return (self.clock() if now is None else now) - entry.at > ttl

    def entries(self) -> list[CacheEntry]:
        """Return every held entry, expired ones included, most recent first."""
        return sorted(self._store().values(), key=lambda entry: entry.at, reverse=True)

    def purge_expired(self) -> int:
        """Drop every expired entry and return how many were removed."""
        store = self._store()
        now = self.clock()
        expired = [domain for domain, entry in store.items() if self.is_expired(entry, now)]
        for domain in expired:
            del store[domain]
        if expired:
            self._persist()
        return len(expired)

    def clear(self) -> None:
        """Drop all entries and remove the persisted blob."""
        self._entries = {}
        try:
            self.adapter.delete(self.key)
        except CacheAdapterError as exc:
            logger.warning(f"Failed to clear favicon cache `{self.key}`: {exc}")

    def __len__(self) -> int:
        """Return the number of held entries."""
        return len(self._store())

    def _store(self) -> dict[str, CacheEntry]:
        if self._entries is None:
            self.load()
        return self._entries  # type: ignore [return-value]

    def _fresh_entry(self, domain: str) -> CacheEntry | None:
        if not domain:
            return None
        store = self._store()
        entry = store.get(domain)
        if entry is None:
            return None
        if self.is_expired(entry):
            del store[domain]
            self._persist()
            return None
        return entry

    def _write(self, entry: CacheEntry) -> None:
        store = self._store()
        store[entry.domain] = entry
        self._prune()
        self._persist()

    def _prune(self) -> None:
        """Keep only the `max_entries` most recently written entries."""
        store = self._store()
        if len(store) <= self.max_entries:
            return
        ordered = sorted(store.items(), key=lambda item: item[1].at)
        evicted = len(ordered) - self.max_entries
        self._entries = dict(ordered[evicted:])
        logger.debug(f"Evicted {evicted} favicon cache entries")

    def _persist(self) -> None:
        payload = {
            domain: entry.model_dump(exclude_none=True) for domain, entry in self._store().items()
        }
        try:
            self.adapter.set(self.key, orjson.dumps(payload))
        except (CacheAdapterError, TypeError) as exc:
            logger.warning(f"Failed to write favicon cache `{self.key}`: {exc}")

    def _decode(self, blob: bytes | str | None) -> dict[str, CacheEntry]:
        if not blob:
            return {}
        try:
            raw = orjson.loads(blob)
        except orjson.JSONDecodeError as exc:
            logger.warning(f"Discarding corrupt favicon cache `{self.key}`: {exc}")
            return {}
        if not isinstance(raw, dict):
            logger.warning(f"Discarding favicon cache `{self.key}`: not a JSON object")
            return {}

        entries: dict[str, CacheEntry] = {}
        for domain, value in raw.items():
            try:
                entries[domain] = self._decode_entry(domain, value)
            except CacheEntryError as exc:
                logger.info(f"Dropping favicon cache entry for `{domain}`: {exc}")
        return entries

    @staticmethod
    def _decode_entry(domain: str, value: Any) -> CacheEntry:
        if not isinstance(value, dict):
            raise CacheEntryError("entry is not a JSON object")
        try:
            return CacheEntry.model_validate({**value, "domain": domain})
        except ValidationError as exc:
            raise CacheEntryError(str(exc)) from exc
