"""Per-link favicon resolution used by the new tab page.

The rendering layer asks which address to show for a link, tries to load
it, and reports the outcome back. Each link walks its candidates in order:

    untried -> trying(i) -> resolved | exhausted

Only the terminal outcomes are persisted, through the resolution cache. The
attempt index lives in memory and is scoped to a link id and URL.
"""

import logging
from dataclasses import dataclass
from enum import Enum, unique
from typing import Final, Iterable

from pydantic import BaseModel

from favicache.candidates import PLACEHOLDER_ICON, CandidateGenerator
from favicache.resolution_cache import EXHAUSTED_PROVIDER, ResolutionCache

logger = logging.getLogger(__name__)

TAB_FAVICON_PROVIDER: Final[str] = "tab-favicon"


class Link(BaseModel):
    """A rendered bookmark link."""

    id: str
    url: str | None = None
    title: str = ""


@unique
class AttemptState(str, Enum):
    """Resolution state of a single link."""

    UNTRIED = "untried"
    TRYING = "trying"
    RESOLVED = "resolved"
    EXHAUSTED = "exhausted"


@dataclass
class LinkAttempt:
    """In-memory progress of a link through its candidates."""

    url: str | None
    index: int = 0
    state: AttemptState = AttemptState.UNTRIED


class ResolutionDriver:
    """Decide which icon address to render for a link and record load outcomes."""

    cache: ResolutionCache
    generator: CandidateGenerator
    attempts: dict[str, LinkAttempt]

    def __init__(self, cache: ResolutionCache, generator: CandidateGenerator) -> None:
        self.cache = cache
        self.generator = generator
        self.attempts = {}

    def resolve_display_src(self, link: Link) -> str:
        """Return the address to render for `link` right now.

        A cached success wins. Links that exhausted their candidates, in this
        session or recently enough to still be negatively cached, show the
        placeholder. Otherwise the candidate at the current attempt index.
        """
        cached = self.cache.get(link.url)
        if cached:
            return cached

        attempt = self._attempt(link)
        if attempt.state is AttemptState.EXHAUSTED or self.cache.is_negative(link.url):
            return PLACEHOLDER_ICON

        candidates = self.generator.candidates(link.url)
        if 0 <= attempt.index < len(candidates):
            return candidates[attempt.index]
        return candidates[0]

    def on_load_success(self, link: Link, resolved_src: str) -> None:
        """Record that `resolved_src` loaded for `link`."""
        provider = self.generator.provider_for(link.url, resolved_src)
        if self.cache.remember(link.url, resolved_src, provider):
            self._attempt(link).state = AttemptState.RESOLVED

    def on_load_failure(self, link: Link) -> None:
        """Advance `link` to its next candidate, recording exhaustion once."""
        attempt = self._attempt(link)
        if attempt.state is AttemptState.EXHAUSTED:
            return

        last = max(0, len(self.generator.candidates(link.url)) - 1)
        next_index = attempt.index + 1
        if next_index > last:
            attempt.index = last
            attempt.state = AttemptState.EXHAUSTED
            logger.debug(f"Favicon candidates exhausted for link {link.id}")
            self.cache.remember_failure(link.url, EXHAUSTED_PROVIDER)
            return

        attempt.index = next_index
        attempt.state = AttemptState.TRYING

    def remember_tab_favicon(self, url: str | None, fav_icon_url: str | None) -> None:
        """Record a favicon the browser already resolved for an open tab."""
        if fav_icon_url:
            self.cache.remember(url, fav_icon_url, TAB_FAVICON_PROVIDER)

    def attempt_index(self, link: Link) -> int:
        """Return the candidate index currently tried for `link`."""
        return self._attempt(link).index

    def state(self, link: Link) -> AttemptState:
        """Return the resolution state of `link`."""
        return self._attempt(link).state

    def reset(self, link_ids: Iterable[str] | None = None) -> None:
        """Forget attempt progress for `link_ids`, or for every link."""
        if link_ids is None:
            self.attempts.clear()
            return
        for link_id in link_ids:
            self.attempts.pop(link_id, None)

    def retain(self, links: Iterable[Link]) -> None:
        """Forget attempt progress for links that are no longer rendered."""
        keep = {link.id for link in links}
        self.reset([link_id for link_id in self.attempts if link_id not in keep])

    def _attempt(self, link: Link) -> LinkAttempt:
        attempt = self.attempts.get(link.id)
        if attempt is None or attempt.url != link.url:
            attempt = LinkAttempt(url=link.url)
            self.attempts[link.id] = attempt
        return attempt
