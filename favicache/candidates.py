"""Candidate icon addresses for a URL, in the order they should be tried."""

import base64
import logging
from enum import Enum, unique
from typing import Final, NamedTuple
from urllib.parse import quote

from favicache.domain import get_domain

logger = logging.getLogger(__name__)

DEFAULT_ICON_SIZE: Final[int] = 32

PLACEHOLDER_SVG: Final[str] = (
    '<svg xmlns="http://www.w3.org/2000/svg" width="32" height="32" viewBox="0 0 32 32">'
    '<rect width="32" height="32" rx="6" fill="#d7dbe0"/>'
    '<circle cx="16" cy="16" r="8" fill="none" stroke="#8a929c" stroke-width="2"/>'
    '<path d="M8 16h16M16 8c3 3 3 13 0 16M16 8c-3 3-3 13 0 16" fill="none" '
    'stroke="#8a929c" stroke-width="1.5"/>'
    "</svg>"
)

# Embedded image that renders without any network access.
PLACEHOLDER_ICON: Final[str] = "data:image/svg+xml;base64," + base64.b64encode(
    PLACEHOLDER_SVG.encode("utf-8")
).decode("ascii")

PLACEHOLDER_PROVIDER: Final[str] = "placeholder"
UNKNOWN_PROVIDER: Final[str] = "unknown"


@unique
class ProviderMode(str, Enum):
    """Enum for the icon provider modes."""

    NONE = "none"
    DIRECT = "direct"
    GOOGLE = "google"
    DUCKDUCKGO = "duckduckgo"
    RAYCAST = "raycast"
    CHAIN = "chain"


DEFAULT_PROVIDER_MODE: Final[ProviderMode] = ProviderMode.CHAIN

# Providers concatenated by `chain`. First-party assets come before lookup services.
CHAIN_ORDER: Final[tuple[ProviderMode, ...]] = (
    ProviderMode.DIRECT,
    ProviderMode.GOOGLE,
    ProviderMode.DUCKDUCKGO,
    ProviderMode.RAYCAST,
)

URL_TEMPLATES: Final[dict[ProviderMode, tuple[str, ...]]] = {
    ProviderMode.DIRECT: (
        "https://{domain}/favicon.ico",
        "https://{domain}/apple-touch-icon.png",
    ),
    ProviderMode.GOOGLE: ("https://www.google.com/s2/favicons?domain={encoded}&sz={size}",),
    ProviderMode.DUCKDUCKGO: ("https://icons.duckduckgo.com/ip3/{encoded}.ico",),
    ProviderMode.RAYCAST: ("https://api.ray.so/favicon?url={encoded}&size={size}",),
}


class Candidate(NamedTuple):
    """A single icon address and the provider that produced it."""

    provider: str
    src: str


PLACEHOLDER_CANDIDATE: Final[Candidate] = Candidate(PLACEHOLDER_PROVIDER, PLACEHOLDER_ICON)


def parse_provider_mode(raw: str | None) -> ProviderMode:
    """Parse a configured provider mode, falling back to `chain` for unknown values."""
    value = str(raw or "").strip().lower()
    try:
        return ProviderMode(value)
    except ValueError:
        logger.warning(
            f"Unknown favicon provider mode '{raw}', using '{DEFAULT_PROVIDER_MODE.value}'"
        )
        return DEFAULT_PROVIDER_MODE


class CandidateGenerator:
    """Build the ordered list of icon addresses to try for a URL.

    Generation only depends on the normalized domain of the URL and the
    configured provider mode; it never touches the network.
    """

    mode: ProviderMode
    icon_size: int

    def __init__(
        self, mode: ProviderMode = DEFAULT_PROVIDER_MODE, icon_size: int = DEFAULT_ICON_SIZE
    ) -> None:
        self.mode = mode
        self.icon_size = icon_size

    def candidates(self, url: str | None) -> list[str]:
        """Return the candidate addresses for `url`. The list is never empty."""
        return [candidate.src for candidate in self.candidate_sources(url)]

    def candidate_sources(self, url: str | None) -> list[Candidate]:
        """Return the candidates for `url` along with their provider labels."""
        try:
            domain = get_domain(url)
            if not domain or self.mode is ProviderMode.NONE:
                return [PLACEHOLDER_CANDIDATE]

            modes = CHAIN_ORDER if self.mode is ProviderMode.CHAIN else (self.mode,)
            return [candidate for mode in modes for candidate in self._build(mode, domain)]
        except Exception as e:
            logger.warning(f"Error generating favicon candidates for {url!r}: {e}")
            return [PLACEHOLDER_CANDIDATE]

    def provider_for(self, url: str | None, src: str) -> str:
        """Return the provider label of `src` among the candidates of `url`."""
        for candidate in self.candidate_sources(url):
            if candidate.src == src:
                return candidate.provider
        return UNKNOWN_PROVIDER

    def _build(self, mode: ProviderMode, domain: str) -> list[Candidate]:
        encoded = quote(domain, safe="")
        return [
            Candidate(
                mode.value,
                template.format(domain=domain, encoded=encoded, size=self.icon_size),
            )
            for template in URL_TEMPLATES[mode]
        ]
