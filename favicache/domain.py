"""Domain normalization shared by the candidate generator and the resolution cache."""

from urllib.parse import urlsplit

WWW_PREFIX = "www."


def get_domain(url: str | None) -> str:
    """Return the normalized domain of `url`, or an empty string.

    The hostname is lowercased and a single leading `www.` is stripped, so
    `https://www.Example.com/path` and `http://example.com` share the domain
    `example.com`. Internationalized hosts are punycoded and IPv6 literals keep
    their brackets (`[::1]`). Absent input, unparseable URLs and URLs without a
    scheme or host (e.g. a bare `example.com` or `//example.com`) all yield `""`.
    """
    if not url or not isinstance(url, str):
        return ""
    try:
        parts = urlsplit(url.strip())
        hostname = parts.hostname
    except ValueError:
        return ""
    if not parts.scheme or not hostname or any(char.isspace() for char in hostname):
        return ""

    if ":" in hostname:
        return f"[{hostname}]"
    if not hostname.isascii():
        try:
            hostname = hostname.encode("idna").decode("ascii")
        except UnicodeError:
            return ""
    return hostname.removeprefix(WWW_PREFIX)
