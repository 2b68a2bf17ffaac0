"""Icon link extraction and URI resolution.

Every ``<link>`` with a non-empty href is considered, in document order.
A link becomes a candidate when its ``rel`` names an icon, or failing
that, when its href has an image file extension. The rank a candidate
gets comes from ``PriorityPolicy``:

    rel="apple-touch-icon"   10
    rel="icon"               20
    rel="shortcut icon"      30
    extension .png           40
    extension .ico           50
    extension .jpg / .jpeg   60
    /favicon.ico fallback   100

Lower ranks win. The table is configuration; pass a different
``PriorityPolicy`` to change it.
"""

from typing import Optional
from urllib.parse import urlsplit

from bs4 import BeautifulSoup
from pydantic import BaseModel, Field

from favicon_resolver.models import Candidate

ABSOLUTE_SCHEMES = ("http", "https")


class PriorityPolicy(BaseModel):
    """Rank table for icon candidates (lower is preferred)."""

    rel_ranks: dict[str, int] = Field(default_factory=lambda: {
        "apple-touch-icon": 10,
        "icon": 20,
        "shortcut icon": 30,
    })
    extension_ranks: dict[str, int] = Field(default_factory=lambda: {
        ".png": 40,
        ".ico": 50,
        ".jpg": 60,
        ".jpeg": 60,
    })
    fallback_rank: int = 100

    def rank_for(self, rel: Optional[str], href: str) -> Optional[int]:
        """Rank a link, or None if it is not an icon candidate."""
        if rel:
            normalized = " ".join(rel.lower().split())
            if normalized in self.rel_ranks:
                return self.rel_ranks[normalized]

        extension = href_extension(href)
        if extension:
            return self.extension_ranks.get(extension)
        return None


DEFAULT_PRIORITY_POLICY = PriorityPolicy()


def href_extension(href: str) -> str:
    """Lowercased file extension of an href's path, ignoring query/fragment.

    A bare dot-name counts: ``/.png`` has the extension ``.png``.
    """
    try:
        path = urlsplit(href).path
    except ValueError:
        return ""
    name = path.rsplit("/", 1)[-1]
    dot = name.rfind(".")
    if dot == -1 or dot == len(name) - 1:
        return ""
    return name[dot:].lower()


def extract_candidates(
    html: str | bytes,
    policy: Optional[PriorityPolicy] = None,
) -> list[Candidate]:
    """Collect icon candidates from an HTML document, in document order."""
    policy = policy or DEFAULT_PRIORITY_POLICY
    # Keep rel as the raw attribute string rather than a token list
    soup = BeautifulSoup(html, "lxml", multi_valued_attributes=None)

    candidates = []
    for link in soup.find_all("link", href=True):
        href = (link.get("href") or "").strip()
        if not href:
            continue

        rank = policy.rank_for(link.get("rel"), href)
        if rank is None:
            continue

        candidates.append(Candidate(source_path=href, priority_rank=rank))

    return candidates


def origin_of(uri: str) -> Optional[tuple[str, str]]:
    """(scheme, host) of an absolute URI. Port and path are dropped."""
    try:
        parts = urlsplit(uri)
        host = parts.hostname
    except ValueError:
        return None
    if not parts.scheme or not host:
        return None
    if ":" in host:
        host = f"[{host}]"
    return parts.scheme.lower(), host


def resolve_uri(source_path: str, final_uri: str) -> Optional[str]:
    """Turn an href into an absolute URI.

    Relative references are appended to ``scheme://host/`` of
    ``final_uri``; the path of ``final_uri`` is discarded, so
    ``icon.png`` found on ``https://a.com/blog/`` resolves to
    ``https://a.com/icon.png``. Absolute http(s) URIs are returned
    unchanged. Anything else resolves to None.
    """
    source_path = source_path.strip()
    if not source_path:
        return None

    try:
        parts = urlsplit(source_path)
        _ = parts.port  # raises on a malformed port
    except ValueError:
        return None

    if parts.scheme:
        if parts.scheme.lower() in ABSOLUTE_SCHEMES and parts.netloc:
            return source_path
        return None

    origin = origin_of(final_uri)
    if origin is None:
        return None
    scheme, host = origin

    if parts.netloc:
        # Network-path reference, e.g. //cdn.example.com/icon.png
        return f"{scheme}:{source_path}"

    # One slash after the host: "/a.png" gives https://host/a.png, not
    # the doubled https://host//a.png a plain concatenation would produce
    if source_path.startswith("/"):
        return f"{scheme}://{host}{source_path}"
    return f"{scheme}://{host}/{source_path}"
