"""HTML → icon candidates, and bytes → media types.

1. ``links``: finds icon ``<link>`` elements, ranks them and resolves
   their hrefs against the page's origin
2. ``media``: validates fetched icon bytes via Content-Type and magic bytes
"""

from favicon_resolver.extractors.links import (
    DEFAULT_PRIORITY_POLICY,
    PriorityPolicy,
    extract_candidates,
    resolve_uri,
)
from favicon_resolver.extractors.media import MAGIC_SIGNATURES, classify, sniff_media_type

__all__ = [
    "DEFAULT_PRIORITY_POLICY",
    "PriorityPolicy",
    "extract_candidates",
    "resolve_uri",
    "MAGIC_SIGNATURES",
    "classify",
    "sniff_media_type",
]
