"""Data models for favicon resolution."""

from favicon_resolver.models.icon import (
    ALLOWED_MEDIA_TYPES,
    Candidate,
    FetchOutcome,
    IconResult,
    MediaType,
    ResponseEnvelope,
)

__all__ = [
    "ALLOWED_MEDIA_TYPES",
    "Candidate",
    "FetchOutcome",
    "IconResult",
    "MediaType",
    "ResponseEnvelope",
]
