"""Data models for icon candidates, HTTP responses and results."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class MediaType(str, Enum):
    """Closed set of media types the resolver understands."""

    PNG = "image/png"
    ICO = "image/x-icon"
    JPEG = "image/jpeg"
    OCTET_STREAM = "application/octet-stream"
    UNKNOWN = "unknown"

    @classmethod
    def from_content_type(cls, value: Optional[str]) -> "MediaType":
        """Map a Content-Type header value to a MediaType.

        Parameters such as ``charset`` are ignored. Anything outside the
        known set maps to UNKNOWN.
        """
        if not value:
            return cls.UNKNOWN
        bare = value.split(";", 1)[0].strip().lower()
        return CONTENT_TYPE_ALIASES.get(bare, cls.UNKNOWN)


CONTENT_TYPE_ALIASES = {
    "image/png": MediaType.PNG,
    "image/x-icon": MediaType.ICO,
    "image/vnd.microsoft.icon": MediaType.ICO,
    "image/jpeg": MediaType.JPEG,
    "application/octet-stream": MediaType.OCTET_STREAM,
}

# Media types accepted as an icon response
ALLOWED_MEDIA_TYPES = frozenset({
    MediaType.PNG,
    MediaType.ICO,
    MediaType.JPEG,
    MediaType.OCTET_STREAM,
})


class ResponseEnvelope(BaseModel):
    """Outcome of one GET, after any redirects were followed."""

    status_code: int
    headers: dict[str, str] = Field(default_factory=dict)  # lowercased names
    body: bytes = b""
    final_uri: str

    @property
    def is_success(self) -> bool:
        return 200 <= self.status_code < 300

    @property
    def content_type(self) -> Optional[str]:
        """Bare media type of the response, e.g. ``text/html``."""
        value = self.headers.get("content-type")
        if not value:
            return None
        return value.split(";", 1)[0].strip().lower() or None

    @property
    def location(self) -> Optional[str]:
        value = self.headers.get("location")
        if value is None or not value.strip():
            return None
        return value.strip()


class Candidate(BaseModel):
    """One discovered potential icon.

    Created by the extractor with ``source_path`` and ``priority_rank``;
    ``resolved_uri`` is set once the href is made absolute, and the fill
    state (``icon_bytes``/``media_type``) is merged in by the orchestrator.
    Lower ``priority_rank`` is preferred.
    """

    source_path: str
    priority_rank: int
    resolved_uri: Optional[str] = None
    icon_bytes: Optional[bytes] = None
    media_type: Optional[MediaType] = None

    @property
    def is_filled(self) -> bool:
        return self.icon_bytes is not None and self.media_type is not None


class FetchOutcome(BaseModel):
    """Result of one candidate sub-fetch, keyed by candidate position."""

    model_config = ConfigDict(frozen=True)

    index: int
    content: bytes
    media_type: MediaType


class IconResult(BaseModel):
    """The selected icon for a domain."""

    uri: str
    content: bytes
    media_type: MediaType

    @property
    def size(self) -> int:
        return len(self.content)
