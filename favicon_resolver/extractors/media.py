"""Content classification for fetched icon bytes.

Declared image types are trusted as-is. A generic
``application/octet-stream`` body is sniffed against a small table of
magic-byte signatures and either reclassified or rejected.
"""

from typing import Optional

from rich.console import Console

from favicon_resolver.models import ALLOWED_MEDIA_TYPES, MediaType

console = Console()

# Checked in order, first match wins
MAGIC_SIGNATURES: tuple[tuple[MediaType, bytes], ...] = (
    (MediaType.ICO, b"\x00\x00\x01\x00"),
    (MediaType.PNG, b"\x89PNG"),
    (MediaType.JPEG, b"\xff\xd8\xff"),
)


def sniff_media_type(body: bytes) -> Optional[MediaType]:
    """Identify an image format from its leading bytes."""
    for media_type, signature in MAGIC_SIGNATURES:
        if body.startswith(signature):
            return media_type
    return None


def classify(
    status_code: int,
    content_type: Optional[str],
    body: bytes,
) -> Optional[tuple[MediaType, bytes]]:
    """Validate a fetched icon response.

    Args:
        status_code: HTTP status of the final response
        content_type: Content-Type header value (parameters allowed)
        body: Response body

    Returns:
        (media_type, body) with a concrete image type, or None if rejected
    """
    if not 200 <= status_code < 300:
        return None

    if not content_type:
        return None

    media_type = MediaType.from_content_type(content_type)
    if media_type not in ALLOWED_MEDIA_TYPES:
        console.print(f"[dim]Rejected content type: {content_type}[/dim]")
        return None

    if media_type is MediaType.OCTET_STREAM:
        sniffed = sniff_media_type(body)
        if sniffed is None:
            console.print("[dim]Unrecognized octet-stream body, discarding[/dim]")
            return None
        media_type = sniffed

    return media_type, body
