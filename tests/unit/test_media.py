"""Tests for media type mapping and content classification."""

import pytest

from fakes import ICO_BYTES, JPEG_BYTES, PNG_BYTES
from favicon_resolver.extractors.media import classify, sniff_media_type
from favicon_resolver.models import MediaType


class TestMediaType:
    """Tests for Content-Type → MediaType mapping."""

    @pytest.mark.parametrize("header,expected", [
        ("image/png", MediaType.PNG),
        ("IMAGE/PNG", MediaType.PNG),
        ("image/x-icon", MediaType.ICO),
        ("image/vnd.microsoft.icon", MediaType.ICO),
        ("image/jpeg; charset=binary", MediaType.JPEG),
        ("application/octet-stream", MediaType.OCTET_STREAM),
        ("image/svg+xml", MediaType.UNKNOWN),
        ("text/html", MediaType.UNKNOWN),
        ("", MediaType.UNKNOWN),
        (None, MediaType.UNKNOWN),
    ])
    def test_from_content_type(self, header, expected):
        assert MediaType.from_content_type(header) is expected


class TestSniffing:
    """Tests for magic-byte detection."""

    @pytest.mark.parametrize("body,expected", [
        (ICO_BYTES, MediaType.ICO),
        (PNG_BYTES, MediaType.PNG),
        (JPEG_BYTES, MediaType.JPEG),
    ])
    def test_known_signatures(self, body: bytes, expected: MediaType):
        assert sniff_media_type(body) is expected

    def test_short_body_does_not_match(self):
        assert sniff_media_type(b"\x89P") is None
        assert sniff_media_type(b"") is None

    def test_unknown_bytes(self):
        assert sniff_media_type(b"GIF89a...") is None


class TestClassify:
    """Tests for icon response validation."""

    def test_octet_stream_png_is_reclassified(self):
        result = classify(200, "application/octet-stream", PNG_BYTES)
        assert result == (MediaType.PNG, PNG_BYTES)

    def test_octet_stream_ico_checked_before_png(self):
        media_type, _ = classify(200, "application/octet-stream", ICO_BYTES)
        assert media_type is MediaType.ICO

    def test_octet_stream_unknown_bytes_rejected(self):
        assert classify(200, "application/octet-stream", b"<html></html>") is None

    def test_declared_type_trusted_without_sniffing(self):
        """An image/x-icon response is accepted even if the bytes are PNG."""
        result = classify(200, "image/x-icon", PNG_BYTES)
        assert result == (MediaType.ICO, PNG_BYTES)

    def test_declared_type_trusted_for_garbage(self):
        media_type, body = classify(200, "image/jpeg", b"not really a jpeg")
        assert media_type is MediaType.JPEG
        assert body == b"not really a jpeg"

    @pytest.mark.parametrize("status", [199, 301, 404, 500])
    def test_non_success_rejected(self, status: int):
        assert classify(status, "image/png", PNG_BYTES) is None

    @pytest.mark.parametrize("content_type", [None, "", "text/html", "image/svg+xml", "image/gif"])
    def test_disallowed_content_type_rejected(self, content_type):
        assert classify(200, content_type, PNG_BYTES) is None

    def test_result_never_octet_stream(self):
        for body in (ICO_BYTES, PNG_BYTES, JPEG_BYTES):
            media_type, _ = classify(200, "application/octet-stream", body)
            assert media_type is not MediaType.OCTET_STREAM
