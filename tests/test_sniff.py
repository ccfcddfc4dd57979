"""Tests for content type sniffing and charset detection."""

from __future__ import annotations

import pytest

from blobserve.errors import CharsetDetectionError
from blobserve.sniff import charset as charset_module
from blobserve.sniff.charset import detect_encoding
from blobserve.sniff.typesniffer import (
    SVG_MIME_TYPE,
    ContentKind,
    SniffedType,
    detect_content_type,
    looks_like_text,
)

PNG_1X1 = (
    b"\x89PNG\r\n\x1a\n"
    b"\x00\x00\x00\rIHDR\x00\x00\x00\x01\x00\x00\x00\x01\x08\x06\x00\x00\x00\x1f\x15\xc4\x89"
    b"\x00\x00\x00\rIDATx\x9cc\xf8\x0f\x00\x00\x01\x01\x00\x05\x18\xd8N"
    b"\x00\x00\x00\x00IEND\xaeB`\x82"
)
PDF_HEAD = b"%PDF-1.4\n%\xe2\xe3\xcf\xd3\n1 0 obj\n<< /Type /Catalog >>\nendobj\n"


class TestSniffedType:
    @pytest.mark.parametrize(
        ("content_type", "kind"),
        [
            ("text/plain", ContentKind.TEXT),
            ("text/html", ContentKind.TEXT),
            ("image/png", ContentKind.IMAGE),
            (SVG_MIME_TYPE, ContentKind.SVG),
            ("application/pdf", ContentKind.PDF),
            ("application/zip", ContentKind.BINARY),
            ("unknown", ContentKind.BINARY),
        ],
    )
    def test_kind(self, content_type, kind):
        assert SniffedType(content_type=content_type).kind is kind

    def test_svg_is_also_an_image(self):
        st = SniffedType(content_type=SVG_MIME_TYPE)
        assert st.is_image
        assert st.is_svg
        assert not st.is_text


class TestDetectContentType:
    def test_empty_is_unknown(self):
        assert detect_content_type(b"").kind is ContentKind.BINARY

    def test_plain_text(self):
        assert detect_content_type(b"hello world\nthis is a text file\n").kind is ContentKind.TEXT

    def test_json_is_text(self):
        assert detect_content_type(b'{"name": "blobserve", "items": [1, 2, 3]}\n').kind is (
            ContentKind.TEXT
        )

    def test_png(self):
        assert detect_content_type(PNG_1X1).kind is ContentKind.IMAGE

    def test_pdf(self):
        assert detect_content_type(PDF_HEAD).kind is ContentKind.PDF

    def test_binary(self):
        assert detect_content_type(b"\x00\x01\x02\x03\xfe\xff" * 50).kind is ContentKind.BINARY

    @pytest.mark.parametrize(
        "svg",
        [
            b'<svg xmlns="http://www.w3.org/2000/svg" width="1" height="1"></svg>',
            b'<?xml version="1.0" encoding="UTF-8"?>\n<svg xmlns="http://www.w3.org/2000/svg"/>',
            b"<!-- icon -->\n<!DOCTYPE svg>\n<svg xmlns=\"http://www.w3.org/2000/svg\"></svg>",
        ],
    )
    def test_svg_detected(self, svg):
        assert detect_content_type(svg).content_type == SVG_MIME_TYPE

    def test_html_mentioning_svg_is_not_svg(self):
        data = b"<html><body><p>An inline <svg> example</p></body></html>"
        assert detect_content_type(data).kind is not ContentKind.SVG

    def test_only_first_1024_bytes_inspected(self):
        data = b"plain text line\n" * 64 + b"\x00" * 4096
        assert detect_content_type(data).kind is ContentKind.TEXT


class TestLooksLikeText:
    def test_control_bytes_are_binary(self):
        assert not looks_like_text(b"abc\x00def")

    def test_whitespace_is_text(self):
        assert looks_like_text(b"a\tb\r\nc\x0cd\x1be")

    def test_utf16_bom_is_text(self):
        assert looks_like_text("hi".encode("utf-16"))


class TestDetectEncoding:
    def test_ascii_is_utf8(self):
        assert detect_encoding(b"plain ascii") == "UTF-8"

    def test_utf8_with_bom(self):
        assert detect_encoding(b"\xef\xbb\xbfhello") == "UTF-8"

    def test_truncated_multibyte_tail_is_utf8(self):
        """A sample cut in the middle of a character is still UTF-8."""
        data = "naïve café €".encode()
        assert detect_encoding(data[:-1]) == "UTF-8"

    def test_legacy_encoding(self):
        text = "Größenänderung für Straßenbahnhaltestellen, sagte der Bürgermeister. " * 10
        data = text.encode("cp1252")
        result = detect_encoding(data)
        assert result != "UTF-8"
        assert data.decode(result) == text

    @pytest.mark.parametrize(
        ("codec", "label"),
        [
            ("cp1250", "windows-1250"),
            ("cp1252", "windows-1252"),
            ("iso8859_2", "iso-8859-2"),
            ("latin_1", "iso-8859-1"),
            ("mac_roman", "macintosh"),
            ("utf_16_le", "utf-16le"),
            ("koi8_r", "koi8-r"),
            ("big5", "big5"),
        ],
    )
    def test_python_codec_names_become_browser_labels(self, monkeypatch, codec, label):
        class _Match:
            encoding = codec

        class _Matches:
            def best(self):
                return _Match()

        monkeypatch.setattr(charset_module, "from_bytes", lambda _data: _Matches())
        assert detect_encoding(b"\xff\xfe\xfa\x00\x81") == label

    def test_no_match_raises(self, monkeypatch):
        class _NoMatch:
            def best(self):
                return None

        monkeypatch.setattr(charset_module, "from_bytes", lambda _data: _NoMatch())
        with pytest.raises(CharsetDetectionError):
            detect_encoding(b"\xff\xfe\xfa\x00\x81")
