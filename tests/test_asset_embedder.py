"""Tests for Services.asset_embedder: vector/raster decisions and escaping."""

import ast
import base64

import pytest

from Services.asset_embedder import (
    UseRaster,
    UseVector,
    decode_svg_payload,
    embed,
    escape_js_string,
    escape_template_literal,
)

SVG = '<svg width="10" height="10">\n  <path d="M0 0L10 10"/>\n</svg>'


def _b64_uri(raw: bytes) -> str:
    return "data:image/svg+xml;base64," + base64.b64encode(raw).decode("ascii")


# ─── Escaping ─────────────────────────────────────────────────────────


class TestEscaping:
    @pytest.mark.parametrize("text", [
        "Hi!",
        "It's fine",
        'She said "hi"',
        "back\\slash",
        "line one\nline two\r\n\tindented",
        "mixed '\\n' literal",
    ])
    def test_js_string_round_trip(self, text):
        # Python and JS agree on these escapes inside a single-quoted literal.
        assert ast.literal_eval("'" + escape_js_string(text) + "'") == text

    def test_js_string_escapes(self):
        assert escape_js_string("a'b\\c\nd") == "a\\'b\\\\c\\nd"

    def test_template_literal_escapes_delimiters(self):
        assert escape_template_literal("<svg>`${x}`</svg>") == "<svg>\\`\\${x}\\`</svg>"

    def test_template_literal_collapses_whitespace(self):
        assert escape_template_literal(SVG) == (
            '<svg width="10" height="10"> <path d="M0 0L10 10"/> </svg>'
        )


# ─── Payload decoding ─────────────────────────────────────────────────


class TestDecodeSvgPayload:
    def test_raw_markup(self):
        assert decode_svg_payload(SVG) == SVG

    def test_base64_data_uri(self):
        assert decode_svg_payload(_b64_uri(b"<svg></svg>")) == "<svg></svg>"

    def test_percent_encoded_data_uri(self):
        assert decode_svg_payload("data:image/svg+xml;utf8,%3Csvg%3E%3C%2Fsvg%3E") == "<svg></svg>"

    def test_invalid_base64(self):
        assert decode_svg_payload("data:image/svg+xml;base64,@@not-base64@@") is None

    def test_decoded_payload_without_svg_root(self):
        assert decode_svg_payload(_b64_uri(b"hello world")) is None

    def test_empty(self):
        assert decode_svg_payload("") is None
        assert decode_svg_payload(None) is None


# ─── Decision ─────────────────────────────────────────────────────────


class TestEmbed:
    def test_vector_preferred_over_raster(self):
        decision = embed({"svg": SVG, "image": "data:image/png;base64,AAAA"})
        assert isinstance(decision, UseVector)
        assert decision.markup.startswith("<svg")
        assert "\n" not in decision.markup

    def test_svg_base64_used_when_raw_missing(self):
        decision = embed({"svgBase64": _b64_uri(b"<svg><rect/></svg>")})
        assert decision == UseVector("<svg><rect/></svg>")

    def test_undecodable_vector_falls_back_to_raster(self):
        node = {
            "name": "Logo",
            "type": "VECTOR",
            "svgBase64": "data:image/svg+xml;base64,@@@",
            "image": "data:image/png;base64,AAAA",
        }
        assert embed(node) == UseRaster("data:image/png;base64,AAAA")

    def test_raster_uses_contain_fit(self):
        assert embed({"image": "https://example.com/a.png"}).fit == "contain"

    def test_nothing_to_embed(self):
        assert embed({"name": "Frame", "type": "FRAME"}) is None
        assert embed({"svgBase64": "data:image/svg+xml;base64,@@@"}) is None
