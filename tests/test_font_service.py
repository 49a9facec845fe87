"""Tests for Services.font_service: Google Fonts lookup with @import fallback."""

from unittest.mock import MagicMock, patch

import requests

from Services.font_service import (
    font_import_fallback,
    google_fonts_url,
    is_system_font,
    resolve_font_css,
)

FONT_FACE = "@font-face {\n  font-family: 'Inter';\n  font-weight: 700;\n}\n"


def _response(text):
    resp = MagicMock()
    resp.text = text
    resp.raise_for_status.return_value = None
    return resp


class TestUrls:
    def test_weights_sorted(self):
        assert google_fonts_url("Open Sans", {700, 400}) == (
            "https://fonts.googleapis.com/css2?family=Open+Sans:wght@400;700&display=swap"
        )

    def test_without_weights(self):
        assert google_fonts_url("Inter") == (
            "https://fonts.googleapis.com/css2?family=Inter&display=swap"
        )

    def test_system_fonts(self):
        assert is_system_font("Arial")
        assert is_system_font(" helvetica ")
        assert is_system_font("-apple-system")
        assert not is_system_font("Inter")


class TestResolveFontCss:
    def test_system_fonts_never_requested(self):
        with patch("Services.font_service.requests.get") as get:
            assert resolve_font_css({"Arial": {400}, "Roboto": {700}}) == ""
        get.assert_not_called()

    def test_fetched_css_returned(self):
        with patch("Services.font_service.get_cached_font_css", return_value=None), \
                patch("Services.font_service.save_font_css") as save, \
                patch("Services.font_service.requests.get", return_value=_response(FONT_FACE)) as get:
            css = resolve_font_css({"Inter": {700}})

        assert "@font-face" in css
        url = get.call_args.args[0]
        assert url == "https://fonts.googleapis.com/css2?family=Inter:wght@700&display=swap"
        save.assert_called_once()

    def test_cached_css_skips_network(self):
        with patch("Services.font_service.get_cached_font_css", return_value=FONT_FACE), \
                patch("Services.font_service.requests.get") as get:
            css = resolve_font_css({"Inter": {700}})
        assert css == FONT_FACE.strip()
        get.assert_not_called()

    def test_lookup_failure_falls_back_to_import(self):
        with patch("Services.font_service.get_cached_font_css", return_value=None), \
                patch("Services.font_service.requests.get",
                      side_effect=requests.ConnectionError("offline")):
            css = resolve_font_css({"Open Sans": {400, 700}})
        assert css == font_import_fallback("Open Sans", {400, 700})
        assert css.startswith('@import url("https://fonts.googleapis.com/css2?family=Open+Sans')

    def test_imports_before_font_faces(self):
        def fake_get(url, **kwargs):
            if "Lato" in url:
                raise requests.HTTPError("400")
            return _response(FONT_FACE)

        with patch("Services.font_service.get_cached_font_css", return_value=None), \
                patch("Services.font_service.save_font_css"), \
                patch("Services.font_service.requests.get", side_effect=fake_get):
            css = resolve_font_css({"Inter": {700}, "Lato": {400}})

        assert css.index("@import") < css.index("@font-face")

    def test_response_without_font_face_falls_back(self):
        with patch("Services.font_service.get_cached_font_css", return_value=None), \
                patch("Services.font_service.save_font_css"), \
                patch("Services.font_service.requests.get", return_value=_response("/* nothing */")):
            css = resolve_font_css({"Inter": {400}})
        assert css.startswith("@import")
