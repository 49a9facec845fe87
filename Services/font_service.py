import logging

import requests

import config
from storedb import get_cached_font_css, save_font_css

logger = logging.getLogger(__name__)

GOOGLE_FONTS_CSS_URL = "https://fonts.googleapis.com/css2"

# Google serves woff2 @font-face rules only to browsers it recognizes.
FONT_REQUEST_HEADERS = {
    "User-Agent": (
        "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
        "(KHTML, like Gecko) Chrome/124.0 Safari/537.36"
    )
}

SYSTEM_FONTS = {
    "arial",
    "helvetica",
    "helvetica neue",
    "roboto",
    "-apple-system",
    "blinkmacsystemfont",
    "system-ui",
    "sans-serif",
    "serif",
    "monospace",
    "times new roman",
    "georgia",
    "verdana",
    "segoe ui",
    "sf pro",
    "sf pro display",
    "sf pro text",
}


def is_system_font(family: str) -> bool:
    return family.strip().lower() in SYSTEM_FONTS


def google_fonts_url(family: str, weights=None) -> str:
    fam = family.strip().replace(" ", "+")
    if weights:
        w = ";".join(str(w) for w in sorted(weights))
        return f"{GOOGLE_FONTS_CSS_URL}?family={fam}:wght@{w}&display=swap"
    return f"{GOOGLE_FONTS_CSS_URL}?family={fam}&display=swap"


def font_import_fallback(family: str, weights=None) -> str:
    return f'@import url("{google_fonts_url(family, weights)}");'


def fetch_font_css(family: str, weights=None) -> str:
    url = google_fonts_url(family, weights)

    cached = get_cached_font_css(url)
    if cached:
        logger.info("[CACHE] Using stored font CSS for %s", family)
        return cached

    logger.info("[FONTS] Fetching %s", url)
    response = requests.get(url, headers=FONT_REQUEST_HEADERS, timeout=config.FONT_FETCH_TIMEOUT)
    response.raise_for_status()

    css = response.text
    save_font_css(url, family, css)
    return css


def resolve_font_css(fonts: dict) -> str:
    """Stylesheet text for every non-system family used by the component.

    fonts maps family -> weights. A family whose lookup fails gets an
    @import line instead, so a font outage never fails the request.
    """
    imports = []
    faces = []

    for family in sorted(fonts or {}):
        if is_system_font(family):
            continue
        weights = fonts[family]
        try:
            css = fetch_font_css(family, weights)
        except requests.RequestException as e:
            logger.warning("[FONTS] Lookup failed for %s, using @import: %s", family, e)
            imports.append(font_import_fallback(family, weights))
            continue

        if "@font-face" not in css:
            logger.warning("[FONTS] No @font-face rules returned for %s, using @import", family)
            imports.append(font_import_fallback(family, weights))
            continue
        faces.append(css.strip())

    blocks = []
    if imports:
        blocks.append("\n".join(imports))
    blocks.extend(faces)
    return "\n\n".join(blocks)
