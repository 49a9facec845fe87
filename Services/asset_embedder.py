import base64
import binascii
import logging
import re
import urllib.parse
from dataclasses import dataclass

logger = logging.getLogger(__name__)

SVG_BASE64_URI = re.compile(
    r"^data:image/svg\+xml(?:;charset=[^,;]+)?;base64,(.*)$",
    flags=re.IGNORECASE | re.DOTALL,
)
SVG_TEXT_URI = re.compile(
    r"^data:image/svg\+xml(?:;charset=[^,;]+)?(?:;utf8)?,(.*)$",
    flags=re.IGNORECASE | re.DOTALL,
)

RASTER_FIT = "contain"


@dataclass(frozen=True)
class UseVector:
    # Already escaped for a JS template literal.
    markup: str


@dataclass(frozen=True)
class UseRaster:
    src: str
    fit: str = RASTER_FIT


# ------------------------------------------------------------------
# ESCAPING
# ------------------------------------------------------------------

def escape_js_string(text: str) -> str:
    """Escape text for a single-quoted JS string literal."""
    return (
        text.replace("\\", "\\\\")
        .replace("'", "\\'")
        .replace("\n", "\\n")
        .replace("\r", "\\r")
        .replace("\t", "\\t")
    )


def js_string(text) -> str:
    return "'" + escape_js_string(str(text)) + "'"


def escape_template_literal(markup: str) -> str:
    escaped = (
        markup.replace("\\", "\\\\")
        .replace("`", "\\`")
        .replace("$", "\\$")
    )
    return re.sub(r"\s+", " ", escaped).strip()


# ------------------------------------------------------------------
# VECTOR PAYLOADS
# ------------------------------------------------------------------

def decode_svg_payload(payload):
    """Raw SVG markup from a plugin payload, or None when unusable.

    Accepts raw markup, base64 data URIs and percent-encoded data URIs.
    """
    if not payload or not isinstance(payload, str):
        return None

    text = payload.strip()

    m = SVG_BASE64_URI.match(text)
    if m:
        data = re.sub(r"\s+", "", m.group(1))
        try:
            text = base64.b64decode(data, validate=True).decode("utf-8")
        except (binascii.Error, ValueError) as e:
            logger.warning("[ASSET] Could not decode base64 SVG payload: %s", e)
            return None
    else:
        m = SVG_TEXT_URI.match(text)
        if m:
            text = urllib.parse.unquote(m.group(1))

    if "<svg" not in text.lower():
        logger.warning("[ASSET] Vector payload has no <svg> element, ignoring it")
        return None

    return text


# ------------------------------------------------------------------
# DECISION
# ------------------------------------------------------------------

def embed(node: dict):
    """Pick how a node's pre-rendered asset is emitted.

    Vector beats raster. Returns None when the node has no usable asset,
    in which case the caller renders it structurally.
    """
    for key in ("svg", "svgBase64"):
        payload = node.get(key)
        if not payload:
            continue
        markup = decode_svg_payload(payload)
        if markup:
            return UseVector(escape_template_literal(markup))
        logger.info("[ASSET] Skipping %s of '%s'", key, node.get("name"))

    image = node.get("image")
    if isinstance(image, str) and image.strip():
        return UseRaster(image.strip())

    return None
