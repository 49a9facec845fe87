import logging
import math
import re
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)

TEXT_TYPE = "TEXT"
AUTO_LAYOUT_MODES = {"HORIZONTAL", "VERTICAL"}

DEFAULT_SHADOW_COLOR = "rgba(0, 0, 0, 0.5)"
LINE_HEIGHT_FALLBACK_RATIO = 1.2


class PositioningMode(Enum):
    ROOT = "root"
    ABSOLUTE = "absolute"
    FLOW = "flow"


@dataclass(frozen=True)
class RenderContext:
    """Where a node is being emitted.

    origin_x / origin_y are subtracted from the node's own x / y when it is
    absolutely positioned.
    """

    mode: PositioningMode
    origin_x: float = 0
    origin_y: float = 0

    @property
    def is_root(self) -> bool:
        return self.mode is PositioningMode.ROOT

    @property
    def parent_uses_flow(self) -> bool:
        return self.mode is PositioningMode.FLOW


# ===============================
# NUMBERS
# ===============================

def to_number(value, default=None):
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return default
    # NaN / Infinity survive JSON decoding but have no CSS form.
    if not math.isfinite(number):
        return default
    return value if isinstance(value, float) else number


def fmt_number(value, digits=2) -> str:
    f = float(value)
    if abs(f - round(f)) < 1e-6:
        return str(int(round(f)))
    return str(round(f, digits))


def px(value) -> str:
    return f"{fmt_number(value)}px"


def _enum_value(node: dict, key: str):
    value = node.get(key)
    return value if isinstance(value, str) else None


def is_auto_layout(node: dict) -> bool:
    return _enum_value(node, "layoutMode") in AUTO_LAYOUT_MODES


# ===============================
# COLOR
# ===============================

def color_to_css(color, opacity=None):
    if not color or not isinstance(color, dict):
        return None
    channels = [to_number(color.get(c, 0)) for c in ("r", "g", "b")]
    if any(v is None for v in channels):
        return None
    r, g, b = (round(v * 255) for v in channels)

    alpha = opacity if opacity is not None else color.get("a", 1)
    alpha = to_number(alpha, 1)

    if alpha < 1:
        return f"rgba({r}, {g}, {b}, {fmt_number(alpha)})"
    return f"rgb({r}, {g}, {b})"


def _visible(paints):
    if not paints or not isinstance(paints, list):
        return []
    return [p for p in paints if isinstance(p, dict) and p.get("visible") is not False]


def first_solid_color(paints):
    """Color of the first visible SOLID paint, or None."""
    for p in _visible(paints):
        if p.get("type") == "SOLID" and p.get("color"):
            return color_to_css(p.get("color"), p.get("opacity"))
    return None


# ===============================
# FILLS (backgrounds)
# ===============================

def _gradient_css(stops):
    if not isinstance(stops, list):
        return None
    parts = []
    for stop in stops:
        if not isinstance(stop, dict):
            logger.warning("[STYLE] Ignoring malformed gradient stop %r", stop)
            continue
        color = color_to_css(stop.get("color"))
        position = to_number(stop.get("position"))
        if not color or position is None:
            continue
        parts.append(f"{color} {fmt_number(position * 100)}%")
    if not parts:
        return None
    return f"linear-gradient(180deg, {', '.join(parts)})"


def parse_fills(fills) -> dict:
    # Only the first visible paint is composited.
    paints = _visible(fills)
    if not paints:
        return {}

    fill = paints[0]
    kind = fill.get("type")

    if kind == "SOLID":
        color = color_to_css(fill.get("color"), fill.get("opacity"))
        return {"backgroundColor": color} if color else {}

    if kind == "GRADIENT_LINEAR":
        gradient = _gradient_css(fill.get("gradientStops"))
        if gradient:
            return {"background": gradient}
        logger.warning("[STYLE] Linear gradient without usable stops, skipping background")
        return {}

    logger.debug("[STYLE] Unsupported fill type %s, skipping background", kind)
    return {}


# ===============================
# STROKES (borders)
# ===============================

def parse_strokes(strokes) -> dict:
    if not strokes or not isinstance(strokes, list):
        return {}

    s = strokes[0]
    if not isinstance(s, dict) or s.get("type") != "SOLID":
        return {}
    color = color_to_css(s.get("color"), s.get("opacity"))
    if not color:
        return {}

    weight = to_number(s.get("weight")) or 1
    return {
        "borderWidth": px(weight),
        "borderStyle": "solid",
        "borderColor": color,
        "boxSizing": "border-box",
    }


# ===============================
# EFFECTS (shadow)
# ===============================

def parse_effects(effects) -> dict:
    if not effects or not isinstance(effects, list):
        return {}

    for e in effects:
        if not isinstance(e, dict) or e.get("type") != "DROP_SHADOW":
            continue
        if e.get("visible") is False:
            continue

        offset = e.get("offset") or {}
        if not isinstance(offset, dict):
            logger.warning("[STYLE] Malformed shadow offset %r, using 0 0", offset)
            offset = {}
        x = to_number(offset.get("x"), 0)
        y = to_number(offset.get("y"), 0)
        blur = to_number(e.get("radius"), 0)
        color = color_to_css(e.get("color")) or DEFAULT_SHADOW_COLOR
        return {"boxShadow": f"{px(x)} {px(y)} {px(blur)} {color}"}

    return {}


# ===============================
# TYPOGRAPHY
# ===============================

# Order matters: compound names are checked before the plain word they contain.
FONT_WEIGHT_VOCABULARY = (
    (("thin", "hairline"), 100),
    (("extralight", "ultralight"), 200),
    (("light",), 300),
    (("semibold", "demibold", "demi"), 600),
    (("extrabold", "ultrabold"), 800),
    (("bold",), 700),
    (("medium",), 500),
    (("black", "heavy"), 900),
    (("regular", "normal", "book"), 400),
)

DEFAULT_FONT_WEIGHT = 400

TEXT_ALIGN = {
    "LEFT": "left",
    "CENTER": "center",
    "RIGHT": "right",
    "JUSTIFIED": "justify",
}


def convert_font_weight(value) -> int:
    if value is None or isinstance(value, bool):
        return DEFAULT_FONT_WEIGHT
    if isinstance(value, (int, float)):
        number = to_number(value)
        return int(number) if number is not None else DEFAULT_FONT_WEIGHT
    if not isinstance(value, str):
        return DEFAULT_FONT_WEIGHT

    m = re.match(r"^\s*(\d+(?:\.\d+)?)", value)
    if m:
        return int(float(m.group(1)))

    style = re.sub(r"[\s_-]", "", value.lower())
    for words, weight in FONT_WEIGHT_VOCABULARY:
        if any(w in style for w in words):
            return weight
    return DEFAULT_FONT_WEIGHT


def _font_name(node: dict) -> dict:
    font_name = node.get("fontName")
    if font_name is None:
        return {}
    if not isinstance(font_name, dict):
        logger.warning("[STYLE] Ignoring malformed fontName %r on '%s'", font_name, node.get("name"))
        return {}
    return font_name


def resolve_font_weight(node: dict) -> int:
    weight = node.get("fontWeight")
    if weight is None:
        weight = _font_name(node).get("style")
    return convert_font_weight(weight)


def clean_font_family(raw):
    if not raw or not isinstance(raw, str):
        return None
    family = raw.split(",")[0].replace("'", "").replace('"', "").strip()
    return family or None


def resolve_font_family(node: dict):
    return clean_font_family(node.get("fontFamily") or _font_name(node).get("family"))


def _unit(value: dict) -> str:
    unit = value.get("unit")
    return unit.upper() if isinstance(unit, str) and unit else "PIXELS"


def resolve_line_height(line_height, font_size):
    if isinstance(line_height, dict):
        unit = _unit(line_height)
        value = to_number(line_height.get("value"))
        if unit == "AUTO":
            return "normal"
        if value is not None and unit == "PERCENT":
            return f"{fmt_number(value)}%"
        if value is not None and unit == "PIXELS":
            return px(value)
    elif to_number(line_height) is not None:
        return px(line_height)

    if font_size:
        return px(font_size * LINE_HEIGHT_FALLBACK_RATIO)
    return None


def resolve_letter_spacing(letter_spacing):
    if isinstance(letter_spacing, dict):
        unit = _unit(letter_spacing)
        value = to_number(letter_spacing.get("value"))
        if not value:
            return None
        if unit == "PERCENT":
            # CSS letter-spacing takes no percent unit. Figma percent is a
            # fraction of the font size, so it maps onto em instead.
            return f"{fmt_number(value / 100, 4)}em"
        return px(value)

    value = to_number(letter_spacing)
    if not value:
        return None
    return px(value)


def resolve_text_align(align) -> str:
    if not align or not isinstance(align, str):
        return "left"
    return TEXT_ALIGN.get(align.upper(), align.lower())


def resolve_text_styles(node: dict) -> dict:
    font_size = to_number(node.get("fontSize"))
    styles = {}

    color = first_solid_color(node.get("fills"))
    if color:
        styles["color"] = color
    if font_size:
        styles["fontSize"] = px(font_size)

    family = resolve_font_family(node)
    if family:
        styles["fontFamily"] = family

    styles["fontWeight"] = resolve_font_weight(node)
    styles["textAlign"] = resolve_text_align(node.get("textAlign"))

    line_height = resolve_line_height(node.get("lineHeight"), font_size)
    if line_height:
        styles["lineHeight"] = line_height

    letter_spacing = resolve_letter_spacing(node.get("letterSpacing"))
    if letter_spacing:
        styles["letterSpacing"] = letter_spacing

    styles["whiteSpace"] = "pre-wrap"
    return styles


# ===============================
# AUTO-LAYOUT
# ===============================

PRIMARY_AXIS_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "SPACE_BETWEEN": "space-between",
}

COUNTER_AXIS_ALIGN = {
    "MIN": "flex-start",
    "CENTER": "center",
    "MAX": "flex-end",
    "BASELINE": "baseline",
}

PADDING_KEYS = ("paddingTop", "paddingRight", "paddingBottom", "paddingLeft")


def parse_auto_layout(node: dict) -> dict:
    if not is_auto_layout(node):
        return {}

    out = {
        "display": "flex",
        "flexDirection": "row" if node.get("layoutMode") == "HORIZONTAL" else "column",
        "boxSizing": "border-box",
    }

    for key in PADDING_KEYS:
        value = to_number(node.get(key), 0)
        if value:
            out[key] = px(value)

    gap = to_number(node.get("gap"), 0)
    if gap:
        out["gap"] = px(gap)

    justify = PRIMARY_AXIS_ALIGN.get(_enum_value(node, "primaryAxisAlignItems"))
    if justify:
        out["justifyContent"] = justify
    align = COUNTER_AXIS_ALIGN.get(_enum_value(node, "counterAxisAlignItems"))
    if align:
        out["alignItems"] = align

    return out


# ===============================
# POSITION
# ===============================

def parse_position(node: dict, context: RenderContext) -> dict:
    if context.mode is PositioningMode.ROOT:
        return {"position": "relative"}
    if context.mode is PositioningMode.FLOW:
        return {"position": "relative", "flexShrink": 0}

    x = to_number(node.get("x"), 0)
    y = to_number(node.get("y"), 0)
    return {
        "position": "absolute",
        "left": px(x - context.origin_x),
        "top": px(y - context.origin_y),
    }


def parse_rotation(node: dict) -> dict:
    rotation = to_number(node.get("rotation"), 0)
    if not rotation:
        return {}
    # Figma rotates counter-clockwise around the node's top-left corner.
    return {
        "transform": f"rotate({fmt_number(-rotation)}deg)",
        "transformOrigin": "top left",
    }


# ===============================
# NODE STYLES
# ===============================

def resolve_styles(node: dict, context: RenderContext, embedded_asset: bool = False) -> dict:
    """Flat React style mapping for one node.

    Background paint is left out for text nodes (their fill is the text
    color) and for nodes rendered from a pre-rendered asset.
    """
    styles = {
        "width": px(to_number(node.get("width"), 0)),
        "height": px(to_number(node.get("height"), 0)),
    }
    styles.update(parse_position(node, context))
    styles.update(parse_rotation(node))

    opacity = to_number(node.get("opacity"), 1)
    if opacity < 1:
        styles["opacity"] = opacity

    is_text = node.get("type") == TEXT_TYPE
    if not is_text and not embedded_asset:
        styles.update(parse_fills(node.get("fills")))

    styles.update(parse_strokes(node.get("strokes")))
    styles.update(parse_effects(node.get("effects")))

    radius = to_number(node.get("cornerRadius"), 0)
    if radius > 0:
        styles["borderRadius"] = px(radius)

    if is_text:
        styles.update(resolve_text_styles(node))

    layout = parse_auto_layout(node)
    if layout:
        styles.pop("left", None)
        styles.pop("top", None)
        styles["position"] = "relative"
        styles.update(layout)

    return styles
