from enum import Enum

from Services.style_resolver import TEXT_TYPE

CONTAINER_TYPES = {
    "FRAME",
    "GROUP",
    "COMPONENT",
    "COMPONENT_SET",
    "INSTANCE",
    "SECTION",
}

BUTTON_KEYWORDS = ("button", "btn")
TEXT_FIELD_KEYWORDS = ("input", "field", "search")
CHECKBOX_KEYWORDS = ("checkbox", "tick")


class WidgetKind(Enum):
    BUTTON = "button"
    TEXT_FIELD = "text_field"
    CHECKBOX = "checkbox"
    TYPOGRAPHY = "typography"


def classify(node: dict):
    """Guess the UI widget a node stands for from its name and type.

    Name sniffing only: the first matching rule wins, and a node that
    matches nothing is rendered as plain structural markup (None).
    """
    name = (node.get("name") or "").lower()
    node_type = node.get("type")

    if any(k in name for k in BUTTON_KEYWORDS) and node_type in CONTAINER_TYPES:
        return WidgetKind.BUTTON

    if any(k in name for k in TEXT_FIELD_KEYWORDS):
        return WidgetKind.TEXT_FIELD

    if any(k in name for k in CHECKBOX_KEYWORDS):
        return WidgetKind.CHECKBOX

    if node_type == TEXT_TYPE:
        return WidgetKind.TYPOGRAPHY

    return None
