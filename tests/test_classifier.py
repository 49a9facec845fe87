"""Tests for Services.classifier: name/type heuristics for widget kinds."""

import pytest

from Services.classifier import WidgetKind, classify


def _node(name, node_type="FRAME"):
    return {"name": name, "type": node_type}


class TestClassify:
    @pytest.mark.parametrize("name, node_type, expected", [
        ("Submit Button", "FRAME", WidgetKind.BUTTON),
        ("BTN primary", "INSTANCE", WidgetKind.BUTTON),
        ("Email Input", "RECTANGLE", WidgetKind.TEXT_FIELD),
        ("search bar", "FRAME", WidgetKind.TEXT_FIELD),
        ("Checkbox/checked", "COMPONENT", WidgetKind.CHECKBOX),
        ("Tick", "VECTOR", WidgetKind.CHECKBOX),
        ("Heading", "TEXT", WidgetKind.TYPOGRAPHY),
        ("Icon", "VECTOR", None),
        ("Card", "FRAME", None),
    ])
    def test_rules(self, name, node_type, expected):
        assert classify(_node(name, node_type)) is expected

    def test_button_requires_container_type(self):
        # A text layer called "Button" is still just text.
        assert classify(_node("Button", "TEXT")) is WidgetKind.TYPOGRAPHY
        assert classify(_node("Button", "VECTOR")) is None

    def test_first_rule_wins(self):
        assert classify(_node("Search Button", "FRAME")) is WidgetKind.BUTTON
        assert classify(_node("Search checkbox", "FRAME")) is WidgetKind.TEXT_FIELD

    def test_missing_name(self):
        assert classify({"type": "FRAME"}) is None

    def test_stable_across_calls(self):
        node = _node("Field / tick", "GROUP")
        results = {classify(node) for _ in range(5)}
        assert results == {WidgetKind.TEXT_FIELD}
