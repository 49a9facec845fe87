import re
from dataclasses import dataclass

from config import DEFAULT_COMPONENT_NAME
from Services.style_resolver import first_solid_color, px, to_number
from Services.tree_compiler import CompiledTree


@dataclass(frozen=True)
class OutputUnit:
    name: str
    component_code: str
    stylesheet: str

    @property
    def component_filename(self) -> str:
        return f"{self.name}.jsx"

    @property
    def stylesheet_filename(self) -> str:
        return f"{self.name}.css"


def sanitize_component_name(name) -> str:
    cleaned = re.sub(r"[^a-zA-Z0-9]", "", name or "")
    if not cleaned:
        return DEFAULT_COMPONENT_NAME
    if not cleaned[0].isalpha():
        cleaned = "Component" + cleaned
    # JSX treats lower-case tags as DOM elements.
    return cleaned[0].upper() + cleaned[1:]


def container_class(name: str) -> str:
    return f"{name.lower()}-container"


def build_component_code(markup: str, name: str) -> str:
    return "\n".join([
        "import React from 'react';",
        f"import './{name}.css';",
        "",
        f"const {name} = () => {{",
        "  return (",
        f'    <div className="{container_class(name)}">',
        *([markup] if markup else []),
        "    </div>",
        "  );",
        "};",
        "",
        f"export default {name};",
        "",
    ])


def build_stylesheet(compiled: CompiledTree, name: str, font_css: str = "") -> str:
    root = compiled.roots[0] if compiled.roots else {}
    background = first_solid_color(root.get("fills")) or "transparent"

    rule = "\n".join([
        f".{container_class(name)} {{",
        "  position: relative;",
        f"  width: {px(to_number(root.get('width'), 0))};",
        f"  height: {px(to_number(root.get('height'), 0))};",
        f"  background: {background};",
        "  box-sizing: border-box;",
        "}",
        "",
    ])

    font_css = (font_css or "").strip()
    if font_css:
        return font_css + "\n\n" + rule
    return rule


def assemble(compiled: CompiledTree, name, font_css: str = "") -> OutputUnit:
    component_name = sanitize_component_name(name)
    return OutputUnit(
        name=component_name,
        component_code=build_component_code(compiled.markup, component_name),
        stylesheet=build_stylesheet(compiled, component_name, font_css),
    )
