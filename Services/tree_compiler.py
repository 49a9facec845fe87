"""
Node tree → JSX markup.

Walks the plugin's node tree depth-first and emits one JSX element per
visible node. Each node takes exactly one rendering path, in this order:

    invisible        -> nothing (whole subtree pruned)
    TEXT + content   -> <span> text leaf
    pre-rendered     -> asset leaf (inline SVG or <img>), children dropped
    anything else    -> structural container (<div>, or a widget element
                        picked by the classifier), children recursed

Emitted nodes get key="node_<n>" in pre-order; the counter lives on the
CompileContext of one compile_tree() call.
"""

import logging
from dataclasses import dataclass, field

from Services.asset_embedder import UseRaster, UseVector, embed, js_string
from Services.classifier import WidgetKind, classify
from Services.errors import InvalidTreeError
from Services.style_resolver import (
    TEXT_TYPE,
    PositioningMode,
    RenderContext,
    fmt_number,
    is_auto_layout,
    px,
    resolve_font_family,
    resolve_font_weight,
    resolve_styles,
    to_number,
)

logger = logging.getLogger(__name__)

INDENT = "  "
BASE_INDENT = " " * 6

BUTTON_RESET = {
    "padding": 0,
    "margin": 0,
    "border": "none",
    "background": "transparent",
    "font": "inherit",
    "cursor": "pointer",
}

LABEL_RESET = {
    "display": "block",
    "margin": 0,
}

INPUT_RESET = {
    "padding": 0,
    "margin": 0,
    "border": "none",
    "outline": "none",
    "background": "transparent",
}

FILL_BOX = {
    "position": "absolute",
    "left": 0,
    "top": 0,
    "width": "100%",
    "height": "100%",
}

SVG_BOX = {
    "width": "100%",
    "height": "100%",
    "display": "flex",
    "alignItems": "center",
    "justifyContent": "center",
    "overflow": "hidden",
}


@dataclass
class CompileContext:
    counter: int = 0
    fonts: dict = field(default_factory=dict)
    _decisions: dict = field(default_factory=dict, repr=False)

    def next_id(self) -> str:
        node_id = f"node_{self.counter}"
        self.counter += 1
        return node_id

    def use_font(self, node: dict):
        family = resolve_font_family(node)
        if not family:
            return
        self.fonts.setdefault(family, set()).add(resolve_font_weight(node))

    def embed(self, node: dict):
        key = id(node)
        if key not in self._decisions:
            self._decisions[key] = embed(node)
        return self._decisions[key]


@dataclass
class CompiledTree:
    markup: str
    roots: list
    fonts: dict


# ===============================
# JSX HELPERS
# ===============================

def _style_value(value) -> str:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return fmt_number(value)
    return js_string(value)


def _element(tag, pad, attrs=(), styles=None, children=()):
    lines = [f"{pad}<{tag}"]
    for attr in attrs:
        lines.append(f"{pad}{INDENT}{attr}")
    if styles:
        lines.append(pad + INDENT + "style={{")
        for key, value in styles.items():
            lines.append(f"{pad}{INDENT * 2}{key}: {_style_value(value)},")
        lines.append(pad + INDENT + "}}")

    children = [c for c in children if c]
    if not children:
        lines.append(f"{pad}/>")
        return "\n".join(lines)

    lines.append(f"{pad}>")
    lines.extend(children)
    lines.append(f"{pad}</{tag}>")
    return "\n".join(lines)


def _text_expression(text, pad) -> str:
    return pad + "{" + js_string(text) + "}"


def _key(node_id) -> str:
    return f'key="{node_id}"'


def _with_reset(reset: dict, styles: dict) -> dict:
    merged = dict(reset)
    merged.update(styles)
    return merged


# ===============================
# TREE HELPERS
# ===============================

def _is_visible(node) -> bool:
    return isinstance(node, dict) and node.get("visible") is not False


def _text_content(node):
    text = node.get("textContent")
    if isinstance(text, str) and text:
        return text
    return None


def _is_text_leaf(node) -> bool:
    return node.get("type") == TEXT_TYPE and _text_content(node) is not None


def _children(node) -> list:
    children = node.get("children")
    if not isinstance(children, list):
        return []
    return children


def first_text(node):
    """Content of the first visible TEXT descendant, pre-order."""
    for child in _children(node):
        if not _is_visible(child):
            continue
        if _is_text_leaf(child):
            return _text_content(child)
        found = first_text(child)
        if found:
            return found
    return None


def _child_context(node, origin_x=0, origin_y=0) -> RenderContext:
    if is_auto_layout(node):
        return RenderContext(PositioningMode.FLOW)
    return RenderContext(PositioningMode.ABSOLUTE, origin_x, origin_y)


# ===============================
# ROOT OFFSET
# ===============================

def root_offset(root: dict, ctx: CompileContext):
    """Shift that keeps every emitted canvas position non-negative.

    Covers the root's own x / y and the accumulated positions of all
    emitted descendants. Applied once, to the root's direct children.
    """
    if is_auto_layout(root):
        return 0, 0

    min_x = min(0, to_number(root.get("x"), 0))
    min_y = min(0, to_number(root.get("y"), 0))

    stack = [(child, 0, 0, False) for child in _children(root)]
    while stack:
        node, parent_x, parent_y, in_flow = stack.pop()
        if not _is_visible(node):
            continue
        # Flow children are placed by their parent, their own x / y never render.
        if in_flow:
            x, y = parent_x, parent_y
        else:
            x = parent_x + to_number(node.get("x"), 0)
            y = parent_y + to_number(node.get("y"), 0)
            min_x = min(min_x, x)
            min_y = min(min_y, y)
        if _is_text_leaf(node) or ctx.embed(node) is not None:
            continue
        flow = is_auto_layout(node)
        stack.extend((child, x, y, flow) for child in _children(node))

    return abs(min_x), abs(min_y)


# ===============================
# RENDERING PATHS
# ===============================

def _text_leaf(node, ctx, render, pad) -> str:
    node_id = ctx.next_id()
    ctx.use_font(node)
    styles = resolve_styles(node, render)
    return _element(
        "span",
        pad,
        attrs=[_key(node_id)],
        styles=styles,
        children=[_text_expression(_text_content(node), pad + INDENT)],
    )


def _asset_leaf(node, decision, ctx, render, pad) -> str:
    node_id = ctx.next_id()
    styles = resolve_styles(node, render, embedded_asset=True)
    inner_pad = pad + INDENT

    if isinstance(decision, UseVector):
        inner = _element(
            "div",
            inner_pad,
            attrs=["dangerouslySetInnerHTML={{ __html: `" + decision.markup + "` }}"],
            styles=SVG_BOX,
        )
    else:
        inner = _element(
            "img",
            inner_pad,
            attrs=[
                "src={" + js_string(decision.src) + "}",
                "alt={" + js_string(node.get("name") or "") + "}",
            ],
            styles={"width": "100%", "height": "100%", "objectFit": decision.fit},
        )

    return _element("div", pad, attrs=[_key(node_id)], styles=styles, children=[inner])


def _text_input(node, text_child, ctx, render, pad) -> str:
    """A text field's placeholder text rendered as the <input> itself."""
    node_id = ctx.next_id()
    ctx.use_font(text_child)
    styles = resolve_styles(text_child, render)
    styles.pop("whiteSpace", None)

    if render.parent_uses_flow:
        styles.pop("width", None)
        styles.pop("flexShrink", None)
        styles["flex"] = 1
        styles["minWidth"] = 0
    else:
        left = to_number(text_child.get("x"), 0) - render.origin_x
        available = to_number(node.get("width"), 0) - left
        if available > to_number(text_child.get("width"), 0):
            styles["width"] = px(available)

    return _element(
        "input",
        pad,
        attrs=[
            _key(node_id),
            'type="text"',
            "placeholder={" + js_string(_text_content(text_child)) + "}",
        ],
        styles=_with_reset(INPUT_RESET, styles),
    )


def _container(node, ctx, render, pad, depth, child_render) -> str:
    node_id = ctx.next_id()
    kind = classify(node)
    styles = resolve_styles(node, render)
    child_pad = pad + INDENT
    children = []

    if kind is WidgetKind.BUTTON:
        tag = "button"
        attrs = [_key(node_id), 'type="button"']
        label = first_text(node)
        if label:
            attrs.append("aria-label={" + js_string(label) + "}")
        styles = _with_reset(BUTTON_RESET, styles)

    elif kind is WidgetKind.TEXT_FIELD:
        tag = "label"
        attrs = [_key(node_id)]
        styles = _with_reset(LABEL_RESET, styles)
        placeholder = next(
            (c for c in _children(node) if _is_visible(c) and _is_text_leaf(c)),
            None,
        )
        if placeholder is None:
            children.append(_element(
                "input",
                child_pad,
                attrs=[f'key="{node_id}_input"', 'type="text"'],
                styles=_with_reset(INPUT_RESET, FILL_BOX),
            ))
        for child in _children(node):
            if child is placeholder:
                children.append(_text_input(node, child, ctx, child_render, child_pad))
            else:
                children.append(compile_node(child, ctx, child_render, depth + 1))
        return _element(tag, pad, attrs=attrs, styles=styles, children=children)

    elif kind is WidgetKind.CHECKBOX:
        tag = "label"
        attrs = [_key(node_id)]
        styles = _with_reset(LABEL_RESET, styles)
        styles["cursor"] = "pointer"
        children.append(_element(
            "input",
            child_pad,
            attrs=[
                f'key="{node_id}_input"',
                'type="checkbox"',
                "aria-label={" + js_string(node.get("name") or "") + "}",
            ],
            styles={**FILL_BOX, "margin": 0, "opacity": 0, "cursor": "pointer"},
        ))

    else:
        tag = "span" if node.get("type") == TEXT_TYPE else "div"
        attrs = [_key(node_id)]

    for child in _children(node):
        children.append(compile_node(child, ctx, child_render, depth + 1))

    return _element(tag, pad, attrs=attrs, styles=styles, children=children)


# ===============================
# DRIVER
# ===============================

def compile_node(node, ctx: CompileContext, render: RenderContext, depth: int = 0,
                 child_origin=(0, 0)) -> str:
    """JSX for one node and its subtree ("" when pruned).

    child_origin is subtracted from the coordinates of this node's
    absolutely positioned children.
    """
    if not _is_visible(node):
        return ""

    pad = BASE_INDENT + INDENT * depth

    if _is_text_leaf(node):
        return _text_leaf(node, ctx, render, pad)

    decision = ctx.embed(node)
    if decision is not None:
        return _asset_leaf(node, decision, ctx, render, pad)

    child_render = _child_context(node, *child_origin)
    return _container(node, ctx, render, pad, depth, child_render)


def compile_root(root: dict, ctx: CompileContext) -> str:
    offset_x, offset_y = root_offset(root, ctx)
    if offset_x or offset_y:
        logger.info(
            "[COMPILE] Shifting '%s' content by (%s, %s) to keep it on canvas",
            root.get("name"), fmt_number(offset_x), fmt_number(offset_y),
        )
    return compile_node(
        root,
        ctx,
        RenderContext(PositioningMode.ROOT),
        depth=0,
        child_origin=(-offset_x, -offset_y),
    )


def compile_tree(roots) -> CompiledTree:
    if isinstance(roots, dict):
        roots = [roots]
    if not roots:
        raise InvalidTreeError("No data provided")
    for root in roots:
        if not isinstance(root, dict):
            raise InvalidTreeError(f"Root node must be an object, got {type(root).__name__}")

    ctx = CompileContext()
    parts = [compile_root(root, ctx) for root in roots]
    markup = "\n".join(p for p in parts if p)

    logger.info("[COMPILE] Emitted %d node(s) from %d root(s)", ctx.counter, len(roots))
    return CompiledTree(markup=markup, roots=list(roots), fonts=ctx.fonts)
