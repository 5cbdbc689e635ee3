"""Serialize jHTML trees into HTML strings."""

from __future__ import annotations

import html
from typing import Any, List, Mapping

from .dom_model import (
    AttrPairs,
    DoctypeNode,
    Node,
    SequenceNode,
    TagNode,
    TextNode,
    attribute_items,
    classify,
    classify_tag,
    coerce_value,
)


def _render_attrs(attrs: AttrPairs, escape: bool) -> str:
    if not attrs:
        return ""
    parts: List[str] = []
    for name, value in attrs:
        text = coerce_value(value)
        if escape:
            text = html.escape(text, quote=True)
        parts.append(f'{name}="{text}"')
    return " " + " ".join(parts)


def _render_tag_node(node: TagNode, escape: bool) -> str:
    attrs = _render_attrs(node.attrs, escape)
    if node.body is None:
        return f"<{node.tag}{attrs} />"
    return f"<{node.tag}{attrs}>{render_node(node.body, escape=escape)}</{node.tag}>"


def render_node(node: Node | None, *, escape: bool = False) -> str:
    """Render an already classified node."""
    if node is None:
        return ""
    if isinstance(node, TextNode):
        # Text is emitted verbatim unless escaping was requested.
        return html.escape(node.text, quote=False) if escape else node.text
    if isinstance(node, SequenceNode):
        return "".join(render_node(child, escape=escape) for child in node.children)
    if isinstance(node, DoctypeNode):
        return f"<!DOCTYPE {node.declaration}>"
    if isinstance(node, TagNode):
        return _render_tag_node(node, escape)
    raise TypeError(f"Unsupported node type: {type(node).__name__}")


def render(value: Any, *, escape: bool = False) -> str:
    """Convert a parsed jHTML value into HTML.

    ``value`` may be a string (returned as is), a list of values (rendered
    and concatenated in order) or a tag object. Falsy values give ``""``.
    The whole tree is classified first, so an invalid tag object anywhere
    raises before any output is built.
    """
    return render_node(classify(value), escape=escape)


def render_tag(node: Mapping[str, Any], *, escape: bool = False) -> str:
    """Render a single tag object, including the ``doctype`` special case."""
    return render_node(classify_tag(node), escape=escape)


def format_attributes(source: Mapping[str, Any] | None, *, escape: bool = False) -> str:
    """Format the attribute fields of a tag object.

    Structural fields (``$``, ``elem``, ``body``) are skipped. The result is
    either ``""`` or a leading space followed by ``key="value"`` pairs in
    mapping order.
    """
    return _render_attrs(attribute_items(source), escape)


__all__ = ["format_attributes", "render", "render_node", "render_tag"]
