"""Node model for jHTML documents.

A parsed document is an untyped tree of strings, lists and mappings.
``classify`` turns it into the node dataclasses below in a single pass, so
rendering never inspects raw shapes again and a malformed tag object fails
before any markup is produced.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, List, Mapping, Tuple

from .errors import MissingTagName
from .models import (
    BODY_FIELDS,
    DEFAULT_DOCTYPE,
    DOCTYPE_SENTINEL,
    RESERVED_FIELDS,
    TAG_NAME_FIELDS,
)

AttrPairs = Tuple[Tuple[str, Any], ...]


@dataclass(frozen=True)
class TextNode:
    text: str


@dataclass(frozen=True)
class SequenceNode:
    children: Tuple["Node", ...] = ()


@dataclass(frozen=True)
class TagNode:
    tag: str
    attrs: AttrPairs = ()
    body: "Node | None" = None


@dataclass(frozen=True)
class DoctypeNode:
    declaration: str = DEFAULT_DOCTYPE


Node = TextNode | SequenceNode | TagNode | DoctypeNode


def is_blank(value: Any) -> bool:
    """Falsy values (NaN included) render as nothing; an empty mapping is still a tag object."""
    if isinstance(value, float) and math.isnan(value):
        return True
    return not value and not isinstance(value, Mapping)


def first_field(node: Mapping[str, Any], candidates: Tuple[str, ...]) -> Any:
    """Return the first non-blank value among ``candidates``, or None."""
    for name in candidates:
        value = node.get(name)
        if not is_blank(value):
            return value
    return None


def coerce_value(value: Any) -> str:
    """String form of a JSON value, the way a JavaScript template literal prints it."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "null"
    if isinstance(value, (list, tuple)):
        return ",".join("" if item is None else coerce_value(item) for item in value)
    if isinstance(value, float):
        return _number_text(value)
    return str(value)


def _number_text(value: float) -> str:
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"
    if value < 0:
        return "-" + _number_text(-value)

    # repr gives the shortest round-tripping digits; lay them out the way
    # JavaScript does: plain notation from 1e-6 up to 1e21, exponent otherwise.
    _, digits_tuple, exponent = Decimal(repr(value)).normalize().as_tuple()
    digits = "".join(str(digit) for digit in digits_tuple)
    point = exponent + len(digits)
    if len(digits) <= point <= 21:
        return digits + "0" * (point - len(digits))
    if 0 < point <= 21:
        return f"{digits[:point]}.{digits[point:]}"
    if -6 < point <= 0:
        return "0." + "0" * -point + digits
    power = point - 1
    sign = "+" if power >= 0 else "-"
    mantissa = digits if len(digits) == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{mantissa}e{sign}{abs(power)}"


def attribute_items(node: Mapping[str, Any] | None) -> AttrPairs:
    if not node:
        return ()
    return tuple((key, value) for key, value in node.items() if key not in RESERVED_FIELDS)


def classify_tag(value: Any) -> TagNode | DoctypeNode:
    if not isinstance(value, Mapping):
        raise MissingTagName(value)

    tag = first_field(value, TAG_NAME_FIELDS)
    if tag is None:
        raise MissingTagName(value)
    body = first_field(value, BODY_FIELDS)

    # No attributes and no closing tag; the body is the raw declaration.
    if tag == DOCTYPE_SENTINEL:
        if body is None:
            return DoctypeNode()
        return DoctypeNode(declaration=coerce_value(body))

    return TagNode(
        tag=coerce_value(tag),
        attrs=attribute_items(value),
        body=classify(body),
    )


def classify(value: Any) -> Node | None:
    """Classify a parsed value; blank values give None."""
    if is_blank(value):
        return None
    if isinstance(value, str):
        return TextNode(value)
    if isinstance(value, (list, tuple)):
        children: List[Node] = []
        for item in value:
            child = classify(item)
            if child is not None:
                children.append(child)
        return SequenceNode(tuple(children))
    return classify_tag(value)


def contains_doctype(node: Node | None) -> bool:
    if isinstance(node, DoctypeNode):
        return True
    if isinstance(node, SequenceNode):
        return any(contains_doctype(child) for child in node.children)
    if isinstance(node, TagNode):
        return contains_doctype(node.body)
    return False
