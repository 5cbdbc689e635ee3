"""Errors raised while compiling jHTML documents."""

from __future__ import annotations

from typing import Any


class MissingTagName(ValueError):
    """A tag object has no usable tag name and is not a doctype."""

    def __init__(self, node: Any) -> None:
        self.node = node
        super().__init__(
            f"Object must have a $ or elem property that is the tag name, got {node!r}"
        )
