"""Compilation pipeline from jHTML source text to HTML."""

from __future__ import annotations

from pathlib import Path

import json5

from .dom_model import Node, classify
from .io_utils import read_source
from .models import DOCTYPE_PREFIX, CompileOptions
from .serialize import render_node


def load_document(src_text: str) -> Node | None:
    """Parse JSON5 source and classify it; both steps raise before any output."""
    return classify(json5.loads(src_text))


def render_document(node: Node | None, options: CompileOptions | None = None) -> str:
    options = options or CompileOptions()
    html_text = render_node(node, escape=options.escape)
    if options.doctype:
        return DOCTYPE_PREFIX + html_text
    return html_text


def compile(src_text: str, options: CompileOptions | None = None) -> str:
    """Compile JSON5 source text into HTML.

    Parse errors from ``json5`` propagate unchanged. With ``options.doctype``
    a ``<!DOCTYPE html>`` prefix is always added, even when the document
    already contains a doctype node.
    """
    return render_document(load_document(src_text), options)


def compile_file(path: Path | str, options: CompileOptions | None = None) -> str:
    return compile(read_source(path), options)


def write_html(out: Path | str, html_text: str) -> Path:
    out_path = Path(out)
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(html_text, encoding="utf-8")
    return out_path


def build_file(src: Path | str, out: Path | str, options: CompileOptions | None = None) -> Path:
    """Compile ``src`` and write the HTML to ``out``."""
    return write_html(out, compile_file(src, options))


__all__ = ["build_file", "compile", "compile_file", "load_document", "render_document", "write_html"]
