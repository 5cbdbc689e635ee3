"""Command-line interface for jhtml."""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any, Iterable, Optional

import yaml
from pydantic import ValidationError

from .compile_pipeline import load_document, render_document, write_html
from .dom_model import contains_doctype
from .io_utils import STDIN_MARKER, read_source, warn
from .models import CompileOptions


def _load_options(config_path: Optional[Path]) -> CompileOptions:
    if config_path is None:
        return CompileOptions()
    if not config_path.exists():
        raise SystemExit(f"Config file not found: {config_path}")
    payload: Any = yaml.safe_load(config_path.read_text(encoding="utf-8")) or {}
    if not isinstance(payload, dict):
        raise SystemExit(f"{config_path} must contain a mapping of options.")
    try:
        return CompileOptions.model_validate(payload)
    except ValidationError as exc:
        raise SystemExit(f"Invalid config in {config_path}: {exc}") from exc


def _resolve_options(args: argparse.Namespace) -> CompileOptions:
    options = _load_options(args.config)
    overrides = {
        key: getattr(args, key)
        for key in ("doctype", "escape")
        if getattr(args, key) is not None
    }
    if overrides:
        options = options.model_copy(update=overrides)
    return options


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="jhtml",
        description="Compile a jHTML document (JSON5 tag objects) into HTML.",
    )
    parser.add_argument(
        "source",
        help=f"Path to the jHTML source file, or {STDIN_MARKER} to read standard input.",
    )
    parser.add_argument(
        "-o",
        "--out",
        type=Path,
        default=None,
        help="File to write the HTML to. Defaults to standard output.",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="YAML file with compile options (doctype, escape).",
    )
    parser.add_argument(
        "--doctype",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="Prepend <!DOCTYPE html> to the output.",
    )
    parser.add_argument(
        "--escape",
        action=argparse.BooleanOptionalAction,
        default=None,
        help="HTML-escape text and attribute values.",
    )
    return parser


def main(argv: Optional[Iterable[str]] = None) -> None:
    parser = build_parser()
    args = parser.parse_args(list(argv) if argv is not None else None)
    options = _resolve_options(args)

    try:
        src_text = read_source(args.source)
    except FileNotFoundError as exc:
        raise SystemExit(f"Source file not found: {args.source}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise SystemExit(f"Cannot read {args.source}: {exc}") from exc

    try:
        document = load_document(src_text)
    except ValueError as exc:
        # json5 syntax errors and MissingTagName are both ValueErrors.
        raise SystemExit(f"Failed to compile {args.source}: {exc}") from exc

    if options.doctype and contains_doctype(document):
        warn(f"{args.source}: --doctype added a second doctype declaration")

    html_text = render_document(document, options)
    if args.out is not None:
        write_html(args.out, html_text)
    else:
        sys.stdout.write(html_text + "\n")


__all__ = ["build_parser", "main"]


if __name__ == "__main__":
    main()
