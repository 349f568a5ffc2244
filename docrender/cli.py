#!/usr/bin/env python3
"""
docrender CLI

Command-line interface for rendering a markdown document into one
standalone, self-contained HTML file.

Usage:
    python -m docrender                      # doc.md + pandoc.css -> rust-cheatsheet.html
    python -m docrender notes.md -o notes.html
    python -m docrender doc.md --engine markdown
    python -m docrender --engines

Options:
    -o, --output FILE    Output HTML file (default: rust-cheatsheet.html)
    -c, --css FILE       Stylesheet to embed (default: pandoc.css)
    --title TEXT         Document title (default: "Rust Cheatsheet 🦀")
    --engine NAME        pandoc, markdown or auto (default: pandoc)
    --pandoc PATH        pandoc executable to run
    --engines            Show the conversion engines and exit
"""

import argparse
import sys

from .core import ENGINES, DocumentRenderer
from .errors import RenderError
from .job import (
    DEFAULT_ENGINE,
    DEFAULT_OUTPUT,
    DEFAULT_SOURCE,
    DEFAULT_STYLESHEET,
    DEFAULT_TITLE,
    RenderJob,
)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="docrender",
        description=(
            "Standalone Markdown-to-HTML Renderer\n\n"
            "Renders a markdown document with hard line breaks into a single\n"
            "self-contained HTML page with the stylesheet and every other\n"
            "resource embedded."
        ),
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "Examples:\n"
            "  python -m docrender\n"
            "  python -m docrender notes.md -o notes.html --title \"My Notes\"\n"
            "  python -m docrender doc.md -c dark.css\n"
            "  python -m docrender doc.md --engine markdown    # no pandoc needed\n"
            "  python -m docrender --engines\n"
        ),
    )

    parser.add_argument(
        "source",
        nargs="?",
        default=DEFAULT_SOURCE,
        help=f"Markdown file to render (default: {DEFAULT_SOURCE})",
    )
    parser.add_argument(
        "-o", "--output",
        default=DEFAULT_OUTPUT,
        help=f"Output HTML file (default: {DEFAULT_OUTPUT})",
    )
    parser.add_argument(
        "-c", "--css",
        default=DEFAULT_STYLESHEET,
        help=f"Stylesheet to embed (default: {DEFAULT_STYLESHEET})",
    )
    parser.add_argument(
        "--title",
        default=DEFAULT_TITLE,
        help=f"Document title (default: {DEFAULT_TITLE})",
    )
    parser.add_argument(
        "--engine",
        choices=ENGINES,
        default=DEFAULT_ENGINE,
        help=f"Conversion engine (default: {DEFAULT_ENGINE})",
    )
    parser.add_argument(
        "--pandoc",
        default=None,
        help="pandoc executable to run (default: pandoc on PATH)",
    )
    parser.add_argument(
        "--engines",
        action="store_true",
        help="Show the available conversion engines and exit",
    )
    return parser


def main(argv: list[str] = None) -> int:
    args = build_parser().parse_args(argv)

    renderer = DocumentRenderer(engine=args.engine, pandoc_path=args.pandoc)

    if args.engines:
        _show_engines(renderer)
        return 0

    job = RenderJob(
        source=args.source,
        stylesheet=args.css,
        output=args.output,
        title=args.title,
    )

    print("=" * 60)
    print("  DOCRENDER - Standalone Markdown-to-HTML Renderer")
    print("=" * 60)
    print()

    try:
        out_path = renderer.render(job)
    except FileNotFoundError as e:
        print(f"[ERROR] {args.source}: {e}", file=sys.stderr)
        return 1
    except RenderError as e:
        print(f"[ERROR] {args.source}: {e}", file=sys.stderr)
        return e.exit_code
    except RuntimeError as e:
        # missing optional library
        print(f"[ERROR] {args.source}: {e}", file=sys.stderr)
        return 1

    print()
    print("-" * 60)
    print(f"  Done: {out_path}")
    print("-" * 60)
    return 0


def _show_engines(renderer: DocumentRenderer):
    """Display every engine and whether it can run here."""
    print("\nConversion Engines:")
    print("-" * 40)
    for name, description in renderer.available_engines().items():
        print(f"  {name:<10} {description or 'not available'}")
    print(f"  {'auto':<10} pandoc when installed, otherwise markdown")
    print()


if __name__ == "__main__":
    sys.exit(main())
