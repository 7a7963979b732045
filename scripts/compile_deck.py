#!/usr/bin/env python3
"""
scripts/compile_deck.py — Compile a slide file and export it.

Parses SOURCE (following its :im imports), prints a summary, and writes
any requested exports. Exits with status 1 and a line-numbered
diagnostic if the deck does not compile.

Usage:
    python scripts/compile_deck.py talk.txt --pptx ./output
    python scripts/compile_deck.py talk.txt --json talk.json --dsl normalized.txt

Options:
    --json PATH    Write the document model as JSON
    --dsl PATH     Write the normalized slide-language text
    --pptx DIR     Render a .pptx into DIR
    --verbose      Show debug logging
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from slidy.dsl.errors import SlideError  # noqa: E402
from slidy.dsl.parser import SlideParser  # noqa: E402
from slidy.dsl.serializer import SlideSerializer  # noqa: E402


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        description="Compile a slide file into a document and export it.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    ap.add_argument("source", help="Slide file to compile")
    ap.add_argument("--json", dest="json_path", default=None, help="Write the document as JSON")
    ap.add_argument("--dsl", dest="dsl_path", default=None, help="Write normalized slide text")
    ap.add_argument("--pptx", dest="pptx_dir", default=None, help="Render a .pptx into this directory")
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        document = SlideParser().parse_file(args.source)
    except SlideError as e:
        print(f"ERROR: {e}", file=sys.stderr)
        return 1

    blocks = sum(len(s.blocks) for s in document.slides)
    print(f"{args.source}: {len(document.slides)} slides, {blocks} blocks")

    if args.json_path:
        Path(args.json_path).write_text(document.to_json(), encoding="utf-8")
        print(f"JSON     : {args.json_path}")
    if args.dsl_path:
        Path(args.dsl_path).write_text(SlideSerializer().serialize(document), encoding="utf-8")
        print(f"Slides   : {args.dsl_path}")
    if args.pptx_dir:
        from slidy.renderer.pptx_renderer import render

        print(f"PPTX     : {render(document, Path(args.pptx_dir))}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
