#!/usr/bin/env python3
"""
scripts/run_slidy.py — Parse a slidy deck and dump or render it.

Usage:
    python scripts/run_slidy.py deck.slidy                    # parse and summarize
    python scripts/run_slidy.py deck.slidy --json             # dump interchange JSON
    python scripts/run_slidy.py deck.slidy --text             # dump normalized slidy text
    python scripts/run_slidy.py deck.slidy --pptx out.pptx    # render to PowerPoint
    python scripts/run_slidy.py deck.json --from-json --pptx out.pptx

Options:
    --json          Print the document as interchange JSON
    --text          Print the document as slidy text
    --pptx OUT      Render the document to a .pptx file
    --from-json     Read the input as an interchange JSON document
    --log-level LV  Logging level (default: WARNING)
    --verbose       Show debug logging
"""

import argparse
import logging
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from slidy.dsl.errors import SlidyError
from slidy.dsl.interchange import dump_json, load_json_file
from slidy.dsl.parser import SlidyParser
from slidy.dsl.serializer import SlidySerializer
from slidy.renderer.backend import get_backend

logger = logging.getLogger("slidy.cli")


def _summarize(slideshow) -> None:
    print(f"Slides   : {len(slideshow.slides)}")
    for idx, slide in enumerate(slideshow.slides):
        texts = sum(1 for s in slide.sections if s.is_text)
        figures = sum(1 for s in slide.sections if s.is_figure)
        print(f"  [{idx}] {texts} text, {figures} figure section(s)")


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(
        description="Parse a slidy deck and dump or render it.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    ap.add_argument("slide_path", help="Deck file (.slidy text, or JSON with --from-json)")
    ap.add_argument("--json", action="store_true", help="Print interchange JSON")
    ap.add_argument("--text", action="store_true", help="Print slidy text")
    ap.add_argument("--pptx", metavar="OUT", default=None, help="Render to a .pptx file")
    ap.add_argument("--from-json", action="store_true", help="Input is interchange JSON")
    ap.add_argument(
        "--log-level",
        default="WARNING",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Logging level (default: WARNING)",
    )
    ap.add_argument("--verbose", action="store_true", help="Enable debug logging")
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else getattr(logging, args.log_level),
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        if args.from_json:
            slideshow = load_json_file(args.slide_path)
        else:
            slideshow = SlidyParser().parse_file(args.slide_path)

        if args.json:
            print(dump_json(slideshow))
        if args.text:
            print(SlidySerializer().serialize(slideshow), end="")
        if args.pptx:
            backend = get_backend("pptx")
            backend.set_document(slideshow)
            out = backend.render(Path(args.pptx))
            print(f"Output   : {out}")
    except (SlidyError, OSError) as err:
        print(f"ERROR: {err}", file=sys.stderr)
        return 1

    if not (args.json or args.text or args.pptx):
        _summarize(slideshow)
    return 0


if __name__ == "__main__":
    sys.exit(main())
