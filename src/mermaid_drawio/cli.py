#!/usr/bin/env python3
"""
Mermaid to draw.io - Command Line Converter

Renders a Mermaid flowchart with mermaid-cli and writes an editable
draw.io diagram.
"""

import argparse
import asyncio
import logging
import sys

from . import __version__, config
from .converter import convert_file
from .extractor import ExtractionError
from .renderer import RenderError


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="mermaid-drawio",
        description="Convert a Mermaid flowchart into an editable draw.io diagram",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Convert a flowchart
  mermaid-drawio -i flow.mmd -o flow.drawio

  # Keep the boxes exactly as drawn (no automatic Start/End)
  mermaid-drawio -i flow.mmd -o flow.drawio --no-start-end

  # Use npx instead of a global mermaid-cli install
  MERMAID_CLI="npx -y @mermaid-js/mermaid-cli" mermaid-drawio -i flow.mmd -o flow.drawio

Note: requires mermaid-cli (npm install -g @mermaid-js/mermaid-cli).
"""
    )
    parser.add_argument("-i", "--input", required=True, help="Input .mmd file")
    parser.add_argument("-o", "--output", required=True, help="Output .drawio file")
    parser.add_argument(
        "--no-start-end",
        dest="add_start_end",
        action="store_false",
        help="Do not add Start/End nodes when the flowchart has none"
    )
    parser.add_argument(
        "--mxfile",
        action="store_true",
        help="Wrap the model in an <mxfile><diagram> envelope"
    )
    parser.add_argument(
        "--keep-svg",
        metavar="PATH",
        default=None,
        help="Also save the intermediate SVG rendered by mermaid-cli"
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"%(prog)s {__version__}"
    )
    return parser


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=config.log_level(),
        format="%(message)s",
        stream=sys.stderr,
    )

    try:
        result = asyncio.run(convert_file(
            args.input,
            args.output,
            add_start_end=args.add_start_end,
            keep_svg=args.keep_svg,
            mxfile=args.mxfile,
        ))
    except FileNotFoundError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except RenderError as e:
        print(f"Error: {e}", file=sys.stderr)
        if e.stderr:
            print(e.stderr.rstrip(), file=sys.stderr)
        return 1
    except ExtractionError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    except OSError as e:
        print(f"Error: Failed to write output: {e}", file=sys.stderr)
        return 1

    print(f"Success! Diagram converted and saved to: {result.output_path}")
    return 0


def main_entry():
    sys.exit(main())


if __name__ == "__main__":
    main_entry()
