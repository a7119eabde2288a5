"""Print the chunks of a PNG file.

Usage:
    png-chunks image.png

    # Or as a module:
    python -m PngViewer.chunk_dump image.png
"""

import argparse
import logging
import sys
from pathlib import Path

from .core.chunks import ImageData, Palette, iter_chunks
from .core.errors import PngError


def describe(chunk) -> str:
    """Return a one-line description of a decoded chunk value."""
    if isinstance(chunk, ImageData):
        return f"ImageData({len(chunk.data)} bytes)"
    if isinstance(chunk, Palette):
        return f"Palette({len(chunk)} entries)"
    return repr(chunk)


def main(argv=None):
    """Print one line per chunk; return 1 on the first error."""
    parser = argparse.ArgumentParser(prog="png-chunks", description="List the chunks of a PNG file.")
    parser.add_argument("file", help="PNG file to inspect")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    args = parser.parse_args(argv)

    logging.basicConfig(level=logging.DEBUG if args.debug else logging.WARNING)

    try:
        data = Path(args.file).read_bytes()
    except OSError as e:
        print(f"{args.file}: {e}", file=sys.stderr)
        return 1

    try:
        for offset, header, chunk in iter_chunks(data):
            flag = "critical" if header.critical else "ancillary"
            print(f"{offset:>10}  {header.name}  {header.length:>10}  {flag:<9}  {describe(chunk)}")
    except PngError as e:
        print(f"{args.file}: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
