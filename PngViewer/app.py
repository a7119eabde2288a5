"""Application entry point.

This module provides the main() function that initializes the Qt application
and displays the ImageViewer window.

Usage:
    png-viewer [image.png]

    # Or as a module:
    python -m PngViewer.app image.png

    # Or from Python:
    from PngViewer import main
    main()
"""

import argparse
import logging
import sys

from PySide6.QtWidgets import QApplication

from .ui.viewer import ImageViewer


def parse_args(argv):
    parser = argparse.ArgumentParser(prog="png-viewer", description="Show PNG images.")
    parser.add_argument("files", nargs="*", help="PNG files to open (the last one is shown)")
    parser.add_argument("--debug", action="store_true", help="enable debug logging")
    # Qt consumes its own options (-platform, -style, ...) from the raw argv
    args, _ = parser.parse_known_args(argv)
    return args


def main(argv=None):
    """Run the image viewer application.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code from QApplication.exec()
    """
    if argv is None:
        argv = sys.argv
    args = parse_args(argv[1:])
    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = QApplication(argv)
    w = ImageViewer()
    w.show()
    w.open_paths(args.files)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
