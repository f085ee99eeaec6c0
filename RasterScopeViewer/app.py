"""Application entry point.

This module provides the main() function that parses the command line,
configures logging, initializes the Qt application and displays the
ImageViewer window.

Usage:
    rasterscope [path] [--width 2082 --height 2217 ...]

    # Or as a module:
    python -m RasterScopeViewer.app frame.edf

    # Or from Python:
    from RasterScopeViewer import main
    main()
"""

import argparse
import logging
import sys
from pathlib import Path

from .core.constants import RAW_HEADER_OFFSET, RAW_HEIGHT, RAW_PIXEL_STRIDE, RAW_WIDTH
from .core.image_io import RawFormat
from .core.session import ImageSession
from .logging_config import LOG_LEVELS, setup_logging

logger = logging.getLogger(__name__)

# Plugin directory shipped next to the package (source checkouts)
DEFAULT_FILTERS_DIR = Path(__file__).resolve().parent.parent / "custom_filters"


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(prog="rasterscope", description="Raw raster viewer with radial profile analysis")
    p.add_argument("path", nargs="?", help="raw image to open")
    p.add_argument("--header-offset", type=int, default=RAW_HEADER_OFFSET, help="bytes to skip before pixel data")
    p.add_argument("--width", type=int, default=RAW_WIDTH, help="image width in pixels")
    p.add_argument("--height", type=int, default=RAW_HEIGHT, help="image height in pixels")
    p.add_argument("--stride", type=int, default=RAW_PIXEL_STRIDE, help="bytes per pixel group (B, G, R, A, ...)")
    p.add_argument("--filters-dir", type=Path, default=None, help="directory of filter plugins to load")
    p.add_argument("--log-level", default="INFO", type=str.upper, choices=LOG_LEVELS)
    p.add_argument("--log-file", default=None, help="also write logs to this file")
    return p


def create_session(args) -> ImageSession:
    """Build an ImageSession from parsed command-line arguments."""
    fmt = RawFormat(args.header_offset, args.width, args.height, args.stride)
    session = ImageSession(raw_format=fmt)
    filters_dir = args.filters_dir
    if filters_dir is None and DEFAULT_FILTERS_DIR.is_dir():
        filters_dir = DEFAULT_FILTERS_DIR
    if filters_dir is not None:
        session.filters.load_directory(filters_dir)
    return session


def main(argv=None):
    """Run the image viewer application.

    Args:
        argv: Command-line arguments (defaults to sys.argv)

    Returns:
        Exit code from QApplication.exec()
    """
    if argv is None:
        argv = sys.argv
    args = build_parser().parse_args(argv[1:])
    setup_logging(args.log_level, args.log_file)

    from PySide6.QtWidgets import QApplication
    from .ui.viewer import ImageViewer

    app = QApplication(argv[:1])
    session = create_session(args)
    w = ImageViewer(session)
    w.show()
    if args.path:
        w.open_path(args.path)
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
