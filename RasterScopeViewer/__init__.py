"""RasterScopeViewer - a raw raster viewer with radial intensity analysis.

This package provides a Qt-based viewer for a fixed-layout legacy raw
format with the following features:

Core Features:
    - Raw (B, G, R, A) raster decoding to 8-bit luma intensity
    - Zoom in/out and fit-to-window
    - Drag selection, copy/cut/paste with AND/OR/XOR/BLEND compositing
    - Rotate, flip, crop, resize and plugin filters with 16-step undo

Analysis Tools:
    - Circular average at a radius with per-pixel deduplication
    - Radial profile sweeps with CSV export
    - Intensity histogram and statistics

Package Structure:
    - core/: UI-independent model, decoding, editing and analysis
    - ui/: PySide6 viewer, widgets and dialogs

Quick Start:
    from RasterScopeViewer import main
    main()

Dependencies:
    - PySide6: Qt for Python
    - numpy: Array operations
    - opencv-python-headless: Resampling
    - pyqtgraph: Profile and histogram plots
"""

from .core import (
    RasterBuffer,
    Rect,
    ImageSession,
    BlendMode,
    RawFormat,
    decode_raw,
    load_raw_file,
    circular_average,
    radial_sweep,
    profile_to_csv,
)

__version__ = "0.1.0"
__all__ = [
    "main",
    "RasterBuffer",
    "Rect",
    "ImageSession",
    "BlendMode",
    "RawFormat",
    "decode_raw",
    "load_raw_file",
    "circular_average",
    "radial_sweep",
    "profile_to_csv",
]


def main(argv=None):
    """Start the viewer (imports Qt on first use)."""
    from .app import main as _main

    return _main(argv)
