"""Application-wide constants for RasterScopeViewer.

This module contains shared constants used across the application.
"""

# Legacy raw raster layout (EDF-style detector dump)
RAW_HEADER_OFFSET = 3072
RAW_WIDTH = 2082
RAW_HEIGHT = 2217
RAW_PIXEL_STRIDE = 4  # B, G, R, A

# Luma weights applied to (R, G, B)
LUMA_WEIGHTS = (0.299, 0.587, 0.114)

MAX_INTENSITY = 255

# Zoom
ZOOM_STEP = 1.2
MIN_ZOOM_SCALE = 0.01

# Initial viewport used before the window reports its real size
DEFAULT_VIEWPORT = (800, 600)

# Undo history depth
HISTORY_CAPACITY = 16

# Circular sampling never uses fewer points than this
MIN_CIRCLE_SAMPLES = 8
