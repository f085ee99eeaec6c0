"""Example filter plugin for RasterScopeViewer.

Files starting with an underscore are skipped by the loader. To use this
example:
1. Copy this file and rename it (e.g., my_filter.py)
2. Modify apply() to implement your filter
3. Restart the viewer or use File > Load filter plugins...

apply() receives a read-only RasterBuffer. It may return a new RasterBuffer
or a 2-D uint8 NumPy array. Anything else, or an exception, is reported as
a filter error and the current image is kept.
"""

import numpy as np

NAME = "Box blur 3x3"
DESCRIPTION = "Mean of each 3x3 neighbourhood"


def apply(image):
    src = image.pixels.astype(np.float64)
    padded = np.pad(src, 1, mode="edge")
    h, w = src.shape
    acc = np.zeros_like(src)
    for dy in range(3):
        for dx in range(3):
            acc += padded[dy : dy + h, dx : dx + w]
    return image.with_pixels(np.rint(acc / 9.0).astype(np.uint8))
