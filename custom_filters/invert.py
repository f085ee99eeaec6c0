"""Invert filter plugin.

Plugins in this directory are loaded by FilterRegistry.load_directory when
the viewer starts. Each module defines ``apply(image)`` taking and
returning a RasterBuffer; ``NAME`` and ``DESCRIPTION`` are optional.
"""

NAME = "Invert"
DESCRIPTION = "Replace each intensity v with 255 - v"


def apply(image):
    return image.with_pixels(255 - image.pixels)
