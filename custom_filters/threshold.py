"""Binary threshold filter plugin."""

import numpy as np

NAME = "Threshold (128)"
DESCRIPTION = "Pixels >= 128 become 255, the rest 0"

LEVEL = 128


def apply(image):
    return np.where(image.pixels >= LEVEL, 255, 0).astype(np.uint8)
