"""CSV export of radial profiles.

Produces a table with columns ``R, avg, samples``, one row per sample point.
NaN averages are written as empty cells so gaps survive the round trip into
spreadsheets.
"""

from __future__ import annotations

import logging
import math
from pathlib import Path
from typing import Union

from .radial import RadialProfile

logger = logging.getLogger(__name__)

PROFILE_HEADER = ("R", "avg", "samples")


def format_average(value: float) -> str:
    if math.isnan(value):
        return ""
    return repr(float(value))


def profile_to_csv(profile: RadialProfile) -> str:
    """Build CSV text (header included) from a radial profile."""
    lines = [",".join(PROFILE_HEADER)]
    for p in profile:
        lines.append(",".join([str(p.radius), format_average(p.average), str(p.samples)]))
    return "\n".join(lines)


def save_profile_csv(profile: RadialProfile, path: Union[str, Path]) -> Path:
    """Write ``profile_to_csv`` output to ``path`` and return the path."""
    path = Path(path)
    path.write_text(profile_to_csv(profile) + "\n", encoding="utf-8")
    logger.info("Exported %d profile points to %s", len(profile), path)
    return path
