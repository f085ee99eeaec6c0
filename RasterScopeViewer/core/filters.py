"""Registry for image filter plugins.

A filter is a plain callable ``apply(RasterBuffer) -> RasterBuffer``.
Filters are registered on a FilterRegistry owned by the image session,
either directly or by loading a directory of plugin modules. Each call is
failure-contained: whatever the filter raises or returns, the caller gets
either a valid RasterBuffer or a FilterError.

Example:
    >>> def negate(img):
    ...     return img.with_pixels(255 - img.pixels)
    ...
    >>> registry = FilterRegistry()
    >>> registry.register("negate", negate, description="Invert intensities")
    >>> out = registry.apply("negate", image)
"""

import importlib.util
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union

import numpy as np

from .errors import FilterError
from .raster import RasterBuffer

logger = logging.getLogger(__name__)

FilterFunc = Callable[[RasterBuffer], RasterBuffer]


@dataclass
class FilterInfo:
    name: str
    func: FilterFunc
    description: str = ""
    source: Optional[str] = None


class FilterRegistry:
    """Named filter capabilities with an explicit load/unload lifecycle."""

    def __init__(self):
        self._filters: Dict[str, FilterInfo] = {}

    def register(self, name: str, func: FilterFunc, description: str = "", source: Optional[str] = None):
        """Register ``func`` under ``name``, replacing any previous entry.

        Raises:
            TypeError: If ``func`` is not callable.
        """
        if not callable(func):
            raise TypeError(f"Filter '{name}' is not callable")
        if name in self._filters:
            logger.info("Replacing filter '%s'", name)
        self._filters[name] = FilterInfo(name, func, description, source)

    def unregister(self, name: str) -> bool:
        return self._filters.pop(name, None) is not None

    def clear(self):
        self._filters.clear()

    def get(self, name: str) -> Optional[FilterInfo]:
        return self._filters.get(name)

    def names(self) -> List[str]:
        return sorted(self._filters)

    def __contains__(self, name):
        return name in self._filters

    def __len__(self):
        return len(self._filters)

    def load_module(self, path: Union[str, Path]) -> Optional[str]:
        """Import one plugin file and register its ``apply`` function.

        The module may define ``NAME`` (defaults to the file stem) and
        ``DESCRIPTION``. Import errors are logged, not raised.

        Returns:
            The registered filter name, or None if nothing was registered.
        """
        path = Path(path)
        module_name = f"rasterscope_filter_{path.stem}"
        try:
            spec = importlib.util.spec_from_file_location(module_name, path)
            module = importlib.util.module_from_spec(spec)
            spec.loader.exec_module(module)
        except Exception as e:
            logger.warning("Failed to load filter plugin %s: %s", path.name, e)
            return None

        func = getattr(module, "apply", None)
        if not callable(func):
            logger.warning("Filter plugin %s has no apply() function", path.name)
            return None

        name = getattr(module, "NAME", path.stem)
        self.register(name, func, getattr(module, "DESCRIPTION", ""), source=str(path))
        logger.info("Loaded filter plugin: %s", name)
        return name

    def load_directory(self, directory: Union[str, Path]) -> List[str]:
        """Load every plugin module in ``directory``.

        Files starting with an underscore or dot are skipped.
        """
        directory = Path(directory)
        if not directory.is_dir():
            logger.warning("Filter directory not found: %s", directory)
            return []

        loaded = []
        for py_file in sorted(directory.glob("*.py")):
            if py_file.name.startswith(("_", ".")):
                continue
            name = self.load_module(py_file)
            if name is not None:
                loaded.append(name)
        return loaded

    def apply(self, name: str, image: RasterBuffer) -> RasterBuffer:
        """Run filter ``name`` on ``image``.

        Raises:
            FilterError: If the filter is unknown, raises, or returns
                something that is not a 2-D image.
        """
        info = self._filters.get(name)
        if info is None:
            raise FilterError(name, "no such filter")

        # Each call works on its own copy of the pixels
        try:
            result = info.func(RasterBuffer(image.pixels, image.alpha))
        except Exception as e:
            raise FilterError(name, f"raised {type(e).__name__}: {e}") from e

        return _validate_result(name, result)


def _validate_result(name: str, result) -> RasterBuffer:
    if isinstance(result, RasterBuffer):
        if result.is_empty:
            raise FilterError(name, f"returned an empty {result.width}x{result.height} image")
        return result
    if isinstance(result, np.ndarray):
        if result.ndim != 2:
            raise FilterError(name, f"returned array of shape {result.shape}, expected 2-D")
        if result.size == 0:
            raise FilterError(name, f"returned an empty array of shape {result.shape}")
        if not np.issubdtype(result.dtype, np.integer) or result.min(initial=0) < 0 or result.max(initial=0) > 255:
            raise FilterError(name, f"returned {result.dtype} data outside the 8-bit range")
        return RasterBuffer(result)
    raise FilterError(name, f"returned {type(result).__name__}, expected RasterBuffer")
