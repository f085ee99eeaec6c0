"""UI-independent core: image model, raw decoding, editing and analysis."""

from .raster import RasterBuffer, Rect
from .errors import RasterScopeError, DecodeError, DecodeErrorKind, SweepRangeError, FilterError
from .image_io import RawFormat, DEFAULT_RAW_FORMAT, decode_raw, read_raw, load_raw_file, is_raw_file
from .view_transform import ViewTransform
from .history import HistoryStack, SelectionAndHistory, SelectionState
from .clipboard import BlendMode, ClipboardCompositor
from .radial import RadialSamplePoint, RadialProfile, circular_average, radial_sweep
from .filters import FilterRegistry
from .compute import intensity_histogram, image_stats, pixel_info
from .exporting import profile_to_csv, save_profile_csv
from .session import ImageSession

__all__ = [
    "RasterBuffer",
    "Rect",
    "RasterScopeError",
    "DecodeError",
    "DecodeErrorKind",
    "SweepRangeError",
    "FilterError",
    "RawFormat",
    "DEFAULT_RAW_FORMAT",
    "decode_raw",
    "read_raw",
    "load_raw_file",
    "is_raw_file",
    "ViewTransform",
    "HistoryStack",
    "SelectionAndHistory",
    "SelectionState",
    "BlendMode",
    "ClipboardCompositor",
    "RadialSamplePoint",
    "RadialProfile",
    "circular_average",
    "radial_sweep",
    "FilterRegistry",
    "intensity_histogram",
    "image_stats",
    "pixel_info",
    "profile_to_csv",
    "save_profile_csv",
    "ImageSession",
]
