"""passindex - parameter resolution and signal preparation for the pass index.

Submodules:
- parser: resolve() turns sparse parameters into a resolved Configuration
- pipeline: prepare_pass_signals() runs a resolved Configuration
- analysis: sampling strategies, field-index and LFP filters
- maps: rate maps
"""

from . import analysis, maps
from .config import AUTO, DEFAULT_PARAMS, Configuration, Param
from .errors import (
    ExternalComputationError,
    InsufficientData,
    InvalidArgument,
    PassIndexError,
)
from .parser import field_radius, place_filter_band, resolve, resolve_config
from .pipeline import PassSignals, compute_field_index, prepare_pass_signals
from .utils import unpack_xy_position

__version__ = "0.1.0"

__all__ = [
    # Submodules
    "analysis",
    "maps",
    # Configuration
    "AUTO",
    "DEFAULT_PARAMS",
    "Configuration",
    "Param",
    # Resolution
    "resolve",
    "resolve_config",
    "field_radius",
    "place_filter_band",
    # Pipeline
    "PassSignals",
    "compute_field_index",
    "prepare_pass_signals",
    "unpack_xy_position",
    # Errors
    "PassIndexError",
    "InvalidArgument",
    "InsufficientData",
    "ExternalComputationError",
]
