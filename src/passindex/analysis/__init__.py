"""Analysis utilities for pass-index signals.

This module is organized into submodules by signal:
- lfp: LFP band-pass filtering and phase
- field_index: field-index strategy and its filter
- sampling: resampling along arc length or raw time
"""

from . import lfp
from .field_index import field_index_fun, filter_field_index, make_field_index_filter
from .lfp import filter_lfp, get_spike_phase, make_lfp_filter
from .sampling import (
    SAMPLING_STRATEGIES,
    arc_length,
    get_sampling_strategy,
    sample_along_arc,
    sample_along_ts,
    sample_field_index,
)

__all__ = [
    "lfp",
    # Field index
    "field_index_fun",
    "filter_field_index",
    "make_field_index_filter",
    # LFP
    "filter_lfp",
    "make_lfp_filter",
    "get_spike_phase",
    # Sampling
    "SAMPLING_STRATEGIES",
    "arc_length",
    "get_sampling_strategy",
    "sample_along_arc",
    "sample_along_ts",
    "sample_field_index",
]
