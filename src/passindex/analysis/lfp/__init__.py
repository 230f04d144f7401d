"""LFP (Local Field Potential) filtering and phase utilities."""

from .filtering import bandpass_filter, mean_sampling_rate, modal_sampling_rate
from .phase import analytic_phase, filter_lfp, get_spike_phase, make_lfp_filter

__all__ = [
    # Filtering
    "bandpass_filter",
    "mean_sampling_rate",
    "modal_sampling_rate",
    # Phase
    "analytic_phase",
    "filter_lfp",
    "make_lfp_filter",
    "get_spike_phase",
]
