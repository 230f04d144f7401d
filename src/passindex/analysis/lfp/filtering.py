"""
Band-pass filtering primitives shared by the field-index and LFP filters.

Both filters use a Butterworth design applied forwards and backwards so the
output has no phase lag relative to the input.
"""

import logging

import numpy as np
from scipy.signal import butter, filtfilt
from scipy.stats import mode

from ...errors import ExternalComputationError, InsufficientData

logger = logging.getLogger(__name__)


def bandpass_filter(
    signal: np.ndarray,
    fs: float,
    freq_min: float,
    freq_max: float,
    order: int = 3,
) -> np.ndarray:
    """
    Apply a zero-phase Butterworth band-pass filter to a 1D signal.

    Frequencies are in the units of the sampling rate: Hz for LFP, cycles per
    unit arc length (or per second) for a resampled field index.

    Parameters:
    -----------
    signal : np.ndarray
        Signal to filter, shape (n_samples,)
    fs : float
        Sampling rate of the signal
    freq_min : float
        Lower cutoff frequency
    freq_max : float
        Upper cutoff frequency
    order : int, optional
        Butterworth filter order (default: 3)

    Returns:
    --------
    np.ndarray
        Filtered signal with the same shape as the input

    Raises:
    -------
    ExternalComputationError
        If the filter cannot be designed for this band (e.g. a cutoff at or
        beyond Nyquist) or the signal is too short for forward-backward
        filtering.
    """
    nyquist = fs / 2
    low = freq_min / nyquist
    high = freq_max / nyquist

    try:
        b, a = butter(order, [low, high], btype="band")
    except ValueError as err:
        raise ExternalComputationError(
            f"Butterworth design failed: {err}",
            band=(freq_min, freq_max),
            sampling_rate=fs,
            order=order,
        ) from err

    try:
        filtered = filtfilt(b, a, np.asarray(signal, dtype=float))
    except ValueError as err:
        raise ExternalComputationError(
            f"Zero-phase filtering failed: {err}",
            band=(freq_min, freq_max),
            sampling_rate=fs,
            n_samples=len(signal),
        ) from err

    logger.debug(
        "Band-passed %d samples at %.4g-%.4g (fs=%.4g)",
        len(filtered),
        freq_min,
        freq_max,
        fs,
    )
    return filtered


def mean_sampling_rate(coords: np.ndarray) -> float:
    """Sampling rate as the reciprocal of the mean spacing of coords."""
    coords = np.asarray(coords, dtype=float)
    if len(coords) < 2:
        raise InsufficientData("Need at least two samples to get a sampling rate")
    spacing = np.mean(np.diff(coords))
    if not spacing > 0:
        raise InsufficientData(f"Sample spacing must be positive, got {spacing}")
    return 1 / spacing


def modal_sampling_rate(timestamps: np.ndarray) -> float:
    """
    Sampling rate as the reciprocal of the most common timestamp spacing.

    Robust to the occasional dropped sample, which would skew a mean.
    """
    timestamps = np.asarray(timestamps, dtype=float)
    if len(timestamps) < 2:
        raise InsufficientData("Need at least two samples to get a sampling rate")
    spacing = mode(np.diff(timestamps), keepdims=False).mode
    if not spacing > 0:
        raise InsufficientData(f"Sample spacing must be positive, got {spacing}")
    return 1 / spacing
