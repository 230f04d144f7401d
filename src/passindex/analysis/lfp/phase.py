import logging
from functools import partial

import numpy as np
from scipy.signal import hilbert

from ...config import FILTER_ORDER
from ...errors import InsufficientData
from .filtering import bandpass_filter, modal_sampling_rate

logger = logging.getLogger(__name__)


def analytic_phase(signal: np.ndarray) -> np.ndarray:
    """
    Instantaneous phase of a band-limited signal.

    0 radians is the signal peak and +/-pi the trough; values lie in [-pi, pi].
    """
    return np.angle(hilbert(signal))


def filter_lfp(
    lfp_ts: np.ndarray,
    lfp_sig: np.ndarray,
    *,
    band: tuple[float, float],
) -> tuple[np.ndarray, np.ndarray]:
    """
    Band-pass an LFP trace and extract its instantaneous phase.

    The sampling rate is taken from the modal spacing of the LFP timestamps,
    the signal is filtered with a zero-phase Butterworth band-pass and the
    phase is the angle of the Hilbert analytic signal.

    Parameters:
    -----------
    lfp_ts : np.ndarray
        LFP timestamps in seconds
    lfp_sig : np.ndarray
        LFP samples, same length as lfp_ts
    band : tuple[float, float]
        (low, high) band in Hz

    Returns:
    --------
    tuple[np.ndarray, np.ndarray]
        - filtered: band-passed LFP
        - phase: instantaneous phase in radians, in [-pi, pi]
    """
    if lfp_ts is None or lfp_sig is None or len(lfp_sig) == 0:
        raise InsufficientData("No LFP supplied to filter")

    fs = modal_sampling_rate(lfp_ts)
    filtered = bandpass_filter(lfp_sig, fs, band[0], band[1], order=FILTER_ORDER)
    phase = analytic_phase(filtered)
    return filtered, phase


def make_lfp_filter(band) -> partial:
    """Bind a frequency band into an LFP filter: (lfp_ts, lfp_sig) -> (filtered, phase)."""
    band = (float(band[0]), float(band[1]))
    logger.debug("Built LFP filter for %s Hz", band)
    return partial(filter_lfp, band=band)


def get_spike_phase(
    lfp_ts: np.ndarray, lfp_phase: np.ndarray, spk_ts: np.ndarray
) -> np.ndarray:
    """
    Calculate the LFP phase at each spike time.

    Phase is linearly interpolated on the unwrapped phase so that samples
    either side of a cycle boundary do not average to the wrong half of the
    cycle, then wrapped back into [-pi, pi].

    Parameters:
    - lfp_ts: LFP timestamps in seconds.
    - lfp_phase: Instantaneous LFP phase (radians) at each timestamp.
    - spk_ts: Times (in seconds) at which the spikes occurred.

    Returns:
    - spike_phases: phase (in radians) of spikes; NaN for spikes outside the
      LFP recording.
    """
    spk_ts = np.asarray(spk_ts, dtype=float)
    spike_phases = np.full_like(spk_ts, np.nan, dtype=float)
    if len(spk_ts) == 0 or len(lfp_ts) == 0:
        return spike_phases

    valid_mask = (spk_ts >= lfp_ts[0]) & (spk_ts <= lfp_ts[-1])
    if np.any(valid_mask):
        unwrapped = np.unwrap(lfp_phase)
        interpolated = np.interp(spk_ts[valid_mask], lfp_ts, unwrapped)
        spike_phases[valid_mask] = np.angle(np.exp(1j * interpolated))

    return spike_phases
