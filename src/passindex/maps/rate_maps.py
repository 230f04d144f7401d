import logging

import numpy as np
from scipy.ndimage import gaussian_filter
from scipy.stats import mode

from ..errors import InsufficientData, InvalidArgument

logger = logging.getLogger(__name__)


def make_bin_edges(pos: np.ndarray, binside: float) -> list[np.ndarray]:
    """
    Bin edges of width binside covering the visited range of every dimension.

    Rows with any missing coordinate are ignored.
    """
    valid = np.all(np.isfinite(pos), axis=1)
    if not np.any(valid):
        raise InsufficientData("No position samples with complete coordinates")

    mins = pos[valid].min(axis=0)
    maxs = pos[valid].max(axis=0)
    bin_edges = []
    for lo, hi in zip(mins, maxs):
        n_bins = max(int(np.ceil((hi - lo) / binside)), 1)
        bin_edges.append(lo + binside * np.arange(n_bins + 1))
    return bin_edges


def make_rate_map(
    pos_ts: np.ndarray,
    pos: np.ndarray,
    spk_ts: np.ndarray,
    binside: float,
    smth_width: float,
) -> tuple[np.ndarray, np.ndarray, list[np.ndarray]]:
    """
    Generate a smoothed firing-rate map over an N-dimensional position space.

    Occupancy and spike counts are histogrammed into square bins of side
    binside, both are smoothed with the same Gaussian kernel, and the rate is
    their ratio. Each spike is assigned to the position sample preceding it.
    Occupancy is normalised by the position sampling rate so rates are in Hz.

    Args:
        pos_ts: Position timestamps in seconds, shape (n_samples,).
        pos: Positions, shape (n_samples, n_dims).
        spk_ts: Spike times in seconds.
        binside: Side of each bin, in position units.
        smth_width: Width (standard deviation) of the Gaussian smoothing
            kernel, in position units.

    Returns:
        tuple: A tuple containing the following elements:
            - rate_map (ndarray): Smoothed rate map with one axis per position
              dimension. Unvisited bins are NaN.
            - pos_map (ndarray): Occupancy in seconds per bin, NaN where
              unvisited.
            - bin_edges (list): Bin edges for each dimension.
    """
    if not binside > 0 or not smth_width > 0:
        raise InvalidArgument(
            "binside and smth_width must be positive to make a rate map, "
            f"got {binside} and {smth_width}"
        )

    pos_ts = np.asarray(pos_ts, dtype=float)
    pos = np.asarray(pos, dtype=float)
    if pos.ndim == 1:
        pos = pos[:, np.newaxis]
    spk_ts = np.asarray(spk_ts, dtype=float)

    bin_edges = make_bin_edges(pos, binside)
    valid = np.all(np.isfinite(pos), axis=1)

    if len(pos_ts) < 2:
        raise InsufficientData("Need at least two position samples for a rate map")

    # Occupancy in seconds per bin, using the modal sample interval
    dwell = mode(np.diff(pos_ts), keepdims=False).mode
    pos_map, _ = np.histogramdd(pos[valid], bins=bin_edges)
    pos_map *= dwell

    # Find the position sample for each spike
    # Spikes outside the tracked period are dropped
    spike_idx = np.digitize(spk_ts, pos_ts) - 1
    in_range = (spike_idx >= 0) & (spk_ts <= pos_ts[-1])
    spike_idx = spike_idx[in_range]
    spike_idx = spike_idx[valid[spike_idx]]
    if len(spike_idx) > 0:
        spike_map, _ = np.histogramdd(pos[spike_idx], bins=bin_edges)
    else:
        spike_map = np.zeros_like(pos_map)

    sigma = smth_width / binside
    spike_map_smoothed = gaussian_filter(spike_map, sigma, mode="constant")
    pos_map_smoothed = gaussian_filter(pos_map, sigma, mode="constant")

    visited = pos_map > 0
    rate_map = np.full(pos_map.shape, np.nan)
    rate_map[visited] = spike_map_smoothed[visited] / pos_map_smoothed[visited]
    pos_map[~visited] = np.nan

    logger.debug(
        "Rate map %s from %d spikes (binside=%g, smth_width=%g)",
        rate_map.shape,
        len(spike_idx),
        binside,
        smth_width,
    )
    return rate_map, pos_map, bin_edges


def lookup_rate(
    rate_map: np.ndarray, bin_edges: list[np.ndarray], pos: np.ndarray
) -> np.ndarray:
    """Read the rate map at each position; NaN where a coordinate is missing."""
    pos = np.asarray(pos, dtype=float)
    if pos.ndim == 1:
        pos = pos[:, np.newaxis]

    valid = np.all(np.isfinite(pos), axis=1)
    rates = np.full(len(pos), np.nan)
    if not np.any(valid):
        return rates

    bin_idx = tuple(
        np.clip(np.digitize(pos[valid, d], edges) - 1, 0, len(edges) - 2)
        for d, edges in enumerate(bin_edges)
    )
    rates[valid] = rate_map[bin_idx]
    return rates


def supra_threshold_volume(
    rate_map: np.ndarray, binside: float, threshold: float
) -> float:
    """Volume of the bins whose rate exceeds threshold times the peak rate."""
    if np.all(np.isnan(rate_map)):
        return 0.0
    peak = np.nanmax(rate_map)
    n_bins = np.sum(rate_map > threshold * peak)
    return float(n_bins * binside**rate_map.ndim)
