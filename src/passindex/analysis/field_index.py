"""
Field index: where the animal is within a cell's firing field.

The field index is the smoothed rate map read at each position sample and
scaled to [0, 1]. Passes through a field show up as bumps in the field index,
which is filtered in the band set by the field size.
"""

import logging
from functools import partial

import numpy as np

from ..config import FILTER_ORDER
from ..errors import InsufficientData, InvalidArgument
from ..maps.rate_maps import lookup_rate, make_rate_map
from .lfp.filtering import bandpass_filter, mean_sampling_rate

logger = logging.getLogger(__name__)


def field_index_fun(pos_ts, pos, spk_ts, config) -> np.ndarray:
    """
    Default field-index strategy: normalised rate at each position sample.

    Parameters
    ----------
    pos_ts : np.ndarray
        Position timestamps, shape (n_samples,)
    pos : np.ndarray
        Positions, shape (n_samples, n_dims)
    spk_ts : np.ndarray
        Spike times
    config : Configuration
        Resolved configuration supplying binside and smth_width

    Returns
    -------
    np.ndarray
        Field index in [0, 1] for every position sample (NaN where the
        position is missing)
    """
    for name in ("binside", "smth_width"):
        if config.param(name).is_auto:
            raise InvalidArgument(
                f"{name} must be set explicitly to compute the field index "
                f"with method {config.method!r}"
            )

    rate_map, _, bin_edges = make_rate_map(
        pos_ts, pos, spk_ts, config.binside, config.smth_width
    )
    rates = lookup_rate(rate_map, bin_edges, pos)

    lo, hi = np.nanmin(rate_map), np.nanmax(rate_map)
    if not hi > lo:
        raise InsufficientData(
            "Rate map is flat; cannot scale a field index (are there any spikes?)"
        )
    return (rates - lo) / (hi - lo)


def filter_field_index(table: np.ndarray, config=None, *, band) -> np.ndarray:
    """
    Band-pass the resampled field index.

    The sampling rate is the reciprocal of the mean spacing of the first
    column of the resampling table, so band is in cycles per unit sampled
    along (arc length or seconds).

    Parameters
    ----------
    table : np.ndarray
        Resampling table, shape (n, 3)
    config : Configuration, optional
        Unused by the built-in filter; part of the filter_band contract so
        custom filters can read other parameters
    band : tuple[float, float]
        (low, high) band

    Returns
    -------
    np.ndarray
        Filtered field index, shape (n,)
    """
    table = np.asarray(table, dtype=float)
    fs = mean_sampling_rate(table[:, 0])
    return bandpass_filter(table[:, 2], fs, band[0], band[1], order=FILTER_ORDER)


def make_field_index_filter(band) -> partial:
    """Bind a frequency band into a field-index filter: (table, config) -> filtered."""
    band = (float(band[0]), float(band[1]))
    logger.debug("Built field-index filter for band %s", band)
    return partial(filter_field_index, band=band)
