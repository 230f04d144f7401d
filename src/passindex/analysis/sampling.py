"""
Resampling of the field-index series along arc length or raw time.

Every strategy takes (pos_ts, pos, field_index) and returns a resampling
table of shape (n, 3) with columns:
    0 - coordinate sampled along (arc length or time), strictly increasing
    1 - timestamp of each resampled point
    2 - field index at that timestamp
"""

import logging

import numpy as np

from ..errors import InsufficientData, InvalidArgument

logger = logging.getLogger(__name__)


def arc_length(pos: np.ndarray) -> np.ndarray:
    """
    Cumulative Euclidean path length along a trajectory.

    Missing coordinates are left out of the step length, so a row with every
    coordinate missing neither advances nor breaks the arc, while a row with
    only some coordinates missing still advances it along the others.
    """
    pos = np.asarray(pos, dtype=float)
    if pos.ndim == 1:
        pos = pos[:, np.newaxis]
    steps = np.sqrt(np.nansum(np.diff(pos, axis=0) ** 2, axis=1))
    return np.concatenate([[0.0], np.cumsum(steps)])


def _finite_field_index(pos_ts: np.ndarray, field_index: np.ndarray):
    """Timestamps and values of the samples where the field index is defined."""
    finite = np.isfinite(field_index)
    if not np.any(finite):
        raise InsufficientData("Field index has no finite values to resample")
    return pos_ts[finite], field_index[finite]


def sample_along_arc(
    pos_ts: np.ndarray, pos: np.ndarray, field_index: np.ndarray
) -> np.ndarray:
    """
    Resample the field index at evenly spaced points along the arc travelled.

    Samples that do not advance the arc (the animal is stationary) are
    dropped, keeping the first sample of each stationary run, so that arc
    length is strictly increasing. Timestamps are then interpolated at
    len(pos_ts) evenly spaced arc lengths, and the field index at those
    timestamps. Missing field-index values (e.g. from untracked position
    samples) are skipped by the interpolation.

    Parameters
    ----------
    pos_ts : np.ndarray
        Position timestamps, shape (n_samples,)
    pos : np.ndarray
        Positions, shape (n_samples, n_dims)
    field_index : np.ndarray
        Field index at each position sample, shape (n_samples,)

    Returns
    -------
    np.ndarray
        Resampling table, shape (n_samples, 3)

    Raises
    ------
    InsufficientData
        If the trajectory never advances, or the field index is nowhere finite
    """
    pos_ts = np.asarray(pos_ts, dtype=float)
    field_index = np.asarray(field_index, dtype=float)
    fi_ts, fi_values = _finite_field_index(pos_ts, field_index)

    arc = arc_length(pos)
    advancing = np.concatenate([[True], np.diff(arc) > 0])
    arc_kept = arc[advancing]
    ts_kept = pos_ts[advancing]

    if len(arc_kept) < 2:
        raise InsufficientData(
            "Position never advances along an arc; cannot resample by arc length"
        )

    logger.debug(
        "Arc length %.4g over %d samples (%d stationary dropped)",
        arc_kept[-1],
        len(pos_ts),
        len(pos_ts) - len(arc_kept),
    )

    cc = np.linspace(0, arc_kept[-1], len(pos_ts))
    ts2 = np.interp(cc, arc_kept, ts_kept)
    resampled = np.interp(ts2, fi_ts, fi_values)

    return np.column_stack([cc, ts2, resampled])


def sample_along_ts(
    pos_ts: np.ndarray, pos: np.ndarray, field_index: np.ndarray
) -> np.ndarray:
    """
    Pass the field index through along raw timestamps.

    Missing field-index values are filled by linear interpolation in time.
    """
    pos_ts = np.asarray(pos_ts, dtype=float)
    field_index = np.asarray(field_index, dtype=float)
    fi_ts, fi_values = _finite_field_index(pos_ts, field_index)
    if len(fi_ts) < len(pos_ts):
        logger.debug(
            "Filling %d missing field-index values", len(pos_ts) - len(fi_ts)
        )
        field_index = np.interp(pos_ts, fi_ts, fi_values)
    return np.column_stack([pos_ts, pos_ts, field_index])


SAMPLING_STRATEGIES = {
    "arc_length": sample_along_arc,
    "raw_ts": sample_along_ts,
}


def get_sampling_strategy(tag: str):
    """Look up a built-in sampling strategy by its tag."""
    try:
        return SAMPLING_STRATEGIES[tag]
    except (KeyError, TypeError):
        raise InvalidArgument(
            f"Unknown sample_along '{tag}'. "
            f"Use one of {sorted(SAMPLING_STRATEGIES)}, a table or a callable"
        ) from None


def validate_table(table) -> np.ndarray:
    """Check a resampling table has 3 columns and an increasing first column."""
    table = np.asarray(table, dtype=float)
    if table.ndim != 2 or table.shape[1] != 3:
        raise InvalidArgument(
            f"sample_along table must have shape (n, 3), got {table.shape}"
        )
    if not np.all(np.diff(table[:, 0]) > 0):
        raise InvalidArgument(
            "sample_along table must be strictly increasing in its first column"
        )
    return table


def sample_field_index(config, field_index: np.ndarray) -> np.ndarray:
    """
    Produce the resampling table for a resolved configuration.

    A literal table is used as is; a callable (built-in or user supplied) is
    called with the position series and the field index.
    """
    param = config.param("sample_along")
    if param.is_auto:
        raise InvalidArgument(
            "sample_along is still 'auto'; custom methods must set it explicitly"
        )
    if param.is_strategy:
        logger.debug(
            "Sampling field index with %s",
            getattr(param.value, "__name__", repr(param.value)),
        )
        table = param.value(config.pos_ts, config.pos, field_index)
    elif isinstance(param.value, str):
        table = get_sampling_strategy(param.value)(
            config.pos_ts, config.pos, field_index
        )
    else:
        table = param.value

    table = validate_table(table)
    if len(table) < 2:
        raise InsufficientData("Resampling table has fewer than two rows")
    return table
