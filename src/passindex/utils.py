import numpy as np
import pandas as pd

from .errors import InvalidArgument


def is_numeric(x) -> bool:
    """True for real integer or float data (numpy arrays, lists, pandas objects)."""
    if isinstance(x, (str, bytes)) or callable(x):
        return False
    try:
        arr = np.asarray(x)
    except (TypeError, ValueError):
        return False
    return arr.dtype.kind in "iuf"


def as_vector(x, name: str) -> np.ndarray:
    """
    Coerce a numeric vector to a 1D float array.

    Row and column vectors of shape (1, n) or (n, 1) are flattened.
    """
    if not is_numeric(x):
        raise InvalidArgument(f"{name} must be numeric")
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 0:
        return arr.reshape(1)
    if arr.ndim == 2 and 1 in arr.shape:
        return arr.ravel()
    if arr.ndim != 1:
        raise InvalidArgument(f"{name} must be a 1D vector, got shape {arr.shape}")
    return arr


def as_matrix(x, name: str) -> np.ndarray:
    """Coerce numeric data to a 2D float array of shape (n_samples, n_dims)."""
    if not is_numeric(x):
        raise InvalidArgument(f"{name} must be numeric")
    arr = np.asarray(x, dtype=float)
    if arr.ndim == 1:
        arr = arr[:, np.newaxis]
    if arr.ndim != 2:
        raise InvalidArgument(f"{name} must be a 2D matrix, got shape {arr.shape}")
    return arr


def as_band(x, name: str) -> tuple[float, float]:
    """Check a frequency band is a 2-element numeric range with low < high."""
    if not is_numeric(x) or np.size(x) != 2:
        raise InvalidArgument(f"{name} must be a 2-element numeric [low, high] range")
    low, high = np.asarray(x, dtype=float).ravel()
    if not low < high:
        raise InvalidArgument(f"{name} must have low < high, got [{low}, {high}]")
    return float(low), float(high)


def unpack_xy_position(xy_position: pd.DataFrame) -> tuple[np.ndarray, np.ndarray]:
    """
    Unpack a position DataFrame into timestamps and a position matrix.

    Parameters:
        xy_position: DataFrame with coordinates (e.g. 'X', 'Y') as row indices
                     and sample times as columns.

    Returns:
        tuple: A tuple containing:
            - pos_ts: Position sample timestamps as ndarray, shape (n_samples,)
            - pos: Positions as ndarray, shape (n_samples, n_dims)
    """
    if not isinstance(xy_position, pd.DataFrame):
        raise InvalidArgument("xy_position must be a pandas DataFrame")
    pos_ts = as_vector(xy_position.columns.to_numpy(), "xy_position columns")
    pos = as_matrix(xy_position.to_numpy().T, "xy_position")
    return pos_ts, pos
