"""
Parse and resolve the inputs of a pass-index analysis.

resolve() validates the data series and named parameters, fills in library
defaults, then resolves every 'auto' parameter for the chosen method:

    1. binside      2 * dimensionality of pos
    2. smth_width   3 * binside
    3. filter_band  fixed band for grid cells, field-size band for place cells,
                    then wrapped into a field-index filter
    4. lfp_filter   wrapped into an LFP filter
    5. sample_along 'arc_length' for grid/place cells, then tags are replaced
                    by their sampling strategy

Explicit user values are never replaced. Custom methods skip the 'auto'
derivations entirely.

Reference: Climer, J. R., Newman, E. L. and Hasselmo, M. E. (2013), Phase
coding by grid cells in unconstrained environments: two-dimensional phase
precession. European Journal of Neuroscience, 38: 2526-2541.
"""

import logging
import math
import warnings

import numpy as np

from .analysis.field_index import field_index_fun, make_field_index_filter
from .analysis.lfp.phase import make_lfp_filter
from .analysis.sampling import get_sampling_strategy, validate_table
from .config import (
    AUTO,
    DEFAULT_PARAMS,
    FIELD_THRESHOLD,
    GRID_FILTER_BAND,
    METHODS,
    Configuration,
    Param,
)
from .errors import InsufficientData, InvalidArgument
from .maps.rate_maps import make_rate_map, supra_threshold_volume
from .utils import as_band, as_matrix, as_vector, is_numeric

logger = logging.getLogger(__name__)

AUTO_METHODS = ("grid", "place")


def default_params() -> dict:
    """Library defaults for every named parameter."""
    params = dict(DEFAULT_PARAMS)
    params["field_index"] = field_index_fun
    return params


def _is_auto(value) -> bool:
    return isinstance(value, str) and value == AUTO


def _is_empty(x) -> bool:
    return x is None or np.size(x) == 0


# ---------------------------------------------------------------------------
# Validation
# ---------------------------------------------------------------------------


def _check_increasing(ts, name):
    if np.any(~(np.diff(ts) > 0)):
        raise InvalidArgument(f"{name} must be strictly increasing")


def _validate_series(pos_ts, pos, spk_ts, lfp_ts, lfp_sig):
    pos_ts = as_vector(pos_ts, "pos_ts")
    _check_increasing(pos_ts, "pos_ts")
    spk_ts = as_vector(spk_ts, "spk_ts")
    pos = as_matrix(pos, "pos")
    if pos.shape[0] != len(pos_ts):
        raise InvalidArgument(
            f"pos has {pos.shape[0]} rows but pos_ts has {len(pos_ts)} samples"
        )

    if _is_empty(lfp_ts) and _is_empty(lfp_sig):
        return pos_ts, pos, spk_ts, None, None
    if _is_empty(lfp_ts) or _is_empty(lfp_sig):
        raise InvalidArgument("lfp_ts and lfp_sig must be supplied together")

    lfp_ts = as_vector(lfp_ts, "lfp_ts")
    lfp_sig = as_vector(lfp_sig, "lfp_sig")
    _check_increasing(lfp_ts, "lfp_ts")
    if len(lfp_ts) != len(lfp_sig):
        raise InvalidArgument(
            f"lfp_ts ({len(lfp_ts)}) and lfp_sig ({len(lfp_sig)}) "
            "must have the same length"
        )
    return pos_ts, pos, spk_ts, lfp_ts, lfp_sig


def _validate_scalar(value, name):
    if _is_auto(value):
        return value
    if not is_numeric(value) or np.size(value) != 1:
        raise InvalidArgument(f"{name} must be 'auto' or a scalar")
    value = float(np.asarray(value).ravel()[0])
    if not (np.isfinite(value) and value > 0):
        raise InvalidArgument(f"{name} must be positive, got {value}")
    return value


def _validate_params(params: dict, n_samples: int) -> dict:
    """Check each named parameter against the forms it may take."""
    method = params["method"]
    if not (callable(method) or (isinstance(method, str) and method in METHODS)):
        raise InvalidArgument(
            f"method must be one of {list(METHODS)} or a callable, got {method!r}"
        )

    params["binside"] = _validate_scalar(params["binside"], "binside")
    params["smth_width"] = _validate_scalar(params["smth_width"], "smth_width")

    field_index = params["field_index"]
    if not callable(field_index):
        if not is_numeric(field_index):
            raise InvalidArgument("field_index must be a numeric vector or a callable")
        field_index = as_vector(field_index, "field_index")
        if len(field_index) != n_samples:
            raise InvalidArgument(
                f"field_index has {len(field_index)} entries but pos_ts has "
                f"{n_samples} samples"
            )
        params["field_index"] = field_index

    sample_along = params["sample_along"]
    if isinstance(sample_along, str):
        if sample_along != AUTO:
            get_sampling_strategy(sample_along)
    elif not callable(sample_along):
        if not is_numeric(sample_along):
            raise InvalidArgument(
                "sample_along must be 'auto', 'arc_length', 'raw_ts', "
                "an (n, 3) table or a callable"
            )
        params["sample_along"] = validate_table(sample_along)

    filter_band = params["filter_band"]
    if not (_is_auto(filter_band) or callable(filter_band)):
        params["filter_band"] = as_band(filter_band, "filter_band")

    lfp_filter = params["lfp_filter"]
    if not callable(lfp_filter):
        params["lfp_filter"] = as_band(lfp_filter, "lfp_filter")

    slope_bnds = params["slope_bnds"]
    if _is_empty(slope_bnds):
        params["slope_bnds"] = None
    elif not is_numeric(slope_bnds) or np.size(slope_bnds) != 2:
        raise InvalidArgument("slope_bnds must be empty or a 2-element numeric pair")

    return params


# ---------------------------------------------------------------------------
# Resolution steps
# ---------------------------------------------------------------------------


def _auto_method(config: Configuration) -> str | None:
    """The method name if it drives 'auto' derivation, else None."""
    method = config.method
    if isinstance(method, str) and method in AUTO_METHODS:
        return method
    return None


def resolve_binside(param: Param, method, ndim: int) -> Param:
    if param.is_auto and method in AUTO_METHODS:
        return Param.literal(2.0 * ndim)
    return param


def resolve_smth_width(param: Param, method, binside: Param) -> Param:
    if param.is_auto and method in AUTO_METHODS and not binside.is_auto:
        return Param.literal(3.0 * binside.value)
    return param


def field_radius(volume: float, ndim: int) -> float:
    """
    Radius of the n-ball whose volume equals volume.

    For n = 2k+1:  V = 2^(k+1) pi^k r^n / n!!
    For n = 2k:    V = pi^k r^n / k!
    """
    k = ndim // 2
    if ndim % 2:
        double_factorial = math.prod(range(1, ndim + 1, 2))
        return (double_factorial * volume / (2 ** (k + 1) * np.pi**k)) ** (
            1 / (2 * k + 1)
        )
    return (math.factorial(k) * volume) ** (1 / (2 * k)) / np.sqrt(np.pi)


def place_filter_band(config: Configuration) -> tuple[float, float]:
    """
    Field-index band for a place cell, from the size of its firing field.

    The field volume is the total volume of rate-map bins above 10% of the
    peak rate; the band is [1/(6r), 3/r] for the radius r of the n-ball with
    that volume.
    """
    rate_map, _, _ = make_rate_map(
        config.pos_ts, config.pos, config.spk_ts, config.binside, config.smth_width
    )
    volume = supra_threshold_volume(rate_map, config.binside, FIELD_THRESHOLD)
    if volume <= 0:
        raise InsufficientData(
            "No rate-map bins above threshold; cannot estimate the field size"
        )
    r = field_radius(volume, config.ndim)
    logger.debug("Place field volume %.4g, radius %.4g", volume, r)
    return 1 / (6 * r), 3 / r


def resolve_filter_band(config: Configuration) -> Param:
    param = config.param("filter_band")
    method = _auto_method(config)

    if param.is_auto:
        if method == "grid":
            param = Param.literal(GRID_FILTER_BAND)
        elif method == "place":
            param = Param.literal(place_filter_band(config))

    if param.kind == "literal":
        return Param.strategy(make_field_index_filter(param.value))
    return param


def resolve_lfp_filter(param: Param) -> Param:
    if param.kind == "literal":
        return Param.strategy(make_lfp_filter(param.value))
    return param


def resolve_sample_along(param: Param, method) -> Param:
    if param.is_auto and method in AUTO_METHODS:
        param = Param.literal("arc_length")
    if param.kind == "literal" and isinstance(param.value, str):
        return Param.strategy(get_sampling_strategy(param.value))
    return param


def _update(config: Configuration, name: str, param: Param) -> None:
    if param is config.param(name):
        return
    source = "default" if name in config.using_defaults else "user"
    logger.debug(
        "%s: %s %s -> %s", name, source, config.kind(name), param.kind
    )
    config.set(name, param)


def resolve_config(config: Configuration) -> Configuration:
    """
    Run the resolution passes over a configuration, in order.

    Each pass only replaces 'auto' values or wraps literal bands and tags, so
    running it on an already resolved configuration changes nothing.
    """
    if config.frozen:
        return config

    method = _auto_method(config)
    logger.debug("Resolving configuration for method %r", config.method)

    _update(
        config, "binside", resolve_binside(config.param("binside"), method, config.ndim)
    )
    _update(
        config,
        "smth_width",
        resolve_smth_width(
            config.param("smth_width"), method, config.param("binside")
        ),
    )
    _update(config, "filter_band", resolve_filter_band(config))
    _update(config, "lfp_filter", resolve_lfp_filter(config.param("lfp_filter")))
    _update(
        config,
        "sample_along",
        resolve_sample_along(config.param("sample_along"), method),
    )

    logger.debug("Resolved %r", config)
    return config.freeze()


def resolve(pos_ts, pos, spk_ts, lfp_ts=None, lfp_sig=None, **params) -> Configuration:
    """
    Parse pass-index inputs into a fully resolved Configuration.

    Parameters
    ----------
    pos_ts : array_like
        Timestamps of the position samples
    pos : array_like
        (n_samples, n_dims) position matrix; a 1D array is one dimension
    spk_ts : array_like
        Spike times for the cell
    lfp_ts, lfp_sig : array_like, optional
        LFP timestamps and signal; supply both or neither
    method : str or callable, optional
        'grid' (default), 'place' or 'custom', or a callable. 'grid' and
        'place' fill in any parameter left as 'auto'.
    binside : float or 'auto', optional
        Side of the rate-map bins. 'auto' is 2 * n_dims.
    smth_width : float or 'auto', optional
        Width of the Gaussian smoothing kernel. 'auto' is 3 * binside.
    field_index : array_like or callable, optional
        Field index for every position sample, or a callable
        (pos_ts, pos, spk_ts, config) -> field index. Defaults to the
        normalised rate map.
    sample_along : str, array_like or callable, optional
        'auto' (default), 'arc_length', 'raw_ts', an (n, 3) resampling table,
        or a callable (pos_ts, pos, field_index) -> table. 'auto' becomes
        'arc_length' for grid and place cells.
    filter_band : array_like, callable or 'auto', optional
        [low, high] band in cycles per unit sampled along, or a callable
        (table, config) -> filtered field index. 'auto' is
        [1/340, 8/26.7] for grid cells and [1/(6r), 3/r] for place cells,
        with r the equal-volume radius of the firing field.
    lfp_filter : array_like or callable, optional
        [low, high] band in Hz (default [6, 10]), or a callable
        (lfp_ts, lfp_sig) -> (filtered, phase).
    slope_bnds : array_like, optional
        Bounds on the precession slope, passed through to the regression.

    Returns
    -------
    Configuration
        Frozen configuration with filter_band, lfp_filter and sample_along as
        callables wherever they could be resolved.
    """
    pos_ts, pos, spk_ts, lfp_ts, lfp_sig = _validate_series(
        pos_ts, pos, spk_ts, lfp_ts, lfp_sig
    )

    defaults = default_params()
    unmatched = {key: value for key, value in params.items() if key not in defaults}
    if unmatched:
        warnings.warn(
            f"Ignoring unrecognised parameters: {sorted(unmatched)}", stacklevel=2
        )

    supplied = {key: value for key, value in params.items() if key in defaults}
    merged = _validate_params({**defaults, **supplied}, len(pos_ts))

    config = Configuration(
        pos_ts,
        pos,
        spk_ts,
        lfp_ts,
        lfp_sig,
        params={name: Param.from_user(value) for name, value in merged.items()},
        using_defaults=set(defaults) - set(supplied),
        unmatched=unmatched,
    )
    return resolve_config(config)
