"""
Run a resolved configuration to produce the signals a pass index is built from.
"""

import logging
from dataclasses import dataclass

import numpy as np

from .analysis.lfp.phase import get_spike_phase
from .analysis.sampling import sample_field_index
from .config import Configuration
from .errors import InvalidArgument
from .utils import as_vector

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PassSignals:
    """
    Derived series for one cell.

    Attributes
    ----------
    field_index : np.ndarray
        Field index at each position sample
    resampled : np.ndarray
        Resampling table, shape (n, 3): coordinate, timestamp, field index
    filtered_field_index : np.ndarray
        Band-passed field index at each row of the resampling table
    lfp_filtered : np.ndarray or None
        Band-passed LFP, if an LFP was supplied
    lfp_phase : np.ndarray or None
        Instantaneous LFP phase in radians, if an LFP was supplied
    spike_phase : np.ndarray or None
        LFP phase at each spike time, if an LFP was supplied
    """

    field_index: np.ndarray
    resampled: np.ndarray
    filtered_field_index: np.ndarray
    lfp_filtered: np.ndarray | None = None
    lfp_phase: np.ndarray | None = None
    spike_phase: np.ndarray | None = None


def compute_field_index(config: Configuration) -> np.ndarray:
    """Evaluate the field index: a literal vector or a strategy's output."""
    param = config.param("field_index")
    if param.is_strategy:
        field_index = param.value(config.pos_ts, config.pos, config.spk_ts, config)
    else:
        field_index = param.value

    field_index = as_vector(field_index, "field_index")
    if len(field_index) != len(config.pos_ts):
        raise InvalidArgument(
            f"field_index has {len(field_index)} entries but pos_ts has "
            f"{len(config.pos_ts)} samples"
        )
    return field_index


def prepare_pass_signals(config: Configuration) -> PassSignals:
    """
    Resample and filter the field index, and filter the LFP, for a cell.

    Parameters
    ----------
    config : Configuration
        Configuration returned by resolve()

    Returns
    -------
    PassSignals
    """
    if not config.frozen:
        raise InvalidArgument("Configuration must be resolved before use")

    for name in ("filter_band", "lfp_filter"):
        if not config.param(name).is_strategy:
            raise InvalidArgument(
                f"{name} is still {config.kind(name)}; custom methods must set it"
            )

    field_index = compute_field_index(config)
    resampled = sample_field_index(config, field_index)
    filtered_field_index = np.asarray(config.filter_band(resampled, config))

    lfp_filtered = lfp_phase = spike_phase = None
    if config.has_lfp:
        lfp_filtered, lfp_phase = config.lfp_filter(config.lfp_ts, config.lfp_sig)
        spike_phase = get_spike_phase(config.lfp_ts, lfp_phase, config.spk_ts)
    else:
        logger.debug("No LFP supplied; skipping LFP filter")

    return PassSignals(
        field_index=field_index,
        resampled=resampled,
        filtered_field_index=filtered_field_index,
        lfp_filtered=lfp_filtered,
        lfp_phase=lfp_phase,
        spike_phase=spike_phase,
    )
