import numpy as np
import pandas as pd
import pytest

from passindex import (
    InvalidArgument,
    compute_field_index,
    prepare_pass_signals,
    resolve,
    unpack_xy_position,
)


def test_grid_pipeline_with_lfp(open_field, theta_lfp):
    config = resolve(*open_field, *theta_lfp)
    signals = prepare_pass_signals(config)

    n = len(config.pos_ts)
    assert signals.field_index.shape == (n,)
    assert signals.resampled.shape == (n, 3)
    assert np.all(np.diff(signals.resampled[:, 0]) > 0)
    assert signals.filtered_field_index.shape == (n,)
    assert signals.lfp_filtered.shape == theta_lfp[1].shape
    assert np.all(np.abs(signals.lfp_phase) <= np.pi)
    assert signals.spike_phase.shape == config.spk_ts.shape
    assert np.all(np.isfinite(signals.spike_phase))


def test_pipeline_without_lfp(open_field):
    signals = prepare_pass_signals(resolve(*open_field))
    assert signals.lfp_filtered is None
    assert signals.lfp_phase is None
    assert signals.spike_phase is None


def test_literal_field_index_and_raw_ts(straight_line):
    pos_ts, pos, spk_ts = straight_line
    field_index = np.sin(2 * np.pi * 0.5 * pos_ts)
    config = resolve(
        pos_ts,
        pos,
        spk_ts,
        field_index=field_index,
        sample_along="raw_ts",
        filter_band=[0.2, 2],
    )
    signals = prepare_pass_signals(config)

    np.testing.assert_array_equal(signals.field_index, field_index)
    np.testing.assert_array_equal(signals.resampled[:, 0], pos_ts)
    np.testing.assert_array_equal(signals.resampled[:, 2], field_index)


def test_custom_strategies_are_called_with_resolved_config(straight_line):
    pos_ts, pos, spk_ts = straight_line
    seen = {}

    def my_field_index(pos_ts, pos, spk_ts, config):
        seen["field_index"] = config.binside
        return np.ones(len(pos_ts))

    def my_filter(table, config):
        seen["filter_band"] = config.frozen
        return table[:, 2] * 2

    def my_lfp_filter(lfp_ts, lfp_sig):
        return lfp_sig, np.zeros_like(lfp_sig)

    lfp_ts = np.arange(0, 10, 1 / 250)
    config = resolve(
        pos_ts,
        pos,
        spk_ts,
        lfp_ts,
        np.zeros_like(lfp_ts),
        method="custom",
        binside=1,
        field_index=my_field_index,
        sample_along="raw_ts",
        filter_band=my_filter,
        lfp_filter=my_lfp_filter,
    )
    signals = prepare_pass_signals(config)

    assert seen == {"field_index": 1, "filter_band": True}
    np.testing.assert_array_equal(signals.filtered_field_index, 2)
    np.testing.assert_array_equal(signals.lfp_phase, 0)


def test_custom_method_without_filter_band_raises(straight_line):
    config = resolve(*straight_line, method="custom", sample_along="raw_ts")
    with pytest.raises(InvalidArgument):
        prepare_pass_signals(config)


def test_field_index_strategy_output_is_checked(straight_line):
    config = resolve(
        *straight_line, field_index=lambda pos_ts, pos, spk_ts, config: [0, 1]
    )
    with pytest.raises(InvalidArgument):
        compute_field_index(config)


def test_unpack_xy_position():
    pos_ts = np.arange(5) / 50
    xy_position = pd.DataFrame(
        [np.arange(5.0), np.arange(5.0) * 2], index=["X", "Y"], columns=pos_ts
    )

    unpacked_ts, pos = unpack_xy_position(xy_position)

    np.testing.assert_array_equal(unpacked_ts, pos_ts)
    assert pos.shape == (5, 2)
    np.testing.assert_array_equal(pos[:, 1], np.arange(5.0) * 2)

    config = resolve(unpacked_ts, pos, [])
    assert config.binside == 4


def test_dataframe_positions_are_accepted(straight_line):
    pos_ts, pos, spk_ts = straight_line
    config = resolve(pos_ts, pd.DataFrame({"X": pos[:, 0]}), spk_ts)
    assert config.ndim == 1
    assert config.binside == 2


def test_untracked_position_sample_keeps_output_finite(open_field):
    pos_ts, pos, spk_ts = open_field
    pos = pos.copy()
    pos[1000, :] = np.nan

    signals = prepare_pass_signals(resolve(pos_ts, pos, spk_ts))

    assert np.isnan(signals.field_index[1000])
    assert np.all(np.isfinite(signals.resampled))
    assert np.all(np.isfinite(signals.filtered_field_index))
