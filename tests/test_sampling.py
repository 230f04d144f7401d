import numpy as np
import pytest

from passindex import InsufficientData, InvalidArgument, resolve
from passindex.analysis.sampling import (
    arc_length,
    get_sampling_strategy,
    sample_along_arc,
    sample_along_ts,
    sample_field_index,
)


def test_arc_length_on_straight_line_matches_timestamps(straight_line):
    pos_ts, pos, _ = straight_line
    field_index = np.sin(pos_ts)

    table = sample_along_arc(pos_ts, pos, field_index)

    assert table.shape == (len(pos_ts), 3)
    np.testing.assert_allclose(table[:, 0], pos_ts, atol=1e-9)
    np.testing.assert_allclose(table[:, 1], pos_ts, atol=1e-9)
    np.testing.assert_allclose(table[:, 2], field_index, atol=1e-9)


def test_arc_length_drops_stationary_samples():
    pos_ts = np.arange(6, dtype=float)
    pos = np.array([0, 0, 1, 2, 2, 3], dtype=float)[:, np.newaxis]
    field_index = np.linspace(0, 1, 6)

    table = sample_along_arc(pos_ts, pos, field_index)

    assert table.shape == (6, 3)
    assert np.all(np.diff(table[:, 0]) > 0)
    assert table[0, 0] == 0
    assert table[-1, 0] == pytest.approx(3)
    assert table[0, 1] == 0
    assert table[-1, 1] == pytest.approx(5)


def test_arc_length_skips_missing_coordinates():
    pos = np.array([[0, 0], [1, 0], [np.nan, np.nan], [1, 1]], dtype=float)
    np.testing.assert_allclose(arc_length(pos), [0, 1, 1, 1])


def test_arc_length_uses_euclidean_steps():
    pos = np.array([[0, 0], [3, 4], [3, 4], [6, 8]], dtype=float)
    np.testing.assert_allclose(arc_length(pos), [0, 5, 5, 10])


def test_stationary_trajectory_is_insufficient():
    pos_ts = np.arange(10, dtype=float)
    pos = np.ones((10, 2))
    with pytest.raises(InsufficientData):
        sample_along_arc(pos_ts, pos, np.zeros(10))


def test_raw_ts_is_identity(straight_line):
    pos_ts, pos, _ = straight_line
    field_index = np.cos(pos_ts)

    table = sample_along_ts(pos_ts, pos, field_index)

    np.testing.assert_array_equal(table[:, 0], pos_ts)
    np.testing.assert_array_equal(table[:, 1], pos_ts)
    np.testing.assert_array_equal(table[:, 2], field_index)


def test_get_sampling_strategy():
    assert get_sampling_strategy("arc_length") is sample_along_arc
    assert get_sampling_strategy("raw_ts") is sample_along_ts
    with pytest.raises(InvalidArgument):
        get_sampling_strategy("distance")


def test_sample_field_index_uses_literal_table(straight_line):
    pos_ts, pos, spk_ts = straight_line
    table = np.column_stack([pos_ts, pos_ts, np.zeros(len(pos_ts))])
    config = resolve(pos_ts, pos, spk_ts, sample_along=table)

    np.testing.assert_array_equal(sample_field_index(config, np.ones(len(pos_ts))), table)


def test_sample_field_index_calls_user_strategy(straight_line):
    pos_ts, pos, spk_ts = straight_line
    calls = []

    def every_other(pos_ts, pos, field_index):
        calls.append(len(field_index))
        return np.column_stack([pos_ts, pos_ts, field_index])[::2]

    config = resolve(pos_ts, pos, spk_ts, sample_along=every_other)
    table = sample_field_index(config, np.zeros(len(pos_ts)))

    assert calls == [len(pos_ts)]
    assert table.shape == (len(pos_ts) // 2, 3)


def test_sample_field_index_rejects_bad_strategy_output(straight_line):
    pos_ts, pos, spk_ts = straight_line
    config = resolve(
        pos_ts, pos, spk_ts, sample_along=lambda pos_ts, pos, fi: np.zeros((3, 2))
    )
    with pytest.raises(InvalidArgument):
        sample_field_index(config, np.zeros(len(pos_ts)))


def test_sample_field_index_with_auto_raises(straight_line):
    config = resolve(*straight_line, method="custom")
    with pytest.raises(InvalidArgument):
        sample_field_index(config, np.zeros(len(straight_line[0])))


def test_arc_length_skips_missing_field_index():
    pos_ts = np.arange(5, dtype=float)
    pos = pos_ts[:, np.newaxis].copy()
    field_index = np.array([0.0, 1.0, np.nan, 3.0, 4.0])

    table = sample_along_arc(pos_ts, pos, field_index)

    np.testing.assert_allclose(table[:, 2], [0, 1, 2, 3, 4])


def test_raw_ts_fills_missing_field_index(straight_line):
    pos_ts, pos, _ = straight_line
    field_index = pos_ts.copy()
    field_index[[0, 100]] = np.nan

    table = sample_along_ts(pos_ts, pos, field_index)

    assert table[0, 2] == field_index[1]
    assert table[100, 2] == pytest.approx(pos_ts[100])


@pytest.mark.parametrize("strategy", [sample_along_arc, sample_along_ts])
def test_all_missing_field_index_is_insufficient(strategy, straight_line):
    pos_ts, pos, _ = straight_line
    with pytest.raises(InsufficientData):
        strategy(pos_ts, pos, np.full(len(pos_ts), np.nan))


def test_partly_missing_row_still_advances_arc():
    pos = np.array([[0, 0], [np.nan, 1], [0, 2]], dtype=float)
    np.testing.assert_allclose(arc_length(pos), [0, 1, 2])
