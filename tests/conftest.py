import numpy as np
import pytest

POS_SAMPLING_RATE = 50
LFP_SAMPLING_RATE = 250


@pytest.fixture
def straight_line():
    """1D trajectory moving at 1 unit/s, sampled at 50 Hz from t=0."""
    pos_ts = np.arange(500) / POS_SAMPLING_RATE
    pos = pos_ts[:, np.newaxis].copy()
    spk_ts = pos_ts[::25] + 0.001
    return pos_ts, pos, spk_ts


@pytest.fixture
def open_field():
    """
    2D Lissajous trajectory covering a 100 x 100 box, with a cell firing
    within 15 units of the centre.
    """
    pos_ts = np.arange(10000) / POS_SAMPLING_RATE
    x = 50 + 45 * np.sin(2 * np.pi * pos_ts / 37)
    y = 50 + 45 * np.sin(2 * np.pi * pos_ts / 23)
    pos = np.column_stack([x, y])

    in_field = np.hypot(x - 50, y - 50) < 15
    spk_ts = pos_ts[in_field][::5] + 0.001
    return pos_ts, pos, spk_ts


@pytest.fixture
def theta_lfp():
    """200 s of an 8 Hz cosine sampled at 250 Hz, spanning the open field."""
    lfp_ts = np.arange(0, 200, 1 / LFP_SAMPLING_RATE)
    lfp_sig = np.cos(2 * np.pi * 8 * lfp_ts)
    return lfp_ts, lfp_sig
