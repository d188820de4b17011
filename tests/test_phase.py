import math
import pytest
from core.network.phase import interpolate_phase, wrap_phase


def test_interpolate_phase_across_branch_cut():
    # 3.0 and -3.0 rad straddle +/-pi; the midpoint is pi, not 0.
    result = interpolate_phase(3.0, -3.0, 0.5)
    assert result == pytest.approx(math.pi, abs=1e-6)


def test_interpolate_phase_across_branch_cut_reversed():
    result = interpolate_phase(-3.0, 3.0, 0.5)
    assert abs(abs(result) - math.pi) < 1e-6


@pytest.mark.parametrize("lo, hi, frac, expected", [
    (0.0, math.pi / 2, 0.5, math.pi / 4),
    (-1.0, 1.0, 0.25, -0.5),
    (0.3, 0.3, 0.9, 0.3),
])
def test_interpolate_phase_linear(lo, hi, frac, expected):
    assert interpolate_phase(lo, hi, frac) == pytest.approx(expected)


@pytest.mark.parametrize("lo, hi", [
    (3.0, -3.0), (-3.0, 3.0), (2.5, -2.9), (-0.5, 2.8),
    # samples outside (-pi, pi] are returned as stored
    (0.0, 4.0), (4.0, 0.0), (math.radians(270), 0.0), (-4.5, 1.0), (5.0, 6.5),
])
def test_interpolate_phase_endpoints_preserved(lo, hi):
    assert interpolate_phase(lo, hi, 0.0) == pytest.approx(lo)
    assert interpolate_phase(lo, hi, 1.0) == pytest.approx(hi)


def test_interpolate_phase_follows_nearer_sample():
    # unwrapped span is 0.083 rad, so every result is within half of it
    for k in range(11):
        frac = k / 10
        value = interpolate_phase(3.1, -3.1, frac)
        nearer = 3.1 if frac <= 0.5 else -3.1
        assert abs(value - nearer) <= 0.042


@pytest.mark.parametrize("phase, expected", [
    (0.0, 0.0),
    (math.pi + 0.5, -math.pi + 0.5),
    (-math.pi - 0.5, math.pi - 0.5),
    (math.pi, math.pi),
    (-math.pi, -math.pi),
])
def test_wrap_phase(phase, expected):
    assert wrap_phase(phase) == pytest.approx(expected)
