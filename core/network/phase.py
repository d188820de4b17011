# core/network/phase.py
"""
Phase helpers shared by trace interpolation and cascading.

Phases are plain radians. Interpolation unwraps a bracketing pair locally
when the two samples straddle the ±π branch cut; it is not a general
modulo reduction.
"""
import math

TWO_PI = 2 * math.pi


def interpolate_phase(phase_lo: float, phase_hi: float, frac: float) -> float:
    """
    Linearly interpolate between two phase samples, unwrapping across ±π.

    If the samples are more than π apart, 2π is added to the smaller one so
    the pair is locally continuous. The result is then reported on the branch
    of the nearer sample: frac < 0.5 follows phase_lo, frac > 0.5 follows
    phase_hi, and at 0.5 the un-nudged sample wins. frac 0 and 1 therefore
    return the stored samples whatever range they are in.
    Without a nudge the plain linear value is returned unchanged.
    """
    if abs(phase_lo - phase_hi) <= math.pi:
        return phase_lo + (phase_hi - phase_lo) * frac

    lo_nudged = phase_lo < phase_hi
    if lo_nudged:
        phase_lo += TWO_PI
    else:
        phase_hi += TWO_PI

    ret = phase_lo + (phase_hi - phase_lo) * frac
    if (lo_nudged and frac < 0.5) or (not lo_nudged and frac > 0.5):
        ret -= TWO_PI
    return ret


def wrap_phase(phase: float) -> float:
    """Single-step wrap of a phase sum into [-π, π]."""
    if phase < -math.pi:
        phase += TWO_PI
    if phase > math.pi:
        phase -= TWO_PI
    return phase
