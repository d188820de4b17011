# core/network/trace.py
"""
Frequency response of a single scattering parameter.

A ParameterTrace is an ordered list of FrequencyPoint samples for one
(destination, source) port pair. Frequencies are non-decreasing; that is
checked whenever points are added, never repaired by sorting.
"""
from __future__ import annotations
import math
from typing import Iterable, Iterator, List, Optional, Sequence, Tuple

import numpy as np

from core.exceptions import InvalidFrequencyError, UnsortedFrequencyError
from core.network.phase import TWO_PI, interpolate_phase, wrap_phase
from core.network.point import FrequencyPoint
from core.network.sampled_sweep import SampledSweep
from utils.logging_config import get_logger

logger = get_logger(__name__)

DEG2RAD = math.pi / 180
_FREQ_EPS = np.finfo(float).eps


class ParameterTrace:
    def __init__(self, points: Iterable[FrequencyPoint] = ()) -> None:
        self._points: List[FrequencyPoint] = []
        self._freqs: Optional[np.ndarray] = None
        self.extend(points)

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------
    @classmethod
    def from_sweep(cls, magnitude: SampledSweep, phase: SampledSweep) -> "ParameterTrace":
        """Build a trace from a dB magnitude channel and a degree phase channel."""
        trace = cls()
        trace.convert_from_sweep(magnitude, phase)
        return trace

    @classmethod
    def from_arrays(cls, frequencies: Sequence[float], amplitudes: Sequence[float],
                    phases: Sequence[float]) -> "ParameterTrace":
        """Build a trace from parallel frequency (Hz), linear amplitude and radian arrays."""
        if not (len(frequencies) == len(amplitudes) == len(phases)):
            raise ValueError("frequencies, amplitudes and phases must have the same length")
        return cls(FrequencyPoint(float(f), float(a), float(p))
                   for f, a, p in zip(frequencies, amplitudes, phases))

    def convert_from_sweep(self, magnitude: SampledSweep, phase: SampledSweep) -> None:
        """
        Replace the contents of this trace with converted sweep samples.

        One point is produced per index over the shorter channel. The
        frequency axis comes from the magnitude channel; samples must already
        be in increasing frequency order.
        """
        n = min(len(magnitude), len(phase))
        points = [
            FrequencyPoint(
                magnitude.position(i),
                10 ** (magnitude.samples[i] / 20),
                phase.samples[i] * DEG2RAD,
            )
            for i in range(n)
        ]
        self.clear()
        self.extend(points)
        logger.debug("Converted %d sweep samples (%s/%s)", n, magnitude.name or "mag", phase.name or "phase")

    def append(self, point: FrequencyPoint) -> None:
        freq = point.frequency
        if not math.isfinite(freq) or freq < 0:
            raise InvalidFrequencyError(f"Frequency must be finite and >= 0, got {freq}")
        if self._points and freq < self._points[-1].frequency:
            raise UnsortedFrequencyError(
                f"Frequency {freq:.6e} Hz follows {self._points[-1].frequency:.6e} Hz; "
                "trace frequencies must be non-decreasing")
        self._points.append(point)
        self._freqs = None

    def extend(self, points: Iterable[FrequencyPoint]) -> None:
        for point in points:
            self.append(point)

    def clear(self) -> None:
        self._points = []
        self._freqs = None

    def copy(self) -> "ParameterTrace":
        dup = ParameterTrace()
        dup._points = list(self._points)
        return dup

    # ------------------------------------------------------------------
    # Sequence protocol
    # ------------------------------------------------------------------
    def __len__(self) -> int:
        return len(self._points)

    def __getitem__(self, index: int) -> FrequencyPoint:
        return self._points[index]

    def __iter__(self) -> Iterator[FrequencyPoint]:
        return iter(self._points)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ParameterTrace):
            return NotImplemented
        return self._points == other._points

    def __repr__(self) -> str:
        if not self._points:
            return "<ParameterTrace empty>"
        return (f"<ParameterTrace {len(self._points)} points, "
                f"{self._points[0].frequency:.3e}..{self._points[-1].frequency:.3e} Hz>")

    # ------------------------------------------------------------------
    # Array views
    # ------------------------------------------------------------------
    @property
    def frequencies(self) -> np.ndarray:
        if self._freqs is None:
            self._freqs = np.array([p.frequency for p in self._points], dtype=float)
        return self._freqs

    @property
    def amplitudes(self) -> np.ndarray:
        return np.array([p.amplitude for p in self._points], dtype=float)

    @property
    def phases(self) -> np.ndarray:
        return np.array([p.phase for p in self._points], dtype=float)

    def to_complex(self) -> np.ndarray:
        """Complex S values, amplitude * exp(j*phase)."""
        return self.amplitudes * np.exp(1j * self.phases)

    # ------------------------------------------------------------------
    # Interpolation
    # ------------------------------------------------------------------
    def _bracket(self, frequency: float) -> Tuple[int, int]:
        """Adjacent indices (lo, lo+1) with freq[lo] <= frequency <= freq[lo+1]."""
        hi = int(np.searchsorted(self.frequencies, frequency, side="right"))
        hi = min(max(hi, 1), len(self._points) - 1)
        return hi - 1, hi

    def interpolate_point(self, frequency: float) -> FrequencyPoint:
        """
        Estimate the parameter at an arbitrary frequency.

        Below the first sample the lowest amplitude is held and phase ramps
        linearly to zero at DC. Above the last sample the response is zero.
        Inside the band amplitude is linear and phase uses interpolate_phase.
        An empty trace reads as zero everywhere.
        """
        frequency = float(frequency)
        if frequency < 0:
            raise InvalidFrequencyError(f"Cannot interpolate at negative frequency {frequency}")

        if not self._points:
            return FrequencyPoint(frequency, 0.0, 0.0)

        first = self._points[0]
        if frequency < first.frequency:
            phase = interpolate_phase(0.0, first.phase, frequency / first.frequency)
            return FrequencyPoint(frequency, first.amplitude, phase)
        if frequency > self._points[-1].frequency:
            return FrequencyPoint(frequency, 0.0, 0.0)
        if len(self._points) == 1:
            return FrequencyPoint(frequency, first.amplitude, first.phase)

        lo, hi = self._bracket(frequency)
        p_lo = self._points[lo]
        p_hi = self._points[hi]
        dfreq = p_hi.frequency - p_lo.frequency
        frac = (frequency - p_lo.frequency) / dfreq if dfreq > _FREQ_EPS else 0.0

        amplitude = p_lo.amplitude + (p_hi.amplitude - p_lo.amplitude) * frac
        phase = interpolate_phase(p_lo.phase, p_hi.phase, frac)
        return FrequencyPoint(frequency, amplitude, phase)

    def interpolate_magnitude(self, frequency: float) -> float:
        return self.interpolate_point(frequency).amplitude

    def interpolate_angle(self, frequency: float) -> float:
        return self.interpolate_point(frequency).phase

    def resample(self, frequencies: Iterable[float]) -> "ParameterTrace":
        """New trace holding this response interpolated onto `frequencies`."""
        return ParameterTrace(self.interpolate_point(f) for f in frequencies)

    # ------------------------------------------------------------------
    # Group delay
    # ------------------------------------------------------------------
    def group_delay(self, bin: int) -> float:
        """
        Group delay in seconds between sample `bin` and the next one.

        Returns 0 for the last sample (no upper neighbour) and for
        coincident frequencies.
        """
        if bin < 0:
            raise IndexError(f"Group delay bin must be >= 0, got {bin}")
        if bin + 1 >= len(self._points):
            return 0.0

        a = self._points[bin]
        b = self._points[bin + 1]
        # Hz -> rad/s
        dfreq = (b.frequency - a.frequency) * TWO_PI
        if dfreq <= _FREQ_EPS:
            return 0.0
        return (a.phase - b.phase) / dfreq

    def group_delays(self) -> np.ndarray:
        """Group delay for every bin; the last entry is always 0."""
        delays = np.zeros(len(self._points))
        if len(self._points) < 2:
            return delays
        dphase = self.phases[:-1] - self.phases[1:]
        domega = np.diff(self.frequencies) * TWO_PI
        valid = domega > _FREQ_EPS
        delays[:-1][valid] = dphase[valid] / domega[valid]
        return delays

    # ------------------------------------------------------------------
    # Cascading
    # ------------------------------------------------------------------
    def __imul__(self, rhs: "ParameterTrace") -> "ParameterTrace":
        """
        Append `rhs` after this stage on this trace's own frequency grid.

        Amplitudes multiply and phases add (wrapped into [-π, π]). This is an
        elementwise transmission model, not a scattering-matrix cascade.
        """
        if not isinstance(rhs, ParameterTrace):
            return NotImplemented
        cascaded = []
        for us in self._points:
            point = rhs.interpolate_point(us.frequency)
            cascaded.append(us.with_values(us.amplitude * point.amplitude,
                                           wrap_phase(us.phase + point.phase)))
        self._points = cascaded
        return self

    def __mul__(self, rhs: "ParameterTrace") -> "ParameterTrace":
        if not isinstance(rhs, ParameterTrace):
            return NotImplemented
        result = self.copy()
        result *= rhs
        return result
