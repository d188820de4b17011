# core/network/point.py
from __future__ import annotations
import cmath
from dataclasses import dataclass, replace


@dataclass(frozen=True, slots=True)
class FrequencyPoint:
    """
    One sample of a single scattering parameter.

    * frequency – stimulus frequency in Hz
    * amplitude – linear magnitude ratio
    * phase     – radians, not normalised
    """
    frequency: float
    amplitude: float
    phase: float

    def with_values(self, amplitude: float, phase: float) -> "FrequencyPoint":
        """Copy of this point at the same frequency with new amplitude/phase."""
        return replace(self, amplitude=float(amplitude), phase=float(phase))

    def to_complex(self) -> complex:
        return cmath.rect(self.amplitude, self.phase)
