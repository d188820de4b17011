# core/network/sampled_sweep.py
from dataclasses import dataclass, field
from typing import Sequence


@dataclass
class SampledSweep:
    """
    One channel of a swept measurement as delivered by the acquisition layer.

    Attributes:
        samples: Sample values (dB for magnitude channels, degrees for phase).
        offsets: Per-sample positions on the frequency axis, in timescale units.
        timescale: Hz per offset unit.
        trigger_phase: Constant added to every scaled offset, in Hz.
    """
    samples: Sequence[float]
    offsets: Sequence[float]
    timescale: float = 1.0
    trigger_phase: float = 0.0
    name: str = field(default="", compare=False)

    def __len__(self) -> int:
        return min(len(self.samples), len(self.offsets))

    def position(self, index: int) -> float:
        """Frequency in Hz of sample `index`."""
        return self.offsets[index] * self.timescale + self.trigger_phase
