# core/network/model.py
"""
N-port network built from one ParameterTrace per (destination, source) pair.
"""
from __future__ import annotations
from typing import Dict, Iterator, Mapping, Tuple

from core.exceptions import GridMismatchError, PortCountMismatchError, PortIndexError
from core.network.trace import ParameterTrace
from inout.touchstone_writer import write_touchstone
from utils.logging_config import get_logger

logger = get_logger(__name__)

PortPair = Tuple[int, int]


class NetworkModel:
    """
    Owns an N-port set of S-parameter traces keyed by 1-based port pairs.

    After allocate(n) every pair in [1, n] x [1, n] maps to its own trace.
    Traces are never shared between models or between pairs.
    """

    def __init__(self) -> None:
        self.port_count = 0
        self._traces: Dict[PortPair, ParameterTrace] = {}

    @classmethod
    def from_traces(cls, traces: Mapping[PortPair, ParameterTrace]) -> "NetworkModel":
        """
        Build a network from a complete mapping of port pairs to traces.

        The port count is inferred from the highest port index; every pair
        must be present. Traces are copied.
        """
        n = max((max(pair) for pair in traces), default=0)
        model = cls()
        model.allocate(n)
        for pair in model.pairs():
            if pair not in traces:
                raise PortIndexError(f"Missing trace for S{pair[0]}{pair[1]} in a {n}-port network")
            model[pair] = traces[pair]
        return model

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def allocate(self, nports: int) -> None:
        """Replace any existing traces with nports² fresh empty ones."""
        if nports < 0:
            raise ValueError(f"Port count must be >= 0, got {nports}")
        self.clear()
        for d in range(1, nports + 1):
            for s in range(1, nports + 1):
                self._traces[(d, s)] = ParameterTrace()
        self.port_count = nports
        logger.debug("Allocated %d-port network (%d traces)", nports, len(self._traces))

    def clear(self) -> None:
        self._traces.clear()
        self.port_count = 0

    @property
    def empty(self) -> bool:
        return not self._traces

    def pairs(self) -> Iterator[PortPair]:
        """Port pairs in row-major (destination, source) order."""
        for d in range(1, self.port_count + 1):
            for s in range(1, self.port_count + 1):
                yield (d, s)

    def copy(self) -> "NetworkModel":
        dup = NetworkModel()
        dup.allocate(self.port_count)
        for pair in self.pairs():
            dup._traces[pair] = self._traces[pair].copy()
        return dup

    # ------------------------------------------------------------------
    # Mapping access
    # ------------------------------------------------------------------
    def __getitem__(self, pair: PortPair) -> ParameterTrace:
        try:
            return self._traces[tuple(pair)]
        except KeyError:
            raise PortIndexError(f"S{pair[0]}{pair[1]} is not part of this {self.port_count}-port network") from None

    def __setitem__(self, pair: PortPair, trace: ParameterTrace) -> None:
        pair = tuple(pair)
        if pair not in self._traces:
            raise PortIndexError(f"S{pair[0]}{pair[1]} is not part of this {self.port_count}-port network")
        self._traces[pair] = trace.copy()

    def __contains__(self, pair: object) -> bool:
        return pair in self._traces

    def __repr__(self) -> str:
        return f"<NetworkModel {self.port_count}-port>"

    # ------------------------------------------------------------------
    # Cascading
    # ------------------------------------------------------------------
    def __imul__(self, rhs: "NetworkModel") -> "NetworkModel":
        """
        Apply `rhs` after this network, pair by pair.

        An empty rhs leaves this network untouched; an empty self becomes a
        deep copy of rhs. Each pair is cascaded with ParameterTrace *=, an
        elementwise approximation rather than an S->T->S matrix cascade.
        """
        if not isinstance(rhs, NetworkModel):
            return NotImplemented
        if rhs.empty:
            return self
        if self.empty:
            self.allocate(rhs.port_count)
            for pair in self.pairs():
                self._traces[pair] = rhs._traces[pair].copy()
            return self
        if rhs.port_count != self.port_count:
            logger.error("Cannot cascade %d-port network with %d-port network",
                         self.port_count, rhs.port_count)
            raise PortCountMismatchError(
                f"Port count mismatch: {self.port_count} vs {rhs.port_count}")
        # Copy first so `net *= net` cascades against the original values.
        rhs_traces = {pair: rhs._traces[pair].copy() for pair in rhs.pairs()} if rhs is self else rhs._traces
        for pair in self.pairs():
            self._traces[pair] *= rhs_traces[pair]
        return self

    def __mul__(self, rhs: "NetworkModel") -> "NetworkModel":
        if not isinstance(rhs, NetworkModel):
            return NotImplemented
        result = self.copy()
        result *= rhs
        return result

    # ------------------------------------------------------------------
    # Grid checks and export
    # ------------------------------------------------------------------
    def check_common_grid(self, pairs=None) -> None:
        """
        Ensure the given traces (default: all) share length and frequencies.

        :raises GridMismatchError: naming the first trace that differs.
        """
        pairs = list(self.pairs() if pairs is None else pairs)
        if not pairs:
            return
        ref_pair = pairs[0]
        ref = self[ref_pair].frequencies
        for pair in pairs[1:]:
            freqs = self[pair].frequencies
            if len(freqs) != len(ref) or (freqs != ref).any():
                raise GridMismatchError(
                    f"S{pair[0]}{pair[1]} does not share the frequency grid of "
                    f"S{ref_pair[0]}{ref_pair[1]}")

    def save_to_file(self, path, fmt=None, freq_unit=None) -> None:
        """Write a 2-port mag-angle Touchstone file. See inout.touchstone_writer."""
        write_touchstone(self, path, fmt=fmt, freq_unit=freq_unit)

    def to_dataframe(self):
        """
        Tabulate every trace on the shared frequency grid.

        Columns are `frequency` then `S<d><s>_mag` / `S<d><s>_deg` per pair.
        """
        import numpy as np
        import pandas as pd
        self.check_common_grid()
        if self.empty:
            return pd.DataFrame({"frequency": []})
        data = {"frequency": self[(1, 1)].frequencies}
        for d, s in self.pairs():
            trace = self[(d, s)]
            data[f"S{d}{s}_mag"] = trace.amplitudes
            data[f"S{d}{s}_deg"] = np.degrees(trace.phases)
        return pd.DataFrame(data)
