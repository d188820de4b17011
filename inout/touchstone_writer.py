# inout/touchstone_writer.py
import math
from enum import Enum
from typing import List

from core.exceptions import ExportIOError, UnsupportedPortCountError
from utils.logging_config import get_logger
from utils.units import FrequencyUnit

logger = get_logger(__name__)

RAD2DEG = 180 / math.pi
REFERENCE_IMPEDANCE = 50.0
# Column order of a 2-port Touchstone row.
S2P_ORDER = ((1, 1), (2, 1), (1, 2), (2, 2))


class ParameterFormat(Enum):
    """Touchstone data format token."""
    MAG_ANGLE = "MA"
    REAL_IMAGINARY = "RI"
    DB_ANGLE = "DB"

    @classmethod
    def from_token(cls, token) -> "ParameterFormat":
        if isinstance(token, cls):
            return token
        try:
            return cls(str(token).strip().upper())
        except ValueError:
            raise ValueError(f"Unknown Touchstone format '{token}'. Allowed: {[f.value for f in cls]}")


def render_s2p(network, freq_unit: FrequencyUnit = FrequencyUnit.GHZ) -> List[str]:
    """
    Render a 2-port network as mag-angle Touchstone lines (no newlines).

    Rows are produced by sample index; the four traces must share one
    frequency grid.
    """
    network.check_common_grid(S2P_ORDER)
    scale = freq_unit.scale
    lines = [f"# {freq_unit.value} S MA R {REFERENCE_IMPEDANCE:.3f}"]
    traces = [network[pair] for pair in S2P_ORDER]
    for i in range(len(traces[0])):
        cols = [traces[0][i].frequency * scale]
        for trace in traces:
            cols.append(trace[i].amplitude)
            cols.append(trace[i].phase * RAD2DEG)
        lines.append(" ".join(f"{v:f}" for v in cols))
    return lines


def write_touchstone(network, path, fmt=None, freq_unit=None) -> None:
    """
    Export a 2-port network to a mag-angle Touchstone (.s2p) file.

    Args:
        network: NetworkModel with port_count == 2.
        path: Destination file.
        fmt: ParameterFormat or token; anything but MA is exported as MA.
        freq_unit: FrequencyUnit or token; defaults to GHz.

    Raises:
        UnsupportedPortCountError: If the network is not 2-port. No file is written.
        GridMismatchError: If S11/S21/S12/S22 do not share a grid. No file is written.
        ExportIOError: If the destination cannot be written.
    """
    if network.port_count != 2:
        logger.error("Touchstone export only supports 2-port networks (got %d ports)", network.port_count)
        raise UnsupportedPortCountError(
            f"Touchstone export only supports 2-port networks, got {network.port_count}")

    fmt = ParameterFormat.MAG_ANGLE if fmt is None else ParameterFormat.from_token(fmt)
    if fmt is not ParameterFormat.MAG_ANGLE:
        logger.warning("Format %s not implemented; exporting as mag-angle", fmt.value)

    unit = FrequencyUnit.GHZ if freq_unit is None else FrequencyUnit.from_token(freq_unit)
    lines = render_s2p(network, unit)

    try:
        with open(path, "w") as f:
            for line in lines:
                f.write(line + "\n")
    except OSError as e:
        logger.error("Couldn't open %s for writing: %s", path, e)
        raise ExportIOError(f"Couldn't write Touchstone file '{path}': {e}") from e
    logger.info("Wrote %d frequency points to %s", len(lines) - 1, path)
