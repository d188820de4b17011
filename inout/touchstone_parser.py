# inout/touchstone_parser.py
import math

from core.exceptions import TouchstoneParseError, UnsupportedFormatError
from core.network.model import NetworkModel
from core.network.point import FrequencyPoint
from inout.touchstone_writer import S2P_ORDER, ParameterFormat
from utils.logging_config import get_logger
from utils.units import FrequencyUnit

logger = get_logger(__name__)

DEG2RAD = math.pi / 180


def _parse_option_line(line: str):
    """
    Parse '# <unit> S <format> R <z0>' into (FrequencyUnit, ParameterFormat).

    Missing tokens take the Touchstone defaults (GHz, MA).
    """
    unit = FrequencyUnit.GHZ
    fmt = ParameterFormat.MAG_ANGLE
    tokens = line[1:].split()
    i = 0
    while i < len(tokens):
        tok = tokens[i].upper()
        if tok in ("HZ", "KHZ", "MHZ", "GHZ"):
            unit = FrequencyUnit.from_token(tok)
        elif tok in ("MA", "RI", "DB"):
            fmt = ParameterFormat(tok)
        elif tok == "R":
            i += 1  # skip reference impedance value
        elif tok != "S":
            raise UnsupportedFormatError(f"Unsupported parameter kind '{tokens[i]}' in option line")
        i += 1
    return unit, fmt


def read_touchstone_file(filename: str) -> NetworkModel:
    """
    Reads a 2-port mag-angle touchstone (.s2p) file.

    Expected file format:
      ! comment
      # GHz S MA R 50
      f  |S11| <S11  |S21| <S21  |S12| <S12  |S22| <S22   (angles in degrees)

    Returns:
        A 2-port NetworkModel with frequencies in Hz and phases in radians.

    Raises:
        UnsupportedFormatError: If the file is not mag-angle S-parameters.
        TouchstoneParseError: If a data line is malformed or no data is found.
    """
    unit = FrequencyUnit.GHZ
    rows = []
    with open(filename) as f:
        for lineno, line in enumerate(f, start=1):
            line = line.split("!", 1)[0].strip()
            if not line:
                continue
            if line.startswith("#"):
                unit, fmt = _parse_option_line(line)
                if fmt is not ParameterFormat.MAG_ANGLE:
                    raise UnsupportedFormatError(
                        f"{filename}: only MA files can be read, got {fmt.value}")
                continue
            tokens = line.split()
            if len(tokens) != 9:
                raise TouchstoneParseError(
                    f"{filename}:{lineno}: expected 9 columns for a 2-port file, got {len(tokens)}")
            try:
                rows.append([float(t) for t in tokens])
            except ValueError as e:
                raise TouchstoneParseError(f"{filename}:{lineno}: error parsing line '{line}': {e}")
    if not rows:
        raise TouchstoneParseError(f"No valid data found in touchstone file {filename}.")

    network = NetworkModel()
    network.allocate(2)
    for row in rows:
        freq = row[0] / unit.scale
        for k, pair in enumerate(S2P_ORDER):
            network[pair].append(FrequencyPoint(freq, row[1 + 2 * k], row[2 + 2 * k] * DEG2RAD))
    logger.debug("Read %d frequency points from %s", len(rows), filename)
    return network
