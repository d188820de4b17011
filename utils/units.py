# utils/units.py
from enum import Enum

import pint

from utils.logging_config import get_logger

ureg = pint.UnitRegistry()
logger = get_logger(__name__)


class FrequencyUnit(Enum):
    """Frequency unit token used in Touchstone option lines."""
    HZ = "Hz"
    KHZ = "kHz"
    MHZ = "MHz"
    GHZ = "GHz"

    @property
    def scale(self) -> float:
        """Factor converting Hz into this unit (GHz -> 1e-9)."""
        return float(ureg.Quantity(1.0, "Hz").to(self.value).magnitude)

    @classmethod
    def from_token(cls, token) -> "FrequencyUnit":
        """
        Resolve a unit token case-insensitively.

        Missing tokens mean GHz; unknown ones fall back to GHz with a warning.
        """
        if isinstance(token, cls):
            return token
        if token is None:
            return cls.GHZ
        for unit in cls:
            if unit.value.lower() == str(token).strip().lower():
                return unit
        logger.warning("Unrecognised frequency unit %r; using GHz", token)
        return cls.GHZ


def parse_frequency(expr) -> float:
    """
    Parse a frequency such as "1.5 GHz" or "250MHz" and return Hz.

    Bare numbers are taken as Hz.

    :raises ValueError: If the expression is not a frequency.
    """
    if isinstance(expr, (int, float)):
        return float(expr)
    try:
        quantity = ureg.Quantity(expr)
    except Exception as e:
        raise ValueError(f"Could not parse '{expr}' as a frequency: {e}")
    if quantity.dimensionless:
        return float(quantity.magnitude)
    try:
        return float(quantity.to("Hz").magnitude)
    except pint.DimensionalityError as e:
        raise ValueError(f"'{expr}' is not a frequency: {e}")
