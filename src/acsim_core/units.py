# --- src/acsim_core/units.py ---
import logging
import numbers
from typing import Union

import numpy as np
import pint

logger = logging.getLogger(__name__)
ureg = pint.UnitRegistry()
Quantity = ureg.Quantity
logger.info("Pint Unit Registry initialized.")



def to_magnitude(value: Union[str, int, float], unit: str) -> float:
    """
    Converts a netlist value into a plain float expressed in `unit`.

    Bare numbers are taken to already be in `unit`. Strings are parsed by pint, so
    "4.7 uF", "10 kohm" and "50 Hz" all work; a unitless string such as "100"
    is also taken to be in `unit`.

    Raises:
        pint.DimensionalityError: If the string carries an incompatible unit.
        pint.UndefinedUnitError: If the string names a unit pint does not know.
        ValueError: If the value cannot be read as a number at all.
    """
    if isinstance(value, bool):
        raise ValueError(f"Boolean '{value}' is not a valid quantity.")
    if isinstance(value, numbers.Real):
        return float(value)

    qty = ureg.Quantity(str(value).strip())
    if qty.unitless:
        return float(qty.magnitude)
    return float(qty.to(unit).magnitude)


def is_finite_number(value) -> bool:
    """True for a real, finite number (bools excluded)."""
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        return False
    return bool(np.isfinite(value))
