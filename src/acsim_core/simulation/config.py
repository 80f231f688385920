# src/acsim_core/simulation/config.py
import logging
import numpy as np
import pint
from typing import Dict, Any

from ..units import ureg

logger = logging.getLogger(__name__)

class ConfigParsingError(ValueError):
    """Custom exception for errors during sweep configuration parsing."""
    pass


def _to_hz(value: Any) -> float:
    """Reads a frequency given as a bare number of hertz or a pint string such as '10 kHz'."""
    if isinstance(value, bool):
        raise ValueError(f"Boolean '{value}' is not a frequency.")
    if isinstance(value, (int, float)):
        return float(value)
    qty = ureg.Quantity(str(value).strip())
    if qty.unitless:
        return float(qty.magnitude)
    return float(qty.to('Hz').magnitude)


def parse_sweep_config(raw_sweep_config: Dict[str, Any]) -> np.ndarray:
    """
    Parses a raw sweep configuration dictionary into a NumPy frequency array.

    Supported forms:
        {'type': 'linear', 'start': ..., 'stop': ..., 'num_points': N}
        {'type': 'log', 'start': ..., 'stop': ..., 'num_points': N}
        {'type': 'list', 'points': [...]}

    Frequencies may be numbers (Hz) or unit strings. A 'list' sweep is sorted and
    de-duplicated. 0 Hz is allowed in linear and list sweeps.
    """
    if not raw_sweep_config:
        raise ConfigParsingError("Sweep configuration is missing or empty.")
    try:
        sweep_type = raw_sweep_config['type']
        freq_values_hz = np.array([], dtype=float)

        if sweep_type in ['linear', 'log']:
            start_hz = _to_hz(raw_sweep_config['start'])
            stop_hz = _to_hz(raw_sweep_config['stop'])
            num_points = int(raw_sweep_config['num_points'])

            if num_points < 1: raise ValueError("Sweep must have at least one point.")
            if not (np.isfinite(start_hz) and np.isfinite(stop_hz)): raise ValueError("Sweep bounds must be finite.")
            if stop_hz < start_hz: raise ValueError("Stop frequency cannot be less than start frequency.")

            if sweep_type == 'linear':
                if start_hz < 0: raise ValueError("Linear sweep start frequency must be >= 0.")
                freq_values_hz = np.linspace(start_hz, stop_hz, num_points, dtype=float)
            else: # log
                if start_hz <= 0 or stop_hz <= 0: raise ValueError("Log sweep frequencies must be > 0.")
                freq_values_hz = np.geomspace(start_hz, stop_hz, num_points, dtype=float)

        elif sweep_type == 'list':
            points = [_to_hz(p) for p in raw_sweep_config['points']]
            if not points: raise ValueError("Frequency list must not be empty.")
            if any(not np.isfinite(f) or f < 0 for f in points): raise ValueError("Frequencies in list must be finite and non-negative.")
            freq_values_hz = np.array(sorted(set(points)), dtype=float)

        else:
            raise ValueError(f"Unknown sweep type '{sweep_type}'. Expected 'linear', 'log' or 'list'.")

        logger.debug(f"Parsed {sweep_type} sweep with {len(freq_values_hz)} points.")
        return freq_values_hz
    except (KeyError, TypeError, ValueError, pint.DimensionalityError, pint.UndefinedUnitError) as e:
        raise ConfigParsingError(f"Failed to parse sweep configuration: {e}") from e
