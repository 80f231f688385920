# src/acsim_core/simulation/waveform.py
"""
Conversion from RMS phasors to instantaneous time-domain values.

Every phasor produced by the solver is RMS, so the instantaneous value of a
quantity with phasor P at angular frequency w is sqrt(2) * Re{P * exp(j*w*t)}.
"""
import math
from typing import Union

import numpy as np

from ..complex_math import ComplexNumber

Phasor = Union[ComplexNumber, complex]


def peak_amplitude(phasor: Phasor) -> float:
    """Peak value of the sinusoid described by an RMS phasor."""
    return math.sqrt(2.0) * abs(complex(phasor))


def sample_waveform(phasor: Phasor, frequency_hz: float, times_s) -> np.ndarray:
    """
    Samples the instantaneous value of an RMS phasor at the given times.

    Args:
        phasor: RMS phasor of the quantity.
        frequency_hz: The drive frequency. At 0 Hz the waveform is the constant
                      sqrt(2) * Re{P}.
        times_s: Scalar or array of sample times in seconds.

    Returns:
        A float array with the same shape as `times_s`.
    """
    t = np.asarray(times_s, dtype=float)
    omega = 2.0 * math.pi * float(frequency_hz)
    return math.sqrt(2.0) * np.real(complex(phasor) * np.exp(1j * omega * t))
