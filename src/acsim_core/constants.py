# --- src/acsim_core/constants.py ---
import logging

logger = logging.getLogger(__name__)

# --- Numerical Constants for the Solver ---

#: Divisors whose squared magnitude falls below this value are rejected by
#: ComplexNumber.div instead of producing NaN/Inf.
DIVISION_EPSILON: float = 1.0e-12

#: Threshold on the pivot magnitude during Gaussian elimination. The comparison is
#: done on squared magnitudes, against SINGULAR_PIVOT_EPSILON ** 2.
#: Value: 1e-12 (i.e. 1e-24 on |pivot|^2), low enough that a 1e7 ohm voltmeter
#: (1e-7 S) is still a usable pivot.
#: The threshold is absolute, not scaled to the matrix. A net whose total
#: admittance to the rest of the circuit is below about 1e-12 S (every element on
#: it above roughly 1e12 ohm) is reported as singular, e.g. a divider of two
#: 1e13 ohm resistors. Rescale such circuits before solving.
SINGULAR_PIVOT_EPSILON: float = 1.0e-12

#: Entries of the working matrix smaller than this are skipped during row elimination.
ELIMINATION_SKIP_THRESHOLD: float = 1.0e-15

# --- Meter Models ---

#: Internal resistance of an ideal ammeter (Ohm).
AMMETER_RESISTANCE_OHMS: float = 1.0e-2

#: Internal resistance of an ideal voltmeter (Ohm).
VOLTMETER_RESISTANCE_OHMS: float = 1.0e7

# --- Defaults ---

#: Drive frequency assumed by the netlist loader when a file does not state one.
DEFAULT_FREQUENCY_HZ: float = 50.0

logger.debug(
    "Defined solver constants: DIVISION_EPSILON, SINGULAR_PIVOT_EPSILON, "
    "AMMETER_RESISTANCE_OHMS, VOLTMETER_RESISTANCE_OHMS"
)
