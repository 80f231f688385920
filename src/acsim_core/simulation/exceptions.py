# src/acsim_core/simulation/exceptions.py
"""
Defines custom, diagnosable exceptions specific to assembling and solving the
MNA system.

All exceptions here inherit from `DiagnosableError`, so the solve facade can
catch them by type, turn them into a `SolveFailure` value, and keep the full
diagnostic report.
"""
from dataclasses import dataclass, field
from typing import Optional, Tuple

import numpy as np

from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class SingularSystemError(DiagnosableError, np.linalg.LinAlgError):
    """
    Raised when the MNA system has no unique solution: a pivot below threshold
    during elimination, or a non-finite entry in the matrix, right-hand side or
    solution vector (e.g. an inductor driven at 0 Hz).

    It is catchable both as a `DiagnosableError` and as a standard `LinAlgError`.
    `floating_nets` and `looped_sources` are filled in by the solve facade when the
    topology explains the failure.
    """
    details: str
    frequency: Optional[float] = None
    step: Optional[int] = None
    element_id: Optional[str] = None
    floating_nets: Tuple[int, ...] = field(default_factory=tuple)
    looped_sources: Tuple[str, ...] = field(default_factory=tuple)

    def __str__(self):
        freq_str = f" at frequency {self.frequency:.4e} Hz" if self.frequency is not None else ""
        return f"Singular system detected{freq_str}: {self.details}"

    def get_diagnostic_report(self) -> str:
        details = [self.details]
        if self.step is not None:
            details.append(f"Elimination stopped at step {self.step}.")
        if self.floating_nets:
            details.append(
                f"Net(s) {list(self.floating_nets)} have no path to the reference net "
                f"through resistors, reactances, meters or voltage sources."
            )
        if self.looped_sources:
            details.append(
                f"Voltage source(s) {list(self.looped_sources)} form a loop of voltage "
                f"sources (or are shorted), so their currents are undetermined."
            )
        return format_diagnostic_report(
            error_type="Singular System",
            details="\n".join(details),
            suggestion="This circuit configuration cannot be solved. Connect floating parts of the circuit to the rest, remove shorts across voltage sources, and avoid inductors at 0 Hz.",
            context={
                'element_id': self.element_id,
                'frequency': f"{self.frequency:.4e} Hz" if self.frequency is not None else "N/A",
            }
        )
