"""
Defines the custom, diagnosable exceptions for the components subsystem.
"""
from dataclasses import dataclass
from typing import Optional

from ..errors import DiagnosableError, format_diagnostic_report

@dataclass()
class ComponentError(DiagnosableError):
    """
    The canonical, diagnosable exception for a degenerate element.

    Raised when an element's defining value cannot be turned into a usable
    admittance or source phasor: missing, non-finite, or outside its allowed range.
    """
    element_id: str
    details: str
    frequency: Optional[float] = None

    def __str__(self):
        return f"Element '{self.element_id}': {self.details}"

    def get_diagnostic_report(self) -> str:
        """Generates the diagnostic report for a degenerate element."""
        return format_diagnostic_report(
            error_type="Degenerate Component",
            details=self.details,
            suggestion="Check the element's value: resistance, capacitance and inductance must be finite and positive; source magnitudes must be finite and non-negative.",
            context={
                'element_id': self.element_id,
                'frequency': f"{self.frequency:.4e} Hz" if self.frequency is not None else "N/A"
            }
        )
