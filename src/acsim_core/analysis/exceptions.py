# src/acsim_core/analysis/exceptions.py
"""
Defines custom, diagnosable exceptions for the analysis services.
"""
from dataclasses import dataclass
from ..errors import DiagnosableError, format_diagnostic_report


@dataclass()
class TopologyAnalysisError(DiagnosableError):
    """
    Raised when the topology builder is handed a wire that references a terminal no
    element declares. Validation normally rejects such circuits first, so reaching
    this error means the validator was bypassed.
    """
    circuit_name: str
    details: str

    def __str__(self):
        return f"Topology analysis of '{self.circuit_name}' failed: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Topological Analysis Error",
            details=self.details,
            suggestion="Every wire endpoint must name an existing element and one of its two declared terminals.",
            context={'circuit': self.circuit_name}
        )
