# src/acsim_core/validation/exceptions.py
"""
Defines the diagnosable exception raised when a circuit snapshot is structurally
malformed. It is raised before any topology or matrix work begins, so nothing is
ever partially computed for a malformed circuit.
"""
from typing import List, Optional

from .issues import ValidationIssue, ValidationIssueLevel
from ..errors import DiagnosableError, format_diagnostic_report


class MalformedCircuitError(DiagnosableError):
    """
    Container for all error-level `ValidationIssue` objects found in one validation
    pass, formatted into a single diagnostic report.
    """
    def __init__(self, issues: List[ValidationIssue], circuit_name: str = "circuit"):
        self.circuit_name = circuit_name
        self.issues: List[ValidationIssue] = [
            issue for issue in issues if issue.level == ValidationIssueLevel.ERROR
        ]
        if not self.issues:
            summary_message = "MalformedCircuitError was raised with no error-level issues."
        else:
            summary_message = (
                f"Circuit '{circuit_name}' is malformed ({len(self.issues)} error(s)):\n"
                + "\n".join(f"  - {issue}" for issue in self.issues)
            )
        super().__init__(summary_message)

    @property
    def element_id(self) -> Optional[str]:
        """The element named by the first error, if any."""
        for issue in self.issues:
            if issue.element_id:
                return issue.element_id
        return None

    @property
    def codes(self) -> List[str]:
        return [issue.code for issue in self.issues]

    def get_diagnostic_report(self) -> str:
        details = (
            f"The circuit description is structurally invalid.\n"
            f"Found {len(self.issues)} error(s). See details below:\n\n"
            + "\n".join(f"  - {issue}" for issue in self.issues)
        )
        return format_diagnostic_report(
            error_type="Malformed Circuit",
            details=details,
            suggestion="Every element needs a unique id, a known kind and exactly two distinct terminals; every wire must join two declared terminals.",
            context={'circuit': self.circuit_name, 'element_id': self.element_id}
        )
