# src/acsim_core/errors.py
"""
Error types shared by every layer of ACSim Core.

There are two tiers. Internal layers raise `DiagnosableError` subclasses that know
how to describe themselves:

    ParsingError / SchemaValidationError / QuantityConversionError   (netlist front-end)
    MalformedCircuitError / TopologyAnalysisError                     (circuit structure)
    ComponentError                                                    (degenerate element values)
    SingularSystemError                                               (no unique MNA solution)

At the public boundary those are either turned into a `SolveFailure` value or
re-raised as one of the two `AcSimError` types below, whose message is the
formatted report.
"""
import logging
from typing import Any, Dict, Protocol, abstractmethod
from typing import runtime_checkable

logger = logging.getLogger(__name__)

# --- User-Facing Exception Hierarchy ---

class AcSimError(Exception):
    """Base class for the errors ACSim Core raises to its callers."""
    pass

class CircuitBuildError(AcSimError):
    """
    A netlist file could not be turned into a `Circuit`: missing file, YAML syntax,
    schema violation, a quantity in the wrong unit or a bad sweep block.
    """
    pass

class SimulationRunError(AcSimError):
    """
    Raised by `solve_strict` for a malformed circuit, a degenerate element or a
    singular system, and by every solve entry point when an unexpected internal
    error escapes the solver.
    """
    pass


# --- Diagnostic Protocol & Base Exception ---

@runtime_checkable
class Diagnosable(Protocol):
    """Anything that can render a multi-line diagnostic report about itself."""
    def get_diagnostic_report(self) -> str:
        ...

class DiagnosableError(Exception, Diagnosable):
    """
    Base class of the internal, typed solver errors. The solve facade catches these
    by type; `get_diagnostic_report` is abstract so each one supplies its own report.
    """
    @abstractmethod
    def get_diagnostic_report(self) -> str:
        raise NotImplementedError


# --- Stateless Formatting Utility ---

REPORT_WIDTH = 64

#: Context keys rendered in the report header, in this order.
REPORT_CONTEXT_LABELS = (
    ('circuit', "Circuit"),
    ('element_id', "Element"),
    ('frequency', "Frequency"),
    ('source_file', "Source File"),
)


def format_diagnostic_report(
    error_type: str,
    details: str,
    suggestion: str,
    context: Dict[str, Any]
) -> str:
    """
    Formats a diagnostic report: a header with the error category and whatever
    circuit context is known, then the details and a suggested fix.

    Args:
        error_type: The failure category, e.g. "Singular System" or
                    "Quantity Conversion Error".
        details: Multi-line description of what went wrong.
        suggestion: What the user can change in the circuit or netlist.
        context: Optional values for the keys in `REPORT_CONTEXT_LABELS`. Missing
                 or empty values are left out.
    """
    lines = [
        "\n",
        " ACSim Core: Solver Diagnostic ".center(REPORT_WIDTH, "="),
        f"{'Error Type:':<16}{error_type}",
    ]
    for key, label in REPORT_CONTEXT_LABELS:
        value = context.get(key)
        if value:
            lines.append(f"{label + ':':<16}{value}")

    for heading, body in (("Details", details), ("Suggestion", suggestion)):
        if not body:
            continue
        lines.append(f"\n{heading}:")
        lines.extend(f"  {line}" for line in body.splitlines())

    lines.append("=" * REPORT_WIDTH)
    return "\n".join(lines)
