# src/acsim_core/validation/__init__.py
import logging
logger = logging.getLogger(__name__)

from .issues import ValidationIssue, ValidationIssueLevel
from .issue_codes import CircuitIssueCode
from .circuit_validator import CircuitValidator
from .exceptions import MalformedCircuitError

__all__ = [
    "ValidationIssue",
    "ValidationIssueLevel",
    "CircuitIssueCode",
    "CircuitValidator",
    "MalformedCircuitError",
]
