# src/acsim_core/parser/exceptions.py
"""
Defines custom, diagnosable exceptions for the netlist parsing and schema
validation stage.

`ParsingError` covers file-level and YAML syntax problems, `SchemaValidationError`
covers documents that load but do not match the netlist schema. Both derive from
`DiagnosableError`, so the `CircuitBuilder` facade can wrap any of them in a single
`CircuitBuildError`.
"""
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Dict

from ..errors import DiagnosableError, format_diagnostic_report


class BaseParsingError(DiagnosableError):
    """
    A local, concrete base class for all YAML parsing and schema validation errors.
    """
    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Generic Parsing Error",
            details=str(self),
            suggestion="Please check the format and content of the netlist file.",
            context={}
        )


@dataclass(frozen=True)
class ParsingError(BaseParsingError):
    """
    Raised when a netlist file cannot be read or is not valid YAML, or when its
    root is not a mapping.
    """
    details: str
    file_path: Path

    def __str__(self):
        return f"Parsing error in file '{self.file_path}': {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="YAML Parsing or File Error",
            details=self.details,
            suggestion="Ensure the file exists, has the correct read permissions, and contains valid YAML syntax.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class SchemaValidationError(BaseParsingError):
    """
    Raised when the YAML is syntactically valid but does not conform to the
    netlist schema (missing keys, invalid identifiers, duplicate element ids,
    malformed wires).
    """
    errors: Dict[str, Any]
    file_path: Path

    def _error_lines(self, prefix: str):
        return [
            f"  - {prefix} '{k}': {v}"
            for k, v in sorted(self.errors.items(), key=lambda kv: str(kv[0]))
        ]

    def __str__(self):
        return (
            f"YAML schema validation failed for file '{self.file_path}':\n"
            + "\n".join(self._error_lines("In field"))
        )

    def get_diagnostic_report(self) -> str:
        details = (
            "The structure of the YAML file does not conform to the required schema.\n"
            f"See details for {len(self.errors)} issue(s) below:\n\n"
            + "\n".join(self._error_lines("Field"))
        )
        return format_diagnostic_report(
            error_type="YAML Schema Validation Error",
            details=details,
            suggestion="Correct the specified fields to match the netlist format. Element ids and terminal names may only use letters, digits and '_'; wires are pairs of 'element.terminal' references.",
            context={'source_file': self.file_path}
        )


@dataclass(frozen=True)
class QuantityConversionError(BaseParsingError):
    """
    Raised by the CircuitBuilder when a raw quantity from the netlist (an element
    value, a phase, a frequency) cannot be converted to the unit it needs.
    """
    owner: str
    field_name: str
    user_input: Any
    expected_unit: str
    details: str
    file_path: Path

    def __str__(self):
        return f"Cannot convert {self.field_name} '{self.user_input}' of '{self.owner}' to {self.expected_unit}: {self.details}"

    def get_diagnostic_report(self) -> str:
        return format_diagnostic_report(
            error_type="Quantity Conversion Error",
            details=(
                f"The {self.field_name} of '{self.owner}' was given as '{self.user_input}', "
                f"which cannot be read as a quantity in {self.expected_unit}.\n{self.details}"
            ),
            suggestion=f"Write the {self.field_name} as a plain number (taken to be in {self.expected_unit}) or as a number with a compatible unit, e.g. '4.7 uF', '10 kohm', '30 deg'.",
            context={'element_id': self.owner, 'source_file': self.file_path}
        )
