# src/acsim_core/validation/circuit_validator.py
import logging
from collections import Counter
from typing import Dict, List, Set

import numpy as np

from ..components.base_enums import ElementKind
from ..components.elements import Element, TerminalRef
from ..data_structures import Circuit
from ..units import is_finite_number
from .exceptions import MalformedCircuitError
from .issue_codes import CircuitIssueCode
from .issues import ValidationIssue, ValidationIssueLevel

logger = logging.getLogger(__name__)


class CircuitValidator:
    """
    Structural gatekeeper run before every solve.

    It checks the things the topology builder and the MNA assembler take for
    granted: unique ids, known kinds, exactly two distinct terminals per element,
    wires that only name declared terminals, a usable reference and frequency.
    Element *values* are not checked here; degenerate values are reported by the
    element models when the admittance or source phasor is computed.
    """

    def __init__(self, circuit: Circuit):
        if not isinstance(circuit, Circuit):
            raise TypeError("CircuitValidator requires a Circuit object.")
        self.circuit = circuit
        self.issues: List[ValidationIssue] = []

    def validate(self) -> List[ValidationIssue]:
        """
        Runs every check and returns all issues found (errors, warnings and info).
        The caller decides whether error-level issues stop the solve; see
        `raise_for_errors`.
        """
        self.issues = []
        self._check_elements()
        declared = self._declared_terminals()
        self._check_wires(declared)
        self._check_reference(declared)
        self._check_frequency()

        errors = sum(1 for i in self.issues if i.is_error)
        if self.issues:
            logger.debug(
                f"Validation of '{self.circuit.name}' found {errors} error(s) "
                f"and {len(self.issues) - errors} other issue(s)."
            )
        return self.issues

    def raise_for_errors(self) -> List[ValidationIssue]:
        """Validates and raises MalformedCircuitError if any error-level issue was found."""
        issues = self.validate()
        if any(i.is_error for i in issues):
            raise MalformedCircuitError(issues, circuit_name=self.circuit.name)
        return issues

    def _add_issue(self, level: ValidationIssueLevel, code_enum: CircuitIssueCode, **kwargs):
        message = code_enum.format_message(**kwargs)
        self.issues.append(ValidationIssue(
            level=level, code=code_enum.code, message=message,
            element_id=kwargs.get('element_id'), details=kwargs
        ))

    def _check_elements(self):
        id_counts = Counter(e.id for e in self.circuit.elements)
        for element_id, count in sorted(id_counts.items(), key=lambda kv: str(kv[0])):
            if count > 1:
                self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.ELEM_ID_DUPLICATE,
                                element_id=element_id, count=count)

        for position, element in enumerate(self.circuit.elements):
            if not isinstance(element.id, str) or not element.id:
                self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.ELEM_ID_EMPTY, position=position)
                continue
            if not isinstance(element.kind, ElementKind):
                self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.ELEM_KIND_UNKNOWN,
                                element_id=element.id, kind=element.kind,
                                available_kinds=[k.value for k in ElementKind])
            self._check_terminals(element)
            self._check_source_frequency(element)

    def _check_terminals(self, element: Element):
        terminals = list(element.terminals)
        if len(terminals) != 2:
            self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.ELEM_TERMINAL_COUNT,
                            element_id=element.id, count=len(terminals), terminals=terminals)
        elif terminals[0] == terminals[1]:
            self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.ELEM_TERMINAL_DUPLICATE,
                            element_id=element.id, terminals=terminals)

    def _check_source_frequency(self, element: Element):
        if not isinstance(element.kind, ElementKind) or not element.kind.is_source:
            return
        if not is_finite_number(element.frequency_hz) or not is_finite_number(self.circuit.frequency_hz):
            return
        if not np.isclose(element.frequency_hz, self.circuit.frequency_hz):
            self._add_issue(ValidationIssueLevel.WARNING, CircuitIssueCode.SRC_FREQUENCY_MISMATCH,
                            element_id=element.id, source_frequency=element.frequency_hz,
                            frequency=self.circuit.frequency_hz)

    def _declared_terminals(self) -> Dict[str, Set[str]]:
        declared: Dict[str, Set[str]] = {}
        for element in self.circuit.elements:
            declared.setdefault(element.id, set()).update(element.terminals)
        return declared

    def _check_wires(self, declared: Dict[str, Set[str]]):
        wired: Set[TerminalRef] = set()
        for wire in self.circuit.wires:
            if wire.first == wire.second:
                self._add_issue(ValidationIssueLevel.INFO, CircuitIssueCode.WIRE_SELF_LOOP, wire=str(wire))
            for ref in wire.endpoints:
                if ref.element_id not in declared:
                    self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.WIRE_UNKNOWN_ELEMENT,
                                    wire=str(wire), element_id=ref.element_id)
                elif ref.terminal not in declared[ref.element_id]:
                    self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.WIRE_UNKNOWN_TERMINAL,
                                    wire=str(wire), element_id=ref.element_id, terminal=ref.terminal,
                                    terminals=sorted(declared[ref.element_id]))
                wired.add(ref)

        for element in self.circuit.elements:
            for ref in element.terminal_refs:
                if ref not in wired:
                    self._add_issue(ValidationIssueLevel.INFO, CircuitIssueCode.ELEM_TERMINAL_UNCONNECTED,
                                    terminal_ref=str(ref))

    def _check_reference(self, declared: Dict[str, Set[str]]):
        reference = self.circuit.reference
        if reference is None:
            return
        if reference.terminal not in declared.get(reference.element_id, set()):
            self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.CIRCUIT_REFERENCE_UNKNOWN,
                            reference=str(reference))

    def _check_frequency(self):
        frequency = self.circuit.frequency_hz
        if not is_finite_number(frequency) or frequency < 0:
            self._add_issue(ValidationIssueLevel.ERROR, CircuitIssueCode.CIRCUIT_FREQUENCY_INVALID,
                            frequency=frequency)
