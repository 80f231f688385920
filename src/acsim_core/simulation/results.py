# src/acsim_core/simulation/results.py
"""
Defines the formal, explicit, and type-safe data contracts for solve results.

A solve never returns raw arrays or loose dictionaries: a successful solve yields a
frozen `SolveResult`, a diagnosable failure yields a frozen `SolveFailure`, and a
frequency sweep collects one of either per point in a `SweepResult`. Consumers read
named attributes and never need to know the MNA unknown layout.
"""
import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union

import numpy as np

from ..complex_math import ComplexNumber
from ..components.base_enums import ElementKind
from ..components.elements import TerminalRef
from ..errors import DiagnosableError
from ..validation.issues import ValidationIssue


class SolveErrorKind(Enum):
    """The three diagnosable ways a solve can fail."""
    MALFORMED_CIRCUIT = "malformed_circuit"
    SINGULAR_SYSTEM = "singular_system"
    DEGENERATE_COMPONENT = "degenerate_component"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ElementReading:
    """
    What an instrument placed on one element would show.

    Attributes:
        element_id: The element's id.
        kind: The element's kind.
        voltage: RMS phasor `V_a - V_b` across the element.
        current: RMS phasor of the branch current, positive from terminal a to
                 terminal b through the element.
    """
    element_id: str
    kind: ElementKind
    voltage: ComplexNumber
    current: ComplexNumber

    @property
    def power(self) -> ComplexNumber:
        """Complex power absorbed by the element, `S = V * conj(I)` in VA."""
        return self.voltage * self.current.conj()

    @property
    def meter_value(self) -> Optional[float]:
        """RMS magnitude shown by a meter: |I| for an ammeter, |V| for a voltmeter."""
        if not self.kind.is_meter:
            return None
        if self.kind == ElementKind.IDEAL_AMMETER:
            return abs(self.current)
        return abs(self.voltage)


@dataclass(frozen=True)
class SolveResult:
    """
    The outcome of a successful solve. All phasors are RMS.

    Attributes:
        circuit_name: Name of the solved circuit.
        frequency_hz: The drive frequency.
        net_count: Number of nets; net 0 is the reference.
        terminal_to_net: Net index of every declared terminal.
        net_voltages: Voltage phasor per net index. `net_voltages[0]` is exactly zero.
        voltage_source_currents: Branch current per voltage source id.
        element_currents: Branch current per element id, for every element kind.
        element_terminals: The `(a, b)` terminal names per element id.
        element_kinds: The kind per element id.
        solution: The raw MNA solution vector, `(nets - 1) + voltage_sources` long.
    """
    circuit_name: str
    frequency_hz: float
    net_count: int
    terminal_to_net: Dict[TerminalRef, int]
    net_voltages: Tuple[ComplexNumber, ...]
    voltage_source_currents: Dict[str, ComplexNumber]
    element_currents: Dict[str, ComplexNumber]
    element_terminals: Dict[str, Tuple[str, str]]
    element_kinds: Dict[str, ElementKind]
    solution: Tuple[ComplexNumber, ...]

    @property
    def ok(self) -> bool:
        return True

    @property
    def passive_currents(self) -> Dict[str, ComplexNumber]:
        """Branch currents of resistors, reactances and meters."""
        return {eid: i for eid, i in self.element_currents.items() if self.element_kinds[eid].is_passive}

    @property
    def current_source_currents(self) -> Dict[str, ComplexNumber]:
        return {
            eid: i for eid, i in self.element_currents.items()
            if self.element_kinds[eid] == ElementKind.CURRENT_SOURCE
        }

    def net_of(self, element_id: str, terminal: str) -> int:
        return self.terminal_to_net[TerminalRef(element_id, terminal)]

    def voltage_at(self, element_id: str, terminal: str) -> ComplexNumber:
        """Voltage of the net a terminal belongs to, relative to the reference net."""
        return self.net_voltages[self.net_of(element_id, terminal)]

    def voltage_across(self, element_id: str) -> ComplexNumber:
        a, b = self.element_terminals[element_id]
        return self.voltage_at(element_id, a) - self.voltage_at(element_id, b)

    def current(self, element_id: str) -> ComplexNumber:
        return self.element_currents[element_id]

    def reading(self, element_id: str) -> ElementReading:
        if element_id not in self.element_kinds:
            raise KeyError(f"No element '{element_id}' in solved circuit '{self.circuit_name}'.")
        return ElementReading(
            element_id=element_id,
            kind=self.element_kinds[element_id],
            voltage=self.voltage_across(element_id),
            current=self.element_currents[element_id],
        )

    @property
    def readings(self) -> List[ElementReading]:
        """Readings for every element, in circuit order."""
        return [self.reading(eid) for eid in self.element_kinds]

    def meter_reading(self, element_id: str) -> float:
        """
        The RMS magnitude a meter element displays.

        Raises:
            ValueError: If the element is not an ammeter or voltmeter.
        """
        value = self.reading(element_id).meter_value
        if value is None:
            raise ValueError(f"Element '{element_id}' is a {self.element_kinds[element_id]}, not a meter.")
        return value


@dataclass(frozen=True)
class SolveFailure:
    """
    The outcome of a solve that failed for a diagnosable reason.

    Attributes:
        kind: Which of the failure categories applies.
        message: One-line summary.
        report: The full, multi-line diagnostic report.
        element_id: The offending element, when exactly one is at fault.
        issues: Validation issues, for malformed circuits.
        floating_nets: Nets with no path to the reference, for singular systems.
        error: The underlying diagnosable exception.
    """
    kind: SolveErrorKind
    message: str
    report: str
    element_id: Optional[str] = None
    issues: Tuple[ValidationIssue, ...] = ()
    floating_nets: Tuple[int, ...] = ()
    error: Optional[DiagnosableError] = field(default=None, compare=False, repr=False)

    @property
    def ok(self) -> bool:
        return False

    def __str__(self) -> str:
        return f"{self.kind}: {self.message}"


SolveOutcome = Union[SolveResult, SolveFailure]


@dataclass(frozen=True, eq=False)
class SweepResult:
    """
    The outcome of a frequency sweep: one independent solve per frequency.

    Attributes:
        frequencies_hz: 1D array of the swept frequencies.
        outcomes: `SolveResult` or `SolveFailure` per frequency, in the same order.
    """
    frequencies_hz: np.ndarray
    outcomes: Tuple[SolveOutcome, ...]

    def __len__(self) -> int:
        return len(self.outcomes)

    @property
    def failures(self) -> List[Tuple[float, SolveFailure]]:
        """`(frequency, failure)` pairs for every point that did not solve."""
        return [
            (float(f), o) for f, o in zip(self.frequencies_hz, self.outcomes)
            if isinstance(o, SolveFailure)
        ]

    @property
    def all_ok(self) -> bool:
        return not self.failures

    def _series(self, getter) -> np.ndarray:
        values = np.full(len(self.outcomes), complex(math.nan, math.nan), dtype=np.complex128)
        for i, outcome in enumerate(self.outcomes):
            if isinstance(outcome, SolveResult):
                values[i] = complex(getter(outcome))
        return values

    def element_current(self, element_id: str) -> np.ndarray:
        """Branch current of an element at every frequency (NaN where the point failed)."""
        return self._series(lambda r: r.current(element_id))

    def element_voltage(self, element_id: str) -> np.ndarray:
        return self._series(lambda r: r.voltage_across(element_id))

    def net_voltage(self, net: int) -> np.ndarray:
        """
        Voltage of one net index at every frequency (NaN where the point failed).

        Net indices are only comparable across points because every point solves
        the same element and wire set.
        """
        return self._series(lambda r: r.net_voltages[net])
