# src/acsim_core/simulation/mna.py

import logging
import math
from typing import Dict, List, Optional, Tuple

import numpy as np

from ..analysis.results import REFERENCE_NET, TopologyAnalysisResults
from ..complex_math import ComplexDivisionError, ComplexNumber
from ..components.base_enums import ElementKind
from ..components.elements import Element
from ..components.models import admittance_of, source_phasor_of
from ..data_structures import Circuit
from .exceptions import SingularSystemError


logger = logging.getLogger(__name__)


class MnaAssembler:
    """
    Constructs the Modified Nodal Analysis (MNA) system for one circuit snapshot.

    Unknown layout, for `n` nets and `m` voltage sources:

    * positions `0 .. n-2`: voltages of nets `1 .. n-1` (net 0 is the reference
      and has no unknown);
    * positions `n-1 .. n+m-2`: branch currents of the voltage sources, in the
      order they appear in the circuit's element list.

    Conventions, shared by every element kind: terminal 0 of an element is its
    "a" side, terminal 1 its "b" side, and a positive branch current flows from a
    to b through the element. A voltage source enforces `V_a - V_b = V`.

    The admittances and source phasors computed while stamping are kept on the
    assembler so that derived branch currents use exactly the stamped values.
    """
    def __init__(self, circuit: Circuit, topology: TopologyAnalysisResults):
        self.circuit: Circuit = circuit
        self.topology: TopologyAnalysisResults = topology
        self.frequency_hz: float = float(circuit.frequency_hz)
        self.omega: float = 2 * math.pi * self.frequency_hz

        self.voltage_sources: List[Element] = [
            e for e in circuit.elements if e.kind == ElementKind.VOLTAGE_SOURCE
        ]
        self.node_unknown_count: int = topology.unknown_voltage_count
        self.size: int = self.node_unknown_count + len(self.voltage_sources)

        self.admittances: Dict[str, ComplexNumber] = {}
        self.source_phasors: Dict[str, ComplexNumber] = {}

        logger.debug(
            f"MNA Assembler initialized for circuit '{circuit.name}': {topology.net_count} nets, "
            f"{len(self.voltage_sources)} voltage sources, system size {self.size}."
        )

    def unknown_index(self, net: int) -> Optional[int]:
        """Position of a net's voltage in the unknown vector, or None for the reference."""
        if net == REFERENCE_NET:
            return None
        return net - 1

    def source_row(self, k: int) -> int:
        """Row/column of the k-th voltage source's branch-current unknown."""
        return self.node_unknown_count + k

    def terminal_nets(self, element: Element) -> Tuple[int, int]:
        a, b = element.terminals
        return (self.topology.net_of(element.id, a), self.topology.net_of(element.id, b))

    def assemble(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Stamps every element and returns the dense complex matrix `A` and RHS `z`.

        Raises:
            ComponentError: An element value is degenerate.
            SingularSystemError: An admittance is unbounded or any entry is non-finite.
        """
        A = np.zeros((self.size, self.size), dtype=np.complex128)
        z = np.zeros(self.size, dtype=np.complex128)

        k = 0
        for element in self.circuit.elements:
            na, nb = self.terminal_nets(element)
            if element.kind == ElementKind.VOLTAGE_SOURCE:
                self._stamp_voltage_source(A, z, element, k, na, nb)
                k += 1
            elif element.kind == ElementKind.CURRENT_SOURCE:
                self._stamp_current_source(z, element, na, nb)
            else:
                self._stamp_admittance(A, element, na, nb)

        if not (np.all(np.isfinite(A)) and np.all(np.isfinite(z))):
            raise SingularSystemError(
                details="The assembled MNA system contains non-finite entries (numeric overflow).",
                frequency=self.frequency_hz,
            )
        return A, z

    def _stamp_admittance(self, A: np.ndarray, element: Element, na: int, nb: int):
        try:
            y = admittance_of(element, self.omega)
        except ComplexDivisionError as e:
            raise SingularSystemError(
                details=f"Element '{element.id}' ({element.kind}) has an unbounded admittance at this frequency.",
                frequency=self.frequency_hz,
                element_id=element.id,
            ) from e
        if not y.is_finite():
            raise SingularSystemError(
                details=f"Element '{element.id}' ({element.kind}) has a non-finite admittance {y}.",
                frequency=self.frequency_hz,
                element_id=element.id,
            )
        self.admittances[element.id] = y

        yc = complex(y)
        ia, ib = self.unknown_index(na), self.unknown_index(nb)
        if ia is not None:
            A[ia, ia] += yc
        if ib is not None:
            A[ib, ib] += yc
        if ia is not None and ib is not None:
            A[ia, ib] -= yc
            A[ib, ia] -= yc

    def _stamp_current_source(self, z: np.ndarray, element: Element, na: int, nb: int):
        phasor = source_phasor_of(element)
        self.source_phasors[element.id] = phasor

        current = complex(phasor)
        ia, ib = self.unknown_index(na), self.unknown_index(nb)
        # Current leaves net a and enters net b.
        if ia is not None:
            z[ia] -= current
        if ib is not None:
            z[ib] += current

    def _stamp_voltage_source(self, A: np.ndarray, z: np.ndarray, element: Element, k: int, na: int, nb: int):
        phasor = source_phasor_of(element)
        self.source_phasors[element.id] = phasor

        row = self.source_row(k)
        ia, ib = self.unknown_index(na), self.unknown_index(nb)
        if ia is not None:
            A[ia, row] += 1.0
            A[row, ia] += 1.0
        if ib is not None:
            A[ib, row] -= 1.0
            A[row, ib] -= 1.0
        z[row] += complex(phasor)
