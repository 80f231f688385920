# src/acsim_core/analysis/results.py
"""
Defines the formal, type-safe data contracts for the results of the topology analysis.

The result is a frozen dataclass rather than a loose dictionary so that consumers
(the MNA assembler, the result extraction, the connectivity diagnostics) all read
the same, immutable net assignment for one solve.
"""
from dataclasses import dataclass
from typing import Dict, Tuple

from ..components.elements import TerminalRef

#: Net index of the reference (ground) net.
REFERENCE_NET: int = 0


@dataclass(frozen=True)
class TopologyAnalysisResults:
    """
    The net assignment for one circuit snapshot.

    Attributes:
        terminal_to_net: Maps every declared terminal to its 0-based net index.
        net_count: Number of distinct nets. Net `REFERENCE_NET` is the reference.
        nets: For each net index, the terminals belonging to it, in declaration order.
    """
    terminal_to_net: Dict[TerminalRef, int]
    net_count: int
    nets: Tuple[Tuple[TerminalRef, ...], ...]

    def net_of(self, element_id: str, terminal: str) -> int:
        return self.terminal_to_net[TerminalRef(element_id, terminal)]

    @property
    def unknown_voltage_count(self) -> int:
        """Number of non-reference nets, i.e. unknown node voltages in the MNA system."""
        return max(self.net_count - 1, 0)
