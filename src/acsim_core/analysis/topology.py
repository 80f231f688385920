# src/acsim_core/analysis/topology.py
"""
Builds the net (node) assignment of a circuit with a disjoint-set forest.

Every `(element_id, terminal)` pair is given an integer slot in a `TerminalArena`
once per analysis; the union-find state is two flat lists (`parent`, `rank`)
indexed by those slots. Wires union their endpoints, and nets are then numbered
deterministically:

* If the circuit names a reference terminal, that terminal's net is net 0.
* Remaining nets are numbered in the order their first terminal is met while
  scanning elements in input order, and each element's terminals in declared order.
  Without an explicit reference this makes the net of the first element's first
  terminal the reference.

Terminals that no wire touches keep their own singleton net.
"""
import logging
from typing import Dict, List, Optional, Tuple

from ..components.elements import TerminalRef
from ..data_structures import Circuit
from .exceptions import TopologyAnalysisError
from .results import TopologyAnalysisResults

logger = logging.getLogger(__name__)


class TerminalArena:
    """Assigns a dense integer index to each terminal reference, on first sight."""

    def __init__(self):
        self._index: Dict[TerminalRef, int] = {}
        self._refs: List[TerminalRef] = []

    def __len__(self) -> int:
        return len(self._refs)

    def __contains__(self, ref: TerminalRef) -> bool:
        return ref in self._index

    def register(self, ref: TerminalRef) -> int:
        idx = self._index.get(ref)
        if idx is None:
            idx = len(self._refs)
            self._index[ref] = idx
            self._refs.append(ref)
        return idx

    def index_of(self, ref: TerminalRef) -> Optional[int]:
        return self._index.get(ref)

    def ref_at(self, idx: int) -> TerminalRef:
        return self._refs[idx]


class DisjointSet:
    """Union-find over 0..n-1 with path compression and union by rank."""

    def __init__(self, size: int = 0):
        self.parent: List[int] = list(range(size))
        self.rank: List[int] = [0] * size

    def __len__(self) -> int:
        return len(self.parent)

    def make_set(self) -> int:
        idx = len(self.parent)
        self.parent.append(idx)
        self.rank.append(0)
        return idx

    def find(self, x: int) -> int:
        root = x
        while self.parent[root] != root:
            root = self.parent[root]
        # Path compression
        while self.parent[x] != root:
            self.parent[x], x = root, self.parent[x]
        return root

    def union(self, a: int, b: int) -> int:
        ra, rb = self.find(a), self.find(b)
        if ra == rb:
            return ra
        if self.rank[ra] < self.rank[rb]:
            ra, rb = rb, ra
        self.parent[rb] = ra
        if self.rank[ra] == self.rank[rb]:
            self.rank[ra] += 1
        return ra


class TopologyAnalyzer:
    """
    Computes the terminal-to-net mapping of one circuit snapshot.
    Stateless apart from the circuit it was created for; every `analyze()` call
    rebuilds the arena and the forest from scratch.
    """

    def __init__(self, circuit: Circuit):
        if not isinstance(circuit, Circuit):
            raise TypeError("TopologyAnalyzer requires a Circuit object.")
        self.circuit: Circuit = circuit

    def analyze(self) -> TopologyAnalysisResults:
        arena = TerminalArena()
        forest = DisjointSet()

        for element in self.circuit.elements:
            for ref in element.terminal_refs:
                if arena.register(ref) == len(forest):
                    forest.make_set()

        for wire in self.circuit.wires:
            slots = []
            for ref in wire.endpoints:
                idx = arena.index_of(ref)
                if idx is None:
                    raise TopologyAnalysisError(
                        circuit_name=self.circuit.name,
                        details=f"Wire '{wire}' references terminal '{ref}', which no element declares."
                    )
                slots.append(idx)
            forest.union(slots[0], slots[1])

        root_to_net: Dict[int, int] = {}
        reference = self.circuit.reference
        if reference is not None:
            ref_idx = arena.index_of(reference)
            if ref_idx is None:
                raise TopologyAnalysisError(
                    circuit_name=self.circuit.name,
                    details=f"Reference terminal '{reference}' is not declared by any element."
                )
            root_to_net[forest.find(ref_idx)] = 0

        # Arena slots were registered in element/terminal scan order.
        net_members: List[List[TerminalRef]] = [[] for _ in root_to_net]
        terminal_to_net: Dict[TerminalRef, int] = {}
        for idx in range(len(arena)):
            root = forest.find(idx)
            net = root_to_net.get(root)
            if net is None:
                net = len(root_to_net)
                root_to_net[root] = net
                net_members.append([])
            ref = arena.ref_at(idx)
            terminal_to_net[ref] = net
            net_members[net].append(ref)

        nets: Tuple[Tuple[TerminalRef, ...], ...] = tuple(tuple(m) for m in net_members)
        logger.debug(
            f"Topology of '{self.circuit.name}': {len(arena)} terminals, "
            f"{len(self.circuit.wires)} wires, {len(nets)} nets."
        )
        return TopologyAnalysisResults(
            terminal_to_net=terminal_to_net,
            net_count=len(nets),
            nets=nets,
        )
