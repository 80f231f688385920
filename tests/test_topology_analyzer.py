# tests/test_topology_analyzer.py
import pytest

from acsim_core import Element, ElementKind, TerminalRef, TopologyAnalyzer, TopologyAnalysisError
from acsim_core.analysis import DisjointSet, TerminalArena, REFERENCE_NET
from tests.conftest import make_circuit, series_resistors


def _r(eid, terminals=("a", "b")):
    return Element(eid, ElementKind.RESISTOR, 10.0, terminals=terminals)


class TestDisjointSet:

    def test_union_and_find(self):
        ds = DisjointSet(5)
        assert len(ds) == 5
        ds.union(0, 1)
        ds.union(3, 4)
        assert ds.find(0) == ds.find(1)
        assert ds.find(3) == ds.find(4)
        assert ds.find(0) != ds.find(3)
        ds.union(1, 4)
        assert len({ds.find(i) for i in (0, 1, 3, 4)}) == 1
        assert ds.find(2) == 2

    def test_make_set_grows(self):
        ds = DisjointSet()
        assert [ds.make_set() for _ in range(3)] == [0, 1, 2]
        assert len(ds) == 3

    def test_long_chain_is_compressed(self):
        ds = DisjointSet(1000)
        for i in range(999):
            ds.union(i, i + 1)
        root = ds.find(0)
        assert all(ds.find(i) == root for i in range(1000))


class TestTerminalArena:

    def test_register_is_idempotent(self):
        arena = TerminalArena()
        a = arena.register(TerminalRef("R1", "a"))
        b = arena.register(TerminalRef("R1", "b"))
        assert (a, b) == (0, 1)
        assert arena.register(TerminalRef("R1", "a")) == 0
        assert len(arena) == 2
        assert arena.ref_at(1) == TerminalRef("R1", "b")
        assert arena.index_of(TerminalRef("R2", "a")) is None
        assert TerminalRef("R1", "a") in arena


class TestTopologyAnalyzer:

    def test_unwired_terminals_get_singleton_nets_in_scan_order(self):
        circuit = make_circuit([_r("R1"), _r("R2")], [])
        topo = TopologyAnalyzer(circuit).analyze()
        assert topo.net_count == 4
        assert [topo.net_of("R1", "a"), topo.net_of("R1", "b"), topo.net_of("R2", "a"), topo.net_of("R2", "b")] == [0, 1, 2, 3]

    def test_reference_net_is_zero(self):
        circuit = make_circuit([_r("R1"), _r("R2")], [("R1.b", "R2.a")], reference="R2.b")
        topo = TopologyAnalyzer(circuit).analyze()
        assert topo.net_count == 3
        assert topo.net_of("R2", "b") == REFERENCE_NET
        assert topo.net_of("R1", "a") == 1
        assert topo.net_of("R1", "b") == topo.net_of("R2", "a") == 2
        assert topo.nets[2] == (TerminalRef("R1", "b"), TerminalRef("R2", "a"))
        assert topo.unknown_voltage_count == 2

    def test_default_reference_is_first_terminal_of_first_element(self, divider_circuit):
        circuit = make_circuit(divider_circuit.elements, divider_circuit.wires)
        topo = TopologyAnalyzer(circuit).analyze()
        assert topo.net_of("V1", "a") == 0
        assert topo.net_of("R1", "a") == 0

    def test_redundant_and_transitive_wires(self):
        wires = [("R1.b", "R2.a"), ("R2.a", "R3.a"), ("R3.a", "R1.b"), ("R1.b", "R2.a")]
        circuit = make_circuit([_r("R1"), _r("R2"), _r("R3")], wires)
        topo = TopologyAnalyzer(circuit).analyze()
        assert topo.net_of("R1", "b") == topo.net_of("R2", "a") == topo.net_of("R3", "a")
        assert topo.net_count == 4

    def test_custom_terminal_names(self):
        circuit = make_circuit([_r("R1", ("left", "right")), _r("R2")], [("R1.right", "R2.a")])
        topo = TopologyAnalyzer(circuit).analyze()
        assert topo.net_of("R1", "right") == topo.net_of("R2", "a")
        assert TerminalRef("R1", "left") in topo.terminal_to_net

    def test_every_terminal_is_mapped(self, divider_circuit):
        topo = TopologyAnalyzer(divider_circuit).analyze()
        declared = {ref for e in divider_circuit.elements for ref in e.terminal_refs}
        assert set(topo.terminal_to_net) == declared
        assert set(topo.terminal_to_net.values()) == set(range(topo.net_count))

    def test_same_input_same_numbering(self):
        circuit = series_resistors(resistances=(1.0, 2.0, 3.0))
        first = TopologyAnalyzer(circuit).analyze()
        second = TopologyAnalyzer(circuit).analyze()
        assert first == second

    def test_unknown_wire_terminal_raises(self):
        circuit = make_circuit([_r("R1")], [("R1.a", "R9.a")])
        with pytest.raises(TopologyAnalysisError) as excinfo:
            TopologyAnalyzer(circuit).analyze()
        assert "R9.a" in excinfo.value.get_diagnostic_report()

    def test_unknown_reference_raises(self):
        circuit = make_circuit([_r("R1")], [], reference="R1.c")
        with pytest.raises(TopologyAnalysisError):
            TopologyAnalyzer(circuit).analyze()

    def test_requires_circuit(self):
        with pytest.raises(TypeError):
            TopologyAnalyzer("not a circuit")
