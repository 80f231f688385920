# tests/conftest.py
import textwrap

import pytest

from acsim_core import Circuit, Element, ElementKind


def make_circuit(elements, wires, frequency_hz=50.0, reference=None, name="TestCircuit") -> Circuit:
    """Builds a Circuit from Elements and pairs of dotted terminal references."""
    return Circuit.create(elements, wires, frequency_hz, reference=reference, name=name)


def series_resistors(voltage=12.0, resistances=(10.0, 10.0), phase_degrees=0.0, frequency_hz=50.0) -> Circuit:
    """V1 driving resistors R1..Rn in a single loop, V1.b is the reference."""
    elements = [Element("V1", ElementKind.VOLTAGE_SOURCE, voltage, phase_degrees)]
    elements += [Element(f"R{i + 1}", ElementKind.RESISTOR, r) for i, r in enumerate(resistances)]
    wires = [("V1.a", "R1.a")]
    for i in range(1, len(resistances)):
        wires.append((f"R{i}.b", f"R{i + 1}.a"))
    wires.append((f"R{len(resistances)}.b", "V1.b"))
    return make_circuit(elements, wires, frequency_hz, reference="V1.b", name="series")


def parallel_resistors(voltage=12.0, resistances=(10.0, 10.0), frequency_hz=50.0) -> Circuit:
    """Resistors R1..Rn all connected across V1, V1.b is the reference."""
    elements = [Element("V1", ElementKind.VOLTAGE_SOURCE, voltage)]
    elements += [Element(f"R{i + 1}", ElementKind.RESISTOR, r) for i, r in enumerate(resistances)]
    wires = []
    for i in range(len(resistances)):
        wires.append(("V1.a", f"R{i + 1}.a"))
        wires.append((f"R{i + 1}.b", "V1.b"))
    return make_circuit(elements, wires, frequency_hz, reference="V1.b", name="parallel")


@pytest.fixture
def divider_circuit() -> Circuit:
    return series_resistors()


@pytest.fixture
def parallel_circuit() -> Circuit:
    return parallel_resistors()


@pytest.fixture
def series_rlc_circuit() -> Circuit:
    """V1 (12 V) -> R1 (10 ohm) -> L1 (100 mH) -> C1 (1 uF) -> back to V1."""
    elements = [
        Element("V1", ElementKind.VOLTAGE_SOURCE, 12.0),
        Element("R1", ElementKind.RESISTOR, 10.0),
        Element("L1", ElementKind.INDUCTOR, 0.1),
        Element("C1", ElementKind.CAPACITOR, 1e-6),
    ]
    wires = [("V1.a", "R1.a"), ("R1.b", "L1.a"), ("L1.b", "C1.a"), ("C1.b", "V1.b")]
    return make_circuit(elements, wires, reference="V1.b", name="series_rlc")


@pytest.fixture
def mixed_circuit() -> Circuit:
    """A two-source RLC network with a current source and both meters, for conservation checks."""
    elements = [
        Element("V1", ElementKind.VOLTAGE_SOURCE, 10.0, 30.0),
        Element("R1", ElementKind.RESISTOR, 47.0),
        Element("L1", ElementKind.INDUCTOR, 22e-3),
        Element("C1", ElementKind.CAPACITOR, 4.7e-6),
        Element("R2", ElementKind.RESISTOR, 100.0),
        Element("I1", ElementKind.CURRENT_SOURCE, 0.05, -45.0),
        Element("A1", ElementKind.IDEAL_AMMETER),
        Element("VM1", ElementKind.IDEAL_VOLTMETER),
    ]
    wires = [
        ("V1.a", "R1.a"),
        ("R1.b", "L1.a"), ("R1.b", "C1.a"),
        ("L1.b", "A1.a"), ("A1.b", "R2.a"),
        ("C1.b", "V1.b"), ("R2.b", "V1.b"),
        ("I1.a", "V1.b"), ("I1.b", "R2.a"),
        ("VM1.a", "R2.a"), ("VM1.b", "R2.b"),
    ]
    return make_circuit(elements, wires, frequency_hz=400.0, reference="V1.b", name="mixed")


@pytest.fixture
def write_netlist(tmp_path):
    """Writes a dedented YAML string to a file under tmp_path and returns its path."""
    def _write(content: str, name: str = "netlist.yaml"):
        path = tmp_path / name
        path.write_text(textwrap.dedent(content), encoding="utf-8")
        return path
    return _write
