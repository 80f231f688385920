# tests/test_circuit_builder.py
import numpy as np
import pytest

from acsim_core import CircuitBuilder, CircuitBuildError, ElementKind, SolveResult, TerminalRef, load_circuit, solve_circuit
from acsim_core.constants import DEFAULT_FREQUENCY_HZ
from acsim_core.parser import CircuitParser, QuantityConversionError


@pytest.fixture
def builder():
    return CircuitBuilder()


def parse_and_build(write_netlist, builder, content):
    parsed = CircuitParser().parse(write_netlist(content))
    return builder.build_circuit(parsed)


class TestCircuitBuilder:

    def test_unit_conversion(self, write_netlist, builder):
        circuit = parse_and_build(write_netlist, builder, """
        circuit_name: filter
        frequency: 1 kHz
        reference: V1.b
        elements:
          - {id: V1, kind: voltage_source, value: 230 mV, phase: 30 deg, frequency: 1 kHz}
          - {id: R1, kind: resistor, value: 4.7 kohm}
          - {id: C1, kind: capacitor, value: 100 nF}
          - {id: L1, kind: inductor, value: 2.2 mH}
          - {id: I1, kind: current_source, value: 15 mA, phase: 0.5 rad}
          - {id: VM1, kind: ideal_voltmeter}
        wires:
          - [V1.a, R1.a]
        """)
        assert circuit.name == "filter"
        assert circuit.frequency_hz == pytest.approx(1e3)
        assert circuit.reference == TerminalRef("V1", "b")
        v1 = circuit.element("V1")
        assert v1.kind is ElementKind.VOLTAGE_SOURCE
        assert v1.value == pytest.approx(0.23)
        assert v1.phase_degrees == pytest.approx(30.0)
        assert v1.frequency_hz == pytest.approx(1e3)
        assert circuit.element("R1").value == pytest.approx(4700.0)
        assert circuit.element("C1").value == pytest.approx(100e-9)
        assert circuit.element("L1").value == pytest.approx(2.2e-3)
        assert circuit.element("I1").value == pytest.approx(0.015)
        assert circuit.element("I1").phase_degrees == pytest.approx(np.degrees(0.5))
        assert circuit.element("VM1").value is None
        assert len(circuit.wires) == 1

    def test_plain_numbers_are_si(self, write_netlist, builder):
        circuit = parse_and_build(write_netlist, builder, """
        frequency: 60
        elements:
          - {id: R1, kind: resistor, value: 1000}
          - {id: V1, kind: voltage_source, value: "5", phase: "90"}
        """)
        assert circuit.frequency_hz == 60.0
        assert circuit.element("R1").value == 1000.0
        assert circuit.element("V1").value == 5.0
        assert circuit.element("V1").phase_degrees == 90.0

    def test_default_frequency(self, write_netlist, builder):
        circuit = parse_and_build(write_netlist, builder, """
        elements:
          - {id: R1, kind: resistor, value: 1}
        """)
        assert circuit.frequency_hz == DEFAULT_FREQUENCY_HZ

    @pytest.mark.parametrize("value", ["10 V", "ten ohm", "10 furlongs"])
    def test_bad_quantity(self, write_netlist, builder, value):
        with pytest.raises(CircuitBuildError) as excinfo:
            parse_and_build(write_netlist, builder, f"""
            elements:
              - {{id: R1, kind: resistor, value: {value}}}
            """)
        assert isinstance(excinfo.value.__cause__, QuantityConversionError)
        assert "Quantity Conversion Error" in str(excinfo.value)
        assert "R1" in str(excinfo.value)

    def test_bad_frequency_unit(self, write_netlist, builder):
        with pytest.raises(CircuitBuildError):
            parse_and_build(write_netlist, builder, """
            frequency: 50 ohm
            elements:
              - {id: R1, kind: resistor, value: 1}
            """)


class TestLoadCircuit:

    def test_load_and_solve(self, write_netlist):
        path = write_netlist("""
        circuit_name: divider
        frequency: 50 Hz
        reference: V1.b
        elements:
          - {id: V1, kind: voltage_source, value: 12 V}
          - {id: R1, kind: resistor, value: 10 ohm}
          - {id: R2, kind: resistor, value: 10 ohm}
        wires:
          - [V1.a, R1.a]
          - [R1.b, R2.a]
          - [R2.b, V1.b]
        """)
        circuit, freqs = load_circuit(path)
        assert freqs is None
        result = solve_circuit(circuit)
        assert isinstance(result, SolveResult)
        assert abs(result.current("R1")) == pytest.approx(0.6)

    def test_load_with_sweep(self, write_netlist):
        path = write_netlist("""
        elements:
          - {id: R1, kind: resistor, value: 1}
        sweep: {type: list, points: [1 kHz, 50, 50 Hz]}
        """)
        _, freqs = load_circuit(path)
        np.testing.assert_allclose(freqs, [50.0, 1000.0])

    def test_load_with_bad_sweep(self, write_netlist):
        path = write_netlist("""
        elements:
          - {id: R1, kind: resistor, value: 1}
        sweep: {type: log, start: 0 Hz, stop: 1 kHz, num_points: 3}
        """)
        with pytest.raises(CircuitBuildError) as excinfo:
            load_circuit(path)
        assert "Sweep Configuration Error" in str(excinfo.value)

    def test_parse_errors_become_build_errors(self, tmp_path):
        with pytest.raises(CircuitBuildError) as excinfo:
            load_circuit(tmp_path / "missing.yaml")
        assert "YAML Parsing or File Error" in str(excinfo.value)
