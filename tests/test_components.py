# tests/test_components.py
import logging
import math

import pytest

from acsim_core import ComplexDivisionError, ComponentError, Element, ElementKind, TerminalRef, Wire
from acsim_core.components import MODEL_REGISTRY, admittance_of, source_phasor_of
from acsim_core.constants import AMMETER_RESISTANCE_OHMS, VOLTMETER_RESISTANCE_OHMS

OMEGA_50HZ = 2 * math.pi * 50.0


class TestElementRecords:

    def test_terminal_ref_parse(self):
        assert TerminalRef.parse("R1.a") == TerminalRef("R1", "a")
        assert TerminalRef.parse(("R1", "left")) == TerminalRef("R1", "left")
        assert str(TerminalRef("V1", "b")) == "V1.b"
        for bad in ["R1", ".a", "R1."]:
            with pytest.raises(ValueError):
                TerminalRef.parse(bad)

    def test_wire_between(self):
        wire = Wire.between("R1.b", ("R2", "a"))
        assert wire.endpoints == (TerminalRef("R1", "b"), TerminalRef("R2", "a"))
        assert str(wire) == "R1.b -- R2.a"

    def test_element_defaults(self):
        element = Element("C1", ElementKind.CAPACITOR, 1e-6)
        assert element.terminals == ("a", "b")
        assert element.terminal_refs == (TerminalRef("C1", "a"), TerminalRef("C1", "b"))
        assert element.phase_degrees == 0.0
        assert element.label is None

    def test_kind_categories(self):
        meters = {k for k in ElementKind if k.is_meter}
        sources = {k for k in ElementKind if k.is_source}
        assert meters == {ElementKind.IDEAL_AMMETER, ElementKind.IDEAL_VOLTMETER}
        assert sources == {ElementKind.VOLTAGE_SOURCE, ElementKind.CURRENT_SOURCE}
        assert all(k.is_passive for k in meters)

    def test_every_kind_has_a_model(self):
        assert set(MODEL_REGISTRY) == set(ElementKind)
        assert MODEL_REGISTRY[ElementKind.CAPACITOR].unit == "farad"


class TestPassiveModels:

    def test_resistor(self):
        y = admittance_of(Element("R1", ElementKind.RESISTOR, 20.0), OMEGA_50HZ)
        assert complex(y) == pytest.approx(0.05)

    def test_capacitor(self):
        y = admittance_of(Element("C1", ElementKind.CAPACITOR, 1e-6), OMEGA_50HZ)
        assert y.re == 0.0
        assert y.im == pytest.approx(OMEGA_50HZ * 1e-6)

    def test_capacitor_at_dc_is_open(self):
        y = admittance_of(Element("C1", ElementKind.CAPACITOR, 1e-6), 0.0)
        assert complex(y) == 0

    def test_inductor(self):
        y = admittance_of(Element("L1", ElementKind.INDUCTOR, 0.1), OMEGA_50HZ)
        assert y.re == 0.0
        assert y.im == pytest.approx(-1.0 / (OMEGA_50HZ * 0.1))

    def test_inductor_at_dc_raises_division_error(self):
        with pytest.raises(ComplexDivisionError):
            admittance_of(Element("L1", ElementKind.INDUCTOR, 0.1), 0.0)

    @pytest.mark.parametrize("kind", [ElementKind.RESISTOR, ElementKind.CAPACITOR, ElementKind.INDUCTOR])
    @pytest.mark.parametrize("value", [0.0, -1.0, math.nan, math.inf, None, "10"])
    def test_degenerate_values(self, kind, value):
        with pytest.raises(ComponentError) as excinfo:
            admittance_of(Element("X1", kind, value), OMEGA_50HZ)
        assert excinfo.value.element_id == "X1"
        assert "Degenerate Component" in excinfo.value.get_diagnostic_report()

    def test_sources_have_no_admittance(self):
        with pytest.raises(TypeError):
            admittance_of(Element("V1", ElementKind.VOLTAGE_SOURCE, 1.0), OMEGA_50HZ)


class TestMeterModels:

    def test_default_resistances(self):
        ammeter = admittance_of(Element("A1", ElementKind.IDEAL_AMMETER), OMEGA_50HZ)
        voltmeter = admittance_of(Element("VM1", ElementKind.IDEAL_VOLTMETER), OMEGA_50HZ)
        assert ammeter.re == pytest.approx(1.0 / AMMETER_RESISTANCE_OHMS)
        assert voltmeter.re == pytest.approx(1.0 / VOLTMETER_RESISTANCE_OHMS)

    def test_override(self):
        y = admittance_of(Element("A1", ElementKind.IDEAL_AMMETER, 0.5), OMEGA_50HZ)
        assert y.re == pytest.approx(2.0)

    @pytest.mark.parametrize("value", [0.0, -3.0, math.nan])
    def test_invalid_override_falls_back_with_warning(self, value, caplog):
        with caplog.at_level(logging.WARNING):
            y = admittance_of(Element("VM1", ElementKind.IDEAL_VOLTMETER, value), OMEGA_50HZ)
        assert y.re == pytest.approx(1.0 / VOLTMETER_RESISTANCE_OHMS)
        assert "VM1" in caplog.text


class TestSourceModels:

    def test_phasor_from_magnitude_and_phase(self):
        p = source_phasor_of(Element("V1", ElementKind.VOLTAGE_SOURCE, 10.0, 90.0))
        assert p.re == pytest.approx(0.0, abs=1e-12)
        assert p.im == pytest.approx(10.0)

    def test_zero_magnitude_is_allowed(self):
        assert complex(source_phasor_of(Element("I1", ElementKind.CURRENT_SOURCE, 0.0))) == 0

    @pytest.mark.parametrize("value,phase", [(-1.0, 0.0), (math.nan, 0.0), (None, 0.0), (1.0, math.inf)])
    def test_degenerate_sources(self, value, phase):
        with pytest.raises(ComponentError):
            source_phasor_of(Element("V1", ElementKind.VOLTAGE_SOURCE, value, phase))

    def test_passives_have_no_phasor(self):
        with pytest.raises(TypeError):
            source_phasor_of(Element("R1", ElementKind.RESISTOR, 1.0))
