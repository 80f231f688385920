# src/acsim_core/circuit_builder.py
"""
Defines the CircuitBuilder, which synthesizes an immutable `Circuit` snapshot from
the Intermediate Representation produced by the `CircuitParser`.

The builder owns every unit conversion of the netlist front-end: element values are
converted with pint to the SI unit registered for their kind, phases to degrees and
frequencies to hertz. It is also the error-handling gatekeeper of the build stage:
any diagnosable error from the parser or the conversions is re-raised as a single
`CircuitBuildError` carrying the formatted diagnostic report.
"""

import logging
from pathlib import Path
from typing import Optional, Tuple, Union

import numpy as np
import pint

from .components.base_enums import ElementKind
from .components.elements import Element, Wire
from .components.models import MODEL_REGISTRY
from .constants import DEFAULT_FREQUENCY_HZ
from .data_structures import Circuit
from .errors import CircuitBuildError, DiagnosableError, format_diagnostic_report
from .parser import CircuitParser
from .parser.exceptions import QuantityConversionError
from .parser.raw_data import ParsedCircuitDefinition, ParsedElementData
from .simulation.config import ConfigParsingError, parse_sweep_config
from .units import to_magnitude

logger = logging.getLogger(__name__)

_CONVERSION_ERRORS = (ValueError, TypeError, pint.DimensionalityError, pint.UndefinedUnitError)


class CircuitBuilder:
    """
    Synthesizes a `Circuit` from a parsed IR node.
    """

    def build_circuit(self, parsed: ParsedCircuitDefinition) -> Circuit:
        """
        The main build-time entry point.

        Raises:
            CircuitBuildError: For any failure, diagnosable or not. The original
                               exception is chained.
        """
        logger.info(f"--- Starting circuit synthesis for '{parsed.circuit_name}' ---")
        try:
            circuit = self._synthesize(parsed)
            logger.info(
                f"--- Circuit synthesis for '{circuit.name}' successful "
                f"({len(circuit.elements)} elements, {len(circuit.wires)} wires). ---"
            )
            return circuit

        except DiagnosableError as e:
            raise CircuitBuildError(e.get_diagnostic_report()) from e

        except Exception as e:
            report = format_diagnostic_report(
                error_type=f"An Unexpected Error Occurred ({type(e).__name__})",
                details=f"The circuit builder encountered an unexpected internal error: {str(e)}",
                suggestion="This may indicate a bug in ACSim Core. Please review the traceback.",
                context={'circuit': parsed.circuit_name, 'source_file': parsed.source_yaml_path}
            )
            raise CircuitBuildError(report) from e

    def _synthesize(self, parsed: ParsedCircuitDefinition) -> Circuit:
        if parsed.raw_frequency is None:
            frequency_hz = DEFAULT_FREQUENCY_HZ
            logger.debug(f"No frequency given for '{parsed.circuit_name}'; using {DEFAULT_FREQUENCY_HZ} Hz.")
        else:
            frequency_hz = self._convert(parsed.raw_frequency, "Hz", parsed.circuit_name, "frequency", parsed.source_yaml_path)

        elements = tuple(self._build_element(e) for e in parsed.elements)
        wires = tuple(Wire.between(first, second) for first, second in parsed.raw_wires)

        return Circuit(
            elements=elements,
            wires=wires,
            frequency_hz=frequency_hz,
            reference=parsed.raw_reference,
            name=parsed.circuit_name,
        )

    def _build_element(self, elem_ir: ParsedElementData) -> Element:
        kind = ElementKind(elem_ir.kind)
        unit = MODEL_REGISTRY[kind].unit
        path = elem_ir.source_yaml_path

        value = None
        if elem_ir.raw_value is not None:
            value = self._convert(elem_ir.raw_value, unit, elem_ir.instance_id, "value", path)

        phase_degrees = 0.0
        if elem_ir.raw_phase is not None:
            phase_degrees = self._convert(elem_ir.raw_phase, "degree", elem_ir.instance_id, "phase", path)

        frequency_hz = None
        if elem_ir.raw_frequency is not None:
            frequency_hz = self._convert(elem_ir.raw_frequency, "Hz", elem_ir.instance_id, "frequency", path)

        if not kind.is_source and (elem_ir.raw_phase is not None or elem_ir.raw_frequency is not None):
            logger.warning(f"Element '{elem_ir.instance_id}' ({kind}) is not a source; its phase/frequency are ignored.")

        return Element(
            id=elem_ir.instance_id,
            kind=kind,
            value=value,
            phase_degrees=phase_degrees,
            frequency_hz=frequency_hz,
            terminals=elem_ir.terminals,
            label=elem_ir.label,
        )

    @staticmethod
    def _convert(raw, unit: str, owner: str, field_name: str, path: Path) -> float:
        try:
            return to_magnitude(raw, unit)
        except _CONVERSION_ERRORS as e:
            raise QuantityConversionError(
                owner=owner,
                field_name=field_name,
                user_input=raw,
                expected_unit=unit,
                details=str(e),
                file_path=path,
            ) from e


def load_circuit(yaml_path: Union[str, Path]) -> Tuple[Circuit, Optional[np.ndarray]]:
    """
    Reads a netlist file into a `Circuit`, plus its sweep frequencies if the file
    declares a sweep.

    Raises:
        CircuitBuildError: If the file cannot be read, parsed, validated or converted.
    """
    try:
        parsed = CircuitParser().parse(yaml_path)
    except DiagnosableError as e:
        raise CircuitBuildError(e.get_diagnostic_report()) from e

    circuit = CircuitBuilder().build_circuit(parsed)

    freq_array_hz = None
    if parsed.raw_sweep_config is not None:
        try:
            freq_array_hz = parse_sweep_config(parsed.raw_sweep_config)
        except ConfigParsingError as e:
            report = format_diagnostic_report(
                error_type="Sweep Configuration Error",
                details=str(e),
                suggestion="A sweep needs 'type' plus 'start', 'stop' and 'num_points' (linear/log) or 'points' (list), with frequencies in Hz.",
                context={'circuit': circuit.name, 'source_file': parsed.source_yaml_path}
            )
            raise CircuitBuildError(report) from e
    return circuit, freq_array_hz
