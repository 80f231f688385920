# src/acsim_core/simulation/execution.py
"""
Provides the primary public API functions for solving circuits.

This module is a thin Facade over the solve pipeline:

    CircuitValidator -> TopologyAnalyzer -> MnaAssembler -> solve_linear_system

The pipeline's internal layers raise typed, diagnosable exceptions. `solve` and
`solve_circuit` convert the three known failure categories into a `SolveFailure`
value so that interactive callers (an editor re-solving after every change) never
need a try/except. `solve_strict` is the raising variant for scripts. Exceptions
outside the known categories are bugs: they are logged at CRITICAL and re-raised
as `SimulationRunError` with the original chained.
"""
import logging
from typing import Iterable, List

import numpy as np

from ..analysis.connectivity import find_floating_nets, find_voltage_source_loops
from ..analysis.exceptions import TopologyAnalysisError
from ..analysis.results import REFERENCE_NET, TopologyAnalysisResults
from ..analysis.topology import TopologyAnalyzer
from ..complex_math import ComplexNumber
from ..components.base_enums import ElementKind
from ..components.elements import Element, TerminalRef, Wire
from ..components.exceptions import ComponentError
from ..data_structures import Circuit
from ..errors import Diagnosable, SimulationRunError, format_diagnostic_report
from ..validation import CircuitValidator, MalformedCircuitError
from ..validation.issue_codes import CircuitIssueCode
from ..validation.issues import ValidationIssue, ValidationIssueLevel
from .exceptions import SingularSystemError
from .mna import MnaAssembler
from .results import SolveErrorKind, SolveFailure, SolveOutcome, SolveResult, SweepResult
from .solver import solve_linear_system

logger = logging.getLogger(__name__)


def solve(
    elements: Iterable[Element],
    wires: Iterable,
    frequency_hz: float,
    reference=None,
    name: str = "circuit",
) -> SolveOutcome:
    """
    Solves one circuit snapshot given as loose parts.

    Args:
        elements: The circuit's elements, in order.
        wires: `Wire` objects or pairs of terminal references ("R1.a", ("R1", "a"), ...).
        frequency_hz: The drive frequency.
        reference: Optional terminal whose net is the reference (net 0).
        name: Identifier used in logs and diagnostic reports.

    Returns:
        A `SolveResult`, or a `SolveFailure` describing why the circuit has no solution.
    """
    elements = tuple(elements)
    issues: List[ValidationIssue] = []
    wire_objs: List[Wire] = []
    for wire in wires:
        if isinstance(wire, Wire):
            wire_objs.append(wire)
            continue
        try:
            first, second = wire
            wire_objs.append(Wire.between(first, second))
        except (TypeError, ValueError):
            issues.append(_issue(CircuitIssueCode.WIRE_MALFORMED, endpoint=wire))

    if reference is not None:
        try:
            reference = TerminalRef.parse(reference)
        except (TypeError, ValueError):
            issues.append(_issue(CircuitIssueCode.CIRCUIT_REFERENCE_UNKNOWN, reference=reference))

    if issues:
        return _failure_from(MalformedCircuitError(issues, circuit_name=name))

    circuit = Circuit(elements, tuple(wire_objs), frequency_hz, reference, name)
    return solve_circuit(circuit)


def solve_circuit(circuit: Circuit) -> SolveOutcome:
    """
    Solves a `Circuit` snapshot.

    Returns:
        A `SolveResult`, or a `SolveFailure` for malformed circuits, degenerate
        components and singular systems.

    Raises:
        SimulationRunError: Only for unexpected internal errors.
    """
    name = getattr(circuit, 'name', type(circuit).__name__)
    try:
        return _run_pipeline(circuit)
    except (MalformedCircuitError, TopologyAnalysisError, ComponentError, SingularSystemError) as e:
        failure = _failure_from(e)
        logger.info(f"Solve of '{name}' failed ({failure.kind}): {failure.message}")
        return failure
    except Exception as e:
        logger.critical(f"An unexpected internal error occurred while solving '{name}': {e}", exc_info=True)
        report = format_diagnostic_report(
            error_type=f"An Unexpected Solver Error Occurred ({type(e).__name__})",
            details=f"The solver encountered an unexpected internal error: {e}",
            suggestion="This may be a bug. Review the traceback and consider filing a bug report.",
            context={'circuit': name}
        )
        raise SimulationRunError(report) from e


def solve_strict(circuit: Circuit) -> SolveResult:
    """
    Like `solve_circuit`, but raises instead of returning a `SolveFailure`.

    Raises:
        SimulationRunError: With the failure's diagnostic report as its message.
                            The original diagnosable exception is chained.
    """
    outcome = solve_circuit(circuit)
    if isinstance(outcome, SolveFailure):
        logger.error(f"A diagnosable error occurred during solve: {outcome}")
        raise SimulationRunError(outcome.report) from outcome.error
    return outcome


def run_sweep(circuit: Circuit, freq_array_hz: np.ndarray) -> SweepResult:
    """
    Solves the circuit independently at every frequency of `freq_array_hz`.

    Each point gets a fresh snapshot of the circuit at that frequency; nothing is
    reused between points. A failure at one point (typically an inductor at 0 Hz)
    is recorded for that point and does not stop the sweep.

    Args:
        circuit: The circuit to sweep. Its own `frequency_hz` is ignored.
        freq_array_hz: 1D array of frequencies in Hz.

    Returns:
        A `SweepResult` with one outcome per frequency.
    """
    freqs = np.asarray(freq_array_hz, dtype=float)
    if freqs.ndim != 1:
        raise ValueError(f"Frequency array must be one-dimensional, got shape {freqs.shape}.")

    logger.info(f"--- Starting frequency sweep for '{circuit.name}' ({len(freqs)} points) ---")
    outcomes = tuple(solve_circuit(circuit.with_frequency(float(f))) for f in freqs)
    result = SweepResult(frequencies_hz=freqs, outcomes=outcomes)

    if result.failures:
        logger.warning(f"Sweep of '{circuit.name}' failed at {len(result.failures)} of {len(freqs)} frequency point(s).")
    else:
        logger.info(f"Sweep of '{circuit.name}' completed successfully.")
    return result


def _run_pipeline(circuit: Circuit) -> SolveResult:
    issues = CircuitValidator(circuit).raise_for_errors()
    logger.debug(f"Solving '{circuit.name}' at {circuit.frequency_hz} Hz...")
    for issue in issues:
        if issue.level == ValidationIssueLevel.WARNING:
            logger.warning(str(issue))

    topology = TopologyAnalyzer(circuit).analyze()
    assembler = MnaAssembler(circuit, topology)
    try:
        A, z = assembler.assemble()
        x = solve_linear_system(A, z, frequency=float(circuit.frequency_hz))
        return _extract_results(circuit, topology, assembler, x)
    except SingularSystemError as e:
        _explain_singularity(e, circuit, topology)
        raise


def _explain_singularity(error: SingularSystemError, circuit: Circuit, topology: TopologyAnalysisResults):
    """Attaches the topological causes of a singular system, when there are any."""
    error.floating_nets = tuple(sorted(find_floating_nets(topology, circuit.elements)))
    error.looped_sources = tuple(sorted(find_voltage_source_loops(topology, circuit.elements)))
    if error.looped_sources and error.element_id is None and len(error.looped_sources) == 1:
        error.element_id = error.looped_sources[0]


def _extract_results(
    circuit: Circuit,
    topology: TopologyAnalysisResults,
    assembler: MnaAssembler,
    x: np.ndarray,
) -> SolveResult:
    solution = tuple(ComplexNumber.from_complex(v) for v in x)

    net_voltages = [ComplexNumber.zero()] * topology.net_count
    for net in range(topology.net_count):
        idx = assembler.unknown_index(net)
        if idx is not None:
            net_voltages[net] = solution[idx]
    if topology.net_count:
        net_voltages[REFERENCE_NET] = ComplexNumber.zero()

    voltage_source_currents = {
        source.id: solution[assembler.source_row(k)]
        for k, source in enumerate(assembler.voltage_sources)
    }

    element_currents = {}
    for element in circuit.elements:
        if element.kind == ElementKind.VOLTAGE_SOURCE:
            element_currents[element.id] = voltage_source_currents[element.id]
        elif element.kind == ElementKind.CURRENT_SOURCE:
            element_currents[element.id] = assembler.source_phasors[element.id]
        else:
            na, nb = assembler.terminal_nets(element)
            element_currents[element.id] = (net_voltages[na] - net_voltages[nb]) * assembler.admittances[element.id]

    for element_id, current in element_currents.items():
        if not current.is_finite():
            raise SingularSystemError(
                details=f"Branch current of '{element_id}' is not finite ({current}); the solution overflowed.",
                frequency=float(circuit.frequency_hz),
                element_id=element_id,
            )

    result = SolveResult(
        circuit_name=circuit.name,
        frequency_hz=float(circuit.frequency_hz),
        net_count=topology.net_count,
        terminal_to_net=dict(topology.terminal_to_net),
        net_voltages=tuple(net_voltages),
        voltage_source_currents=voltage_source_currents,
        element_currents=element_currents,
        element_terminals={e.id: tuple(e.terminals) for e in circuit.elements},
        element_kinds={e.id: e.kind for e in circuit.elements},
        solution=solution,
    )
    logger.debug(f"Solved '{circuit.name}': {topology.net_count} nets, {len(solution)} unknowns.")
    return result


def _issue(code: CircuitIssueCode, **kwargs) -> ValidationIssue:
    return ValidationIssue(
        level=ValidationIssueLevel.ERROR,
        code=code.code,
        message=code.format_message(**kwargs),
        details=kwargs,
    )


def _failure_from(error: Diagnosable) -> SolveFailure:
    """Maps a diagnosable pipeline exception onto its `SolveFailure` value."""
    if isinstance(error, (MalformedCircuitError, TopologyAnalysisError)):
        return SolveFailure(
            kind=SolveErrorKind.MALFORMED_CIRCUIT,
            message=str(error),
            report=error.get_diagnostic_report(),
            element_id=getattr(error, 'element_id', None),
            issues=tuple(getattr(error, 'issues', ())),
            error=error,
        )
    if isinstance(error, ComponentError):
        return SolveFailure(
            kind=SolveErrorKind.DEGENERATE_COMPONENT,
            message=str(error),
            report=error.get_diagnostic_report(),
            element_id=error.element_id,
            error=error,
        )
    if isinstance(error, SingularSystemError):
        return SolveFailure(
            kind=SolveErrorKind.SINGULAR_SYSTEM,
            message=str(error),
            report=error.get_diagnostic_report(),
            element_id=error.element_id,
            floating_nets=error.floating_nets,
            error=error,
        )
    raise TypeError(f"No solve failure category for {type(error).__name__}.")
