# src/acsim_core/__init__.py
import logging
from .log_config import setup_logging

setup_logging()
logger = logging.getLogger(__name__)
logger.info("ACSim Core package initialized.")

from .units import ureg, pint, Quantity
from .complex_math import ComplexNumber, ComplexDivisionError
from .components import ElementKind, Element, TerminalRef, Wire, ComponentError
from .data_structures import Circuit
from .analysis import TopologyAnalyzer, TopologyAnalysisResults, TopologyAnalysisError
from .validation import CircuitValidator, MalformedCircuitError
from .parser import CircuitParser
from .circuit_builder import CircuitBuilder, load_circuit
from .simulation import (
    solve, solve_circuit, solve_strict, run_sweep,
    SolveResult, SolveFailure, SolveErrorKind, ElementReading, SweepResult,
    MnaAssembler, SingularSystemError, parse_sweep_config, sample_waveform,
)
from .errors import AcSimError, CircuitBuildError, SimulationRunError

__all__ = [
    # Units
    "ureg", "pint", "Quantity",
    # Complex arithmetic
    "ComplexNumber", "ComplexDivisionError",
    # Data Structures
    "ElementKind", "Element", "TerminalRef", "Wire", "Circuit",
    # Analysis & Validation
    "TopologyAnalyzer", "TopologyAnalysisResults", "CircuitValidator",
    # Parser & Builder
    "CircuitParser", "CircuitBuilder", "load_circuit",
    # Simulation
    "solve", "solve_circuit", "solve_strict", "run_sweep",
    "SolveResult", "SolveFailure", "SolveErrorKind", "ElementReading", "SweepResult",
    "MnaAssembler", "parse_sweep_config", "sample_waveform",
    # Diagnosable Errors
    "ComponentError", "TopologyAnalysisError", "MalformedCircuitError", "SingularSystemError",
    # Top-Level Errors (Actionable Diagnostics)
    "AcSimError", "CircuitBuildError", "SimulationRunError",
]
