# src/acsim_core/simulation/__init__.py
"""
Public interface of the simulation package: the MNA assembler, the pivoted
complex elimination, the solve facade and its result contracts.
"""
from .execution import solve, solve_circuit, solve_strict, run_sweep
from .results import SolveResult, SolveFailure, SolveErrorKind, SolveOutcome, ElementReading, SweepResult
from .exceptions import SingularSystemError
from .mna import MnaAssembler
from .solver import solve_linear_system
from .config import parse_sweep_config, ConfigParsingError
from .waveform import sample_waveform, peak_amplitude

__all__ = [
    # Public API Functions
    "solve",
    "solve_circuit",
    "solve_strict",
    "run_sweep",
    # Formal Result Contracts
    "SolveResult",
    "SolveFailure",
    "SolveErrorKind",
    "SolveOutcome",
    "ElementReading",
    "SweepResult",
    # Core Services
    "MnaAssembler",
    "solve_linear_system",
    "parse_sweep_config",
    "sample_waveform",
    "peak_amplitude",
    # Exceptions
    "SingularSystemError",
    "ConfigParsingError",
]
