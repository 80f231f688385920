# src/acsim_core/parser/raw_data.py
from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

# The classes in this module define the Intermediate Representation (IR) passed from
# the CircuitParser to the CircuitBuilder. Values are kept exactly as written in the
# file (numbers or unit strings); unit conversion is the builder's job.

RawQuantity = Union[str, int, float]


@dataclass(frozen=True)
class ParsedElementData:
    """IR for one two-terminal element."""
    instance_id: str
    kind: str
    raw_value: Optional[RawQuantity]
    raw_phase: Optional[RawQuantity]
    raw_frequency: Optional[RawQuantity]
    terminals: Tuple[str, ...]
    label: Optional[str]
    source_yaml_path: Path


@dataclass(frozen=True)
class ParsedCircuitDefinition:
    """Top-level IR node representing a single parsed netlist file."""
    circuit_name: str
    source_yaml_path: Path
    raw_frequency: Optional[RawQuantity]
    raw_reference: Optional[str]
    elements: List[ParsedElementData]
    raw_wires: List[Tuple[str, str]] = field(default_factory=list)
    raw_sweep_config: Optional[Dict[str, Any]] = None
