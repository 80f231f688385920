# src/acsim_core/components/elements.py
"""
The circuit description records handed to the solver: elements, terminal
references and wires. They are plain, immutable value objects; all behaviour
(admittances, source phasors) lives in `components.models`.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import NamedTuple, Optional, Tuple, Union

from .base_enums import ElementKind

logger = logging.getLogger(__name__)

DEFAULT_TERMINALS: Tuple[str, str] = ("a", "b")


class TerminalRef(NamedTuple):
    """Identifies one terminal of one element."""
    element_id: str
    terminal: str

    @classmethod
    def parse(cls, value: Union["TerminalRef", Tuple[str, str], str]) -> "TerminalRef":
        """
        Accepts a TerminalRef, an (element_id, terminal) pair, or a dotted string
        such as "R1.a". Element ids never contain dots, so the split is on the last one.
        """
        if isinstance(value, TerminalRef):
            return value
        if isinstance(value, str):
            element_id, sep, terminal = value.rpartition(".")
            if not sep or not element_id or not terminal:
                raise ValueError(f"Terminal reference '{value}' must have the form 'element.terminal'.")
            return cls(element_id, terminal)
        element_id, terminal = value
        return cls(str(element_id), str(terminal))

    def __str__(self) -> str:
        return f"{self.element_id}.{self.terminal}"


@dataclass(frozen=True)
class Element:
    """
    A two-terminal circuit element.

    `value` is in SI units of the kind: ohms, farads, henries, volts RMS or amps RMS.
    For meters it optionally overrides the internal resistance in ohms.
    `phase_degrees` and `frequency_hz` only mean something for sources; the solver
    always drives the whole circuit at the circuit frequency and keeps
    `frequency_hz` for display only.
    """
    id: str
    kind: ElementKind
    value: Optional[float] = None
    phase_degrees: float = 0.0
    frequency_hz: Optional[float] = None
    terminals: Tuple[str, ...] = DEFAULT_TERMINALS
    label: Optional[str] = None

    def __post_init__(self):
        # Kinds given as strings are coerced here; an unknown string is left
        # untouched so the validator can report it with context.
        if isinstance(self.kind, str):
            try:
                object.__setattr__(self, 'kind', ElementKind(self.kind))
            except ValueError:
                logger.debug(f"Element '{self.id}' has unrecognised kind '{self.kind}'.")
        object.__setattr__(self, 'terminals', tuple(self.terminals))

    def terminal_ref(self, terminal: str) -> TerminalRef:
        return TerminalRef(self.id, terminal)

    @property
    def terminal_refs(self) -> Tuple[TerminalRef, ...]:
        return tuple(TerminalRef(self.id, t) for t in self.terminals)


@dataclass(frozen=True)
class Wire:
    """An undirected electrical equivalence between two terminals."""
    first: TerminalRef
    second: TerminalRef

    @classmethod
    def between(cls, first, second) -> "Wire":
        """Builds a wire from any two values accepted by `TerminalRef.parse`."""
        return cls(TerminalRef.parse(first), TerminalRef.parse(second))

    @property
    def endpoints(self) -> Tuple[TerminalRef, TerminalRef]:
        return (self.first, self.second)

    def __str__(self) -> str:
        return f"{self.first} -- {self.second}"
