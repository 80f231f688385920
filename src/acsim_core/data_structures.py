# src/acsim_core/data_structures.py
from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Optional, Tuple

from .components.elements import Element, TerminalRef, Wire

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Circuit:
    """
    An immutable snapshot of a circuit: the only input of a solve.

    It is a data container and holds no imperative logic. Nets are not stored here;
    they are derived on every solve by the topology builder, so a Circuit can be
    edited (via `dataclasses.replace` or the `with_*` helpers) without any stale
    state surviving into the next solve.

    Attributes:
        elements: The elements, in input order. The order fixes net numbering
                  and the order of voltage-source unknowns.
        wires: Terminal equivalences.
        frequency_hz: The single drive frequency shared by every reactance.
        reference: Optional terminal whose net becomes the reference (net 0).
                   When None, the net of the first terminal of the first element is used.
        name: Free-form identifier used in logs and diagnostic reports.
    """
    elements: Tuple[Element, ...]
    wires: Tuple[Wire, ...]
    frequency_hz: float
    reference: Optional[TerminalRef] = None
    name: str = "circuit"

    def __post_init__(self):
        object.__setattr__(self, 'elements', tuple(self.elements))
        object.__setattr__(self, 'wires', tuple(self.wires))
        if self.reference is not None:
            object.__setattr__(self, 'reference', TerminalRef.parse(self.reference))

    @classmethod
    def create(
        cls,
        elements: Iterable[Element],
        wires: Iterable,
        frequency_hz: float,
        reference=None,
        name: str = "circuit",
    ) -> "Circuit":
        """Builds a Circuit, accepting `Wire` objects or pairs of terminal references for `wires`."""
        wire_objs = tuple(w if isinstance(w, Wire) else Wire.between(*w) for w in wires)
        return cls(
            elements=tuple(elements),
            wires=wire_objs,
            frequency_hz=frequency_hz,
            reference=reference,
            name=name,
        )

    @property
    def elements_by_id(self) -> Dict[str, Element]:
        return {e.id: e for e in self.elements}

    def element(self, element_id: str) -> Element:
        for e in self.elements:
            if e.id == element_id:
                return e
        raise KeyError(element_id)

    def with_frequency(self, frequency_hz: float) -> "Circuit":
        return replace(self, frequency_hz=frequency_hz)

    def with_element(self, element: Element) -> "Circuit":
        """Returns a copy with the element of the same id replaced, or appended if new."""
        replaced = False
        elements = []
        for e in self.elements:
            if e.id == element.id:
                elements.append(element)
                replaced = True
            else:
                elements.append(e)
        if not replaced:
            elements.append(element)
        return Circuit(tuple(elements), self.wires, self.frequency_hz, self.reference, self.name)

    def without_element(self, element_id: str) -> "Circuit":
        """
        Returns a copy without the element and without any wire touching it.
        The reference is dropped if it pointed at the removed element.
        """
        elements = tuple(e for e in self.elements if e.id != element_id)
        wires = tuple(
            w for w in self.wires
            if w.first.element_id != element_id and w.second.element_id != element_id
        )
        reference = self.reference
        if reference is not None and reference.element_id == element_id:
            reference = None
        return Circuit(elements, wires, self.frequency_hz, reference, self.name)
