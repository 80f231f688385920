# src/acsim_core/components/base_enums.py
from enum import Enum


class ElementKind(Enum):
    """
    The closed set of two-terminal element kinds understood by the solver.
    Values are the identifiers used in netlists and by presentation code.
    """
    RESISTOR = "resistor"
    CAPACITOR = "capacitor"
    INDUCTOR = "inductor"
    VOLTAGE_SOURCE = "voltage_source"
    CURRENT_SOURCE = "current_source"
    IDEAL_AMMETER = "ideal_ammeter"
    IDEAL_VOLTMETER = "ideal_voltmeter"

    @property
    def is_source(self) -> bool:
        return self in (ElementKind.VOLTAGE_SOURCE, ElementKind.CURRENT_SOURCE)

    @property
    def is_meter(self) -> bool:
        return self in (ElementKind.IDEAL_AMMETER, ElementKind.IDEAL_VOLTMETER)

    @property
    def is_passive(self) -> bool:
        """Passive here means 'stamped as an admittance', which includes the meters."""
        return not self.is_source

    def __str__(self):
        return self.value
