# src/acsim_core/components/models.py
"""
Per-kind electrical models. Each `ElementKind` has exactly one registered model
class that knows how to turn an `Element` into either an admittance (passive
elements and meters) or a source phasor (independent sources).

The MNA assembler and the result extraction both go through `admittance_of`, so a
stamped admittance and the admittance used to derive a branch current can never
disagree.
"""
import logging
import math
from abc import ABC
from typing import ClassVar, Dict, Optional, Type

from ..complex_math import ComplexDivisionError, ComplexNumber
from ..constants import AMMETER_RESISTANCE_OHMS, VOLTMETER_RESISTANCE_OHMS
from ..units import is_finite_number
from .base_enums import ElementKind
from .elements import Element
from .exceptions import ComponentError

logger = logging.getLogger(__name__)


def _require_positive_finite(element: Element, quantity_name: str, frequency: Optional[float] = None) -> float:
    """Returns element.value as a float, or raises ComponentError if it is not finite and > 0."""
    value = element.value
    if value is None:
        raise ComponentError(element_id=element.id, details=f"Missing {quantity_name} value.", frequency=frequency)
    if not is_finite_number(value):
        raise ComponentError(element_id=element.id, details=f"{quantity_name.capitalize()} must be finite, got {value!r}.", frequency=frequency)
    if value <= 0:
        raise ComponentError(element_id=element.id, details=f"{quantity_name.capitalize()} must be positive, got {value!r}.", frequency=frequency)
    return float(value)


class ElementModel(ABC):
    """Base class for the electrical model of one element kind."""
    kind: ClassVar[ElementKind]
    unit: ClassVar[str]

    @classmethod
    def admittance(cls, element: Element, omega: float) -> ComplexNumber:
        """Complex admittance in siemens at angular frequency `omega` (rad/s)."""
        raise TypeError(f"Element kind '{cls.kind}' is a source and has no admittance.")

    @classmethod
    def source_phasor(cls, element: Element) -> ComplexNumber:
        """RMS phasor of an independent source."""
        raise TypeError(f"Element kind '{cls.kind}' is not a source.")


# --- Global Model Registry and Decorator ---

MODEL_REGISTRY: Dict[ElementKind, Type[ElementModel]] = {}


def register_model(kind: ElementKind, unit: str):
    """
    A class decorator that registers a model class for an element kind,
    along with the SI unit its `value` is expressed in.
    """
    def decorator(cls: Type[ElementModel]):
        if not issubclass(cls, ElementModel):
            raise TypeError(f"Class {cls.__name__} must inherit from ElementModel.")
        if kind in MODEL_REGISTRY:
            logger.warning(f"Model for element kind '{kind}' is being redefined/overwritten.")
        cls.kind = kind
        cls.unit = unit
        MODEL_REGISTRY[kind] = cls
        logger.debug(f"Registered element model '{kind}' -> {cls.__name__}")
        return cls
    return decorator


def model_for(element: Element) -> Type[ElementModel]:
    try:
        return MODEL_REGISTRY[element.kind]
    except (KeyError, TypeError):
        raise ComponentError(element_id=element.id, details=f"No model registered for element kind '{element.kind}'.") from None


def admittance_of(element: Element, omega: float) -> ComplexNumber:
    return model_for(element).admittance(element, omega)


def source_phasor_of(element: Element) -> ComplexNumber:
    return model_for(element).source_phasor(element)


# --- Passive Elements ---

@register_model(ElementKind.RESISTOR, "ohm")
class ResistorModel(ElementModel):
    """Y = 1/R."""

    @classmethod
    def admittance(cls, element: Element, omega: float) -> ComplexNumber:
        r = _require_positive_finite(element, "resistance")
        return ComplexNumber(1.0 / r, 0.0)


@register_model(ElementKind.CAPACITOR, "farad")
class CapacitorModel(ElementModel):
    """Y = jwC. At 0 Hz this is an open circuit (Y = 0)."""

    @classmethod
    def admittance(cls, element: Element, omega: float) -> ComplexNumber:
        c = _require_positive_finite(element, "capacitance", omega / (2 * math.pi))
        return ComplexNumber(0.0, omega * c)


@register_model(ElementKind.INDUCTOR, "henry")
class InductorModel(ElementModel):
    """
    Y = 1/(jwL) = -j/(wL).

    At 0 Hz the admittance is unbounded; that raises ComplexDivisionError, which the
    assembler reports as a singular system rather than letting Inf into the matrix.
    """

    @classmethod
    def admittance(cls, element: Element, omega: float) -> ComplexNumber:
        inductance = _require_positive_finite(element, "inductance", omega / (2 * math.pi))
        reactance = omega * inductance
        if not reactance > 0.0:
            raise ComplexDivisionError(ComplexNumber(0.0, reactance))
        return ComplexNumber(0.0, -1.0 / reactance)


class _MeterModel(ElementModel):
    """A meter is a resistor with a fixed internal resistance."""
    default_resistance: ClassVar[float]

    @classmethod
    def internal_resistance(cls, element: Element) -> float:
        value = element.value
        if value is None:
            return cls.default_resistance
        if not is_finite_number(value) or value <= 0:
            logger.warning(
                f"Meter '{element.id}' has invalid internal resistance {value!r}; "
                f"using the default of {cls.default_resistance:g} ohm."
            )
            return cls.default_resistance
        return float(value)

    @classmethod
    def admittance(cls, element: Element, omega: float) -> ComplexNumber:
        return ComplexNumber(1.0 / cls.internal_resistance(element), 0.0)


@register_model(ElementKind.IDEAL_AMMETER, "ohm")
class AmmeterModel(_MeterModel):
    default_resistance = AMMETER_RESISTANCE_OHMS


@register_model(ElementKind.IDEAL_VOLTMETER, "ohm")
class VoltmeterModel(_MeterModel):
    default_resistance = VOLTMETER_RESISTANCE_OHMS


# --- Independent Sources ---

class _SourceModel(ElementModel):

    @classmethod
    def source_phasor(cls, element: Element) -> ComplexNumber:
        magnitude = element.value
        if magnitude is None:
            raise ComponentError(element_id=element.id, details="Missing source magnitude.")
        if not is_finite_number(magnitude) or magnitude < 0:
            raise ComponentError(
                element_id=element.id,
                details=f"Source RMS magnitude must be finite and non-negative, got {magnitude!r}."
            )
        if not is_finite_number(element.phase_degrees):
            raise ComponentError(element_id=element.id, details=f"Source phase must be finite, got {element.phase_degrees!r}.")
        return ComplexNumber.from_polar(float(magnitude), math.radians(element.phase_degrees))


@register_model(ElementKind.VOLTAGE_SOURCE, "volt")
class VoltageSourceModel(_SourceModel):
    pass


@register_model(ElementKind.CURRENT_SOURCE, "ampere")
class CurrentSourceModel(_SourceModel):
    pass
