# src/acsim_core/components/__init__.py
import logging
logger = logging.getLogger(__name__)

from .base_enums import ElementKind
from .elements import Element, TerminalRef, Wire, DEFAULT_TERMINALS
from .exceptions import ComponentError
from .models import (
    ElementModel, MODEL_REGISTRY, register_model, model_for,
    admittance_of, source_phasor_of,
)

logger.debug(f"Available element kinds: {[str(k) for k in MODEL_REGISTRY]}")

__all__ = [
    "ElementKind",
    "Element",
    "TerminalRef",
    "Wire",
    "DEFAULT_TERMINALS",
    "ComponentError",
    "ElementModel",
    "MODEL_REGISTRY",
    "register_model",
    "model_for",
    "admittance_of",
    "source_phasor_of",
]
