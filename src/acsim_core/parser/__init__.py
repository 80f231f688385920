# src/acsim_core/parser/__init__.py
from .raw_data import ParsedCircuitDefinition, ParsedElementData
from .parser import CircuitParser, EnhancedValidator
from .exceptions import ParsingError, SchemaValidationError, QuantityConversionError

__all__ = [
    # IR Data Structures
    "ParsedCircuitDefinition",
    "ParsedElementData",
    # Parser and Exceptions
    "CircuitParser",
    "EnhancedValidator",
    "ParsingError",
    "SchemaValidationError",
    "QuantityConversionError",
]
