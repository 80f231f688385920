# src/acsim_core/validation/issue_codes.py
import logging
from enum import Enum

logger = logging.getLogger(__name__)


class CircuitIssueCode(Enum):
    """
    Registry of circuit validation issue codes and their message templates.
    Each enum member's value is a tuple: (code_str, message_template_str).
    """

    # --- Element Definition Issues (ELEM_...) ---
    ELEM_ID_EMPTY = ("ELEM_ID_EMPTY", "Element at position {position} has an empty id.")
    ELEM_ID_DUPLICATE = ("ELEM_ID_DUPLICATE", "Element id '{element_id}' is used by {count} elements.")
    ELEM_KIND_UNKNOWN = ("ELEM_KIND_UNKNOWN", "Element '{element_id}' has unknown kind '{kind}'. Available kinds: {available_kinds}.")
    ELEM_TERMINAL_COUNT = ("ELEM_TERMINAL_COUNT", "Element '{element_id}' declares {count} terminal(s) {terminals}; exactly two are required.")
    ELEM_TERMINAL_DUPLICATE = ("ELEM_TERMINAL_DUPLICATE", "Element '{element_id}' declares the same terminal name twice: {terminals}.")
    ELEM_TERMINAL_UNCONNECTED = ("ELEM_TERMINAL_UNCONNECTED", "Terminal '{terminal_ref}' is not connected to any wire and forms its own net.")

    # --- Wire Issues (WIRE_...) ---
    WIRE_UNKNOWN_ELEMENT = ("WIRE_UNKNOWN_ELEMENT", "Wire '{wire}' references element '{element_id}', which is not in the circuit.")
    WIRE_UNKNOWN_TERMINAL = ("WIRE_UNKNOWN_TERMINAL", "Wire '{wire}' references terminal '{terminal}' of element '{element_id}', which declares only {terminals}.")
    WIRE_SELF_LOOP = ("WIRE_SELF_LOOP", "Wire '{wire}' connects a terminal to itself and has no effect.")
    WIRE_MALFORMED = ("WIRE_MALFORMED", "Wire endpoint {endpoint!r} is not a terminal reference of the form 'element.terminal'.")

    # --- Circuit-Level Issues (CIRCUIT_...) ---
    CIRCUIT_REFERENCE_UNKNOWN = ("CIRCUIT_REFERENCE_UNKNOWN", "Reference terminal '{reference}' does not name a declared terminal.")
    CIRCUIT_FREQUENCY_INVALID = ("CIRCUIT_FREQUENCY_INVALID", "Drive frequency {frequency!r} must be a finite, non-negative number of hertz.")

    # --- Source Issues (SRC_...) ---
    SRC_FREQUENCY_MISMATCH = ("SRC_FREQUENCY_MISMATCH", "Source '{element_id}' declares {source_frequency} Hz but the circuit is solved at {frequency} Hz; the circuit frequency is used.")

    @property
    def code(self) -> str:
        return self.value[0]

    @property
    def template(self) -> str:
        return self.value[1]

    def format_message(self, **kwargs) -> str:
        """Formats the message template with provided keyword arguments."""
        try:
            return self.template.format(**kwargs)
        except KeyError as e:
            logger.error(f"Missing key {e} for formatting message template of {self.name} (code: {self.code}): '{self.template}'. Provided args: {kwargs}")
            return f"Error formatting message for {self.code}: Missing key {e}. Template: '{self.template}' Args: {kwargs}"
