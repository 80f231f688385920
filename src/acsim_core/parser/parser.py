# src/acsim_core/parser/parser.py
import logging
import re
import string
from pathlib import Path
from typing import Any, Dict, List, Union

import cerberus
import yaml

from ..components.base_enums import ElementKind
from .raw_data import ParsedCircuitDefinition, ParsedElementData
from .exceptions import ParsingError, SchemaValidationError

logger = logging.getLogger(__name__)

# Core identifier pattern without anchors, used for composition.
ID_REGEX_FRAGMENT = r"[a-zA-Z_][a-zA-Z0-9_]*"

# A single token: element ids and terminal names. '.' is reserved as the separator
# in terminal references, and '-' is forbidden.
ID_REGEX = f"^{ID_REGEX_FRAGMENT}$"
ALLOWED_ID_CHARS = set(string.ascii_letters + string.digits + "_")

# A terminal reference: 'element.terminal'.
TERMINAL_REF_REGEX = f"^{ID_REGEX_FRAGMENT}\\.{ID_REGEX_FRAGMENT}$"


class EnhancedValidator(cerberus.Validator):
    """Custom Cerberus validator to enforce the netlist naming conventions."""
    def __init__(self, *args, **kwargs):
        super(EnhancedValidator, self).__init__(*args, **kwargs)
        self.rules['id_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['terminal_ref_regex'] = {'schema': {'type': 'boolean'}}
        self.rules['unique_elements_by_key'] = {'schema': {'type': 'string'}}

    def _validate_id_regex(self, constraint: bool, field: str, value: Any):
        if not constraint: return
        if not isinstance(value, str):
            self._error(field, "must be a string to be validated by id_regex.")
            return

        if not re.match(ID_REGEX, value):
            invalid_chars = sorted(list(set(value) - ALLOWED_ID_CHARS))
            message = (
                f"Identifier '{value}' is invalid. Identifiers must start with a letter or underscore, "
                "and can only contain letters, numbers, and underscores. The dot '.' and hyphen '-' characters are forbidden. "
                f"This identifier contains the following forbidden character(s): {invalid_chars}"
            )
            self._error(field, message)

    def _validate_terminal_ref_regex(self, constraint: bool, field: str, value: Any):
        if constraint and isinstance(value, str) and not re.match(TERMINAL_REF_REGEX, value):
            self._error(
                field,
                f"Terminal reference '{value}' is invalid. Must have the form 'element.terminal' "
                f"(e.g., 'R1.a' or 'V1.plus').",
            )

    def _validate_unique_elements_by_key(self, key_for_uniqueness: str, field: str, value: List[Dict]):
        """
        Validates that all dictionaries in a list have a unique value for a given key.
        The rule's arguments are validated against this schema:
        {'type': 'string'}
        """
        if not isinstance(value, list):
            return # Let the 'type: list' rule handle this.

        seen_keys = set()
        duplicates = []
        for item in value:
            if not isinstance(item, dict):
                continue # Let sub-schema validation handle this.

            item_key = item.get(key_for_uniqueness)
            if item_key is not None:
                if item_key in seen_keys:
                    duplicates.append(item_key)
                else:
                    seen_keys.add(item_key)

        if duplicates:
            unique_duplicates = sorted(list(set(duplicates)))
            self._error(field, f"Duplicate values found for key '{key_for_uniqueness}': {unique_duplicates}")


class CircuitParser:
    """
    Parses and validates a netlist YAML file.
    Its sole responsibility is to produce the Intermediate Representation (IR) of the file.
    """
    _id_rule = {"type": "string", "required": True, "empty": False, "id_regex": True}
    _quantity_rule = {"type": ["string", "number"], "required": False, "nullable": True}
    _terminal_ref_rule = {"type": "string", "empty": False, "terminal_ref_regex": True}

    _element_schema = {
        "id": _id_rule,
        "kind": {"type": "string", "required": True, "allowed": [k.value for k in ElementKind]},
        "value": _quantity_rule,
        "phase": _quantity_rule,
        "frequency": _quantity_rule,
        "terminals": {
            "type": "list", "required": False, "minlength": 2, "maxlength": 2,
            "schema": {"type": "string", "empty": False, "id_regex": True},
        },
        "label": {"type": "string", "required": False, "nullable": True},
    }

    _schema = {
        "circuit_name": {"type": "string", "required": False, "id_regex": True},
        "frequency": {"type": ["string", "number"], "required": False},
        "reference": {"type": "string", "required": False, "terminal_ref_regex": True},
        "elements": {"type": "list", "required": True, "minlength": 1, "unique_elements_by_key": "id", "schema": {"type": "dict", "schema": _element_schema}},
        "wires": {
            "type": "list", "required": False, "default": [],
            "schema": {"type": "list", "minlength": 2, "maxlength": 2, "schema": _terminal_ref_rule},
        },
        "sweep": {
            "type": "dict", "required": False, "schema": {
                "type": {"type": "string", "required": True, "allowed": ["linear", "log", "list"]},
                "start": {"type": ["string", "number"], "required": True, "dependencies": {"type": ["linear", "log"]}},
                "stop": {"type": ["string", "number"], "required": True, "dependencies": {"type": ["linear", "log"]}},
                "num_points": {"type": "integer", "required": True, "min": 1, "dependencies": {"type": ["linear", "log"]}},
                "points": {"type": "list", "required": True, "minlength": 1, "schema": {"type": ["string", "number"]}, "dependencies": {"type": ["list"]}},
            },
        },
    }

    def __init__(self):
        self._validator = EnhancedValidator(self._schema)
        self._validator.allow_unknown = False
        logger.info("CircuitParser initialized with strict structural validation rules.")

    def parse(self, yaml_path: Union[str, Path]) -> ParsedCircuitDefinition:
        """Parses one netlist file and returns its IR."""
        resolved_path = Path(yaml_path).resolve()
        logger.debug(f"Parsing netlist file: {resolved_path}")
        yaml_content = self._load_yaml(resolved_path)
        return self.parse_document(yaml_content, resolved_path)

    def parse_document(self, yaml_content: Dict[str, Any], source: Path) -> ParsedCircuitDefinition:
        """Validates an already-loaded netlist mapping and returns its IR."""
        if not self._validator.validate(yaml_content):
            raise SchemaValidationError(self._validator.errors, source)

        validated_data = self._validator.document

        elements: List[ParsedElementData] = []
        for elem_raw in validated_data["elements"]:
            elements.append(
                ParsedElementData(
                    instance_id=elem_raw["id"],
                    kind=elem_raw["kind"],
                    raw_value=elem_raw.get("value"),
                    raw_phase=elem_raw.get("phase"),
                    raw_frequency=elem_raw.get("frequency"),
                    terminals=tuple(elem_raw.get("terminals", ("a", "b"))),
                    label=elem_raw.get("label"),
                    source_yaml_path=source,
                )
            )

        return ParsedCircuitDefinition(
            circuit_name=validated_data.get("circuit_name", source.stem),
            source_yaml_path=source,
            raw_frequency=validated_data.get("frequency"),
            raw_reference=validated_data.get("reference"),
            elements=elements,
            raw_wires=[tuple(w) for w in validated_data.get("wires", [])],
            raw_sweep_config=validated_data.get("sweep"),
        )

    def _load_yaml(self, source: Path) -> Dict[str, Any]:
        """Loads and performs basic sanity checks on a YAML file."""
        if not source.is_file():
            raise ParsingError(details=f"Netlist file not found at path: {source}", file_path=source)
        try:
            with source.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
            if content is None:
                raise ParsingError(details=f"The YAML file is empty or contains no valid content.", file_path=source)
            if not isinstance(content, dict):
                raise ParsingError(details=f"The root of the YAML file must be a dictionary (mapping).", file_path=source)
            return content
        except PermissionError as e:
            raise ParsingError(details=f"Permission denied when trying to read file: {e}", file_path=source) from e
        except yaml.YAMLError as e:
            raise ParsingError(details=f"Invalid YAML syntax: {e}", file_path=source) from e
