import re
from typing import Any, Dict, Optional

from shapeminer.utils.exceptions import UnknownDocTypeError


STRING = "string"
NUMERIC = "numeric"
FLOAT = "float"
BOOLEAN = "boolean"
TIMESTAMP = "timestamp"
OBJECT = "object"
ASSOCIATIVE_ARRAY = "associative array"

LIST_PREFIX = "list of "

_SCALAR_SCHEMAS: Dict[str, Dict[str, Any]] = {
    STRING: {"type": "string"},
    NUMERIC: {"type": "integer"},
    TIMESTAMP: {"type": "integer", "minimum": 0},
    FLOAT: {"type": "number", "format": "float"},
    BOOLEAN: {"type": "boolean"},
    OBJECT: {"type": "object"},
}

# "list of X" element tags
_LIST_ELEMENTS = {
    "booleans": BOOLEAN,
    "integers": NUMERIC,
    "strings": STRING,
    "floats": FLOAT,
    "timestamps": TIMESTAMP,
}

_SEPARATORS = re.compile(r"[\s_\-]+")


def normalize_doc_type(doc_type: str) -> str:
    """
    'List-of-Integers', 'list_of_integers' -> 'list of integers'
    """
    return _SEPARATORS.sub(" ", str(doc_type or "")).strip().lower()


def list_element_type(doc_type: str, path: str = "") -> Optional[str]:
    """
    Element tag of a `list of X` doc type, None for non-list tags.
    """
    tag = normalize_doc_type(doc_type)
    if not tag.startswith(LIST_PREFIX):
        return None

    element = tag[len(LIST_PREFIX):]
    if element not in _LIST_ELEMENTS:
        raise UnknownDocTypeError(doc_type, path)
    return _LIST_ELEMENTS[element]


def base_schema(doc_type: str, path: str = "") -> Dict[str, Any]:
    """
    Sample-free schema for a declared tag.
    Raises UnknownDocTypeError for tags outside the vocabulary.
    """
    tag = normalize_doc_type(doc_type)

    if tag in _SCALAR_SCHEMAS:
        return dict(_SCALAR_SCHEMAS[tag])

    if tag == ASSOCIATIVE_ARRAY:
        return {"type": "object", "additionalProperties": True}

    element = list_element_type(tag, path)
    if element is not None:
        return {"type": "array", "items": base_schema(element, path)}

    raise UnknownDocTypeError(doc_type, path)


def coerce_value(value: str, doc_type: str) -> Any:
    """
    Convert a documented literal into the JSON type of `doc_type`.
    Raises ValueError when the literal does not fit.
    """
    tag = normalize_doc_type(doc_type)
    text = str(value).strip().strip('"').strip("'")

    if tag in (NUMERIC, TIMESTAMP):
        return int(text)
    if tag == FLOAT:
        return float(text)
    if tag == BOOLEAN:
        lowered = text.lower()
        if lowered in ("true", "1"):
            return True
        if lowered in ("false", "0"):
            return False
        raise ValueError(f"Not a boolean literal: {value}")
    if tag == STRING:
        return text
    raise ValueError(f"Literals are not supported for type '{doc_type}'")
