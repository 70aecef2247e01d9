"""
Documentation-driven constraints for declared input parameters.

The help text of a parameter often spells out its accepted values or
bounds in a handful of fixed idioms:

    Valid values:
     * "asc" - oldest first
     * "desc" - newest first

    Minimum: 1
    Maximum: 500
    Default: 100

    Returns at most 100 results, capped at 1000.

Each recognised idiom becomes a schema constraint and is removed from
the description. An idiom that only partly parses is left in the text
and contributes nothing; no sample data is involved here.
"""

import re
from typing import Any, Dict, List, Optional, Tuple

from shapeminer.inference import doc_types


VALID_VALUES_HEADER = re.compile(r"^\s*valid values\s*:?\s*$", re.IGNORECASE)
BULLET_LINE = re.compile(r"^\s*[-*•]\s*")
VALID_VALUE_ITEM = re.compile(r'^\s*[-*•]\s*"([^"]*)"\s*[-–:]\s*(.*?)\s*$')

BOUND_LINE = re.compile(
    r"^\s*(minimum|maximum|default)(?:\s+value)?\s*(?::|=|\bis\b)\s*(.+?)\s*\.?\s*$",
    re.IGNORECASE,
)

AT_MOST_CAPPED = re.compile(
    r"returns at most\s+(\d+)\b[^.\n]*?,?\s*capped at\s+(\d+)[^.\n]*\.?",
    re.IGNORECASE,
)

_NUMERIC_TAGS = (doc_types.NUMERIC, doc_types.TIMESTAMP, doc_types.FLOAT)


def _extract_valid_values(
    lines: List[str], doc_type: str
) -> Tuple[List[str], Optional[List[Any]]]:
    """
    Find a "Valid values" block. Returns the remaining lines and the
    enum (None when absent or malformed).
    """
    for start, line in enumerate(lines):
        if not VALID_VALUES_HEADER.match(line):
            continue

        end = start + 1
        while end < len(lines) and BULLET_LINE.match(lines[end]):
            end += 1

        bullets = lines[start + 1:end]
        if not bullets:
            return lines, None

        values: List[Any] = []
        for bullet in bullets:
            match = VALID_VALUE_ITEM.match(bullet)
            if not match:
                return lines, None
            try:
                value = doc_types.coerce_value(match.group(1), doc_type)
            except ValueError:
                return lines, None
            values.append(value)

        return lines[:start] + lines[end:], values

    return lines, None


def _extract_bounds(
    lines: List[str], doc_type: str
) -> Tuple[List[str], Dict[str, Any]]:
    remaining: List[str] = []
    bounds: Dict[str, Any] = {}
    tag = doc_types.normalize_doc_type(doc_type)

    for line in lines:
        match = BOUND_LINE.match(line)
        if not match:
            remaining.append(line)
            continue

        keyword = match.group(1).lower()
        if keyword in ("minimum", "maximum") and tag not in _NUMERIC_TAGS:
            remaining.append(line)
            continue

        try:
            value = doc_types.coerce_value(match.group(2), tag)
        except ValueError:
            remaining.append(line)
            continue

        bounds[keyword] = value

    return remaining, bounds


def _extract_at_most(text: str, doc_type: str) -> Tuple[str, Dict[str, Any]]:
    if doc_types.normalize_doc_type(doc_type) not in _NUMERIC_TAGS:
        return text, {}

    match = AT_MOST_CAPPED.search(text)
    if not match:
        return text, {}

    default, cap = int(match.group(1)), int(match.group(2))
    if default > cap:
        return text, {}

    residual = (text[:match.start()] + text[match.end():]).strip()
    return residual, {"default": default, "minimum": 1, "maximum": cap}


def _clean_description(lines: List[str]) -> Optional[str]:
    text = "\n".join(lines)
    text = re.sub(r"\n{3,}", "\n\n", text).strip()
    return text or None


def mine_parameter_constraints(help_text: str, doc_type: str) -> Dict[str, Any]:
    """
    Schema fragment for a parameter: the declared type plus every
    constraint recovered from its help text, and the leftover text
    as description.
    """
    schema = doc_types.base_schema(doc_type)
    lines = (help_text or "").splitlines()

    lines, enum = _extract_valid_values(lines, doc_type)
    lines, bounds = _extract_bounds(lines, doc_type)
    residual, at_most = _extract_at_most("\n".join(lines), doc_type)

    if enum:
        schema["enum"] = enum

    # Explicit bound lines win over the combined idiom
    for key, value in {**at_most, **bounds}.items():
        schema[key] = value

    if "minimum" in schema and "maximum" in schema and schema["minimum"] > schema["maximum"]:
        # Contradictory bounds are dropped together
        schema.pop("minimum")
        schema.pop("maximum")

    description = _clean_description(residual.splitlines())
    if description:
        schema["description"] = description

    return schema
