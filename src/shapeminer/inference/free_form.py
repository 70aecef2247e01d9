from typing import Any, Dict, List

from shapeminer.inference.context import SynthesisContext
from shapeminer.inference.merge import merge_shapes


def _json_kind(value: Any) -> str:
    # bool before int: bool is an int subclass
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "boolean"
    if isinstance(value, int):
        return "integer"
    if isinstance(value, float):
        return "number"
    if isinstance(value, list):
        return "array"
    if isinstance(value, dict):
        return "object"
    return "string"


def infer_free_form(values: List[Any], ctx: SynthesisContext) -> Dict[str, Any]:
    """
    Unconstrained JSON-value inference with no declaration to lean on.

    Used for the values of associative arrays. Values are bucketed by
    JSON kind; arrays and maps recurse over their pooled contents and
    all buckets are merged with the same policy as declared groups.
    """
    buckets: Dict[str, List[Any]] = {}
    for value in values:
        buckets.setdefault(_json_kind(value), []).append(value)

    saw_null = "null" in buckets
    branches: List[Dict[str, Any]] = []

    if "array" in buckets:
        elements = [item for arr in buckets["array"] for item in arr]
        items = infer_free_form(elements, ctx.items()) if elements else {}
        branches.append({"type": "array", "items": items})

    if "object" in buckets:
        members = [v for obj in buckets["object"] for v in obj.values()]
        node: Dict[str, Any] = {"type": "object"}
        node["additionalProperties"] = (
            infer_free_form(members, ctx.values()) if members else True
        )
        branches.append(node)

    if "integer" in buckets or "number" in buckets:
        # Mixed ints and floats widen to number
        branches.append({"type": "number" if "number" in buckets else "integer"})

    if "string" in buckets:
        branches.append({"type": "string"})

    if "boolean" in buckets:
        branches.append({"type": "boolean"})

    return merge_shapes(branches, saw_null, ctx)
