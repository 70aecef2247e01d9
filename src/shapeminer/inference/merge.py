from typing import Any, Dict, List

from shapeminer.canonical.dialect import SchemaDialect
from shapeminer.inference.context import SynthesisContext
from shapeminer.observability.diagnostics import DiagnosticKind


def make_nullable(schema: Dict[str, Any], dialect: str) -> Dict[str, Any]:
    """
    Return a copy of `schema` that also accepts null.

    NULLABLE_FLAG adds `nullable: true`.
    NULL_UNION widens a single `type` into a list, appends a
    `{type: null}` alternative to `oneOf`, and adds null to `enum`.
    An empty schema already accepts null and is returned unchanged.
    """
    if not schema:
        return {}

    node = dict(schema)

    if dialect == SchemaDialect.NULLABLE_FLAG:
        node["nullable"] = True
        return node

    if "oneOf" in node:
        branches = list(node["oneOf"])
        if {"type": "null"} not in branches:
            branches.append({"type": "null"})
        node["oneOf"] = branches
        return node

    declared = node.get("type")
    if isinstance(declared, str):
        if declared != "null":
            node["type"] = [declared, "null"]
    elif isinstance(declared, list):
        if "null" not in declared:
            node["type"] = declared + ["null"]
    else:
        # No type to widen; fall back to an explicit union
        return {"oneOf": [node, {"type": "null"}]}

    if "enum" in node and None not in node["enum"]:
        node["enum"] = list(node["enum"]) + [None]

    return node


def merge_shapes(
    branches: List[Dict[str, Any]],
    saw_null: bool,
    ctx: SynthesisContext,
) -> Dict[str, Any]:
    """
    Combine per-shape schemas into one node.

    Branch order is kept as given (array, object, record);
    null is never a structural branch, only a nullability mark.
    """
    if not branches:
        return {}

    if len(branches) == 1:
        node = dict(branches[0])
    else:
        ctx.warn(
            DiagnosticKind.MULTIPLE_SHAPES,
            f"{len(branches)} shapes matched; emitting oneOf",
        )
        node = {"oneOf": list(branches)}

    if saw_null:
        return make_nullable(node, ctx.dialect)
    return node
