from typing import Any, Dict, List

from shapeminer.canonical.field_spec import GroupField
from shapeminer.canonical.shape import Shape
from shapeminer.inference.classifier import classify
from shapeminer.inference.context import SynthesisContext
from shapeminer.inference.merge import merge_shapes
from shapeminer.observability.diagnostics import DiagnosticKind


def _synthesize_object(
    group: GroupField,
    objects: List[dict],
    ctx: SynthesisContext,
) -> Dict[str, Any]:
    """
    Object schema over the declared fields, each child synthesized
    from the values found under its name.
    """
    # dispatcher recurses back into this module
    from shapeminer.inference.dispatcher import synthesize_field

    properties: Dict[str, Any] = {}
    required: List[str] = []

    for child in group.fields:
        sub_corpus = [obj[child.name] for obj in objects if child.name in obj]
        name, schema = synthesize_field(child, sub_corpus, ctx.child(child.name))
        properties[name] = schema

        # Required-ness is declared, never inferred from frequency
        if not child.is_extra:
            required.append(name)

    node: Dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        node["required"] = required
    return node


def synthesize_group(
    group: GroupField,
    samples: List[Any],
    ctx: SynthesisContext,
) -> Dict[str, Any]:
    """
    Recursively build the schema of a declared group.

    Samples are classified and partitioned into array, object and
    record buckets. Arrays and records recurse with the SAME group
    over their pooled elements/values: nesting in the samples does
    not change the declared shape.
    """
    arrays: List[list] = []
    objects: List[dict] = []
    records: List[dict] = []
    saw_null = False

    for sample in samples:
        shape = classify(group, sample, ctx)

        if shape is Shape.NULL:
            saw_null = True
        elif shape is Shape.ARRAY_OF_GROUP:
            arrays.append(sample)
        elif shape.is_object:
            objects.append(sample)
        elif shape is Shape.RECORD:
            records.append(sample)
        # Shape.UNEXPECTED is already reported by the classifier

    branches: List[Dict[str, Any]] = []

    if arrays:
        elements = [item for arr in arrays for item in arr]
        items = synthesize_group(group, elements, ctx.items())
        branches.append({"type": "array", "items": items})

    if objects:
        branches.append(_synthesize_object(group, objects, ctx))

    if records:
        values = [value for rec in records for value in rec.values()]
        additional = synthesize_group(group, values, ctx.values())
        branches.append({"type": "object", "additionalProperties": additional})

    if not branches:
        ctx.warn(
            DiagnosticKind.INSUFFICIENT_EVIDENCE,
            "not enough tests to infer type",
        )

    return merge_shapes(branches, saw_null, ctx)
