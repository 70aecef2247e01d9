from typing import Any, Dict, List

from shapeminer.inference import doc_types
from shapeminer.inference.context import SynthesisContext
from shapeminer.inference.free_form import infer_free_form
from shapeminer.inference.merge import make_nullable
from shapeminer.observability.diagnostics import DiagnosticKind


def _synthesize_list(
    element_type: str,
    samples: List[Any],
    ctx: SynthesisContext,
) -> Dict[str, Any]:
    elements: List[Any] = []
    for sample in samples:
        if sample is None:
            continue
        if not isinstance(sample, list):
            ctx.warn(
                DiagnosticKind.UNEXPECTED_VALUE,
                f"expected a list, got {type(sample).__name__}",
            )
            continue
        elements.extend(sample)

    if elements:
        items = synthesize_primitive(element_type, elements, ctx.items())
    else:
        # Only empty lists observed: the declared element type stands
        items = doc_types.base_schema(element_type, ctx.path)

    return {"type": "array", "items": items}


def _synthesize_associative_array(
    samples: List[Any],
    ctx: SynthesisContext,
) -> Dict[str, Any]:
    members: List[Any] = []
    for sample in samples:
        if sample is None:
            continue
        if not isinstance(sample, dict):
            ctx.warn(
                DiagnosticKind.UNEXPECTED_VALUE,
                f"expected a map, got {type(sample).__name__}",
            )
            continue
        members.extend(sample.values())

    additional = infer_free_form(members, ctx.values()) if members else {}
    return {"type": "object", "additionalProperties": additional or True}


def synthesize_primitive(
    doc_type: str,
    samples: List[Any],
    ctx: SynthesisContext,
) -> Dict[str, Any]:
    """
    Schema for a declared primitive tag, refined by observed samples.

    Nullability comes from the samples at this level only: a nullable
    list and nullable list elements are tracked independently.
    Unknown tags raise UnknownDocTypeError.
    """
    tag = doc_types.normalize_doc_type(doc_type)
    element_type = doc_types.list_element_type(tag, ctx.path)

    if not samples:
        # Unknown tags must fail even without samples
        doc_types.base_schema(tag, ctx.path)
        ctx.warn(
            DiagnosticKind.INSUFFICIENT_EVIDENCE,
            "not enough tests to infer type",
        )
        return {}

    non_null = [s for s in samples if s is not None]

    if element_type is not None:
        schema = _synthesize_list(element_type, non_null, ctx)
    elif tag == doc_types.ASSOCIATIVE_ARRAY:
        schema = _synthesize_associative_array(non_null, ctx)
    else:
        schema = doc_types.base_schema(tag, ctx.path)

    if not non_null:
        ctx.warn(
            DiagnosticKind.INSUFFICIENT_EVIDENCE,
            "only null values observed",
        )

    if len(non_null) < len(samples):
        schema = make_nullable(schema, ctx.dialect)

    return schema
