from typing import Any, Dict, List, Tuple

from shapeminer.canonical.field_spec import FieldSpec, GroupField, PrimitiveField
from shapeminer.inference.context import SynthesisContext
from shapeminer.inference.group import synthesize_group
from shapeminer.inference.primitive import synthesize_primitive


def _attach_docs(schema: Dict[str, Any], spec: FieldSpec) -> Dict[str, Any]:
    node = dict(schema)

    description = spec.description
    if spec.deprecated:
        node["deprecated"] = True
        if spec.deprecated_text:
            note = f"Deprecated: {spec.deprecated_text.strip()}"
            description = f"{description}\n\n{note}" if description else note

    if description:
        node["description"] = description

    return node


def synthesize_field(
    spec: FieldSpec,
    samples: List[Any],
    ctx: SynthesisContext,
) -> Tuple[str, Dict[str, Any]]:
    """
    Entry point per declared field: route to the group or primitive
    synthesizer and decorate the result with its documentation.
    """
    if not ctx.path:
        ctx = ctx.child(spec.name)

    if isinstance(spec, GroupField):
        schema = synthesize_group(spec, samples, ctx)
    elif isinstance(spec, PrimitiveField):
        schema = synthesize_primitive(spec.doc_type, samples, ctx)
    else:
        raise TypeError(f"Unsupported field spec: {type(spec).__name__}")

    return spec.name, _attach_docs(schema, spec)
