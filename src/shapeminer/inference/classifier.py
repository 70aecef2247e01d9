from typing import Any

from shapeminer.canonical.field_spec import GroupField
from shapeminer.canonical.shape import Shape
from shapeminer.inference.context import SynthesisContext
from shapeminer.observability.diagnostics import DiagnosticKind


def _values_are_group_instances(sample: dict, declared: frozenset) -> bool:
    """
    True when every value is itself a map holding all declared names,
    i.e. the sample is a record keyed by identifiers.
    """
    if not sample:
        return False
    return all(
        isinstance(value, dict) and declared.issubset(value)
        for value in sample.values()
    )


def classify(group: GroupField, sample: Any, ctx: SynthesisContext) -> Shape:
    """
    Decide which structural shape `sample` takes for `group`.

    - null                                   -> NULL
    - list                                   -> ARRAY_OF_GROUP
    - non-map scalar                         -> UNEXPECTED
    - map with every declared name           -> EXTENDED_OBJECT
    - map with some declared names, whose
      values are not all group instances     -> FIXED_OBJECT
    - any other map                          -> RECORD
    """
    if sample is None:
        return Shape.NULL

    if isinstance(sample, list):
        return Shape.ARRAY_OF_GROUP

    if not isinstance(sample, dict):
        ctx.warn(
            DiagnosticKind.UNEXPECTED_VALUE,
            f"expected an object or list for group '{group.name}', "
            f"got {type(sample).__name__}",
        )
        return Shape.UNEXPECTED

    declared = group.field_names
    keys = sample.keys()

    if declared.issubset(keys):
        return Shape.EXTENDED_OBJECT

    present = declared.intersection(keys)
    if present and not _values_are_group_instances(sample, declared):
        missing = sorted(declared.difference(keys))
        ctx.warn(
            DiagnosticKind.PARTIAL_MATCH,
            f"object matched {len(present)}/{len(declared)} declared fields; "
            f"missing: {', '.join(missing)}",
        )
        return Shape.FIXED_OBJECT

    return Shape.RECORD
