from shapeminer.canonical.dialect import SchemaDialect
from shapeminer.inference.merge import make_nullable, merge_shapes
from shapeminer.observability.diagnostics import DiagnosticKind


def test_no_branches_is_unconstrained(ctx) -> None:
    assert merge_shapes([], saw_null=False, ctx=ctx) == {}
    assert merge_shapes([], saw_null=True, ctx=ctx) == {}


def test_single_branch_nullable_flag(ctx) -> None:
    merged = merge_shapes([{"type": "array", "items": {}}], saw_null=True, ctx=ctx)
    assert merged == {"type": "array", "items": {}, "nullable": True}
    assert len(ctx.diagnostics) == 0


def test_single_branch_null_union(union_ctx) -> None:
    merged = merge_shapes([{"type": "object"}], saw_null=True, ctx=union_ctx)
    assert merged == {"type": ["object", "null"]}


def test_multiple_branches_become_one_of(ctx) -> None:
    branches = [{"type": "array", "items": {}}, {"type": "object"}]
    merged = merge_shapes(branches, saw_null=False, ctx=ctx)

    assert merged == {"oneOf": branches}
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.MULTIPLE_SHAPES)) == 1


def test_multiple_branches_with_null(ctx, union_ctx) -> None:
    branches = [{"type": "array", "items": {}}, {"type": "object"}]

    flagged = merge_shapes(branches, saw_null=True, ctx=ctx)
    assert flagged == {"oneOf": branches, "nullable": True}

    unioned = merge_shapes(branches, saw_null=True, ctx=union_ctx)
    assert unioned == {"oneOf": branches + [{"type": "null"}]}


def test_make_nullable_does_not_mutate_input() -> None:
    original = {"type": "string", "enum": ["a", "b"]}
    widened = make_nullable(original, SchemaDialect.NULL_UNION)

    assert widened == {"type": ["string", "null"], "enum": ["a", "b", None]}
    assert original == {"type": "string", "enum": ["a", "b"]}


def test_make_nullable_is_idempotent() -> None:
    once = make_nullable({"type": "integer"}, SchemaDialect.NULL_UNION)
    assert make_nullable(once, SchemaDialect.NULL_UNION) == once


def test_make_nullable_without_type_wraps_in_one_of() -> None:
    node = {"additionalProperties": True}
    assert make_nullable(node, SchemaDialect.NULL_UNION) == {
        "oneOf": [node, {"type": "null"}]
    }
