import copy

from shapeminer.canonical.field_spec import GroupField, PrimitiveField
from shapeminer.inference.group import synthesize_group
from shapeminer.observability.diagnostics import DiagnosticKind


PERSON_OBJECT = {
    "type": "object",
    "properties": {"id": {"type": "string"}, "name": {"type": "string"}},
    "required": ["id", "name"],
}


def test_plain_objects_synthesize_as_object(ctx, person) -> None:
    corpus = [{"id": "a", "name": "x"}, {"id": "b", "name": "y"}]
    assert synthesize_group(person, corpus, ctx) == PERSON_OBJECT


def test_id_keyed_maps_synthesize_as_record(ctx, person) -> None:
    corpus = [{"101": {"id": "a", "name": "x"}}, {"202": {"id": "b", "name": "y"}}]

    assert synthesize_group(person, corpus, ctx) == {
        "type": "object",
        "additionalProperties": PERSON_OBJECT,
    }


def test_array_and_null_fold_into_nullable_array(ctx, person) -> None:
    corpus = [[{"id": "a", "name": "x"}], None]

    assert synthesize_group(person, corpus, ctx) == {
        "type": "array",
        "items": PERSON_OBJECT,
        "nullable": True,
    }
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.MULTIPLE_SHAPES)) == 0


def test_array_and_null_in_null_union(union_ctx, person) -> None:
    corpus = [[{"id": "a", "name": "x"}], None]

    assert synthesize_group(person, corpus, union_ctx) == {
        "type": ["array", "null"],
        "items": PERSON_OBJECT,
    }


def test_heterogeneous_shapes_keep_stable_order(ctx, person) -> None:
    corpus = [
        {"7": {"id": "c", "name": "z"}},
        {"id": "a", "name": "x"},
        None,
        [{"id": "b", "name": "y"}],
    ]

    schema = synthesize_group(person, corpus, ctx)

    assert schema == {
        "oneOf": [
            {"type": "array", "items": PERSON_OBJECT},
            PERSON_OBJECT,
            {"type": "object", "additionalProperties": PERSON_OBJECT},
        ],
        "nullable": True,
    }
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.MULTIPLE_SHAPES)) == 1


def test_heterogeneous_shapes_null_union_appends_null_last(union_ctx, person) -> None:
    corpus = [None, [{"id": "b", "name": "y"}], {"id": "a", "name": "x"}]
    schema = synthesize_group(person, corpus, union_ctx)

    assert [branch.get("type") for branch in schema["oneOf"]] == ["array", "object", "null"]


def test_nested_arrays_reuse_same_group(ctx, person) -> None:
    corpus = [[[{"id": "a", "name": "x"}]]]

    assert synthesize_group(person, corpus, ctx) == {
        "type": "array",
        "items": {"type": "array", "items": PERSON_OBJECT},
    }


def test_record_of_arrays_reuses_same_group(ctx, person) -> None:
    corpus = [{"team-1": [{"id": "a", "name": "x"}]}]

    assert synthesize_group(person, corpus, ctx) == {
        "type": "object",
        "additionalProperties": {"type": "array", "items": PERSON_OBJECT},
    }


def test_sparse_objects_are_objects_not_records(ctx, person) -> None:
    corpus = [{"id": "a"}, {"name": "y"}]

    schema = synthesize_group(person, corpus, ctx)

    assert schema == PERSON_OBJECT
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.PARTIAL_MATCH)) == 2


def test_unexpected_samples_are_excluded(ctx, person) -> None:
    corpus = ["junk", {"id": "a", "name": "x"}]

    assert synthesize_group(person, corpus, ctx) == PERSON_OBJECT
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.UNEXPECTED_VALUE)) == 1


def test_no_evidence_returns_empty_schema(ctx, person) -> None:
    assert synthesize_group(person, [], ctx) == {}
    assert synthesize_group(person, [None], ctx) == {}
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.INSUFFICIENT_EVIDENCE)) == 2


def test_extra_fields_are_never_required(ctx) -> None:
    group = GroupField(
        name="user",
        fields=(
            PrimitiveField(name="id", doc_type="numeric"),
            PrimitiveField(name="nickname", doc_type="string", help_text="Nickname (extra field)"),
        ),
    )
    corpus = [{"id": i, "nickname": f"n{i}"} for i in range(10)]

    schema = synthesize_group(group, corpus, ctx)

    assert schema["required"] == ["id"]
    assert schema["properties"]["nickname"] == {"type": "string", "description": "Nickname"}


def test_nested_groups_and_null_children(ctx) -> None:
    group = GroupField(
        name="user",
        fields=(
            PrimitiveField(name="id", doc_type="numeric"),
            GroupField(
                name="stats",
                fields=(PrimitiveField(name="level", doc_type="numeric"),),
            ),
        ),
    )
    corpus = [
        {"id": 1, "stats": {"level": 3}},
        {"id": 2, "stats": None},
    ]

    schema = synthesize_group(group, corpus, ctx)

    assert schema["properties"]["stats"] == {
        "type": "object",
        "properties": {"level": {"type": "integer"}},
        "required": ["level"],
        "nullable": True,
    }


def test_diagnostic_paths_follow_nesting(ctx, person) -> None:
    synthesize_group(person, [{"x": {"id": 1}}], ctx.child("team"))

    paths = {d.path for d in ctx.diagnostics}
    assert "team{}" in paths


def test_synthesis_is_repeatable_and_pure(ctx, person) -> None:
    corpus = [None, [{"id": "a", "name": "x"}], {"9": {"id": "b", "name": "y"}}]
    snapshot = copy.deepcopy(corpus)

    first = synthesize_group(person, corpus, ctx)
    second = synthesize_group(person, corpus, ctx)

    assert first == second
    assert corpus == snapshot
