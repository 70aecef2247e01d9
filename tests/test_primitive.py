import pytest

from shapeminer.inference.primitive import synthesize_primitive
from shapeminer.observability.diagnostics import DiagnosticKind
from shapeminer.utils.exceptions import UnknownDocTypeError


@pytest.mark.parametrize(
    "doc_type, samples, expected",
    [
        ("string", ["a", "b"], {"type": "string"}),
        ("numeric", [1, 2], {"type": "integer"}),
        ("timestamp", [1729551000], {"type": "integer", "minimum": 0}),
        ("float", [1.5], {"type": "number", "format": "float"}),
        ("boolean", [True, False], {"type": "boolean"}),
        ("object", [{"anything": 1}], {"type": "object"}),
    ],
)
def test_scalar_mapping(ctx, doc_type, samples, expected) -> None:
    assert synthesize_primitive(doc_type, samples, ctx) == expected
    assert len(ctx.diagnostics) == 0


def test_null_sample_marks_nullable(ctx, union_ctx) -> None:
    assert synthesize_primitive("string", ["a", None], ctx) == {
        "type": "string",
        "nullable": True,
    }
    assert synthesize_primitive("string", ["a", None], union_ctx) == {
        "type": ["string", "null"],
    }


def test_list_of_integers_flattens_elements(ctx) -> None:
    schema = synthesize_primitive("list of integers", [[1, 2], [3, None]], ctx)

    assert schema == {
        "type": "array",
        "items": {"type": "integer", "nullable": True},
    }


def test_list_nullability_is_separate_from_elements(ctx) -> None:
    schema = synthesize_primitive("list-of-strings", [["a"], None], ctx)

    assert schema == {
        "type": "array",
        "items": {"type": "string"},
        "nullable": True,
    }


def test_list_with_only_empty_arrays_keeps_declared_element(ctx) -> None:
    schema = synthesize_primitive("list of floats", [[], []], ctx)
    assert schema == {"type": "array", "items": {"type": "number", "format": "float"}}


def test_list_with_scalar_sample_is_reported(ctx) -> None:
    schema = synthesize_primitive("list of booleans", [[True], "yes"], ctx)

    assert schema == {"type": "array", "items": {"type": "boolean"}}
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.UNEXPECTED_VALUE)) == 1


def test_associative_array_infers_values(ctx) -> None:
    samples = [{"a": 1, "b": 2}, {"c": 3}]
    schema = synthesize_primitive("associative-array", samples, ctx)

    assert schema == {"type": "object", "additionalProperties": {"type": "integer"}}


def test_associative_array_mixed_values(ctx) -> None:
    samples = [{"a": "x"}, {"b": None}, {"c": [1, 2.5]}]
    schema = synthesize_primitive("associative array", samples, ctx)

    assert schema == {
        "type": "object",
        "additionalProperties": {
            "oneOf": [
                {"type": "array", "items": {"type": "number"}},
                {"type": "string"},
            ],
            "nullable": True,
        },
    }


def test_associative_array_without_members(ctx) -> None:
    schema = synthesize_primitive("associative array", [{}], ctx)
    assert schema == {"type": "object", "additionalProperties": True}


def test_empty_corpus_is_unconstrained(ctx) -> None:
    assert synthesize_primitive("numeric", [], ctx) == {}

    [warning] = ctx.diagnostics.of_kind(DiagnosticKind.INSUFFICIENT_EVIDENCE)
    assert "not enough tests" in warning.message


def test_only_nulls_keeps_declared_type(ctx) -> None:
    schema = synthesize_primitive("boolean", [None, None], ctx)

    assert schema == {"type": "boolean", "nullable": True}
    assert len(ctx.diagnostics.of_kind(DiagnosticKind.INSUFFICIENT_EVIDENCE)) == 1


@pytest.mark.parametrize("doc_type", ["date", "list of dates", "list of"])
def test_unknown_doc_type_is_fatal(ctx, doc_type) -> None:
    with pytest.raises(UnknownDocTypeError):
        synthesize_primitive(doc_type, ["x"], ctx)


def test_unknown_doc_type_is_fatal_without_samples(ctx) -> None:
    with pytest.raises(UnknownDocTypeError):
        synthesize_primitive("money", [], ctx)
