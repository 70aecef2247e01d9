import pytest

from shapeminer.canonical.dialect import SchemaDialect
from shapeminer.canonical.field_spec import GroupField, PrimitiveField
from shapeminer.inference.context import SynthesisContext
from shapeminer.observability.diagnostics import Diagnostics


@pytest.fixture
def ctx() -> SynthesisContext:
    return SynthesisContext(dialect=SchemaDialect.NULLABLE_FLAG, diagnostics=Diagnostics())


@pytest.fixture
def union_ctx() -> SynthesisContext:
    return SynthesisContext(dialect=SchemaDialect.NULL_UNION, diagnostics=Diagnostics())


@pytest.fixture
def person() -> GroupField:
    return GroupField(
        name="person",
        help_text="A person",
        fields=(
            PrimitiveField(name="id", doc_type="string"),
            PrimitiveField(name="name", doc_type="string"),
        ),
    )
