from dataclasses import dataclass, field, replace

from shapeminer.canonical.dialect import SchemaDialect
from shapeminer.observability.diagnostics import Diagnostics


@dataclass(frozen=True)
class SynthesisContext:
    """
    Per-run settings threaded through every synthesizer.

    The dialect and the diagnostics collector are shared by all nodes
    of a run; only the path changes while descending.
    """
    dialect: str = SchemaDialect.NULLABLE_FLAG
    diagnostics: Diagnostics = field(default_factory=Diagnostics)
    path: str = ""

    def __post_init__(self):
        if not SchemaDialect.is_valid(self.dialect):
            raise ValueError(f"Invalid schema dialect: {self.dialect}")

    def child(self, name: str) -> "SynthesisContext":
        path = f"{self.path}.{name}" if self.path else name
        return replace(self, path=path)

    def items(self) -> "SynthesisContext":
        return replace(self, path=f"{self.path}[]")

    def values(self) -> "SynthesisContext":
        return replace(self, path=f"{self.path}{{}}")

    def warn(self, kind: str, message: str):
        return self.diagnostics.warn(kind, self.path or "<root>", message)
