import logging
from dataclasses import dataclass, asdict
from typing import Dict, List

from shapeminer.observability.logger import log_event


class DiagnosticKind:
    INSUFFICIENT_EVIDENCE = "INSUFFICIENT_EVIDENCE"
    MULTIPLE_SHAPES = "MULTIPLE_SHAPES"
    PARTIAL_MATCH = "PARTIAL_MATCH"
    UNEXPECTED_VALUE = "UNEXPECTED_VALUE"


@dataclass(frozen=True)
class Diagnostic:
    """
    Non-fatal synthesis warning tied to a position in the field tree.
    """
    kind: str
    path: str
    message: str

    def to_dict(self) -> Dict[str, str]:
        return asdict(self)


class Diagnostics:
    """
    Side-channel collector for synthesis warnings.

    One collector per run; every warning is kept in order and
    also emitted as a structured log event.
    """

    def __init__(self, request_id: str = None):
        self.request_id = request_id
        self.items: List[Diagnostic] = []

    def warn(self, kind: str, path: str, message: str) -> Diagnostic:
        diagnostic = Diagnostic(kind=kind, path=path, message=message)
        self.items.append(diagnostic)

        payload = diagnostic.to_dict()
        if self.request_id:
            payload["request_id"] = self.request_id
        log_event("SYNTHESIS_WARNING", payload, level=logging.WARNING)
        return diagnostic

    def of_kind(self, kind: str) -> List[Diagnostic]:
        return [d for d in self.items if d.kind == kind]

    def counts(self) -> Dict[str, int]:
        counts: Dict[str, int] = {}
        for d in self.items:
            counts[d.kind] = counts.get(d.kind, 0) + 1
        return counts

    def to_list(self) -> List[Dict[str, str]]:
        return [d.to_dict() for d in self.items]

    def __len__(self) -> int:
        return len(self.items)

    def __iter__(self):
        return iter(self.items)
