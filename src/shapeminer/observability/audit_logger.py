import uuid
from datetime import datetime, timezone
from typing import Dict

from shapeminer.observability.logger import log_event


class AuditLogger:
    """
    Builds and emits one audit record per synthesis run.
    """

    def build_record(
        self,
        request_id: str,
        user_id: str,
        action: str,
        spec_file: str,
        endpoints: int,
        dialect: str,
        diagnostic_counts: Dict[str, int],
    ) -> Dict:
        return {
            "audit_id": str(uuid.uuid4()),
            "request_id": request_id,
            "user_id": user_id,
            "action": action,
            "spec_file": spec_file,
            "endpoints": endpoints,
            "dialect": dialect,
            "diagnostics": diagnostic_counts,
            "timestamp": datetime.now(timezone.utc).isoformat(),
        }

    def persist(self, record: Dict):
        """
        Structured log output; shipped by whatever collects stdout.
        """
        log_event("AUDIT_EVENT", record)
