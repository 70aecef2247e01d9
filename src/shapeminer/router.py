from typing import Dict, Optional

# ---------------- Inputs ----------------
from shapeminer.adapters.spec_loader import SpecLoader
from shapeminer.adapters.corpus_loader import CorpusLoader

# ---------------- Synthesis ----------------
from shapeminer.canonical.dialect import SchemaDialect
from shapeminer.inference.context import SynthesisContext
from shapeminer.observability.diagnostics import Diagnostics

# ---------------- Outputs ----------------
from shapeminer.outputs.openapi_document import OpenAPIDocumentBuilder
from shapeminer.outputs.exporters import JSONDocumentExporter, YAMLDocumentExporter

# ---------------- Observability ----------------
from shapeminer.observability.logger import (log_event, generate_request_id, RequestTimer,)
from shapeminer.observability.audit_logger import AuditLogger
from shapeminer.observability.identity import extract_requester


OUTPUT_TYPES = {"JSON", "YAML", "ALL_FORMATS"}
REQUIRED_INPUTS = ("spec_file", "samples_dir")


# ==========================================================
# ROUTER
# ==========================================================
def route(payload: Dict, headers: Optional[Dict[str, str]] = None) -> Dict:
    """
    Synthesis main entry point.

    Flow:
    Declaration + Corpus -> Field synthesis (per endpoint) ->
    OpenAPI document -> Exports
    """

    request_id = generate_request_id()
    audit_logger = AuditLogger()
    user_id = extract_requester(headers, payload)
    timer = RequestTimer()

    spec_file = payload.get("spec_file")

    log_event("SCHEMA_SYNTHESIS_STARTED", {
        "request_id": request_id,
        "user_id": user_id,
        "spec_file": spec_file,
        "samples_dir": payload.get("samples_dir"),
    })

    try:
        # --------------------------------------------------
        # Required inputs
        # --------------------------------------------------
        missing = [key for key in REQUIRED_INPUTS if not payload.get(key)]
        if missing:
            raise ValueError(f"Missing required input: {', '.join(missing)}")

        samples_dir = payload["samples_dir"]

        dialect = payload.get("dialect", SchemaDialect.NULLABLE_FLAG)
        if not SchemaDialect.is_valid(dialect):
            raise ValueError(f"Invalid dialect: {dialect}")

        output_type = str(payload.get("output", "ALL_FORMATS")).upper()
        if output_type not in OUTPUT_TYPES:
            raise ValueError(f"Invalid output: {output_type}")

        document_cfg = payload.get("document") or {}

        # --------------------------------------------------
        # Phase 1 – Declaration + corpus loading
        # --------------------------------------------------
        declaration = SpecLoader(spec_file).load()

        selected = payload.get("endpoints")
        if selected:
            unknown = [n for n in selected if declaration.get_endpoint(n) is None]
            if unknown:
                raise ValueError(f"Unknown endpoints requested: {unknown}")
            declaration.endpoints = [
                e for e in declaration.endpoints if e.name in set(selected)
            ]

        corpus_loader = CorpusLoader(samples_dir)
        corpora = {
            endpoint.name: corpus_loader.load(endpoint.name)
            for endpoint in declaration.endpoints
        }

        # --------------------------------------------------
        # Phase 2 – Synthesis + document assembly
        # --------------------------------------------------
        diagnostics = Diagnostics(request_id=request_id)
        ctx = SynthesisContext(dialect=dialect, diagnostics=diagnostics)

        builder = OpenAPIDocumentBuilder(
            declaration,
            ctx,
            api_key_header=document_cfg.get("api_key_header", "API-Key"),
            title=document_cfg.get("title"),
            version=document_cfg.get("version"),
            servers=document_cfg.get("servers"),
        )
        document = builder.build(corpora)

        # --------------------------------------------------
        # Phase 3 – Outputs
        # --------------------------------------------------
        response = {
            "status": "SUCCESS",
            "request_id": request_id,
            "dialect": dialect,
            "endpoints": [e.name for e in declaration.endpoints],
            "samples": {name: len(bodies) for name, bodies in corpora.items()},
            "diagnostics": diagnostics.to_list(),
        }

        if output_type in ("JSON", "ALL_FORMATS"):
            response["document_json"] = JSONDocumentExporter(document).export()

        if output_type in ("YAML", "ALL_FORMATS"):
            response["document_yaml"] = YAMLDocumentExporter(document).export_to_string()

        # --------------------------------------------------
        # Audit + completion
        # --------------------------------------------------
        audit_logger.persist(audit_logger.build_record(
            request_id=request_id,
            user_id=user_id,
            action="SCHEMA_SYNTHESIS",
            spec_file=spec_file,
            endpoints=len(declaration.endpoints),
            dialect=dialect,
            diagnostic_counts=diagnostics.counts(),
        ))

        log_event("SCHEMA_SYNTHESIS_COMPLETED", {
            "request_id": request_id,
            "endpoints": len(declaration.endpoints),
            "duration_seconds": timer.duration(),
            "diagnostics": diagnostics.counts(),
        })

        return response

    except Exception as e:
        log_event("SCHEMA_SYNTHESIS_FAILED", {
            "request_id": request_id,
            "spec_file": spec_file,
            "error": str(e),
            "duration_seconds": timer.duration(),
        })
        raise
