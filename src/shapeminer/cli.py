import argparse
import os
import shutil
from collections import Counter
from typing import Any, Dict

from shapeminer.canonical.dialect import SchemaDialect
from shapeminer.execution.config_executor import ConfigExecutor, save_outputs
from shapeminer.router import route


class C:
    RESET = "\033[0m"
    BOLD = "\033[1m"
    DIM = "\033[2m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"


def cprint(text: str, color: str = C.RESET, bold: bool = False):
    prefix = (C.BOLD if bold else "") + color
    print(f"{prefix}{text}{C.RESET}")


def _clean_output_dir(path: str) -> None:
    if not os.path.isdir(path):
        return
    for name in os.listdir(path):
        full = os.path.join(path, name)
        if os.path.isfile(full) or os.path.islink(full):
            os.remove(full)
        elif os.path.isdir(full):
            shutil.rmtree(full)


def _build_payload_from_args(args: argparse.Namespace) -> Dict[str, Any]:
    document = {"api_key_header": args.api_key_header}
    if args.title:
        document["title"] = args.title
    if args.servers:
        document["servers"] = args.servers

    return {
        "spec_file": args.spec,
        "samples_dir": args.samples,
        "dialect": args.dialect,
        "output": args.output,
        "endpoints": args.endpoint,
        "document": document,
        "user_id": args.user_id,
    }


def _print_diagnostics(diagnostics):
    if not diagnostics:
        cprint("[INFO] No synthesis warnings", C.DIM)
        return

    counts = Counter(d["kind"] for d in diagnostics)
    cprint(f"\n[WARNING] {len(diagnostics)} synthesis warnings", C.YELLOW, bold=True)
    for kind, count in sorted(counts.items()):
        cprint(f"  {kind}: {count}", C.YELLOW)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Synthesize OpenAPI schemas from recorded API responses")

    parser.add_argument("--config", help="Path to YAML config file")
    parser.add_argument("--spec", help="Declaration file (YAML or JSON)")
    parser.add_argument("--samples", help="Directory of recorded response bodies")
    parser.add_argument(
        "--dialect",
        default=SchemaDialect.NULLABLE_FLAG,
        choices=[SchemaDialect.NULLABLE_FLAG, SchemaDialect.NULL_UNION],
        help="Nullability encoding",
    )
    parser.add_argument(
        "--output",
        default="ALL_FORMATS",
        choices=["JSON", "YAML", "ALL_FORMATS"],
        help="Output type",
    )
    parser.add_argument("--endpoint", action="append", help="Only convert this endpoint (repeatable)")
    parser.add_argument("--title", help="Document title override")
    parser.add_argument("--servers", nargs="*", help="Server URLs")
    parser.add_argument("--api-key-header", default="API-Key")

    parser.add_argument("--output-dir", default="artifacts")
    parser.add_argument("--clean-output-dir", action="store_true")
    parser.add_argument("--user-id", default="cli_user")
    return parser


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.config and not (args.spec and args.samples):
        parser.error("either --config or both --spec and --samples are required")

    try:
        cprint("\n[START] Schema synthesis started", C.BLUE, bold=True)

        if args.config:
            executor = ConfigExecutor(args.config)
            output_dir = executor.output_dir
            if args.clean_output_dir:
                _clean_output_dir(output_dir)
            result = executor.execute()
        else:
            output_dir = args.output_dir
            os.makedirs(output_dir, exist_ok=True)
            if args.clean_output_dir:
                _clean_output_dir(output_dir)
            result = route(_build_payload_from_args(args))
            save_outputs(result, output_dir)

        cprint(f"[INFO] Endpoints={len(result['endpoints'])}  Dialect={result['dialect']}", C.DIM)
        _print_diagnostics(result.get("diagnostics", []))

        cprint(f"\n[DONE] Artifacts written to: {output_dir}", C.GREEN, bold=True)
        cprint("[COMPLETE] Schema synthesis completed", C.GREEN, bold=True)

    except Exception as e:
        cprint("\n[FAILED] Schema synthesis failed.", C.RED, bold=True)
        cprint(str(e), C.RED)
        raise SystemExit(1)


if __name__ == "__main__":
    main()
