import glob
import json
import logging
import os
from typing import Any, List

from shapeminer.observability.logger import log_event
from shapeminer.utils.exceptions import CorpusLoadError


def _handle_json_duplicates(pairs):
    result = {}
    seen_counts = {}
    for key, value in pairs:
        if key in seen_counts:
            seen_counts[key] += 1
            result[f"{key}_{seen_counts[key]}"] = value
        else:
            seen_counts[key] = 1
            result[key] = value
    return result

def _reject_nonstandard_constant(value: str):
    raise ValueError(f"Invalid JSON constant: {value}")

def _loads(text: str) -> Any:
    return json.loads(
        text,
        object_pairs_hook=_handle_json_duplicates,
        parse_constant=_reject_nonstandard_constant,
    )


class CorpusLoader:
    """
    Loads recorded response bodies for endpoints.

    Layout under `samples_dir`:
    - <endpoint>/*.json   one response body per file
    - <endpoint>.jsonl    one response body per line

    Unreadable files and lines are skipped with a log event; an
    endpoint without recordings simply has an empty corpus.
    """

    def __init__(self, samples_dir: str):
        if not samples_dir or not os.path.isdir(samples_dir):
            raise CorpusLoadError(f"Samples directory not found: {samples_dir}")
        self.samples_dir = samples_dir

    # ==================================================
    # ENTRYPOINT
    # ==================================================

    def load(self, endpoint_name: str) -> List[Any]:
        bodies: List[Any] = []

        directory = os.path.join(self.samples_dir, endpoint_name)
        for path in sorted(glob.glob(os.path.join(directory, "*.json"))):
            body = self._read_json_file(path)
            if body is not None:
                bodies.append(body)

        jsonl_path = os.path.join(self.samples_dir, f"{endpoint_name}.jsonl")
        if os.path.isfile(jsonl_path):
            bodies.extend(self._read_jsonl_file(jsonl_path))

        log_event("CORPUS_LOADED", {
            "endpoint": endpoint_name,
            "bodies": len(bodies),
        }, level=logging.DEBUG)

        return bodies

    # ==================================================
    # READERS
    # ==================================================

    def _read_json_file(self, path: str) -> Any:
        with open(path, "rb") as f:
            data = f.read()

        try:
            raw = data.decode("utf-8-sig").strip()
            if not raw:
                self._skipped(path, "empty file")
                return None
            return _loads(raw)
        except ValueError as e:
            # UnicodeDecodeError and json.JSONDecodeError are ValueErrors too
            self._skipped(path, str(e))
            return None

    def _read_jsonl_file(self, path: str) -> List[Any]:
        bodies = []
        with open(path, "rb") as f:
            for line_no, raw_line in enumerate(f, start=1):
                if not raw_line.strip():
                    continue
                try:
                    line = raw_line.decode("utf-8-sig").strip()
                    bodies.append(_loads(line))
                except ValueError as e:
                    self._skipped(f"{path}:{line_no}", str(e))
        return bodies

    @staticmethod
    def _skipped(location: str, reason: str):
        log_event("CORPUS_FILE_SKIPPED", {
            "location": location,
            "reason": reason,
        }, level=logging.WARNING)


def project_data(bodies: List[Any]) -> List[dict]:
    """
    `data` subtree of every response body that carries one.
    """
    return [
        body["data"]
        for body in bodies
        if isinstance(body, dict) and isinstance(body.get("data"), dict)
    ]


def field_corpus(datas: List[dict], field_name: str) -> List[Any]:
    """
    Samples observed under one top-level field name.
    """
    return [data[field_name] for data in datas if field_name in data]
