import json
import os
from typing import Any, Dict, List

import yaml

from shapeminer.canonical.declaration import ApiDeclaration, EndpointSpec
from shapeminer.canonical.field_spec import FieldSpec, GroupField, PrimitiveField
from shapeminer.utils.exceptions import SpecLoadError


class SpecLoader:
    """
    Reads a YAML or JSON declaration file into an ApiDeclaration.

    Expected layout:

        title: Example API
        version: "1.0"
        servers: [https://api.example.com]
        endpoints:
          - name: user_info
            path: /user/info
            method: GET
            parameters:
              - {name: user_id, type: numeric, help: "..."}
            fields:
              - name: user
                help: "..."
                fields:
                  - {name: id, type: numeric}

    A field with `fields` is a group; any other field needs a `type`.
    """

    SUPPORTED_EXTENSIONS = {".yaml", ".yml", ".json"}

    def __init__(self, file_path: str):
        self.file_path = file_path

    # ==================================================
    # ENTRYPOINT
    # ==================================================

    def load(self) -> ApiDeclaration:
        raw = self._read()

        if not isinstance(raw, dict):
            raise SpecLoadError("Declaration root must be a mapping")

        endpoints_raw = raw.get("endpoints")
        if not isinstance(endpoints_raw, list) or not endpoints_raw:
            raise SpecLoadError("Declaration must list at least one endpoint")

        endpoints = [self._parse_endpoint(e) for e in endpoints_raw]

        names = [e.name for e in endpoints]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            raise SpecLoadError(f"Duplicate endpoint names: {duplicates}")

        return ApiDeclaration(
            title=str(raw.get("title") or "API"),
            version=str(raw.get("version") or "1.0.0"),
            description=raw.get("description"),
            servers=[str(s) for s in raw.get("servers") or []],
            endpoints=endpoints,
        )

    # ==================================================
    # PARSING
    # ==================================================

    def _parse_endpoint(self, raw: Any) -> EndpointSpec:
        if not isinstance(raw, dict):
            raise SpecLoadError(f"Endpoint entry must be a mapping, got: {raw!r}")

        path = raw.get("path")
        if not path:
            raise SpecLoadError(f"Endpoint is missing 'path': {raw!r}")

        name = raw.get("name") or path.strip("/").replace("/", "_")

        parameters = []
        for p in raw.get("parameters") or []:
            spec = self._parse_field(p, where=f"{name} parameters")
            if not isinstance(spec, PrimitiveField):
                raise SpecLoadError(
                    f"Parameter '{spec.name}' of '{name}' must be primitive"
                )
            parameters.append(spec)

        fields = [
            self._parse_field(f, where=name)
            for f in raw.get("fields") or []
        ]
        self._check_unique(fields, where=name)

        return EndpointSpec(
            name=str(name),
            path=str(path),
            method=str(raw.get("method") or "GET").upper(),
            description=raw.get("description"),
            parameters=tuple(parameters),
            fields=tuple(fields),
        )

    def _parse_field(self, raw: Any, where: str) -> FieldSpec:
        if not isinstance(raw, dict):
            raise SpecLoadError(f"Field entry in '{where}' must be a mapping")

        name = raw.get("name")
        if not name:
            raise SpecLoadError(f"Field in '{where}' is missing 'name'")

        common: Dict[str, Any] = {
            "name": str(name),
            "help_text": str(raw.get("help") or ""),
            "deprecated": bool(raw.get("deprecated", False)),
            "deprecated_text": str(raw.get("deprecated_text") or ""),
        }

        if "fields" in raw:
            children_raw = raw.get("fields") or []
            if not isinstance(children_raw, list):
                raise SpecLoadError(f"'fields' of '{where}.{name}' must be a list")
            children = [
                self._parse_field(c, where=f"{where}.{name}")
                for c in children_raw
            ]
            self._check_unique(children, where=f"{where}.{name}")
            return GroupField(fields=tuple(children), **common)

        doc_type = raw.get("type")
        if not doc_type:
            raise SpecLoadError(f"Field '{where}.{name}' needs 'type' or 'fields'")

        return PrimitiveField(doc_type=str(doc_type), **common)

    @staticmethod
    def _check_unique(fields: List[FieldSpec], where: str):
        seen = set()
        for f in fields:
            if f.name in seen:
                raise SpecLoadError(f"Duplicate field '{f.name}' in '{where}'")
            seen.add(f.name)

    # ==================================================
    # FILE READER
    # ==================================================

    def _read(self) -> Any:
        if not os.path.exists(self.file_path):
            raise SpecLoadError(f"Declaration file not found: {self.file_path}")

        _, ext = os.path.splitext(self.file_path)
        ext = ext.lower()
        if ext not in self.SUPPORTED_EXTENSIONS:
            raise SpecLoadError(
                f"Unsupported declaration format: {ext or '<none>'}. "
                f"Supported formats: {sorted(self.SUPPORTED_EXTENSIONS)}"
            )

        with open(self.file_path, "r", encoding="utf-8-sig") as f:
            try:
                if ext == ".json":
                    return json.load(f)
                return yaml.safe_load(f)
            except (json.JSONDecodeError, yaml.YAMLError) as e:
                raise SpecLoadError(
                    f"Could not parse declaration {self.file_path}: {e}"
                ) from e
