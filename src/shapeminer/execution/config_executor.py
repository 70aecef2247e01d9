import json
import os
from typing import Dict

import yaml

from shapeminer.router import route


class ConfigExecutor:
    """
    Executes a synthesis run described by a YAML configuration:

        spec_file: api/declaration.yaml
        samples_dir: api/samples
        dialect: nullable-flag
        output: ALL_FORMATS
        output_dir: outputs
        endpoints: [user_info]        # optional subset
        document:
          title: Example API
          servers: [https://api.example.com]
          api_key_header: API-Key

    Relative paths are resolved against the config file's directory.
    """

    def __init__(self, config_path: str):
        self.config_path = config_path
        self.base_dir = os.path.dirname(os.path.abspath(config_path))
        self.config = self._load_config()

    # ------------------------------------------
    # Load YAML
    # ------------------------------------------
    def _load_config(self) -> Dict:
        if not os.path.exists(self.config_path):
            raise FileNotFoundError(f"Config file not found: {self.config_path}")

        with open(self.config_path, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        if not isinstance(config, dict):
            raise ValueError(f"Config root must be a mapping: {self.config_path}")
        return config

    def _resolve(self, path: str) -> str:
        if not path or os.path.isabs(path):
            return path
        return os.path.join(self.base_dir, path)

    # ------------------------------------------
    # Build Router Payload
    # ------------------------------------------
    def build_payload(self) -> Dict:
        cfg = self.config

        return {
            "spec_file": self._resolve(cfg.get("spec_file")),
            "samples_dir": self._resolve(cfg.get("samples_dir")),
            "dialect": cfg.get("dialect", "nullable-flag"),
            "output": cfg.get("output", "ALL_FORMATS"),
            "endpoints": cfg.get("endpoints"),
            "document": cfg.get("document") or {},
            "user_id": cfg.get("user_id", "config_executor"),
        }

    @property
    def output_dir(self) -> str:
        return self._resolve(self.config.get("output_dir", "outputs"))

    # ------------------------------------------
    # Execute Pipeline
    # ------------------------------------------
    def execute(self) -> Dict:
        result = route(self.build_payload())
        save_outputs(result, self.output_dir)
        return result


def save_outputs(result: Dict, output_dir: str):
    os.makedirs(output_dir, exist_ok=True)

    if "document_json" in result:
        with open(os.path.join(output_dir, "openapi.json"), "w", encoding="utf-8") as f:
            json.dump(result["document_json"], f, indent=2)

    if "document_yaml" in result:
        with open(os.path.join(output_dir, "openapi.yaml"), "w", encoding="utf-8") as f:
            f.write(result["document_yaml"])

    with open(os.path.join(output_dir, "diagnostics.json"), "w", encoding="utf-8") as f:
        json.dump(result.get("diagnostics", []), f, indent=2)
