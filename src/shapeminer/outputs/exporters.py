import json
from typing import Any, Dict

import yaml


class JSONDocumentExporter:
    """
    Exports an OpenAPI document to JSON.
    """

    def __init__(self, document: Dict[str, Any]):
        self.document = document

    def export(self) -> Dict[str, Any]:
        """
        Return document as JSON-serializable object.
        """
        return self.document

    def export_to_string(self, indent: int = 2) -> str:
        return json.dumps(self.document, indent=indent)

    def export_to_file(self, file_path: str, indent: int = 2):
        with open(file_path, "w", encoding="utf-8") as f:
            json.dump(self.document, f, indent=indent)


class YAMLDocumentExporter:
    """
    Exports an OpenAPI document to YAML, keeping key order.
    """

    def __init__(self, document: Dict[str, Any]):
        self.document = document

    def export_to_string(self) -> str:
        return yaml.safe_dump(
            self.document,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )

    def export_to_file(self, file_path: str):
        with open(file_path, "w", encoding="utf-8") as f:
            f.write(self.export_to_string())
