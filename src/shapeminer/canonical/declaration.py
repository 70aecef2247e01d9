from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from shapeminer.canonical.field_spec import FieldSpec, PrimitiveField


@dataclass(frozen=True)
class EndpointSpec:
    """
    One declared API method: its inputs and the fields under `data`
    in its response.
    """
    name: str
    path: str
    method: str = "GET"
    description: Optional[str] = None
    parameters: Tuple[PrimitiveField, ...] = ()
    fields: Tuple[FieldSpec, ...] = ()


@dataclass
class ApiDeclaration:
    """
    Whole declaration file.

    Lifecycle:
    Loader -> ApiDeclaration -> field synthesis -> OpenAPI document
    """
    title: str
    version: str
    endpoints: List[EndpointSpec]

    description: Optional[str] = None
    servers: List[str] = field(default_factory=list)

    def get_endpoint(self, name: str) -> Optional[EndpointSpec]:
        for endpoint in self.endpoints:
            if endpoint.name == name:
                return endpoint
        return None
