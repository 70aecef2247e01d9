from typing import Any, Dict, List, Optional

from shapeminer.adapters.corpus_loader import field_corpus, project_data
from shapeminer.canonical.declaration import ApiDeclaration, EndpointSpec
from shapeminer.canonical.dialect import SchemaDialect
from shapeminer.canonical.field_spec import PrimitiveField
from shapeminer.inference.constraint_miner import mine_parameter_constraints
from shapeminer.inference.context import SynthesisContext
from shapeminer.inference.dispatcher import synthesize_field


QUERY_METHODS = {"GET", "DELETE"}
SECURITY_SCHEME_NAME = "ApiKeyAuth"


class OpenAPIDocumentBuilder:
    """
    Assembles an OpenAPI document around synthesized field schemas.

    Responsibilities:
    - Envelope (info, servers, security scheme)
    - One path item per declared endpoint
    - Parameters from documented constraints
    - 200 response wrapping `data` in {status, meta, data}

    DOES NOT:
    - Inspect samples itself (delegated to field synthesis)
    """

    def __init__(
        self,
        declaration: ApiDeclaration,
        ctx: SynthesisContext,
        api_key_header: Optional[str] = "API-Key",
        title: Optional[str] = None,
        version: Optional[str] = None,
        servers: Optional[List[str]] = None,
    ):
        self.declaration = declaration
        self.ctx = ctx
        self.api_key_header = api_key_header
        self.title = title or declaration.title
        self.version = version or declaration.version
        self.servers = servers if servers is not None else declaration.servers

    # --------------------------------------------------
    # Public entrypoint
    # --------------------------------------------------

    def build(self, corpora: Dict[str, List[Any]]) -> Dict[str, Any]:
        """
        :param corpora: endpoint name -> recorded response bodies
        """
        document: Dict[str, Any] = {
            "openapi": SchemaDialect.openapi_version(self.ctx.dialect),
            "info": {"title": self.title, "version": self.version},
        }
        if self.declaration.description:
            document["info"]["description"] = self.declaration.description

        if self.servers:
            document["servers"] = [{"url": url} for url in self.servers]

        paths: Dict[str, Dict[str, Any]] = {}
        for endpoint in self.declaration.endpoints:
            operation = self.build_operation(endpoint, corpora.get(endpoint.name, []))
            paths.setdefault(endpoint.path, {})[endpoint.method.lower()] = operation
        document["paths"] = paths

        if self.api_key_header:
            document["components"] = {
                "securitySchemes": {
                    SECURITY_SCHEME_NAME: {
                        "type": "apiKey",
                        "in": "header",
                        "name": self.api_key_header,
                    }
                }
            }
            document["security"] = [{SECURITY_SCHEME_NAME: []}]

        return document

    # --------------------------------------------------
    # Operations
    # --------------------------------------------------

    def build_operation(self, endpoint: EndpointSpec, bodies: List[Any]) -> Dict[str, Any]:
        operation: Dict[str, Any] = {"operationId": endpoint.name}
        if endpoint.description:
            operation["description"] = endpoint.description

        in_path = [p for p in endpoint.parameters if f"{{{p.name}}}" in endpoint.path]
        others = [p for p in endpoint.parameters if p not in in_path]

        parameters = [self.build_parameter(p, "path") for p in in_path]
        if endpoint.method.upper() in QUERY_METHODS:
            parameters += [self.build_parameter(p, "query") for p in others]
        elif others:
            operation["requestBody"] = self.build_form_body(others)
        if parameters:
            operation["parameters"] = parameters

        operation["responses"] = {
            "200": {
                "description": "Successful response",
                "content": {
                    "application/json": {
                        "schema": self.build_response_schema(endpoint, bodies),
                    }
                },
            }
        }
        return operation

    def build_response_schema(self, endpoint: EndpointSpec, bodies: List[Any]) -> Dict[str, Any]:
        datas = project_data(bodies)
        ctx = self.ctx.child(endpoint.name)

        properties: Dict[str, Any] = {}
        required: List[str] = []
        for spec in endpoint.fields:
            name, schema = synthesize_field(
                spec, field_corpus(datas, spec.name), ctx.child(spec.name)
            )
            properties[name] = schema
            if not spec.is_extra:
                required.append(name)

        data: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            data["required"] = required

        return {
            "type": "object",
            "properties": {
                "status": {"type": "string"},
                "meta": {"type": "object"},
                "data": data,
            },
            "required": ["status", "data"],
        }

    # --------------------------------------------------
    # Parameters
    # --------------------------------------------------

    def _parameter_schema(self, spec: PrimitiveField) -> Dict[str, Any]:
        return mine_parameter_constraints(spec.description or "", spec.doc_type)

    def build_parameter(self, spec: PrimitiveField, location: str = "query") -> Dict[str, Any]:
        schema = self._parameter_schema(spec)
        description = schema.pop("description", None)

        parameter: Dict[str, Any] = {
            "name": spec.name,
            "in": location,
            # Path parameters are always required
            "required": location == "path" or not spec.is_extra,
            "schema": schema,
        }
        if description:
            parameter["description"] = description
        if spec.deprecated:
            parameter["deprecated"] = True
        return parameter

    def build_form_body(self, parameters) -> Dict[str, Any]:
        properties = {}
        required = []
        for spec in parameters:
            schema = self._parameter_schema(spec)
            if spec.deprecated:
                schema["deprecated"] = True
            properties[spec.name] = schema
            if not spec.is_extra:
                required.append(spec.name)

        form: Dict[str, Any] = {"type": "object", "properties": properties}
        if required:
            form["required"] = required

        return {
            "required": bool(required),
            "content": {
                "application/x-www-form-urlencoded": {"schema": form},
            },
        }
