class SchemaDialect:
    """
    How nullability is written into synthesized schemas.

    NULLABLE_FLAG: `nullable: true` sibling (OpenAPI 3.0)
    NULL_UNION:    `null` type member / oneOf alternative (OpenAPI 3.1)
    """
    NULLABLE_FLAG = "nullable-flag"
    NULL_UNION = "null-union"

    OPENAPI_VERSIONS = {
        NULLABLE_FLAG: "3.0.3",
        NULL_UNION: "3.1.0",
    }

    @classmethod
    def is_valid(cls, dialect: str) -> bool:
        return dialect in {cls.NULLABLE_FLAG, cls.NULL_UNION}

    @classmethod
    def openapi_version(cls, dialect: str) -> str:
        if not cls.is_valid(dialect):
            raise ValueError(
                f"Invalid schema dialect '{dialect}'. "
                f"Allowed values: {cls.NULLABLE_FLAG}, {cls.NULL_UNION}"
            )
        return cls.OPENAPI_VERSIONS[dialect]
