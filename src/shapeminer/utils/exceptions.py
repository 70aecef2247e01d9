class ShapeMinerError(Exception):
    """
    Base exception for all shapeminer errors
    """
    pass


class UnknownDocTypeError(ShapeMinerError):
    """
    Raised when a declared primitive tag is outside the supported vocabulary.
    Fatal for the endpoint being converted.
    """

    def __init__(self, doc_type: str, path: str = ""):
        self.doc_type = doc_type
        self.path = path
        where = f" at '{path}'" if path else ""
        super().__init__(f"Unknown declared type '{doc_type}'{where}")


class SpecLoadError(ShapeMinerError):
    """
    Raised when the declaration file cannot be turned into field specs
    """
    pass


class CorpusLoadError(ShapeMinerError):
    """
    Raised when the sample corpus location is unusable
    """
    pass
