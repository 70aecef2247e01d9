from enum import Enum


class Shape(Enum):
    """
    Structural shape of one sample measured against a declared group.
    """
    NULL = "null"
    ARRAY_OF_GROUP = "array"
    FIXED_OBJECT = "fixed_object"
    EXTENDED_OBJECT = "extended_object"
    RECORD = "record"
    UNEXPECTED = "unexpected"

    @property
    def is_object(self) -> bool:
        return self in (Shape.FIXED_OBJECT, Shape.EXTENDED_OBJECT)
