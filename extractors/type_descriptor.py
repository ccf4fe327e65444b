"""
Free-text type description classifier.

Documentation describes types in loose prose ("integer", "array of Tab",
"enum of X", "string or number"). Only the shapes actually seen in the docs are
accepted; anything else raises rather than guessing.
"""

from enum import Enum
from typing import Any, Dict, List, Optional, Tuple

from extractors.errors import UnsupportedTypeError

OPAQUE_TYPE = "object"
CALLBACK_TYPE = "function"


class PrimitiveKind(str, Enum):
    SIGNED_INTEGER = "signed integer"
    BOOLEAN = "boolean"
    TEXT = "text"
    FLOATING_POINT = "floating point"


_PRIMITIVES = {
    "integer": PrimitiveKind.SIGNED_INTEGER,
    "boolean": PrimitiveKind.BOOLEAN,
    "string": PrimitiveKind.TEXT,
    "number": PrimitiveKind.FLOATING_POINT,
}

_PYTHON_TYPES = {
    PrimitiveKind.SIGNED_INTEGER: int,
    PrimitiveKind.BOOLEAN: bool,
    PrimitiveKind.TEXT: str,
    PrimitiveKind.FLOATING_POINT: float,
}


def classify_type(type_text: str) -> Tuple[str, bool]:
    """
    Resolve a type description to ``(type_name, is_array)``.

    Args:
        type_text: Type cell text, already whitespace-normalized

    Returns:
        Element type name and whether the value is an array of it

    Raises:
        UnsupportedTypeError: The description matches no known pattern
    """
    words = type_text.split()
    if not words:
        raise UnsupportedTypeError(type_text)

    if len(words) == 1:
        return words[0], False

    if len(words) == 3 and words[0] == "array" and words[1] == "of":
        return words[2], True

    if len(words) == 3 and words[0] == "enum" and words[1] == "of":
        return OPAQUE_TYPE, False

    # unions ("string or number") carry nothing worth keeping structurally
    if "or" in words[1:]:
        return OPAQUE_TYPE, False

    raise UnsupportedTypeError(type_text)


def primitive_kind(type_name: str) -> Optional[PrimitiveKind]:
    """Host primitive for a scalar type name, or None for a named type reference."""
    return _PRIMITIVES.get(type_name)


def python_type(type_name: str, is_array: bool = False) -> Any:
    """Python annotation for a resolved type, used when generating bindings."""
    kind = primitive_kind(type_name)
    typ: Any = _PYTHON_TYPES[kind] if kind else Dict[str, Any]
    if is_array:
        typ = List[typ]  # type: ignore
    return typ
