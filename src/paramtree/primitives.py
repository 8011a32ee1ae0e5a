"""Primitive kinds and the decoding of single text values into scalars.

Plain ``int``, ``float``, ``bool``, ``str`` and ``Decimal`` annotations map to
their natural kind. Fixed-width kinds are requested with the ``Annotated``
aliases defined here:

    >>> from paramtree.primitives import Int16, Char
    >>> class Pixel:
    ...     def __init__(self, x: Int16, y: Int16, glyph: Char): ...
"""

import math
import re
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Annotated, Any, Optional, get_args, get_origin

from paramtree.errors import ConversionFailedError

__all__ = [
    "PrimitiveKind",
    "Int8",
    "Int16",
    "Int32",
    "Int64",
    "Float32",
    "Char",
    "primitive_kind",
    "convert",
]


class PrimitiveKind(Enum):
    INT8 = "int8"
    INT16 = "int16"
    INT32 = "int32"
    INT64 = "int64"
    INTEGER = "integer"
    FLOAT32 = "float32"
    FLOAT = "float"
    BOOLEAN = "boolean"
    CHARACTER = "character"
    STRING = "string"
    DECIMAL = "decimal"

    def __str__(self):
        return self.value


Int8 = Annotated[int, PrimitiveKind.INT8]
Int16 = Annotated[int, PrimitiveKind.INT16]
Int32 = Annotated[int, PrimitiveKind.INT32]
Int64 = Annotated[int, PrimitiveKind.INT64]
Float32 = Annotated[float, PrimitiveKind.FLOAT32]
Char = Annotated[str, PrimitiveKind.CHARACTER]

_NATURAL_KINDS: dict[type, PrimitiveKind] = {
    bool: PrimitiveKind.BOOLEAN,
    int: PrimitiveKind.INTEGER,
    float: PrimitiveKind.FLOAT,
    str: PrimitiveKind.STRING,
    Decimal: PrimitiveKind.DECIMAL,
}

_INTEGER_BITS = {
    PrimitiveKind.INT8: 8,
    PrimitiveKind.INT16: 16,
    PrimitiveKind.INT32: 32,
    PrimitiveKind.INT64: 64,
}

_FLOAT32_MAX = 3.4028234663852886e38

_INTEGER_RE = re.compile(r"^[+-]?[0-9]+$")
_FLOAT_RE = re.compile(
    r"^[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?$"
    r"|^NaN$|^[+-]?Infinity$"
)


def primitive_kind(type_: Any) -> Optional[PrimitiveKind]:
    """Return the primitive kind a type handle denotes, or None if it is not primitive.

    Example:
        >>> primitive_kind(int)    # Returns PrimitiveKind.INTEGER
        >>> primitive_kind(Int8)   # Returns PrimitiveKind.INT8
        >>> primitive_kind(list)   # Returns None
    """
    if get_origin(type_) is Annotated:
        base_type, *metadata = get_args(type_)
        declared = next((m for m in metadata if isinstance(m, PrimitiveKind)), None)
        return declared or primitive_kind(base_type)

    try:
        return _NATURAL_KINDS.get(type_)
    except TypeError:
        # unhashable type handles are never primitive
        return None


def convert(kind: PrimitiveKind, text: Optional[str]) -> Any:
    """Decode ``text`` into a scalar of the given kind.

    Raises:
        ConversionFailedError: If the text is missing, malformed or out of range.
    """
    if kind is PrimitiveKind.STRING:
        if text is None:
            raise ConversionFailedError(kind, text, "no value")
        return text
    if not text:
        raise ConversionFailedError(kind, text, "empty value")

    if kind is PrimitiveKind.INTEGER or kind in _INTEGER_BITS:
        return _to_integer(kind, text)
    if kind is PrimitiveKind.FLOAT or kind is PrimitiveKind.FLOAT32:
        return _to_float(kind, text)
    if kind is PrimitiveKind.DECIMAL:
        return _to_decimal(text)
    if kind is PrimitiveKind.BOOLEAN:
        lowered = text.lower()
        if lowered not in ("true", "false"):
            raise ConversionFailedError(kind, text, "expected 'true' or 'false'")
        return lowered == "true"
    if kind is PrimitiveKind.CHARACTER:
        if len(text) != 1:
            raise ConversionFailedError(kind, text, "expected exactly one character")
        return text

    raise ConversionFailedError(kind, text, "unsupported primitive kind")


def _to_integer(kind: PrimitiveKind, text: str) -> int:
    if not _INTEGER_RE.match(text):
        raise ConversionFailedError(kind, text, "not a decimal integer")
    value = int(text)

    bits = _INTEGER_BITS.get(kind)
    if bits is not None:
        low, high = -(1 << (bits - 1)), (1 << (bits - 1)) - 1
        if not low <= value <= high:
            raise ConversionFailedError(kind, text, f"outside [{low}, {high}]")
    return value


def _to_float(kind: PrimitiveKind, text: str) -> float:
    if not _FLOAT_RE.match(text):
        raise ConversionFailedError(kind, text, "not a decimal number")
    value = float(text)

    if math.isinf(value) and "Infinity" not in text:
        raise ConversionFailedError(kind, text, "outside the float range")
    if kind is PrimitiveKind.FLOAT32 and math.isfinite(value) and abs(value) > _FLOAT32_MAX:
        raise ConversionFailedError(kind, text, "outside the 32-bit float range")
    return value


def _to_decimal(text: str) -> Decimal:
    if not _FLOAT_RE.match(text):
        raise ConversionFailedError(PrimitiveKind.DECIMAL, text, "not a decimal number")
    try:
        return Decimal(text)
    except InvalidOperation as e:
        raise ConversionFailedError(PrimitiveKind.DECIMAL, text, str(e)) from e
