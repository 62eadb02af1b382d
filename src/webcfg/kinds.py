"""
Field kinds and their classification from type annotations.

Every section field is assigned exactly one FieldKind when its section type is
registered. The kind selects the codec used to turn submitted form text back
into a native value. A type exposing the TextCodec methods (``to_text`` and a
``from_text`` classmethod) is always classified as CUSTOM, whatever it
subclasses.

Python ints are unbounded, so fixed-width integer fields are declared with
the Annotated aliases below. They carry an IntRange that the codec enforces.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Any, Optional, Tuple, Union, get_args, get_origin
import types


class FieldKind(Enum):
    """Closed set of field kinds understood by the codec."""
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    STR = "str"
    CUSTOM = "custom"
    OTHER = "other"


@dataclass(frozen=True)
class IntRange:
    """Inclusive bounds for an integer field."""
    min_value: int
    max_value: int

    def __contains__(self, value: int) -> bool:
        return self.min_value <= value <= self.max_value


def _signed(bits: int) -> IntRange:
    return IntRange(-(1 << (bits - 1)), (1 << (bits - 1)) - 1)


def _unsigned(bits: int) -> IntRange:
    return IntRange(0, (1 << bits) - 1)


Int8 = Annotated[int, _signed(8)]
Int16 = Annotated[int, _signed(16)]
Int32 = Annotated[int, _signed(32)]
Int64 = Annotated[int, _signed(64)]
Uint8 = Annotated[int, _unsigned(8)]
Uint16 = Annotated[int, _unsigned(16)]
Uint32 = Annotated[int, _unsigned(32)]
Uint64 = Annotated[int, _unsigned(64)]
Uint = Uint64


@dataclass(frozen=True)
class KindInfo:
    """Result of classifying one annotation.

    value_type is the concrete class values are converted to on decode
    (e.g. an int subclass), or the codec class for CUSTOM.
    """
    kind: FieldKind
    value_type: Optional[type] = None
    int_range: Optional[IntRange] = None


def is_text_codec_type(tp: Any) -> bool:
    """Check whether a class implements the TextCodec capability."""
    return (
        isinstance(tp, type)
        and callable(getattr(tp, "to_text", None))
        and callable(getattr(tp, "from_text", None))
    )


def unwrap_annotation(annotation: Any) -> Tuple[Any, Optional[IntRange]]:
    """Strip Annotated and Optional wrappers, collecting an IntRange if present."""
    int_range = None
    if get_origin(annotation) is Annotated:
        base, *extras = get_args(annotation)
        int_range = next((e for e in extras if isinstance(e, IntRange)), None)
        annotation = base

    origin = get_origin(annotation)
    if origin is Union or origin is getattr(types, "UnionType", None):
        args = [a for a in get_args(annotation) if a is not type(None)]
        if len(args) == 1:
            inner, inner_range = unwrap_annotation(args[0])
            return inner, int_range or inner_range
    return annotation, int_range


def classify(annotation: Any) -> Optional[KindInfo]:
    """Classify a resolved type annotation.

    Returns:
        KindInfo, or None when the annotation is not a concrete class
        (Any, an unresolved forward reference, a generic alias...) and the
        kind must be taken from the runtime value instead.
    """
    tp, int_range = unwrap_annotation(annotation)
    # Any is a class since Python 3.11
    if tp is Any or not isinstance(tp, type):
        return None
    return classify_type(tp, int_range)


def classify_type(tp: type, int_range: Optional[IntRange] = None) -> KindInfo:
    """Classify a concrete class."""
    if is_text_codec_type(tp):
        return KindInfo(FieldKind.CUSTOM, tp)
    if issubclass(tp, bool):
        return KindInfo(FieldKind.BOOL, bool)
    if issubclass(tp, Enum):
        return KindInfo(FieldKind.OTHER)
    if issubclass(tp, int):
        return KindInfo(FieldKind.INT, tp, int_range)
    if issubclass(tp, float):
        return KindInfo(FieldKind.FLOAT, tp)
    if issubclass(tp, str):
        return KindInfo(FieldKind.STR, tp)
    return KindInfo(FieldKind.OTHER)


def classify_value(value: Any) -> KindInfo:
    """Classify a field from its current value (fallback for untyped fields)."""
    if value is None:
        return KindInfo(FieldKind.OTHER)
    return classify_type(type(value))
