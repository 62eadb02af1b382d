"""
Conversion between native field values and their form text.

Encoding never fails: a custom codec that raises renders as an empty value so
that one broken field cannot take down the whole page.

Decoding writes straight into the live section object. Each FieldKind has its
own decoder; a TextCodec type is just the CUSTOM kind, not a special case.
"""

import re
from typing import Any, Callable, Dict, Optional

from webcfg.errors import ParseError
from webcfg.kinds import FieldKind, KindInfo, classify_value

TRUE_VALUES = ("on", "true")

# ASCII decimal text only; int() and float() also accept whitespace,
# underscores and non-ASCII digits.
INT_PATTERN = re.compile(r"[+-]?[0-9]+")
FLOAT_PATTERN = re.compile(
    r"[+-]?(?:(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?|inf|infinity|nan)",
    re.IGNORECASE,
)


def encode_value(value: Any, kind_info: Optional[KindInfo] = None) -> str:
    """Return the text shown in a field's form control."""
    kind_info = kind_info or classify_value(value)
    if value is None:
        return ""
    if kind_info.kind is FieldKind.CUSTOM or callable(getattr(value, "to_text", None)):
        try:
            return str(value.to_text())
        except Exception:
            return ""
    if kind_info.kind is FieldKind.BOOL:
        return "true" if value else "false"
    return str(value)


def _decode_bool(text: str, kind_info: KindInfo) -> bool:
    # Unchecked checkboxes are simply absent from the submission
    return text in TRUE_VALUES


def _decode_custom(text: str, kind_info: KindInfo) -> Any:
    try:
        return kind_info.value_type.from_text(text)
    except Exception as e:
        raise ParseError("failed to unmarshal", cause=e) from e


def _decode_int(text: str, kind_info: KindInfo) -> int:
    try:
        text = text or "0"
        if not INT_PATTERN.fullmatch(text):
            raise ValueError(f"invalid literal for int() with base 10: {text!r}")
        value = int(text, 10)
        if kind_info.int_range is not None and value not in kind_info.int_range:
            raise ValueError(
                f"value {value} out of range "
                f"[{kind_info.int_range.min_value}, {kind_info.int_range.max_value}]"
            )
    except ValueError as e:
        raise ParseError("invalid integer", cause=e) from e
    return _as_type(value, kind_info)


def _decode_float(text: str, kind_info: KindInfo) -> float:
    try:
        text = text or "0"
        if not FLOAT_PATTERN.fullmatch(text):
            raise ValueError(f"could not convert string to float: {text!r}")
        value = float(text)
    except ValueError as e:
        raise ParseError("invalid number", cause=e) from e
    return _as_type(value, kind_info)


def _decode_str(text: str, kind_info: KindInfo) -> str:
    return _as_type(text, kind_info)


def _as_type(value: Any, kind_info: KindInfo) -> Any:
    value_type = kind_info.value_type
    if value_type is None or type(value) is value_type:
        return value
    return value_type(value)


DECODERS: Dict[FieldKind, Callable[[str, KindInfo], Any]] = {
    FieldKind.BOOL: _decode_bool,
    FieldKind.CUSTOM: _decode_custom,
    FieldKind.INT: _decode_int,
    FieldKind.FLOAT: _decode_float,
    FieldKind.STR: _decode_str,
}


def decode_value(text: str, kind_info: KindInfo) -> Any:
    """Decode submitted text for a field of the given kind.

    Raises:
        ParseError: The text is not valid for the kind (field name not set)
        LookupError: The kind has no decoder (FieldKind.OTHER)
    """
    decoder = DECODERS.get(kind_info.kind)
    if decoder is None:
        raise LookupError(f"no decoder for kind {kind_info.kind.value}")
    return decoder(text, kind_info)


def decode_into(target: Any, attr: str, text: str, kind_info: KindInfo, field_name: str) -> None:
    """Decode ``text`` and assign it to ``target.<attr>``.

    Fields of FieldKind.OTHER are left untouched.

    Raises:
        ParseError: Tagged with ``field_name``; the target is not modified
    """
    if kind_info.kind not in DECODERS:
        return
    try:
        value = decode_value(text, kind_info)
    except ParseError as e:
        e.field = field_name
        raise
    setattr(target, attr, value)
