"""
Typed conversion of raw configuration text

Each value kind has one converter. The kind is taken from the exact
runtime type of the default value unless the caller names it explicitly.
"""
import logging
import math
import re
from datetime import timedelta
from enum import Enum
from functools import lru_cache
from typing import Any, Callable, Dict, Optional, Union

from pydantic import PydanticSchemaGenerationError, TypeAdapter, ValidationError

from envget.core.durations import parse_duration
from envget.core.exceptions import ConversionError, UnsupportedKindError

logger = logging.getLogger(__name__)

INT32_MIN, INT32_MAX = -(1 << 31), (1 << 31) - 1
INT64_MIN, INT64_MAX = -(1 << 63), (1 << 63) - 1

_INT_RE = re.compile(r"[+-]?[0-9]+")
_FLOAT_RE = re.compile(r"[+-]?(?:[0-9]+\.?[0-9]*|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")
_FLOAT_SPECIAL_RE = re.compile(r"[+-]?(?:inf|infinity|nan)", re.IGNORECASE)

TRUE_VALUES = frozenset({"1", "t", "T", "TRUE", "true", "True"})
FALSE_VALUES = frozenset({"0", "f", "F", "FALSE", "false", "False"})


class ValueKind(str, Enum):
    """Conversion target kinds"""
    STRING = "string"
    INT = "int"
    INT32 = "int32"
    INT64 = "int64"
    FLOAT = "float"
    BOOL = "bool"
    DURATION = "duration"
    JSON = "json"

    @classmethod
    def for_default(cls, default: Any) -> "ValueKind":
        """Kind selected by the exact type of a default value.

        Subclasses (str-based enums, IntEnum, ...) are not primitives
        here and go through JSON decoding into their own type.
        """
        return _KIND_BY_TYPE.get(type(default), cls.JSON)

    @classmethod
    def parse(cls, kind: Union["ValueKind", str]) -> "ValueKind":
        """Normalize an explicit kind given as a member or its name"""
        if isinstance(kind, cls):
            return kind
        if isinstance(kind, str):
            try:
                return cls(kind.strip().lower())
            except ValueError:
                pass
        raise UnsupportedKindError(kind)


_KIND_BY_TYPE: Dict[type, ValueKind] = {
    str: ValueKind.STRING,
    int: ValueKind.INT,
    bool: ValueKind.BOOL,
    float: ValueKind.FLOAT,
    timedelta: ValueKind.DURATION,
}


def _integer(text: str, kind: ValueKind, low: int, high: int) -> int:
    if not _INT_RE.fullmatch(text):
        raise ConversionError(kind.value, text, "invalid syntax")
    value = int(text)
    if value < low or value > high:
        raise ConversionError(kind.value, text, "value out of range")
    return value


def to_string(text: str, default: Any) -> str:
    return text


def to_int(text: str, default: Any) -> int:
    return _integer(text, ValueKind.INT, INT64_MIN, INT64_MAX)


def to_int32(text: str, default: Any) -> int:
    return _integer(text, ValueKind.INT32, INT32_MIN, INT32_MAX)


def to_int64(text: str, default: Any) -> int:
    return _integer(text, ValueKind.INT64, INT64_MIN, INT64_MAX)


def to_float(text: str, default: Any) -> float:
    if _FLOAT_SPECIAL_RE.fullmatch(text):
        return float(text)
    if not _FLOAT_RE.fullmatch(text):
        raise ConversionError(ValueKind.FLOAT.value, text, "invalid syntax")
    value = float(text)
    if math.isinf(value):
        raise ConversionError(ValueKind.FLOAT.value, text, "value out of range")
    return value


def to_bool(text: str, default: Any) -> bool:
    if text in TRUE_VALUES:
        return True
    if text in FALSE_VALUES:
        return False
    raise ConversionError(ValueKind.BOOL.value, text, "invalid syntax")


def to_duration(text: str, default: Any) -> timedelta:
    return parse_duration(text)


@lru_cache(maxsize=128)
def _adapter_for(target: type) -> TypeAdapter:
    return TypeAdapter(target)


def to_json(text: str, default: Any) -> Any:
    """Decode JSON text into a value of the same type as ``default``.

    Validation is strict: "1" does not become 1, unknown object keys are
    ignored, a missing required field is a failure.
    """
    target = type(default)
    try:
        adapter = _adapter_for(target)
    except (PydanticSchemaGenerationError, TypeError) as e:
        raise ConversionError(ValueKind.JSON.value, text, f"cannot decode into {target.__name__}") from e
    try:
        return adapter.validate_json(text, strict=True)
    except ValidationError as e:
        raise ConversionError(ValueKind.JSON.value, text, f"{e.error_count()} validation error(s)") from e


CONVERTERS: Dict[ValueKind, Callable[[str, Any], Any]] = {
    ValueKind.STRING: to_string,
    ValueKind.INT: to_int,
    ValueKind.INT32: to_int32,
    ValueKind.INT64: to_int64,
    ValueKind.FLOAT: to_float,
    ValueKind.BOOL: to_bool,
    ValueKind.DURATION: to_duration,
    ValueKind.JSON: to_json,
}


def convert(raw: str, default: Any, kind: Optional[Union[ValueKind, str]] = None) -> Any:
    """Convert raw text into the kind of ``default``.

    Surrounding whitespace is stripped first. Malformed input returns
    ``default`` unchanged; this function does not raise for bad data.

    Args:
        raw: Text from an environment variable or file
        default: Fallback value, its type selects the converter
        kind: Explicit kind overriding the one inferred from ``default``

    Returns:
        The converted value, or ``default``

    Raises:
        UnsupportedKindError: if ``kind`` is not a known kind
    """
    value_kind = ValueKind.for_default(default) if kind is None else ValueKind.parse(kind)
    text = raw.strip()
    try:
        return CONVERTERS[value_kind](text, default)
    except ConversionError as e:
        logger.debug("conversion to %s failed, using default: %s", value_kind.value, e.reason)
        return default
