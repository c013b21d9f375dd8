"""Input predicates shared by the service layer.

Every function here is pure and returns a bool; none of them raise.
Services turn a ``False`` into the matching ``AppError``.
"""

import math
import re
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

# ASCII numeric literals as the ordering clients write them in URLs; no digit
# separators and no non-ASCII digits, which int() and float() would accept
_DECIMAL_LITERAL = re.compile(r"[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?")
_PREFIXED_LITERAL = re.compile(r"0([xX][0-9a-fA-F]+|[oO][0-7]+|[bB][01]+)")
_INFINITY_LITERAL = re.compile(r"[+-]?Infinity")


def _own_fields(obj: Any) -> dict[str, Any]:
    """Keys and values an object actually carries.

    For pydantic records only explicitly set fields count, so a request body
    that omits ``id`` is treated like a plain object without that key.
    """
    if isinstance(obj, BaseModel):
        return {name: getattr(obj, name) for name in obj.model_fields_set}
    if isinstance(obj, Mapping):
        return dict(obj)
    try:
        return dict(vars(obj))
    except TypeError:
        return {}


def is_valid_id(value: Any) -> bool:
    """True for finite integral numbers greater than zero.

    ``bool`` is rejected even though it subclasses ``int``. Integral floats
    such as ``3.0`` are accepted; ``3.14``, ``NaN`` and ``inf`` are not.
    """
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    if isinstance(value, float) and not (math.isfinite(value) and value.is_integer()):
        return False
    return value > 0


def is_valid_strings(*values: Any) -> bool:
    """True when every argument is a non-empty ``str``."""
    return all(isinstance(value, str) and value for value in values)


def is_valid_object(obj: Any, *nullable_keys: str) -> bool:
    """True when ``obj`` is present and all its non-nullable keys hold truthy values.

    Mappings and records count as present even when empty.
    """
    if not isinstance(obj, (Mapping, BaseModel)) and not obj:
        return False
    return all(
        key in nullable_keys or bool(value) for key, value in _own_fields(obj).items()
    )


def is_property_of(key: Any, record_type: Any) -> bool:
    """True when ``key`` is a declared field of the record type.

    Uses the static field set the record declares (``model_fields``), so
    nothing is instantiated. Anything that is not a record class yields False.
    """
    if not key or not isinstance(key, str):
        return False
    if not isinstance(record_type, type) or not issubclass(record_type, BaseModel):
        return False
    return key in record_type.model_fields


def is_empty_object(value: Any) -> bool:
    """True for any falsy value and for objects with no own keys.

    Repositories return ``None`` for a missing row and ``[]`` for an empty
    result set; both count as empty here.
    """
    if not value:
        return True
    if isinstance(value, (BaseModel, Mapping)):
        return len(_own_fields(value)) == 0
    if isinstance(value, (list, tuple, set, frozenset)):
        return len(value) == 0
    if isinstance(value, str):
        return False
    # Numbers carry no keys, so any number counts as empty
    if isinstance(value, (int, float)):
        return True
    return len(_own_fields(value)) == 0


def to_number(value: Any) -> int | float:
    """Coerce a raw path or query value to a number.

    Numbers pass through. Numeric strings become ``int`` or ``float``
    (``"3"`` -> 3, ``"3.14"`` -> 3.14, ``"0x1f"`` -> 31) and a blank string
    becomes 0. Anything else becomes ``NaN``, which ``is_valid_id`` rejects;
    that includes digit separators (``"1_0"``) and non-ASCII digits.
    """
    if isinstance(value, bool):
        return int(value)
    if isinstance(value, (int, float)):
        return value
    if not isinstance(value, str):
        return math.nan

    text = value.strip()
    if not text:
        return 0
    if _PREFIXED_LITERAL.fullmatch(text):
        return int(text, 0)
    if _INFINITY_LITERAL.fullmatch(text):
        return -math.inf if text.startswith("-") else math.inf
    if not _DECIMAL_LITERAL.fullmatch(text):
        return math.nan
    if text.lstrip("+-").isdigit():
        return int(text)
    return float(text)
