"""
Value Comparator and Type Compatibility Gate.

The comparator orders the annotated member's value against the other
member's value. When the two values have different types the other value is
first converted into the annotated value's type (``"22"`` compared to an
``int`` becomes ``22``); numbers of different types are compared directly.
Any failure to convert or order the pair raises NotComparableError.
"""

import datetime
import decimal
import numbers
from typing import Any, Callable, Dict, Optional

from .config_loader import get_config
from .exceptions import NotComparableError, TypeMismatchError
from .messages import get_template


def is_absent(value: Any) -> bool:
    """Return True if value counts as unset."""
    return value is None


def _to_bool(value):
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in ("true", "false"):
            return lowered == "true"
        raise ValueError(f"Cannot convert {value!r} to bool")
    if isinstance(value, numbers.Number):
        return bool(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to bool")


def _iso(target: type) -> Callable[[Any], Any]:
    def convert(value):
        if isinstance(value, str):
            return target.fromisoformat(value)
        raise TypeError(f"Cannot convert {type(value).__name__} to {target.__name__}")

    return convert


def _to_str(value):
    if isinstance(value, (str, numbers.Number, datetime.date, datetime.time)):
        return str(value)
    raise TypeError(f"Cannot convert {type(value).__name__} to str")


def _to_decimal(value):
    return decimal.Decimal(str(value))


# Keyed by target type; looked up along the target's MRO so datetime wins over date.
COERCERS: Dict[type, Callable[[Any], Any]] = {
    str: _to_str,
    int: int,
    float: float,
    bool: _to_bool,
    decimal.Decimal: _to_decimal,
    datetime.datetime: _iso(datetime.datetime),
    datetime.date: _iso(datetime.date),
    datetime.time: _iso(datetime.time),
}


def _find_coercer(target: type) -> Optional[Callable[[Any], Any]]:
    for klass in target.__mro__:
        if klass in COERCERS:
            return COERCERS[klass]
    return None


def _is_number(value: Any) -> bool:
    return isinstance(value, numbers.Number) and not isinstance(value, bool)


def coerce(other: Any, target: type) -> Any:
    """
    Convert other into target type for comparison.

    Values already of the target type, and numbers compared against numbers,
    are returned unchanged, as are values of types with no registered
    conversion.

    Raises:
        TypeError, ValueError, ArithmeticError: If the conversion fails
    """
    if type(other) is target:
        return other
    if _is_number(other) and issubclass(target, numbers.Number) and target is not bool:
        return other
    convert = _find_coercer(target)
    if convert is None:
        return other
    return convert(other)


def has_ordering(value: Any) -> bool:
    """Return True if value's type defines an ordering beyond object's default."""
    return type(value).__lt__ is not object.__lt__


def compare(current: Any, other: Any, this_name: str, other_name: str) -> int:
    """
    Three-way compare current against other.

    Args:
        current: Value of the annotated member
        other: Value of the referenced member
        this_name: Display name of the annotated member
        other_name: Display name of the referenced member

    Returns:
        Negative, zero or positive as current is less than, equal to or
        greater than other

    Raises:
        NotComparableError: If the values cannot be ordered against each other
    """
    error = NotComparableError(
        get_template("cannot_be_compared").format(this_name, other_name)
    )

    if not has_ordering(current):
        raise error

    try:
        other = coerce(other, type(current))
        if current < other:
            return -1
        if current > other:
            return 1
        if current == other:
            return 0
    except (TypeError, ValueError, ArithmeticError) as e:
        raise error from e

    # Unordered pair, e.g. NaN or disjoint sets.
    raise error


def type_display_name(tp: type) -> str:
    """Return the configured display name for tp, or its __name__."""
    if tp.__module__ == "builtins":
        key = tp.__qualname__
    else:
        key = f"{tp.__module__}.{tp.__qualname__}"
    return get_config().get_type_display_names().get(key, tp.__name__)


def check_same_type(current: Any, other: Any, this_name: str, other_name: str) -> None:
    """
    Require current and other to share the exact same runtime type.

    Raises:
        TypeMismatchError: If the types differ
    """
    current_type = type(current)
    other_type = type(other)
    if current_type is other_type:
        return
    raise TypeMismatchError(
        get_template("type_mismatch").format(
            this_name,
            type_display_name(current_type),
            other_name,
            type_display_name(other_type),
        )
    )
