"""
Member Resolver - locate a sibling member of a model by name.

A model's shape is its class. Lookup is case-sensitive and walks the MRO,
trying properties first and then fields:

1. ``property`` objects defined on the class or an ancestor
2. dataclass fields
3. annotated names
4. ``__slots__`` entries
5. plain (non-callable) class attributes

When a subject instance is supplied, attributes that only live in the
instance ``__dict__`` are accepted as fields too.
"""

import dataclasses
import inspect
import operator
from typing import Any, Callable, Optional

from .exceptions import MemberNotFoundError
from .messages import get_template

Accessor = Callable[[Any], Any]


def _find_property(shape: type, name: str) -> Optional[property]:
    for klass in shape.__mro__:
        attr = vars(klass).get(name)
        if isinstance(attr, property):
            return attr
    return None


def _slot_names(klass: type):
    slots = vars(klass).get("__slots__", ())
    if isinstance(slots, str):
        return (slots,)
    return slots


def _is_field(shape: type, name: str) -> bool:
    if dataclasses.is_dataclass(shape):
        if any(f.name == name for f in dataclasses.fields(shape)):
            return True

    for klass in shape.__mro__:
        if klass is object:
            continue
        if name in inspect.get_annotations(klass):
            return True
        if name in _slot_names(klass):
            return True
        if name in vars(klass) and not name.startswith("__"):
            attr = vars(klass)[name]
            if not callable(attr) and not isinstance(attr, (classmethod, staticmethod)):
                return True
    return False


def _field_accessor(name: str) -> Accessor:
    def read(subject):
        # Unset fields read as absent.
        return getattr(subject, name, None)

    return read


def has_member(shape: type, name: str, subject: Any = None) -> bool:
    """Return True if name resolves to a property or field of shape."""
    try:
        resolve_member(shape, name, subject)
    except MemberNotFoundError:
        return False
    return True


def resolve_member(shape: type, name: str, subject: Any = None) -> Accessor:
    """
    Resolve name on shape and return a read accessor for it.

    Args:
        shape: Class of the model being validated
        name: Case-sensitive member name
        subject: Optional instance; its ``__dict__`` is searched last

    Returns:
        Callable taking a subject and returning the member's current value

    Raises:
        MemberNotFoundError: If shape has no property or field called name
    """
    if _find_property(shape, name) is not None:
        return operator.attrgetter(name)

    if _is_field(shape, name):
        return _field_accessor(name)

    if subject is not None and name in getattr(subject, "__dict__", {}):
        return _field_accessor(name)

    raise MemberNotFoundError(get_template("member_not_found").format(name))
