"""
compare-validation: Cross-field declarative validation for Python objects

Rules compare one member of an object against a sibling member of the same
object:

- EqualsTo / NotEqualsTo
- LessThan / LessThanOrEqualsTo
- GreaterThan / GreaterThanOrEqualsTo

Misdeclared models (missing member, incomparable values, mismatched types
in strict mode) raise; unsatisfied rules are reported as results.

Example:
    from typing import Annotated
    from compare_validation import GreaterThan, Validator, validatable

    @validatable
    class Range:
        low: int
        high: Annotated[int, GreaterThan("low")]

    failures = Validator().validate_object(some_range)
"""

from .api import ValidationService
from .exceptions import (
    ConfigurationError,
    MemberNotFoundError,
    NotComparableError,
    RuleTableError,
    TypeMismatchError,
)
from .messages import format_message
from .registry import RuleRegistry, get_registry, validatable
from .rules import (
    VALID,
    CompareRule,
    EqualsTo,
    GreaterThan,
    GreaterThanOrEqualsTo,
    LessThan,
    LessThanOrEqualsTo,
    NotEqualsTo,
    ValidationResult,
)
from .validator import Validator

__version__ = "0.1.0"
__all__ = [
    "ValidationService",
    "Validator",
    "RuleRegistry",
    "get_registry",
    "validatable",
    "CompareRule",
    "EqualsTo",
    "NotEqualsTo",
    "LessThan",
    "LessThanOrEqualsTo",
    "GreaterThan",
    "GreaterThanOrEqualsTo",
    "ValidationResult",
    "VALID",
    "format_message",
    "ConfigurationError",
    "MemberNotFoundError",
    "NotComparableError",
    "TypeMismatchError",
    "RuleTableError",
]
