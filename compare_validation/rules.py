"""
Compare rules: declarative checks of one member against a sibling member.

Every rule runs the same pipeline:

1. resolve the other member on the subject's class
2. pass if either value is absent
3. when ``must_be_same_type`` is set, require identical runtime types
4. three-way compare the two values
5. let the rule's policy decide whether the ordering satisfies it

Steps 1, 3 and 4 raise ConfigurationError subclasses on a misdeclared model.
Step 5 never raises; an unsatisfied policy produces a FAIL result.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from .comparator import check_same_type, compare, is_absent
from .member_resolver import resolve_member
from .messages import format_message, get_template

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ValidationResult:
    """
    Outcome of one rule evaluation.

    status is "PASS" or "FAIL"; message is empty for PASS.
    """

    status: str
    message: str = ""
    member_names: Tuple[str, ...] = ()

    @property
    def is_valid(self) -> bool:
        return self.status == "PASS"

    @classmethod
    def failure(cls, message: str, member_names: Tuple[str, ...] = ()) -> "ValidationResult":
        return cls("FAIL", message, tuple(member_names))


VALID = ValidationResult("PASS")


class CompareRule(ABC):
    """
    Abstract base class for rules comparing a member to another member.

    Subclasses set ``kind`` (also the default message key) and implement
    is_satisfied(). Instances are immutable and may be shared by every
    instance of the declaring class.
    """

    kind = ""

    def __init__(
        self,
        other_property_name: str,
        must_be_same_type: bool = False,
        error_message: Optional[str] = None,
    ):
        """
        Args:
            other_property_name: Name of the member to compare against
            must_be_same_type: Require both values to have the same type
            error_message: Template overriding the default message;
                {0} is this member's display name, {1} the other's

        Raises:
            ValueError: If other_property_name is empty or not a string
        """
        if not isinstance(other_property_name, str) or not other_property_name:
            raise ValueError("other_property_name must be a non-empty string")
        self._other_property_name = other_property_name
        self._must_be_same_type = bool(must_be_same_type)
        self._error_message = error_message

    @property
    def other_property_name(self) -> str:
        return self._other_property_name

    @property
    def must_be_same_type(self) -> bool:
        return self._must_be_same_type

    @property
    def error_message_template(self) -> str:
        """Per-rule template if given, else the configured default for this kind."""
        if self._error_message is not None:
            return self._error_message
        return get_template(self.kind)

    def format_error_message(self, display_name: str, other_display_name: Optional[str] = None) -> str:
        """Render this rule's failure message."""
        if other_display_name is None:
            other_display_name = self._other_property_name
        return format_message(self.error_message_template, display_name, other_display_name)

    @abstractmethod
    def is_satisfied(self, ordering: int) -> bool:
        """Return True if ordering (this compared to other) satisfies the rule."""

    def validate(
        self,
        value: Any,
        subject: Any,
        display_name: str,
        other_display_name: Optional[str] = None,
        member_name: Optional[str] = None,
    ) -> ValidationResult:
        """
        Evaluate the rule for one member of subject.

        Args:
            value: Current value of the annotated member
            subject: Object owning both members
            display_name: Display name of the annotated member
            other_display_name: Display name of the other member
                (defaults to its name)
            member_name: Name recorded on a FAIL result (defaults to display_name)

        Returns:
            VALID, or a FAIL ValidationResult carrying the formatted message

        Raises:
            MemberNotFoundError: If the other member does not exist
            TypeMismatchError: If must_be_same_type is set and the types differ
            NotComparableError: If the values cannot be ordered
        """
        read_other = resolve_member(type(subject), self._other_property_name, subject)
        other_value = read_other(subject)
        if other_display_name is None:
            other_display_name = self._other_property_name

        if is_absent(value) or is_absent(other_value):
            return VALID

        if self._must_be_same_type:
            check_same_type(value, other_value, display_name, other_display_name)

        ordering = compare(value, other_value, display_name, other_display_name)
        if self.is_satisfied(ordering):
            return VALID

        logger.debug(
            f"{type(self).__name__}({self._other_property_name!r}) failed for "
            f"{display_name!r} on {type(subject).__name__}"
        )
        return ValidationResult.failure(
            self.format_error_message(display_name, other_display_name),
            (member_name or display_name,),
        )

    def describe(self) -> dict:
        """Return rule metadata for discovery and client rule export."""
        return {
            "rule": self.kind,
            "other": self._other_property_name,
            "must_be_same_type": self._must_be_same_type,
            "error_message": self.error_message_template,
        }

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}({self._other_property_name!r}, "
            f"must_be_same_type={self._must_be_same_type})"
        )


class EqualsTo(CompareRule):
    """This member must equal the other member."""

    kind = "equals_to"

    def is_satisfied(self, ordering: int) -> bool:
        return ordering == 0


class NotEqualsTo(CompareRule):
    """This member must differ from the other member."""

    kind = "not_equals_to"

    def is_satisfied(self, ordering: int) -> bool:
        return ordering != 0


class LessThan(CompareRule):
    kind = "less_than"

    def is_satisfied(self, ordering: int) -> bool:
        return ordering < 0


class LessThanOrEqualsTo(CompareRule):
    kind = "less_than_or_equals_to"

    def is_satisfied(self, ordering: int) -> bool:
        return ordering <= 0


class GreaterThan(CompareRule):
    kind = "greater_than"

    def is_satisfied(self, ordering: int) -> bool:
        return ordering > 0


class GreaterThanOrEqualsTo(CompareRule):
    kind = "greater_than_or_equals_to"

    def is_satisfied(self, ordering: int) -> bool:
        return ordering >= 0


RULE_TYPES = {
    rule_class.kind: rule_class
    for rule_class in (
        EqualsTo,
        NotEqualsTo,
        LessThan,
        LessThanOrEqualsTo,
        GreaterThan,
        GreaterThanOrEqualsTo,
    )
}
