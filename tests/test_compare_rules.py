"""
Tests for the compare rules, end to end through the Validator.

Each model mirrors a declaration scenario: same types, mixed types, strict
type mode and a reference to a member that does not exist.
"""
from dataclasses import dataclass
from typing import Annotated, Any, Optional

import pytest

from compare_validation import (
    EqualsTo,
    GreaterThan,
    GreaterThanOrEqualsTo,
    LessThan,
    LessThanOrEqualsTo,
    MemberNotFoundError,
    NotComparableError,
    NotEqualsTo,
    TypeMismatchError,
    Validator,
    validatable,
)


@validatable
@dataclass
class GreaterModel:
    P1: Optional[str] = None
    P2: Annotated[Optional[str], GreaterThan("P1")] = None


@validatable
@dataclass
class GreaterDifferentType:
    P1: Optional[str] = None
    P2: Annotated[int, GreaterThan("P1")] = 0


@validatable
@dataclass
class GreaterTypeMatch:
    P1: Annotated[Optional[str], GreaterThan("P2", must_be_same_type=True)] = None
    P2: Optional[str] = None


@validatable
@dataclass
class GreaterTypeMismatch:
    P1: Annotated[Optional[str], GreaterThan("P2", must_be_same_type=True)] = None
    P2: int = 0


@validatable
@dataclass
class NotEqualsModel:
    P1: Optional[str] = None
    P2: Annotated[Optional[str], NotEqualsTo("P1")] = None


@validatable
@dataclass
class NotEqualsDifferentType:
    P1: Optional[str] = None
    P2: Annotated[int, NotEqualsTo("P1")] = 0


@validatable
@dataclass
class NotEqualsTypeMatch:
    P1: Annotated[Optional[str], NotEqualsTo("P2", must_be_same_type=True)] = None
    P2: Optional[str] = None


@validatable
@dataclass
class NotEqualsTypeMismatch:
    P1: Annotated[Optional[str], NotEqualsTo("P2", must_be_same_type=True)] = None
    P2: int = 0


@dataclass
class Pair:
    a: Any = None
    b: Any = None


class Opaque:
    pass


@validatable(check_members=False)
@dataclass
class MissingMember:
    P1: Annotated[Optional[str], EqualsTo("P2")] = None


@pytest.fixture
def validator():
    return Validator()


class TestGreaterThan:
    """GreaterThan declared on P2, referencing P1."""

    def test_strings_compare_lexicographically(self, validator):
        """"3" sorts after "10", so the rule holds."""
        results = validator.validate_object(GreaterModel(P1="10", P2="3"))
        assert results == []

    def test_failure_message(self, validator):
        results = validator.validate_object(GreaterModel(P1="9", P2="6"))
        assert len(results) == 1
        assert results[0].status == "FAIL"
        assert results[0].message == "'P2' must be greater than 'P1'."
        assert results[0].member_names == ("P2",)

    def test_other_value_converted_to_annotated_type(self, validator):
        """"3" is read as 3 when compared to an int member."""
        assert validator.validate_object(GreaterDifferentType(P1="3", P2=12)) == []

    def test_converted_value_can_fail(self, validator):
        results = validator.validate_object(GreaterDifferentType(P1="22", P2=2))
        assert len(results) == 1
        assert results[0].message == "'P2' must be greater than 'P1'."

    def test_cannot_be_compared(self, validator):
        with pytest.raises(NotComparableError) as exc_info:
            validator.validate_object(GreaterDifferentType(P1="Foo", P2=2))
        assert str(exc_info.value) == "'P2' and 'P1' cannot be compared."

    def test_type_match(self, validator):
        assert validator.validate_object(GreaterTypeMatch(P1="8", P2="5")) == []

    def test_type_mismatch(self, validator):
        with pytest.raises(TypeMismatchError) as exc_info:
            validator.validate_object(GreaterTypeMismatch(P1="7", P2=2))
        assert str(exc_info.value) == "'P1' type (String) and 'P2' type (Int32) must be the same."

    def test_both_absent(self, validator):
        assert validator.validate_object(GreaterModel(P1=None, P2=None)) == []

    def test_missing_member(self, validator):
        with pytest.raises(MemberNotFoundError) as exc_info:
            validator.validate_object(MissingMember(P1="Foo"))
        assert str(exc_info.value) == "Could not find a property named P2."


class TestNotEqualsTo:
    """NotEqualsTo declared on P2, referencing P1, unless noted."""

    def test_equal_values_fail(self, validator):
        results = validator.validate_object(NotEqualsModel(P1="Foo", P2="Foo"))
        assert len(results) == 1
        assert results[0].message == "'P2' and 'P1' must not match."

    def test_different_values_pass(self, validator):
        assert validator.validate_object(NotEqualsModel(P1="Foo", P2="Bar")) == []

    def test_converted_equal_values_fail(self, validator):
        results = validator.validate_object(NotEqualsDifferentType(P1="2", P2=2))
        assert len(results) == 1
        assert results[0].message == "'P2' and 'P1' must not match."

    def test_converted_different_values_pass(self, validator):
        assert validator.validate_object(NotEqualsDifferentType(P1="22", P2=2)) == []

    def test_cannot_be_compared(self, validator):
        with pytest.raises(NotComparableError) as exc_info:
            validator.validate_object(NotEqualsDifferentType(P1="Foo", P2=2))
        assert exc_info.value.message == "'P2' and 'P1' cannot be compared."

    def test_type_match_declared_on_p1(self, validator):
        results = validator.validate_object(NotEqualsTypeMatch(P1="Foo", P2="Foo"))
        assert len(results) == 1
        assert results[0].message == "'P1' and 'P2' must not match."

    def test_type_mismatch(self, validator):
        with pytest.raises(TypeMismatchError) as exc_info:
            validator.validate_object(NotEqualsTypeMismatch(P1="Foo", P2=2))
        assert str(exc_info.value) == "'P1' type (String) and 'P2' type (Int32) must be the same."

    def test_both_absent_is_valid(self, validator):
        """Two absent values never count as matching."""
        assert validator.validate_object(NotEqualsModel(P1=None, P2=None)) == []


class TestPolicies:
    """Each rule against the three orderings of two ints."""

    @pytest.mark.parametrize("rule_class, less, equal, greater", [
        (EqualsTo, False, True, False),
        (NotEqualsTo, True, False, True),
        (LessThan, True, False, False),
        (LessThanOrEqualsTo, True, True, False),
        (GreaterThan, False, False, True),
        (GreaterThanOrEqualsTo, False, True, True),
    ])
    def test_policy_table(self, registry, rule_class, less, equal, greater):
        registry.register(Pair, "a", rule_class("b"))
        validator = Validator(registry)

        assert (validator.validate_object(Pair(1, 2)) == []) is less
        assert (validator.validate_object(Pair(2, 2)) == []) is equal
        assert (validator.validate_object(Pair(3, 2)) == []) is greater

    @pytest.mark.parametrize("rule_class", [
        EqualsTo,
        NotEqualsTo,
        LessThan,
        LessThanOrEqualsTo,
        GreaterThan,
        GreaterThanOrEqualsTo,
    ])
    @pytest.mark.parametrize("a, b", [(None, None), (None, 1), (1, None)])
    def test_absent_values_pass(self, registry, rule_class, a, b):
        registry.register(Pair, "a", rule_class("b", must_be_same_type=True))
        assert Validator(registry).validate_object(Pair(a, b)) == []

    def test_type_gate_runs_before_ordering(self, registry):
        """int vs float would compare fine, but strict mode rejects it."""
        registry.register(Pair, "a", GreaterThan("b", must_be_same_type=True))
        with pytest.raises(TypeMismatchError) as exc_info:
            Validator(registry).validate_object(Pair(3, 1.5))
        assert str(exc_info.value) == "'a' type (Int32) and 'b' type (Double) must be the same."

    @pytest.mark.parametrize("other", [[1, 2], {"key": 1}, Opaque()])
    def test_string_against_structured_value(self, registry, other):
        """A str member is never compared with the text of a structured value."""
        registry.register(Pair, "a", GreaterThan("b"))
        with pytest.raises(NotComparableError) as exc_info:
            Validator(registry).validate_object(Pair("Foo", other))
        assert str(exc_info.value) == "'a' and 'b' cannot be compared."

    def test_string_against_number(self, registry):
        registry.register(Pair, "a", EqualsTo("b"))
        assert Validator(registry).validate_object(Pair("12", 12)) == []


class TestRuleDeclaration:
    """Test rule construction and metadata."""

    def test_empty_other_property_rejected(self):
        with pytest.raises(ValueError):
            GreaterThan("")

    def test_non_string_other_property_rejected(self):
        with pytest.raises(ValueError):
            GreaterThan(None)

    def test_rule_is_read_only(self):
        rule = GreaterThan("P1", must_be_same_type=True)
        with pytest.raises(AttributeError):
            rule.other_property_name = "P3"
        assert rule.other_property_name == "P1"
        assert rule.must_be_same_type is True

    def test_custom_error_message(self, registry):
        class Window:
            opens: int
            closes: int

            def __init__(self, opens, closes):
                self.opens = opens
                self.closes = closes

        registry.register(
            Window, "closes",
            GreaterThan("opens", error_message="{0} has to come after {1}"),
        )
        results = Validator(registry).validate_object(Window(9, 8))
        assert results[0].message == "closes has to come after opens"

    def test_describe(self):
        assert GreaterThan("P1").describe() == {
            "rule": "greater_than",
            "other": "P1",
            "must_be_same_type": False,
            "error_message": "'{0}' must be greater than '{1}'.",
        }

    def test_validate_directly(self):
        """A rule can be evaluated without a registry."""
        subject = GreaterModel(P1="9", P2="6")
        result = GreaterThan("P1").validate("6", subject, "Second")
        assert not result.is_valid
        assert result.message == "'Second' must be greater than 'P1'."
        assert result.member_names == ("Second",)

        assert GreaterThan("P1").validate("A", subject, "Second").is_valid
