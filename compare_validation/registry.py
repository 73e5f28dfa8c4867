"""
Per-class registry of compare rules.

Rules are registered once per declaring class, either programmatically or
through the @validatable decorator, which collects CompareRule instances
from ``typing.Annotated`` metadata:

    @validatable
    @dataclass
    class Booking:
        start: date = None
        end: Annotated[date, GreaterThan("start")] = None

Registration resolves each rule's other member against the class right away,
so a reference to a missing member fails when the class is defined.
"""

import inspect
import logging
import typing
from typing import Dict, Iterable, List, Optional, Tuple

from .member_resolver import resolve_member
from .rules import CompareRule

logger = logging.getLogger(__name__)


class RuleRegistry:
    """Maps each declaring class to its members' compare rules."""

    def __init__(self):
        self._rules: Dict[type, Dict[str, List[CompareRule]]] = {}
        self._display_names: Dict[type, Dict[str, str]] = {}

    def register(
        self,
        shape: type,
        member: str,
        *rules: CompareRule,
        display_name: Optional[str] = None,
        check_members: bool = True,
    ) -> None:
        """
        Attach rules to member of shape.

        Args:
            shape: Declaring class
            member: Name of the annotated member
            rules: CompareRule instances, evaluated in the given order
            display_name: Name used for member in error messages
            check_members: Resolve member and each rule's other member now

        Raises:
            TypeError: If a rule is not a CompareRule
            MemberNotFoundError: If check_members is set and member or an
                other member does not exist on shape
        """
        for rule in rules:
            if not isinstance(rule, CompareRule):
                raise TypeError(f"Expected a CompareRule, got {type(rule).__name__}")
            if check_members:
                resolve_member(shape, rule.other_property_name)
        if check_members:
            resolve_member(shape, member)

        self._rules.setdefault(shape, {}).setdefault(member, []).extend(rules)
        if display_name is not None:
            self.set_display_name(shape, member, display_name)

        logger.debug(f"Registered {len(rules)} rule(s) for {shape.__qualname__}.{member}")

    def set_display_name(self, shape: type, member: str, display_name: str) -> None:
        self._display_names.setdefault(shape, {})[member] = display_name

    def display_name(self, shape: type, member: str) -> str:
        """Return the display name of member, searching shape's MRO; defaults to member."""
        for klass in shape.__mro__:
            names = self._display_names.get(klass)
            if names and member in names:
                return names[member]
        return member

    def rules_for(self, shape: type) -> List[Tuple[str, CompareRule]]:
        """
        Return (member, rule) pairs applying to shape.

        Rules declared on base classes come first, then declaration order.
        """
        pairs = []
        for klass in reversed(shape.__mro__):
            for member, rules in self._rules.get(klass, {}).items():
                pairs.extend((member, rule) for rule in rules)
        return pairs

    def rules_for_member(self, shape: type, member: str) -> List[CompareRule]:
        return [rule for name, rule in self.rules_for(shape) if name == member]

    def is_registered(self, shape: type) -> bool:
        return any(klass in self._rules for klass in shape.__mro__)

    def unregister(self, shape: type) -> None:
        self._rules.pop(shape, None)
        self._display_names.pop(shape, None)

    def clear(self) -> None:
        self._rules.clear()
        self._display_names.clear()


_registry = RuleRegistry()


def get_registry() -> RuleRegistry:
    """Return the process-wide rule registry."""
    return _registry


def _annotated_rules(cls: type) -> Iterable[Tuple[str, List[CompareRule]]]:
    own = inspect.get_annotations(cls)
    hints = typing.get_type_hints(cls, include_extras=True)
    for name in own:
        hint = hints.get(name)
        if typing.get_origin(hint) is not typing.Annotated:
            continue
        rules = [m for m in typing.get_args(hint)[1:] if isinstance(m, CompareRule)]
        if rules:
            yield name, rules


def validatable(
    cls: Optional[type] = None,
    *,
    registry: Optional[RuleRegistry] = None,
    display_names: Optional[Dict[str, str]] = None,
    check_members: bool = True,
):
    """
    Class decorator registering CompareRules found in Annotated hints.

    Usable bare (``@validatable``) or with options
    (``@validatable(display_names={"end": "End date"})``). Only annotations
    declared on the decorated class itself are scanned; inherited rules are
    picked up from the base class's own registration.
    """

    def decorate(klass: type) -> type:
        target = registry if registry is not None else get_registry()
        for member, rules in _annotated_rules(klass):
            target.register(klass, member, *rules, check_members=check_members)
        for member, name in (display_names or {}).items():
            target.set_display_name(klass, member, name)
        return klass

    if cls is not None:
        return decorate(cls)
    return decorate
