"""Validation orchestrator: runs every registered compare rule over an object."""

import logging
from typing import Any, List, Optional

from .registry import RuleRegistry, get_registry
from .rules import ValidationResult

logger = logging.getLogger(__name__)


class Validator:
    """Validates objects against the compare rules registered for their class."""

    def __init__(self, registry: Optional[RuleRegistry] = None):
        """
        Args:
            registry: Rule registry to read from (defaults to the process-wide one)
        """
        self.registry = registry if registry is not None else get_registry()

    def validate_object(self, subject: Any) -> List[ValidationResult]:
        """
        Run every rule registered for subject's class.

        Returns:
            FAIL results only, in member then rule declaration order. An
            empty list means subject is valid.

        Raises:
            ConfigurationError: On the first misdeclared rule; no partial
                results are returned
        """
        shape = type(subject)
        failures = []
        for member, rule in self.registry.rules_for(shape):
            result = self._run(shape, subject, member, rule)
            if not result.is_valid:
                failures.append(result)

        logger.debug(f"Validated {shape.__name__}: {len(failures)} failure(s)")
        return failures

    def validate_property(self, subject: Any, member: str) -> List[ValidationResult]:
        """Run the rules registered for a single member of subject."""
        shape = type(subject)
        failures = []
        for rule in self.registry.rules_for_member(shape, member):
            result = self._run(shape, subject, member, rule)
            if not result.is_valid:
                failures.append(result)
        return failures

    def try_validate_object(self, subject: Any, results: List[ValidationResult]) -> bool:
        """
        Append subject's failures to results and return True if there were none.

        Configuration errors still propagate.
        """
        failures = self.validate_object(subject)
        results.extend(failures)
        return not failures

    def _run(self, shape: type, subject: Any, member: str, rule) -> ValidationResult:
        value = getattr(subject, member, None)
        return rule.validate(
            value,
            subject,
            self.registry.display_name(shape, member),
            other_display_name=self.registry.display_name(shape, rule.other_property_name),
            member_name=member,
        )
