"""Exceptions raised for misconfigured compare rules and rule tables."""


class ConfigurationError(Exception):
    """
    Base class for fatal compare-rule errors.

    These indicate a bug in the model declaration rather than bad data, so
    they are raised out of the validation call instead of being collected as
    validation results. ``str(exc)`` is exactly the user-facing message.
    """

    kind = "configuration"

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class MemberNotFoundError(ConfigurationError):
    """The other property referenced by a rule does not exist on the model."""

    kind = "member_not_found"


class NotComparableError(ConfigurationError):
    """The two compared values cannot be ordered against each other."""

    kind = "not_comparable"


class TypeMismatchError(ConfigurationError):
    """Strict mode was requested and the two values have different types."""

    kind = "type_mismatch"


class RuleTableError(ValueError):
    """A YAML rule table is malformed or references unknown classes or rules."""
