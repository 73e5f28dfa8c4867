"""
Public API for compare-validation

This is the "front door": configuration, rule tables and the validator wired
together behind one object.
"""

import logging
from typing import Any, Dict, List, Optional

from .config_loader import ConfigLoader, set_config
from .messages import format_message
from .registry import RuleRegistry, get_registry
from .rule_loader import RuleLoader
from .rules import ValidationResult
from .validator import Validator

logger = logging.getLogger(__name__)


class ValidationService:
    """
    Validates objects against their cross-field compare rules.

    Example:
        service = ValidationService()
        failures = service.validate(booking)
    """

    def __init__(self, config_uri: Optional[str] = None, registry: Optional[RuleRegistry] = None):
        """
        Initialize the service.

        1. Loads the bundled configuration, merged with config_uri if given,
           and makes it the process-wide configuration
        2. Loads every rule table listed under ``rule_tables``

        Args:
            config_uri: Optional overlay config (path, file:// or http(s):// URI)
            registry: Rule registry to use (defaults to the process-wide one)

        Raises:
            ValueError: If the config or a rule table is invalid
            RuntimeError: If a remote document cannot be fetched
        """
        self.config_loader = ConfigLoader(config_uri)
        set_config(self.config_loader)

        self.registry = registry if registry is not None else get_registry()
        self.rule_loader = RuleLoader(self.registry, base_dir=self.config_loader.base_dir)
        self.validator = Validator(self.registry)

        for uri in self.config_loader.get_rule_table_uris():
            self.rule_loader.load_table(uri)

    def validate(self, subject: Any) -> List[ValidationResult]:
        """
        Validate subject.

        Returns:
            List of FAIL results (empty when valid)

        Raises:
            ConfigurationError: If subject's model declares a broken rule
        """
        return self.validator.validate_object(subject)

    def try_validate(self, subject: Any, results: List[ValidationResult]) -> bool:
        """Append subject's failures to results; return True if it is valid."""
        return self.validator.try_validate_object(subject, results)

    def is_valid(self, subject: Any) -> bool:
        return not self.validator.validate_object(subject)

    def load_rule_table(self, uri: str) -> List[type]:
        """Load and register an additional rule table."""
        return self.rule_loader.load_table(uri)

    def discover_rules(self, shape: type) -> Dict[str, List[Dict[str, Any]]]:
        """
        Describe the rules applying to shape, keyed by member.

        Each entry carries the rule kind, the other member, the strict type
        flag and the message as it would be rendered, which is what a client
        side rule exporter needs.
        """
        result: Dict[str, List[Dict[str, Any]]] = {}
        for member, rule in self.registry.rules_for(shape):
            entry = rule.describe()
            entry["message"] = rule.format_error_message(
                self.registry.display_name(shape, member),
                self.registry.display_name(shape, rule.other_property_name),
            )
            result.setdefault(member, []).append(entry)
        return result

    @staticmethod
    def format_message(template: str, this_display_name: str, other_display_name: str) -> str:
        return format_message(template, this_display_name, other_display_name)
