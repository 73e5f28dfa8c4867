"""
Rule Loader - register compare rules from YAML rule tables.

A rule table names model classes and, per member, the rules to attach:

    models:
      "shop.models:Order":
        display_names:
          shipped_on: Shipping date
        rules:
          shipped_on:
            - rule: greater_than_or_equals_to
              other: ordered_on
              must_be_same_type: true

Tables are checked against the bundled JSON Schema before anything is
registered, so a malformed table registers nothing.
"""

import importlib
import json
import logging
from importlib.resources import files
from typing import Any, Dict, List, Optional

from jsonschema import Draft202012Validator
from jsonschema.exceptions import best_match

from .config_loader import load_yaml_uri
from .exceptions import RuleTableError
from .member_resolver import resolve_member
from .registry import RuleRegistry, get_registry
from .rules import RULE_TYPES

logger = logging.getLogger(__name__)

_schema_validator: Optional[Draft202012Validator] = None


def _get_schema_validator() -> Draft202012Validator:
    global _schema_validator
    if _schema_validator is None:
        schema_file = files("compare_validation").joinpath("rule-table.schema.json")
        with schema_file.open("r") as f:
            _schema_validator = Draft202012Validator(json.load(f))
    return _schema_validator


def import_class(reference: str) -> type:
    """
    Import a class from "module:QualName" or "module.ClassName".

    Raises:
        RuleTableError: If the module or class cannot be found
    """
    if ":" in reference:
        module_name, _, qualname = reference.partition(":")
    else:
        module_name, _, qualname = reference.rpartition(".")
    if not module_name or not qualname:
        raise RuleTableError(f"Invalid class reference '{reference}'")

    try:
        target: Any = importlib.import_module(module_name)
    except ImportError as e:
        raise RuleTableError(f"Cannot import module for '{reference}': {e}") from e

    for part in qualname.split("."):
        try:
            target = getattr(target, part)
        except AttributeError:
            raise RuleTableError(f"Class '{qualname}' not found in module '{module_name}'") from None

    if not isinstance(target, type):
        raise RuleTableError(f"'{reference}' is not a class")
    return target


class RuleLoader:
    """Loads YAML rule tables into a RuleRegistry."""

    def __init__(self, registry: Optional[RuleRegistry] = None, base_dir: Optional[str] = None):
        """
        Args:
            registry: Target registry (defaults to the process-wide one)
            base_dir: Directory relative table paths resolve against
        """
        self.registry = registry if registry is not None else get_registry()
        self.base_dir = base_dir

    def load_table(self, uri: str) -> List[type]:
        """
        Load a rule table from a path, file:// or http(s):// URI.

        Returns:
            The model classes that received rules
        """
        logger.info(f"Loading rule table from {uri}")
        table = load_yaml_uri(uri, self.base_dir)
        return self.load_rules(table, source=uri)

    def load_rules(self, table: Dict[str, Any], source: str = "<table>") -> List[type]:
        """
        Register the rules of an already-parsed rule table.

        Raises:
            RuleTableError: If the table fails schema validation or references
                an unknown class
            MemberNotFoundError: If a rule is keyed by or references a member
                the model lacks
        """
        error = best_match(_get_schema_validator().iter_errors(table))
        if error is not None:
            location = " -> ".join(str(p) for p in error.path) if error.path else "root"
            raise RuleTableError(f"Invalid rule table {source} at {location}: {error.message}")

        # Build everything before registering so a bad entry registers nothing.
        pending = []
        for reference, model in table["models"].items():
            shape = import_class(reference)
            members = []
            for member, rule_configs in (model.get("rules") or {}).items():
                rules = [
                    RULE_TYPES[config["rule"]](
                        config["other"],
                        must_be_same_type=config.get("must_be_same_type", False),
                        error_message=config.get("error_message"),
                    )
                    for config in rule_configs
                ]
                resolve_member(shape, member)
                for rule in rules:
                    resolve_member(shape, rule.other_property_name)
                members.append((member, rules))
            pending.append((shape, members, model.get("display_names") or {}))

        loaded = []
        for shape, members, display_names in pending:
            for member, rules in members:
                self.registry.register(shape, member, *rules, check_members=False)
            for member, name in display_names.items():
                self.registry.set_display_name(shape, member, name)
            loaded.append(shape)

        logger.info(f"Registered rules for {len(loaded)} model(s) from {source}")
        return loaded
