"""
Tests for ValidationService API
"""
from dataclasses import dataclass
from typing import Optional

import pytest
import yaml

from compare_validation import (
    NotComparableError,
    RuleRegistry,
    ValidationService,
)
from compare_validation.config_loader import get_config


@dataclass
class Budget:
    floor: Optional[float] = None
    ceiling: Optional[float] = None
    currency: str = "USD"
    fallback_currency: str = "EUR"


@pytest.fixture
def config_file(tmp_path):
    """Config overlay pointing at a rule table next to it."""
    table = {
        "models": {
            f"{__name__}:Budget": {
                "display_names": {"ceiling": "Upper limit", "floor": "Lower limit"},
                "rules": {
                    "ceiling": [{"rule": "greater_than", "other": "floor"}],
                    "fallback_currency": [{"rule": "not_equals_to", "other": "currency"}],
                },
            }
        }
    }
    (tmp_path / "budget-rules.yaml").write_text(yaml.safe_dump(table, sort_keys=False))
    config = tmp_path / "config.yaml"
    config.write_text("rule_tables:\n  - budget-rules.yaml\n")
    return config


@pytest.fixture
def service(config_file):
    """A service with its own registry, configured from config_file."""
    return ValidationService(str(config_file), registry=RuleRegistry())


class TestInitialization:
    """Test ValidationService initialization."""

    def test_create_service(self):
        service = ValidationService(registry=RuleRegistry())
        assert service.validator is not None
        assert service.rule_loader is not None

    def test_config_becomes_process_wide(self, service):
        assert get_config() is service.config_loader

    def test_configured_rule_tables_loaded(self, service):
        assert service.registry.is_registered(Budget)


class TestValidate:
    """Test validate(), try_validate() and is_valid()."""

    def test_valid(self, service):
        assert service.validate(Budget(10.0, 20.0)) == []
        assert service.is_valid(Budget(10.0, 20.0))

    def test_invalid(self, service):
        results = service.validate(Budget(20.0, 10.0, currency="EUR"))
        assert [r.message for r in results] == [
            "'Upper limit' must be greater than 'Lower limit'.",
            "'fallback_currency' and 'currency' must not match.",
        ]
        assert not service.is_valid(Budget(20.0, 10.0))

    def test_try_validate(self, service):
        results = []
        assert service.try_validate(Budget(20.0, 10.0), results) is False
        assert len(results) == 1

    def test_numeric_string_is_converted(self, service):
        """A str floor is converted to float before comparing."""
        assert service.validate(Budget("5", 20.0)) == []

    def test_configuration_error_propagates(self, service):
        with pytest.raises(NotComparableError) as exc_info:
            service.validate(Budget("low", 20.0))
        assert str(exc_info.value) == "'Upper limit' and 'Lower limit' cannot be compared."


class TestDiscoverRules:
    """Test discover_rules()."""

    def test_discover_rules(self, service):
        rules = service.discover_rules(Budget)
        assert list(rules) == ["ceiling", "fallback_currency"]
        assert rules["ceiling"] == [{
            "rule": "greater_than",
            "other": "floor",
            "must_be_same_type": False,
            "error_message": "'{0}' must be greater than '{1}'.",
            "message": "'Upper limit' must be greater than 'Lower limit'.",
        }]

    def test_unregistered_model(self, service):
        assert service.discover_rules(dict) == {}


def test_format_message():
    assert ValidationService.format_message("'{0}' must be less than '{1}'.", "a", "b") == "'a' must be less than 'b'."
