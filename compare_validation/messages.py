"""Default error message templates and message formatting."""

from typing import Dict

from .config_loader import get_config

# {0} is the display name of the annotated member, {1} the other member.
DEFAULT_MESSAGES: Dict[str, str] = {
    "equals_to": "'{0}' and '{1}' do not match.",
    "not_equals_to": "'{0}' and '{1}' must not match.",
    "less_than": "'{0}' must be less than '{1}'.",
    "less_than_or_equals_to": "'{0}' must be less than or equal to '{1}'.",
    "greater_than": "'{0}' must be greater than '{1}'.",
    "greater_than_or_equals_to": "'{0}' must be greater than or equal to '{1}'.",
    "cannot_be_compared": "'{0}' and '{1}' cannot be compared.",
    "type_mismatch": "'{0}' type ({1}) and '{2}' type ({3}) must be the same.",
    "member_not_found": "Could not find a property named {0}.",
}


def get_template(key: str) -> str:
    """
    Return the message template for key.

    Overrides from the active configuration's ``messages`` section take
    precedence over the built-in defaults.

    Raises:
        KeyError: If key is neither configured nor a built-in template
    """
    overrides = get_config().get_messages()
    if key in overrides:
        return overrides[key]
    return DEFAULT_MESSAGES[key]


def format_message(template: str, this_display_name: str, other_display_name: str) -> str:
    """Render template with the two member display names."""
    return template.format(this_display_name, other_display_name)
