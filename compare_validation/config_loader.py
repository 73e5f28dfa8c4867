"""Configuration loading: bundled defaults plus an optional overlay URI."""

import copy
import logging
import os
import urllib.parse
from importlib.resources import files
from typing import Any, Dict, List, Optional

import requests
import yaml

logger = logging.getLogger(__name__)

FETCH_TIMEOUT_SECONDS = 10


def fetch_text(uri: str) -> str:
    """
    Fetch a document over HTTP(S).

    Raises:
        RuntimeError: If the request fails or returns a non-2xx status
    """
    try:
        response = requests.get(uri, timeout=FETCH_TIMEOUT_SECONDS)
        response.raise_for_status()
    except requests.RequestException as e:
        raise RuntimeError(f"Failed to fetch {uri}: {e}") from e
    return response.text


def resolve_local_path(uri: str, base_dir: Optional[str] = None) -> Optional[str]:
    """
    Map a relative path or file:// URI to a filesystem path.

    Returns None for http(s) URIs.

    Raises:
        ValueError: If the URI scheme is not supported
    """
    parsed = urllib.parse.urlparse(uri)

    if not parsed.scheme:
        if base_dir and not os.path.isabs(uri):
            return os.path.join(base_dir, uri)
        return uri

    if parsed.scheme == "file":
        return urllib.parse.unquote(parsed.path)

    if parsed.scheme in ("http", "https"):
        return None

    raise ValueError(f"Unsupported URI scheme: {parsed.scheme} in {uri}")


def load_yaml_uri(uri: str, base_dir: Optional[str] = None) -> Any:
    """
    Load a YAML document from a relative path, file:// or http(s):// URI.

    Relative paths resolve against base_dir when given.
    """
    path = resolve_local_path(uri, base_dir)
    if path is None:
        return yaml.safe_load(fetch_text(uri))
    with open(path) as f:
        return yaml.safe_load(f)


def _merge(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in overlay.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class ConfigLoader:
    """Loads the bundled local-config.yaml and merges an optional overlay over it."""

    def __init__(self, config_uri: Optional[str] = None):
        """
        Initialize config loader.

        Args:
            config_uri: Optional overlay config (relative path, file:// or
                http(s):// URI). Its values are merged over the bundled ones.

        Raises:
            ValueError: If the overlay URI scheme is unsupported or the
                overlay is not a mapping
            RuntimeError: If a remote overlay cannot be fetched
        """
        bundled = files("compare_validation").joinpath("local-config.yaml")
        with bundled.open("r") as f:
            self.local_config = yaml.safe_load(f) or {}

        self.config_uri = config_uri
        # Relative rule table paths resolve against the file that declares them.
        self.base_dir = None

        if config_uri:
            overlay = load_yaml_uri(config_uri) or {}
            if not isinstance(overlay, dict):
                raise ValueError(f"Config at {config_uri} must be a mapping")
            self.config = _merge(self.local_config, overlay)
            local_path = resolve_local_path(config_uri)
            if local_path is not None:
                self.base_dir = os.path.dirname(os.path.abspath(local_path))
            logger.info(f"Loaded configuration overlay from {config_uri}")
        else:
            self.config = copy.deepcopy(self.local_config)

    def get_messages(self) -> Dict[str, str]:
        """Get message template overrides."""
        return self.config.get("messages") or {}

    def get_type_display_names(self) -> Dict[str, str]:
        """Get the type display name table used by type mismatch errors."""
        return self.config.get("type_display_names") or {}

    def get_rule_table_uris(self) -> List[str]:
        """Get rule table URIs to load at service start-up."""
        return list(self.config.get("rule_tables") or [])


_config: Optional[ConfigLoader] = None


def get_config() -> ConfigLoader:
    """Return the process-wide configuration, loading the bundled one on first use."""
    global _config
    if _config is None:
        _config = ConfigLoader()
    return _config


def set_config(config: Optional[ConfigLoader]) -> None:
    """Replace the process-wide configuration (None resets to bundled defaults)."""
    global _config
    _config = config
