"""Swiftlet config loader.

Reads swiftlet.config (YAML) from the project directory.
Caches result after first load. Call _reset_config() in tests.
"""

import os
import sys

import yaml

from swiftlet.errors import ConfigError

_config = None

DEFAULTS = {
    "parser": {
        "max_depth": 100,
        "allow_bare_return": False,
    },
    "diagnostics": {
        "show_expected": True,
    },
}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base, returning a new dict."""
    result = dict(base)
    for key, val in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(val, dict):
            result[key] = _deep_merge(result[key], val)
        else:
            result[key] = val
    return result


def max_depth_ceiling() -> int:
    """Largest nesting depth the parser can reach within the interpreter recursion limit."""
    # Up to four parser frames per nesting level, kept within half the limit.
    return sys.getrecursionlimit() // 8


def _validate(config: dict) -> dict:
    max_depth = config["parser"]["max_depth"]
    if isinstance(max_depth, bool) or not isinstance(max_depth, int) or max_depth < 1:
        raise ConfigError(f"parser.max_depth must be a positive integer, got {max_depth!r}")
    if max_depth > max_depth_ceiling():
        raise ConfigError(
            f"parser.max_depth must be at most {max_depth_ceiling()} "
            f"(recursion limit {sys.getrecursionlimit()}), got {max_depth}"
        )
    if not isinstance(config["parser"]["allow_bare_return"], bool):
        raise ConfigError("parser.allow_bare_return must be true or false")
    return config


def get_config(config_dir: str | None = None) -> dict:
    """Load and return the Swiftlet config, caching after first call."""
    global _config
    if _config is not None:
        return _config

    if config_dir is None:
        config_dir = os.getcwd()

    config_path = os.path.join(config_dir, "swiftlet.config")

    if os.path.exists(config_path):
        with open(config_path) as f:
            try:
                user_config = yaml.safe_load(f)
            except yaml.YAMLError as e:
                raise ConfigError(f"Cannot read {config_path}: {e}") from e
        if user_config and isinstance(user_config, dict):
            _config = _validate(_deep_merge(DEFAULTS, user_config))
        else:
            _config = _deep_merge(DEFAULTS, {})
    else:
        _config = _deep_merge(DEFAULTS, {})

    return _config


def _reset_config():
    """Clear cached config. Call this in tests."""
    global _config
    _config = None
