"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ───────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Extraction tuning checked into the repo
#                            (strategy order, header tokens, placeholder)
#   2. .env file           - Local overrides (not committed)
#   3. Environment vars    - Set by whoever runs the sync
#
# load_config() reads the YAML file first, then deep-merges values from
# Settings on top.  The YAML file is optional; built-in defaults fill any
# gaps so a bare checkout still runs.
# ──────────────────────────────────────────────────────────────────────
"""

import copy
from pathlib import Path

import yaml

from src.config.settings import Settings
from src.services.extraction.chain import DEFAULT_STRATEGY_ORDER
from src.services.extraction.heuristic import (
    DEFAULT_HEADER_TOKENS,
    DEFAULT_PLACEHOLDER_DESCRIPTION,
)
from src.utils.errors import ConfigurationError

_DEFAULTS = {
    "extraction": {
        "strategies": list(DEFAULT_STRATEGY_ORDER),
        "header_tokens": list(DEFAULT_HEADER_TOKENS),
        "placeholder_description": DEFAULT_PLACEHOLDER_DESCRIPTION,
    },
}


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Args:
        path: Path to the YAML configuration file.
        settings: Settings to overlay; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.

    Raises:
        ConfigurationError: If the YAML file exists but cannot be parsed.
    """
    config: dict = copy.deepcopy(_DEFAULTS)

    config_path = Path(path)
    if config_path.exists():
        try:
            with open(config_path, encoding="utf-8") as f:
                yaml_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Invalid YAML in {config_path}: {exc}") from exc
        if not isinstance(yaml_config, dict):
            raise ConfigurationError(f"{config_path} must contain a mapping")
        _deep_merge(config, yaml_config)

    s = settings or Settings()
    env_overrides = {
        "app": {
            "env": s.app_env,
        },
        "source": {
            "url": s.source_url,
            "user_agent": s.user_agent,
            "accept_language": s.accept_language,
            "timeout": s.request_timeout,
        },
        "output": {
            "dir": s.output_dir,
            "index_path": str(s.resolved_index_path()),
        },
        "catalog": {
            "default_category": s.default_category,
            "cjk_identifiers": s.cjk_identifiers,
        },
        "logging": {
            "level": s.log_level,
        },
    }

    _deep_merge(config, env_overrides)
    return config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
