"""YAML configuration loader with environment variable overrides.

# ─── CONFIGURATION HIERARCHY ──────────────────────────────────────────
#
# Configuration is loaded in layers (later layers override earlier):
#
#   1. config/config.yaml  - Static defaults checked into the repo
#   2. .env file           - Local developer overrides (not committed)
#   3. Environment vars    - Set at deploy time
#
# load_config() reads the YAML file first, then deep-merges the values
# resolved by Settings (which already folds in .env and env vars) on top.
#
#   base = {"api": {"cors_origins": ["*"]}}
#   overrides = {"api": {"host": "0.0.0.0"}}
#   result = {"api": {"cors_origins": ["*"], "host": "0.0.0.0"}}
# ──────────────────────────────────────────────────────────────────────
"""

from pathlib import Path

import yaml

from jutsudex.config.settings import Settings


def load_config(path: str = "config/config.yaml", settings: Settings | None = None) -> dict:
    """Load YAML config and merge with environment-based Settings.

    Environment variables (via Settings) override YAML values where keys overlap.

    Args:
        path: Path to the YAML configuration file.
        settings: Pre-built settings; a fresh ``Settings()`` when omitted.

    Returns:
        Fully resolved configuration dictionary.
    """
    config_path = Path(path)
    if config_path.exists():
        with open(config_path, encoding="utf-8") as f:
            yaml_config = yaml.safe_load(f) or {}
    else:
        yaml_config = {}

    settings = settings or Settings()
    env_overrides = {
        "app": {
            "host": settings.app_host,
            "port": settings.app_port,
            "env": settings.app_env,
        },
        "catalog": {
            "source_url": settings.source_url,
            "db_path": settings.catalog_db_path,
            "http_timeout": settings.http_timeout,
        },
        "matching": {
            "match_level": settings.match_level.name.lower(),
            "search_limit": settings.search_limit,
            "description_preview_limit": settings.description_preview_limit,
            "search_on_failed": settings.search_on_failed,
            "phonetic_enabled": settings.phonetic_enabled,
        },
        "messages": {
            "locale": settings.locale,
        },
        "logging": {
            "level": settings.log_level,
        },
    }

    _deep_merge(yaml_config, env_overrides)
    return yaml_config


def _deep_merge(base: dict, overrides: dict) -> None:
    """Recursively merge overrides into base dict, mutating base in place."""
    for key, value in overrides.items():
        if key in base and isinstance(base[key], dict) and isinstance(value, dict):
            _deep_merge(base[key], value)
        else:
            base[key] = value
