"""
Configuration Loader - Reconciliation settings with optional YAML overrides.

Thresholds and the judging window are plain constants in config.py; this
module lets a deployment override them from a YAML file without touching
code, and validates whatever it loads.
"""

import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from config import (
    DEDUPE_NAME_THRESHOLD, DEDUPE_NAME_ONLY_THRESHOLD,
    JUDGING_WINDOW_DAYS, MIN_CANDIDATE_CONFIDENCE
)
from shared_utils import logger


class ConfigurationError(Exception):
    """Raised when configuration is invalid or missing."""
    pass


@dataclass(frozen=True)
class ReconciliationSettings:
    """Tunable knobs of the duplicate resolver, lifecycle engine and gating."""
    name_threshold: float = DEDUPE_NAME_THRESHOLD
    name_only_threshold: float = DEDUPE_NAME_ONLY_THRESHOLD
    judging_window_days: int = JUDGING_WINDOW_DAYS
    min_confidence: float = MIN_CANDIDATE_CONFIDENCE

    def validate(self) -> 'ReconciliationSettings':
        for name in ('name_threshold', 'name_only_threshold', 'min_confidence'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)) or not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"'{name}' must be a number between 0 and 1, got {value!r}")

        if self.name_threshold > self.name_only_threshold:
            raise ConfigurationError("'name_threshold' must not exceed 'name_only_threshold'")

        window = self.judging_window_days
        if isinstance(window, bool) or not isinstance(window, int) or window < 0:
            raise ConfigurationError(f"'judging_window_days' must be a non-negative integer, got {window!r}")

        return self


def _read_yaml(config_path: Path) -> Dict[str, Any]:
    """Load a single YAML configuration file."""
    if not config_path.exists():
        raise ConfigurationError(f"Configuration file not found: {config_path}")

    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"YAML parsing error in {config_path}: {str(e)}")
    except OSError as e:
        raise ConfigurationError(f"Error reading {config_path}: {str(e)}")

    if config is None:
        return {}
    if not isinstance(config, dict):
        raise ConfigurationError(f"Invalid configuration format in {config_path}")

    # Settings may sit at top level or under a 'reconciliation' section
    section = config.get('reconciliation', config)
    if not isinstance(section, dict):
        raise ConfigurationError(f"'reconciliation' section in {config_path} must be a mapping")
    return section


def load_settings(path: Optional[Union[str, Path]] = None) -> ReconciliationSettings:
    """
    Build reconciliation settings.

    Args:
        path: YAML file with overrides. Falls back to HACKATHON_CONFIG_FILE;
              with neither, the config.py defaults are used.

    Returns:
        Validated ReconciliationSettings
    """
    path = path or os.getenv('HACKATHON_CONFIG_FILE')
    settings = ReconciliationSettings()

    if not path:
        return settings.validate()

    overrides = _read_yaml(Path(path))
    known = {f.name for f in fields(ReconciliationSettings)}
    unknown = sorted(set(overrides) - known)
    if unknown:
        raise ConfigurationError(f"Unknown reconciliation settings: {', '.join(unknown)}")

    settings = replace(settings, **overrides).validate()
    logger.log("info", f"Loaded reconciliation settings from {path}", **overrides)
    return settings


# Global settings instance
_settings = None

def get_settings() -> ReconciliationSettings:
    """Get the global reconciliation settings instance."""
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def reset_settings():
    """Drop the cached settings so the next get_settings() reloads them."""
    global _settings
    _settings = None
