"""Configuration loading utilities."""

import logging
from pathlib import Path

import yaml

from netprophet.core.config import DEFAULT_CONFIG, DEFAULT_WEIGHTS, EngineConfig

log = logging.getLogger(__name__)


def load_config(config_path: str = "configs/default.yaml") -> EngineConfig:
    """Load a YAML calibration file on top of the default configuration.

    Unknown keys and unknown factor weights are rejected so a typo cannot
    silently fall back to a default.
    """
    path = Path(config_path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")
    with open(path) as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"{config_path}: expected a mapping at the top level")

    unknown = set(cfg) - EngineConfig.field_names()
    if unknown:
        raise ValueError(f"Unknown config keys: {', '.join(sorted(unknown))}")
    unknown_weights = set(cfg.get("weights") or {}) - set(DEFAULT_WEIGHTS)
    if unknown_weights:
        raise ValueError(f"Unknown factor weights: {', '.join(sorted(unknown_weights))}")

    config = DEFAULT_CONFIG.with_overrides(**cfg)
    log.info(f"Loaded engine config from {config_path}")
    return config
