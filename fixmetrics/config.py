"""Configuration — frozen dataclass layered from YAML, env vars and CLI args."""

import logging
import os
from dataclasses import dataclass, replace

import yaml

logger = logging.getLogger(__name__)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

_YAML_KEYS = ("log_file", "raw_output_file", "metrics_output_file", "log_level")

_ENV_VARS = {
    "log_file": "FIXMETRICS_LOG_FILE",
    "raw_output_file": "FIXMETRICS_RAW_OUTPUT",
    "metrics_output_file": "FIXMETRICS_METRICS_OUTPUT",
    "log_level": "FIXMETRICS_LOG_LEVEL",
}


@dataclass(frozen=True)
class Config:
    log_file: str = "tmp/FIX.4.4-CUST2_Order-ANCHORAGE.messages.current.log"
    raw_output_file: str = "tmp/log_data.json"
    metrics_output_file: str = "tmp/log_metrics.txt"
    log_level: str = "INFO"


def _normalize_level(level: str) -> str:
    level = level.strip().upper()
    if level not in LOG_LEVELS:
        raise ValueError(f"Invalid log level {level!r}, expected one of {', '.join(LOG_LEVELS)}")
    return level


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path or no file."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}

    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, ignoring it", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return {k: str(v) for k, v in data.items() if k in _YAML_KEYS and v is not None}


def load_config(yaml_data: dict | None = None, overrides: dict | None = None) -> Config:
    """Build Config from defaults, YAML data, env vars, then explicit overrides.

    Overrides with a None value are skipped, so argparse namespaces can be
    passed through unfiltered.
    """
    settings = dict(yaml_data or {})
    for key, env_var in _ENV_VARS.items():
        if env_var in os.environ:
            settings[key] = os.environ[env_var]
    for key, value in (overrides or {}).items():
        if key in _ENV_VARS and value is not None:
            settings[key] = value

    config = replace(Config(), **settings)
    return replace(config, log_level=_normalize_level(config.log_level))
