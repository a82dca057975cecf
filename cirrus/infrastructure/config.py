"""
Configuration Module

Architectural Intent:
- Centralized configuration loading from a JSON file
- Provides typed access to all Cirrus settings
- Falls back to sensible defaults when config file is absent
- Environment variables override file-based config

Design Decisions:
- Config is a frozen dataclass for immutability after load
- Nested config sections map to sub-dataclasses
- Loaded once at startup and handed to every provider; nothing below the
  composition root reads the process environment
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional
import dataclasses
import json
import logging
import os

logger = logging.getLogger(__name__)

DEFAULT_REGION = "us-east-1"


def resolve_default_region(environ: Optional[Mapping[str, str]] = None) -> str:
    """AWS_REGION, then AWS_DEFAULT_REGION, then us-east-1."""
    env = os.environ if environ is None else environ
    return env.get("AWS_REGION") or env.get("AWS_DEFAULT_REGION") or DEFAULT_REGION


@dataclass(frozen=True)
class AWSConfig:
    """AWS session configuration."""
    region: str = DEFAULT_REGION
    profile: str = ""
    endpoint_url: str = ""


@dataclass(frozen=True)
class UIConfig:
    """Interactive browser behaviour."""
    debounce_ms: int = 1000
    cache_failures: bool = False


@dataclass(frozen=True)
class CirrusConfig:
    """Root configuration for the Cirrus application."""
    aws: AWSConfig = field(default_factory=AWSConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "WARNING"
    log_file: str = ""


def _env_override(data: dict, prefix: str = "CIRRUS") -> dict:
    """Override config values with environment variables.

    Environment variables follow the pattern CIRRUS_SECTION_KEY.
    For example: CIRRUS_AWS_REGION=eu-west-1, CIRRUS_UI_DEBOUNCE_MS=500
    """
    for key, value in os.environ.items():
        if not key.startswith(f"{prefix}_"):
            continue
        name = key[len(prefix) + 1:].lower()
        if name in ("log_level", "log_file"):
            data[name] = value
            continue
        parts = name.split("_", 1)
        if len(parts) == 2:
            section, field_name = parts
            if not isinstance(data.get(section), dict):
                data[section] = {}
            data[section][field_name] = value
        else:
            data[parts[0]] = value
    return data


def _parse_config_file(path: Path) -> dict:
    """Parse a JSON config file. Returns empty dict on failure."""
    try:
        with open(path) as f:
            return json.load(f)
    except FileNotFoundError:
        logger.debug("Config file not found: %s", path)
        return {}
    except json.JSONDecodeError as e:
        logger.warning("Invalid config file %s: %s", path, e)
        return {}


def _build_sub_config(cls, data: dict):
    """Build a sub-config dataclass from a dict, ignoring unknown keys."""
    valid_fields = {f.name for f in dataclasses.fields(cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}

    # Convert string numbers to int/bool
    for f in dataclasses.fields(cls):
        if f.name in filtered and isinstance(filtered[f.name], str):
            if f.type == "int":
                filtered[f.name] = int(filtered[f.name])
            elif f.type == "bool":
                filtered[f.name] = filtered[f.name].lower() in ("true", "1", "yes")

    return cls(**filtered)


def load_config(
    path: Optional[str] = None,
    env_prefix: str = "CIRRUS",
) -> CirrusConfig:
    """Load configuration from file and environment variables.

    Priority (highest to lowest):
    1. Environment variables (CIRRUS_SECTION_KEY)
    2. Config file values
    3. Defaults (the AWS region default comes from AWS_REGION /
       AWS_DEFAULT_REGION)

    Args:
        path: Path to config file (JSON). Defaults to cirrus.json in CWD.
        env_prefix: Environment variable prefix. Defaults to CIRRUS.
    """
    config_path = Path(path) if path else Path("cirrus.json")
    data = _parse_config_file(config_path)
    data = _env_override(data, env_prefix)

    aws_data = dict(data.get("aws", {}))
    aws_data.setdefault("region", resolve_default_region())

    return CirrusConfig(
        aws=_build_sub_config(AWSConfig, aws_data),
        ui=_build_sub_config(UIConfig, data.get("ui", {})),
        log_level=data.get("log_level", "WARNING"),
        log_file=data.get("log_file", ""),
    )


def with_overrides(config: CirrusConfig, **aws_overrides: Optional[str]) -> CirrusConfig:
    """Apply non-empty CLI flag values on top of a loaded config."""
    changes = {k: v for k, v in aws_overrides.items() if v}
    if not changes:
        return config
    return dataclasses.replace(config, aws=dataclasses.replace(config.aws, **changes))
