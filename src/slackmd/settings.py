"""Configuration for slackmd.

Loads configuration from:
1. slackmd.yaml (rendering defaults, message branding, log level)
2. Environment variables (.env)

Only the CLI and the standard-message helpers read settings. The converter
itself takes none.
"""
from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv

CONFIG_FILE = "slackmd.yaml"
DEFAULT_CALLBACK_PREFIX = "cllbck"


class SettingsError(RuntimeError):
    """Raised when slackmd.yaml cannot be read or has the wrong shape."""


@dataclass(frozen=True)
class RenderConfig:
    """Message rendering defaults."""
    pretty: bool = False
    callback_prefix: str = DEFAULT_CALLBACK_PREFIX  # Auto-assigned callback ids: cllbck1, cllbck2, ...


@dataclass(frozen=True)
class BrandingConfig:
    """Icons and support contact used by standard error/success/warning messages."""
    support_url: str | None = None
    support_label: str = "support"
    error_icon: str | None = None
    success_icon: str | None = None
    warning_icon: str | None = None


@dataclass(frozen=True)
class AdvancedConfig:
    """Technical settings."""
    log_level: str = "WARNING"


@dataclass(frozen=True)
class Settings:
    """Complete slackmd configuration."""
    project_root: Path
    render: RenderConfig
    branding: BrandingConfig
    advanced: AdvancedConfig


def _find_project_root() -> Path:
    """Find project root by looking for slackmd.yaml or a .env file."""
    current = Path.cwd().resolve()

    for path in [current] + list(current.parents):
        if (path / CONFIG_FILE).exists():
            return path
        if (path / ".env").exists():
            return path

    return current


def _load_yaml_config(path: Path) -> dict[str, Any]:
    """Load and parse YAML config file."""
    if not path.exists():
        return {}

    try:
        with open(path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise SettingsError(f"Cannot read {path}: {e}") from e

    if not isinstance(config, dict):
        raise SettingsError(f"{path} must contain a mapping, got {type(config).__name__}")
    return config


def _section(config: dict[str, Any], name: str) -> dict[str, Any]:
    section = config.get(name) or {}
    if not isinstance(section, dict):
        raise SettingsError(f"'{name}' in {CONFIG_FILE} must be a mapping")
    return section


def _optional_str(value: Any) -> str | None:
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def load_settings() -> Settings:
    """Load slackmd configuration.

    Process:
    1. Find project root
    2. Load .env file
    3. Load slackmd.yaml (if exists)
    4. Apply environment overrides
    5. Build Settings object
    """
    project_root = _find_project_root()

    env_file = project_root / ".env"
    if env_file.exists():
        load_dotenv(env_file)

    config = _load_yaml_config(project_root / CONFIG_FILE)

    render_config = _section(config, "render")
    render = RenderConfig(
        pretty=bool(render_config.get("pretty", False)),
        callback_prefix=(
            os.getenv("SLACKMD_CALLBACK_PREFIX")
            or _optional_str(render_config.get("callback_prefix"))
            or DEFAULT_CALLBACK_PREFIX
        ),
    )

    branding_config = _section(config, "branding")
    branding = BrandingConfig(
        support_url=_optional_str(
            os.getenv("SLACKMD_SUPPORT_URL") or branding_config.get("support_url")
        ),
        support_label=_optional_str(branding_config.get("support_label")) or "support",
        error_icon=_optional_str(branding_config.get("error_icon")),
        success_icon=_optional_str(branding_config.get("success_icon")),
        warning_icon=_optional_str(branding_config.get("warning_icon")),
    )

    advanced_config = _section(config, "advanced")
    advanced = AdvancedConfig(
        log_level=str(
            os.getenv("SLACKMD_LOG_LEVEL") or advanced_config.get("log_level") or "WARNING"
        ).upper(),
    )

    return Settings(
        project_root=project_root,
        render=render,
        branding=branding,
        advanced=advanced,
    )
