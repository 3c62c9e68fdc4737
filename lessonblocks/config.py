from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when configuration loading or validation fails."""

    pass


@dataclass
class BlocksConfig:
    """Default titles used when a block does not supply its own."""

    terminal_title: str = "Terminal"
    checklist_title: str = "Key Takeaways"
    mistakes_title: str = "Common Mistakes"
    pager_source: str = "ALERT"


@dataclass
class RenderConfig:
    """Renderer settings.

    ``theme_overrides`` maps kind name -> variant -> theme field -> CSS
    classes, merged over the built-in theme tables.
    """

    theme_overrides: dict[str, dict[str, dict[str, str]]] = field(default_factory=dict)
    wrap_document: bool = False


@dataclass
class DebugConfig:
    """Debug mode settings."""

    enabled: bool = False
    trace: bool = False
    verbose: bool = False


@dataclass
class AppConfig:
    """Top-level configuration aggregating all subsections."""

    blocks: BlocksConfig = field(default_factory=BlocksConfig)
    render: RenderConfig = field(default_factory=RenderConfig)
    debug: DebugConfig = field(default_factory=DebugConfig)


def _section(raw: dict, name: str) -> dict:
    # `or {}` fallback handles YAML null values for optional sections
    value = raw.get(name, {}) or {}
    if not isinstance(value, dict):
        raise ConfigError(f"{name} must be a mapping, got {type(value).__name__}")
    return value


def _theme_overrides(render_raw: dict) -> dict[str, dict[str, dict[str, str]]]:
    overrides = render_raw.get("themes", {}) or {}
    if not isinstance(overrides, dict):
        raise ConfigError("render.themes must be a mapping of kind -> variant -> fields")
    for kind, variants in overrides.items():
        if not isinstance(variants, dict) or not all(
            isinstance(fields, dict) for fields in variants.values()
        ):
            raise ConfigError(f"render.themes.{kind} must map variants to field mappings")
    return {
        str(kind): {
            str(variant): {str(k): str(v) for k, v in fields.items()}
            for variant, fields in variants.items()
        }
        for kind, variants in overrides.items()
    }


def load_config(path: str) -> AppConfig:
    """Load application configuration from a YAML file.

    Every section is optional; missing keys keep their defaults.

    Args:
        path: Filesystem path to the YAML configuration file.

    Returns:
        A fully populated AppConfig instance.

    Raises:
        ConfigError: If the file does not exist, is not valid YAML, or a
            section is not a mapping.
    """
    config_path = Path(path)
    if not config_path.exists():
        raise ConfigError(f"Config file not found: {path}")

    try:
        with open(config_path, encoding="utf-8") as f:
            raw = yaml.safe_load(f)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Invalid YAML in {path}: {exc}") from exc

    raw = raw or {}
    if not isinstance(raw, dict):
        raise ConfigError(f"Config root must be a mapping: {path}")

    blocks_raw = _section(raw, "blocks")
    render_raw = _section(raw, "render")
    debug_raw = _section(raw, "debug")

    defaults = BlocksConfig()
    config = AppConfig(
        blocks=BlocksConfig(
            terminal_title=blocks_raw.get("terminal_title", defaults.terminal_title),
            checklist_title=blocks_raw.get("checklist_title", defaults.checklist_title),
            mistakes_title=blocks_raw.get("mistakes_title", defaults.mistakes_title),
            pager_source=blocks_raw.get("pager_source", defaults.pager_source),
        ),
        render=RenderConfig(
            theme_overrides=_theme_overrides(render_raw),
            wrap_document=bool(render_raw.get("wrap_document", False)),
        ),
        debug=DebugConfig(
            enabled=bool(debug_raw.get("enabled", False)),
            trace=bool(debug_raw.get("trace", False)),
            verbose=bool(debug_raw.get("verbose", False)),
        ),
    )

    logger.debug("Loaded config from %s", path)
    logger.debug("Theme overrides for kinds=%s", sorted(config.render.theme_overrides))
    return config
