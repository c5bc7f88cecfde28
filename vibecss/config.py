"""
vibecss config management with extends/inheritance support.

Supports:
- Local file: extends: "./base.yaml"
- Built-in preset: extends: "@vibecss/web"
- Multiple extends: extends: ["./base.yaml", "@vibecss/unprefixed"]
"""

import logging
from pathlib import Path

import yaml

from .scanner_types import (
    DEFAULT_EXCLUDE_DIRS,
    DEFAULT_OUTPUT,
    DEFAULT_PREFIX,
    DEFAULT_SCAN_PATTERNS,
    GenerationOptions,
)

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "vibecss.yaml"
MAX_CONFIG_BYTES = 1_000_000

# Built-in presets (bundled with vibecss)
BUILTIN_PRESETS = {
    "@vibecss/unprefixed": "presets/unprefixed.yaml",
    "@vibecss/web": "presets/web.yaml",
}

DEFAULT_CONFIG = {
    "version": "1.0",
    "prefix": DEFAULT_PREFIX,
    "allow_unprefixed": False,
    "include_base": True,
    "output": DEFAULT_OUTPUT,
    "base_css": None,
    "scan_patterns": list(DEFAULT_SCAN_PATTERNS),
    "exclude_dirs": list(DEFAULT_EXCLUDE_DIRS),
    "ignore_classes": [],
    "watch": {"debounce_ms": 500},
}

_LIST_KEYS = ("scan_patterns", "exclude_dirs", "ignore_classes")


class ConfigError(Exception):
    """Raised when a config file cannot be parsed."""


def deep_merge(base: dict, override: dict) -> dict:
    """Deep merge two dicts. Override wins for conflicts.

    Special handling for lists: extends/appends instead of replace.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result:
            if isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = deep_merge(result[key], value)
            elif isinstance(result[key], list) and isinstance(value, list):
                # Child patterns are added to the parent's
                result[key] = result[key] + value
            else:
                result[key] = value
        else:
            result[key] = value

    return result


def with_defaults(config: dict) -> dict:
    """Fill missing keys from DEFAULT_CONFIG (lists are replaced, not extended)."""
    result = {key: (value.copy() if isinstance(value, (dict, list)) else value)
              for key, value in DEFAULT_CONFIG.items()}
    for key, value in config.items():
        if key == "watch" and isinstance(value, dict):
            result["watch"] = {**result["watch"], **value}
        else:
            result[key] = value
    return result


def resolve_preset_path(preset_name: str) -> Path | None:
    """Resolve built-in preset name to file path."""
    if preset_name not in BUILTIN_PRESETS:
        return None

    preset_path = Path(__file__).parent / BUILTIN_PRESETS[preset_name]
    if preset_path.exists():
        return preset_path

    return None


def _read_yaml(config_path: Path) -> dict:
    try:
        with open(config_path, encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if not isinstance(config, dict):
        raise ConfigError(f"Config must be a mapping: {config_path}")
    return config


def load_extended_config(
    config_path: Path,
    seen_paths: set[str] | None = None
) -> dict:
    """Load config with extends resolution.

    Args:
        config_path: Path to the config file
        seen_paths: Set of already-loaded paths (circular reference detection)

    Returns:
        Merged config dict
    """
    if seen_paths is None:
        seen_paths = set()

    path_key = str(config_path.resolve())
    if path_key in seen_paths:
        logger.warning("Circular config reference detected: %s", config_path)
        return {}

    seen_paths.add(path_key)

    config = _read_yaml(config_path)

    extends = config.pop("extends", None)
    if not extends:
        return config

    if isinstance(extends, str):
        extends = [extends]

    merged: dict = {}

    for parent_ref in extends:
        parent_config = resolve_extends(str(parent_ref), config_path.parent, seen_paths)
        if parent_config:
            merged = deep_merge(merged, parent_config)

    # Child overrides parents
    return deep_merge(merged, config)


def resolve_extends(
    ref: str,
    base_dir: Path,
    seen_paths: set[str]
) -> dict | None:
    """Resolve a single extends reference.

    Args:
        ref: The extends reference (path or preset name)
        base_dir: Directory of the config file (for relative paths)
        seen_paths: Set of already-loaded paths

    Returns:
        Loaded config dict or None
    """
    if ref.startswith("@vibecss/"):
        preset_path = resolve_preset_path(ref)
        if preset_path:
            return load_extended_config(preset_path, seen_paths.copy())
        logger.warning("Unknown preset: %s (available: %s)", ref, ", ".join(BUILTIN_PRESETS))
        return None

    local_path = Path(ref) if Path(ref).is_absolute() else base_dir / ref
    if local_path.exists():
        return load_extended_config(local_path, seen_paths.copy())

    logger.warning("Config file not found: %s", local_path)
    return None


def load_config(config_path: Path | str, defaults: bool = True) -> dict:
    """Load a config file with extends support, filled with defaults.

    This is the main entry point for loading configs. With defaults=False
    the merged file content is returned as-is (what validate_config checks).

    Raises:
        FileNotFoundError: the file does not exist.
        ValueError: the file is larger than MAX_CONFIG_BYTES.
        ConfigError: the YAML is malformed or not a mapping.
    """
    config_path = Path(config_path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config not found: {config_path}")

    if config_path.stat().st_size > MAX_CONFIG_BYTES:
        raise ValueError(f"Config file too large: {config_path}")

    config = load_extended_config(config_path)
    return with_defaults(config) if defaults else config


def find_config() -> Path | None:
    """Find vibecss.yaml in project or user home."""
    # Priority order:
    # 1. ./vibecss.yaml (project root)
    # 2. ./config/vibecss.yaml
    # 3. ~/.config/vibecss/vibecss.yaml
    candidates = [
        Path(CONFIG_FILENAME),
        Path("config") / CONFIG_FILENAME,
        Path.home() / ".config" / "vibecss" / CONFIG_FILENAME,
    ]

    for path in candidates:
        if path.exists():
            return path

    return None


def get_default_config_path() -> Path:
    """Get path to bundled default.yaml."""
    return Path(__file__).parent / "config" / "default.yaml"


def _is_str_list(value) -> bool:
    return isinstance(value, list) and all(isinstance(item, str) for item in value)


def validate_config(config: dict) -> list[str]:
    """Validate vibecss.yaml structure. Returns a list of errors (empty if valid)."""
    errors = []

    if "version" not in config:
        errors.append("Missing 'version' field")

    prefix = config.get("prefix", DEFAULT_PREFIX)
    if not isinstance(prefix, str):
        errors.append("'prefix' must be a string")
    elif prefix and not prefix.replace("-", "").replace("_", "").isalnum():
        errors.append(f"'prefix' must be alphanumeric: {prefix!r}")

    for key in ("allow_unprefixed", "include_base"):
        if key in config and not isinstance(config[key], bool):
            errors.append(f"'{key}' must be true or false")

    for key in ("output", "base_css"):
        value = config.get(key)
        if value is not None and not isinstance(value, str):
            errors.append(f"'{key}' must be a path string")

    for key in _LIST_KEYS:
        if key in config and not _is_str_list(config[key]):
            errors.append(f"'{key}' must be a list of strings")

    if "scan_patterns" in config and config["scan_patterns"] == []:
        errors.append("'scan_patterns' must not be empty")

    watch = config.get("watch", {})
    if not isinstance(watch, dict):
        errors.append("'watch' must be a mapping")
    else:
        debounce = watch.get("debounce_ms", 500)
        if isinstance(debounce, bool) or not isinstance(debounce, (int, float)) or debounce < 0:
            errors.append("'watch.debounce_ms' must be a non-negative number")

    unknown = set(config) - set(DEFAULT_CONFIG) - {"extends"}
    for key in sorted(unknown):
        errors.append(f"Unknown key: '{key}'")

    return errors


def options_from_config(config: dict) -> GenerationOptions:
    """Build GenerationOptions from a loaded config dict."""
    config = with_defaults(config)
    return GenerationOptions(
        prefix=config["prefix"] if config["prefix"] is not None else "",
        allow_unprefixed=bool(config["allow_unprefixed"]),
        scan_patterns=tuple(config["scan_patterns"]),
        include_base=bool(config["include_base"]),
        base_css_path=config["base_css"],
        ignore_classes=frozenset(config["ignore_classes"]),
        exclude_dirs=tuple(config["exclude_dirs"]),
    )


def debounce_seconds(config: dict) -> float:
    """Watch debounce interval in seconds."""
    return with_defaults(config)["watch"]["debounce_ms"] / 1000
