"""Configuration loading for resprune (.resprune.yml)."""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

from .detectors.markup import DEFAULT_FRAMEWORK_PREFIXES
from .errors import ConfigError
from .models import AssetType

CONFIG_FILENAME = ".resprune.yml"

DEFAULT_DECLARATION_ROOTS = ("src/main/res",)
DEFAULT_SOURCE_ROOTS = ("src/main/java", "src/main/kotlin", "src/main/AndroidManifest.xml")


@dataclass
class PrunerConfig:
    """Represents the settings defined in .resprune.yml."""

    root: Path
    declaration_roots: List[Path] = field(default_factory=list)
    source_roots: List[Path] = field(default_factory=list)
    exclude_name_patterns: List[str] = field(default_factory=list)
    target_resource_types: List[str] = field(default_factory=list)
    exclude_resource_types: List[str] = field(default_factory=list)
    cascade_prune: bool = False
    framework_style_prefixes: List[str] = field(
        default_factory=lambda: list(DEFAULT_FRAMEWORK_PREFIXES)
    )

    @classmethod
    def for_root(cls, root: Path) -> "PrunerConfig":
        """Defaults for a module laid out the standard way under ``root``."""
        root = root.resolve()
        return cls(
            root=root,
            declaration_roots=[root / entry for entry in DEFAULT_DECLARATION_ROOTS],
            source_roots=[root / entry for entry in DEFAULT_SOURCE_ROOTS],
        )

    def compiled_patterns(self) -> List["re.Pattern[str]"]:
        return [_compile_pattern(pattern) for pattern in self.exclude_name_patterns]

    def validate(self) -> None:
        """Raise ConfigError for unknown type names or broken patterns."""
        self.compiled_patterns()
        known = set(AssetType.type_names())
        for key in ("target_resource_types", "exclude_resource_types"):
            for name in getattr(self, key):
                if name not in known:
                    raise ConfigError(
                        f"Unknown resource type '{name}' in {key}; "
                        f"expected one of: {', '.join(sorted(known))}"
                    )


def load_config(config_path: Path) -> PrunerConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    config = PrunerConfig.for_root(root)
    if not config_file.exists():
        return config

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    if "declaration_roots" in data:
        config.declaration_roots = _as_path_list(root, data.get("declaration_roots"))
    if "source_roots" in data:
        config.source_roots = _as_path_list(root, data.get("source_roots"))
    config.exclude_name_patterns = _as_str_list(data.get("exclude_name_patterns"))
    config.target_resource_types = _as_str_list(data.get("target_resource_types"))
    config.exclude_resource_types = _as_str_list(data.get("exclude_resource_types"))
    config.cascade_prune = _as_bool(data.get("cascade_prune")) or False
    if "framework_style_prefixes" in data:
        config.framework_style_prefixes = _as_str_list(data.get("framework_style_prefixes"))

    config.validate()
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return {} if loaded is None else loaded


def _compile_pattern(pattern: str) -> "re.Pattern[str]":
    try:
        return re.compile(pattern)
    except re.error as exc:
        raise ConfigError(f"Invalid exclude pattern '{pattern}': {exc}") from exc


def _as_path_list(root: Path, value: Any) -> List[Path]:
    paths: List[Path] = []
    for entry in _as_str_list(value):
        path = Path(entry).expanduser()
        paths.append(path if path.is_absolute() else root / path)
    return paths


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float, bool))]
    return []


__all__ = ["CONFIG_FILENAME", "ConfigError", "PrunerConfig", "load_config"]
