"""Tests for resprune.config."""

from __future__ import annotations

from pathlib import Path

import pytest

from resprune.config import PrunerConfig, load_config
from resprune.errors import ConfigError


def test_load_config_returns_defaults_when_missing(tmp_path: Path) -> None:
    config = load_config(tmp_path)

    root = tmp_path.resolve()
    assert isinstance(config, PrunerConfig)
    assert config.root == root
    assert config.declaration_roots == [root / "src" / "main" / "res"]
    assert root / "src" / "main" / "AndroidManifest.xml" in config.source_roots
    assert config.exclude_name_patterns == []
    assert config.target_resource_types == []
    assert config.exclude_resource_types == []
    assert config.cascade_prune is False
    assert config.framework_style_prefixes == ["android:", "Theme."]


def test_load_config_parses_expected_fields(tmp_path: Path) -> None:
    config_file = tmp_path / ".resprune.yml"
    config_file.write_text(
        """
declaration_roots: [app/src/main/res, /abs/res]
source_roots:
  - app/src/main/kotlin
  - app/src/main/AndroidManifest.xml
exclude_name_patterns: ["^ic_launcher.*", "keep_\\\\w+"]
target_resource_types: [drawable, string]
exclude_resource_types:
  - attr
cascade_prune: true
framework_style_prefixes: ["android:", "Theme.", "Base."]
""",
        encoding="utf-8",
    )

    config = load_config(config_file)

    root = tmp_path.resolve()
    assert config.declaration_roots == [root / "app/src/main/res", Path("/abs/res")]
    assert config.source_roots == [
        root / "app/src/main/kotlin",
        root / "app/src/main/AndroidManifest.xml",
    ]
    assert config.exclude_name_patterns == ["^ic_launcher.*", "keep_\\w+"]
    assert [pattern.pattern for pattern in config.compiled_patterns()] == [
        "^ic_launcher.*",
        "keep_\\w+",
    ]
    assert config.target_resource_types == ["drawable", "string"]
    assert config.exclude_resource_types == ["attr"]
    assert config.cascade_prune is True
    assert config.framework_style_prefixes == ["android:", "Theme.", "Base."]


def test_load_config_accepts_other_file_names_in_directory(tmp_path: Path) -> None:
    (tmp_path / ".resprune.yml").write_text("cascade_prune: yes\n", encoding="utf-8")

    config = load_config(tmp_path / "build.gradle.kts")

    assert config.cascade_prune is True


def test_empty_config_file_uses_defaults(tmp_path: Path) -> None:
    (tmp_path / ".resprune.yml").write_text("\n", encoding="utf-8")

    assert load_config(tmp_path).exclude_name_patterns == []


@pytest.mark.parametrize(
    ("content", "message"),
    [
        ("declaration_roots: [unclosed\n", "Failed to parse"),
        ("- just\n- a list\n", "mapping at the root"),
        ('exclude_name_patterns: ["(broken"]\n', "Invalid exclude pattern"),
        ("target_resource_types: [drawables]\n", "Unknown resource type 'drawables'"),
        ("exclude_resource_types: [font]\n", "Unknown resource type 'font'"),
    ],
)
def test_load_config_rejects_invalid_content(tmp_path: Path, content: str, message: str) -> None:
    (tmp_path / ".resprune.yml").write_text(content, encoding="utf-8")

    with pytest.raises(ConfigError, match=message):
        load_config(tmp_path)
