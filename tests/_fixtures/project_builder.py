"""Helper utilities for constructing temporary Android modules in tests."""

from __future__ import annotations

import textwrap
from pathlib import Path
from typing import Mapping

from resprune.config import PrunerConfig


class ProjectBuilder:
    """Utility for writing resources and sources into a throwaway module."""

    def __init__(self, tmp_path: Path) -> None:
        self.root = tmp_path / "module"
        self.root.mkdir()

    @property
    def res(self) -> Path:
        return self.root / "src" / "main" / "res"

    @property
    def sources(self) -> Path:
        return self.root / "src" / "main" / "kotlin"

    def write(self, files: Mapping[str, str]) -> None:
        """Write `path -> contents` entries relative to the module root."""
        for relative, content in files.items():
            path = self.root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            normalised = textwrap.dedent(content).lstrip("\n")
            path.write_text(normalised, encoding="utf-8")

    def write_binary(self, relative: str, payload: bytes = b"\x89PNG\r\n") -> Path:
        path = self.root / relative
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(payload)
        return path

    def config(self, **overrides: object) -> PrunerConfig:
        """Return a config rooted at the module with the standard source sets."""
        config = PrunerConfig.for_root(self.root)
        for key, value in overrides.items():
            setattr(config, key, value)
        return config

    def path(self, relative: str = "") -> Path:
        return self.root / relative if relative else self.root


__all__ = ["ProjectBuilder"]
