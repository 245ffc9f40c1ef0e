"""Exception hierarchy for resprune."""

from __future__ import annotations


class ResPruneError(RuntimeError):
    """Base class for errors raised by resprune."""


class ConfigError(ResPruneError):
    """Raised when the configuration file cannot be parsed or validated."""


class PruneError(ResPruneError):
    """Raised when a single removal operation cannot be applied."""


class LocationShapeError(PruneError):
    """Raised when an editor receives an asset with the wrong location kind."""


class LineRangeError(PruneError):
    """Raised when a recorded line range no longer fits the file on disk."""


__all__ = [
    "ConfigError",
    "LineRangeError",
    "LocationShapeError",
    "PruneError",
    "ResPruneError",
]
