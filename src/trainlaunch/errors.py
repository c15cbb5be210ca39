"""Exception types raised while preparing and launching a training run."""

from __future__ import annotations

__all__ = ["ConfigurationError", "StagingError", "LaunchError"]


class ConfigurationError(ValueError):
    """Raised when launch parameters are invalid or inconsistent."""


class StagingError(OSError):
    """Raised when the label file cannot be staged into the artifact directory."""


class LaunchError(RuntimeError):
    """Raised when the external trainer process cannot be spawned."""
