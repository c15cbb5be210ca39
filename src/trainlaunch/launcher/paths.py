"""Filesystem locations derived from a :class:`TrainingConfig`."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from .config import TrainingConfig

STAGED_LABEL_FILENAME = "data_info_train.csv"

__all__ = [
    "STAGED_LABEL_FILENAME",
    "ResolvedPaths",
    "normalise_python_location",
    "resolve_paths",
]


@dataclass(frozen=True)
class ResolvedPaths:
    artifact_dir: Path
    python_loc: str
    staged_label_file: Path
    output_dir: Path


def normalise_python_location(python_loc: str) -> str:
    """Return ``python_loc`` guaranteed to end with a path separator."""

    if python_loc.endswith(("/", "\\")):
        return python_loc
    return f"{python_loc}/"


def resolve_paths(config: TrainingConfig) -> ResolvedPaths:
    """Derive the artifact directory and related paths for ``config``.

    The artifact directory is ``model_dir`` itself; ``log_dir_train`` only
    names the directory the trainer is expected to create inside it. Nothing
    here touches the process working directory.
    """

    artifact_dir = Path(config.model_dir).expanduser()
    return ResolvedPaths(
        artifact_dir=artifact_dir,
        python_loc=normalise_python_location(config.python_loc),
        staged_label_file=artifact_dir / STAGED_LABEL_FILENAME,
        output_dir=artifact_dir / config.log_dir_train,
    )
