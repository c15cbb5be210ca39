"""Validation, staging, command assembly and supervision of training runs."""

from .architectures import ARCHITECTURE_PROFILES, ArchitectureProfile, resolve_depth
from .command import LaunchCommand, build_launch_command
from .config import TrainingConfig, config_from_mapping, validate_config
from .paths import ResolvedPaths, resolve_paths
from .report import RunOutcome, RunStatus, format_runtime, summarise_run
from .runner import JobRunner, JobState
from .staging import stage_label_file
from .train import main, train

__all__ = [
    "ARCHITECTURE_PROFILES",
    "ArchitectureProfile",
    "JobRunner",
    "JobState",
    "LaunchCommand",
    "ResolvedPaths",
    "RunOutcome",
    "RunStatus",
    "TrainingConfig",
    "build_launch_command",
    "config_from_mapping",
    "format_runtime",
    "main",
    "resolve_depth",
    "resolve_paths",
    "stage_label_file",
    "summarise_run",
    "train",
    "validate_config",
]
