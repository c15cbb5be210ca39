"""Assemble the external ``run.py train`` invocation."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import List, Tuple

from trainlaunch.platforms import Platform

from .config import TrainingConfig
from .paths import STAGED_LABEL_FILENAME, ResolvedPaths

TRAINER_SCRIPT = "run.py"

__all__ = ["TRAINER_SCRIPT", "LaunchCommand", "build_launch_command"]


@dataclass(frozen=True)
class LaunchCommand:
    """Argument vector for the trainer plus the directory it must run from."""

    argv: Tuple[str, ...]
    cwd: Path
    platform: Platform

    @property
    def text(self) -> str:
        return self.platform.render_command(self.argv)

    def flag_value(self, flag: str) -> str | None:
        """Return the value following ``flag`` or ``None`` when it is absent."""

        try:
            index = self.argv.index(flag)
        except ValueError:
            return None
        if index + 1 >= len(self.argv):
            return None
        return self.argv[index + 1]


def _format_flag_value(value: object) -> str:
    if isinstance(value, bool):
        return "True" if value else "False"
    return str(value)


def build_launch_command(
    config: TrainingConfig, paths: ResolvedPaths, depth: int
) -> LaunchCommand:
    """Return the trainer invocation for ``config``.

    The flag order is fixed. ``--retrain_from`` appears only when retraining
    and ``--log_dir`` only on platforms that support passing it.
    """

    platform = config.platform
    flags: List[Tuple[str, object]] = [
        ("--path_prefix", config.path_prefix),
        ("--architecture", config.architecture),
        ("--depth", depth),
        ("--num_gpus", config.num_gpus),
        ("--batch_size", config.batch_size),
        ("--train_info", STAGED_LABEL_FILENAME),
        ("--delimiter", config.delimiter),
        ("--num_epochs", config.num_epochs),
        ("--top_n", config.top_n),
        ("--num_threads", config.num_cores),
        ("--num_classes", config.num_classes),
    ]
    if config.retrain:
        flags.append(("--retrain_from", config.retrain_from))
    flags.append(("--shuffle", config.randomize))
    flags.append(("--max_to_keep", config.max_to_keep))
    if platform.passes_log_dir:
        flags.append(("--log_dir", config.log_dir_train))

    argv: List[str] = [f"{paths.python_loc}python", TRAINER_SCRIPT, "train"]
    for flag, value in flags:
        argv.extend([flag, _format_flag_value(value)])
    return LaunchCommand(argv=tuple(argv), cwd=paths.artifact_dir, platform=platform)
