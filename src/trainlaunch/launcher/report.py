"""Decide whether a training run worked and describe the result."""

from __future__ import annotations

import enum
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from trainlaunch.platforms import Platform

__all__ = ["RunOutcome", "RunStatus", "format_runtime", "summarise_run"]


class RunStatus(enum.Enum):
    DRY_RUN = "dry_run"
    SUCCEEDED = "succeeded"
    FAILED = "failed"
    COMPLETED_UNVERIFIED = "completed_unverified"


@dataclass(frozen=True)
class RunOutcome:
    status: RunStatus
    elapsed: float
    message: str
    returncode: Optional[int] = None
    output_dir: Optional[Path] = None
    notes: Tuple[str, ...] = ()

    @property
    def succeeded(self) -> bool:
        return self.status in (RunStatus.SUCCEEDED, RunStatus.COMPLETED_UNVERIFIED)

    @property
    def runtime(self) -> Tuple[float, str]:
        return format_runtime(self.elapsed)


def format_runtime(seconds: float) -> Tuple[float, str]:
    """Express ``seconds`` in the largest unit that keeps the value >= 1."""

    if seconds < 60:
        return seconds, "secs"
    if seconds < 3600:
        return seconds / 60, "mins"
    if seconds < 86400:
        return seconds / 3600, "hours"
    return seconds / 86400, "days"


def summarise_run(
    *,
    platform: Platform,
    output_dir: Path,
    returncode: int,
    elapsed: float,
) -> RunOutcome:
    """Infer the result of a finished trainer process.

    On POSIX platforms the exit code decides first and the trainer's output
    directory must also exist. Windows runs are never verified: they are
    reported as complete and the outcome carries a note saying so.
    """

    if not platform.verifies_output:
        note = "Windows training runs are not verified; check the model directory manually."
        if returncode != 0:
            note = f"The trainer exited with code {returncode}. {note}"
        return RunOutcome(
            status=RunStatus.COMPLETED_UNVERIFIED,
            elapsed=elapsed,
            message="Training is complete.",
            returncode=returncode,
            notes=(note,),
        )

    if returncode != 0:
        reason = f"the trainer exited with code {returncode}"
    elif not output_dir.is_dir():
        reason = f"the expected output directory {output_dir} was not created"
    else:
        value, units = format_runtime(elapsed)
        message = (
            f"Training ran for {value:.2f} {units}. "
            f"The trained model is in {output_dir.name}. "
            "Specify this directory as the log_dir when you run classification."
        )
        return RunOutcome(
            status=RunStatus.SUCCEEDED,
            elapsed=elapsed,
            message=message,
            returncode=returncode,
            output_dir=output_dir,
        )

    return RunOutcome(
        status=RunStatus.FAILED,
        elapsed=elapsed,
        message=f"Training did not run properly: {reason}.",
        returncode=returncode,
        output_dir=output_dir,
    )
