"""Run (or print) an assembled trainer command and time it."""

from __future__ import annotations

import enum
import logging
import subprocess
import time
from typing import Callable

from trainlaunch.errors import LaunchError

from .command import LaunchCommand
from .report import RunOutcome, RunStatus

__all__ = ["JobRunner", "JobState"]

logger = logging.getLogger(__name__)


class JobState(enum.Enum):
    IDLE = "idle"
    BUILT = "built"
    DRY_RUN_REPORTED = "dry_run_reported"
    RUNNING = "running"
    COMPLETED = "completed"
    FAILED = "failed"


Summariser = Callable[[int, float], RunOutcome]


class JobRunner:
    """Single-use driver for one trainer invocation.

    ``IDLE -> BUILT -> DRY_RUN_REPORTED`` when only printing the command,
    otherwise ``IDLE -> BUILT -> RUNNING -> COMPLETED | FAILED``. The final
    state follows the verdict of ``summarise``, not the raw exit code.
    """

    def __init__(
        self,
        *,
        spawn: Callable[..., subprocess.CompletedProcess] = subprocess.run,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self._spawn = spawn
        self._clock = clock
        self.state = JobState.IDLE
        self.command: LaunchCommand | None = None

    def load(self, command: LaunchCommand) -> None:
        if self.state is not JobState.IDLE:
            raise RuntimeError(f"Cannot load a command into a runner in state {self.state.value}")
        self.command = command
        self.state = JobState.BUILT

    def run(self, *, dry_run: bool, summarise: Summariser) -> RunOutcome:
        if self.state is not JobState.BUILT or self.command is None:
            raise RuntimeError(f"Cannot run a job in state {self.state.value}")
        command = self.command

        if dry_run:
            print(command.text)
            self.state = JobState.DRY_RUN_REPORTED
            return RunOutcome(status=RunStatus.DRY_RUN, elapsed=0.0, message=command.text)

        self.state = JobState.RUNNING
        logger.debug("Launching trainer in %s", command.cwd)
        start = self._clock()
        try:
            completed = self._spawn(list(command.argv), cwd=str(command.cwd), check=False)
        except OSError as exc:
            self.state = JobState.FAILED
            raise LaunchError(f"Could not start trainer {command.argv[0]!r}: {exc}") from exc
        elapsed = self._clock() - start

        outcome = summarise(completed.returncode, elapsed)
        self.state = JobState.COMPLETED if outcome.succeeded else JobState.FAILED
        return outcome
