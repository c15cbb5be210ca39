"""Supported host platforms and the launch policy attached to each."""

from __future__ import annotations

import enum
import shlex
import subprocess
from typing import Sequence

__all__ = ["Platform"]


class Platform(enum.Enum):
    """Closed set of host platforms the launcher knows how to drive.

    ``WINDOWS`` transcribes the label file instead of copying it, cannot pass
    an output log directory to the trainer and skips post-run verification.
    Every other platform identifier maps to ``POSIX``.
    """

    WINDOWS = "Windows"
    POSIX = "posix"

    @classmethod
    def from_identifier(cls, identifier: str) -> "Platform":
        if str(identifier).strip() == cls.WINDOWS.value:
            return cls.WINDOWS
        return cls.POSIX

    @property
    def transcribes_label_file(self) -> bool:
        return self is Platform.WINDOWS

    @property
    def passes_log_dir(self) -> bool:
        return self is not Platform.WINDOWS

    @property
    def verifies_output(self) -> bool:
        return self is not Platform.WINDOWS

    def render_command(self, argv: Sequence[str]) -> str:
        """Return ``argv`` as a single command line quoted for this platform."""

        if self is Platform.WINDOWS:
            return subprocess.list2cmdline(list(argv))
        return shlex.join(list(argv))
