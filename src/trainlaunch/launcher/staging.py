"""Copy the user's label file into the artifact directory under its canonical name."""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import List

from trainlaunch.errors import StagingError
from trainlaunch.platforms import Platform

__all__ = ["read_label_rows", "stage_label_file"]

logger = logging.getLogger(__name__)


def read_label_rows(path: str | Path, delimiter: str = ",") -> List[List[bytes]]:
    """Return the non-blank rows of a headerless delimited label file.

    Fields are kept as raw bytes so label files in any encoding survive.
    """

    if not delimiter:
        raise ValueError("Label file delimiter must not be empty")
    separator = delimiter.encode("utf-8")
    with open(path, "rb") as handle:
        data = handle.read()
    rows: List[List[bytes]] = []
    for line in data.split(b"\n"):
        line = line.rstrip(b"\r")
        if line.strip():
            rows.append(line.split(separator))
    return rows


def _copy_label_file(source: Path, destination: Path) -> None:
    try:
        shutil.copyfile(source, destination)
    except shutil.SameFileError:
        logger.debug("Label file %s is already staged", source)


def _transcribe_label_file(source: Path, destination: Path, delimiter: str) -> None:
    rows = read_label_rows(source, delimiter)
    separator = delimiter.encode("utf-8")
    # Binary mode keeps "\n" terminators from being rewritten as "\r\n".
    payload = b"".join(separator.join(row) + b"\n" for row in rows)
    with open(destination, "wb") as handle:
        handle.write(payload)


def stage_label_file(
    source: str | Path,
    destination: str | Path,
    *,
    platform: Platform,
    delimiter: str = ",",
) -> Path:
    """Stage ``source`` at ``destination`` using the strategy of ``platform``.

    POSIX platforms copy the file byte for byte. Windows re-reads the rows and
    writes them back in binary mode without quoting, headers or row names.
    Either way the staged rows and fields match the source.
    """

    source = Path(source)
    destination = Path(destination)
    try:
        if platform.transcribes_label_file:
            _transcribe_label_file(source, destination, delimiter)
        else:
            _copy_label_file(source, destination)
    except (OSError, ValueError) as exc:
        raise StagingError(
            f"Could not stage label file {source} to {destination}: {exc}"
        ) from exc
    logger.debug("Staged label file %s -> %s", source, destination)
    return destination
