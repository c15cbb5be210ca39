import os
import stat
import sys
from pathlib import Path

import pytest

SRC_DIR = Path(__file__).resolve().parents[1] / "src"
if str(SRC_DIR) not in sys.path:
    sys.path.insert(0, str(SRC_DIR))


FAKE_TRAINER = """\
import os
import sys

args = sys.argv[1:]
with open("received_args.txt", "w") as handle:
    handle.write("\\n".join(args))
flags = dict(zip(args[1::2], args[2::2]))
if args[0] == "train" and os.path.exists(flags["--train_info"]) and "--log_dir" in flags:
    os.makedirs(flags["--log_dir"], exist_ok=True)
sys.exit(int(os.environ.get("FAKE_TRAINER_EXIT", "0")))
"""


@pytest.fixture
def label_file(tmp_path: Path) -> Path:
    path = tmp_path / "image_labels.csv"
    path.write_text("img_0001.jpg,0\nimg_0002.jpg,3\nimg_0003.jpg,58\n")
    return path


@pytest.fixture
def model_dir(tmp_path: Path) -> Path:
    path = tmp_path / "helper_files"
    path.mkdir()
    (path / "run.py").write_text(FAKE_TRAINER)
    return path


@pytest.fixture
def python_dir(tmp_path: Path) -> Path:
    """Directory holding a ``python`` shim that forwards to the test interpreter."""

    if os.name == "nt":
        pytest.skip("python shim requires a POSIX shell")
    bin_dir = tmp_path / "bin"
    bin_dir.mkdir()
    shim = bin_dir / "python"
    shim.write_text(f'#!/bin/sh\nexec "{sys.executable}" "$@"\n')
    shim.chmod(shim.stat().st_mode | stat.S_IXUSR | stat.S_IXGRP | stat.S_IXOTH)
    return bin_dir
