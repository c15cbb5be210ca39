import csv

import pytest

from trainlaunch.errors import StagingError
from trainlaunch.launcher.staging import read_label_rows, stage_label_file
from trainlaunch.platforms import Platform


def _rows(path, delimiter=","):
    with open(path, newline="") as handle:
        return [row for row in csv.reader(handle, delimiter=delimiter) if row]


@pytest.mark.parametrize("platform", [Platform.POSIX, Platform.WINDOWS])
def test_staged_rows_match_source(tmp_path, label_file, platform):
    destination = tmp_path / "data_info_train.csv"

    staged = stage_label_file(label_file, destination, platform=platform)

    assert staged == destination
    assert _rows(destination) == [
        ["img_0001.jpg", "0"],
        ["img_0002.jpg", "3"],
        ["img_0003.jpg", "58"],
    ]


def test_both_strategies_produce_identical_rows(tmp_path, label_file):
    posix_dir = tmp_path / "posix"
    windows_dir = tmp_path / "windows"
    posix_dir.mkdir()
    windows_dir.mkdir()

    stage_label_file(label_file, posix_dir / "data_info_train.csv", platform=Platform.POSIX)
    stage_label_file(label_file, windows_dir / "data_info_train.csv", platform=Platform.WINDOWS)

    posix_lines = (posix_dir / "data_info_train.csv").read_bytes().splitlines()
    windows_lines = (windows_dir / "data_info_train.csv").read_bytes().splitlines()
    assert posix_lines == windows_lines


def test_posix_strategy_copies_bytes_exactly(tmp_path):
    source = tmp_path / "labels.csv"
    source.write_bytes(b"a.jpg,1\r\nb.jpg,0\r\n")
    destination = tmp_path / "out.csv"

    stage_label_file(source, destination, platform=Platform.POSIX)

    assert destination.read_bytes() == b"a.jpg,1\r\nb.jpg,0\r\n"


def test_windows_strategy_writes_plain_newlines_without_quoting(tmp_path):
    source = tmp_path / "labels.csv"
    source.write_bytes(b"a.jpg,1\r\n\r\nb c.jpg,0\r\n")
    destination = tmp_path / "out.csv"

    stage_label_file(source, destination, platform=Platform.WINDOWS)

    assert destination.read_bytes() == b"a.jpg,1\nb c.jpg,0\n"


def test_windows_strategy_honours_delimiter(tmp_path):
    source = tmp_path / "labels.tsv"
    source.write_text("a.jpg\t1\nb.jpg\t2\n")
    destination = tmp_path / "out.tsv"

    stage_label_file(source, destination, platform=Platform.WINDOWS, delimiter="\t")

    assert read_label_rows(destination, delimiter="\t") == [[b"a.jpg", b"1"], [b"b.jpg", b"2"]]
    assert destination.read_bytes() == b"a.jpg\t1\nb.jpg\t2\n"


def test_windows_strategy_overwrites_previous_stage(tmp_path, label_file):
    destination = tmp_path / "data_info_train.csv"
    destination.write_text("stale.jpg,9\n")

    stage_label_file(label_file, destination, platform=Platform.WINDOWS)

    assert len(_rows(destination)) == 3


@pytest.mark.parametrize("platform", [Platform.POSIX, Platform.WINDOWS])
def test_missing_source_raises_staging_error(tmp_path, platform):
    with pytest.raises(StagingError) as excinfo:
        stage_label_file(tmp_path / "missing.csv", tmp_path / "out.csv", platform=platform)

    assert isinstance(excinfo.value, IOError)
    assert not (tmp_path / "out.csv").exists()


@pytest.mark.parametrize("platform", [Platform.POSIX, Platform.WINDOWS])
def test_missing_artifact_directory_raises_staging_error(tmp_path, label_file, platform):
    destination = tmp_path / "no_such_dir" / "data_info_train.csv"

    with pytest.raises(StagingError):
        stage_label_file(label_file, destination, platform=platform)


def test_staging_file_onto_itself_is_a_no_op(tmp_path):
    path = tmp_path / "data_info_train.csv"
    path.write_text("a.jpg,0\n")

    stage_label_file(path, path, platform=Platform.POSIX)

    assert path.read_text() == "a.jpg,0\n"


@pytest.mark.parametrize("platform", [Platform.POSIX, Platform.WINDOWS])
def test_latin1_label_file_is_staged_unchanged(tmp_path, platform):
    source = tmp_path / "labels.csv"
    source.write_bytes(b"caf\xe9.jpg,0\nna\xefve.jpg,1\n")
    destination = tmp_path / "data_info_train.csv"

    stage_label_file(source, destination, platform=platform)

    assert destination.read_bytes() == b"caf\xe9.jpg,0\nna\xefve.jpg,1\n"


def test_windows_strategy_accepts_multi_character_delimiter(tmp_path):
    source = tmp_path / "labels.txt"
    source.write_bytes(b"a.jpg::1\r\nb.jpg::2\r\n")
    destination = tmp_path / "out.txt"

    stage_label_file(source, destination, platform=Platform.WINDOWS, delimiter="::")

    assert read_label_rows(destination, delimiter="::") == [[b"a.jpg", b"1"], [b"b.jpg", b"2"]]
    assert destination.read_bytes() == b"a.jpg::1\nb.jpg::2\n"


def test_windows_strategy_rejects_empty_delimiter(tmp_path, label_file):
    with pytest.raises(StagingError, match="delimiter"):
        stage_label_file(
            label_file, tmp_path / "out.csv", platform=Platform.WINDOWS, delimiter=""
        )
