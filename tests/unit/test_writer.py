"""Unit tests for the CSV dataset writer."""

import csv

import pytest

from gitdataset.exceptions import OutputOpenError
from gitdataset.models import Record
from gitdataset.storage import HEADER, DatasetWriter


def read_rows(path):
    with open(path, newline="", encoding="utf-8") as f:
        return list(csv.reader(f))


def test_writes_header_and_rows_in_order(tmp_path):
    """Test a fresh output file."""
    output = tmp_path / "dataset.csv"
    records = [
        Record(commit_message="first", commit_changes="+a\n"),
        Record(commit_message="second", commit_changes="-b\n"),
    ]

    with DatasetWriter(output) as writer:
        assert writer.write(records) == 2

    assert read_rows(output) == [list(HEADER), ["first", "+a\n"], ["second", "-b\n"]]


def test_round_trip_of_special_characters(tmp_path):
    """Test Scenario D: commas, quotes and newlines survive a csv round trip."""
    output = tmp_path / "dataset.csv"
    changes = '+print("a, b")\n-x = "quoted ""twice"""\n'
    record = Record(commit_message='Say "hi", world', commit_changes=changes)

    with DatasetWriter(output) as writer:
        writer.write([record])

    rows = read_rows(output)
    assert rows[1] == ['Say "hi", world', changes]


def test_header_written_once_when_appending(tmp_path):
    """Test that a second run appends rows without a second header."""
    output = tmp_path / "dataset.csv"

    with DatasetWriter(output) as writer:
        writer.write([Record(commit_message="first", commit_changes="+a\n")])
    with DatasetWriter(output) as writer:
        writer.write([Record(commit_message="second", commit_changes="+b\n")])

    rows = read_rows(output)
    assert rows.count(list(HEADER)) == 1
    assert [row[0] for row in rows[1:]] == ["first", "second"]


def test_empty_record_list_writes_header(tmp_path):
    """Test that an empty run still leaves a valid dataset file."""
    output = tmp_path / "dataset.csv"

    with DatasetWriter(output) as writer:
        assert writer.write([]) == 0

    assert output.read_text(encoding="utf-8") == "commit_message,commit_changes\n"


def test_creates_parent_directories(tmp_path):
    """Test that missing parent directories are created."""
    output = tmp_path / "nested" / "out" / "dataset.csv"

    with DatasetWriter(output) as writer:
        writer.write([])

    assert output.exists()


def test_open_failure(tmp_path):
    """Test that an unusable output path fails on open."""
    with pytest.raises(OutputOpenError):
        DatasetWriter(tmp_path).open()
