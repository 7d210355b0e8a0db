"""Unit tests for the commit data models."""

import pytest
from pydantic import ValidationError

from gitdataset.models import Commit, DiffLine, FileChange, Record


def test_file_change_schema_example_is_valid():
    """Test that the documented FileChange example validates."""
    example = FileChange.model_config["json_schema_extra"]["example"]

    change = FileChange(**example)

    assert change.path == "src/auth.py"
    assert [line.render() for line in change.lines] == [
        "-    if not token:\n",
        "+    if not token or token == '':\n",
    ]
    assert FileChange.model_json_schema()["example"] == example


def test_record_schema_example_is_valid():
    """Test that the documented Record example validates."""
    example = Record.model_config["json_schema_extra"]["example"]

    record = Record(**example)

    assert record.commit_message == "Fix authentication bug"
    assert Record.model_json_schema()["example"] == example


def test_commit_is_frozen():
    """Test that commits cannot be modified."""
    commit = Commit(id="abc", parent_ids=[], message="Initial commit", tree_id="t")

    with pytest.raises(ValidationError):
        commit.message = "changed"


def test_diff_line_render():
    """Test rendering a line with its origin marker."""
    assert DiffLine(origin="+", content="x = 1\n").render() == "+x = 1\n"
