"""Data models for dataset extraction."""

from gitdataset.models.commit import Commit, DiffLine, FileChange, Record
from gitdataset.models.config import RunConfig, Settings

__all__ = [
    "Commit",
    "DiffLine",
    "FileChange",
    "Record",
    "RunConfig",
    "Settings",
]
