"""Git repository access and per-commit extraction."""

from gitdataset.extraction.diff import DiffExtractor, file_extension
from gitdataset.extraction.messages import CommitMessageFilter, encoded_length
from gitdataset.extraction.repository import GitRepositoryReader, parse_patch_lines

__all__ = [
    "GitRepositoryReader",
    "CommitMessageFilter",
    "encoded_length",
    "DiffExtractor",
    "file_extension",
    "parse_patch_lines",
]
