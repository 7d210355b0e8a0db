"""Dataset output."""

from gitdataset.storage.writer import HEADER, DatasetWriter

__all__ = ["DatasetWriter", "HEADER"]
