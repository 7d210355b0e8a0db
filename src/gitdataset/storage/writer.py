"""CSV persistence of dataset records."""

import csv
from pathlib import Path
from typing import IO, Iterable, Optional, Union

import structlog

from gitdataset.exceptions import DatasetWriteError, OutputOpenError
from gitdataset.models import Record

logger = structlog.get_logger(__name__)

HEADER = ("commit_message", "commit_changes")


class DatasetWriter:
    """Appends records to a CSV file, writing the header only into an empty file.

    The file is opened up front so that an unwritable output path fails the
    run before any history is read. Records are written in a single batch.
    """

    def __init__(self, output_path: Union[str, Path]) -> None:
        self.output_path = Path(output_path)
        self._handle: Optional[IO[str]] = None

    def open(self) -> "DatasetWriter":
        """Open the output file for appending, creating it if needed.

        Raises:
            OutputOpenError: If the file cannot be opened
        """
        if self._handle is not None:
            return self
        try:
            self.output_path.parent.mkdir(parents=True, exist_ok=True)
            self._handle = open(self.output_path, "a", encoding="utf-8", newline="")
        except OSError as e:
            raise OutputOpenError(f"Failed to open output file {self.output_path}: {e}") from e
        return self

    def close(self) -> None:
        if self._handle is not None:
            self._handle.close()
            self._handle = None

    def __enter__(self) -> "DatasetWriter":
        return self.open()

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def write(self, records: Iterable[Record]) -> int:
        """Write records in order and flush once.

        Args:
            records: Records to write

        Returns:
            Number of records written

        Raises:
            DatasetWriteError: If writing fails
        """
        self.open()
        handle = self._handle
        count = 0
        try:
            writer = csv.writer(handle, lineterminator="\n")
            if handle.tell() == 0:
                writer.writerow(HEADER)
            for record in records:
                writer.writerow((record.commit_message, record.commit_changes))
                count += 1
            handle.flush()
        except (OSError, csv.Error) as e:
            raise DatasetWriteError(f"Failed to write dataset to {self.output_path}: {e}") from e

        logger.info("dataset_written", path=str(self.output_path), records=count)
        return count
