"""Commit selection pipeline and history traversal."""

from pathlib import Path
from typing import Optional, Union

from gitdataset.extraction import GitRepositoryReader
from gitdataset.models import RunConfig
from gitdataset.pipeline.filters import CommitFilterPipeline, Decision, RejectReason
from gitdataset.pipeline.reporting import CompositeReporter, LoggingReporter, RunReporter
from gitdataset.pipeline.traversal import RunSummary, TraversalContext, TraversalEngine
from gitdataset.storage import DatasetWriter


def extract_dataset(
    repo_path: Union[str, Path],
    output_path: Union[str, Path],
    config: RunConfig,
    reporter: Optional[RunReporter] = None,
) -> RunSummary:
    """Extract a dataset from a repository into a CSV file.

    The output file is opened before the history walk and written once at
    the end, after traversal completes.

    Args:
        repo_path: Path to the Git repository
        output_path: CSV file to append to
        config: Run configuration
        reporter: Receiver of run events

    Returns:
        Processed and saved totals

    Raises:
        RepositoryOpenError: If the repository cannot be opened
        OutputOpenError: If the output file cannot be opened
        HistoryTraversalError: If history cannot be walked
        DatasetWriteError: If records cannot be written
    """
    with GitRepositoryReader.open(repo_path) as reader, DatasetWriter(output_path) as writer:
        engine = TraversalEngine(reader, config, reporter=reporter)
        context = engine.run()
        writer.write(context.records)
        return engine.summarize(context)


__all__ = [
    "CommitFilterPipeline",
    "Decision",
    "RejectReason",
    "RunReporter",
    "LoggingReporter",
    "CompositeReporter",
    "RunSummary",
    "TraversalContext",
    "TraversalEngine",
    "extract_dataset",
]
