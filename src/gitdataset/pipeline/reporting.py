"""Side channels of a run (logging, progress display)."""

from typing import TYPE_CHECKING, Sequence

import structlog

if TYPE_CHECKING:
    from gitdataset.pipeline.filters import RejectReason
    from gitdataset.pipeline.traversal import RunSummary

logger = structlog.get_logger(__name__)


class RunReporter:
    """Receives run events. The base implementation ignores them."""

    def commit_saved(self, commit_id: str) -> None:
        pass

    def commit_skipped(self, commit_id: str, reason: "RejectReason") -> None:
        pass

    def run_finished(self, summary: "RunSummary") -> None:
        pass


class LoggingReporter(RunReporter):
    """Logs every run event through structlog."""

    def commit_saved(self, commit_id: str) -> None:
        logger.info("commit_saved", commit=commit_id)

    def commit_skipped(self, commit_id: str, reason: "RejectReason") -> None:
        logger.debug("commit_skipped", commit=commit_id, reason=reason.value)

    def run_finished(self, summary: "RunSummary") -> None:
        logger.info("run_finished", processed=summary.processed, saved=summary.saved)


class CompositeReporter(RunReporter):
    """Fans run events out to several reporters."""

    def __init__(self, reporters: Sequence[RunReporter]) -> None:
        self.reporters = list(reporters)

    def commit_saved(self, commit_id: str) -> None:
        for reporter in self.reporters:
            reporter.commit_saved(commit_id)

    def commit_skipped(self, commit_id: str, reason: "RejectReason") -> None:
        for reporter in self.reporters:
            reporter.commit_skipped(commit_id, reason)

    def run_finished(self, summary: "RunSummary") -> None:
        for reporter in self.reporters:
            reporter.run_finished(summary)
