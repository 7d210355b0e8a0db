"""History traversal with merge expansion and deduplication."""

from dataclasses import dataclass, field
from typing import List, Optional, Set

import structlog

from gitdataset.exceptions import CommitLookupError, HistoryTraversalError
from gitdataset.models import Commit, Record, RunConfig
from gitdataset.pipeline.filters import CommitFilterPipeline, RejectReason
from gitdataset.pipeline.reporting import RunReporter

logger = structlog.get_logger(__name__)


@dataclass
class TraversalContext:
    """Mutable state of one run, passed explicitly through every step."""

    processed: Set[str] = field(default_factory=set)
    records: List[Record] = field(default_factory=list)
    saved: int = 0


@dataclass(frozen=True)
class RunSummary:
    """Totals reported at the end of a run."""

    processed: int
    saved: int


class TraversalEngine:
    """Walks history from HEAD and collects records until the target size is hit.

    Merge commits are never evaluated themselves when reached in history; each
    of their parents is evaluated instead. Every evaluated id is added to the
    processed set right after evaluation, and ids already in the set are not
    handed to the pipeline again, so a commit reachable from several merges
    is evaluated once.
    """

    def __init__(
        self,
        reader,
        config: RunConfig,
        pipeline: Optional[CommitFilterPipeline] = None,
        reporter: Optional[RunReporter] = None,
        start_ref: str = "HEAD",
    ) -> None:
        """Initialize the engine.

        Args:
            reader: Repository reader providing history and commits
            config: Run configuration
            pipeline: Filter pipeline. If None, one is built from reader and config.
            reporter: Receiver of run events. If None, events are dropped.
            start_ref: Reference the history walk starts from
        """
        self.reader = reader
        self.config = config
        self.pipeline = pipeline or CommitFilterPipeline(reader, config)
        self.reporter = reporter or RunReporter()
        self.start_ref = start_ref

    def run(self, context: Optional[TraversalContext] = None) -> TraversalContext:
        """Walk history and fill the context with accepted records.

        Args:
            context: State to continue from. If None, a fresh one is created.

        Returns:
            The context holding the processed ids and accepted records

        Raises:
            HistoryTraversalError: If history yields a commit that cannot be read
        """
        context = context or TraversalContext()

        for commit_id in self.reader.history_from(self.start_ref):
            if self._target_reached(context):
                break

            try:
                commit = self.reader.commit(commit_id)
            except CommitLookupError as e:
                raise HistoryTraversalError(f"Unreadable commit in history: {commit_id}") from e

            if commit.is_merge:
                self._expand_merge(commit, context)
            else:
                self._visit(commit, context)

        return context

    def summarize(self, context: TraversalContext) -> RunSummary:
        summary = RunSummary(processed=len(context.processed), saved=context.saved)
        self.reporter.run_finished(summary)
        return summary

    def _target_reached(self, context: TraversalContext) -> bool:
        return context.saved >= self.config.size

    def _expand_merge(self, merge: Commit, context: TraversalContext) -> None:
        for parent_id in merge.parent_ids:
            if self._target_reached(context):
                return
            try:
                parent = self.reader.commit(parent_id)
            except CommitLookupError:
                logger.warning("merge_parent_fetch_failed", merge=merge.id, parent=parent_id)
                self.reporter.commit_skipped(parent_id, RejectReason.PARENT_FETCH_FAILED)
                continue
            self._visit(parent, context)

    def _visit(self, commit: Commit, context: TraversalContext) -> None:
        if commit.id in context.processed:
            self.reporter.commit_skipped(commit.id, RejectReason.ALREADY_PROCESSED)
            return

        decision = self.pipeline.evaluate(commit, context.processed)
        context.processed.add(commit.id)

        if decision.accepted:
            context.records.append(decision.record)
            context.saved += 1
            self.reporter.commit_saved(commit.id)
        else:
            self.reporter.commit_skipped(commit.id, decision.reason)
