"""Accept/reject decision for a single commit."""

from enum import Enum
from typing import AbstractSet, Optional

import structlog
from pydantic import BaseModel, Field, model_validator

from gitdataset.exceptions import CommitLookupError, DiffComputationError, TreeLookupError
from gitdataset.extraction.diff import DiffExtractor
from gitdataset.extraction.messages import CommitMessageFilter, encoded_length
from gitdataset.models import Commit, Record, RunConfig

logger = structlog.get_logger(__name__)


class RejectReason(str, Enum):
    """Why a commit did not make it into the dataset."""

    ALREADY_PROCESSED = "already processed"
    ROOT_COMMIT = "root commit, no baseline for diff"
    PARENT_FETCH_FAILED = "failed to fetch parent"
    BOT_AUTHOR = "commit author indicates a bot"
    MESSAGE_LENGTH = "commit message empty or out of required length"
    MERGE_MESSAGE = "commit message indicates a merge"
    NO_TARGET_CHANGES = "no pure changes in files with target extensions"
    DIFF_FAILED = "failed to read commit changes"
    CHANGES_LENGTH = "commit changes out of required length"


class Decision(BaseModel):
    """Outcome of evaluating a commit: a record, or the reason it was rejected."""

    commit_id: str = Field(..., description="Evaluated commit hash")
    record: Optional[Record] = Field(None, description="Record produced when accepted")
    reason: Optional[RejectReason] = Field(None, description="Reject reason when rejected")

    @model_validator(mode="after")
    def check_outcome(self) -> "Decision":
        """Require exactly one of record and reason."""
        if (self.record is None) == (self.reason is None):
            raise ValueError("a decision carries either a record or a reject reason")
        return self

    @classmethod
    def accept(cls, commit_id: str, record: Record) -> "Decision":
        return cls(commit_id=commit_id, record=record)

    @classmethod
    def reject(cls, commit_id: str, reason: RejectReason) -> "Decision":
        return cls(commit_id=commit_id, reason=reason)

    @property
    def accepted(self) -> bool:
        return self.record is not None


class CommitFilterPipeline:
    """Runs the ordered guard chain deciding whether a commit becomes a record.

    Guards run in a fixed order and the first failing guard decides the
    reject reason. Evaluation never changes the processed set; recording a
    commit as processed is up to the caller.
    """

    def __init__(self, reader, config: RunConfig) -> None:
        """Initialize the pipeline.

        Args:
            reader: Repository reader used to resolve parents and diffs
            config: Run configuration
        """
        self.reader = reader
        self.config = config
        self.messages = CommitMessageFilter(config.message_len_min, config.message_len_max)
        self.diffs = DiffExtractor(reader)
        self.extensions = config.extension_set

    def evaluate(self, commit: Commit, processed: AbstractSet[str]) -> Decision:
        """Evaluate a commit against every guard.

        Args:
            commit: Commit to evaluate
            processed: Ids already evaluated in this run

        Returns:
            Decision carrying either a Record or a RejectReason
        """
        if commit.id in processed:
            return Decision.reject(commit.id, RejectReason.ALREADY_PROCESSED)

        if commit.is_root:
            return Decision.reject(commit.id, RejectReason.ROOT_COMMIT)

        try:
            parent = self.reader.commit(commit.parent_ids[0])
        except CommitLookupError as e:
            logger.warning("parent_fetch_failed", commit=commit.id, error=str(e))
            return Decision.reject(commit.id, RejectReason.PARENT_FETCH_FAILED)

        if "bot" in commit.author_name.lower():
            return Decision.reject(commit.id, RejectReason.BOT_AUTHOR)

        subject = self.messages.subject_of(commit)
        if subject is None or not self.messages.accept(subject):
            return Decision.reject(commit.id, RejectReason.MESSAGE_LENGTH)

        if self.messages.looks_like_merge(subject):
            return Decision.reject(commit.id, RejectReason.MERGE_MESSAGE)

        try:
            changes = self.diffs.compute(commit.tree_id, parent.tree_id, self.extensions)
        except (DiffComputationError, TreeLookupError) as e:
            logger.warning("diff_failed", commit=commit.id, error=str(e))
            return Decision.reject(commit.id, RejectReason.DIFF_FAILED)
        if changes is None:
            return Decision.reject(commit.id, RejectReason.NO_TARGET_CHANGES)

        if not self.config.changes_len_min <= encoded_length(changes) <= self.config.changes_len_max:
            return Decision.reject(commit.id, RejectReason.CHANGES_LENGTH)

        return Decision.accept(
            commit.id,
            Record(commit_message=subject, commit_changes=changes),
        )
