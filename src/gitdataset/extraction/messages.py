"""Commit message checks."""

from typing import Optional

from gitdataset.models import Commit

MERGE_PREFIXES = ("Merge pull request", "Merge branch")


def encoded_length(text: str) -> int:
    """Length of ``text`` in UTF-8 bytes, the unit all length bounds use."""
    return len(text.encode("utf-8"))


class CommitMessageFilter:
    """Extracts the subject line of a commit and checks it against length bounds."""

    def __init__(self, min_length: int, max_length: int) -> None:
        self.min_length = min_length
        self.max_length = max_length

    @staticmethod
    def subject_of(commit: Commit) -> Optional[str]:
        """Return the first line of the commit message, or None if the message is empty."""
        if not commit.message:
            return None
        subject = commit.message.split("\n", 1)[0]
        if subject.endswith("\r"):
            subject = subject[:-1]
        return subject

    def accept(self, subject: str) -> bool:
        return self.min_length <= encoded_length(subject) <= self.max_length

    @staticmethod
    def looks_like_merge(subject: str) -> bool:
        return subject.startswith(MERGE_PREFIXES)
