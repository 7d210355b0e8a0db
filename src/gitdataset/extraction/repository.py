"""Read-only access to a local Git repository."""

from io import BytesIO
from pathlib import Path
from typing import Iterator, List, Optional, Union

import git
import structlog
from git import Diff, Repo

from gitdataset.exceptions import (
    CommitLookupError,
    DiffComputationError,
    HistoryTraversalError,
    RepositoryOpenError,
    TreeLookupError,
)
from gitdataset.models import Commit, DiffLine, FileChange

logger = structlog.get_logger(__name__)

# Errors GitPython raises when an object name cannot be resolved
_LOOKUP_ERRORS = (
    git.exc.BadName,
    git.exc.BadObject,
    git.exc.GitCommandError,
    ValueError,
)

_ORIGINS = (b"+", b"-", b" ")


class GitRepositoryReader:
    """Reads commits, history and tree diffs from a Git repository."""

    def __init__(self, repo_path: Union[str, Path]) -> None:
        """Open the repository.

        Args:
            repo_path: Path to the repository working tree or bare directory

        Raises:
            RepositoryOpenError: If the path is missing or not a Git repository
        """
        self.repo_path = Path(repo_path)
        if not self.repo_path.exists():
            raise RepositoryOpenError(f"Repository path does not exist: {self.repo_path}")

        try:
            self.repo = Repo(self.repo_path)
        except (git.exc.InvalidGitRepositoryError, git.exc.NoSuchPathError) as e:
            raise RepositoryOpenError(f"Invalid Git repository: {self.repo_path}") from e

    @classmethod
    def open(cls, repo_path: Union[str, Path]) -> "GitRepositoryReader":
        return cls(repo_path)

    def close(self) -> None:
        """Release the git helper processes held by the repository."""
        self.repo.close()

    def __enter__(self) -> "GitRepositoryReader":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def history_from(self, start_ref: str = "HEAD") -> Iterator[str]:
        """Walk commit ids from ``start_ref``, descendants before ancestors.

        The walk is lazy and can only be consumed once.

        Args:
            start_ref: Reference to start from (default: HEAD)

        Yields:
            Full commit SHA hashes

        Raises:
            HistoryTraversalError: If the history cannot be read
        """
        try:
            for commit in self.repo.iter_commits(start_ref, topo_order=True):
                yield commit.hexsha
        except (git.exc.GitCommandError, ValueError) as e:
            raise HistoryTraversalError(f"Failed to walk history from {start_ref}: {e}") from e

    def commit(self, commit_id: str) -> Commit:
        """Look up a commit by id.

        Args:
            commit_id: Commit hash (full or short)

        Returns:
            Commit model

        Raises:
            CommitLookupError: If the commit is unknown
        """
        try:
            commit = self.repo.commit(commit_id)
            message = commit.message
            if isinstance(message, bytes):
                message = message.decode("utf-8", errors="replace")
            return Commit(
                id=commit.hexsha,
                parent_ids=[parent.hexsha for parent in commit.parents],
                author_name=commit.author.name or "",
                message=message,
                tree_id=commit.tree.hexsha,
            )
        except _LOOKUP_ERRORS as e:
            raise CommitLookupError(commit_id) from e

    def tree_diff(self, tree_a: str, tree_b: str) -> List[FileChange]:
        """Compute the patch turning ``tree_a`` into ``tree_b``.

        Args:
            tree_a: Baseline tree hash
            tree_b: Target tree hash

        Returns:
            One FileChange per changed file. Rename detection is off, so a
            rename shows up as a deletion of the old path and an addition of
            the new one.

        Raises:
            TreeLookupError: If either tree is unknown
            DiffComputationError: If git fails to produce the diff
        """
        baseline = self._tree(tree_a)
        target = self._tree(tree_b)

        try:
            diff_index = baseline.diff(target, create_patch=True, no_renames=True)
        except git.exc.GitCommandError as e:
            raise DiffComputationError(f"Failed to diff {tree_a}..{tree_b}: {e}") from e

        changes = []
        for diff_item in diff_index:
            change = self._file_change(diff_item)
            if change is not None:
                changes.append(change)
        return changes

    def _tree(self, tree_id: str):
        try:
            return self.repo.tree(tree_id)
        except _LOOKUP_ERRORS as e:
            raise TreeLookupError(tree_id) from e

    def _file_change(self, diff_item: Diff) -> Optional[FileChange]:
        """Convert a GitPython Diff into a FileChange.

        Args:
            diff_item: GitPython Diff object produced with ``create_patch=True``

        Returns:
            FileChange or None if the diff carries no path
        """
        file_path = diff_item.b_path or diff_item.a_path
        if not file_path:
            return None

        patch = diff_item.diff or b""
        if isinstance(patch, str):
            patch = patch.encode("utf-8")
        if patch.startswith(b"Binary files"):
            return FileChange(path=file_path, is_binary=True)

        return FileChange(path=file_path, lines=parse_patch_lines(patch))


def parse_patch_lines(patch: bytes) -> List[DiffLine]:
    """Split a single-file patch body into tagged lines.

    Hunk headers and ``\\ No newline at end of file`` markers are dropped;
    every line keeps its newline.
    Lines that are not valid UTF-8 are skipped.

    Args:
        patch: Patch text of one file, starting at its first hunk header

    Returns:
        DiffLine objects in patch order
    """
    lines: List[DiffLine] = []
    in_hunk = False

    for raw in BytesIO(patch):
        if raw.startswith(b"@@"):
            in_hunk = True
            continue
        if not in_hunk:
            continue

        origin = raw[:1]
        if origin not in _ORIGINS:
            continue
        try:
            content = raw[1:].decode("utf-8")
        except UnicodeDecodeError:
            logger.debug("diff_line_not_utf8", length=len(raw))
            continue

        lines.append(DiffLine(origin=origin.decode("ascii"), content=content))

    # A patch body sliced out of a larger diff may lose its final newline
    if lines and not lines[-1].content.endswith("\n"):
        lines[-1] = DiffLine(origin=lines[-1].origin, content=lines[-1].content + "\n")

    return lines
