"""Extension-pure diff extraction."""

from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import AbstractSet, List, Optional, Protocol

from gitdataset.models import FileChange


class TreeDiffSource(Protocol):
    """Anything able to diff two trees, usually a GitRepositoryReader."""

    def tree_diff(self, tree_a: str, tree_b: str) -> List[FileChange]:
        ...


def file_extension(file_path: str) -> Optional[str]:
    """Return the extension of a path without its dot, or None if it has none.

    Dotfiles such as ``.bashrc`` have no extension.
    """
    suffix = PurePosixPath(file_path).suffix
    return suffix[1:] if suffix else None


@dataclass
class DiffAccumulator:
    """Scratch state for a single diff evaluation."""

    chunks: List[str] = field(default_factory=list)
    target_touched: bool = False
    foreign_touched: bool = False

    def add(self, change: FileChange) -> None:
        self.target_touched = True
        self.chunks.extend(line.render() for line in change.lines)

    @property
    def is_pure(self) -> bool:
        return self.target_touched and not self.foreign_touched

    def text(self) -> str:
        return "".join(self.chunks)


class DiffExtractor:
    """Builds the changes text of a commit from files with allowed extensions only.

    A commit qualifies only when it touches at least one file with an allowed
    extension and no file with any other (or no) extension. Mixed commits are
    rejected as a whole rather than partially included.
    """

    def __init__(self, source: TreeDiffSource) -> None:
        """Initialize the extractor.

        Args:
            source: Provider of tree-to-tree diffs
        """
        self.source = source

    def compute(
        self,
        commit_tree: str,
        parent_tree: str,
        allowed_extensions: AbstractSet[str],
    ) -> Optional[str]:
        """Compute the changes text between a parent tree and a commit tree.

        Args:
            commit_tree: Tree hash of the commit
            parent_tree: Tree hash of the baseline (first parent)
            allowed_extensions: Extensions to keep, without leading dot

        Returns:
            Concatenated diff lines, or None if the commit is not
            extension-pure

        Raises:
            TreeLookupError: If a tree cannot be resolved
            DiffComputationError: If the diff cannot be computed
        """
        accumulator = DiffAccumulator()

        for change in self.source.tree_diff(parent_tree, commit_tree):
            extension = file_extension(change.path)
            if extension is not None and extension in allowed_extensions:
                accumulator.add(change)
            else:
                accumulator.foreign_touched = True

        if not accumulator.is_pure:
            return None
        return accumulator.text()
