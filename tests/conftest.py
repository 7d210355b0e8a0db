"""Shared fixtures: temporary Git repositories and an in-memory reader."""

import tempfile
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Tuple

import git
import pytest
import structlog

from gitdataset.exceptions import CommitLookupError, DiffComputationError
from gitdataset.models import Commit, DiffLine, FileChange


@pytest.fixture(autouse=True)
def reset_logging():
    """Undo logging configuration done by CLI tests."""
    yield
    structlog.reset_defaults()


class RepoBuilder:
    """Creates commits in a real repository with explicit parents and authors."""

    def __init__(self, path: Path) -> None:
        self.path = path
        self.repo = git.Repo.init(path)
        self.repo.config_writer().set_value("user", "name", "Test User").release()
        self.repo.config_writer().set_value("user", "email", "test@example.com").release()

    def commit(
        self,
        message: str,
        files: Optional[Dict[str, str]] = None,
        remove: Iterable[str] = (),
        parents: Optional[List[git.Commit]] = None,
        author: str = "Test User",
    ) -> git.Commit:
        """Commit ``files`` on top of the first parent's tree (or the current index)."""
        if parents:
            self.repo.index.reset(commit=parents[0])

        for name, content in (files or {}).items():
            file_path = self.path / name
            file_path.parent.mkdir(parents=True, exist_ok=True)
            file_path.write_text(content)
        if files:
            self.repo.index.add(list(files))
        removed = list(remove)
        if removed:
            self.repo.index.remove(removed)

        actor = git.Actor(author, "author@example.com")
        return self.repo.index.commit(
            message,
            parent_commits=parents,
            author=actor,
            committer=actor,
        )


@pytest.fixture
def repo_builder():
    """Create an empty temporary Git repository."""
    with tempfile.TemporaryDirectory() as tmpdir:
        builder = RepoBuilder(Path(tmpdir) / "repo")
        yield builder
        builder.repo.close()


class FakeReader:
    """In-memory stand-in for GitRepositoryReader."""

    def __init__(self) -> None:
        self.commits: Dict[str, Commit] = {}
        self.history: List[str] = []
        self.diffs: Dict[Tuple[str, str], List[FileChange]] = {}
        self.broken_diffs: set = set()

    def add(
        self,
        commit_id: str,
        parents: Iterable[str] = (),
        message: str = "Fix the parser",
        author: str = "Jane Doe",
        changes: Optional[Dict[str, str]] = None,
        in_history: bool = True,
    ) -> Commit:
        """Register a commit whose diff against its first parent adds ``changes``.

        ``changes`` maps file paths to added text, one ``+`` line per line.
        """
        commit = Commit(
            id=commit_id,
            parent_ids=list(parents),
            author_name=author,
            message=message,
            tree_id=f"tree-{commit_id}",
        )
        self.commits[commit_id] = commit
        if in_history:
            self.history.append(commit_id)
        if commit.parent_ids:
            key = (f"tree-{commit.parent_ids[0]}", commit.tree_id)
            self.diffs[key] = [
                FileChange(
                    path=path,
                    lines=[DiffLine(origin="+", content=line) for line in text.splitlines(keepends=True)],
                )
                for path, text in (changes if changes is not None else {"main.py": "print('hi')\n"}).items()
            ]
        return commit

    def history_from(self, start_ref: str = "HEAD"):
        for commit_id in self.history:
            yield commit_id

    def commit(self, commit_id: str) -> Commit:
        if commit_id not in self.commits:
            raise CommitLookupError(commit_id)
        return self.commits[commit_id]

    def tree_diff(self, tree_a: str, tree_b: str) -> List[FileChange]:
        if (tree_a, tree_b) in self.broken_diffs:
            raise DiffComputationError(f"Failed to diff {tree_a}..{tree_b}")
        return self.diffs.get((tree_a, tree_b), [])


@pytest.fixture
def fake_reader():
    """Create an empty in-memory reader."""
    return FakeReader()
