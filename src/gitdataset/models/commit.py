"""Data models for commits, diffs and dataset records."""

from typing import List

from pydantic import BaseModel, ConfigDict, Field


class Commit(BaseModel):
    """Read-only view of a single Git commit."""

    model_config = ConfigDict(frozen=True)

    id: str = Field(..., description="Full commit SHA hash")
    parent_ids: List[str] = Field(default_factory=list, description="Parent commit hashes, in parent order")
    author_name: str = Field("", description="Author display name")
    message: str = Field("", description="Full commit message")
    tree_id: str = Field(..., description="SHA of the commit's root tree")

    @property
    def is_root(self) -> bool:
        """Whether the commit has no parents."""
        return not self.parent_ids

    @property
    def is_merge(self) -> bool:
        """Whether the commit has more than one parent."""
        return len(self.parent_ids) > 1


class DiffLine(BaseModel):
    """One line of a patch, tagged with its origin marker."""

    origin: str = Field(..., description="'+' for additions, '-' for deletions, ' ' for context")
    content: str = Field(..., description="Line text, including its trailing newline when present")

    def render(self) -> str:
        return self.origin + self.content


class FileChange(BaseModel):
    """Diff of a single file between two trees."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "path": "src/auth.py",
                "lines": [
                    {"origin": "-", "content": "    if not token:\n"},
                    {"origin": "+", "content": "    if not token or token == '':\n"},
                ],
                "is_binary": False,
            }
        }
    )

    path: str = Field(..., description="Path of the file (old path for deletions)")
    lines: List[DiffLine] = Field(default_factory=list, description="Patch lines of the file")
    is_binary: bool = Field(False, description="Whether git reported a binary change")


class Record(BaseModel):
    """A single dataset row: commit subject and its extracted changes."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "commit_message": "Fix authentication bug",
                "commit_changes": "-    if not token:\n+    if not token or token == '':\n",
            }
        }
    )

    commit_message: str = Field(..., description="First line of the commit message")
    commit_changes: str = Field(..., description="Concatenated diff lines of the commit")
