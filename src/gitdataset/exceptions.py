"""Exceptions raised while extracting a dataset."""


class GitDatasetError(Exception):
    """Base exception for dataset extraction errors"""
    pass


class RepositoryOpenError(GitDatasetError):
    """Raised when the repository path is missing or not a Git repository"""
    pass


class HistoryTraversalError(GitDatasetError):
    """Raised when the commit history cannot be walked"""
    pass


class CommitLookupError(GitDatasetError):
    """Raised when a commit id cannot be resolved"""
    def __init__(self, commit_id: str):
        self.commit_id = commit_id
        super().__init__(f"Commit not found: {commit_id}")


class TreeLookupError(GitDatasetError):
    """Raised when a tree id cannot be resolved"""
    def __init__(self, tree_id: str):
        self.tree_id = tree_id
        super().__init__(f"Tree not found: {tree_id}")


class DiffComputationError(GitDatasetError):
    """Raised when git fails to produce a tree-to-tree diff"""
    pass


class OutputOpenError(GitDatasetError):
    """Raised when the output file cannot be opened"""
    pass


class DatasetWriteError(GitDatasetError):
    """Raised when records cannot be written to the output file"""
    pass
