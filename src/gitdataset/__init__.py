"""gitdataset - Build commit-message / diff datasets from Git history."""

__version__ = "0.1.0"
