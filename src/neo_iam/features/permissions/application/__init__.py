"""Application layer: commands, queries and the post-commit pipeline."""

from .common import CommandResult, PostCommitSteps

__all__ = ["CommandResult", "PostCommitSteps"]
