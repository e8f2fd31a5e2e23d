"""Branchwatch data models — Pydantic v2, frozen where they are records."""

from branchwatch.models.builds import BuildKind, BuildRecord
from branchwatch.models.checks import (
    TERMINAL_CHECK_STATES,
    VALID_CHECK_TRANSITIONS,
    CheckOutcome,
    CheckState,
)
from branchwatch.models.scm import BaseCommitSet, CommitId, looks_like_commit_id

__all__ = [
    # builds
    "BuildKind",
    "BuildRecord",
    # scm
    "CommitId",
    "BaseCommitSet",
    "looks_like_commit_id",
    # checks
    "CheckState",
    "CheckOutcome",
    "VALID_CHECK_TRANSITIONS",
    "TERMINAL_CHECK_STATES",
]
