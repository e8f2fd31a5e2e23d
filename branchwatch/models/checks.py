"""Modification check state model — one check, one pass through the states."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict

from branchwatch.models.builds import BuildKind
from branchwatch.models.scm import BaseCommitSet, CommitId


class CheckState(str, Enum):
    """States a single modification check moves through."""

    START = "start"
    WORKSPACE_ACQUIRED = "workspace_acquired"
    CLONED = "cloned"
    HEAD_RESOLVED = "head_resolved"
    BASE_ESTIMATED = "base_estimated"
    DECIDED = "decided"
    NO_PRIOR_BUILD = "no_prior_build"
    FAILED = "failed"


# Terminal states (DECIDED, NO_PRIOR_BUILD, FAILED) have no outgoing transitions.
VALID_CHECK_TRANSITIONS: dict[CheckState, set[CheckState]] = {
    CheckState.START: {CheckState.WORKSPACE_ACQUIRED, CheckState.FAILED},
    CheckState.WORKSPACE_ACQUIRED: {CheckState.CLONED, CheckState.FAILED},
    CheckState.CLONED: {
        CheckState.HEAD_RESOLVED,
        CheckState.NO_PRIOR_BUILD,
        CheckState.FAILED,
    },
    CheckState.HEAD_RESOLVED: {CheckState.BASE_ESTIMATED, CheckState.FAILED},
    CheckState.BASE_ESTIMATED: {CheckState.DECIDED, CheckState.FAILED},
    CheckState.DECIDED: set(),
    CheckState.NO_PRIOR_BUILD: set(),
    CheckState.FAILED: set(),
}

TERMINAL_CHECK_STATES: frozenset[CheckState] = frozenset(
    state for state, targets in VALID_CHECK_TRANSITIONS.items() if not targets
)


class CheckOutcome(BaseModel):
    """Result of one modification check.

    ``modified`` is the only field callers need; the rest records how the
    check got there.  ``transitions`` holds ``"from->to"`` strings in order.
    """

    model_config = ConfigDict(frozen=True)

    config_id: str
    reference: str
    kind: BuildKind
    state: CheckState
    modified: bool = False
    head_commit: CommitId | None = None
    scm_tag: str | None = None
    base_commits: BaseCommitSet = frozenset()
    transitions: tuple[str, ...] = ()
    detail: str = ""
