"""Branch modification checker — does a branch need a rebuild?

The ModificationChecker wires together the workspace, the anonymous clone,
revision resolution, base commit estimation and the build history lookup
into a single pass:

    start -> workspace_acquired -> cloned -> head_resolved
          -> base_estimated -> decided

with ``no_prior_build`` and ``failed`` as escapes.  Every transition is
checked against ``VALID_CHECK_TRANSITIONS`` and recorded on the outcome.

The public contract never raises.  Anything that prevents a decision is
logged and reported as *not modified*: a missed rebuild is cheaper than a
rebuild triggered by a flaky git server or build service.
"""

from __future__ import annotations

import logging

from git import Repo

from branchwatch.bridge.build_history import BuildHistoryLookup, NoSuccessfulBuildError
from branchwatch.config import BranchwatchConfig
from branchwatch.core.base_commits import estimate_base_commits
from branchwatch.core.repo_cloner import clone_repository
from branchwatch.core.revision_resolver import resolve_revision
from branchwatch.core.workspace import scoped_workspace
from branchwatch.models.builds import BuildKind
from branchwatch.models.checks import VALID_CHECK_TRANSITIONS, CheckOutcome, CheckState
from branchwatch.models.scm import BaseCommitSet, CommitId

logger = logging.getLogger(__name__)


class InvalidCheckTransitionError(RuntimeError):
    """Raised when a check tries to move to a state it cannot reach."""


class _CheckProgress:
    """Mutable state of one check; frozen into a CheckOutcome at the end."""

    def __init__(self, config_id: str, reference: str, kind: BuildKind) -> None:
        self.config_id = config_id
        self.reference = reference
        self.kind = kind
        self.state = CheckState.START
        self.transitions: list[str] = []
        self.head_commit: CommitId | None = None
        self.scm_tag: str | None = None
        self.base_commits: BaseCommitSet = frozenset()

    def advance(self, target: CheckState) -> None:
        allowed = VALID_CHECK_TRANSITIONS.get(self.state, set())
        if target not in allowed:
            raise InvalidCheckTransitionError(
                f"Cannot move check from {self.state.value} to {target.value}. "
                f"Allowed: {[s.value for s in allowed]}"
            )
        self.transitions.append(f"{self.state.value}->{target.value}")
        self.state = target

    def finish(self, target: CheckState, *, modified: bool = False, detail: str = "") -> CheckOutcome:
        if self.state != target:
            self.advance(target)
        return CheckOutcome(
            config_id=self.config_id,
            reference=self.reference,
            kind=self.kind,
            state=self.state,
            modified=modified,
            head_commit=self.head_commit,
            scm_tag=self.scm_tag,
            base_commits=self.base_commits,
            transitions=tuple(self.transitions),
            detail=detail,
        )


class ModificationChecker:
    """Decides whether a branch moved since the last successful build.

    Parameters
    ----------
    build_history:
        Where the latest successful build of a configuration is looked up.
    config:
        Clone and workspace settings.  Uses defaults if not provided.
    """

    def __init__(
        self,
        build_history: BuildHistoryLookup,
        *,
        config: BranchwatchConfig | None = None,
    ) -> None:
        self._build_history = build_history
        self._config = config or BranchwatchConfig()

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def is_modified_branch(
        self,
        config_id: str,
        internal_url: str,
        reference: str,
        temporary_build: bool = False,
    ) -> bool:
        """Return True if *reference* moved since the last successful build.

        The last build is the latest temporary build if *temporary_build* is
        set, the latest permanent build otherwise.
        """
        return self.check(config_id, internal_url, reference, temporary_build).modified

    def check(
        self,
        config_id: str,
        internal_url: str,
        reference: str,
        temporary_build: bool = False,
    ) -> CheckOutcome:
        """Run one modification check and return how it ended."""
        kind = BuildKind.from_temporary_flag(temporary_build)
        progress = _CheckProgress(config_id, reference, kind)
        logger.info(
            "Trying to check if branch '%s' in '%s' has been modified, "
            "compared to latest %s build of build config '%s'",
            reference,
            internal_url,
            kind.value,
            config_id,
        )

        outcome: CheckOutcome | None = None
        try:
            with scoped_workspace(self._config.workspace_prefix, self._config.workspace_root) as workspace:
                progress.advance(CheckState.WORKSPACE_ACQUIRED)
                with clone_repository(internal_url, workspace, self._config) as repo:
                    progress.advance(CheckState.CLONED)
                    outcome = self._compare(progress, repo)
            return outcome
        except NoSuccessfulBuildError as exc:
            logger.info("%s", exc)
            return progress.finish(CheckState.NO_PRIOR_BUILD, detail=str(exc))
        except Exception as exc:
            if outcome is not None:
                # Decided already; only closing the clone failed.
                logger.warning("Failed closing clone of '%s' after check", internal_url, exc_info=True)
                return outcome
            logger.warning("Failed trying to check if branch is modified", exc_info=True)
            return progress.finish(CheckState.FAILED, detail=f"{type(exc).__name__}: {exc}")

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _compare(self, progress: _CheckProgress, repo: Repo) -> CheckOutcome:
        remote_name = self._config.remote_name

        build = self._build_history.get_latest_build(progress.config_id, progress.kind)
        progress.scm_tag = build.scm_tag

        progress.head_commit = resolve_revision(repo, progress.reference, remote_name)
        progress.advance(CheckState.HEAD_RESOLVED)

        progress.base_commits = estimate_base_commits(repo, build.scm_tag, remote_name)
        progress.advance(CheckState.BASE_ESTIMATED)

        if not progress.base_commits:
            detail = f"No base commits for tag {build.scm_tag!r} of build {build.build_id}"
            logger.warning("%s; assuming branch '%s' is not modified", detail, progress.reference)
            return progress.finish(CheckState.DECIDED, modified=False, detail=detail)

        modified = progress.head_commit not in progress.base_commits
        logger.info(
            "Branch '%s' at %s is %s compared to tag %s",
            progress.reference,
            progress.head_commit,
            "modified" if modified else "not modified",
            build.scm_tag,
        )
        return progress.finish(CheckState.DECIDED, modified=modified)
