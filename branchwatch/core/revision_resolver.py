"""Reference -> commit resolution against a freshly cloned repository.

Branches of the cloned remote only exist as remote-tracking refs, so every
lookup tries ``<remote>/<reference>`` before ``<reference>`` itself.  Tags are
fetched to ``refs/tags/`` and are found by the second attempt.
"""

from __future__ import annotations

import logging

from git import Repo
from git.objects import Commit
from git.refs import SymbolicReference

from branchwatch.models.scm import CommitId, looks_like_commit_id

logger = logging.getLogger(__name__)

# Same search order git uses to expand a short ref name.
_SHORT_NAME_PREFIXES = ("", "refs/", "refs/tags/", "refs/heads/", "refs/remotes/")


def find_ref(repo: Repo, reference: str, remote_name: str) -> SymbolicReference | None:
    """Return the ref named *reference*, preferring the remote's branch."""
    refs_by_path = {ref.path: ref for ref in repo.refs}
    for name in (f"{remote_name}/{reference}", reference):
        for prefix in _SHORT_NAME_PREFIXES:
            ref = refs_by_path.get(prefix + name)
            if ref is not None:
                return ref
    return None


def peel(ref: SymbolicReference) -> Commit:
    """Follow annotated tag objects from *ref* down to a commit."""
    target = ref.object
    while target.type == "tag":
        target = target.object
    if target.type != "commit":
        raise ValueError(f"{ref.path} points to a {target.type}, not a commit")
    return target


def find_head_revision(repo: Repo, reference: str, remote_name: str) -> CommitId | None:
    """Return the commit *reference* points to, or None if no ref matches."""
    ref = find_ref(repo, reference, remote_name)
    if ref is None:
        return None
    commit = peel(ref)
    head = next(repo.iter_commits(commit.hexsha, max_count=1))
    return head.hexsha


def resolve_revision(repo: Repo, reference: str, remote_name: str) -> CommitId:
    """Resolve *reference* to a commit id.

    A reference that matches no ref is assumed to already be a commit id and
    is returned unchanged, without checking that such a commit exists.
    """
    revision = find_head_revision(repo, reference, remote_name)
    if revision is not None:
        return revision

    if looks_like_commit_id(reference):
        logger.info(
            "Couldn't find the head of revision for %s. We assume that it is a commit id instead",
            reference,
        )
    else:
        logger.warning(
            "Couldn't find a ref named %s and it does not look like a commit id; using it as-is",
            reference,
        )
    return reference
