"""Base commit estimation for a previously built tag.

The build service tags the sources it built.  The tag may sit on the exact
commit that was built, or on a commit the service added on top of it, so the
tagged commit and its first parent both count as a match.  Modifications made
in that parent's position can be missed; the heuristic stays as it is because
existing build history comparisons depend on it.
"""

from __future__ import annotations

import logging

from git import Repo

from branchwatch.core.revision_resolver import find_ref, peel
from branchwatch.models.scm import BaseCommitSet

logger = logging.getLogger(__name__)

# The tagged commit plus one predecessor.
_BASE_DEPTH = 2


def estimate_base_commits(repo: Repo, tag_name: str | None, remote_name: str) -> BaseCommitSet:
    """Return the commits the build behind *tag_name* may have been made from.

    An empty set means the tag could not be found and nothing can be said.
    """
    logger.debug("Getting base commit possibilities for tag: %s", tag_name)

    ref = find_ref(repo, tag_name, remote_name) if tag_name else None
    if ref is None:
        logger.warning("Couldn't find the tag '%s' in the repository", tag_name)
        return frozenset()

    commit = peel(ref)
    walk = repo.iter_commits(commit.hexsha, max_count=_BASE_DEPTH, first_parent=True)
    return frozenset(entry.hexsha for entry in walk)
