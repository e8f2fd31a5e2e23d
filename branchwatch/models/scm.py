"""Source-control value types."""

from __future__ import annotations

import re

# Full 40-character hexadecimal object name.
CommitId = str

# Commits that may have been the sources of a tagged build (0, 1 or 2 items).
BaseCommitSet = frozenset[CommitId]

_COMMIT_ID_RE = re.compile(r"^[0-9a-f]{40}$")


def looks_like_commit_id(value: str) -> bool:
    """Return True if *value* has the shape of a full commit id."""
    return bool(_COMMIT_ID_RE.match(value.lower()))
