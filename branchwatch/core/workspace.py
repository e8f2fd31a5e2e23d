"""Scoped temporary workspaces.

Every modification check clones into its own freshly created directory and
the directory is removed when the check ends, whatever the outcome.  Removal
is best effort: a directory that cannot be deleted is logged and left behind
rather than turning a finished check into an error.
"""

from __future__ import annotations

import logging
import shutil
import tempfile
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_WORKSPACE_PREFIX = "git"


class WorkspaceCleanupError(OSError):
    """Raised when a workspace directory cannot be removed."""


def acquire_workspace(
    prefix: str = DEFAULT_WORKSPACE_PREFIX,
    root: Path | None = None,
) -> Path:
    """Create a new, empty, exclusively owned directory."""
    if root is not None:
        root.mkdir(parents=True, exist_ok=True)
    path = Path(tempfile.mkdtemp(prefix=prefix, dir=root))
    logger.debug("Acquired workspace %s", path)
    return path


def release_workspace(path: Path) -> None:
    """Delete *path* and everything below it.

    Raises ``WorkspaceCleanupError`` if anything is left behind.
    """
    try:
        shutil.rmtree(path)
    except FileNotFoundError:
        return
    except OSError as exc:
        raise WorkspaceCleanupError(f"Could not remove workspace {path}: {exc}") from exc
    logger.debug("Released workspace %s", path)


@contextmanager
def scoped_workspace(
    prefix: str = DEFAULT_WORKSPACE_PREFIX,
    root: Path | None = None,
) -> Iterator[Path]:
    """Yield a fresh workspace directory and remove it on exit."""
    path = acquire_workspace(prefix, root)
    try:
        yield path
    finally:
        try:
            release_workspace(path)
        except WorkspaceCleanupError as exc:
            logger.debug("%s", exc)
