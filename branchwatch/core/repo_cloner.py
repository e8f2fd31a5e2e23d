"""Anonymous, tag-fetching clones into a scoped workspace.

The clone is assembled step by step rather than with ``git clone`` so that
``http.sslVerify`` can be written into the new repository's own config before
the first network round trip.  Internal servers use a self-signed CA; the
setting never leaves this repository.
"""

from __future__ import annotations

import logging
from pathlib import Path

from git import Repo
from git.exc import GitError

from branchwatch.config import BranchwatchConfig
from branchwatch.core.url_normalizer import to_anonymous_url

logger = logging.getLogger(__name__)


class CloneError(RuntimeError):
    """Raised when a repository cannot be initialized or fetched."""


def clone_repository(
    internal_url: str,
    target_dir: Path,
    config: BranchwatchConfig | None = None,
) -> Repo:
    """Clone *internal_url* anonymously into the empty *target_dir*.

    All branches land under ``refs/remotes/<remote_name>/`` and all tags
    under ``refs/tags/``.  The returned ``Repo`` is a context manager; close
    it before deleting *target_dir*.

    Raises
    ------
    InvalidUrlError
        If *internal_url* cannot be normalized.
    CloneError
        On any git, transport or filesystem failure.
    """
    cfg = config or BranchwatchConfig()
    anonymous_url = to_anonymous_url(
        internal_url,
        ssh_scheme=cfg.ssh_scheme,
        gateway_segment=cfg.gateway_segment,
    )
    logger.debug("Cloning repository %s into %s", anonymous_url, target_dir)

    try:
        repo = Repo.init(target_dir)
    except (GitError, OSError) as exc:
        raise CloneError(f"Cannot initialize repository in {target_dir}: {exc}") from exc

    try:
        with repo.config_writer() as writer:
            writer.set_value("http", "sslVerify", "true" if cfg.ssl_verify else "false")
        repo.create_remote(cfg.remote_name, anonymous_url)
        repo.git.fetch("--tags", cfg.remote_name)
    except (GitError, OSError) as exc:
        repo.close()
        raise CloneError(f"Failed to fetch {anonymous_url}: {exc}") from exc

    return repo
