"""Shared test fixtures for Branchwatch."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

import pytest
from git import Actor, Repo

from branchwatch.config import BranchwatchConfig
from branchwatch.core.repo_cloner import clone_repository

AUTHOR = Actor("Branchwatch Tests", "tests@example.com")


@dataclass(frozen=True)
class Upstream:
    """A local upstream repository and the commits the tests care about.

    History on ``main``: root -> parent -> tagged -> tip.
    ``v1.0`` (annotated) and ``v1.0-light`` (lightweight) tag ``tagged``;
    ``v0.1`` tags the root commit.  Branch ``stable`` points at ``tagged``,
    branch ``previous`` at ``parent``.
    """

    path: Path
    url: str
    root: str
    parent: str
    tagged: str
    tip: str


def _commit(repo: Repo, name: str, content: str, message: str) -> str:
    file_path = Path(repo.working_tree_dir) / name
    file_path.write_text(content, encoding="utf-8")
    repo.index.add([name])
    return repo.index.commit(message, author=AUTHOR, committer=AUTHOR).hexsha


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def upstream(tmp_dir: Path) -> Upstream:
    """Provide a small upstream repository reachable through a file:// URL."""
    path = tmp_dir / "upstream"
    repo = Repo.init(path, initial_branch="main")
    with repo.config_writer() as writer:
        writer.set_value("user", "name", AUTHOR.name)
        writer.set_value("user", "email", AUTHOR.email)
        writer.set_value("tag", "gpgSign", "false")

    root = _commit(repo, "README", "branchwatch\n", "Initial import")
    repo.create_tag("v0.1", ref=root, message="First cut")
    parent = _commit(repo, "build.txt", "1\n", "Bump build")
    tagged = _commit(repo, "build.txt", "2\n", "Prepare release")
    repo.create_tag("v1.0", ref=tagged, message="Release 1.0")
    repo.create_tag("v1.0-light", ref=tagged)
    repo.create_head("stable", tagged)
    repo.create_head("previous", parent)
    tip = _commit(repo, "build.txt", "3\n", "Start next iteration")
    repo.close()

    return Upstream(
        path=path,
        url=path.as_uri(),
        root=root,
        parent=parent,
        tagged=tagged,
        tip=tip,
    )


@pytest.fixture
def workspace_root(tmp_dir: Path) -> Path:
    """Directory under which checks create their workspaces."""
    return tmp_dir / "workspaces"


@pytest.fixture
def settings(workspace_root: Path) -> BranchwatchConfig:
    """Provide a BranchwatchConfig with workspaces kept under tmp_dir."""
    return BranchwatchConfig(workspace_root=workspace_root)


@pytest.fixture
def cloned(upstream: Upstream, tmp_dir: Path, settings: BranchwatchConfig) -> Iterator[Repo]:
    """Provide an anonymous clone of the upstream repository."""
    repo = clone_repository(upstream.url, tmp_dir / "clone", settings)
    yield repo
    repo.close()
