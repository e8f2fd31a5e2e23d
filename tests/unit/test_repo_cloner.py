"""Tests for anonymous clones into a workspace."""

from __future__ import annotations

from pathlib import Path

import pytest
from git import Repo

from branchwatch.config import BranchwatchConfig
from branchwatch.core.repo_cloner import CloneError, clone_repository
from branchwatch.core.url_normalizer import InvalidUrlError


class TestCloneRepository:
    def test_single_named_remote(self, cloned: Repo, upstream):
        assert [remote.name for remote in cloned.remotes] == ["prod"]
        assert cloned.remotes.prod.url == upstream.url

    def test_branches_fetched_as_remote_refs(self, cloned: Repo, upstream):
        paths = {ref.path for ref in cloned.refs}
        assert "refs/remotes/prod/main" in paths
        assert "refs/remotes/prod/stable" in paths
        assert "refs/remotes/prod/previous" in paths

    def test_all_tags_fetched(self, cloned: Repo):
        assert {tag.name for tag in cloned.tags} == {"v0.1", "v1.0", "v1.0-light"}

    def test_ssl_verification_disabled_for_clone_only(self, cloned: Repo):
        reader = cloned.config_reader(config_level="repository")
        assert str(reader.get_value("http", "sslVerify")).lower() == "false"

    def test_ssl_verification_can_be_kept(self, upstream, tmp_dir: Path):
        config = BranchwatchConfig(ssl_verify=True)
        with clone_repository(upstream.url, tmp_dir / "verified", config) as repo:
            reader = repo.config_reader(config_level="repository")
            assert str(reader.get_value("http", "sslVerify")).lower() == "true"

    def test_custom_remote_name(self, upstream, tmp_dir: Path):
        config = BranchwatchConfig(remote_name="origin")
        with clone_repository(upstream.url, tmp_dir / "origin-clone", config) as repo:
            assert "refs/remotes/origin/main" in {ref.path for ref in repo.refs}

    def test_unreachable_repository_raises_clone_error(self, tmp_dir: Path):
        missing = (tmp_dir / "does-not-exist").as_uri()
        with pytest.raises(CloneError):
            clone_repository(missing, tmp_dir / "clone", BranchwatchConfig())

    def test_invalid_url_raises_before_touching_disk(self, tmp_dir: Path):
        target = tmp_dir / "never"
        with pytest.raises(InvalidUrlError):
            clone_repository("not a url", target, BranchwatchConfig())
        assert not target.exists()
