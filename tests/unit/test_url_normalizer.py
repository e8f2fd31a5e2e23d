"""Tests for internal -> anonymous URL rewriting."""

from __future__ import annotations

import pytest

from branchwatch.core.url_normalizer import (
    InvalidUrlError,
    UrlNormalizationError,
    to_anonymous_url,
)


class TestSshUrls:
    def test_ssh_url_becomes_https_with_gateway(self):
        url = to_anonymous_url("git+ssh://code.example.com/group/project.git")
        assert url == "https://code.example.com/gerrit/group/project.git"

    def test_user_and_port_are_dropped(self):
        url = to_anonymous_url("git+ssh://builder@code.example.com:29418/project")
        assert url == "https://code.example.com/gerrit/project"

    def test_custom_scheme_and_segment(self):
        url = to_anonymous_url(
            "ssh://git.internal/team/app.git",
            ssh_scheme="ssh",
            gateway_segment="anon",
        )
        assert url == "https://git.internal/anon/team/app.git"

    def test_empty_segment_only_changes_scheme(self):
        url = to_anonymous_url("git+ssh://code.example.com/project.git", gateway_segment="")
        assert url == "https://code.example.com/project.git"

    def test_ipv6_host_keeps_brackets(self):
        url = to_anonymous_url("git+ssh://[fd00::1]/group/project.git")
        assert url == "https://[fd00::1]/gerrit/group/project.git"

    def test_ipv6_host_with_user_and_port(self):
        url = to_anonymous_url("git+ssh://builder@[fd00::1]:29418/project")
        assert url == "https://[fd00::1]/gerrit/project"


class TestPassThrough:
    @pytest.mark.parametrize(
        "url",
        [
            "https://github.com/project-ncl/bacon.git",
            "http://git.example.com/repo",
            "git://git.example.com/repo.git",
            "file:///srv/git/repo.git",
        ],
    )
    def test_other_schemes_unchanged(self, url: str):
        assert to_anonymous_url(url) == url


class TestInvalidUrls:
    def test_no_scheme_rejected(self):
        with pytest.raises(InvalidUrlError):
            to_anonymous_url("code.example.com/project.git")

    def test_no_host_rejected(self):
        with pytest.raises(InvalidUrlError):
            to_anonymous_url("https:///project.git")

    def test_bad_port_rejected(self):
        with pytest.raises(InvalidUrlError):
            to_anonymous_url("https://code.example.com:notaport/project.git")

    def test_ssh_url_without_host_rejected(self):
        with pytest.raises(InvalidUrlError):
            to_anonymous_url("git+ssh:///project.git")

    def test_invalid_url_error_is_a_normalization_error(self):
        assert issubclass(InvalidUrlError, UrlNormalizationError)
        assert issubclass(UrlNormalizationError, ValueError)
