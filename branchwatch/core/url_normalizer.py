"""Internal -> anonymous repository URL rewriting.

Internal repositories are addressed with an SSH-over-git URL
(``git+ssh://code.example.com/group/project.git``).  The same repository is
readable anonymously over HTTPS behind a gateway path segment
(``https://code.example.com/gerrit/group/project.git``).  Any other URL is
already fetchable as-is and passes through untouched.
"""

from __future__ import annotations

from urllib.parse import SplitResult, urlsplit, urlunsplit

DEFAULT_SSH_SCHEME = "git+ssh"
DEFAULT_GATEWAY_SEGMENT = "gerrit"
ANONYMOUS_SCHEME = "https"


class UrlNormalizationError(ValueError):
    """Raised when a repository URL cannot be turned into a fetch URL."""


class InvalidUrlError(UrlNormalizationError):
    """Raised when the normalized URL does not parse as a URL."""


def to_anonymous_url(
    internal_url: str,
    *,
    ssh_scheme: str = DEFAULT_SSH_SCHEME,
    gateway_segment: str = DEFAULT_GATEWAY_SEGMENT,
) -> str:
    """Rewrite *internal_url* into a URL usable as an anonymous fetch remote.

    For the SSH scheme the scheme becomes ``https``, user info and port are
    dropped and *gateway_segment* is inserted as the first path segment.

    Raises
    ------
    InvalidUrlError
        If the resulting URL has no scheme, or no host for a non-file URL.
    """
    parts = _split(internal_url)

    if parts.scheme == ssh_scheme:
        segment = gateway_segment.strip("/")
        path = parts.path if parts.path.startswith("/") else f"/{parts.path}"
        if segment:
            path = f"/{segment}{path}"
        host = parts.hostname or ""
        if ":" in host:
            # IPv6 literal; urlsplit strips the brackets.
            host = f"[{host}]"
        anonymous = urlunsplit((ANONYMOUS_SCHEME, host, path, parts.query, parts.fragment))
    else:
        anonymous = internal_url

    _check_parses(anonymous)
    return anonymous


def _split(url: str) -> SplitResult:
    try:
        parts = urlsplit(url)
        # Reading the port validates the netloc (non-numeric ports).
        _ = parts.port
    except ValueError as exc:
        raise InvalidUrlError(f"Cannot parse repository URL {url!r}: {exc}") from exc
    return parts


def _check_parses(url: str) -> None:
    parts = _split(url)
    if not parts.scheme:
        raise InvalidUrlError(f"Repository URL {url!r} has no scheme")
    if parts.scheme != "file" and not parts.hostname:
        raise InvalidUrlError(f"Repository URL {url!r} has no host")
