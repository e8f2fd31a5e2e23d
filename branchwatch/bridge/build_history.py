"""Build history bridge — where was the last successful build made from?

Bridge boundary
---------------
The modification checker only ever asks one question of the build service:
*which tag did the latest successful build of this configuration record?*
``BuildHistoryLookup`` captures that question as a protocol so checker code
never depends on a concrete service client.

Two implementations ship with the package:

1. ``PncBuildHistoryClient`` — queries a PNC build service over its REST API
   using ``httpx``.
2. ``InMemoryBuildHistory`` — dictionary-backed, for local runs and tests.

"No successful build" is signalled by ``NoSuccessfulBuildError``; a build
that succeeded but recorded no tag is a ``BuildRecord`` with
``scm_tag=None``.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from typing import Any, Protocol, runtime_checkable

import httpx

from branchwatch.models.builds import BuildKind, BuildRecord

logger = logging.getLogger(__name__)


class NoSuccessfulBuildError(RuntimeError):
    """Raised when a build configuration has no successful build of a kind."""

    def __init__(self, config_id: str, kind: BuildKind) -> None:
        self.config_id = config_id
        self.kind = kind
        super().__init__(
            f"No successful {kind.value} build found for build config {config_id}"
        )


class BuildHistoryError(RuntimeError):
    """Raised when the build service cannot be queried."""


@runtime_checkable
class BuildHistoryLookup(Protocol):
    """Answers "what was the latest successful build?" for a configuration."""

    def get_latest_build(self, config_id: str, kind: BuildKind) -> BuildRecord:
        """Return the newest successful build of *kind* for *config_id*.

        Raises ``NoSuccessfulBuildError`` if there is none.
        """
        ...


class InMemoryBuildHistory:
    """Keeps the latest recorded build per (config id, kind)."""

    def __init__(self, builds: Iterable[BuildRecord] = ()) -> None:
        self._latest: dict[tuple[str, BuildKind], BuildRecord] = {}
        for build in builds:
            self.record(build)

    def record(self, build: BuildRecord) -> None:
        """Register *build* as the latest of its configuration and kind."""
        self._latest[(build.config_id, build.kind)] = build

    def get_latest_build(self, config_id: str, kind: BuildKind) -> BuildRecord:
        try:
            return self._latest[(config_id, kind)]
        except KeyError:
            raise NoSuccessfulBuildError(config_id, kind) from None


class PncBuildHistoryClient:
    """``BuildHistoryLookup`` backed by the PNC REST API (v2).

    Parameters
    ----------
    base_url:
        Root URL of the PNC server, e.g. ``https://pnc.example.com``.
    timeout:
        Per-request timeout in seconds.
    transport:
        Optional ``httpx`` transport; tests pass an ``httpx.MockTransport``.
    """

    BUILDS_PATH = "/pnc-rest/v2/build-configs/{config_id}/builds"

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 30.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._client = httpx.Client(
            base_url=self._base_url,
            timeout=timeout,
            transport=transport,
            headers={"Accept": "application/json"},
        )

    def __enter__(self) -> PncBuildHistoryClient:
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self._client.close()

    def get_latest_build(self, config_id: str, kind: BuildKind) -> BuildRecord:
        logger.debug("Getting latest built tag of config id %s, kind: %s", config_id, kind.value)
        temporary = "true" if kind == BuildKind.TEMPORARY else "false"
        params = {
            "q": f"status==SUCCESS;temporaryBuild=={temporary}",
            "sort": "=desc=submitTime",
            "pageIndex": 0,
            "pageSize": 1,
        }
        payload = self._get_json(self.BUILDS_PATH.format(config_id=config_id), params)

        content = payload.get("content") or []
        if not content:
            raise NoSuccessfulBuildError(config_id, kind)

        build = content[0]
        record = BuildRecord(
            build_id=str(build.get("id", "")),
            config_id=config_id,
            kind=kind,
            scm_tag=build.get("scmTag") or None,
        )
        logger.debug("Latest %s build of %s: %s (tag %s)", kind.value, config_id, record.build_id, record.scm_tag)
        return record

    def _get_json(self, path: str, params: dict[str, Any]) -> dict[str, Any]:
        try:
            response = self._client.get(path, params=params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise BuildHistoryError(
                f"Build service returned HTTP {exc.response.status_code} for {exc.request.url}"
            ) from exc
        except httpx.HTTPError as exc:
            raise BuildHistoryError(f"Cannot reach build service at {self._base_url}: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise BuildHistoryError(f"Build service returned invalid JSON for {path}") from exc
        if not isinstance(payload, dict):
            raise BuildHistoryError(f"Unexpected build service response for {path}")
        return payload
