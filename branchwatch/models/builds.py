"""Build history models — what the build service records about a build."""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class BuildKind(str, Enum):
    """The two categories of completed builds tracked by the build service."""

    TEMPORARY = "temporary"
    PERMANENT = "permanent"

    @classmethod
    def from_temporary_flag(cls, temporary_build: bool) -> BuildKind:
        return cls.TEMPORARY if temporary_build else cls.PERMANENT


class BuildRecord(BaseModel):
    """The latest successful build of a build configuration.

    ``scm_tag`` is the source-control tag the build service pushed for the
    sources it built.  It is ``None`` when the service recorded no tag.
    """

    model_config = ConfigDict(frozen=True)

    build_id: str
    config_id: str
    kind: BuildKind
    scm_tag: str | None = None
