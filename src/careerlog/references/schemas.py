"""Pydantic models for pull/merge-request references."""

from pydantic import BaseModel, ConfigDict

from careerlog.constants import Platform


class ReferenceInfo(BaseModel):
    """A PR/MR number, optionally enriched from the hosting platform.

    Completeness: number only (unresolved), number + title (partial),
    number + title + description + url (full).
    """

    model_config = ConfigDict(frozen=True)

    number: int
    title: str | None = None
    description: str | None = None
    url: str | None = None

    @property
    def resolved(self) -> bool:
        return bool(self.title)


class RepoPlatform(BaseModel):
    """Hosting platform of the repository's origin remote."""

    model_config = ConfigDict(frozen=True)

    platform: Platform = Platform.UNKNOWN
    owner: str | None = None
    repo: str | None = None
    project_path: str | None = None
