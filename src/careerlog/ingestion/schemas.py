"""Pydantic models for the commit extraction data flow."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict


class CommitRecord(BaseModel):
    """One commit as produced by the git source. Immutable."""

    model_config = ConfigDict(frozen=True)

    hash: str
    author: str
    date: datetime
    subject: str
    body: str | None = None
    # None when the diff stat was unavailable (root commit)
    files: tuple[str, ...] | None = None
    insertions: int | None = None
    deletions: int | None = None

    @property
    def total_lines(self) -> int:
        return (self.insertions or 0) + (self.deletions or 0)

    @property
    def file_count(self) -> int:
        return len(self.files) if self.files else 0

    @property
    def full_message(self) -> str:
        """Subject and body joined by a space (body may be empty)."""
        return f"{self.subject} {self.body or ''}"


class DiffStat(BaseModel):
    """Parsed ``git diff --numstat`` output for one commit."""

    files: tuple[str, ...] = ()
    insertions: int = 0
    deletions: int = 0


class LogQuery(BaseModel):
    """Filters applied to ``git log``."""

    limit: int = 100
    since: str | None = None
    author: str | None = None
