"""Read commits, diff stats and diffs from a local git repository."""

from __future__ import annotations

import asyncio
import logging
from datetime import datetime
from pathlib import Path

from careerlog.constants import GIT_COMMAND_TIMEOUT
from careerlog.ingestion.schemas import CommitRecord, DiffStat, LogQuery

logger = logging.getLogger(__name__)

_FIELD_SEP = "\x1f"
_RECORD_SEP = "\x1e"
_LOG_FORMAT = _FIELD_SEP.join(
    ["%H", "%aI", "%an <%ae>", "%s", "%b"]
) + _RECORD_SEP


class GitCommandError(RuntimeError):
    """A git subprocess failed, timed out, or could not be started."""

    def __init__(self, args: list[str], message: str) -> None:
        super().__init__(f"git {' '.join(args)}: {message}")
        self.git_args = args


class GitSource:
    """Async facade over the git CLI for one repository."""

    def __init__(
        self,
        repo_path: Path,
        timeout: float = GIT_COMMAND_TIMEOUT,
    ) -> None:
        self.repo_path = Path(repo_path)
        self._timeout = timeout

    async def _run(self, *args: str) -> str:
        """Run ``git -C <repo> <args>`` and return stdout.

        Raises :class:`GitCommandError` on non-zero exit or timeout.
        """
        arg_list = list(args)
        try:
            proc = await asyncio.create_subprocess_exec(
                "git",
                "-C",
                str(self.repo_path),
                *arg_list,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            raise GitCommandError(arg_list, str(exc)) from exc
        try:
            stdout, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self._timeout
            )
        except TimeoutError as exc:
            proc.kill()
            raise GitCommandError(arg_list, "timed out") from exc
        if proc.returncode != 0:
            raise GitCommandError(
                arg_list,
                stderr.decode(errors="replace").strip() or "failed",
            )
        return stdout.decode(errors="replace")

    async def list_commits(
        self, query: LogQuery | None = None
    ) -> list[CommitRecord]:
        """Return commits newest first, each annotated with its diff stat.

        Root commits (no parent to diff against) keep ``files``,
        ``insertions`` and ``deletions`` unset.
        """
        q = query or LogQuery()
        args = ["log", f"--max-count={q.limit}", f"--format={_LOG_FORMAT}"]
        if q.author:
            args.append(f"--author={q.author}")
        if q.since:
            args.append(f"--since={q.since}")

        raw = await self._run(*args)
        commits: list[CommitRecord] = []
        for record in parse_log_output(raw):
            try:
                stat = await self.get_diff_stat(record.hash)
            except GitCommandError:
                logger.debug(
                    "event=diff_stat_unavailable commit=%s",
                    record.hash[:8],
                )
                commits.append(record)
                continue
            commits.append(
                record.model_copy(
                    update={
                        "files": stat.files,
                        "insertions": stat.insertions,
                        "deletions": stat.deletions,
                    }
                )
            )
        return commits

    async def get_diff_stat(self, commit_hash: str) -> DiffStat:
        raw = await self._run(
            "diff", "--numstat", f"{commit_hash}^", commit_hash
        )
        return parse_numstat(raw)

    async def get_diff(self, commit_hash: str) -> str:
        """Unified diff of a commit against its first parent."""
        return await self._run("diff", f"{commit_hash}^", commit_hash)

    async def get_diff_or_none(self, commit_hash: str) -> str | None:
        """Like :meth:`get_diff` but returns ``None`` when unavailable."""
        try:
            return await self.get_diff(commit_hash)
        except GitCommandError as exc:
            logger.debug(
                "event=diff_unavailable commit=%s error=%s",
                commit_hash[:8],
                exc,
            )
            return None

    async def get_remote_url(self, remote: str = "origin") -> str | None:
        try:
            out = await self._run(
                "config", "--get", f"remote.{remote}.url"
            )
        except GitCommandError:
            return None
        return out.strip() or None


def parse_log_output(raw: str) -> list[CommitRecord]:
    """Parse ``git log`` output produced with the record format above."""
    commits: list[CommitRecord] = []
    for chunk in raw.split(_RECORD_SEP):
        chunk = chunk.strip("\n")
        if not chunk.strip():
            continue
        parts = chunk.split(_FIELD_SEP)
        if len(parts) < 5:
            logger.warning("event=malformed_log_record fields=%d", len(parts))
            continue
        commit_hash, date, author, subject, body = parts[:5]
        commits.append(
            CommitRecord(
                hash=commit_hash.strip(),
                date=datetime.fromisoformat(date.strip()),
                author=author,
                subject=subject,
                body=body.strip() or None,
            )
        )
    return commits


def parse_numstat(raw: str) -> DiffStat:
    """Parse ``git diff --numstat``; binary files count as zero lines."""
    files: list[str] = []
    insertions = 0
    deletions = 0
    for line in raw.splitlines():
        parts = line.split("\t", 2)
        if len(parts) != 3:
            continue
        added, removed, path = parts
        files.append(path)
        insertions += int(added) if added.isdigit() else 0
        deletions += int(removed) if removed.isdigit() else 0
    return DiffStat(
        files=tuple(files), insertions=insertions, deletions=deletions
    )
