"""CLI entry point: ``careerlog generate``."""

from __future__ import annotations

# Phase 1: Singleton logging before any transitive litellm imports
from careerlog.logging_config import setup_logging

setup_logging()

import argparse  # noqa: E402
import asyncio  # noqa: E402
import sys  # noqa: E402
from pathlib import Path  # noqa: E402
from typing import Any  # noqa: E402

from pydantic import ValidationError  # noqa: E402

from careerlog import __version__  # noqa: E402
from careerlog.config import Settings  # noqa: E402
from careerlog.constants import (  # noqa: E402
    ExportFormat,
    ImpactLevel,
    StageProgress,
)
from careerlog.ingestion.git_source import GitCommandError  # noqa: E402
from careerlog.ingestion.schemas import LogQuery  # noqa: E402
from careerlog.logging_config import (  # noqa: E402
    cleanup_third_party_handlers,
    set_level,
)
from careerlog.services.events import StageEvent  # noqa: E402
from careerlog.services.pipeline import (  # noqa: E402
    NoCommitsError,
    generate_career_log,
)
from careerlog.services.schemas import CareerLog  # noqa: E402

# Phase 2: Clear litellm's duplicate handlers after all imports
cleanup_third_party_handlers()


def main() -> None:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args()

    if args.version:
        print(f"careerlog {__version__}")
        return

    if args.command == "generate":
        _run_generate(args)
    else:
        parser.print_help()


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog="careerlog",
        description="Generate professional career logs from git commits.",
    )
    parser.add_argument(
        "--version",
        action="store_true",
        help="Print version and exit",
    )

    sub = parser.add_subparsers(dest="command")

    gen = sub.add_parser(
        "generate",
        help="Generate a career log from a repository",
    )
    gen.add_argument(
        "--repo",
        "-r",
        default=".",
        help="Git repository path (default: current directory)",
    )
    gen.add_argument(
        "--output",
        "-o",
        default="career-log.json",
        help="Output file path (default: career-log.json)",
    )
    gen.add_argument(
        "--limit",
        "-l",
        type=int,
        default=100,
        help="Maximum commits to process (default: 100)",
    )
    gen.add_argument(
        "--since",
        "-s",
        default=None,
        help="Only commits since date (ISO format)",
    )
    gen.add_argument(
        "--author",
        "-a",
        default=None,
        help="Filter by author name or email",
    )
    gen.add_argument(
        "--format",
        "-f",
        choices=[f.value for f in ExportFormat],
        default=ExportFormat.JSON.value,
        help="Output format (default: json)",
    )
    gen.add_argument(
        "--api-key",
        default=None,
        help="OpenAI API key (enables remote AI enhancement)",
    )
    gen.add_argument(
        "--use-local-llm",
        action="store_true",
        help="Use a local Ollama instance",
    )
    gen.add_argument(
        "--ollama-model",
        default=None,
        help="Ollama model name (default: llama3.2)",
    )
    gen.add_argument(
        "--ollama-url",
        default=None,
        help="Ollama base URL (default: http://localhost:11434)",
    )
    gen.add_argument(
        "--enterprise",
        action="store_true",
        help="Enterprise mode (no external APIs, data-local)",
    )
    gen.add_argument(
        "--skip-low-impact",
        action="store_true",
        help="Randomly skip 50%% of low-impact commits",
    )
    gen.add_argument(
        "--confidence-threshold",
        type=float,
        default=None,
        help="Drop achievements below this confidence (default: 0.5)",
    )
    gen.add_argument(
        "--skip-refs",
        action="store_true",
        help="Do not resolve PR/MR references",
    )
    gen.add_argument(
        "--github-token",
        default=None,
        help="GitHub token for pull request lookups",
    )
    gen.add_argument(
        "--gitlab-token",
        default=None,
        help="GitLab token for merge request lookups",
    )
    gen.add_argument(
        "--gitlab-url",
        default=None,
        help="GitLab base URL (default: https://gitlab.com)",
    )
    gen.add_argument(
        "--seed",
        type=int,
        default=None,
        help="Random seed for low-impact sampling",
    )
    gen.add_argument(
        "--verbose",
        "-v",
        action="store_true",
        help="Enable verbose output",
    )

    return parser


def _settings_overrides(args: argparse.Namespace) -> dict[str, Any]:
    """Map CLI flags onto Settings fields; unset flags keep env values."""
    overrides: dict[str, Any] = {}
    optional = {
        "openai_api_key": args.api_key,
        "ollama_model": args.ollama_model,
        "ollama_base_url": args.ollama_url,
        "confidence_threshold": args.confidence_threshold,
        "github_token": args.github_token,
        "gitlab_token": args.gitlab_token,
        "gitlab_url": args.gitlab_url,
        "random_seed": args.seed,
    }
    overrides.update({k: v for k, v in optional.items() if v is not None})
    flags = {
        "use_local_llm": args.use_local_llm,
        "enterprise": args.enterprise,
        "skip_low_impact": args.skip_low_impact,
        "skip_references": args.skip_refs,
    }
    overrides.update({k: True for k, v in flags.items() if v})
    if args.verbose:
        overrides["log_level"] = "DEBUG"
    return overrides


def _run_generate(args: argparse.Namespace) -> None:
    """Execute the generate command."""
    try:
        settings = Settings(**_settings_overrides(args))
    except ValidationError as exc:
        print(f"Error: invalid configuration\n{exc}", file=sys.stderr)
        sys.exit(1)
    set_level(settings.log_level)

    repo_path = Path(args.repo).resolve()
    if not repo_path.is_dir():
        print(f"Error: {repo_path} does not exist", file=sys.stderr)
        sys.exit(1)

    query = LogQuery(limit=args.limit, since=args.since, author=args.author)

    def on_progress(event: StageEvent) -> None:
        if event.status != StageProgress.RUNNING:
            return
        if event.completed is None:
            print(f"{event.label}...")
        elif args.verbose:
            print(f"  [{event.completed}/{event.total}] {event.message}")

    try:
        log = asyncio.run(
            generate_career_log(
                repo_path, settings, query, on_progress=on_progress
            )
        )
    except (NoCommitsError, GitCommandError) as exc:
        print(f"\n✗ Failed to generate career log\n{exc}", file=sys.stderr)
        sys.exit(1)

    output_path = Path(args.output)
    _write_output(log, output_path, args.format)
    _print_summary(log, output_path)


def _write_output(log: CareerLog, output_path: Path, fmt: str) -> None:
    """Render the log in *fmt* and write it to *output_path*."""
    from careerlog.export import export_career_log

    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(export_career_log(log, fmt), encoding="utf-8")


def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'' if count == 1 else 's'}"


def _print_summary(log: CareerLog, output_path: Path) -> None:
    counts = log.count_by_impact()
    print()
    print(f"✓ Generated {_plural(len(log.entries), 'achievement')}")
    print(f"✓ High-impact: {_plural(counts[ImpactLevel.HIGH], 'achievement')}")
    print(
        f"✓ Medium-impact: "
        f"{_plural(counts[ImpactLevel.MEDIUM], 'achievement')}"
    )
    print(f"✓ Saved to {output_path}")
