"""Core PR context collection pipeline."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from rich.console import Console
from rich.markup import escape

from prcontext_core.config import report_limits
from prcontext_core.exceptions import ConfigError
from prcontext_core.gh.pull_request import get_issue_comments, get_pr_metadata, get_review_comments, get_reviews
from prcontext_core.git.diff import collect_diff
from prcontext_core.git.refs import ensure_remote_refs
from prcontext_core.models import IssueComment, PRMetadata, Review, ReviewComment
from prcontext_core.report import build_markdown_report

logger = logging.getLogger(__name__)


@dataclass
class PRContext:
    """Everything collected for one PR, plus the rendered report.

    The CLI hands ``report`` to an output sink; the raw snapshots are kept
    so callers can inspect what went into it.
    """

    repository: str
    pr_number: int
    metadata: PRMetadata
    diff_text: str = ""
    reviews: list[Review] = field(default_factory=list)
    review_comments: list[ReviewComment] = field(default_factory=list)
    issue_comments: list[IssueComment] = field(default_factory=list)
    report: str = ""


def split_repository(repository: str) -> tuple[str, str]:
    """Split ``owner/repo``; raise ConfigError if either side is missing."""
    owner, sep, repo = (repository or "").strip().partition("/")
    if not sep or not owner or not repo or "/" in repo:
        raise ConfigError(f"Expected repository in owner/name format, got {repository!r}.")
    return owner, repo


def collect_pr_context(
    repository: str,
    pr_number: int,
    config: dict,
    console: Console | None = None,
) -> PRContext:
    """Run the full collection pipeline for one PR and return its context.

    Steps run strictly in order: metadata, revisions, diff, reviews, review
    comments, issue comments, report. Metadata and revision sync failures
    raise; diff batches and API listings degrade to empty results.
    Progress goes to ``console`` (stderr by default) so the report itself
    can be streamed to stdout.
    """
    console = console or Console(stderr=True)
    owner, repo = split_repository(repository)

    console.print(f"Fetching PR #{pr_number} metadata from {owner}/{repo}...")
    meta = get_pr_metadata(repository, pr_number, timeout=config["short_timeout"])
    console.print(f'  Title: "{escape(meta.title)}"')
    console.print(f"  Branches: {escape(meta.head_ref)} -> {escape(meta.base_ref)}")

    base_ref = meta.base_ref or config["default_base_branch"]
    head_ref = meta.head_ref or base_ref
    console.print(f"Fetching diff ({escape(base_ref)}...{escape(head_ref)})...")
    revisions = ensure_remote_refs(
        pr_number,
        base_ref,
        head_ref,
        remote=config["remote"],
        fetch_timeout=config["fetch_timeout"],
        short_timeout=config["short_timeout"],
    )
    diff_text = collect_diff(
        revisions,
        batch_size=config["diff_batch_size"],
        max_lines=config["max_diff_lines"],
        lockfile_suffixes=config["lockfile_suffixes"],
        exclude=config["exclude"],
        timeout=config["diff_timeout"],
        list_timeout=config["fetch_timeout"],
    )
    diff_lines = len(diff_text.split("\n"))
    console.print(f"  Diff: {diff_lines} lines")

    fetch_timeout = config["fetch_timeout"]

    console.print("Fetching reviews...")
    reviews = get_reviews(owner, repo, pr_number, timeout=fetch_timeout)
    console.print(f"  Reviews: {len(reviews)}")

    console.print("Fetching review comments...")
    review_comments = get_review_comments(owner, repo, pr_number, timeout=fetch_timeout)
    console.print(f"  Review comments: {len(review_comments)}")

    console.print("Fetching issue comments...")
    issue_comments = get_issue_comments(owner, repo, pr_number, timeout=fetch_timeout)
    console.print(f"  Issue comments: {len(issue_comments)}")

    console.print("Building markdown report...")
    report = build_markdown_report(
        pr_number,
        meta,
        diff_text,
        reviews,
        review_comments,
        issue_comments,
        limits=report_limits(config),
        remote=config["remote"],
    )
    logger.debug("Report for %s#%d: %d chars", repository, pr_number, len(report))

    return PRContext(
        repository=repository,
        pr_number=pr_number,
        metadata=meta,
        diff_text=diff_text,
        reviews=reviews,
        review_comments=review_comments,
        issue_comments=issue_comments,
        report=report,
    )
