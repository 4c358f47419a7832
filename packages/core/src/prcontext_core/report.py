"""Markdown report assembly.

``build_markdown_report`` is a pure function of its inputs: the same PR data
always renders to byte-identical output. Section order is fixed:

    header → URL → branches → approvals → note → diff → reviews
           → review comments (threaded) → issue comments

Every free-text body is truncated and fenced, and the two long sections are
capped by item count, so the report size stays bounded no matter how noisy
the PR is.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

from prcontext_core.approvals import summarize_approvals
from prcontext_core.models import IssueComment, PRMetadata, Review, ReviewComment, Thread
from prcontext_core.threads import group_review_comments_by_thread
from prcontext_core.utils.markdown import fenced, truncate

UNKNOWN_USER = "unknown"
NO_REVIEWS = "(no reviews)\n"
NO_REVIEW_COMMENTS = "(no review comments)\n"
NO_ISSUE_COMMENTS = "(no issue comments)\n"


@dataclass(frozen=True)
class ReportLimits:
    """Per-item character limits and per-section item caps."""

    review_body: int = 500
    comment_body: int = 1000
    reply_body: int = 800
    issue_comment_body: int = 500
    max_threads: int = 200
    max_issue_comments: int = 200


def _render_review(review: Review, limits: ReportLimits) -> str:
    user = review.login or UNKNOWN_USER
    body = truncate(review.body, limits.review_body)
    return f"- {review.state} by {user} at {review.submitted_at}\n\n{fenced(body)}"


def _render_thread(thread: Thread, limits: ReportLimits) -> list[str]:
    root, replies = thread
    line = root.line or root.original_line or root.position or "?"
    side = f"[{root.side}]" if root.side else ""

    lines = [f"- {root.path}:{line} {side} {root.html_url}".rstrip()]
    if root.diff_hunk:
        lines.append(fenced(root.diff_hunk, "diff"))
    body = truncate(root.body, limits.comment_body)
    lines.append(f"  by {root.user or UNKNOWN_USER} at {root.created_at}\n\n{fenced(body)}")

    for reply in replies:
        reply_body = truncate(reply.body, limits.reply_body)
        lines.append(f"  - reply by {reply.user or UNKNOWN_USER} at {reply.created_at}\n\n{fenced(reply_body)}")
    return lines


def _render_issue_comment(comment: IssueComment, limits: ReportLimits) -> str:
    header = f"- by {comment.user or UNKNOWN_USER} at {comment.created_at} {comment.html_url}".rstrip()
    body = truncate(comment.body, limits.issue_comment_body)
    return f"{header}\n\n{fenced(body)}"


def build_markdown_report(
    pr_number: int,
    meta: PRMetadata,
    diff_text: str,
    reviews: Sequence[Review],
    review_comments: Sequence[ReviewComment],
    issue_comments: Sequence[IssueComment],
    limits: ReportLimits | None = None,
    remote: str = "origin",
) -> str:
    """Render the full review context of one PR as markdown.

    ``remote`` names the git remote the head branch was fetched from; the
    note tells the reader to run ``git show <remote>/<head>``. The result is
    right-trimmed and ends with exactly one newline.
    """
    limits = limits or ReportLimits()
    title = meta.title or f"PR #{pr_number}"
    head = meta.head_ref
    base = meta.base_ref
    approvals_count, approvers = summarize_approvals(reviews)

    review_lines = [_render_review(r, limits) for r in reviews]

    review_comment_lines: list[str] = []
    threads = group_review_comments_by_thread(review_comments)
    for thread in threads[: limits.max_threads]:
        review_comment_lines.extend(_render_thread(thread, limits))

    issue_comment_lines = [_render_issue_comment(c, limits) for c in issue_comments[: limits.max_issue_comments]]

    md: list[str] = [f"### PR #{pr_number}: {title}"]
    if meta.url:
        md.append(f"- **URL**: {meta.url}")
    if head or base:
        md.append(f"- **Branches**: {head or '?'} -> {base or '?'}")
    md.append(f"- **Approvals**: {approvals_count} ({', '.join(approvers) if approvers else 'none'})")
    md.append(f"\n**Note**: To view full file contents, use `git show {remote}/{head or '?'} -- <file-path>`")

    if diff_text.strip():
        md.append("\n### Diff (excluding lockfiles)")
        md.append(fenced(diff_text, "diff"))

    md.append("\n### Reviews")
    md.append("\n".join(review_lines) if review_lines else NO_REVIEWS)

    md.append("\n### Review Comments (code)")
    md.append("\n".join(review_comment_lines) if review_comment_lines else NO_REVIEW_COMMENTS)

    md.append("\n### Issue Comments (discussion)")
    md.append("\n".join(issue_comment_lines) if issue_comment_lines else NO_ISSUE_COMMENTS)

    return "\n".join(md).rstrip() + "\n"
