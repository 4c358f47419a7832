"""Collect the PR diff with git, excluding lockfiles and bounding its size."""

from __future__ import annotations

import logging
from collections.abc import Sequence

from prcontext_core.config import DEFAULT_LOCKFILE_SUFFIXES
from prcontext_core.git.refs import RevisionPair
from prcontext_core.utils.code import is_excluded, is_lockfile
from prcontext_core.utils.process import run_cmd

logger = logging.getLogger(__name__)

DIFF_BATCH_SIZE = 200
MAX_DIFF_LINES = 10_000


def list_changed_files(revisions: RevisionPair, timeout: float = 60) -> list[str]:
    output = run_cmd(
        ["git", "--no-pager", "diff", "--name-only", revisions.range, "--"],
        timeout=timeout,
        check=False,
    )
    return [p.strip() for p in output.splitlines() if p.strip()]


def filter_paths(
    paths: Sequence[str],
    lockfile_suffixes: Sequence[str] = DEFAULT_LOCKFILE_SUFFIXES,
    exclude: Sequence[str] = (),
) -> list[str]:
    return [p for p in paths if not is_lockfile(p, lockfile_suffixes) and not is_excluded(p, list(exclude))]


def truncate_diff_lines(diff_text: str, max_lines: int = MAX_DIFF_LINES) -> str:
    """Keep the first ``max_lines`` lines, prefixed with a warning banner when cut."""
    lines = diff_text.split("\n")
    if len(lines) <= max_lines:
        return diff_text
    logger.warning("Diff too large (%d lines), truncating to %d lines", len(lines), max_lines)
    return f"# WARNING: Diff truncated from {len(lines)} to {max_lines} lines\n\n" + "\n".join(lines[:max_lines])


def collect_diff(
    revisions: RevisionPair,
    batch_size: int = DIFF_BATCH_SIZE,
    max_lines: int = MAX_DIFF_LINES,
    lockfile_suffixes: Sequence[str] = DEFAULT_LOCKFILE_SUFFIXES,
    exclude: Sequence[str] = (),
    timeout: float = 120,
    list_timeout: float = 60,
) -> str:
    """Return the unified diff of every non-lockfile path, or "" if nothing changed.

    Paths are passed to ``git diff`` in batches to stay under the OS argv
    limit. A failed batch contributes an empty string rather than aborting
    the whole collection.
    """
    paths = filter_paths(list_changed_files(revisions, list_timeout), lockfile_suffixes, exclude)
    if not paths:
        return ""

    chunks = []
    for i in range(0, len(paths), batch_size):
        batch = paths[i : i + batch_size]
        chunks.append(
            run_cmd(
                ["git", "--no-pager", "diff", "--no-color", revisions.range, "--", *batch],
                timeout=timeout,
                check=False,
            )
        )

    return truncate_diff_lines("\n".join(chunks), max_lines)
