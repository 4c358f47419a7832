"""Rebuild review-comment threads from the flat list returned by the API.

The API returns inline comments as one flat, unordered list. Replies point at
their thread root through ``in_reply_to_id`` (replies to replies also point at
the root, so threads are one level deep). This module partitions the list into
roots and replies, attaches replies to their root, and orders both levels
using comment fields only, so any permutation of the same comments yields the
same threads.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable

from prcontext_core.models import ReviewComment, Thread

logger = logging.getLogger(__name__)


def _id_key(comment: ReviewComment) -> tuple[bool, int]:
    # Last-resort key: ids are unique per PR, which makes the order total.
    return (comment.id is None, comment.id or 0)


def root_sort_key(comment: ReviewComment) -> tuple:
    """Path (empty first), then line locator, then creation time (empty first)."""
    return (comment.path or "", comment.line_locator, comment.created_at or "", _id_key(comment))


def reply_sort_key(comment: ReviewComment) -> tuple:
    return (comment.created_at or "", _id_key(comment))


def group_review_comments_by_thread(comments: Iterable[ReviewComment]) -> list[Thread]:
    """Group inline comments into ordered ``(root, replies)`` threads.

    Comments that name no parent are roots. Every other comment is filed
    under its parent id whether or not that parent exists; replies
    whose parent is not among the roots are orphans and are dropped from
    the result.
    """
    roots: list[ReviewComment] = []
    # Keyed by parent id; None collects replies whose parent id is unusable and never matches a root.
    replies_by_parent: dict[int | None, list[ReviewComment]] = defaultdict(list)

    for comment in comments:
        if comment.is_reply:
            replies_by_parent[comment.in_reply_to_id].append(comment)
        else:
            roots.append(comment)

    roots.sort(key=root_sort_key)

    threads: list[Thread] = []
    for root in roots:
        # pop: a malformed payload with duplicate root ids still attaches each reply once.
        replies = replies_by_parent.pop(root.id, []) if root.id is not None else []
        threads.append(Thread(root, tuple(sorted(replies, key=reply_sort_key))))

    if replies_by_parent:
        orphans = sum(len(r) for r in replies_by_parent.values())
        logger.debug("Dropped %d orphan repl(ies) whose parent comment is missing.", orphans)

    return threads
