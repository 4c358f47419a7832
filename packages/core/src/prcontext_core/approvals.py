from __future__ import annotations

from collections.abc import Iterable

from prcontext_core.models import Review

APPROVED = "APPROVED"


def summarize_approvals(reviews: Iterable[Review]) -> tuple[int, list[str]]:
    """Return the number of distinct approvers and their logins in first-seen order.

    Only reviews whose state is exactly ``APPROVED`` count. A reviewer who
    approved several times is listed once; reviews without any identity are
    ignored entirely. The count is the length of the deduplicated list, not
    the number of approving reviews.
    """
    approvers: list[str] = []
    seen: set[str] = set()
    for review in reviews:
        if review.state != APPROVED:
            continue
        login = review.login
        if login and login not in seen:
            seen.add(login)
            approvers.append(login)
    return len(approvers), approvers
