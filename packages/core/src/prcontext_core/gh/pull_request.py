"""Pull request data fetched through the gh CLI.

gh handles authentication and pagination. Paginated endpoints are requested
with ``--jq '.[] | @json'`` so that every record arrives as one JSON line,
which lets a single malformed record be skipped without losing the rest.
"""

from __future__ import annotations

import json
import logging

from prcontext_core.exceptions import CommandError, GhNotFoundError, MetadataError
from prcontext_core.models import IssueComment, PRMetadata, Review, ReviewComment
from prcontext_core.utils.process import run_cmd

logger = logging.getLogger(__name__)

PR_METADATA_FIELDS = "number,title,url,headRefName,baseRefName,author,createdAt,updatedAt,state"


def ensure_gh_available(timeout: float = 30) -> None:
    try:
        run_cmd(["gh", "--version"], timeout=timeout)
    except CommandError as e:
        raise GhNotFoundError() from e


def parse_json_lines(output: str) -> list[dict]:
    """Decode one JSON object per line, skipping anything that does not decode.

    Some gh/jq combinations emit each record as a JSON *string* that itself
    contains the JSON object, so a line that decodes to a string is decoded
    once more. Lines that fail either stage, or decode to something other
    than an object, are skipped.
    """
    items: list[dict] = []
    for line in output.splitlines():
        line = line.strip()
        if not line:
            continue
        try:
            record = json.loads(line)
            if isinstance(record, str):
                record = json.loads(record)
        except json.JSONDecodeError:
            logger.debug("Skipping unparsable line: %s", line[:200])
            continue
        if isinstance(record, dict):
            items.append(record)
        else:
            logger.debug("Skipping non-object record: %s", line[:200])
    return items


def gh_paginated_array(path: str, timeout: float = 60) -> list[dict]:
    """Fetch every page of an array endpoint. A failed call yields an empty list."""
    output = run_cmd(
        ["gh", "api", "--paginate", path, "--jq", ".[] | @json"],
        timeout=timeout,
        check=False,
    )
    return parse_json_lines(output)


def get_pr_metadata(repository: str, pr_number: int, timeout: float = 30) -> PRMetadata:
    try:
        output = run_cmd(
            ["gh", "pr", "view", str(pr_number), "--repo", repository, "--json", PR_METADATA_FIELDS],
            timeout=timeout,
        )
    except CommandError as e:
        raise MetadataError(f"Could not fetch metadata for PR #{pr_number}: {e.detail}") from e

    try:
        data = json.loads(output)
    except json.JSONDecodeError as e:
        raise MetadataError(f"Could not decode metadata for PR #{pr_number}: {e}") from e
    if not isinstance(data, dict) or not data:
        raise MetadataError(f"Could not fetch metadata for PR #{pr_number}")

    return PRMetadata.from_api(data, number=pr_number)


def get_reviews(owner: str, repo: str, pr_number: int, timeout: float = 60) -> list[Review]:
    return [Review.from_api(r) for r in gh_paginated_array(f"repos/{owner}/{repo}/pulls/{pr_number}/reviews", timeout)]


def get_review_comments(owner: str, repo: str, pr_number: int, timeout: float = 60) -> list[ReviewComment]:
    return [
        ReviewComment.from_api(c)
        for c in gh_paginated_array(f"repos/{owner}/{repo}/pulls/{pr_number}/comments", timeout)
    ]


def get_issue_comments(owner: str, repo: str, pr_number: int, timeout: float = 60) -> list[IssueComment]:
    return [
        IssueComment.from_api(c)
        for c in gh_paginated_array(f"repos/{owner}/{repo}/issues/{pr_number}/comments", timeout)
    ]
