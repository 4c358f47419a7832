"""Make a PR's base and head comparable as local remote-tracking refs."""

from __future__ import annotations

import logging
from dataclasses import dataclass

from prcontext_core.exceptions import CommandError, RevisionSyncError
from prcontext_core.utils.process import run_cmd

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RevisionPair:
    base: str
    head: str

    @property
    def range(self) -> str:
        """Triple-dot range: changes on head since its merge base with base."""
        return f"{self.base}...{self.head}"


def ref_exists_on_remote(ref_name: str, remote: str = "origin", timeout: float = 30) -> bool:
    try:
        run_cmd(["git", "ls-remote", "--exit-code", "--heads", remote, ref_name], timeout=timeout)
    except CommandError:
        return False
    return True


def ensure_remote_refs(
    pr_number: int,
    base_ref: str,
    head_ref: str,
    remote: str = "origin",
    fetch_timeout: float = 60,
    short_timeout: float = 30,
) -> RevisionPair:
    """Fetch the remote and return base/head specs usable in a triple-dot diff.

    The base is always ``<remote>/<base_ref>``. The head is
    ``<remote>/<head_ref>`` when that branch exists on the remote; otherwise
    the PR comes from a fork and its head commit is fetched into
    ``refs/remotes/<remote>/pr/<n>``.
    """
    try:
        run_cmd(["git", "fetch", "--quiet", remote], timeout=fetch_timeout)
    except CommandError as e:
        raise RevisionSyncError(f"Could not fetch {remote}: {e.detail}") from e

    base_spec = f"{remote}/{base_ref}"

    if ref_exists_on_remote(head_ref, remote=remote, timeout=short_timeout):
        return RevisionPair(base=base_spec, head=f"{remote}/{head_ref}")

    pr_ref = f"refs/remotes/{remote}/pr/{pr_number}"
    logger.debug("Branch %r not on %s; fetching PR #%d head into %s", head_ref, remote, pr_number, pr_ref)
    try:
        run_cmd(
            ["git", "fetch", "--quiet", remote, f"pull/{pr_number}/head:{pr_ref}"],
            timeout=fetch_timeout,
        )
    except CommandError as e:
        raise RevisionSyncError(f"Could not fetch head of PR #{pr_number}: {e.detail}") from e

    return RevisionPair(base=base_spec, head=pr_ref)
