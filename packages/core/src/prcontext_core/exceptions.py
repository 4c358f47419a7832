"""Exception hierarchy for PR context collection.

Fatal conditions (missing gh, failed metadata fetch, failed ref sync, bad
environment) are raised as PRContextError subclasses and surfaced by the CLI.
Best-effort steps (diff batches, paginated fetches) never raise; they log
and return an empty result instead.
"""

from __future__ import annotations


class PRContextError(Exception):
    """Base class for every fatal collection error."""


class ConfigError(PRContextError):
    """Invalid or missing configuration (e.g. GITHUB_REPOSITORY)."""


class CommandError(PRContextError):
    """An external command exited non-zero, timed out, or could not be started."""

    def __init__(self, cmd: list[str], detail: str, returncode: int | None = None):
        self.cmd = list(cmd)
        self.detail = detail
        self.returncode = returncode
        super().__init__(f"`{' '.join(self.cmd)}` failed: {detail}")


class GhNotFoundError(PRContextError):
    def __init__(self, message: str | None = None):
        super().__init__(message or "gh CLI not found. Install from https://cli.github.com/")


class MetadataError(PRContextError):
    """PR metadata could not be fetched or decoded."""


class RevisionSyncError(PRContextError):
    """The base/head revisions could not be made available locally."""
