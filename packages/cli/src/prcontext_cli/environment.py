"""Startup checks for the runtime environment.

Both checks run before any network call so a misconfigured CI job fails
immediately with a readable message:
  1. GITHUB_REPOSITORY must name the repository as owner/name
     (GitHub Actions injects it automatically).
  2. The gh CLI must be on PATH; it provides authentication and pagination
     for every API call.
"""

from __future__ import annotations

import logging
import os

from prcontext_core.collector import split_repository
from prcontext_core.exceptions import ConfigError
from prcontext_core.gh.pull_request import ensure_gh_available

logger = logging.getLogger(__name__)

REPOSITORY_ENV = "GITHUB_REPOSITORY"


def resolve_repository() -> tuple[str, str]:
    """Return ``(owner, repo)`` from GITHUB_REPOSITORY.

    Raises ConfigError when the variable is unset or not in owner/name form.
    """
    value = os.environ.get(REPOSITORY_ENV, "")
    if not value:
        raise ConfigError(f"{REPOSITORY_ENV} environment variable not set.")
    try:
        return split_repository(value)
    except ConfigError as e:
        raise ConfigError(f"{REPOSITORY_ENV} is malformed: {e}") from e


def check_gh_cli() -> None:
    """Raise GhNotFoundError if ``gh --version`` cannot run."""
    ensure_gh_available()
    logger.debug("gh CLI is available.")
