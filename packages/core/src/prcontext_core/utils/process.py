"""Thin synchronous wrapper around subprocess for gh and git calls."""

from __future__ import annotations

import logging
import subprocess

from prcontext_core.exceptions import CommandError

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT = 30


def run_cmd(cmd: list[str], timeout: float = DEFAULT_TIMEOUT, check: bool = True) -> str:
    """Run ``cmd`` and return its stdout.

    With ``check=True`` any failure (missing executable, timeout, non-zero
    exit) raises CommandError. With ``check=False`` the failure is logged as
    a warning and an empty string is returned, so callers can treat the step
    as best-effort.
    """
    try:
        result = subprocess.run(
            cmd,
            capture_output=True,
            text=True,
            encoding="utf-8",
            errors="replace",
            timeout=timeout,
        )
    except FileNotFoundError as e:
        error = CommandError(cmd, f"executable not found: {cmd[0]}")
        if check:
            raise error from e
        logger.warning("%s", error)
        return ""
    except subprocess.TimeoutExpired as e:
        error = CommandError(cmd, f"timed out after {timeout}s")
        if check:
            raise error from e
        logger.warning("%s", error)
        return ""

    if result.returncode != 0:
        stderr = (result.stderr or "").strip()
        error = CommandError(cmd, stderr or f"exit status {result.returncode}", returncode=result.returncode)
        if check:
            raise error
        logger.warning("%s", error)
        return ""

    return result.stdout or ""
