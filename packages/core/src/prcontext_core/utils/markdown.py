"""Markdown helpers shared by every report section."""

from __future__ import annotations

TRUNCATION_MARKER = "\n... (truncated)"
NO_OUTPUT = "(no output)\n"


def fenced(code: str, lang: str = "") -> str:
    """Wrap ``code`` in a triple-backtick block, or return the no-output placeholder.

    Trailing whitespace is dropped first so a blank body never renders as an
    empty fence.
    """
    trimmed = code.rstrip()
    if not trimmed:
        return NO_OUTPUT
    return f"```{lang}\n{trimmed}\n```\n"


def truncate(text: str, max_len: int) -> str:
    """Strip ``text`` and cut it to ``max_len`` characters, appending a marker if cut.

    The limit applies to the stripped text, so surrounding whitespace never
    counts against it.
    """
    trimmed = text.strip()
    if len(trimmed) <= max_len:
        return trimmed
    return trimmed[:max_len] + TRUNCATION_MARKER
