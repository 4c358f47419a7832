"""File sink: writes the report as a UTF-8 markdown file."""

from __future__ import annotations

import logging
from pathlib import Path

from prcontext_sink.base import BaseSink

logger = logging.getLogger(__name__)


class FileSink(BaseSink):
    def __init__(self, path: str):
        self.path = Path(path)
        self.lines_written = 0

    def write(self, report: str) -> None:
        # The file is only created here, so a failed run never leaves a partial report behind.
        self.path.write_text(report, encoding="utf-8")
        self.lines_written = len(report.split("\n"))
        logger.debug("Wrote %d lines to %s", self.lines_written, self.path)
