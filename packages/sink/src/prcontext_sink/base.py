"""Abstract output sink interface.

The CLI depends on BaseSink, not on a concrete destination, so a report can
go to a file or to stdout without the collection pipeline knowing which.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseSink(ABC):
    """Destination for one rendered markdown report."""

    @abstractmethod
    def write(self, report: str) -> None:
        """Write the complete report. Called once, after collection succeeded."""

    def close(self) -> None:
        """Release any resources held by the sink.

        Default is a no-op so callers can always call close() safely.
        """
