"""Stdout sink, selected with ``--output -``."""

from __future__ import annotations

import click

from prcontext_sink.base import BaseSink


class StdoutSink(BaseSink):
    """Streams the report unchanged so it can be piped into another tool."""

    def write(self, report: str) -> None:
        click.echo(report, nl=False)
