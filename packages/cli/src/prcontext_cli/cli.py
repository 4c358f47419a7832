"""CLI entry point for prcontext.

    prcontext <PR_NUMBER> -o <file|->

Collects metadata, diff, reviews, and comments of one pull request and
writes a markdown report for an automated reviewer. Requires
GITHUB_REPOSITORY (owner/name) and an authenticated gh CLI.
"""

from __future__ import annotations

import importlib.metadata
import logging

import click
from rich.console import Console
from rich.markup import escape

from prcontext_core.exceptions import ConfigError, PRContextError
from prcontext_sink.base import BaseSink
from prcontext_sink.file import FileSink

console = Console(stderr=True)


def _build_sink(output: str) -> BaseSink:
    """Pick the sink for ``--output``: "-" streams to stdout, anything else is a file path.

    This factory lives in cli.py so neither prcontext_core nor prcontext_sink
    know about CLI arguments.
    """
    if output == "-":
        from prcontext_sink.stdout import StdoutSink

        return StdoutSink()

    return FileSink(output)


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@click.command()
@click.version_option(
    version=importlib.metadata.version("prcontext"),
    prog_name="prcontext",
)
@click.argument("pr_number", type=click.IntRange(min=1))
@click.option(
    "-o",
    "--output",
    required=True,
    help="Report destination. Use '-' to write to stdout.",
)
@click.option(
    "--config",
    "config_path",
    default=".prcontext.yml",
    show_default=True,
    help="Path to the configuration file.",
    envvar="PRCONTEXT_CONFIG",
)
@click.option("--remote", default=None, help="Git remote holding the PR branches. Overrides config file.")
@click.option(
    "--max-diff-lines",
    type=click.IntRange(min=1),
    default=None,
    help="Truncate the diff beyond this many lines. Overrides config file.",
)
@click.option("--verbose", "-v", is_flag=True, help="Enable debug logging.")
def main(
    pr_number: int,
    output: str,
    config_path: str,
    remote: str | None,
    max_diff_lines: int | None,
    verbose: bool,
):
    """Collect the review context of a pull request into one markdown report.

    \b
    Required environment variables:
      GITHUB_REPOSITORY    Repository in owner/name format (set by GitHub Actions)
    """
    from prcontext_core.collector import collect_pr_context
    from prcontext_core.config import load_config
    from prcontext_cli.environment import check_gh_cli, resolve_repository

    _configure_logging(verbose)

    try:
        check_gh_cli()
        owner, repo = resolve_repository()
    except ConfigError as e:
        raise click.UsageError(str(e))
    except PRContextError as e:
        raise click.ClickException(str(e))

    config = load_config(config_path, cli_overrides={"remote": remote, "max_diff_lines": max_diff_lines})

    try:
        context = collect_pr_context(f"{owner}/{repo}", pr_number, config, console=console)
    except PRContextError as e:
        raise click.ClickException(str(e))

    sink = _build_sink(output)
    try:
        sink.write(context.report)
    except OSError as e:
        raise click.ClickException(f"Could not write report to {output}: {e}")
    finally:
        sink.close()

    if isinstance(sink, FileSink):
        console.print(f"[green]Report written to {escape(output)} ({sink.lines_written} lines)[/green]")
