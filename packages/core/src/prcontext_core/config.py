from pathlib import Path
from typing import Optional

import yaml

from prcontext_core.report import ReportLimits

DEFAULT_LOCKFILE_SUFFIXES = [
    "Cargo.lock",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
    "poetry.lock",
    "Pipfile.lock",
    "uv.lock",
    "Gemfile.lock",
    "composer.lock",
    "go.sum",
]

DEFAULT_CONFIG: dict = {
    "remote": "origin",
    "default_base_branch": "main",
    "diff_batch_size": 200,  # paths per `git diff` call, keeps argv under OS limits
    "max_diff_lines": 10000,
    "lockfile_suffixes": DEFAULT_LOCKFILE_SUFFIXES,
    "exclude": [],  # extra fnmatch patterns or directory names to drop from the diff
    "short_timeout": 30,
    "fetch_timeout": 60,
    "diff_timeout": 120,
    "max_review_body_chars": 500,
    "max_comment_body_chars": 1000,
    "max_reply_body_chars": 800,
    "max_issue_comment_body_chars": 500,
    "max_threads": 200,
    "max_issue_comments": 200,
}


def load_config(config_path: str = ".prcontext.yml", cli_overrides: Optional[dict] = None) -> dict:
    """
    Load configuration by merging (in order of precedence):
      1. Built-in defaults
      2. .prcontext.yml in the current directory
      3. CLI argument overrides
    """
    config = {
        **DEFAULT_CONFIG,
        "lockfile_suffixes": list(DEFAULT_CONFIG["lockfile_suffixes"]),
        "exclude": list(DEFAULT_CONFIG["exclude"]),
    }

    path = Path(config_path)
    if path.exists():
        with open(path, encoding="utf-8") as f:
            file_config = yaml.safe_load(f) or {}
        config.update(file_config)

    if cli_overrides:
        for key, value in cli_overrides.items():
            if value is not None:
                config[key] = value

    return config


def report_limits(config: dict) -> ReportLimits:
    """Build the report size caps from a loaded config."""
    return ReportLimits(
        review_body=config["max_review_body_chars"],
        comment_body=config["max_comment_body_chars"],
        reply_body=config["max_reply_body_chars"],
        issue_comment_body=config["max_issue_comment_body_chars"],
        max_threads=config["max_threads"],
        max_issue_comments=config["max_issue_comments"],
    )
