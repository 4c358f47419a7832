"""Read-only snapshots of the pull request data returned by gh.

Each model is built from the raw API dict via ``from_api``. The hosting API
is not consistent across endpoints and versions (``user`` vs ``author``,
``submitted_at`` vs ``submittedAt``), so alternate fields are resolved with
an explicit ordered fallback chain instead of being probed at render time.
Missing optional fields never raise.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import NamedTuple


def _login(value) -> str | None:
    """Return the ``login`` of an identity object, or None if absent/empty."""
    if isinstance(value, dict):
        login = value.get("login")
        if isinstance(login, str) and login:
            return login
    return None


def _first(*candidates):
    """Return the first truthy candidate, or None."""
    for candidate in candidates:
        if candidate:
            return candidate
    return None


def _as_int(value) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_str(value) -> str:
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class PRMetadata:
    number: int
    title: str = ""
    url: str = ""
    head_ref: str = ""
    base_ref: str = ""
    author: str | None = None
    created_at: str | None = None
    updated_at: str | None = None
    state: str | None = None

    @classmethod
    def from_api(cls, data: dict, number: int | None = None) -> PRMetadata:
        """Build from ``gh pr view --json`` output."""
        return cls(
            number=_first(_as_int(data.get("number")), number) or 0,
            title=_as_str(data.get("title")),
            url=_as_str(data.get("url")),
            head_ref=_as_str(data.get("headRefName")),
            base_ref=_as_str(data.get("baseRefName")),
            author=_login(data.get("author")),
            created_at=_as_str(data.get("createdAt")) or None,
            updated_at=_as_str(data.get("updatedAt")) or None,
            state=_as_str(data.get("state")) or None,
        )


@dataclass(frozen=True)
class Review:
    """A formal review verdict (APPROVED, CHANGES_REQUESTED, COMMENTED, ...)."""

    state: str
    user: str | None = None
    author: str | None = None
    submitted_at: str = ""
    body: str = ""

    @property
    def login(self) -> str | None:
        # REST payloads carry ``user``; GraphQL-shaped payloads carry ``author``.
        return _first(self.user, self.author)

    @classmethod
    def from_api(cls, data: dict) -> Review:
        return cls(
            state=_as_str(data.get("state")),
            user=_login(data.get("user")),
            author=_login(data.get("author")),
            submitted_at=_first(_as_str(data.get("submitted_at")), _as_str(data.get("submittedAt"))) or "",
            body=_as_str(data.get("body")),
        )


@dataclass(frozen=True)
class ReviewComment:
    """An inline code comment. ``in_reply_to_id`` links a reply to its thread root."""

    id: int | None
    path: str = ""
    line: int | None = None
    original_line: int | None = None
    position: int | None = None
    side: str = ""
    html_url: str = ""
    user: str | None = None
    created_at: str = ""
    diff_hunk: str = ""
    body: str = ""
    in_reply_to_id: int | None = None
    # Set when the payload names a parent, even one whose id is unusable.
    has_parent: bool = False

    @property
    def line_locator(self) -> int:
        """Explicit line, else original line, else raw diff position, else 0."""
        return _first(self.line, self.original_line, self.position) or 0

    @property
    def is_reply(self) -> bool:
        return self.has_parent or self.in_reply_to_id is not None

    @classmethod
    def from_api(cls, data: dict) -> ReviewComment:
        return cls(
            id=_as_int(data.get("id")),
            path=_as_str(data.get("path")),
            line=_as_int(data.get("line")),
            original_line=_as_int(data.get("original_line")),
            position=_as_int(data.get("position")),
            side=_as_str(data.get("side")),
            html_url=_as_str(data.get("html_url")),
            user=_login(data.get("user")),
            created_at=_as_str(data.get("created_at")),
            diff_hunk=_as_str(data.get("diff_hunk")),
            body=_as_str(data.get("body")),
            in_reply_to_id=_as_int(data.get("in_reply_to_id")),
            has_parent=data.get("in_reply_to_id") is not None,
        )


@dataclass(frozen=True)
class IssueComment:
    """A discussion-level comment on the PR conversation tab."""

    user: str | None = None
    created_at: str = ""
    html_url: str = ""
    body: str = ""

    @classmethod
    def from_api(cls, data: dict) -> IssueComment:
        return cls(
            user=_login(data.get("user")),
            created_at=_as_str(data.get("created_at")),
            html_url=_as_str(data.get("html_url")),
            body=_as_str(data.get("body")),
        )


class Thread(NamedTuple):
    """A root review comment and its direct replies, already ordered."""

    root: ReviewComment
    replies: tuple[ReviewComment, ...] = ()
