"""Tests for revision resolution and diff collection."""

from unittest.mock import MagicMock

import pytest

from prcontext_core.exceptions import RevisionSyncError
from prcontext_core.git.diff import collect_diff, filter_paths, list_changed_files, truncate_diff_lines
from prcontext_core.git.refs import RevisionPair, ensure_remote_refs

REVS = RevisionPair(base="origin/main", head="origin/feat")


def _completed(stdout="", returncode=0, stderr=""):
    return MagicMock(returncode=returncode, stdout=stdout, stderr=stderr)


class FakeGit:
    """Dispatch subprocess.run calls by git subcommand and record them."""

    def __init__(self, fetch_ok=True, branch_exists=True, pr_fetch_ok=True, names="", diffs=None):
        self.fetch_ok = fetch_ok
        self.branch_exists = branch_exists
        self.pr_fetch_ok = pr_fetch_ok
        self.names = names
        self.diffs = list(diffs or [])
        self.calls: list[list[str]] = []

    def __call__(self, cmd, **kwargs):
        self.calls.append(cmd)
        if cmd[:2] == ["git", "fetch"]:
            if any(arg.startswith("pull/") for arg in cmd):
                return _completed(returncode=0 if self.pr_fetch_ok else 128, stderr="couldn't find remote ref")
            return _completed(returncode=0 if self.fetch_ok else 128, stderr="could not read from remote")
        if cmd[:2] == ["git", "ls-remote"]:
            return _completed(returncode=0 if self.branch_exists else 2)
        if "--name-only" in cmd:
            return _completed(self.names)
        if "diff" in cmd:
            result = self.diffs.pop(0)
            if isinstance(result, Exception):
                return _completed(returncode=1, stderr=str(result))
            return _completed(result)
        raise AssertionError(f"unexpected command {cmd}")


@pytest.fixture
def fake_git(mocker):
    def install(**kwargs):
        fake = FakeGit(**kwargs)
        mocker.patch("prcontext_core.utils.process.subprocess.run", side_effect=fake)
        return fake

    return install


# ---------------------------------------------------------------------------
# ensure_remote_refs
# ---------------------------------------------------------------------------


class TestEnsureRemoteRefs:
    def test_same_repo_branch(self, fake_git):
        fake = fake_git(branch_exists=True)
        revs = ensure_remote_refs(7, "main", "feat")
        assert revs == RevisionPair(base="origin/main", head="origin/feat")
        assert fake.calls[0] == ["git", "fetch", "--quiet", "origin"]
        assert fake.calls[1] == ["git", "ls-remote", "--exit-code", "--heads", "origin", "feat"]
        assert len(fake.calls) == 2

    def test_fork_pr_fetches_pull_head(self, fake_git):
        fake = fake_git(branch_exists=False)
        revs = ensure_remote_refs(7, "main", "contributor-branch")
        assert revs.base == "origin/main"
        assert revs.head == "refs/remotes/origin/pr/7"
        assert fake.calls[-1] == ["git", "fetch", "--quiet", "origin", "pull/7/head:refs/remotes/origin/pr/7"]

    def test_sync_failure_is_fatal(self, fake_git):
        fake = fake_git(fetch_ok=False)
        with pytest.raises(RevisionSyncError):
            ensure_remote_refs(7, "main", "feat")
        assert len(fake.calls) == 1

    def test_fork_fetch_failure_is_fatal(self, fake_git):
        fake_git(branch_exists=False, pr_fetch_ok=False)
        with pytest.raises(RevisionSyncError, match="PR #7"):
            ensure_remote_refs(7, "main", "gone")

    def test_custom_remote(self, fake_git):
        fake = fake_git(branch_exists=True)
        revs = ensure_remote_refs(7, "main", "feat", remote="upstream")
        assert revs.range == "upstream/main...upstream/feat"
        assert fake.calls[0] == ["git", "fetch", "--quiet", "upstream"]


# ---------------------------------------------------------------------------
# diff collection
# ---------------------------------------------------------------------------


class TestFilterPaths:
    def test_drops_lockfiles(self):
        paths = ["src/a.rs", "Cargo.lock", "web/package-lock.json", "yarn.lock", "pnpm-lock.yaml", "README.md"]
        assert filter_paths(paths) == ["src/a.rs", "README.md"]

    def test_exclude_patterns(self):
        assert filter_paths(["dist/x.js", "src/y.js"], exclude=["dist/"]) == ["src/y.js"]

    def test_excludes_narrow_after_lockfiles(self):
        paths = ["yarn.lock", "web/dist/app.js", "web/src/app.js", "web/src/app.min.js"]
        assert filter_paths(paths, exclude=["dist", "*.min.js"]) == ["web/src/app.js"]

    def test_preserves_order(self):
        assert filter_paths(["z", "a", "m"]) == ["z", "a", "m"]


class TestTruncateDiffLines:
    def test_under_limit_unchanged(self):
        assert truncate_diff_lines("a\nb", max_lines=2) == "a\nb"

    def test_over_limit_gets_banner(self):
        text = "\n".join(f"line{i}" for i in range(10))
        result = truncate_diff_lines(text, max_lines=4)
        assert result == "# WARNING: Diff truncated from 10 to 4 lines\n\nline0\nline1\nline2\nline3"

    def test_default_ceiling(self):
        text = "\n".join("x" for _ in range(10_001))
        result = truncate_diff_lines(text)
        assert result.startswith("# WARNING: Diff truncated from 10001 to 10000 lines\n\n")
        assert len(result.split("\n")) == 10_000 + 2


class TestCollectDiff:
    def test_no_changed_files(self, fake_git):
        fake = fake_git(names="")
        assert collect_diff(REVS) == ""
        assert len(fake.calls) == 1

    def test_only_lockfiles_changed(self, fake_git):
        fake = fake_git(names="Cargo.lock\nyarn.lock\n")
        assert collect_diff(REVS) == ""
        assert len(fake.calls) == 1

    def test_uses_triple_dot_range(self, fake_git):
        fake = fake_git(names="a.py\n", diffs=["diff-a"])
        assert collect_diff(REVS) == "diff-a"
        assert fake.calls[0] == ["git", "--no-pager", "diff", "--name-only", "origin/main...origin/feat", "--"]
        assert fake.calls[1] == ["git", "--no-pager", "diff", "--no-color", "origin/main...origin/feat", "--", "a.py"]

    def test_lockfiles_not_passed_to_diff(self, fake_git):
        fake = fake_git(names="a.py\npackage-lock.json\nb.py\n", diffs=["d"])
        collect_diff(REVS)
        assert fake.calls[1][-2:] == ["a.py", "b.py"]

    def test_batches_joined_in_order(self, fake_git):
        names = "\n".join(f"f{i}.py" for i in range(5))
        fake = fake_git(names=names, diffs=["one", "two", "three"])
        assert collect_diff(REVS, batch_size=2) == "one\ntwo\nthree"
        batches = [call[6:] for call in fake.calls[1:]]
        assert batches == [["f0.py", "f1.py"], ["f2.py", "f3.py"], ["f4.py"]]

    def test_default_batch_size_is_200(self, fake_git):
        names = "\n".join(f"f{i}.py" for i in range(401))
        fake = fake_git(names=names, diffs=["a", "b", "c"])
        collect_diff(REVS)
        assert [len(call) - 6 for call in fake.calls[1:]] == [200, 200, 1]

    def test_failed_batch_contributes_empty_string(self, fake_git):
        names = "\n".join(f"f{i}.py" for i in range(3))
        fake_git(names=names, diffs=["one", RuntimeError("boom"), "three"])
        assert collect_diff(REVS, batch_size=1) == "one\n\nthree"

    def test_truncates_large_diff(self, fake_git):
        fake_git(names="a.py", diffs=["\n".join(str(i) for i in range(50))])
        result = collect_diff(REVS, max_lines=10)
        assert result.startswith("# WARNING: Diff truncated from 50 to 10 lines")


def test_list_changed_files_strips_blank_lines(fake_git):
    fake_git(names="  a.py \n\nb.py\n")
    assert list_changed_files(REVS) == ["a.py", "b.py"]
