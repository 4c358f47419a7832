import fnmatch

from prcontext_core.config import DEFAULT_LOCKFILE_SUFFIXES


def is_lockfile(file_name: str, suffixes=DEFAULT_LOCKFILE_SUFFIXES) -> bool:
    """True when the path ends in a dependency lockfile name (case-sensitive)."""
    return any(file_name.endswith(suffix) for suffix in suffixes)


def is_excluded(filename: str, patterns: list[str]) -> bool:
    """True when a changed path matches one of the configured ``exclude`` patterns.

    Applied after the lockfile filter, so excludes only ever narrow the diff
    further. A pattern matches if it globs the full path (``src/gen/*.py``)
    or the basename (``*.min.js``), or if it names a directory anywhere in
    the path (``dist`` or ``vendor/``).
    """
    basename = filename.rsplit("/", 1)[-1]
    for pattern in patterns:
        if fnmatch.fnmatch(filename, pattern) or fnmatch.fnmatch(basename, pattern):
            return True
        directory = pattern.rstrip("/") + "/"
        if filename.startswith(directory) or f"/{directory}" in filename:
            return True
    return False
