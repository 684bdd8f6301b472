"""Recursive discovery of issue template files."""

import os

ISSUE_FILE_SUFFIX = ".issue.md"


def list_files(root: str) -> list[str]:
    """Return every non-directory path under root, in filesystem enumeration order.

    Paths are built as "{dir}/{name}" so "." yields "./docs/a.issue.md".
    Directory symlinks are listed as files, not followed.
    """
    files: list[str] = []
    prefix = root.rstrip("/")
    with os.scandir(prefix or "/") as entries:
        for entry in entries:
            path = f"{prefix}/{entry.name}"
            if entry.is_dir(follow_symlinks=False):
                files.extend(list_files(path))
            else:
                files.append(path)
    return files


def list_matching_files(root: str, suffix: str = ISSUE_FILE_SUFFIX) -> list[str]:
    return [path for path in list_files(root) if path.rsplit("/", 1)[-1].endswith(suffix)]
