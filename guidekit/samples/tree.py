# SPDX-License-Identifier: AGPL-3.0-only
#
# Copyright (c) 2026 Guidekit Contributors
#
# This file is part of Guidekit.
#
# Guidekit is free software: you can redistribute it and/or modify
# it under the terms of the GNU Affero General Public License as published by
# the Free Software Foundation, version 3 only.
#
# Guidekit is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.
# See the GNU Affero General Public License for more details.

import logging
import os
import re
from collections.abc import Iterable, Iterator, Sequence
from functools import lru_cache
from pathlib import Path

from guidekit.core.errors import ArchiveIOError
from guidekit.samples.types import DirEntry, FileEntry, TreeEntry

log = logging.getLogger(__name__)


# Glob matching


@lru_cache(maxsize=2048)
def glob_to_regex(pattern: str) -> re.Pattern[str]:
    """
    Translate an exclusion glob to a compiled, anchored regex.

      - **/  => zero or more leading path segments
      - /**  => at the end: the path itself or anything below it
      - **   => anything, across segments
      - *    => [^/]*
      - ?    => [^/]

    A pattern ending with "/" behaves as if it ended with "/**".
    """
    pattern = pattern.replace("\\", "/")
    if pattern.endswith("/"):
        pattern += "**"

    i = 0
    n = len(pattern)
    out: list[str] = ["^"]
    while i < n:
        c = pattern[i]
        if c == "*":
            if i + 1 < n and pattern[i + 1] == "*":
                if i + 2 < n and pattern[i + 2] == "/":
                    out.append("(?:.*/)?")
                    i += 3
                else:
                    out.append(".*")
                    i += 2
            else:
                out.append("[^/]*")
                i += 1
        elif c == "/" and pattern[i:] == "/**":
            out.append("(?:/.*)?")
            i += 3
        elif c == "?":
            out.append("[^/]")
            i += 1
        else:
            out.append(re.escape(c))
            i += 1
    out.append("$")
    return re.compile("".join(out))


def is_excluded(rel_path: str, exclude_globs: Sequence[str]) -> bool:
    """Case-sensitive match of a root-relative POSIX path against any glob."""
    return any(glob_to_regex(g).match(rel_path) is not None for g in exclude_globs)


# Tree walking


def _permissions(st: os.stat_result) -> int:
    return st.st_mode & 0o777


def iter_tree(
    root: Path,
    exclude_globs: Sequence[str] = (),
    *,
    ignore: Path | None = None,
) -> Iterator[TreeEntry]:
    """
    Walk one source root, yielding directories before their contents.

    Siblings come in name order. Excluded directories are pruned with their
    whole subtree. A missing root yields nothing; a root that is a file
    yields that file under its base name. `ignore` names a single file that
    is never yielded (the archive being written).
    """
    ignore_resolved = ignore.resolve() if ignore is not None else None

    if not root.exists():
        log.debug("source root does not exist, skipping: %s", root)
        return

    try:
        if root.is_file():
            if not is_excluded(root.name, exclude_globs) and root.resolve() != ignore_resolved:
                st = root.stat()
                yield FileEntry(
                    rel_path=root.name, size=st.st_size, mode=_permissions(st), mtime=st.st_mtime, source=root
                )
            return

        visited = {root.resolve()}
        yield from _walk_dir(root, "", exclude_globs, ignore_resolved, visited)
    except OSError as e:
        raise ArchiveIOError(f"Cannot read source tree: {e}", code="read_failed", path=str(root)) from e


def _walk_dir(
    directory: Path,
    prefix: str,
    exclude_globs: Sequence[str],
    ignore: Path | None,
    visited: set[Path],
) -> Iterator[TreeEntry]:
    children = sorted(directory.iterdir(), key=lambda p: p.name)
    for child in children:
        rel = f"{prefix}{child.name}"
        if is_excluded(rel, exclude_globs):
            continue

        if child.is_dir():
            real = child.resolve()
            if real in visited:
                # symlink loop
                continue
            st = child.stat()
            yield DirEntry(rel_path=rel, mode=_permissions(st), mtime=st.st_mtime, source=child)
            yield from _walk_dir(child, f"{rel}/", exclude_globs, ignore, visited | {real})
        elif child.is_file():
            if ignore is not None and child.resolve() == ignore:
                continue
            st = child.stat()
            yield FileEntry(rel_path=rel, size=st.st_size, mode=_permissions(st), mtime=st.st_mtime, source=child)


def iter_trees(
    roots: Iterable[Path],
    exclude_globs: Sequence[str] = (),
    *,
    ignore: Path | None = None,
) -> Iterator[TreeEntry]:
    """Walk several roots in order. Paths are relative to their own root."""
    for root in roots:
        yield from iter_tree(Path(root), exclude_globs, ignore=ignore)


def has_files(
    roots: Iterable[Path],
    exclude_globs: Sequence[str] = (),
    *,
    ignore: Path | None = None,
) -> bool:
    """True if at least one file other than `ignore` survives filtering under any of the roots."""
    return any(isinstance(e, FileEntry) for e in iter_trees(roots, exclude_globs, ignore=ignore))
