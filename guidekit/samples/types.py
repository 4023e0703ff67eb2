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

import stat
from dataclasses import dataclass, field
from enum import auto
from pathlib import Path
from typing import Any

from guidekit.utils.enum import StrEnum


class EntryKind(StrEnum):
    DIRECTORY = auto()
    FILE = auto()


class ArchiveStatus(StrEnum):
    WRITTEN = auto()
    SKIPPED = auto()


# Tree walk variants


@dataclass(frozen=True, slots=True)
class DirEntry:
    """A directory reached while walking a source root."""

    rel_path: str  # POSIX, no trailing slash
    mode: int  # permission bits only
    mtime: float
    source: Path


@dataclass(frozen=True, slots=True)
class FileEntry:
    """A regular file reached while walking a source root."""

    rel_path: str  # POSIX
    size: int
    mode: int  # permission bits only
    mtime: float
    source: Path

    @property
    def name(self) -> str:
        return self.rel_path.rsplit("/", 1)[-1]


TreeEntry = DirEntry | FileEntry


# Archive entries


@dataclass(frozen=True, slots=True)
class ArchiveEntry:
    """
    One member of a produced archive.

    `mode` is the full Unix mode: type flag (S_IFDIR / S_IFREG) OR'd with
    the permission bits.
    """

    path: str
    size: int
    mode: int
    kind: EntryKind

    @property
    def permissions(self) -> int:
        return stat.S_IMODE(self.mode)

    @property
    def is_dir(self) -> bool:
        return self.kind == EntryKind.DIRECTORY

    def to_dict(self) -> dict[str, Any]:
        return {
            "path": self.path,
            "size": self.size,
            "mode": f"{self.mode:o}",
            "kind": self.kind.value,
        }


@dataclass(frozen=True, slots=True)
class ArchiveResult:
    status: ArchiveStatus
    archive_file: Path
    entries: tuple[ArchiveEntry, ...] = field(default_factory=tuple)

    @property
    def skipped(self) -> bool:
        return self.status == ArchiveStatus.SKIPPED

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status.value,
            "archive_file": str(self.archive_file),
            "entries": [e.to_dict() for e in self.entries],
        }
