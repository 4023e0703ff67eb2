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
import zipfile
from pathlib import Path

from guidekit.core.errors import ArchiveIOError
from guidekit.samples.types import ArchiveEntry, EntryKind


def entry_from_zip_info(zi: zipfile.ZipInfo) -> ArchiveEntry:
    mode = (zi.external_attr >> 16) & 0xFFFF
    is_dir = zi.is_dir() or stat.S_ISDIR(mode)
    return ArchiveEntry(
        path=zi.filename,
        size=zi.file_size,
        mode=mode,
        kind=EntryKind.DIRECTORY if is_dir else EntryKind.FILE,
    )


def read_entries(archive_file: Path) -> tuple[ArchiveEntry, ...]:
    """
    Read the members of a zip archive back, in stored order.
    """
    try:
        with zipfile.ZipFile(archive_file) as zf:
            return tuple(entry_from_zip_info(zi) for zi in zf.infolist())
    except (OSError, zipfile.BadZipFile) as e:
        raise ArchiveIOError(f"Cannot read archive: {e}", code="read_failed", path=str(archive_file)) from e
