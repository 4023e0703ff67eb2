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

# Archiving
from guidekit.samples.archiver import (
    SampleArchiver,
    entry_name,
    make_zip_info,
    zip_sample,
)

# Content filtering
from guidekit.samples.filters import (
    filter_build_script,
    is_build_script,
    split_lines,
    strip_tag_markers,
)

# Reading archives back
from guidekit.samples.inspect import read_entries

# Tree walking
from guidekit.samples.tree import (
    glob_to_regex,
    has_files,
    is_excluded,
    iter_tree,
    iter_trees,
)

# Core types (stable public API)
from guidekit.samples.types import (
    ArchiveEntry,
    ArchiveResult,
    ArchiveStatus,
    DirEntry,
    EntryKind,
    FileEntry,
    TreeEntry,
)

# Public export control

__all__ = (
    # types
    "ArchiveEntry",
    "ArchiveResult",
    "ArchiveStatus",
    "DirEntry",
    "EntryKind",
    "FileEntry",
    "TreeEntry",
    # tree
    "glob_to_regex",
    "has_files",
    "is_excluded",
    "iter_tree",
    "iter_trees",
    # filters
    "filter_build_script",
    "is_build_script",
    "split_lines",
    "strip_tag_markers",
    # archiving
    "SampleArchiver",
    "entry_name",
    "make_zip_info",
    "zip_sample",
    "read_entries",
)
