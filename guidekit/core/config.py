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

import os
import tempfile
from dataclasses import dataclass
from pathlib import Path

from guidekit.core.errors import ConfigurationError

# In-archive name the readme file is flattened to
README_ENTRY_NAME = "README"

# Build scripts whose documentation tag markers are stripped before packaging
BUILD_SCRIPT_NAMES: tuple[str, ...] = (
    "build.gradle",
    "settings.gradle",
    "build.gradle.kts",
    "settings.gradle.kts",
)

TAG_MARKERS: tuple[str, ...] = ("// tag::", "// end::")

# Ant default excludes: VCS metadata and editor droppings never belong in a sample
DEFAULT_EXCLUDES: tuple[str, ...] = (
    "**/*~",
    "**/#*#",
    "**/.#*",
    "**/%*%",
    "**/._*",
    "**/CVS/**",
    "**/.cvsignore",
    "**/SCCS/**",
    "**/vssver.scc",
    "**/.svn/**",
    "**/.DS_Store",
    "**/.git/**",
    "**/.gitattributes",
    "**/.gitignore",
    "**/.gitmodules",
    "**/.hg/**",
    "**/.hgignore",
    "**/.hgsub",
    "**/.hgsubstate",
    "**/.hgtags",
    "**/.bzr/**",
    "**/.bzrignore",
)


@dataclass(frozen=True)
class ArchiveConfig:
    source_roots: tuple[Path, ...]
    main_source_roots: tuple[Path, ...]
    archive_file: Path
    readme_name: str
    exclude_globs: tuple[str, ...] = ()
    reproducible: bool = True  # fixed entry timestamps => byte-identical output
    build_script_names: tuple[str, ...] = BUILD_SCRIPT_NAMES
    default_excludes: bool = True

    @property
    def effective_excludes(self) -> tuple[str, ...]:
        if self.default_excludes:
            return DEFAULT_EXCLUDES + tuple(self.exclude_globs)
        return tuple(self.exclude_globs)

    def validate(self) -> None:
        """
        Check the inputs that can be checked without walking any tree.
        """
        name = self.readme_name.strip() if isinstance(self.readme_name, str) else ""
        if not name:
            raise ConfigurationError("Readme name must be a non-empty file name.", code="invalid_readme_name")
        if "/" in self.readme_name or "\\" in self.readme_name:
            raise ConfigurationError(
                f"Readme name must be a base name, not a path: {self.readme_name!r}",
                code="invalid_readme_name",
            )
        if not self.source_roots:
            raise ConfigurationError("At least one source root is required.", code="no_source_roots")
        if self.archive_file.exists() and self.archive_file.is_dir():
            raise ConfigurationError(
                "Archive path is an existing directory.",
                code="invalid_archive_file",
                path=str(self.archive_file),
            )
        self._check_output_writable()

    def _check_output_writable(self) -> None:
        """
        The nearest existing ancestor of the archive must be a directory we
        can create files in; missing directories below it are created later.
        """
        ancestor = self.archive_file.parent
        while not ancestor.exists() and ancestor != ancestor.parent:
            ancestor = ancestor.parent

        if not ancestor.is_dir() or not os.access(ancestor, os.W_OK):
            raise ConfigurationError(
                "Archive location is not writable.",
                code="invalid_archive_file",
                path=str(ancestor),
            )

        # os.access succeeds for root even on read-only mounts and /proc
        try:
            with tempfile.TemporaryFile(dir=ancestor):
                pass
        except OSError as e:
            raise ConfigurationError(
                f"Archive location is not writable: {e}",
                code="invalid_archive_file",
                path=str(ancestor),
            ) from e
