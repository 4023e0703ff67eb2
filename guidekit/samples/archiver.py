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

"""
Zips a sample to a given location.

Skips when the "main" source has no files; main content is usually the
DSL-specific part of a sample.
"""

import logging
import shutil
import stat
import time
import zipfile
from collections.abc import Sequence
from pathlib import Path

from guidekit.core.config import README_ENTRY_NAME, ArchiveConfig
from guidekit.core.errors import ArchiveError, ArchiveIOError, ConfigurationError
from guidekit.samples.filters import filter_build_script, is_build_script
from guidekit.samples.tree import has_files, iter_trees
from guidekit.samples.types import (
    ArchiveEntry,
    ArchiveResult,
    ArchiveStatus,
    DirEntry,
    EntryKind,
    FileEntry,
    TreeEntry,
)

log = logging.getLogger(__name__)

# earliest valid ZIP timestamp
ZIP_EPOCH = (1980, 1, 1, 0, 0, 0)

# Unix "version made by" host
_UNIX_SYSTEM = 3

# MS-DOS attribute bits in the low byte of external_attr
_DOS_READ_ONLY = 0x01
_DOS_DIRECTORY = 0x10


def entry_name(entry: FileEntry, readme_name: str) -> str:
    """In-archive name of a file: the readme is flattened to README."""
    if entry.name == readme_name:
        return README_ENTRY_NAME
    return entry.rel_path


def make_zip_info(name: str, mode: int, date_time: tuple[int, ...]) -> zipfile.ZipInfo:
    """
    Build a DEFLATE entry header carrying the full Unix mode.
    """
    zi = zipfile.ZipInfo(name, date_time=date_time)  # type: ignore[arg-type]
    zi.create_system = _UNIX_SYSTEM
    zi.compress_type = zipfile.ZIP_DEFLATED

    attr = (mode & 0xFFFF) << 16
    if stat.S_ISDIR(mode):
        attr |= _DOS_DIRECTORY
    if not mode & stat.S_IWUSR:
        attr |= _DOS_READ_ONLY
    zi.external_attr = attr
    return zi


class SampleArchiver:
    """
    Writes one sample archive from an ArchiveConfig.

    Each call to archive() is independent: the output is deleted and
    rebuilt from scratch, and the set of emitted directories lives only
    for the duration of the call.
    """

    def __init__(self, config: ArchiveConfig) -> None:
        self._config = config

    @property
    def config(self) -> ArchiveConfig:
        return self._config

    def archive(self) -> ArchiveResult:
        cfg = self._config
        cfg.validate()
        archive_file = cfg.archive_file
        excludes = cfg.effective_excludes

        if not has_files(cfg.main_source_roots, excludes, ignore=archive_file):
            log.info("skipping %s: main source has no files", archive_file)
            return ArchiveResult(status=ArchiveStatus.SKIPPED, archive_file=archive_file)

        self._ensure_output_dir(archive_file)
        tree = self._resolve_names(list(iter_trees(cfg.source_roots, excludes, ignore=archive_file)))
        self._delete_previous(archive_file)

        try:
            with zipfile.ZipFile(archive_file, mode="w", compression=zipfile.ZIP_DEFLATED) as zf:
                entries = self._write_tree(zf, tree)
        except OSError as e:
            self._discard_partial(archive_file)
            raise ArchiveIOError(f"Failed to write archive: {e}", code="write_failed", path=str(archive_file)) from e
        except ArchiveError:
            self._discard_partial(archive_file)
            raise

        log.info("wrote %s (%d entries)", archive_file, len(entries))
        return ArchiveResult(status=ArchiveStatus.WRITTEN, archive_file=archive_file, entries=tuple(entries))

    # internals

    def _resolve_names(self, tree: list[TreeEntry]) -> list[TreeEntry]:
        """
        Settle files that land on the same entry name.

        Several readme files (all flattened to README) are rejected before the
        existing archive is deleted. Any other name present under more than one
        source root is taken from the later root, so a DSL directory can
        override a file from common content.
        """
        readme_name = self._config.readme_name
        last_index: dict[str, int] = {}
        readmes: list[str] = []
        for i, e in enumerate(tree):
            if isinstance(e, FileEntry):
                name = entry_name(e, readme_name)
                last_index[name] = i
                if name == README_ENTRY_NAME:
                    readmes.append(str(e.source))

        if len(readmes) > 1:
            raise ConfigurationError(
                f"Several files would be stored as {README_ENTRY_NAME}: {', '.join(readmes)}",
                code="duplicate_readme",
                details={"entry": README_ENTRY_NAME, "sources": readmes},
            )

        kept: list[TreeEntry] = []
        for i, e in enumerate(tree):
            if isinstance(e, FileEntry) and last_index[entry_name(e, readme_name)] != i:
                log.debug("%s overridden by a later source root", e.source)
                continue
            kept.append(e)
        return kept

    def _ensure_output_dir(self, archive_file: Path) -> None:
        try:
            archive_file.parent.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise ConfigurationError(
                f"Cannot create output directory: {e}",
                code="invalid_archive_file",
                path=str(archive_file.parent),
            ) from e

    def _delete_previous(self, archive_file: Path) -> None:
        try:
            archive_file.unlink(missing_ok=True)
        except OSError as e:
            raise ArchiveIOError(
                f"Cannot delete previous archive: {e}", code="delete_failed", path=str(archive_file)
            ) from e

    def _discard_partial(self, archive_file: Path) -> None:
        try:
            archive_file.unlink(missing_ok=True)
        except OSError:
            log.warning("could not remove partial archive %s", archive_file)

    def _date_time(self, mtime: float) -> tuple[int, ...]:
        if self._config.reproducible:
            return ZIP_EPOCH
        return max(tuple(time.localtime(mtime)[:6]), ZIP_EPOCH)

    def _write_tree(self, zf: zipfile.ZipFile, tree: Sequence[TreeEntry]) -> list[ArchiveEntry]:
        emitted_dirs: set[str] = set()
        out: list[ArchiveEntry] = []
        for e in tree:
            if isinstance(e, DirEntry):
                if e.rel_path in emitted_dirs:
                    continue
                emitted_dirs.add(e.rel_path)
                out.append(self._write_dir(zf, e))
            elif isinstance(e, FileEntry):
                out.append(self._write_file(zf, e))
        return out

    def _write_dir(self, zf: zipfile.ZipFile, e: DirEntry) -> ArchiveEntry:
        name = f"{e.rel_path}/"
        mode = stat.S_IFDIR | e.mode
        zf.writestr(make_zip_info(name, mode, self._date_time(e.mtime)), b"")
        log.debug("dir  %s %o", name, mode)
        return ArchiveEntry(path=name, size=0, mode=mode, kind=EntryKind.DIRECTORY)

    def _write_file(self, zf: zipfile.ZipFile, e: FileEntry) -> ArchiveEntry:
        name = entry_name(e, self._config.readme_name)
        mode = stat.S_IFREG | e.mode
        zi = make_zip_info(name, mode, self._date_time(e.mtime))
        zi.file_size = e.size

        if is_build_script(e.name, self._config.build_script_names):
            try:
                data = filter_build_script(e.source.read_bytes())
            except UnicodeDecodeError as ex:
                raise ArchiveIOError(
                    f"Build script is not valid UTF-8: {ex}", code="decode_failed", path=str(e.source)
                ) from ex
            zf.writestr(zi, data)
        else:
            with e.source.open("rb") as src, zf.open(zi, mode="w") as dst:
                shutil.copyfileobj(src, dst)

        log.debug("file %s %o (%d bytes)", name, mode, zi.file_size)
        return ArchiveEntry(path=name, size=zi.file_size, mode=mode, kind=EntryKind.FILE)


def zip_sample(
    source_roots: Sequence[Path],
    main_source_roots: Sequence[Path],
    exclude_globs: Sequence[str],
    readme_name: str,
    archive_file: Path,
    *,
    reproducible: bool = True,
    default_excludes: bool = True,
) -> ArchiveResult:
    """
    Archive a sample in one call.

    Returns a SKIPPED result (and leaves archive_file alone) when the main
    source roots hold no files after exclusion. Ant's default excludes
    (VCS metadata, editor backups) apply unless default_excludes is False.
    """
    config = ArchiveConfig(
        source_roots=tuple(Path(p) for p in source_roots),
        main_source_roots=tuple(Path(p) for p in main_source_roots),
        archive_file=Path(archive_file),
        readme_name=readme_name,
        exclude_globs=tuple(exclude_globs),
        reproducible=reproducible,
        default_excludes=default_excludes,
    )
    return SampleArchiver(config).archive()
