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

from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from guidekit.core.config import ArchiveConfig

DEFAULT_MANIFEST_NAMES: tuple[str, ...] = ("samples.yaml", "samples.yml", "samples.json")
DEFAULT_OUTPUT_DIR = "build/samples"
DEFAULT_README_NAME = "README.adoc"
DEFAULT_DSLS: tuple[str, ...] = ("groovy", "kotlin")

# Shared content of a sample, zipped together with every DSL variant
COMMON_DIR = "common"


@dataclass(frozen=True, slots=True)
class SampleSpec:
    """
    One sample as declared in the manifest.

    `dir` is absolute (resolved against the manifest location).
    """

    name: str
    dir: Path
    readme_name: str = DEFAULT_README_NAME
    exclude_globs: tuple[str, ...] = ()
    dsls: tuple[str, ...] = DEFAULT_DSLS


@dataclass(frozen=True, slots=True)
class Manifest:
    root: Path
    output_dir: Path
    samples: tuple[SampleSpec, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def sample(self, name: str) -> SampleSpec | None:
        for s in self.samples:
            if s.name == name:
                return s
        return None


@dataclass(frozen=True, slots=True)
class ZipJob:
    """A single archive to produce: one sample, optionally one DSL variant."""

    sample: str
    dsl: str | None
    config: ArchiveConfig

    @property
    def label(self) -> str:
        return self.sample if self.dsl is None else f"{self.sample}-{self.dsl}"
