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

from collections.abc import Sequence

from guidekit.core.config import ArchiveConfig
from guidekit.core.errors import ConfigurationError
from guidekit.manifest.types import COMMON_DIR, Manifest, SampleSpec, ZipJob


def plan_sample(sample: SampleSpec, manifest: Manifest) -> tuple[ZipJob, ...]:
    """
    Expand one sample into its archive jobs.

    With DSL subdirectories present, every declared DSL gets a job whose
    main source is the DSL directory; a DSL without content is later
    skipped by the archiver. A sample without any DSL subdirectory is
    zipped as a whole.
    """
    has_dsl_dirs = any((sample.dir / dsl).is_dir() for dsl in sample.dsls)

    if not has_dsl_dirs:
        config = ArchiveConfig(
            source_roots=(sample.dir,),
            main_source_roots=(sample.dir,),
            archive_file=manifest.output_dir / f"{sample.name}.zip",
            readme_name=sample.readme_name,
            exclude_globs=sample.exclude_globs,
        )
        return (ZipJob(sample=sample.name, dsl=None, config=config),)

    jobs: list[ZipJob] = []
    for dsl in sample.dsls:
        dsl_dir = sample.dir / dsl
        config = ArchiveConfig(
            source_roots=(sample.dir / COMMON_DIR, dsl_dir),
            main_source_roots=(dsl_dir,),
            archive_file=manifest.output_dir / f"{sample.name}-{dsl}.zip",
            readme_name=sample.readme_name,
            exclude_globs=sample.exclude_globs,
        )
        jobs.append(ZipJob(sample=sample.name, dsl=dsl, config=config))
    return tuple(jobs)


def plan_jobs(manifest: Manifest, only: Sequence[str] | None = None) -> tuple[ZipJob, ...]:
    if only:
        unknown = sorted(set(only) - {s.name for s in manifest.samples})
        if unknown:
            raise ConfigurationError(
                f"Unknown sample(s): {', '.join(unknown)}",
                code="unknown_sample",
                details={"unknown": unknown},
            )
        samples = [s for s in manifest.samples if s.name in set(only)]
    else:
        samples = list(manifest.samples)

    jobs: list[ZipJob] = []
    for s in samples:
        jobs.extend(plan_sample(s, manifest))
    return tuple(jobs)
