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

from guidekit.manifest.loader import DefaultManifestLoader, ManifestLoadError, find_manifest
from guidekit.manifest.planner import plan_jobs, plan_sample
from guidekit.manifest.types import Manifest, SampleSpec, ZipJob

__all__ = (
    "DefaultManifestLoader",
    "ManifestLoadError",
    "find_manifest",
    "plan_jobs",
    "plan_sample",
    "Manifest",
    "SampleSpec",
    "ZipJob",
)
