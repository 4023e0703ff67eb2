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

import json
from pathlib import Path
from typing import Any

from guidekit.core.errors import ConfigurationError
from guidekit.manifest.loader import find_manifest


def ensure_root(path: str) -> Path:
    p = Path(path).resolve()
    if not p.exists():
        raise ConfigurationError(f"Path does not exist: {p}", code="path_not_found")
    return p


def default_manifest_file(root: Path) -> Path:
    candidate = find_manifest(root)
    if candidate is None:
        raise ConfigurationError(
            f"No samples manifest found in {root} (expected samples.yaml, samples.yml or samples.json).",
            code="manifest_not_found",
        )
    return candidate


def dumps_json(data: Any) -> str:
    return json.dumps(data, sort_keys=True, indent=2, ensure_ascii=False) + "\n"
