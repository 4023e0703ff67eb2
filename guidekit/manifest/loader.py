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
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml

from guidekit.core.errors import ConfigurationError
from guidekit.manifest.types import (
    DEFAULT_DSLS,
    DEFAULT_MANIFEST_NAMES,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_README_NAME,
    Manifest,
    SampleSpec,
)


class ManifestLoadError(ConfigurationError):
    """Raised when a samples manifest cannot be read or is malformed."""

    def __init__(
        self,
        message: str,
        code: str = "invalid_manifest",
        path: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message, code=code, path=path, details=details)


def find_manifest(root: Path) -> Path | None:
    for name in DEFAULT_MANIFEST_NAMES:
        candidate = root / name
        if candidate.is_file():
            return candidate
    return None


class DefaultManifestLoader:
    """
    Loads a Manifest from samples.yaml / samples.yml / samples.json
    """

    def load(self, path: Path) -> Manifest:
        if not isinstance(path, Path):
            path = Path(path)

        if not path.exists():
            raise ManifestLoadError(
                f"Manifest file does not exist: {path}", code="manifest_not_found", path=str(path)
            )

        data = self._read_manifest_file(path)
        if data is None:
            data = {}

        if not isinstance(data, dict):
            raise ManifestLoadError("Manifest root must be a mapping/object.", path=str(path))

        root = path.resolve().parent

        output_dir = data.get("output_dir", DEFAULT_OUTPUT_DIR)
        if not isinstance(output_dir, str) or not output_dir.strip():
            raise ManifestLoadError(
                "'output_dir' must be a non-empty string.", code="invalid_output_dir", path=str(path)
            )

        default_readme = data.get("readme", DEFAULT_README_NAME)
        if not isinstance(default_readme, str) or not default_readme.strip():
            raise ManifestLoadError("'readme' must be a non-empty string.", code="invalid_readme", path=str(path))

        global_excludes = self._parse_str_list(data.get("excludes"), field_name="excludes", path=path)

        samples = self._parse_samples(
            data.get("samples"),
            root=root,
            default_readme=default_readme,
            global_excludes=global_excludes,
            path=path,
        )

        metadata = data.get("metadata")

        return Manifest(
            root=root,
            output_dir=(root / output_dir).resolve(),
            samples=samples,
            metadata=dict(metadata) if isinstance(metadata, dict) else {},
        )

    def _read_manifest_file(self, path: Path) -> Any:
        suffix = path.suffix.lower()
        try:
            raw = path.read_text(encoding="utf-8")
        except OSError as e:
            raise ManifestLoadError(f"Cannot read manifest: {e}", code="manifest_unreadable", path=str(path)) from e

        try:
            if suffix == ".json":
                return json.loads(raw)
            return yaml.safe_load(raw)
        except (json.JSONDecodeError, yaml.YAMLError) as e:
            raise ManifestLoadError(f"Cannot parse manifest: {e}", code="manifest_syntax", path=str(path)) from e

    def _parse_str_list(self, raw: Any, *, field_name: str, path: Path) -> tuple[str, ...]:
        if raw is None:
            return ()
        if isinstance(raw, str):
            raw = [raw]
        if not isinstance(raw, list) or not all(isinstance(x, str) and x.strip() for x in raw):
            raise ManifestLoadError(
                f"'{field_name}' must be a list of non-empty strings.",
                code=f"invalid_{field_name}",
                path=str(path),
            )
        return tuple(raw)

    def _parse_samples(
        self,
        raw: Any,
        *,
        root: Path,
        default_readme: str,
        global_excludes: tuple[str, ...],
        path: Path,
    ) -> tuple[SampleSpec, ...]:
        if raw is None:
            return ()

        if not isinstance(raw, list):
            raise ManifestLoadError("'samples' must be a list.", code="invalid_samples", path=str(path))

        out: list[SampleSpec] = []
        seen: set[str] = set()
        for i, spec in enumerate(raw):
            if not isinstance(spec, dict):
                raise ManifestLoadError(f"Sample #{i + 1} must be an object.", code="invalid_sample", path=str(path))

            name = spec.get("name")
            if not isinstance(name, str) or not name.strip():
                raise ManifestLoadError(
                    f"Sample #{i + 1} requires a non-empty 'name'.", code="invalid_sample", path=str(path)
                )
            if name in seen:
                raise ManifestLoadError(
                    f"Duplicate sample name: {name}", code="duplicate_sample", path=str(path), details={"name": name}
                )
            seen.add(name)

            sample_dir = spec.get("dir", name)
            if not isinstance(sample_dir, str) or not sample_dir.strip():
                raise ManifestLoadError(
                    f"Sample '{name}': 'dir' must be a string.", code="invalid_sample", path=str(path)
                )

            readme = spec.get("readme", default_readme)
            if not isinstance(readme, str) or not readme.strip():
                raise ManifestLoadError(
                    f"Sample '{name}': 'readme' must be a non-empty string.", code="invalid_readme", path=str(path)
                )

            excludes = global_excludes + self._parse_str_list(spec.get("excludes"), field_name="excludes", path=path)

            dsls = (
                self._parse_str_list(spec.get("dsls"), field_name="dsls", path=path)
                if "dsls" in spec
                else DEFAULT_DSLS
            )

            out.append(
                SampleSpec(
                    name=name,
                    dir=(root / sample_dir).resolve(),
                    readme_name=readme,
                    exclude_globs=excludes,
                    dsls=dsls,
                )
            )
        return tuple(out)
