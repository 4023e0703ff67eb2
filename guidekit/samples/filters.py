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

import re
from collections.abc import Sequence

from guidekit.core.config import BUILD_SCRIPT_NAMES, TAG_MARKERS

_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def split_lines(text: str) -> list[str]:
    """
    Split on \\n, \\r\\n and \\r. A trailing terminator does not produce an
    extra empty line.
    """
    if not text:
        return []
    lines = _LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def strip_tag_markers(text: str, markers: Sequence[str] = TAG_MARKERS) -> str:
    """
    Drop every line containing a documentation tag marker.

    Kept lines stay in order and each ends with exactly one "\\n".
    """
    kept = [line for line in split_lines(text) if not any(m in line for m in markers)]
    return "".join(f"{line}\n" for line in kept)


def is_build_script(name: str, build_script_names: Sequence[str] = BUILD_SCRIPT_NAMES) -> bool:
    return name in build_script_names


def filter_build_script(data: bytes) -> bytes:
    return strip_tag_markers(data.decode("utf-8")).encode("utf-8")
