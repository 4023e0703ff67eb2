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
from typing import Any


class ArchiveError(Exception):
    """
    Base class for all archiving errors.

    Every failure aborts the whole archiving call; nothing is retried.
    """

    code: str
    message: str
    path: str | None = None
    details: Mapping[str, Any] | None = None

    def __init__(
        self,
        message: str,
        code: str = "archive_error",
        path: str | None = None,
        details: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.path = path
        self.details = details

    def __str__(self) -> str:
        loc = f"{self.path}: " if self.path else ""
        return f"{loc}{self.message}"


class ConfigurationError(ArchiveError):
    """Raised when inputs are invalid. Detected before the output is touched."""

    pass


class ArchiveIOError(ArchiveError):
    """
    Raised when reading a source file or writing the archive fails.

    The underlying OSError is chained as __cause__.
    """

    pass
