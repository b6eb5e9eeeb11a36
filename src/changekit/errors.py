# Copyright 2026 Google LLC
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.
#
# SPDX-License-Identifier: Apache-2.0

"""Error types for changekit.

Every user-facing failure is a :class:`ChangeKitError` carrying a
stable :class:`ErrorCode` and an optional hint telling the user how to
fix it. The CLI prints both and exits with status 1.

Failures that are expected during normal operation (git history that
cannot be read for a fresh package, commits that do not follow the
convention) are *not* errors: they are logged and degrade to empty
results instead.
"""

from __future__ import annotations

from enum import Enum


class ErrorCode(Enum):
    """Stable identifiers for changekit failures."""

    CK_INVALID_CONFIG = 'CK_INVALID_CONFIG'
    CK_CONFIG_NOT_FOUND = 'CK_CONFIG_NOT_FOUND'
    CK_UNKNOWN_FORMAT = 'CK_UNKNOWN_FORMAT'
    CK_GIT_NOT_FOUND = 'CK_GIT_NOT_FOUND'
    CK_GIT_FAILED = 'CK_GIT_FAILED'
    CK_NO_TAGS = 'CK_NO_TAGS'
    CK_NO_PACKAGES = 'CK_NO_PACKAGES'
    CK_MANIFEST_INVALID = 'CK_MANIFEST_INVALID'
    CK_WRITE_FAILED = 'CK_WRITE_FAILED'


class ChangeKitError(Exception):
    """Base exception for all changekit failures.

    Attributes:
        code: Machine-readable error code.
        message: Human-readable description.
        hint: Optional remediation advice.
    """

    def __init__(self, code: ErrorCode, message: str, *, hint: str = '') -> None:
        """Initialize the error.

        Args:
            code: Machine-readable error code.
            message: Human-readable description.
            hint: Optional remediation advice.
        """
        super().__init__(message)
        self.code = code
        self.message = message
        self.hint = hint

    def __str__(self) -> str:
        """Return the message without the code."""
        return self.message


__all__ = [
    'ChangeKitError',
    'ErrorCode',
]
