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

"""Pure types for commit header parsing.

This module has **zero** runtime dependencies beyond the standard library.
Everything here is a frozen dataclass or protocol with no I/O or
logging.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Protocol, runtime_checkable


@dataclass(frozen=True)
class HeaderMatch:
    """A commit subject line that follows the ``type(scope): text`` grammar.

    A parser returns ``None`` for subjects that do not match, so a
    ``HeaderMatch`` always means the grammar was satisfied.

    Attributes:
        type: The raw type token, exactly as written (e.g. ``"feat"``).
        description: Everything after ``": "`` on the subject line.
        scope: The parenthesized scope, or ``None`` when absent.
        bang: ``True`` if ``!`` preceded the colon (``feat!: ...``).
    """

    type: str
    description: str
    scope: str | None = None
    bang: bool = False


@runtime_checkable
class CommitParser(Protocol):
    """Protocol for commit header parsers.

    Implement this to plug a different commit convention into the
    classifier while keeping the same changelog machinery.

    Example custom parser::

        class JiraHeaderParser:
            def parse_header(self, subject: str) -> HeaderMatch | None:
                # Parse "[PROJ-123] fix: description"
                ...
    """

    def parse_header(self, subject: str) -> HeaderMatch | None:
        """Parse a commit subject line.

        Args:
            subject: The first line of a commit message.

        Returns:
            A :class:`HeaderMatch` if the line matches, else ``None``.
        """
        ...
