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

r"""Conventional Commits header grammar.

**Subject line** (required)::

    type(scope)!: description

- ``type`` is a single word token (``\w+``). It is kept exactly as
  written; mapping it to a changelog category is the classifier's job.
- ``(scope)`` is optional and must be non-empty.
- ``!`` before the colon marks a breaking change.
- The colon must be followed by a single space and a non-empty
  description.

Breaking changes are also signalled by a ``BREAKING CHANGE:`` footer
anywhere in the message, or by the ``!:`` shorthand in the subject line.

Pure implementation: depends only on ``re`` and :mod:`._types`.
No I/O or logging.
"""

from __future__ import annotations

import re

from changekit.commit_parsing._types import HeaderMatch

HEADER_PATTERN: re.Pattern[str] = re.compile(
    r'^(?P<type>\w+)'  # type (e.g. feat, fix, chore)
    r'(?:\((?P<scope>[^)]+)\))?'  # optional scope in parens
    r'(?P<bang>!)?'  # optional breaking change indicator
    r': '  # colon + space
    r'(?P<description>.+)$',  # description
)

BREAKING_FOOTER = 'BREAKING CHANGE:'
BREAKING_SHORTHAND = '!:'


def has_breaking_marker(message: str) -> bool:
    """Return ``True`` if *message* declares a breaking change.

    The ``BREAKING CHANGE:`` footer may appear anywhere in the message;
    the ``!:`` shorthand only counts on the subject line.

    >>> has_breaking_marker('feat!: drop py2')
    True
    >>> has_breaking_marker('feat: new\\n\\nBREAKING CHANGE: removed v1')
    True
    >>> has_breaking_marker('fix: typo')
    False
    >>> has_breaking_marker('fix: tidy\\n\\nNote!: see docs')
    False
    """
    first_line = message.split('\n', 1)[0]
    return BREAKING_FOOTER in message or BREAKING_SHORTHAND in first_line


class ConventionalHeaderParser:
    """Parser for the ``type(scope)!: description`` subject grammar.

    Example::

        parser = ConventionalHeaderParser()
        match = parser.parse_header('feat(core): add widget support')
        assert match.type == 'feat'
        assert match.scope == 'core'
        assert match.description == 'add widget support'

        assert parser.parse_header('Merge branch main') is None
    """

    def parse_header(self, subject: str) -> HeaderMatch | None:
        """Parse a commit subject line.

        Only the first line is considered; surrounding whitespace is
        ignored.

        Args:
            subject: A commit subject (or a full message).

        Returns:
            A :class:`HeaderMatch`, or ``None`` when the line does not
            follow the grammar.
        """
        first_line = subject.split('\n', 1)[0].strip()
        match = HEADER_PATTERN.match(first_line)
        if not match:
            return None
        return HeaderMatch(
            type=match.group('type'),
            scope=match.group('scope'),
            description=match.group('description'),
            bang=bool(match.group('bang')),
        )
