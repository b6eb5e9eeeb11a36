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

"""Commit message grammar.

This subpackage is the tokenizing front end of the changelog pipeline.
It knows the *syntax* of a conventional commit and nothing about
changelog categories:

- :func:`parse_header` -- ``type(scope)!: description`` → :class:`HeaderMatch`
  or ``None``.
- :func:`has_breaking_marker` -- ``BREAKING CHANGE:`` / ``!:`` detection.
- :func:`extract_issue_ids` -- ``closes #12`` style references.

Usage::

    from changekit.commit_parsing import parse_header

    match = parse_header('feat(core): add widget support')
    assert match is not None
    assert (match.type, match.scope) == ('feat', 'core')
"""

from changekit.commit_parsing._conventional import (
    BREAKING_FOOTER,
    BREAKING_SHORTHAND,
    HEADER_PATTERN,
    ConventionalHeaderParser,
    has_breaking_marker,
)
from changekit.commit_parsing._issues import ISSUE_REF_PATTERN, extract_issue_ids
from changekit.commit_parsing._types import CommitParser, HeaderMatch

# Module-level singleton for convenience.
_DEFAULT_PARSER = ConventionalHeaderParser()


def parse_header(subject: str) -> HeaderMatch | None:
    """Parse a commit subject with the default conventional grammar.

    Convenience wrapper around
    :meth:`ConventionalHeaderParser.parse_header`.
    """
    return _DEFAULT_PARSER.parse_header(subject)


__all__ = [
    'BREAKING_FOOTER',
    'BREAKING_SHORTHAND',
    'HEADER_PATTERN',
    'ISSUE_REF_PATTERN',
    'CommitParser',
    'ConventionalHeaderParser',
    'HeaderMatch',
    'extract_issue_ids',
    'has_breaking_marker',
    'parse_header',
]
