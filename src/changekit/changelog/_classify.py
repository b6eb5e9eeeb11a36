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

"""Commit classification: raw commit message → :class:`ChangelogEntry`.

The grammar lives in :mod:`changekit.commit_parsing`; this module owns
the changelog rules applied on top of a parsed header:

1. Release commits made by the tool itself (``chore: release ...``)
   are dropped.
2. The type token is mapped to a :class:`ChangeType` (unknown → changed).
3. A scope becomes a bold prefix: ``**core**: add widget``.
4. A breaking change gets a second prefix in front of that:
   ``**BREAKING** **core**: add widget``.
5. Closed issue references are attached.

Commits that do not follow the grammar are dropped silently: they are
ordinary input, not errors.

Pure implementation with no I/O or logging.
"""

from __future__ import annotations

from collections.abc import Iterable

from changekit.changelog._types import BREAKING_PREFIX, ChangelogEntry, ChangeType
from changekit.commit_parsing import (
    CommitParser,
    ConventionalHeaderParser,
    extract_issue_ids,
    has_breaking_marker,
)

# Conventional-commit type token → changelog category.
COMMIT_TYPE_MAP: dict[str, ChangeType] = {
    'feat': ChangeType.ADDED,
    'feature': ChangeType.ADDED,
    'fix': ChangeType.FIXED,
    'perf': ChangeType.CHANGED,
    'refactor': ChangeType.CHANGED,
    'style': ChangeType.CHANGED,
    'docs': ChangeType.CHANGED,
    'test': ChangeType.CHANGED,
    'build': ChangeType.CHANGED,
    'ci': ChangeType.CHANGED,
    'chore': ChangeType.CHANGED,
    'revert': ChangeType.REMOVED,
    'deprecate': ChangeType.DEPRECATED,
    'security': ChangeType.SECURITY,
}

_DEFAULT_PARSER = ConventionalHeaderParser()


def _is_release_commit(commit_type: str, description: str) -> bool:
    return commit_type == 'chore' and description.startswith('release')


def classify_commit(message: str, *, parser: CommitParser | None = None) -> ChangelogEntry | None:
    """Classify one raw commit message.

    Example::

        entry = classify_commit('feat(core): add widget support')
        assert entry.type is ChangeType.ADDED
        assert entry.description == '**core**: add widget support'

        assert classify_commit('chore: release 1.2.0') is None
        assert classify_commit('Merge pull request #3') is None

    Args:
        message: The full commit message (subject, body and footers).
        parser: Header parser to use. Defaults to the conventional
            grammar.

    Returns:
        The entry, or ``None`` if the commit is excluded.
    """
    header = (parser or _DEFAULT_PARSER).parse_header(message)
    if header is None:
        return None

    if _is_release_commit(header.type, header.description):
        return None

    description = header.description
    if header.scope:
        description = f'**{header.scope}**: {description}'

    if header.bang or has_breaking_marker(message):
        description = f'{BREAKING_PREFIX}{description}'

    issue_ids = extract_issue_ids(message)

    return ChangelogEntry(
        type=COMMIT_TYPE_MAP.get(header.type, ChangeType.CHANGED),
        description=description,
        scope=header.scope,
        original_type=header.type,
        issue_ids=tuple(issue_ids) if issue_ids else None,
    )


def classify_commits(
    messages: Iterable[str],
    *,
    parser: CommitParser | None = None,
) -> list[ChangelogEntry]:
    """Classify a sequence of commit messages, keeping their order.

    Excluded commits are skipped.
    """
    entries: list[ChangelogEntry] = []
    for message in messages:
        entry = classify_commit(message, parser=parser)
        if entry is not None:
            entries.append(entry)
    return entries


__all__ = [
    'COMMIT_TYPE_MAP',
    'classify_commit',
    'classify_commits',
]
