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

"""Changelog value types shared by the classifier, aggregator and renderers.

Key Concepts (ELI5)::

    ┌─────────────────────────┬─────────────────────────────────────────────┐
    │ Concept                 │ Plain-English                               │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ ChangeType              │ One of the six Keep a Changelog buckets:    │
    │                         │ added, changed, deprecated, removed, fixed, │
    │                         │ security.                                   │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ ChangelogEntry          │ One classified commit, ready to render.     │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ GroupedEntries          │ Entries bucketed by ChangeType, in display  │
    │                         │ order. Every renderer consumes this shape.  │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ ChangelogFormat         │ Which layout to render: keep-a-changelog or │
    │                         │ angular.                                    │
    └─────────────────────────┴─────────────────────────────────────────────┘
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

BREAKING_PREFIX = '**BREAKING** '


class ChangeType(Enum):
    """Changelog category, in Keep a Changelog display order."""

    ADDED = 'added'
    CHANGED = 'changed'
    DEPRECATED = 'deprecated'
    REMOVED = 'removed'
    FIXED = 'fixed'
    SECURITY = 'security'

    @property
    def title(self) -> str:
        """Section heading, e.g. ``"Added"``."""
        return self.value.capitalize()


# Display order for every renderer that walks categories.
CATEGORY_ORDER: tuple[ChangeType, ...] = tuple(ChangeType)


class ChangelogFormat(Enum):
    """Supported changelog layouts."""

    KEEP_A_CHANGELOG = 'keep-a-changelog'
    ANGULAR = 'angular'


SUPPORTED_FORMATS: tuple[str, ...] = tuple(f.value for f in ChangelogFormat)


@dataclass(frozen=True)
class ChangelogEntry:
    """A single changelog entry derived from one commit.

    Attributes:
        type: The changelog category.
        description: Display text. Already carries the ``**scope**: ``
            and ``**BREAKING** `` prefixes when they apply.
        scope: The commit scope, if any.
        original_type: The raw conventional-commit type token
            (``"feat"``, ``"perf"``, ...). Kept alongside ``type`` so
            renderers can use a finer-grained grouping.
        issue_ids: Closed issue references (``"#12"``), or ``None`` when
            the commit referenced none.
    """

    type: ChangeType
    description: str
    scope: str | None = None
    original_type: str = ''
    issue_ids: tuple[str, ...] | None = None

    @property
    def breaking(self) -> bool:
        """``True`` if the description carries the breaking marker."""
        return self.description.startswith(BREAKING_PREFIX)

    def to_dict(self) -> dict[str, Any]:
        """Return the JSON form of this entry.

        Optional fields are omitted when unset so the ``--json`` output
        stays compact.
        """
        data: dict[str, Any] = {'type': self.type.value, 'description': self.description}
        if self.scope:
            data['scope'] = self.scope
        if self.original_type:
            data['originalType'] = self.original_type
        if self.issue_ids:
            data['issueIds'] = list(self.issue_ids)
        return data


GroupedEntries = dict[ChangeType, list[ChangelogEntry]]


__all__ = [
    'BREAKING_PREFIX',
    'CATEGORY_ORDER',
    'SUPPORTED_FORMATS',
    'ChangeType',
    'ChangelogEntry',
    'ChangelogFormat',
    'GroupedEntries',
]
