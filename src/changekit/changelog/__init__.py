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

"""Changelog generation from conventional commits.

Key Concepts (ELI5)::

    ┌─────────────────────────┬─────────────────────────────────────────────┐
    │ Concept                 │ Plain-English                               │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ get_commits             │ Ask git for the commit messages since the   │
    │                         │ last release. Empty list if git fails.      │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ classify_commit         │ Turn one message into a ChangelogEntry, or  │
    │                         │ drop it (merge commits, release chores).    │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ aggregate_entries       │ Sort entries into Added/Fixed/... buckets.  │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ render_changelog        │ Print the buckets as a markdown section.    │
    ├─────────────────────────┼─────────────────────────────────────────────┤
    │ write_changelog         │ Put that section at the top of the file.    │
    └─────────────────────────┴─────────────────────────────────────────────┘

Data flow::

    git log ──▶ [message, ...] ──▶ [ChangelogEntry, ...] ──▶ GroupedEntries
                                                               │
                              CHANGELOG.md ◀── markdown ◀──────┘

Usage::

    from changekit.changelog import classify_commits, render_changelog

    entries = classify_commits(['feat(core): add widget support'])
    print(render_changelog('keep-a-changelog', '1.0.0', '2023-01-15', entries))
"""

from changekit.changelog._aggregate import aggregate_entries
from changekit.changelog._classify import COMMIT_TYPE_MAP, classify_commit, classify_commits
from changekit.changelog._pipeline import (
    PackageChangelog,
    build_changelogs,
    build_package_changelog,
    placeholder_entry,
)
from changekit.changelog._regenerate import detect_tag_prefix, regenerate_changelog
from changekit.changelog._render import (
    AngularRenderer,
    ChangelogRenderer,
    KeepAChangelogRenderer,
    get_renderer,
    parse_format,
    render_changelog,
)
from changekit.changelog._source import CommitLogResult, fetch_commit_log, get_commits, revision_range
from changekit.changelog._templates import ANGULAR_TEMPLATE, KEEP_A_CHANGELOG_TEMPLATE, get_default_template
from changekit.changelog._types import (
    BREAKING_PREFIX,
    CATEGORY_ORDER,
    SUPPORTED_FORMATS,
    ChangelogEntry,
    ChangelogFormat,
    ChangeType,
    GroupedEntries,
)
from changekit.changelog._writer import insert_release_section, write_changelog

__all__ = [
    'ANGULAR_TEMPLATE',
    'BREAKING_PREFIX',
    'CATEGORY_ORDER',
    'COMMIT_TYPE_MAP',
    'KEEP_A_CHANGELOG_TEMPLATE',
    'SUPPORTED_FORMATS',
    'AngularRenderer',
    'ChangeType',
    'ChangelogEntry',
    'ChangelogFormat',
    'ChangelogRenderer',
    'CommitLogResult',
    'GroupedEntries',
    'KeepAChangelogRenderer',
    'PackageChangelog',
    'aggregate_entries',
    'build_changelogs',
    'build_package_changelog',
    'classify_commit',
    'classify_commits',
    'detect_tag_prefix',
    'fetch_commit_log',
    'get_commits',
    'get_default_template',
    'get_renderer',
    'insert_release_section',
    'parse_format',
    'placeholder_entry',
    'regenerate_changelog',
    'render_changelog',
    'revision_range',
    'write_changelog',
]
