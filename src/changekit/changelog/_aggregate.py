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

"""Group classified entries by changelog category."""

from __future__ import annotations

from collections.abc import Iterable

from changekit.changelog._types import CATEGORY_ORDER, ChangelogEntry, ChangeType, GroupedEntries


def aggregate_entries(entries: Iterable[ChangelogEntry]) -> GroupedEntries:
    """Bucket *entries* by :attr:`ChangelogEntry.type`.

    Entries keep their input order inside each bucket (newest-first when
    they come straight from git). Keys appear in :data:`CATEGORY_ORDER`
    and categories without entries are left out, so callers must treat
    a missing key as "no section".

    >>> from changekit.changelog._types import ChangelogEntry, ChangeType
    >>> groups = aggregate_entries([
    ...     ChangelogEntry(ChangeType.FIXED, 'b'),
    ...     ChangelogEntry(ChangeType.ADDED, 'a'),
    ... ])
    >>> [t.value for t in groups]
    ['added', 'fixed']
    """
    buckets: dict[ChangeType, list[ChangelogEntry]] = {}
    for entry in entries:
        buckets.setdefault(entry.type, []).append(entry)
    return {change_type: buckets[change_type] for change_type in CATEGORY_ORDER if change_type in buckets}


__all__ = [
    'aggregate_entries',
]
