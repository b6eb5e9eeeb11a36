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

"""Rebuild a complete changelog from version tags.

Tags are read oldest first and each one becomes a section covering the
commits since the tag before it::

    tags:      v1.0.0 ─────── v1.1.0 ─────── v2.0.0
    ranges:   (..v1.0.0]   (v1.0.0..v1.1.0]  (v1.1.0..v2.0.0]
    output:   header, [2.0.0], [1.1.0], [1.0.0]
"""

from __future__ import annotations

import re

from changekit.changelog._classify import classify_commits
from changekit.changelog._pipeline import placeholder_entry
from changekit.changelog._render import get_renderer, render_changelog
from changekit.changelog._source import get_commits
from changekit.changelog._templates import get_default_template
from changekit.changelog._types import ChangelogFormat
from changekit.errors import ChangeKitError, ErrorCode
from changekit.git import GitHistory
from changekit.logging import get_logger
from changekit.tags import tag_pattern, version_from_tag

log = get_logger('changekit.changelog.regenerate')

_VERSION_TAG_RE: re.Pattern[str] = re.compile(r'^[vV][0-9]')

UNKNOWN_DATE = 'Unknown'


async def detect_tag_prefix(git: GitHistory, default: str = 'v') -> str:
    """Return ``'v'`` or ``'V'`` depending on the repository's first version tag."""
    for tag in await git.list_tags('*'):
        if _VERSION_TAG_RE.match(tag):
            return tag[0]
    return default


async def _tag_date(git: GitHistory, tag: str) -> str:
    try:
        return await git.tag_date(tag) or UNKNOWN_DATE
    except ChangeKitError as exc:
        log.warning('tag_date_failed', tag=tag, error=str(exc))
        return UNKNOWN_DATE


async def regenerate_changelog(
    *,
    fmt: ChangelogFormat | str,
    git: GitHistory,
    package_path: str = '.',
    since: str | None = None,
    tag_prefix: str | None = None,
    repo_url: str | None = None,
    package_name: str | None = None,
) -> str:
    """Return a full changelog document built from every version tag.

    Args:
        fmt: Changelog format.
        git: History collaborator.
        package_path: Path filter for commits.
        since: Only tags whose history contains this ref.
        tag_prefix: Version tag prefix. Detected from existing tags
            when ``None``.
        repo_url: Repository URL for compare links.
        package_name: Package name, for layouts that show it.

    Raises:
        ChangeKitError: ``CK_NO_TAGS`` when no version tags exist,
            ``CK_UNKNOWN_FORMAT`` for an unsupported format.
    """
    get_renderer(fmt)
    prefix = tag_prefix if tag_prefix is not None else await detect_tag_prefix(git)

    tags = await git.list_tags(tag_pattern(prefix), since)
    if not tags:
        raise ChangeKitError(
            ErrorCode.CK_NO_TAGS,
            'No version tags found in git history.',
            hint=f'Create tags that start with the version prefix ("{prefix}"), e.g. {prefix}1.0.0.',
        )
    log.info('regenerate_started', tags=len(tags), prefix=prefix)

    sections: list[str] = []
    previous: str | None = None
    for tag in tags:
        version = version_from_tag(tag, prefix) or tag
        date = await _tag_date(git, tag)
        entries = classify_commits(await get_commits(package_path, previous, tag, git=git))
        if not entries:
            log.info('changelog_placeholder', tag=tag, version=version)
            entries = [placeholder_entry(version)]
        sections.append(render_changelog(fmt, version, date, entries, package_name, repo_url))
        previous = tag

    sections.reverse()
    return get_default_template(fmt) + '\n\n'.join(sections)


__all__ = [
    'detect_tag_prefix',
    'regenerate_changelog',
]
