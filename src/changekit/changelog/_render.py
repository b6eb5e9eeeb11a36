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

"""Render grouped changelog entries as a markdown release section.

Two layouts share one input model (:data:`GroupedEntries`):

**Keep a Changelog** (``keep-a-changelog``)::

    ## [1.0.0] - 2023-01-15

    ### Added

    - **core**: add widget support

    ### Fixed

    - **BREAKING** drop legacy API

    [1.0.0]: https://github.com/u/r/compare/v1.0.0...HEAD

**Angular** (``angular``)::

    ## [1.0.0] (my-package) (2023-01-15)

    ### Features

    * **core:** add widget support

    ### Bug Fixes

    * drop legacy API

    ### BREAKING CHANGES

    * drop legacy API

Renderers are pure: the same arguments always produce the same string.
The release date is an input, never read from the clock.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable
from typing import Protocol, runtime_checkable

from changekit.changelog._aggregate import aggregate_entries
from changekit.changelog._types import (
    BREAKING_PREFIX,
    CATEGORY_ORDER,
    SUPPORTED_FORMATS,
    ChangelogEntry,
    ChangelogFormat,
    ChangeType,
    GroupedEntries,
)
from changekit.errors import ChangeKitError, ErrorCode


@runtime_checkable
class ChangelogRenderer(Protocol):
    """Protocol for release-section renderers."""

    def render(
        self,
        version: str,
        date: str,
        groups: GroupedEntries,
        package_name: str | None = None,
        repo_url: str | None = None,
    ) -> str:
        """Render one release section.

        Args:
            version: Version being released, without tag prefix.
            date: Release date (``YYYY-MM-DD``).
            groups: Entries bucketed by category.
            package_name: Package name, for layouts that show it.
            repo_url: Repository URL, for layouts that link to it.

        Returns:
            The markdown section, without a trailing newline.
        """
        ...


class KeepAChangelogRenderer:
    """`Keep a Changelog <https://keepachangelog.com/>`_ layout."""

    def render(
        self,
        version: str,
        date: str,
        groups: GroupedEntries,
        package_name: str | None = None,
        repo_url: str | None = None,
    ) -> str:
        """Render one release section in Keep a Changelog layout."""
        lines: list[str] = [f'## [{version}] - {date}', '']

        for change_type in CATEGORY_ORDER:
            entries = groups.get(change_type)
            if not entries:
                continue
            lines.append(f'### {change_type.title}')
            lines.append('')
            lines.extend(f'- {entry.description}' for entry in entries)
            lines.append('')

        if repo_url:
            lines.append(f'[{version}]: {repo_url.rstrip("/")}/compare/v{version}...HEAD')

        return '\n'.join(lines).strip()


def _angular_text(entry: ChangelogEntry) -> str:
    """Strip the breaking and scope prefixes added by the classifier."""
    text = entry.description.removeprefix(BREAKING_PREFIX)
    if entry.scope:
        text = text.removeprefix(f'**{entry.scope}**: ')
    return text


def _is_perf(entry: ChangelogEntry) -> bool:
    return entry.original_type == 'perf'


# (heading, category, optional filter) in display order.
_ANGULAR_SECTIONS: list[tuple[str, ChangeType, Callable[[ChangelogEntry], bool] | None]] = [
    ('Features', ChangeType.ADDED, None),
    ('Bug Fixes', ChangeType.FIXED, None),
    ('Performance Improvements', ChangeType.CHANGED, _is_perf),
    ('Reverts', ChangeType.REMOVED, None),
    ('Deprecations', ChangeType.DEPRECATED, None),
    ('Security', ChangeType.SECURITY, None),
]


class AngularRenderer:
    """`Angular <https://github.com/angular/angular/blob/main/CHANGELOG.md>`_ layout.

    Sections follow the Angular convention. ``changed`` entries other
    than ``perf`` (``docs``, ``refactor``, ``chore`` and the like, plus
    the ``Release version X`` placeholder) have no Angular section and
    are omitted, so unlike Keep a Changelog this layout does not list
    every classified entry. Breaking entries stay in their own section
    *and* are repeated under ``BREAKING CHANGES``.
    """

    def render(
        self,
        version: str,
        date: str,
        groups: GroupedEntries,
        package_name: str | None = None,
        repo_url: str | None = None,
    ) -> str:
        """Render one release section in Angular layout."""
        heading = f'## [{version}]'
        if package_name:
            heading += f' ({package_name})'
        heading += f' ({date})'
        lines: list[str] = [heading, '']

        for title, change_type, keep in _ANGULAR_SECTIONS:
            entries = [e for e in groups.get(change_type, []) if keep is None or keep(e)]
            self._append_section(lines, title, entries)

        breaking = [e for change_type in CATEGORY_ORDER for e in groups.get(change_type, []) if e.breaking]
        self._append_section(lines, 'BREAKING CHANGES', breaking)

        return '\n'.join(lines).strip()

    @staticmethod
    def _append_section(lines: list[str], title: str, entries: list[ChangelogEntry]) -> None:
        if not entries:
            return
        lines.append(f'### {title}')
        lines.append('')
        for entry in entries:
            if entry.scope:
                lines.append(f'* **{entry.scope}:** {_angular_text(entry)}')
            else:
                lines.append(f'* {_angular_text(entry)}')
        lines.append('')


_RENDERERS: dict[ChangelogFormat, ChangelogRenderer] = {
    ChangelogFormat.KEEP_A_CHANGELOG: KeepAChangelogRenderer(),
    ChangelogFormat.ANGULAR: AngularRenderer(),
}


def parse_format(fmt: ChangelogFormat | str) -> ChangelogFormat:
    """Resolve a format name to a :class:`ChangelogFormat`.

    Raises:
        ChangeKitError: If *fmt* is not a supported format.
    """
    if isinstance(fmt, ChangelogFormat):
        return fmt
    try:
        return ChangelogFormat(fmt)
    except ValueError:
        raise ChangeKitError(
            ErrorCode.CK_UNKNOWN_FORMAT,
            f'Unsupported changelog format {fmt!r}. Supported formats: {", ".join(SUPPORTED_FORMATS)}.',
            hint='Set changelog_format in changekit.toml or pass --format.',
        ) from None


def get_renderer(fmt: ChangelogFormat | str) -> ChangelogRenderer:
    """Return the renderer for *fmt*.

    Raises:
        ChangeKitError: If *fmt* is not a supported format.
    """
    return _RENDERERS[parse_format(fmt)]


def render_changelog(
    fmt: ChangelogFormat | str,
    version: str,
    date: str,
    entries: Iterable[ChangelogEntry],
    package_name: str | None = None,
    repo_url: str | None = None,
) -> str:
    """Aggregate *entries* and render them as one release section.

    Example::

        md = render_changelog(
            'keep-a-changelog',
            '1.0.0',
            '2023-01-15',
            entries,
            repo_url='https://github.com/u/r',
        )

    Raises:
        ChangeKitError: If *fmt* is not a supported format.
    """
    renderer = get_renderer(fmt)
    return renderer.render(version, date, aggregate_entries(entries), package_name, repo_url)


__all__ = [
    'AngularRenderer',
    'ChangelogRenderer',
    'KeepAChangelogRenderer',
    'get_renderer',
    'parse_format',
    'render_changelog',
]
