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

"""Per-package changelog pipeline.

Each package runs the same steps, and packages run concurrently::

    ┌────────────┐   ┌──────────┐   ┌────────────┐   ┌──────────┐
    │ latest tag │──▶│ git log  │──▶│ classify   │──▶│ render   │
    │ (from_tag) │   │ path/..  │   │ commits    │   │ section  │
    └────────────┘   └──────────┘   └────────────┘   └──────────┘
                                          │
                                          ▼
                                   JsonOutput.record_changelog

A package whose history cannot be read, or that has no qualifying
commits, still gets a section: the rendered text carries a single
``Release version X`` placeholder. The JSON sink always receives the
real (possibly empty) entry list.
"""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field

from changekit.changelog._classify import classify_commits
from changekit.changelog._render import get_renderer, render_changelog
from changekit.changelog._source import get_commits, revision_range
from changekit.changelog._types import ChangelogEntry, ChangelogFormat, ChangeType
from changekit.errors import ChangeKitError
from changekit.git import GitCLI, GitHistory
from changekit.logging import get_logger
from changekit.output import JsonOutput
from changekit.tags import tag_pattern, version_from_tag
from changekit.workspace import Package

log = get_logger('changekit.changelog.pipeline')


@dataclass(frozen=True)
class PackageChangelog:
    """Result of running the pipeline for one package.

    Attributes:
        package: The package the section was built for.
        version: Version the section is headed with.
        previous_version: Version parsed from ``from_tag``, if any.
        revision_range: Git range the commits were read from.
        entries: Classified entries in git log order (newest first).
        rendered: The markdown release section.
    """

    package: Package
    version: str
    previous_version: str | None
    revision_range: str
    entries: list[ChangelogEntry] = field(default_factory=list)
    rendered: str = ''


def placeholder_entry(version: str) -> ChangelogEntry:
    """Return the entry used when a release has no qualifying commits."""
    return ChangelogEntry(type=ChangeType.CHANGED, description=f'Release version {version}')


async def build_package_changelog(
    package: Package,
    *,
    version: str,
    date: str,
    fmt: ChangelogFormat | str,
    from_tag: str | None = None,
    to_ref: str = 'HEAD',
    previous_version: str | None = None,
    repo_url: str | None = None,
    show_package_name: bool = False,
    git: GitHistory | None = None,
    output: JsonOutput | None = None,
) -> PackageChangelog:
    """Build the release section for one package.

    Args:
        package: Package to build for. Its directory is the path filter.
        version: Version being released.
        date: Release date (``YYYY-MM-DD``).
        fmt: Changelog format.
        from_tag: Exclusive lower bound of the commit range.
        to_ref: Inclusive upper bound of the commit range.
        previous_version: Version recorded as the previous release.
        repo_url: Repository URL for compare links.
        show_package_name: Pass the package name to the renderer.
        git: History collaborator.
        output: JSON sink to record into.

    Raises:
        ChangeKitError: If *fmt* is not a supported format. Checked
            before any git call.
    """
    get_renderer(fmt)

    messages = await get_commits(str(package.path), from_tag, to_ref, git=git)
    entries = classify_commits(messages)
    rev_range = revision_range(from_tag, to_ref)

    if output is not None:
        output.record_changelog(
            package_name=package.name,
            version=version,
            previous_version=previous_version,
            revision_range=rev_range,
            repo_url=repo_url or None,
            entries=entries,
        )

    if not entries:
        log.info('changelog_placeholder', package=package.name, version=version)
    rendered = render_changelog(
        fmt,
        version,
        date,
        entries or [placeholder_entry(version)],
        package_name=package.name if show_package_name else None,
        repo_url=repo_url or None,
    )
    log.debug('changelog_built', package=package.name, version=version, entries=len(entries))
    return PackageChangelog(
        package=package,
        version=version,
        previous_version=previous_version,
        revision_range=rev_range,
        entries=entries,
        rendered=rendered,
    )


async def build_changelogs(
    packages: list[Package],
    *,
    date: str,
    fmt: ChangelogFormat | str,
    tag_prefix: str = 'v',
    version: str | None = None,
    from_tag: str | None = None,
    to_ref: str = 'HEAD',
    repo_url: str | None = None,
    git: GitHistory | None = None,
    output: JsonOutput | None = None,
    concurrency: int = 4,
    monorepo: bool | None = None,
) -> list[PackageChangelog]:
    """Build release sections for *packages* concurrently.

    In a monorepo, tags are namespaced per package
    (``<name>@<prefix><version>``) and the package name is shown in
    layouts that support it.

    Args:
        packages: Packages to process.
        date: Release date for every section.
        fmt: Changelog format.
        tag_prefix: Prefix before the version in tags.
        version: Version override. Defaults to each package's manifest
            version.
        from_tag: Lower-bound override. Defaults to each package's
            latest release tag.
        to_ref: Upper bound of every commit range.
        repo_url: Repository URL override. Defaults to each package's
            manifest URL.
        git: History collaborator.
        output: JSON sink to record into.
        concurrency: Maximum packages processed at once.
        monorepo: Whether tags are namespaced per package. Defaults to
            ``True`` when more than one package is given.

    Returns:
        One :class:`PackageChangelog` per package, in input order.
    """
    get_renderer(fmt)
    git = git or GitCLI()
    if monorepo is None:
        monorepo = len(packages) > 1
    sem = asyncio.Semaphore(concurrency)

    async def _do_one(pkg: Package) -> PackageChangelog:
        async with sem:
            namespace = pkg.name if monorepo else None
            start = from_tag
            if start is None:
                pattern = tag_pattern(tag_prefix, namespace)
                try:
                    start = await git.latest_tag(pattern, to_ref)
                except ChangeKitError as exc:
                    log.warning(
                        'tag_lookup_failed',
                        package=pkg.name,
                        pattern=pattern,
                        code=exc.code.value,
                        error=exc.message,
                    )
                    start = None
            return await build_package_changelog(
                pkg,
                version=version or pkg.version,
                date=date,
                fmt=fmt,
                from_tag=start,
                to_ref=to_ref,
                previous_version=version_from_tag(start, tag_prefix, namespace),
                repo_url=repo_url or pkg.repo_url or None,
                show_package_name=monorepo,
                git=git,
                output=output,
            )

    log.info('changelogs_building', packages=len(packages), concurrency=concurrency)
    return list(await asyncio.gather(*[_do_one(pkg) for pkg in packages]))


__all__ = [
    'PackageChangelog',
    'build_changelogs',
    'build_package_changelog',
    'placeholder_entry',
]
