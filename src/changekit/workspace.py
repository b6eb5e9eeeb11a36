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

"""Package discovery from ``pyproject.toml`` manifests.

Single-package layout::

    repo/
    ├── pyproject.toml     ← the only package
    └── CHANGELOG.md

Monorepo layout (``packages = ["packages/*"]`` in ``changekit.toml``)::

    repo/
    ├── changekit.toml
    └── packages/
        ├── core/
        │   ├── pyproject.toml   ← [project] name = "acme-core"
        │   └── CHANGELOG.md
        └── cli/
            └── pyproject.toml   ← [project] name = "acme-cli"

Only ``[project]`` (PEP 621) and ``[tool.poetry]`` tables are read.
Manifests that cannot be parsed or have no name are skipped with a
warning.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

import tomlkit
import tomlkit.exceptions

from changekit.errors import ChangeKitError, ErrorCode
from changekit.git import normalize_repo_url
from changekit.logging import get_logger

log = get_logger('changekit.workspace')

MANIFEST_NAME = 'pyproject.toml'

# [project.urls] keys that point at the source repository, by preference.
_REPO_URL_KEYS: tuple[str, ...] = ('Repository', 'repository', 'Source', 'source', 'Homepage', 'homepage')


@dataclass(frozen=True)
class Package:
    """A releasable package.

    Attributes:
        name: Distribution name from the manifest.
        version: Current version string (``"0.0.0"`` if unset).
        path: Package directory.
        manifest_path: Path to its ``pyproject.toml``.
        repo_url: Repository URL from the manifest, normalized to HTTPS.
    """

    name: str
    version: str
    path: Path
    manifest_path: Path
    repo_url: str = ''


def _project_table(doc: tomlkit.TOMLDocument) -> dict[str, object]:
    project = doc.get('project')
    if isinstance(project, dict):
        return project
    tool = doc.get('tool')
    if isinstance(tool, dict) and isinstance(tool.get('poetry'), dict):
        return tool['poetry']
    return {}


def _repo_url(project: dict[str, object]) -> str:
    urls = project.get('urls')
    if isinstance(urls, dict):
        for key in _REPO_URL_KEYS:
            value = urls.get(key)
            if isinstance(value, str) and value:
                return normalize_repo_url(value)
    repository = project.get('repository')
    if isinstance(repository, str) and repository:
        return normalize_repo_url(repository)
    return ''


def read_package(package_dir: Path) -> Package | None:
    """Read the manifest in *package_dir*.

    Returns:
        The :class:`Package`, or ``None`` when there is no usable manifest.
    """
    manifest = package_dir / MANIFEST_NAME
    if not manifest.is_file():
        return None
    try:
        doc = tomlkit.parse(manifest.read_text(encoding='utf-8'))
    except tomlkit.exceptions.ParseError as exc:
        log.warning('manifest_parse_failed', path=str(manifest), error=str(exc))
        return None

    project = _project_table(doc)
    name = project.get('name')
    if not isinstance(name, str) or not name:
        log.warning('manifest_missing_name', path=str(manifest))
        return None
    version = project.get('version')
    return Package(
        name=str(name),
        version=str(version) if isinstance(version, str) and version else '0.0.0',
        path=package_dir,
        manifest_path=manifest,
        repo_url=_repo_url(project),
    )


def discover_packages(root: Path, patterns: list[str] | None = None) -> list[Package]:
    """Discover packages under *root*.

    Args:
        root: Workspace root.
        patterns: Directory globs relative to *root* (e.g.
            ``["packages/*"]``). Empty means a single package at *root*.

    Returns:
        Packages sorted by name.

    Raises:
        ChangeKitError: ``CK_NO_PACKAGES`` if nothing was found.
    """
    dirs: list[Path] = []
    if patterns:
        for pattern in patterns:
            dirs.extend(p for p in sorted(root.glob(pattern)) if p.is_dir())
    else:
        dirs.append(root)

    packages: dict[str, Package] = {}
    for package_dir in dirs:
        pkg = read_package(package_dir)
        if pkg is not None:
            packages.setdefault(pkg.name, pkg)

    if not packages:
        raise ChangeKitError(
            ErrorCode.CK_NO_PACKAGES,
            f'No packages found under {root}',
            hint='Check the "packages" globs in changekit.toml; each package needs a pyproject.toml.',
        )
    log.debug('packages_discovered', count=len(packages))
    return sorted(packages.values(), key=lambda p: p.name)


def rewrite_version(manifest_path: Path, new_version: str, *, dry_run: bool = False) -> str:
    """Set the version in *manifest_path*, preserving comments and layout.

    Args:
        manifest_path: ``pyproject.toml`` to edit.
        new_version: Version string to write.
        dry_run: Compute the change without writing.

    Returns:
        The previous version string.

    Raises:
        ChangeKitError: ``CK_MANIFEST_INVALID`` if the manifest has no
            version table to edit.
    """
    doc = tomlkit.parse(manifest_path.read_text(encoding='utf-8'))
    project = _project_table(doc)
    if not project:
        raise ChangeKitError(
            ErrorCode.CK_MANIFEST_INVALID,
            f'{manifest_path} has no [project] or [tool.poetry] table',
        )
    old_version = str(project.get('version', ''))
    project['version'] = new_version
    if not dry_run:
        manifest_path.write_text(tomlkit.dumps(doc), encoding='utf-8')
    log.info('manifest_version_updated', path=str(manifest_path), old=old_version, new=new_version, dry_run=dry_run)
    return old_version


__all__ = [
    'MANIFEST_NAME',
    'Package',
    'discover_packages',
    'read_package',
    'rewrite_version',
]
