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

"""Configuration loading for changekit.

Settings come from, in order of precedence (highest wins):

1. CLI flags (applied with :func:`resolve_config`).
2. ``changekit.toml`` at the workspace root (or ``--config``).
3. ``[tool.changekit]`` in the root ``pyproject.toml``.
4. Built-in defaults.

Example ``changekit.toml``::

    changelog_format = "angular"
    tag_prefix = "v"
    packages = ["packages/*"]
    skip = ["acme-internal-*"]
    repo_url = "https://github.com/acme/monorepo"
"""

from __future__ import annotations

from dataclasses import dataclass, field, fields, replace
from pathlib import Path
from typing import Any

import tomlkit
import tomlkit.exceptions

from changekit.changelog._render import parse_format
from changekit.errors import ChangeKitError, ErrorCode
from changekit.logging import get_logger

log = get_logger('changekit.config')

CONFIG_FILENAME = 'changekit.toml'
PYPROJECT_FILENAME = 'pyproject.toml'


@dataclass(frozen=True)
class ChangeKitConfig:
    """Resolved changekit settings.

    Attributes:
        changelog_format: ``"keep-a-changelog"`` or ``"angular"``.
        changelog_file: Changelog file name inside each package.
        tag_prefix: Prefix before the version in tags (``v1.2.0``).
        packages: Directory globs for monorepo packages. Empty means a
            single package at the workspace root.
        skip: Package names or patterns to leave out.
        repo_url: Repository URL for compare links. Empty means derive
            it from the manifest or the ``origin`` remote.
        update_changelog: Write changelog files at all.
        concurrency: Maximum packages processed at once.
    """

    changelog_format: str = 'keep-a-changelog'
    changelog_file: str = 'CHANGELOG.md'
    tag_prefix: str = 'v'
    packages: list[str] = field(default_factory=list)
    skip: list[str] = field(default_factory=list)
    repo_url: str = ''
    update_changelog: bool = True
    concurrency: int = 4


_STR_KEYS = frozenset({'changelog_format', 'changelog_file', 'tag_prefix', 'repo_url'})
_LIST_KEYS = frozenset({'packages', 'skip'})
_KNOWN_KEYS = frozenset(f.name for f in fields(ChangeKitConfig))


def _invalid(message: str) -> ChangeKitError:
    return ChangeKitError(ErrorCode.CK_INVALID_CONFIG, message, hint='Fix the value in changekit.toml.')


def _parse_config(data: dict[str, Any]) -> ChangeKitConfig:
    """Validate a raw config mapping and build a :class:`ChangeKitConfig`.

    Raises:
        ChangeKitError: ``CK_INVALID_CONFIG`` on unknown keys or bad types,
            ``CK_UNKNOWN_FORMAT`` for an unsupported ``changelog_format``.
    """
    unknown = sorted(set(data) - _KNOWN_KEYS)
    if unknown:
        raise _invalid(f'Unknown config keys: {", ".join(unknown)}')

    values: dict[str, Any] = {}
    for key, value in data.items():
        if key in _STR_KEYS:
            if not isinstance(value, str):
                raise _invalid(f'{key} must be a string')
        elif key in _LIST_KEYS:
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise _invalid(f'{key} must be a list of strings')
            value = list(value)
        elif key == 'update_changelog':
            if not isinstance(value, bool):
                raise _invalid('update_changelog must be a boolean')
        elif key == 'concurrency':
            if isinstance(value, bool) or not isinstance(value, int) or value < 1:
                raise _invalid('concurrency must be a positive integer')
        values[key] = value

    if 'changelog_format' in values:
        parse_format(values['changelog_format'])

    return ChangeKitConfig(**values)


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        return tomlkit.parse(path.read_text(encoding='utf-8')).unwrap()
    except tomlkit.exceptions.ParseError as exc:
        raise _invalid(f'Failed to parse {path}: {exc}') from exc


def load_config(path: Path | None = None, *, root: Path = Path('.')) -> ChangeKitConfig:
    """Load configuration from disk.

    Args:
        path: Explicit config file. Must exist when given.
        root: Workspace root searched when *path* is ``None``.

    Returns:
        The parsed config, or defaults when no config file exists.

    Raises:
        ChangeKitError: ``CK_CONFIG_NOT_FOUND`` for a missing explicit
            file, ``CK_INVALID_CONFIG`` for unreadable or invalid ones.
    """
    if path is not None:
        if not path.is_file():
            raise ChangeKitError(
                ErrorCode.CK_CONFIG_NOT_FOUND,
                f'Could not locate the config file at {path}',
                hint='Pass an existing file to --config or omit it to use defaults.',
            )
        log.debug('config_loaded', path=str(path))
        return _parse_config(_read_toml(path))

    candidate = root / CONFIG_FILENAME
    if candidate.is_file():
        log.debug('config_loaded', path=str(candidate))
        return _parse_config(_read_toml(candidate))

    pyproject = root / PYPROJECT_FILENAME
    if pyproject.is_file():
        section = _read_toml(pyproject).get('tool', {}).get('changekit')
        if isinstance(section, dict):
            log.debug('config_loaded', path=str(pyproject), table='tool.changekit')
            return _parse_config(section)

    log.debug('config_defaults')
    return ChangeKitConfig()


def resolve_config(
    base: ChangeKitConfig,
    *,
    changelog_format: str | None = None,
    repo_url: str | None = None,
    tag_prefix: str | None = None,
) -> ChangeKitConfig:
    """Apply CLI overrides on top of the file config.

    ``None`` means "flag not given".

    Raises:
        ChangeKitError: ``CK_UNKNOWN_FORMAT`` for an unsupported format.
    """
    overrides: dict[str, Any] = {}
    if changelog_format is not None:
        overrides['changelog_format'] = parse_format(changelog_format).value
    if repo_url is not None:
        overrides['repo_url'] = repo_url
    if tag_prefix is not None:
        overrides['tag_prefix'] = tag_prefix
    return replace(base, **overrides)


__all__ = [
    'CONFIG_FILENAME',
    'ChangeKitConfig',
    'load_config',
    'resolve_config',
]
