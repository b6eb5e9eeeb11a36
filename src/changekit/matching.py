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

"""Package targeting for ``--target`` and the ``skip`` config key.

A target is one of:

- an exact package name: ``acme-core``
- a glob over names: ``acme-*``
- a glob over root-relative directories: ``packages/*``
- a regular expression, prefixed with ``re:``: ``re:^acme-(core|cli)$``

A malformed regular expression is logged as a warning and matches
nothing; it never aborts the run.
"""

from __future__ import annotations

import fnmatch
import re
from collections.abc import Iterable
from pathlib import Path

from changekit.logging import get_logger
from changekit.workspace import Package

log = get_logger('changekit.matching')

REGEX_PREFIX = 're:'


def matches_package_target(name: str, target: str) -> bool:
    """Return ``True`` if *name* matches *target*.

    >>> matches_package_target('acme-core', 'acme-*')
    True
    >>> matches_package_target('acme-core', 're:^acme-(core|cli)$')
    True
    >>> matches_package_target('acme-core', 're:(')
    False
    """
    if name == target:
        return True
    if target.startswith(REGEX_PREFIX):
        try:
            return re.search(target[len(REGEX_PREFIX) :], name) is not None
        except re.error as exc:
            log.warning('invalid_target_pattern', pattern=target, error=str(exc))
            return False
    return fnmatch.fnmatchcase(name, target)


def _relative_dir(pkg: Package, root: Path) -> str:
    try:
        return pkg.path.resolve().relative_to(root.resolve()).as_posix()
    except ValueError:
        return pkg.path.as_posix()


def filter_packages(packages: Iterable[Package], targets: list[str], root: Path) -> list[Package]:
    """Keep the packages matching any of *targets*, by name or directory.

    An empty *targets* list keeps everything. Input order is preserved.
    """
    packages = list(packages)
    if not targets:
        return packages

    selected: list[Package] = []
    for pkg in packages:
        rel = _relative_dir(pkg, root)
        for target in targets:
            if target in ('.', './'):
                hit = rel == '.'
            else:
                hit = matches_package_target(pkg.name, target) or matches_package_target(rel, target.rstrip('/'))
            if hit:
                selected.append(pkg)
                break
    log.debug('packages_filtered', targets=targets, selected=[p.name for p in selected])
    return selected


def should_process_package(name: str, skip: Iterable[str] = ()) -> bool:
    """Return ``False`` if *name* matches an entry of the *skip* list."""
    return not any(matches_package_target(name, pattern) for pattern in skip)


__all__ = [
    'filter_packages',
    'matches_package_target',
    'should_process_package',
]
