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

"""Release tag naming.

- Single package: ``<prefix><version>`` → ``v1.2.0``
- Monorepo package: ``<name>@<prefix><version>`` → ``acme-core@v1.2.0``
"""

from __future__ import annotations


def format_tag(version: str, prefix: str = 'v', package_name: str | None = None) -> str:
    """Return the tag name for *version*.

    >>> format_tag('1.2.0')
    'v1.2.0'
    >>> format_tag('1.2.0', package_name='acme-core')
    'acme-core@v1.2.0'
    """
    tag = f'{prefix}{version}'
    return f'{package_name}@{tag}' if package_name else tag


def tag_pattern(prefix: str = 'v', package_name: str | None = None) -> str:
    """Return the ``git tag --list`` / ``--match`` glob for release tags."""
    return format_tag('*', prefix, package_name)


def version_from_tag(tag: str | None, prefix: str = 'v', package_name: str | None = None) -> str | None:
    """Extract the version from a release tag, or ``None`` if it does not fit.

    >>> version_from_tag('acme-core@v1.2.0', package_name='acme-core')
    '1.2.0'
    >>> version_from_tag('other@v1.0.0', package_name='acme-core') is None
    True
    """
    if not tag:
        return None
    expected = format_tag('', prefix, package_name)
    if not tag.startswith(expected):
        return None
    return tag[len(expected) :] or None


__all__ = [
    'format_tag',
    'tag_pattern',
    'version_from_tag',
]
