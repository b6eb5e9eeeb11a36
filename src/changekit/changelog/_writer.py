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

"""Write rendered release sections into ``CHANGELOG.md``.

The newest release always sits directly below the header::

    # Changelog            ← header (template, written once)

    ## [1.1.0] - ...       ← inserted here
    ## [1.0.0] - ...       ← previous releases, untouched
"""

from __future__ import annotations

import re
from pathlib import Path

from changekit.changelog._templates import get_default_template
from changekit.changelog._types import ChangelogFormat
from changekit.errors import ChangeKitError, ErrorCode
from changekit.logging import get_logger

logger = get_logger(__name__)

_RELEASE_HEADING_RE: re.Pattern[str] = re.compile(r'^## ', re.MULTILINE)
_VERSION_KEY_RE: re.Pattern[str] = re.compile(r'^## \[[^\]]+\]')


def insert_release_section(existing: str, rendered: str) -> str:
    """Return *existing* with *rendered* inserted before the first release.

    If the file has no release heading yet, the section is appended
    after the header.
    """
    match = _RELEASE_HEADING_RE.search(existing)
    if match is None:
        return existing.rstrip('\n') + '\n\n' + rendered + '\n'
    return existing[: match.start()] + rendered + '\n\n' + existing[match.start() :]


def write_changelog(
    changelog_path: Path,
    rendered: str,
    fmt: ChangelogFormat | str,
    *,
    dry_run: bool = False,
) -> bool:
    """Write a rendered release section to *changelog_path*.

    A missing file is created with the format's template header. An
    existing file gets the section inserted after its header, before
    earlier releases. If a heading for the same version (``## [<version>]``)
    is already present the write is skipped, so re-runs on a later date
    do not duplicate releases.

    Args:
        changelog_path: Path to the changelog file.
        rendered: Output of :func:`~changekit.changelog.render_changelog`.
        fmt: Changelog format, used to pick the template header.
        dry_run: Log what would happen without writing.

    Returns:
        ``True`` if the file was (or would be) written, ``False`` if
        the release was already present.

    Raises:
        ChangeKitError: ``CK_WRITE_FAILED`` if the file cannot be written.
    """
    heading = rendered.split('\n', 1)[0].strip()
    key_match = _VERSION_KEY_RE.match(heading)
    key = key_match.group(0) if key_match else heading

    if changelog_path.exists():
        existing = changelog_path.read_text(encoding='utf-8')
        if key and any(line.startswith(key) for line in existing.splitlines()):
            logger.info('changelog_skip_duplicate', path=str(changelog_path), heading=heading)
            return False
        content = insert_release_section(existing, rendered)
    else:
        content = get_default_template(fmt) + rendered + '\n'

    if dry_run:
        logger.info('changelog_dry_run', path=str(changelog_path), heading=heading)
        return True

    try:
        changelog_path.parent.mkdir(parents=True, exist_ok=True)
        changelog_path.write_text(content, encoding='utf-8')
    except OSError as exc:
        raise ChangeKitError(
            ErrorCode.CK_WRITE_FAILED,
            f'Failed to write changelog {changelog_path}: {exc}',
        ) from exc
    logger.info('changelog_written', path=str(changelog_path), heading=heading)
    return True


__all__ = [
    'insert_release_section',
    'write_changelog',
]
