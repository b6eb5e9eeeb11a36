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

"""Commit history retrieval for one package.

Retrieval is fail-open: a package with no readable history (fresh
repository, unknown tag, git not installed) produces an empty commit
list so the rest of a monorepo run can continue.

That policy is explicit here rather than hidden in a blanket
``except``: :func:`fetch_commit_log` always returns a
:class:`CommitLogResult` that says whether git succeeded, and
:func:`get_commits` is the single place that maps a failed result to
``[]`` and logs it.

Flow::

    GitHistory.log_messages(path, from_tag, to_ref)
         │  raw text, NUL-separated
         ▼
    split_commit_messages()  →  CommitLogResult(ok=True, messages=[...])
         │
         │  ChangeKitError   →  CommitLogResult(ok=False, error='...')
         ▼
    get_commits()            →  messages, or [] + 'commit_log_failed'
"""

from __future__ import annotations

from dataclasses import dataclass, field

from changekit.errors import ChangeKitError
from changekit.git import GitCLI, GitHistory, split_commit_messages
from changekit.logging import get_logger

log = get_logger('changekit.changelog.source')


@dataclass(frozen=True)
class CommitLogResult:
    """Outcome of reading one package's commit history.

    Attributes:
        package_path: The path filter that was used.
        revision_range: The range that was read, e.g. ``"v1.0.0..HEAD"``.
        messages: Raw commit messages, newest first. Empty on failure.
        ok: Whether git succeeded.
        error: Failure description when ``ok`` is ``False``.
    """

    package_path: str
    revision_range: str
    messages: list[str] = field(default_factory=list)
    ok: bool = True
    error: str = ''


def revision_range(from_tag: str | None, to_ref: str = 'HEAD') -> str:
    """Return the git revision range for *from_tag*..*to_ref*."""
    return f'{from_tag}..{to_ref}' if from_tag else to_ref


async def fetch_commit_log(
    package_path: str,
    from_tag: str | None = None,
    to_ref: str = 'HEAD',
    *,
    git: GitHistory | None = None,
) -> CommitLogResult:
    """Read the commit messages in ``(from_tag, to_ref]`` touching *package_path*.

    Never raises for git failures; inspect :attr:`CommitLogResult.ok`.

    Args:
        package_path: Path filter understood by git.
        from_tag: Exclusive lower bound. ``None`` reads all history.
        to_ref: Inclusive upper bound.
        git: History collaborator. Defaults to :class:`GitCLI` in the
            current directory.
    """
    git = git or GitCLI()
    rev_range = revision_range(from_tag, to_ref)
    try:
        raw = await git.log_messages(package_path, from_tag, to_ref)
    except ChangeKitError as exc:
        return CommitLogResult(
            package_path=package_path,
            revision_range=rev_range,
            ok=False,
            error=str(exc),
        )
    return CommitLogResult(
        package_path=package_path,
        revision_range=rev_range,
        messages=split_commit_messages(raw),
    )


async def get_commits(
    package_path: str,
    from_tag: str | None = None,
    to_ref: str = 'HEAD',
    *,
    git: GitHistory | None = None,
) -> list[str]:
    """Return raw commit messages for a package, newest first.

    Failures are logged and yield ``[]``.
    """
    result = await fetch_commit_log(package_path, from_tag, to_ref, git=git)
    if not result.ok:
        log.error(
            'commit_log_failed',
            package_path=package_path,
            revision_range=result.revision_range,
            error=result.error,
        )
        return []
    log.debug(
        'commit_log_read',
        package_path=package_path,
        revision_range=result.revision_range,
        count=len(result.messages),
    )
    return result.messages


__all__ = [
    'CommitLogResult',
    'fetch_commit_log',
    'get_commits',
    'revision_range',
]
