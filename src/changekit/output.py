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

"""Machine-readable ``--json`` output.

A :class:`JsonOutput` is created once per CLI invocation and passed
down the pipeline. Every package pipeline records what it did; the CLI
prints the collected document once at the end::

    output = JsonOutput(enabled=args.json, dry_run=args.dry_run)
    await build_changelogs(..., output=output)
    output.dump()

When disabled, every ``record_*`` call is a no-op, so the document is
never partially populated.

Records are appended from synchronous code running on the event loop
thread. Concurrent package pipelines interleave only at ``await``
points, never inside a ``record_*`` call.

Document shape (camelCase keys)::

    {
      "dryRun": false,
      "updates": [{"packageName": "...", "newVersion": "...", "filePath": "..."}],
      "changelogs": [{"packageName": "...", "version": "...", "previousVersion": "...",
                      "revisionRange": "...", "repoUrl": "...", "entries": [...]}],
      "tags": ["v1.2.0"],
      "commitMessage": "chore: release v1.2.0"
    }
"""

from __future__ import annotations

import sys
from collections.abc import Iterable
from typing import TYPE_CHECKING, Any, TextIO

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

if TYPE_CHECKING:
    from changekit.changelog._types import ChangelogEntry


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PackageUpdate(_CamelModel):
    """A manifest whose version was (or would be) rewritten."""

    package_name: str
    new_version: str
    file_path: str


class ChangelogRecord(_CamelModel):
    """The classified entries produced for one package."""

    package_name: str
    version: str
    previous_version: str | None = None
    revision_range: str = ''
    repo_url: str | None = None
    entries: list[dict[str, Any]] = Field(default_factory=list)


class JsonOutputData(_CamelModel):
    """The full ``--json`` document."""

    dry_run: bool = False
    updates: list[PackageUpdate] = Field(default_factory=list)
    changelogs: list[ChangelogRecord] = Field(default_factory=list)
    tags: list[str] = Field(default_factory=list)
    commit_message: str | None = None


class JsonOutput:
    """Accumulator for the ``--json`` document.

    Lifecycle: create (or :meth:`enable`) → ``record_*`` → :meth:`dump`.
    """

    def __init__(self, *, enabled: bool = False, dry_run: bool = False) -> None:
        """Initialize the accumulator.

        Args:
            enabled: Whether JSON output was requested.
            dry_run: Recorded in the document's ``dryRun`` field.
        """
        self._enabled = enabled
        self._data = JsonOutputData(dry_run=dry_run)

    @property
    def enabled(self) -> bool:
        """Whether recording calls have any effect."""
        return self._enabled

    def enable(self, *, dry_run: bool = False) -> None:
        """Turn JSON output on and start a fresh document."""
        self._enabled = True
        self._data = JsonOutputData(dry_run=dry_run)

    def record_update(self, package_name: str, new_version: str, file_path: str) -> None:
        """Record a manifest version update."""
        if not self._enabled:
            return
        self._data.updates.append(
            PackageUpdate(package_name=package_name, new_version=new_version, file_path=file_path),
        )

    def record_changelog(
        self,
        *,
        package_name: str,
        version: str,
        previous_version: str | None,
        revision_range: str,
        repo_url: str | None,
        entries: Iterable[ChangelogEntry],
    ) -> None:
        """Record the classified entries for one package, unmodified."""
        if not self._enabled:
            return
        self._data.changelogs.append(
            ChangelogRecord(
                package_name=package_name,
                version=version,
                previous_version=previous_version,
                revision_range=revision_range,
                repo_url=repo_url,
                entries=[entry.to_dict() for entry in entries],
            ),
        )

    def record_tag(self, tag: str) -> None:
        """Record a tag that was (or would be) created."""
        if not self._enabled:
            return
        self._data.tags.append(tag)

    def set_commit_message(self, message: str) -> None:
        """Record the release commit message."""
        if not self._enabled:
            return
        self._data.commit_message = message

    @property
    def data(self) -> JsonOutputData:
        """A deep copy of the current document."""
        return self._data.model_copy(deep=True)

    def render(self) -> str:
        """Serialize the document as indented JSON."""
        return self._data.model_dump_json(by_alias=True, exclude_none=True, indent=2)

    def dump(self, stream: TextIO | None = None) -> None:
        """Print the document to *stream* (stdout) if JSON output is enabled."""
        if not self._enabled:
            return
        print(self.render(), file=stream or sys.stdout)


__all__ = [
    'ChangelogRecord',
    'JsonOutput',
    'JsonOutputData',
    'PackageUpdate',
]
