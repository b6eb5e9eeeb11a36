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

"""Tests for the --json output document."""

from __future__ import annotations

import io
import json

from changekit.changelog import ChangelogEntry, ChangeType
from changekit.output import JsonOutput

_ENTRY = ChangelogEntry(ChangeType.ADDED, '**core**: add widget', scope='core', original_type='feat')


def _record(output: JsonOutput) -> None:
    output.record_changelog(
        package_name='acme-core',
        version='1.1.0',
        previous_version='1.0.0',
        revision_range='acme-core@v1.0.0..HEAD',
        repo_url='https://github.com/u/r',
        entries=[_ENTRY],
    )


class TestDisabled:
    """A disabled sink ignores every record call."""

    def test_records_are_noops(self) -> None:
        """Nothing is collected while disabled."""
        output = JsonOutput()
        _record(output)
        output.record_update('acme-core', '1.1.0', 'pyproject.toml')
        output.record_tag('v1.1.0')
        output.set_commit_message('chore: release')
        data = output.data
        assert data.changelogs == []
        assert data.updates == []
        assert data.tags == []
        assert data.commit_message is None

    def test_dump_prints_nothing(self) -> None:
        """dump() is silent while disabled."""
        stream = io.StringIO()
        JsonOutput().dump(stream)
        assert stream.getvalue() == ''


class TestEnabled:
    """Tests for an enabled sink."""

    def test_document_shape(self) -> None:
        """Keys are camelCase and entries are recorded unmodified."""
        output = JsonOutput(enabled=True, dry_run=True)
        _record(output)
        output.record_update('acme-core', '1.1.0', 'packages/core/pyproject.toml')
        output.record_tag('acme-core@v1.1.0')
        output.set_commit_message('chore: release acme-core@v1.1.0')

        doc = json.loads(output.render())
        assert doc['dryRun'] is True
        assert doc['changelogs'] == [
            {
                'packageName': 'acme-core',
                'version': '1.1.0',
                'previousVersion': '1.0.0',
                'revisionRange': 'acme-core@v1.0.0..HEAD',
                'repoUrl': 'https://github.com/u/r',
                'entries': [
                    {
                        'type': 'added',
                        'description': '**core**: add widget',
                        'scope': 'core',
                        'originalType': 'feat',
                    },
                ],
            },
        ]
        assert doc['updates'] == [
            {'packageName': 'acme-core', 'newVersion': '1.1.0', 'filePath': 'packages/core/pyproject.toml'},
        ]
        assert doc['tags'] == ['acme-core@v1.1.0']
        assert doc['commitMessage'] == 'chore: release acme-core@v1.1.0'

    def test_none_fields_omitted(self) -> None:
        """Unset optional fields do not appear in the output."""
        output = JsonOutput(enabled=True)
        output.record_changelog(
            package_name='p',
            version='1.0.0',
            previous_version=None,
            revision_range='HEAD',
            repo_url=None,
            entries=[],
        )
        doc = json.loads(output.render())
        assert 'commitMessage' not in doc
        assert 'previousVersion' not in doc['changelogs'][0]
        assert doc['changelogs'][0]['entries'] == []

    def test_enable_starts_fresh(self) -> None:
        """enable() turns recording on with a new document."""
        output = JsonOutput()
        output.enable(dry_run=True)
        assert output.enabled
        _record(output)
        assert len(output.data.changelogs) == 1
        assert output.data.dry_run is True

    def test_data_is_a_copy(self) -> None:
        """Mutating the returned document does not affect the sink."""
        output = JsonOutput(enabled=True)
        output.data.tags.append('v9.9.9')
        assert output.data.tags == []

    def test_dump_writes_json(self) -> None:
        """dump() prints one JSON document."""
        output = JsonOutput(enabled=True)
        output.record_tag('v1.0.0')
        stream = io.StringIO()
        output.dump(stream)
        assert json.loads(stream.getvalue())['tags'] == ['v1.0.0']
