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

"""Tests for the changekit command line."""

from __future__ import annotations

import json
from collections.abc import Callable
from pathlib import Path

import pytest

import changekit.cli as cli
from changekit.changelog import KEEP_A_CHANGELOG_TEMPLATE
from changekit.git import COMMIT_SEPARATOR


class _FakeGit:
    """History collaborator keyed by revision range, ignoring the path filter."""

    def __init__(
        self,
        logs: dict[tuple[str | None, str], list[str]] | None = None,
        latest: dict[str, str] | None = None,
        tags: list[str] | None = None,
        remote: str | None = 'git@github.com:acme/repo.git',
    ) -> None:
        """Init."""
        self.logs = logs or {}
        self.latest = latest or {}
        self.tags = tags or []
        self.remote = remote

    async def log_messages(self, package_path: str, from_tag: str | None = None, to_ref: str = 'HEAD') -> str:
        """Return the canned messages for the range."""
        return ''.join(f'{m}{COMMIT_SEPARATOR}' for m in self.logs.get((from_tag, to_ref), []))

    async def latest_tag(self, pattern: str, ref: str = 'HEAD') -> str | None:
        """Return the configured latest tag."""
        return self.latest.get(pattern)

    async def list_tags(self, pattern: str, since: str | None = None) -> list[str]:
        """Return configured tags with the pattern's prefix."""
        return [t for t in self.tags if t.startswith(pattern.rstrip('*'))]

    async def tag_date(self, tag: str) -> str:
        """Every tag is dated the same day."""
        return '2023-06-01'

    async def remote_url(self, remote: str = 'origin') -> str | None:
        """Return the configured remote."""
        return self.remote


_UseGit = Callable[[_FakeGit], _FakeGit]


@pytest.fixture
def use_git(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> _UseGit:
    """Run the CLI in tmp_path against a fake git."""
    monkeypatch.chdir(tmp_path)

    def _install(git: _FakeGit) -> _FakeGit:
        monkeypatch.setattr(cli, 'GitCLI', lambda cwd: git)
        return git

    return _install


def _manifest(pkg_dir: Path, name: str, version: str) -> None:
    pkg_dir.mkdir(parents=True, exist_ok=True)
    (pkg_dir / 'pyproject.toml').write_text(
        f'[project]\nname = "{name}"\nversion = "{version}"\n',
        encoding='utf-8',
    )


def _monorepo(root: Path) -> None:
    (root / 'changekit.toml').write_text('packages = ["packages/*"]\n', encoding='utf-8')
    _manifest(root / 'packages' / 'core', 'acme-core', '1.0.0')
    _manifest(root / 'packages' / 'cli', 'acme-cli', '0.2.0')


class TestChangelogCommand:
    """Tests for `changekit changelog`."""

    def test_single_package_writes_file(self, tmp_path: Path, use_git: _UseGit) -> None:
        """A single package gets CHANGELOG.md with the template and a compare link."""
        _manifest(tmp_path, 'solo', '1.1.0')
        use_git(
            _FakeGit(
                logs={('v1.0.0', 'HEAD'): ['feat: new thing', 'chore: release 1.0.0']},
                latest={'v*': 'v1.0.0'},
            ),
        )

        assert cli.main(['changelog', '--date', '2024-01-01']) == 0

        text = (tmp_path / 'CHANGELOG.md').read_text(encoding='utf-8')
        assert text.startswith(KEEP_A_CHANGELOG_TEMPLATE + '## [1.1.0] - 2024-01-01')
        assert '- new thing' in text
        assert '[1.1.0]: https://github.com/acme/repo/compare/v1.1.0...HEAD' in text

    def test_rerun_does_not_duplicate(self, tmp_path: Path, use_git: _UseGit) -> None:
        """Running twice for the same version leaves one section."""
        _manifest(tmp_path, 'solo', '1.1.0')
        use_git(_FakeGit(logs={(None, 'HEAD'): ['fix: bug']}))

        assert cli.main(['changelog', '--date', '2024-01-01']) == 0
        assert cli.main(['changelog', '--date', '2024-01-01']) == 0

        text = (tmp_path / 'CHANGELOG.md').read_text(encoding='utf-8')
        assert text.count('## [1.1.0]') == 1

    def test_json_dry_run_monorepo(
        self,
        tmp_path: Path,
        use_git: _UseGit,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """--json prints only the document; --dry-run writes nothing."""
        _monorepo(tmp_path)
        use_git(
            _FakeGit(
                logs={('acme-core@v1.0.0', 'HEAD'): ['feat(api): add endpoint\n\nCloses #7']},
                latest={'acme-core@v*': 'acme-core@v1.0.0'},
            ),
        )

        code = cli.main(['changelog', '--json', '--dry-run', '--version', '2.0.0', '--date', '2024-01-01'])

        assert code == 0
        doc = json.loads(capsys.readouterr().out)
        assert doc['dryRun'] is True
        assert doc['tags'] == ['acme-cli@v2.0.0', 'acme-core@v2.0.0']
        records = {c['packageName']: c for c in doc['changelogs']}
        assert records['acme-core']['previousVersion'] == '1.0.0'
        assert records['acme-core']['entries'][0]['issueIds'] == ['#7']
        assert records['acme-cli']['entries'] == []
        assert not (tmp_path / 'packages' / 'core' / 'CHANGELOG.md').exists()

    def test_target_filters_packages(self, tmp_path: Path, use_git: _UseGit) -> None:
        """Only targeted packages get a changelog."""
        _monorepo(tmp_path)
        use_git(_FakeGit(logs={(None, 'HEAD'): ['feat: x']}))

        assert cli.main(['changelog', '--target', 'acme-core', '--date', '2024-01-01']) == 0

        core_log = (tmp_path / 'packages' / 'core' / 'CHANGELOG.md').read_text(encoding='utf-8')
        assert '## [1.0.0] - 2024-01-01' in core_log
        assert not (tmp_path / 'packages' / 'cli' / 'CHANGELOG.md').exists()

    def test_write_version(self, tmp_path: Path, use_git: _UseGit) -> None:
        """--write-version updates the manifest."""
        _manifest(tmp_path, 'solo', '1.0.0')
        use_git(_FakeGit())

        assert cli.main(['changelog', '--version', '1.1.0', '--write-version', '--date', '2024-01-01']) == 0

        assert 'version = "1.1.0"' in (tmp_path / 'pyproject.toml').read_text(encoding='utf-8')
        assert '- Release version 1.1.0' in (tmp_path / 'CHANGELOG.md').read_text(encoding='utf-8')

    def test_write_version_requires_version(self, tmp_path: Path, use_git: _UseGit) -> None:
        """--write-version without --version is a usage error."""
        use_git(_FakeGit())
        with pytest.raises(SystemExit) as excinfo:
            cli.main(['changelog', '--write-version'])
        assert excinfo.value.code == 2

    def test_unknown_format_exits_1(
        self,
        tmp_path: Path,
        use_git: _UseGit,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """A ChangeKitError is reported with its code and exit status 1."""
        _manifest(tmp_path, 'solo', '1.0.0')
        use_git(_FakeGit())

        assert cli.main(['changelog', '--format', 'html']) == 1
        assert 'CK_UNKNOWN_FORMAT' in capsys.readouterr().err

    def test_no_matching_target(self, tmp_path: Path, use_git: _UseGit) -> None:
        """Targets that match nothing fail cleanly."""
        _monorepo(tmp_path)
        use_git(_FakeGit())
        assert cli.main(['changelog', '--target', 're:(broken']) == 1


class TestRegenerateCommand:
    """Tests for `changekit regenerate`."""

    def test_writes_full_changelog(self, tmp_path: Path, use_git: _UseGit) -> None:
        """Every tag becomes a section in the output file."""
        _manifest(tmp_path, 'solo', '1.1.0')
        use_git(
            _FakeGit(
                tags=['v1.0.0', 'v1.1.0'],
                logs={(None, 'v1.0.0'): ['feat: initial'], ('v1.0.0', 'v1.1.0'): ['fix: bug']},
            ),
        )

        assert cli.main(['regenerate', '--output', 'HISTORY.md']) == 0

        text = (tmp_path / 'HISTORY.md').read_text(encoding='utf-8')
        assert text.startswith(KEEP_A_CHANGELOG_TEMPLATE + '## [1.1.0] - 2023-06-01')
        assert text.index('## [1.1.0]') < text.index('## [1.0.0]')

    def test_dry_run_writes_nothing(
        self,
        tmp_path: Path,
        use_git: _UseGit,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """The preview goes to the console instead of the file."""
        use_git(_FakeGit(tags=['v1.0.0'], logs={(None, 'v1.0.0'): ['feat: initial']}))

        assert cli.main(['regenerate', '--dry-run', '--format', 'angular']) == 0

        assert 'initial' in capsys.readouterr().out
        assert not (tmp_path / 'CHANGELOG.md').exists()

    def test_no_tags_exits_1(
        self,
        tmp_path: Path,
        use_git: _UseGit,
        capsys: pytest.CaptureFixture[str],
    ) -> None:
        """Without version tags the command fails with CK_NO_TAGS."""
        use_git(_FakeGit())
        assert cli.main(['regenerate']) == 1
        assert 'CK_NO_TAGS' in capsys.readouterr().err
