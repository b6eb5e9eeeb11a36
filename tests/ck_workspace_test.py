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

"""Tests for package discovery, targeting and tag naming."""

from __future__ import annotations

from pathlib import Path

import pytest

from changekit.errors import ChangeKitError, ErrorCode
from changekit.logging import configure_logging
from changekit.matching import filter_packages, matches_package_target, should_process_package
from changekit.tags import format_tag, tag_pattern, version_from_tag
from changekit.workspace import Package, discover_packages, read_package, rewrite_version

configure_logging(quiet=True)


def _write_manifest(pkg_dir: Path, body: str) -> Path:
    pkg_dir.mkdir(parents=True, exist_ok=True)
    manifest = pkg_dir / 'pyproject.toml'
    manifest.write_text(body, encoding='utf-8')
    return manifest


def _monorepo(root: Path) -> None:
    _write_manifest(
        root / 'packages' / 'core',
        '[project]\nname = "acme-core"\nversion = "1.0.0"\n\n'
        '[project.urls]\nRepository = "git+https://github.com/acme/mono.git"\n',
    )
    _write_manifest(root / 'packages' / 'cli', '[project]\nname = "acme-cli"\nversion = "0.3.0"\n')
    _write_manifest(root / 'packages' / 'internal', '[project]\nname = "acme-internal-tools"\nversion = "0.1.0"\n')


class TestReadPackage:
    """Tests for read_package()."""

    def test_pep621(self, tmp_path: Path) -> None:
        """[project] name, version and repository URL are read."""
        _monorepo(tmp_path)
        pkg = read_package(tmp_path / 'packages' / 'core')
        assert pkg is not None
        assert pkg.name == 'acme-core'
        assert pkg.version == '1.0.0'
        assert pkg.repo_url == 'https://github.com/acme/mono'

    def test_poetry(self, tmp_path: Path) -> None:
        """[tool.poetry] manifests are supported."""
        _write_manifest(
            tmp_path,
            '[tool.poetry]\nname = "legacy"\nversion = "2.1.0"\nrepository = "git@github.com:a/b.git"\n',
        )
        pkg = read_package(tmp_path)
        assert pkg is not None
        assert (pkg.name, pkg.version, pkg.repo_url) == ('legacy', '2.1.0', 'https://github.com/a/b')

    def test_missing_version_defaults(self, tmp_path: Path) -> None:
        """A dynamic or missing version reads as 0.0.0."""
        _write_manifest(tmp_path, '[project]\nname = "dyn"\ndynamic = ["version"]\n')
        pkg = read_package(tmp_path)
        assert pkg is not None
        assert pkg.version == '0.0.0'

    def test_unusable_manifests(self, tmp_path: Path) -> None:
        """No manifest, broken TOML, or no name all yield None."""
        assert read_package(tmp_path) is None
        _write_manifest(tmp_path / 'broken', '[project\nname = ')
        assert read_package(tmp_path / 'broken') is None
        _write_manifest(tmp_path / 'noname', '[project]\nversion = "1.0.0"\n')
        assert read_package(tmp_path / 'noname') is None


class TestDiscoverPackages:
    """Tests for discover_packages()."""

    def test_single_package(self, tmp_path: Path) -> None:
        """Without patterns the root is the only package."""
        _write_manifest(tmp_path, '[project]\nname = "solo"\nversion = "1.0.0"\n')
        packages = discover_packages(tmp_path)
        assert [p.name for p in packages] == ['solo']
        assert packages[0].path == tmp_path

    def test_monorepo_sorted_by_name(self, tmp_path: Path) -> None:
        """Globbed packages come back sorted by name."""
        _monorepo(tmp_path)
        packages = discover_packages(tmp_path, ['packages/*'])
        assert [p.name for p in packages] == ['acme-cli', 'acme-core', 'acme-internal-tools']

    def test_nothing_found(self, tmp_path: Path) -> None:
        """An empty workspace raises CK_NO_PACKAGES."""
        with pytest.raises(ChangeKitError) as excinfo:
            discover_packages(tmp_path, ['packages/*'])
        assert excinfo.value.code is ErrorCode.CK_NO_PACKAGES


class TestRewriteVersion:
    """Tests for rewrite_version()."""

    def test_preserves_comments(self, tmp_path: Path) -> None:
        """Only the version changes; comments survive."""
        manifest = _write_manifest(
            tmp_path,
            '[project]\n# the name\nname = "x"\nversion = "1.0.0"  # bumped by CI\n',
        )
        assert rewrite_version(manifest, '1.1.0') == '1.0.0'
        text = manifest.read_text(encoding='utf-8')
        assert 'version = "1.1.0"' in text
        assert '# the name' in text

    def test_dry_run(self, tmp_path: Path) -> None:
        """Dry run returns the old version without writing."""
        manifest = _write_manifest(tmp_path, '[project]\nname = "x"\nversion = "1.0.0"\n')
        assert rewrite_version(manifest, '2.0.0', dry_run=True) == '1.0.0'
        assert 'version = "1.0.0"' in manifest.read_text(encoding='utf-8')

    def test_no_project_table(self, tmp_path: Path) -> None:
        """A manifest without a project table cannot be edited."""
        manifest = _write_manifest(tmp_path, '[build-system]\nrequires = []\n')
        with pytest.raises(ChangeKitError) as excinfo:
            rewrite_version(manifest, '1.0.0')
        assert excinfo.value.code is ErrorCode.CK_MANIFEST_INVALID


class TestMatching:
    """Tests for package targeting."""

    @pytest.mark.parametrize(
        ('target', 'expected'),
        [
            ('acme-core', True),
            ('acme-*', True),
            ('acme-cli', False),
            ('re:^acme-(core|cli)$', True),
            ('re:^other', False),
        ],
    )
    def test_matches_package_target(self, target: str, expected: bool) -> None:
        """Exact names, globs and re: patterns are supported."""
        assert matches_package_target('acme-core', target) is expected

    def test_invalid_regex_does_not_match(self) -> None:
        """A malformed regex matches nothing instead of raising."""
        assert matches_package_target('acme-core', 're:(unclosed') is False

    def test_filter_by_name_and_directory(self, tmp_path: Path) -> None:
        """Targets match names or root-relative directories."""
        _monorepo(tmp_path)
        packages = discover_packages(tmp_path, ['packages/*'])
        by_name = filter_packages(packages, ['acme-core'], tmp_path)
        by_dir = filter_packages(packages, ['packages/cli/'], tmp_path)
        assert [p.name for p in by_name] == ['acme-core']
        assert [p.name for p in by_dir] == ['acme-cli']

    def test_filter_no_targets_keeps_all(self, tmp_path: Path) -> None:
        """An empty target list is no filter."""
        _monorepo(tmp_path)
        packages = discover_packages(tmp_path, ['packages/*'])
        assert filter_packages(packages, [], tmp_path) == packages

    def test_filter_root_target(self, tmp_path: Path) -> None:
        """'.' selects the package at the workspace root."""
        root_pkg = Package('solo', '1.0.0', tmp_path, tmp_path / 'pyproject.toml')
        other = Package('other', '1.0.0', tmp_path / 'other', tmp_path / 'other' / 'pyproject.toml')
        assert filter_packages([root_pkg, other], ['.'], tmp_path) == [root_pkg]

    def test_should_process_package(self) -> None:
        """Skip patterns exclude matching packages."""
        assert should_process_package('acme-core', ['acme-internal-*']) is True
        assert should_process_package('acme-internal-tools', ['acme-internal-*']) is False
        assert should_process_package('acme-core') is True


class TestTags:
    """Tests for release tag naming."""

    def test_single_package(self) -> None:
        """Single packages use the bare prefix."""
        assert format_tag('1.2.0') == 'v1.2.0'
        assert tag_pattern() == 'v*'

    def test_monorepo(self) -> None:
        """Monorepo tags are namespaced by package name."""
        assert format_tag('1.2.0', 'v', 'acme-core') == 'acme-core@v1.2.0'
        assert tag_pattern('v', 'acme-core') == 'acme-core@v*'

    def test_version_from_tag(self) -> None:
        """The version is recovered only from tags of the right shape."""
        assert version_from_tag('v1.0.0') == '1.0.0'
        assert version_from_tag('acme-core@v1.0.0', 'v', 'acme-core') == '1.0.0'
        assert version_from_tag('acme-cli@v1.0.0', 'v', 'acme-core') is None
        assert version_from_tag(None) is None
        assert version_from_tag('v') is None
