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

"""Command-line entry point.

Usage::

    changekit changelog                       # write CHANGELOG.md for every package
    changekit changelog --version 1.2.0 --dry-run
    changekit changelog --target 'acme-*' --json
    changekit regenerate --format angular --output CHANGELOG.md

In ``--json`` mode stdout carries only the JSON document; logs and
previews go to stderr or are suppressed.
"""

from __future__ import annotations

import argparse
import asyncio
import dataclasses
import datetime
import sys
from pathlib import Path

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule
from rich.syntax import Syntax

from changekit import __version__
from changekit.changelog import build_changelogs, regenerate_changelog, write_changelog
from changekit.config import ChangeKitConfig, load_config, resolve_config
from changekit.errors import ChangeKitError, ErrorCode
from changekit.git import GitCLI, GitHistory, normalize_repo_url
from changekit.logging import configure_logging, get_logger
from changekit.matching import filter_packages, should_process_package
from changekit.output import JsonOutput
from changekit.tags import format_tag
from changekit.workspace import Package, discover_packages, read_package, rewrite_version

log = get_logger('changekit.cli')


def build_parser() -> argparse.ArgumentParser:
    """Return the argument parser for the ``changekit`` command."""
    parser = argparse.ArgumentParser(
        prog='changekit',
        description='Generate changelogs from conventional commits.',
    )
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    parser.add_argument('--config', type=Path, default=None, help='Path to changekit.toml.')
    parser.add_argument('-v', '--verbose', action='store_true', help='Enable debug logging.')
    parser.add_argument('-q', '--quiet', action='store_true', help='Only log warnings and errors.')
    parser.add_argument('--json-log', action='store_true', help='Emit logs as JSON lines.')

    subparsers = parser.add_subparsers(dest='command', required=True)

    changelog = subparsers.add_parser('changelog', help='Generate release sections for each package.')
    changelog.add_argument(
        '--version',
        dest='release_version',
        default=None,
        help='Version to release. Defaults to each package manifest version.',
    )
    changelog.add_argument(
        '--from',
        dest='from_ref',
        default=None,
        help='Start ref (exclusive). Defaults to the latest tag.',
    )
    changelog.add_argument('--to', dest='to_ref', default='HEAD', help='End ref (inclusive).')
    changelog.add_argument('--format', default=None, help='keep-a-changelog or angular.')
    changelog.add_argument(
        '--target',
        action='append',
        default=[],
        help='Package name, directory glob, or re:<regex>. Repeatable.',
    )
    changelog.add_argument('--date', default=None, help='Release date (YYYY-MM-DD). Defaults to today.')
    changelog.add_argument('--repo-url', default=None, help='Repository URL for compare links.')
    changelog.add_argument('--tag-prefix', default=None, help='Prefix before the version in tags.')
    changelog.add_argument(
        '--write-version',
        action='store_true',
        help='Also set the version in each pyproject.toml (requires --version).',
    )
    changelog.add_argument('--dry-run', action='store_true', help='Preview without writing files.')
    changelog.add_argument('--json', action='store_true', help='Print a JSON summary to stdout.')

    regenerate = subparsers.add_parser('regenerate', help='Rebuild a whole changelog from version tags.')
    regenerate.add_argument('--since', default=None, help='Only tags containing this ref.')
    regenerate.add_argument('--output', type=Path, default=None, help='Output file. Defaults to the changelog file.')
    regenerate.add_argument('--format', default=None, help='keep-a-changelog or angular.')
    regenerate.add_argument('--repo-url', default=None, help='Repository URL for compare links.')
    regenerate.add_argument('--tag-prefix', default=None, help='Version tag prefix. Detected when omitted.')
    regenerate.add_argument('--dry-run', action='store_true', help='Print the changelog instead of writing it.')

    return parser


def _today() -> str:
    return datetime.date.today().isoformat()


def _preview(console: Console, title: str, markdown: str) -> None:
    console.print(Rule(escape(title)))
    console.print(Syntax(markdown, 'markdown', word_wrap=True))


async def _remote_repo_url(git: GitHistory) -> str:
    url = await git.remote_url()
    return normalize_repo_url(url) if url else ''


async def _run_changelog(
    args: argparse.Namespace,
    config: ChangeKitConfig,
    root: Path,
    git: GitHistory,
    console: Console,
) -> int:
    packages = filter_packages(discover_packages(root, config.packages), args.target, root)
    packages = [p for p in packages if should_process_package(p.name, config.skip)]
    if not packages:
        raise ChangeKitError(
            ErrorCode.CK_NO_PACKAGES,
            'No packages matched the given targets.',
            hint='Check --target and the "skip" list in changekit.toml.',
        )

    if not config.repo_url and any(not p.repo_url for p in packages):
        remote = await _remote_repo_url(git)
        packages = [p if p.repo_url else dataclasses.replace(p, repo_url=remote) for p in packages]

    monorepo = bool(config.packages)
    output = JsonOutput(enabled=args.json, dry_run=args.dry_run)
    results = await build_changelogs(
        packages,
        date=args.date or _today(),
        fmt=config.changelog_format,
        tag_prefix=config.tag_prefix,
        version=args.release_version,
        from_tag=args.from_ref,
        to_ref=args.to_ref,
        repo_url=config.repo_url or None,
        git=git,
        output=output,
        concurrency=config.concurrency,
        monorepo=monorepo,
    )

    tags: list[str] = []
    for result in results:
        pkg: Package = result.package
        if config.update_changelog:
            path = pkg.path / config.changelog_file
            written = write_changelog(path, result.rendered, config.changelog_format, dry_run=args.dry_run)
            if args.dry_run and not args.json:
                _preview(console, f'{pkg.name} → {path}', result.rendered)
            elif written and not args.json:
                console.print(f'[green]✓[/green] {escape(pkg.name)} {escape(result.version)} → {escape(str(path))}')
        if args.write_version:
            rewrite_version(pkg.manifest_path, args.release_version, dry_run=args.dry_run)
            output.record_update(pkg.name, args.release_version, str(pkg.manifest_path))
        tag = format_tag(result.version, config.tag_prefix, pkg.name if monorepo else None)
        output.record_tag(tag)
        tags.append(tag)

    output.set_commit_message(f'chore: release {", ".join(tags)}')
    output.dump()
    return 0


async def _run_regenerate(
    args: argparse.Namespace,
    config: ChangeKitConfig,
    root: Path,
    git: GitHistory,
    console: Console,
) -> int:
    pkg = read_package(root)
    repo_url = config.repo_url or (pkg.repo_url if pkg else '') or await _remote_repo_url(git)
    content = await regenerate_changelog(
        fmt=config.changelog_format,
        git=git,
        since=args.since,
        tag_prefix=args.tag_prefix,
        repo_url=repo_url or None,
        package_name=pkg.name if pkg else None,
    )

    output_path: Path = args.output or root / config.changelog_file
    if args.dry_run:
        _preview(console, str(output_path), content)
        return 0
    try:
        output_path.write_text(content + '\n', encoding='utf-8')
    except OSError as exc:
        raise ChangeKitError(
            ErrorCode.CK_WRITE_FAILED,
            f'Failed to write changelog {output_path}: {exc}',
        ) from exc
    log.info('changelog_regenerated', path=str(output_path))
    console.print(f'[green]✓[/green] wrote {escape(str(output_path))}')
    return 0


async def _run(args: argparse.Namespace, console: Console) -> int:
    root = args.config.parent if args.config else Path.cwd()
    config = resolve_config(
        load_config(args.config, root=root),
        changelog_format=args.format,
        repo_url=args.repo_url,
        tag_prefix=args.tag_prefix,
    )
    git = GitCLI(root)
    if args.command == 'regenerate':
        return await _run_regenerate(args, config, root, git, console)
    return await _run_changelog(args, config, root, git, console)


def main(argv: list[str] | None = None) -> int:
    """Run the CLI and return the process exit status."""
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.command == 'changelog' and args.write_version and not args.release_version:
        parser.error('--write-version requires --version')
    json_mode = getattr(args, 'json', False)
    configure_logging(verbose=args.verbose, quiet=args.quiet or json_mode, json_log=args.json_log)

    console = Console(stderr=json_mode)
    try:
        return asyncio.run(_run(args, console))
    except ChangeKitError as exc:
        err = Console(stderr=True)
        err.print(f'[bold red]{escape(f"error[{exc.code.value}]")}[/bold red]: {escape(exc.message)}')
        if exc.hint:
            err.print(f'  [dim]hint:[/dim] {escape(exc.hint)}')
        return 1


if __name__ == '__main__':
    sys.exit(main())
