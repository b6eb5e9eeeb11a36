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

"""Static headers written once when a changelog file is created."""

from __future__ import annotations

from changekit.changelog._render import parse_format
from changekit.changelog._types import ChangelogFormat

KEEP_A_CHANGELOG_TEMPLATE = """\
# Changelog

All notable changes to this project will be documented in this file.

The format is based on [Keep a Changelog](https://keepachangelog.com/en/1.0.0/),
and this project adheres to [Semantic Versioning](https://semver.org/spec/v2.0.0.html).

"""

ANGULAR_TEMPLATE = """\
# Changelog

"""

_TEMPLATES: dict[ChangelogFormat, str] = {
    ChangelogFormat.KEEP_A_CHANGELOG: KEEP_A_CHANGELOG_TEMPLATE,
    ChangelogFormat.ANGULAR: ANGULAR_TEMPLATE,
}


def get_default_template(fmt: ChangelogFormat | str) -> str:
    """Return the header for a new changelog file in format *fmt*.

    The text is used verbatim; nothing is substituted into it.

    Raises:
        ChangeKitError: If *fmt* is not a supported format.
    """
    return _TEMPLATES[parse_format(fmt)]


__all__ = [
    'ANGULAR_TEMPLATE',
    'KEEP_A_CHANGELOG_TEMPLATE',
    'get_default_template',
]
