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

"""Issue-closing reference extraction.

Finds GitHub-style closing keywords anywhere in a commit message
(subject, body or footers)::

    Closes #12
    fixes: #34
    Resolved #56

Each match yields ``"#<digits>"``. References are returned in order of
appearance and repeated references are kept as-is.
"""

from __future__ import annotations

import re

ISSUE_REF_PATTERN: re.Pattern[str] = re.compile(
    r'(?:close[sd]?|fix(?:e[sd])?|resolve[sd]?)'  # closing keyword
    r':?\s+'  # optional colon, then whitespace
    r'#(?P<number>\d+)',  # issue number
    re.IGNORECASE,
)


def extract_issue_ids(message: str) -> list[str]:
    """Return the issue references closed by *message*.

    >>> extract_issue_ids('fix: resolve bug, closes #12 and fixes #34')
    ['#12', '#34']
    >>> extract_issue_ids('docs: typo')
    []

    Args:
        message: The full commit message.

    Returns:
        ``#<digits>`` strings in order of appearance; empty when none.
    """
    return [f'#{m.group("number")}' for m in ISSUE_REF_PATTERN.finditer(message)]
