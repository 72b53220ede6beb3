# Copyright 2025 Roger Cibrian
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

"""Version parsing, comparison and range matching for xdeps.

This package holds the value types that the rest of xdeps is built on. It
does no file or network I/O.

Modules:
    comparable
        ComparableVersion: dotted versions with a total order.
    ranges
        VersionRange: unions of bracketed intervals with membership tests.
    platforms
        PlatformVersions: versions keyed by platform and branch.

Example:
    Pick the newest acceptable version of a dependency:
        ```python
        from xdeps.versioning import select_best

        best = select_best("[1.2,2.0)", ["1.1", "1.2.5", "1.10", "2.0"])
        print(best)  # 1.10
        ```

    Compare version strings:
        ```python
        from xdeps.versioning import compare_versions

        compare_versions("1.2", "1.2.0")    # 0
        compare_versions("1.2.a", "1.2")    # 1
        compare_versions("1.a", "1.0.1")    # -1 (numbers outrank literals)
        ```
"""

from __future__ import annotations

from collections.abc import Iterable

from xdeps.exceptions import InvalidVersionFormat
from xdeps.logging import get_global_logger

from .comparable import Component, ComparableVersion, as_version
from .platforms import PlatformVersions, build_tag
from .ranges import Interval, RangeKind, VersionRange

__all__ = [
    "Component",
    "ComparableVersion",
    "Interval",
    "PlatformVersions",
    "RangeKind",
    "VersionRange",
    "as_version",
    "build_tag",
    "compare_versions",
    "is_in_range",
    "select_best",
]


def compare_versions(a: str, b: str) -> int:
    """Compare two version strings.

    Returns:
        -1 if a < b, 0 if equal, 1 if a > b.

    Raises:
        InvalidVersionFormat: If either string is not a valid version.

    """
    return ComparableVersion.parse(a).compare(b)


def is_in_range(range_text: str, version_text: str) -> bool:
    """Parse both inputs and test range membership."""
    return VersionRange.parse(range_text).is_in_range(version_text)


def select_best(
    version_range: VersionRange | str,
    candidates: Iterable[ComparableVersion | str],
) -> ComparableVersion | None:
    """Pick the highest candidate inside a range.

    Unlike VersionRange.select_best(), candidate strings that do not parse
    are skipped (repository listings often contain noise). The range itself
    must be valid.

    Args:
        version_range: A parsed range or range text.
        candidates: Candidate versions, parsed or as text.

    Returns:
        The greatest matching candidate, or None if nothing matches.

    Raises:
        InvalidRangeFormat: If version_range is text that does not parse.

    """
    logger = get_global_logger()
    if isinstance(version_range, str):
        version_range = VersionRange.parse(version_range)

    parsed: list[ComparableVersion] = []
    for candidate in candidates:
        try:
            parsed.append(as_version(candidate))
        except InvalidVersionFormat as err:
            logger.verbose("VERSION", f"Skipping candidate {candidate!r}: {err}")
    return version_range.select_best(parsed)
