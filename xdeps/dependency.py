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

"""Dependency declarations with per-platform version ranges.

A dependency names another package and the range of its versions that is
acceptable, optionally different per platform and branch. When nothing is
declared for a platform, the range falls back to the wildcard platform and
finally to DEFAULT_RANGE ("[1.0,)", i.e. version 1.0 or newer).

Example:
    Build a dependency and look up its range:
        ```python
        from xdeps.dependency import Dependency

        dep = Dependency(name="xunittest")
        dep.add_range("[1.2,)")
        dep.add_range("[1.4,2.0)", platform="x64")

        str(dep.range_for("x64"))    # [1.4,2)
        str(dep.range_for("Win32"))  # [1.2,)
        ```
"""

from __future__ import annotations

from dataclasses import dataclass, field

from xdeps.versioning import VersionRange
from xdeps.versioning.platforms import (
    WILDCARD,
    normalize_branch,
    normalize_platform,
)

DEFAULT_GROUP = "com.virtuos.tnt"
DEFAULT_TYPE = "Package"
DEFAULT_RANGE = "[1.0,)"


@dataclass
class Dependency:
    """A package dependency.

    Attributes:
        name: Package name of the dependency.
        group: Dotted group the package is published under.
        type: Dependency type (e.g., "Package").
        branches: Branch selected per platform (normalized names).
        ranges: Version range per "platform|branch" key.

    """

    name: str
    group: str = DEFAULT_GROUP
    type: str = DEFAULT_TYPE
    branches: dict[str, str] = field(default_factory=dict)
    ranges: dict[str, VersionRange] = field(default_factory=dict)

    def add_range(
        self,
        version_range: VersionRange | str,
        platform: str | None = None,
        branch: str | None = None,
    ) -> None:
        """Declare the range for a platform/branch.

        A later declaration for the same platform replaces both its branch
        and its range.

        Raises:
            InvalidRangeFormat: If version_range is text that does not parse.

        """
        if isinstance(version_range, str):
            version_range = VersionRange.parse(version_range)
        p = normalize_platform(platform)
        b = normalize_branch(branch)
        self.branches[p] = b
        self.ranges[f"{p}|{b}"] = version_range

    def branch_for(self, platform: str | None) -> str:
        return self.branches.get(normalize_platform(platform), WILDCARD)

    def find_range(self, platform: str | None) -> VersionRange | None:
        """Find the declared range for a platform, without the default.

        Tries the platform's own branch entry first, then the wildcard
        platform's entry.
        """
        p = normalize_platform(platform)
        found = self.ranges.get(f"{p}|{self.branch_for(p)}")
        if found is not None or p == WILDCARD:
            return found
        return self.ranges.get(f"{WILDCARD}|{self.branch_for(WILDCARD)}")

    def range_for(self, platform: str | None) -> VersionRange:
        """Range for a platform, defaulting to DEFAULT_RANGE."""
        found = self.find_range(platform)
        if found is None:
            return VersionRange.parse(DEFAULT_RANGE)
        return found

    @property
    def key(self) -> str:
        """Case-insensitive identity: "group:name"."""
        return f"{self.group.lower()}:{self.name.lower()}"
