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

"""Platform and branch specific package versions.

A package can publish a different version per platform (e.g. "Win32",
"x64") and per branch. Lookups fall back from the most specific entry to
the wildcard entries:

    (platform, branch) -> (*, branch) -> (*, *)

Platform names "", None and "all" and branch names "", None and "default"
are all treated as the wildcard "*". Other names are case-insensitive.
"""

from __future__ import annotations

from collections.abc import Iterator

from .comparable import ComparableVersion, as_version

WILDCARD = "*"


def normalize_platform(platform: str | None) -> str:
    if not platform or platform.lower() in ("all", WILDCARD):
        return WILDCARD
    return platform.lower()


def normalize_branch(branch: str | None) -> str:
    if not branch or branch.lower() in ("default", WILDCARD):
        return WILDCARD
    return branch.lower()


def build_tag(platform: str | None, branch: str | None) -> str:
    """Build the "platform|branch" lookup key, e.g. "win32|*"."""
    return f"{normalize_platform(platform)}|{normalize_branch(branch)}"


class PlatformVersions:
    """A table of versions keyed by platform and branch.

    The first version registered for a platform/branch pair wins; later
    registrations for the same pair are ignored.

    Example:
        Look up the version for a platform:
            ```python
            versions = PlatformVersions()
            versions.add("*", "1.0.0")
            versions.add("Win32", "1.2.0")

            versions.get_for_platform("win32")  # 1.2
            versions.get_for_platform("x64")    # 1 (wildcard entry)
            ```
    """

    def __init__(self) -> None:
        self._versions: dict[str, ComparableVersion] = {}

    def add(
        self,
        platform: str | None,
        version: ComparableVersion | str,
        branch: str | None = None,
    ) -> bool:
        """Register a version; returns False if the pair was already present."""
        tag = build_tag(platform, branch)
        if tag in self._versions:
            return False
        self._versions[tag] = as_version(version)
        return True

    def contains(self, platform: str | None, branch: str | None = None) -> bool:
        return build_tag(platform, branch) in self._versions

    def get_for_platform(
        self, platform: str | None, branch: str | None = None
    ) -> ComparableVersion | None:
        """Find the version for a platform/branch, falling back to wildcards.

        Returns:
            The most specific matching version, or None if nothing matches.

        """
        tag = build_tag(platform, branch)
        version = self._versions.get(tag)
        if version is not None:
            return version
        if normalize_platform(platform) == WILDCARD:
            return None

        for fallback in (build_tag(None, branch), build_tag(None, None)):
            version = self._versions.get(fallback)
            if version is not None:
                return version
        return None

    def clear(self) -> None:
        self._versions.clear()

    def items(self) -> Iterator[tuple[str, ComparableVersion]]:
        return iter(self._versions.items())

    def __len__(self) -> int:
        return len(self._versions)
