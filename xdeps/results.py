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

"""Public API return types for xdeps.

This module defines dataclasses for return values from public API functions
(validation and resolution). All dataclasses are frozen (immutable) to
prevent accidental mutation of return values.

Example:
    Using result types:
        ```python
        from pathlib import Path
        from xdeps.core import resolve_manifest

        result = resolve_manifest(Path("package.yaml"), Path("./repo"))
        for dep in result.dependencies:
            print(dep.name, dep.version)
        ```

Note:
    Only public API return types belong in this module. Domain types
    (like ComparableVersion or Dependency) stay with their related logic.
"""

from __future__ import annotations

from dataclasses import dataclass

from xdeps.versioning import ComparableVersion, VersionRange


@dataclass(frozen=True)
class ResolvedDependency:
    """Outcome of resolving one dependency.

    Attributes:
        name: Dependency package name.
        group: Dependency package group.
        range: The range that applied for the requested platform.
        version: Highest candidate inside the range, or None.
        candidate_count: Number of versions found in the repository.
        status: "resolved" or "unresolved".
    """

    name: str
    group: str
    range: VersionRange
    version: ComparableVersion | None
    candidate_count: int
    status: str


@dataclass(frozen=True)
class ResolveResult:
    """Result from resolving all dependencies of a manifest.

    Attributes:
        package: Name of the package whose manifest was resolved.
        platform: Platform the ranges were selected for.
        repository: String path of the repository that was searched.
        dependencies: One entry per declared dependency, in manifest order.
    """

    package: str
    platform: str
    repository: str
    dependencies: tuple[ResolvedDependency, ...]

    @property
    def ok(self) -> bool:
        return all(d.status == "resolved" for d in self.dependencies)


@dataclass(frozen=True)
class ValidationResult:
    """Result from validating a manifest.

    Attributes:
        status: Validation status ("valid" or "invalid").
        errors: List of error messages (empty if valid).
        warnings: List of warning messages.
        dependency_count: Number of dependencies in the manifest.
        manifest_path: String path to the validated manifest file.
    """

    status: str
    errors: list[str]
    warnings: list[str]
    dependency_count: int
    manifest_path: str
