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

"""Core orchestration for xdeps.

This module ties manifests, ranges and the local repository together to
answer "which version of each dependency should be used?".

Resolution Workflow:
    1. Load the manifest (with layered defaults)
    2. For each dependency, select the range for the requested platform
    3. List candidate versions of the dependency in the repository
    4. Pick the highest candidate inside the range

Nothing is installed, copied or downloaded; the result only names versions.

Example:
    Resolve dependencies for a platform:
        ```python
        from pathlib import Path
        from xdeps.core import resolve_manifest

        result = resolve_manifest(
            Path("packages/xbase/package.yaml"),
            Path("repo"),
            platform="Win32",
        )
        if not result.ok:
            print("Some dependencies could not be resolved")
        ```
"""

from __future__ import annotations

from pathlib import Path

from xdeps.config import load_manifest
from xdeps.dependency import Dependency
from xdeps.exceptions import ConfigError
from xdeps.logging import get_global_logger
from xdeps.repository import list_candidate_versions
from xdeps.results import ResolvedDependency, ResolveResult

__all__ = ["resolve_dependency", "resolve_manifest"]


def resolve_dependency(
    dependency: Dependency, repo: Path, *, platform: str = "*"
) -> ResolvedDependency:
    """Pick the highest version of one dependency available in a repository.

    Args:
        dependency: The dependency declaration.
        repo: Repository root directory.
        platform: Platform used to select the range and filter artifacts.

    Returns:
        The resolution outcome; version is None when no candidate matches.

    """
    logger = get_global_logger()
    version_range = dependency.range_for(platform)
    candidates = list_candidate_versions(
        repo,
        dependency.group,
        dependency.name,
        platform=platform,
        branch=dependency.branch_for(platform),
    )
    best = version_range.select_best(candidates)

    if best is None:
        logger.verbose(
            "RESOLVE",
            f"{dependency.name}: no version in {version_range} "
            f"among {len(candidates)} candidate(s)",
        )
    else:
        logger.verbose("RESOLVE", f"{dependency.name}: {version_range} -> {best}")

    return ResolvedDependency(
        name=dependency.name,
        group=dependency.group,
        range=version_range,
        version=best,
        candidate_count=len(candidates),
        status="resolved" if best is not None else "unresolved",
    )


def resolve_manifest(
    manifest_path: Path,
    repo: Path | None = None,
    *,
    platform: str = "*",
) -> ResolveResult:
    """Resolve every dependency declared in a manifest.

    Args:
        manifest_path: Path to the manifest YAML file.
        repo: Repository root. Defaults to defaults.repository.path from the
            merged configuration.
        platform: Platform to resolve for ("*" for the wildcard entries).

    Returns:
        One ResolvedDependency per declared dependency, in manifest order.

    Raises:
        ConfigError: If the manifest cannot be loaded, or no repository was
            given and none is configured.

    """
    logger = get_global_logger()

    logger.step(1, 2, "Loading manifest...")
    manifest = load_manifest(manifest_path)

    if repo is None:
        repo = manifest.repository
    if repo is None:
        raise ConfigError(
            "no repository given and defaults.repository.path is not configured"
        )
    repo = repo.resolve()
    logger.verbose("RESOLVE", f"Repository: {repo}")

    logger.step(
        2, 2, f"Resolving {len(manifest.dependencies)} dependency(ies) for {platform}..."
    )
    resolved = tuple(
        resolve_dependency(dep, repo, platform=platform)
        for dep in manifest.dependencies
    )

    return ResolveResult(
        package=manifest.name,
        platform=platform,
        repository=str(repo),
        dependencies=resolved,
    )
