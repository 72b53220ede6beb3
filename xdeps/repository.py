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

"""Local repository layout and candidate listing.

This module knows how artifacts are named and where they live in a local
package repository. It never creates, extracts, or copies artifacts; it only
builds names and lists what is already on disk.

Layout:
    <repo>/<group as dirs>/<package>/version/<X>/<Y>/<Z>/
        <package>+<version>+<branch>+<platform>+<toolset>.zip

    e.g. repo/com/virtuos/tnt/xbase/version/1/2/23/
            xbase+1.2.23+default+Win32+v100.zip

Example:
    List the versions available for a package:
        ```python
        from pathlib import Path
        from xdeps.repository import list_candidate_versions

        versions = list_candidate_versions(
            Path("repo"), "com.virtuos.tnt", "xbase", platform="Win32"
        )
        print([str(v) for v in versions])  # ['1.2', '1.2.23']
        ```
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from xdeps.exceptions import InvalidVersionFormat
from xdeps.logging import get_global_logger
from xdeps.versioning import ComparableVersion
from xdeps.versioning.platforms import normalize_branch, normalize_platform

ARTIFACT_SUFFIX = ".zip"
_DEFAULT_VERSION = "1.0.0"


@dataclass(frozen=True)
class ArtifactName:
    """Fields encoded in an artifact filename.

    Attributes:
        package: Package name.
        version: Parsed package version.
        branch: Branch the artifact was built from.
        platform: Target platform (e.g., "Win32").
        toolset: Compiler toolset (e.g., "v100").

    """

    package: str
    version: ComparableVersion
    branch: str
    platform: str
    toolset: str


def version_to_dir(version: ComparableVersion | None) -> str:
    """Return the "X/Y/Z" directory fragment for a version."""
    if version is None:
        return "/".join(_DEFAULT_VERSION.split("."))
    return "/".join(version.to_strings(3))


def version_to_filename(
    package: str,
    branch: str,
    platform: str,
    toolset: str,
    version: ComparableVersion | None,
) -> str:
    version_str = _DEFAULT_VERSION if version is None else version.value
    return f"{package}+{version_str}+{branch}+{platform}+{toolset}{ARTIFACT_SUFFIX}"


def filename_to_version(filename: str) -> ComparableVersion:
    """Extract the version field from an artifact filename.

    Raises:
        InvalidVersionFormat: If the name has no version field or the field
            is not a valid version.

    """
    parts = [p for p in Path(filename).name.split("+") if p]
    if len(parts) < 2:
        raise InvalidVersionFormat(f"no version field in {filename!r}", filename)
    return ComparableVersion.parse(parts[1])


def parse_artifact_name(filename: str) -> ArtifactName:
    """Split "<package>+<version>+<branch>+<platform>+<toolset>.zip".

    Raises:
        InvalidVersionFormat: If the name does not have the five fields or
            the version field is not a valid version.

    """
    name = Path(filename).name
    if name.lower().endswith(ARTIFACT_SUFFIX):
        name = name[: -len(ARTIFACT_SUFFIX)]
    parts = name.split("+")
    if len(parts) != 5 or not all(parts):
        raise InvalidVersionFormat(
            f"artifact name {filename!r} does not match "
            "package+version+branch+platform+toolset",
            filename,
        )
    package, version, branch, platform, toolset = parts
    return ArtifactName(
        package=package,
        version=ComparableVersion.parse(version),
        branch=branch,
        platform=platform,
        toolset=toolset,
    )


def package_root_dir(repo: Path, group: str, package: str) -> Path:
    root = repo
    for part in group.split("."):
        if part:
            root = root / part
    return root / package


def package_version_dir(
    repo: Path, group: str, package: str, version: ComparableVersion | None
) -> Path:
    return package_root_dir(repo, group, package) / "version" / version_to_dir(version)


def list_candidate_versions(
    repo: Path,
    group: str,
    package: str,
    *,
    platform: str | None = None,
    branch: str | None = None,
) -> list[ComparableVersion]:
    """List versions of a package present in a local repository.

    Scans the package directory recursively for artifacts named after the
    package. Files that don't follow the naming convention are skipped.

    Args:
        repo: Repository root directory.
        group: Dotted package group.
        package: Package name (matched case-insensitively).
        platform: If given (and not a wildcard), only artifacts for this
            platform are listed.
        branch: If given (and not a wildcard), only artifacts for this
            branch are listed.

    Returns:
        Distinct versions sorted ascending. Empty if the package directory
            does not exist.

    """
    logger = get_global_logger()
    root = package_root_dir(repo, group, package)
    if not root.is_dir():
        logger.verbose("REPO", f"No package directory: {root}")
        return []

    want_platform = normalize_platform(platform)
    want_branch = normalize_branch(branch)

    found: set[ComparableVersion] = set()
    for path in sorted(root.rglob(f"*{ARTIFACT_SUFFIX}")):
        try:
            artifact = parse_artifact_name(path.name)
        except InvalidVersionFormat as err:
            logger.debug("REPO", f"Skipping {path.name}: {err}")
            continue
        if artifact.package.lower() != package.lower():
            continue
        # Artifacts built for all platforms ("*") match any platform
        if want_platform != "*" and normalize_platform(artifact.platform) not in (
            want_platform,
            "*",
        ):
            continue
        if want_branch != "*" and normalize_branch(artifact.branch) != want_branch:
            continue
        found.add(artifact.version)

    logger.verbose("REPO", f"Found {len(found)} version(s) of {package} in {root}")
    return sorted(found)
