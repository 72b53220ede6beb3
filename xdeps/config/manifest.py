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

"""Typed package manifests.

Turns the merged configuration dict from load_effective_config() into a
Manifest: the package's own platform versions and its dependencies with
parsed ranges.

Manifest Format:
    ```yaml
    apiVersion: xdeps/v1
    package:
      name: xbase
      group: com.virtuos.tnt
      versions:
        - version: 1.2.23.0
          platform: "*"
    dependencies:
      - package: xunittest
        versions:
          - range: "[1.2,)"
            platform: Win32
    ```

Version and range text is parsed here, so a manifest that loads is known to
be well-formed. Parse failures are raised as ConfigError chained from the
underlying InvalidVersionFormat/InvalidRangeFormat.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

from xdeps.dependency import DEFAULT_GROUP, DEFAULT_TYPE, Dependency
from xdeps.exceptions import ConfigError, VersionError
from xdeps.versioning import PlatformVersions

from .loader import load_effective_config

SUPPORTED_API_VERSION = "xdeps/v1"


@dataclass
class Manifest:
    """A package and its declared dependencies.

    Attributes:
        name: Package name.
        group: Dotted package group.
        versions: Package versions per platform/branch.
        dependencies: Declared dependencies in manifest order.
        repository: Repository root from defaults.repository.path, if set.
        config: The merged configuration the manifest was built from.

    """

    name: str
    group: str = DEFAULT_GROUP
    versions: PlatformVersions = field(default_factory=PlatformVersions)
    dependencies: list[Dependency] = field(default_factory=list)
    repository: Path | None = None
    config: dict[str, Any] = field(default_factory=dict)


def _as_entry_list(value: Any, where: str) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise ConfigError(f"{where}: must be a list")
    for idx, entry in enumerate(value):
        if not isinstance(entry, dict):
            raise ConfigError(f"{where}[{idx}]: must be a mapping")
    return value


def _text(value: Any) -> str | None:
    """Platform and branch names; YAML may load them as numbers."""
    if value is None:
        return None
    return str(value)


def _version_field(item: dict[str, Any], key: str, where: str) -> str:
    """Read a version or range field that must be a YAML string.

    Unquoted numbers are rejected: YAML loads `1.10` as the float 1.1.
    """
    value = item.get(key)
    if value is None or value == "":
        raise ConfigError(f"{where}: missing required field: {key}")
    if not isinstance(value, str):
        raise ConfigError(f"{where}: {key} must be a quoted string, got {value!r}")
    return value


def _build_dependency(entry: dict[str, Any], where: str) -> Dependency:
    name = entry.get("package")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError(f"{where}: missing required field: package")

    dependency = Dependency(
        name=name.strip(),
        group=str(entry.get("group") or DEFAULT_GROUP),
        type=str(entry.get("type") or DEFAULT_TYPE),
    )
    ranges = _as_entry_list(entry.get("versions"), f"{where}.versions")
    for idx, item in enumerate(ranges):
        range_text = _version_field(item, "range", f"{where}.versions[{idx}]")
        try:
            dependency.add_range(
                range_text,
                platform=_text(item.get("platform")),
                branch=_text(item.get("branch")),
            )
        except VersionError as err:
            raise ConfigError(f"{where}.versions[{idx}]: {err}") from err
    return dependency


def build_manifest(cfg: dict[str, Any]) -> Manifest:
    """Build a Manifest from a merged configuration dict.

    Raises:
        ConfigError: If required fields are missing or any version/range
            does not parse.

    """
    package = cfg.get("package")
    if not isinstance(package, dict):
        raise ConfigError("missing required field: package")
    name = package.get("name")
    if not isinstance(name, str) or not name.strip():
        raise ConfigError("package: missing required field: name")

    manifest = Manifest(
        name=name.strip(),
        group=str(package.get("group") or DEFAULT_GROUP),
        config=cfg,
    )

    for idx, item in enumerate(
        _as_entry_list(package.get("versions"), "package.versions")
    ):
        version_text = _version_field(item, "version", f"package.versions[{idx}]")
        try:
            manifest.versions.add(
                _text(item.get("platform")),
                version_text,
                branch=_text(item.get("branch")),
            )
        except VersionError as err:
            raise ConfigError(f"package.versions[{idx}]: {err}") from err

    for idx, entry in enumerate(
        _as_entry_list(cfg.get("dependencies"), "dependencies")
    ):
        manifest.dependencies.append(
            _build_dependency(entry, f"dependencies[{idx}]")
        )

    defaults = cfg.get("defaults")
    if isinstance(defaults, dict):
        repository = defaults.get("repository")
        if isinstance(repository, dict) and repository.get("path"):
            manifest.repository = Path(repository["path"])

    return manifest


def load_manifest(manifest_path: Path) -> Manifest:
    """Load, merge and type-check a manifest file.

    Args:
        manifest_path: Path to the manifest YAML file.

    Returns:
        The typed manifest.

    Raises:
        ConfigError: On missing files, YAML errors, missing fields,
            unquoted numeric versions/ranges, or versions/ranges that do
            not parse.

    """
    return build_manifest(load_effective_config(manifest_path))
