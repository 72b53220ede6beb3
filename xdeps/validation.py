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

"""Manifest validation module.

This module checks a package manifest without looking at any repository.
It is useful for quick feedback while editing manifests and in CI/CD
pipelines.

Validation Checks:

- YAML syntax is valid (including defaults layers)
- Required top-level fields present (apiVersion, package)
- apiVersion is supported
- package.name is present and every package version parses
- Each dependency has a package name and every range parses

Unlike load_manifest(), validation collects every problem instead of
stopping at the first one.

Example:
    Validate a manifest and handle results:
        ```python
        from pathlib import Path
        from xdeps.validation import validate_manifest

        result = validate_manifest(Path("packages/xbase/package.yaml"))
        if result.status == "valid":
            print(f"Manifest is valid with {result.dependency_count} dependencies")
        else:
            for error in result.errors:
                print(f"Error: {error}")
        ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from xdeps.config.loader import load_effective_config
from xdeps.config.manifest import SUPPORTED_API_VERSION
from xdeps.exceptions import ConfigError, VersionError
from xdeps.logging import get_global_logger
from xdeps.results import ValidationResult
from xdeps.versioning import ComparableVersion, VersionRange

__all__ = ["validate_manifest"]


def _check_package(package: Any, errors: list[str]) -> None:
    if not isinstance(package, dict):
        errors.append("Field 'package' must be a mapping")
        return

    name = package.get("name")
    if not isinstance(name, str) or not name.strip():
        errors.append("package: Missing required field: name")

    versions = package.get("versions") or []
    if not isinstance(versions, list):
        errors.append("package.versions: Must be a list")
        return
    for idx, item in enumerate(versions):
        prefix = f"package.versions[{idx}]"
        if not isinstance(item, dict):
            errors.append(f"{prefix}: Must be a mapping")
            continue
        if item.get("version") is None:
            errors.append(f"{prefix}: Missing required field: version")
            continue
        if not isinstance(item["version"], str):
            errors.append(f"{prefix}: version must be a quoted string")
            continue
        try:
            ComparableVersion.parse(item["version"])
        except VersionError as err:
            errors.append(f"{prefix}: {err}")


def _check_dependency(
    dep: Any, prefix: str, errors: list[str], warnings: list[str]
) -> str | None:
    """Validate one dependency entry; returns its name when present."""
    if not isinstance(dep, dict):
        errors.append(f"{prefix}: Dependency must be a mapping")
        return None

    name = dep.get("package")
    if not isinstance(name, str) or not name.strip():
        errors.append(f"{prefix}: Missing required field: package")
        name = None

    versions = dep.get("versions") or []
    if not isinstance(versions, list):
        errors.append(f"{prefix}.versions: Must be a list")
        return name
    if not versions:
        warnings.append(
            f"{prefix}: No versions declared; the default range [1.0,) applies"
        )

    for idx, item in enumerate(versions):
        item_prefix = f"{prefix}.versions[{idx}]"
        if not isinstance(item, dict):
            errors.append(f"{item_prefix}: Must be a mapping")
            continue
        if item.get("range") is None:
            errors.append(f"{item_prefix}: Missing required field: range")
            continue
        if not isinstance(item["range"], str):
            errors.append(f"{item_prefix}: range must be a quoted string")
            continue
        try:
            parsed = VersionRange.parse(item["range"])
        except VersionError as err:
            errors.append(f"{item_prefix}: {err}")
            continue
        for interval in parsed.intervals:
            if interval.is_empty:
                warnings.append(
                    f"{item_prefix}: Interval {interval} can never match"
                )
    return name


def validate_manifest(manifest_path: Path) -> ValidationResult:
    """Validate a manifest file without touching any repository.

    Args:
        manifest_path: Path to the manifest YAML file to validate.

    Returns:
        The validation result; status is "valid" when no errors were found.
            Warnings never make a manifest invalid.

    """
    logger = get_global_logger()
    errors: list[str] = []
    warnings: list[str] = []
    dependency_count = 0

    logger.verbose("VALIDATION", f"Validating manifest: {manifest_path}")

    def _result() -> ValidationResult:
        status = "valid" if not errors else "invalid"
        if status == "valid":
            logger.verbose("VALIDATION", "Manifest is valid")
        else:
            logger.verbose("VALIDATION", f"Manifest has {len(errors)} error(s)")
        return ValidationResult(
            status=status,
            errors=errors,
            warnings=warnings,
            dependency_count=dependency_count,
            manifest_path=str(manifest_path),
        )

    if not manifest_path.exists():
        errors.append(f"Manifest file not found: {manifest_path}")
        return _result()

    try:
        cfg = load_effective_config(manifest_path)
    except ConfigError as err:
        errors.append(str(err))
        return _result()

    logger.verbose("VALIDATION", "YAML syntax is valid")

    if "apiVersion" not in cfg:
        errors.append("Missing required field: apiVersion")
    elif not isinstance(cfg["apiVersion"], str):
        errors.append("apiVersion must be a string")
    elif cfg["apiVersion"] != SUPPORTED_API_VERSION:
        warnings.append(
            f"apiVersion '{cfg['apiVersion']}' may not be supported "
            f"(expected: {SUPPORTED_API_VERSION})"
        )

    if "package" not in cfg:
        errors.append("Missing required field: package")
    else:
        _check_package(cfg["package"], errors)

    dependencies = cfg.get("dependencies") or []
    if not isinstance(dependencies, list):
        errors.append("Field 'dependencies' must be a list")
        return _result()

    dependency_count = len(dependencies)
    seen: set[str] = set()
    for idx, dep in enumerate(dependencies):
        prefix = f"dependencies[{idx}]"
        name = _check_dependency(dep, prefix, errors, warnings)
        if name is None:
            continue
        if name.strip().lower() in seen:
            warnings.append(f"{prefix}: Duplicate dependency '{name}'")
        seen.add(name.strip().lower())
        logger.verbose("VALIDATION", f"Checked dependency '{name}'")

    return _result()
