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

"""Layered YAML configuration for package manifests.

A manifest rarely stands alone. Settings shared by every package (such as
where the local repository lives) are kept in a defaults tree next to the
packages, and the effective configuration is built by stacking layers:

    <root>/defaults/org.yaml                  (every package)
    <root>/defaults/groups/<group>.yaml       (packages of one group)
    <root>/packages/<name>/package.yaml       (the manifest itself)

The defaults tree is found by walking up from the manifest's directory until
a directory containing defaults/org.yaml is reached. Without one, the
manifest is used on its own.

Merging:
    Later layers win. Mappings merge key by key at every depth; lists and
    scalars from a later layer replace the earlier value outright, so a
    manifest listing platforms does not inherit the org-wide list.

Paths:
    defaults.repository.path may be relative. It is made absolute against
    the directory holding defaults/ (or the manifest's directory when there
    is no defaults tree), so commands work from any working directory.

Example:
    ```python
    from pathlib import Path
    from xdeps.config import load_effective_config

    cfg = load_effective_config(Path("packages/xbase/package.yaml"))
    print(cfg["defaults"]["repository"]["path"])
    ```
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import yaml

from xdeps.exceptions import ConfigError
from xdeps.logging import get_global_logger

ORG_DEFAULTS = Path("defaults") / "org.yaml"
GROUP_DEFAULTS_DIR = Path("defaults") / "groups"


# -------------------------------
# YAML files
# -------------------------------


def _read_yaml(path: Path) -> Any:
    """Parse one YAML file.

    Raises:
        ConfigError: If the file is missing, is not valid YAML, or holds no
            document.
    """
    if not path.is_file():
        raise ConfigError(f"file not found: {path}")
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8"))
    except yaml.YAMLError as err:
        raise ConfigError(f"invalid YAML in {path}: {err}") from err
    if data is None:
        raise ConfigError(f"YAML file is empty: {path}")
    return data


def _debug_dump(label: str, data: dict[str, Any]) -> None:
    logger = get_global_logger()
    logger.debug("CONFIG", f"--- {label} ---")
    dumped = yaml.safe_dump(data, default_flow_style=False, sort_keys=False)
    for line in dumped.splitlines():
        if line.strip():
            logger.debug("CONFIG", line)


# -------------------------------
# Layers
# -------------------------------


def deep_merge(base: dict[str, Any], overlay: dict[str, Any]) -> dict[str, Any]:
    """Return base with overlay stacked on top; neither input is modified.

    Nested mappings are merged recursively. Any other overlay value
    (including a list) replaces the base value.
    """
    merged = dict(base)
    for key, value in overlay.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            merged[key] = deep_merge(current, value)
        else:
            merged[key] = value
    return merged


def find_config_root(start: Path) -> Path | None:
    """Return the nearest directory at or above start holding defaults/org.yaml."""
    for directory in (start, *start.parents):
        if (directory / ORG_DEFAULTS).is_file():
            return directory
    return None


def _group_of(manifest: dict[str, Any]) -> str | None:
    package = manifest.get("package")
    if not isinstance(package, dict):
        return None
    group = package.get("group")
    if isinstance(group, str) and group.strip():
        return group.strip()
    return None


def _default_layers(root: Path, group: str | None) -> list[Path]:
    """Defaults files to apply under root, lowest precedence first."""
    layers = [root / ORG_DEFAULTS]
    if group:
        group_file = root / GROUP_DEFAULTS_DIR / f"{group}.yaml"
        if group_file.is_file():
            layers.append(group_file)
    return layers


def _absolutize_repository(cfg: dict[str, Any], base_dir: Path) -> None:
    defaults = cfg.get("defaults")
    if not isinstance(defaults, dict):
        return
    repository = defaults.get("repository")
    if not isinstance(repository, dict):
        return
    raw = repository.get("path")
    if isinstance(raw, str) and raw and not Path(raw).is_absolute():
        repository["path"] = str((base_dir / raw).resolve())


# -------------------------------
# Public API
# -------------------------------


def load_effective_config(
    manifest_path: Path,
    *,
    group: str | None = None,
) -> dict[str, Any]:
    """Load a manifest with its defaults layers merged underneath.

    Args:
        manifest_path: Path to the manifest YAML file.
        group: Group whose defaults to apply. Defaults to package.group
            from the manifest.

    Returns:
        The merged configuration. Relative repository paths are absolute.

    Raises:
        ConfigError: If any layer is missing, malformed or empty, or if the
            manifest's top level is not a mapping.

    """
    logger = get_global_logger()
    manifest_path = manifest_path.resolve()
    logger.verbose("CONFIG", f"Loading manifest: {manifest_path}")

    manifest = _read_yaml(manifest_path)
    if not isinstance(manifest, dict):
        raise ConfigError(f"top-level YAML must be a mapping: {manifest_path}")

    root = find_config_root(manifest_path.parent)
    merged: dict[str, Any] = {}
    layer_count = 1

    if root is None:
        logger.verbose("CONFIG", "No defaults/org.yaml found; using manifest only")
    else:
        logger.verbose("CONFIG", f"Config root: {root}")
        group_name = group or _group_of(manifest)
        if group_name:
            logger.verbose("CONFIG", f"Group: {group_name}")
        for layer_path in _default_layers(root, group_name):
            logger.verbose("CONFIG", f"Applying: {layer_path.relative_to(root)}")
            layer = _read_yaml(layer_path)
            if not isinstance(layer, dict):
                logger.warning(
                    "CONFIG", f"Ignoring {layer_path.name}: top level is not a mapping"
                )
                continue
            _debug_dump(layer_path.name, layer)
            merged = deep_merge(merged, layer)
            layer_count += 1

    _debug_dump(manifest_path.name, manifest)
    merged = deep_merge(merged, manifest)
    logger.verbose("CONFIG", f"Merged {layer_count} layer(s)")
    _debug_dump("effective configuration", merged)

    _absolutize_repository(merged, root if root is not None else manifest_path.parent)
    return merged
