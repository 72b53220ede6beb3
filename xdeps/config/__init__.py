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

"""Configuration loading and manifests for xdeps.

This package provides tools for loading and merging YAML-based package
manifests with a layered approach:

  - Organization-wide defaults (defaults/org.yaml)
  - Group-specific defaults (defaults/groups/<group>.yaml)
  - The package manifest itself

The loader performs deep merging where dicts are merged recursively and
lists/scalars are replaced (last wins).

Example:
    Basic usage:
        ```python
        from pathlib import Path
        from xdeps.config import load_manifest

        manifest = load_manifest(Path("packages/xbase/package.yaml"))
        for dep in manifest.dependencies:
            print(dep.name, dep.range_for("Win32"))
        ```
"""

from .loader import load_effective_config
from .manifest import Manifest, build_manifest, load_manifest

__all__ = ["Manifest", "build_manifest", "load_effective_config", "load_manifest"]
