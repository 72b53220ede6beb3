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

"""xdeps - version ranges and dependency resolution for packages

xdeps parses dotted package versions and bracketed version ranges, and uses
them to pick dependency versions from a local package repository.

xdeps provides:

- Totally ordered versions with numeric and qualifier components
- Range specifications such as "[1.2,)" and "(,1.0],[1.2,)"
- Platform/branch specific versions and dependency ranges
- YAML-based package manifests with layered defaults
- Resolution of each dependency to the highest acceptable version

Quick Start:
Check versions against a range:

    $ xdeps check "[1.2,)" 1.1 1.2 2.0

Validate a manifest:

    $ xdeps validate packages/xbase/package.yaml

Resolve dependencies against a local repository:

    $ xdeps resolve packages/xbase/package.yaml --repo ./repo

For more details, see the individual module docstrings.
"""

__version__ = "0.1.0"
__author__ = "Roger Cibrian"
__license__ = "Apache-2.0"
__description__ = "Version ranges and dependency resolution for packages"

# Re-export commonly used functions for convenience
from xdeps.config import load_effective_config, load_manifest
from xdeps.core import resolve_manifest
from xdeps.exceptions import (
    ConfigError,
    InvalidRangeFormat,
    InvalidVersionFormat,
    NonNumericComponent,
    XDepsError,
)
from xdeps.results import ResolvedDependency, ResolveResult, ValidationResult
from xdeps.validation import validate_manifest
from xdeps.versioning import (
    ComparableVersion,
    VersionRange,
    compare_versions,
    is_in_range,
    select_best,
)

__all__ = [
    "__version__",
    "__author__",
    "__license__",
    "__description__",
    "ComparableVersion",
    "VersionRange",
    "compare_versions",
    "is_in_range",
    "select_best",
    "load_effective_config",
    "load_manifest",
    "resolve_manifest",
    "validate_manifest",
    "ResolvedDependency",
    "ResolveResult",
    "ValidationResult",
    "XDepsError",
    "ConfigError",
    "InvalidVersionFormat",
    "InvalidRangeFormat",
    "NonNumericComponent",
]
