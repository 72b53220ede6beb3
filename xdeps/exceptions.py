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

"""Exception hierarchy for xdeps.

This module defines a custom exception hierarchy that allows library users
to distinguish between different types of errors. All exceptions inherit from
XDepsError, allowing users to catch all xdeps errors with a single except
clause if needed.

Example:
    Catching specific error types:
        ```python
        from xdeps.exceptions import InvalidRangeFormat
        from xdeps.versioning import VersionRange

        try:
            required = VersionRange.parse("[2.0,1.0]")
        except InvalidRangeFormat as e:
            print(f"Bad range {e.interval!r}: {e}")
        ```

    Catching all xdeps errors:
        ```python
        from xdeps.exceptions import XDepsError

        try:
            result = resolve_manifest(Path("package.yaml"), Path("./repo"))
        except XDepsError as e:
            print(f"xdeps error: {e}")
        ```
"""

from __future__ import annotations

__all__ = [
    "XDepsError",
    "VersionError",
    "InvalidVersionFormat",
    "InvalidRangeFormat",
    "NonNumericComponent",
    "ConfigError",
]


class XDepsError(Exception):
    """Base exception for all xdeps errors.

    All xdeps-specific exceptions inherit from this class, allowing users
    to catch all xdeps errors with a single except clause if needed.
    """

    pass


class VersionError(XDepsError):
    """Base class for version and range parse failures."""

    pass


class InvalidVersionFormat(VersionError):
    """Raised when a version string cannot be parsed.

    This exception is raised when:

    - The input is empty (or only whitespace)
    - A dot-separated segment is empty (e.g., "1..2", "1.2.")
    - A segment is neither a non-negative integer nor a literal token made
        of letters, digits, "_", "+" and "-"

    Attributes:
        text: The offending version text.

    Example:
        Catching version errors:
            ```python
            from xdeps.exceptions import InvalidVersionFormat
            from xdeps.versioning import ComparableVersion

            try:
                ComparableVersion.parse("1..2")
            except InvalidVersionFormat as e:
                print(f"Invalid version: {e}")
            ```
    """

    def __init__(self, message: str, text: str | None = None) -> None:
        super().__init__(message)
        self.text = text


class InvalidRangeFormat(VersionError):
    """Raised when a version range specification cannot be parsed.

    This exception is raised when:

    - The range text is empty or has characters outside bracket groups
    - A group is opened or closed with something other than "[", "(",
        "]" or ")", or is never closed
    - A bound is not a valid version
    - A lower bound is strictly greater than its upper bound

    The whole range is rejected; no interval is skipped.

    Attributes:
        interval: Text of the offending interval (or the whole range text
            for structural errors).
        index: 0-based position of the offending interval, or None when the
            error is not tied to a single interval.
    """

    def __init__(
        self,
        message: str,
        interval: str | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.interval = interval
        self.index = index


class NonNumericComponent(VersionError):
    """Raised when a numeric accessor meets a literal component.

    The version itself parsed fine; only the request to read it as a
    number fails (e.g., ComparableVersion.parse("1.2.rc").build).

    Attributes:
        text: The version text.
        index: 0-based position of the literal component.
    """

    def __init__(
        self,
        message: str,
        text: str | None = None,
        index: int | None = None,
    ) -> None:
        super().__init__(message)
        self.text = text
        self.index = index


class ConfigError(XDepsError):
    """Raised for configuration-related errors.

    This exception is raised when there are problems with:

    - YAML parse errors (syntax errors, invalid structure)
    - Missing manifest files (file not found)
    - Missing required manifest fields (e.g., no package name)
    - Version or range text inside a manifest that does not parse

    Example:
        Catching configuration errors:
            ```python
            from xdeps.exceptions import ConfigError

            try:
                manifest = load_manifest(Path("package.yaml"))
            except ConfigError as e:
                print(f"Config error: {e}")
            ```
    """

    pass
