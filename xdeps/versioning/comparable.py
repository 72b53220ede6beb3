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

"""Comparable dotted versions for xdeps.

This module is format-agnostic: it does NOT read files or list repositories.
It only parses dotted version strings into ordered values.

A version is split on "." into components. Each component is either numeric
(a non-negative integer, leading zeros dropped) or a literal token (kept
lowercase, used for qualifiers such as "rc" or "beta").

Ordering Rules:
    Components are compared position by position:

    - numeric vs numeric: numerically
    - literal vs literal: lexicographically (case-insensitive)
    - numeric vs literal: the numeric component is greater
    - a missing component equals a numeric zero and is less than a literal

    Trailing numeric zeros are insignificant, so "1.2" == "1.2.0" and
    both are less than "1.2.a".

Example:
    Compare and display versions:
        ```python
        from xdeps.versioning import ComparableVersion

        v = ComparableVersion.parse("1.2.23.0")
        print(v.to_display_string())  # 1.2.23
        print(v > ComparableVersion.parse("1.2.9"))  # True
        ```
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import total_ordering
import re

from xdeps.exceptions import InvalidVersionFormat, NonNumericComponent

Component = int | str

_NUMERIC = re.compile(r"[0-9]+")
_LITERAL = re.compile(r"[A-Za-z0-9][A-Za-z0-9_+\-]*")

# Bit layout of the packed major.minor.build integer (20/20/24 bits)
_MAJOR_SHIFT = 44
_MINOR_SHIFT = 24
_MAJOR_MASK = 0x000FFFFF
_MINOR_MASK = 0x000FFFFF
_BUILD_MASK = 0x00FFFFFF


def _parse_components(text: str) -> tuple[Component, ...]:
    """Split version text into numeric and literal components.

    Raises:
        InvalidVersionFormat: On empty input, an empty segment or a segment
            that is neither numeric nor a literal token.
    """
    if not text:
        raise InvalidVersionFormat("version string is empty", text)

    components: list[Component] = []
    for position, segment in enumerate(text.split(".")):
        if not segment:
            raise InvalidVersionFormat(
                f"empty component at position {position} in {text!r}", text
            )
        if _NUMERIC.fullmatch(segment):
            components.append(int(segment))
        elif _LITERAL.fullmatch(segment):
            components.append(segment.lower())
        else:
            raise InvalidVersionFormat(
                f"invalid component {segment!r} in {text!r}", text
            )
    return tuple(components)


def _strip_trailing_zeros(components: tuple[Component, ...]) -> tuple[Component, ...]:
    """Drop trailing numeric zero components (may return an empty tuple)."""
    end = len(components)
    while end > 0 and components[end - 1] == 0:
        end -= 1
    return components[:end]


def _sort_key(components: tuple[Component, ...]) -> tuple[tuple[int, Component], ...]:
    """Build the ordering key for a component tuple.

    Literal tokens are encoded as (0, str) and numbers as (1, int), so a
    number always outranks a literal. Trailing zeros are stripped first;
    a shorter key then sorts before any longer key it prefixes.
    """
    return tuple(
        (1, c) if isinstance(c, int) else (0, c)
        for c in _strip_trailing_zeros(components)
    )


def _numeric_at(version: ComparableVersion, index: int) -> int:
    """Return the numeric component at index (0 when missing)."""
    if index >= len(version.components):
        return 0
    component = version.components[index]
    if not isinstance(component, int):
        raise NonNumericComponent(
            f"component {index} of {version.value!r} is not numeric",
            version.value,
            index,
        )
    return component


@total_ordering
@dataclass(frozen=True, eq=False)
class ComparableVersion:
    """An immutable, totally ordered dotted version.

    Equality and hashing follow the ordering, not the raw text:
    ComparableVersion("1.2") == ComparableVersion("1.2.0").

    Attributes:
        value: The version text as given (surrounding whitespace removed).
        components: Parsed components in input order (int or lowercase str).

    """

    value: str
    components: tuple[Component, ...] = field(init=False)
    _key: tuple[tuple[int, Component], ...] = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not isinstance(self.value, str):
            raise InvalidVersionFormat(
                f"version must be a string, got {type(self.value).__name__}"
            )
        text = self.value.strip()
        components = _parse_components(text)
        object.__setattr__(self, "value", text)
        object.__setattr__(self, "components", components)
        object.__setattr__(self, "_key", _sort_key(components))

    # ----------------------------
    # Construction
    # ----------------------------

    @classmethod
    def parse(cls, text: str) -> ComparableVersion:
        """Parse version text.

        Args:
            text: Dotted version string such as "1.2.23.0" or "2.0.rc1".

        Returns:
            The parsed version.

        Raises:
            InvalidVersionFormat: If the text is empty, has an empty segment,
                or has a segment that is neither numeric nor a literal token.

        """
        return cls(text)

    @classmethod
    def from_parts(cls, major: int, minor: int, build: int) -> ComparableVersion:
        """Build a "major.minor.build" version."""
        return cls(f"{major}.{minor}.{build}")

    @classmethod
    def from_int(cls, packed: int) -> ComparableVersion:
        """Unpack a version previously packed with to_int()."""
        major = (packed >> _MAJOR_SHIFT) & _MAJOR_MASK
        minor = (packed >> _MINOR_SHIFT) & _MINOR_MASK
        build = packed & _BUILD_MASK
        return cls.from_parts(major, minor, build)

    # ----------------------------
    # Comparison
    # ----------------------------

    def compare(self, other: ComparableVersion | str) -> int:
        """Compare with another version.

        other may be a ComparableVersion or version text. To compare two
        strings use compare_versions().

        Returns:
            -1 if self < other, 0 if equal, 1 if self > other.

        """
        other_key = as_version(other)._key
        return (self._key > other_key) - (self._key < other_key)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ComparableVersion):
            return NotImplemented
        return self._key == other._key

    def __lt__(self, other: object) -> bool:
        if not isinstance(other, ComparableVersion):
            return NotImplemented
        return self._key < other._key

    def __hash__(self) -> int:
        return hash(self._key)

    # ----------------------------
    # Display
    # ----------------------------

    def to_strings(self, n: int | None = None) -> list[str]:
        """Return display components.

        Trailing zero components are removed, but at least one component is
        always kept ("1.0.0.0" -> ["1"], "1.2.23.0" -> ["1", "2", "23"]).

        Args:
            n: If given, pad with "0" or truncate to exactly n components.

        """
        significant = _strip_trailing_zeros(self.components) or self.components[:1]
        strings = [str(c) for c in significant]
        if n is None:
            return strings
        strings = strings[:n]
        strings.extend("0" for _ in range(n - len(strings)))
        return strings

    def to_display_string(self) -> str:
        """Return the canonical form, e.g. "1.2.23" for "1.2.23.0"."""
        return ".".join(self.to_strings())

    def __str__(self) -> str:
        return self.to_display_string()

    # ----------------------------
    # Numeric accessors
    # ----------------------------

    # major, minor and build raise NonNumericComponent on a literal component.

    @property
    def major(self) -> int:
        return _numeric_at(self, 0)

    @property
    def minor(self) -> int:
        return _numeric_at(self, 1)

    @property
    def build(self) -> int:
        return _numeric_at(self, 2)

    def to_int(self) -> int:
        """Pack major.minor.build into one 64-bit integer.

        Major and minor keep 20 bits each, build keeps 24 bits. Components
        beyond the third are ignored.

        Raises:
            NonNumericComponent: If one of the first three components is a
                literal token.

        """
        return (
            ((self.major & _MAJOR_MASK) << _MAJOR_SHIFT)
            | ((self.minor & _MINOR_MASK) << _MINOR_SHIFT)
            | (self.build & _BUILD_MASK)
        )


def as_version(version: ComparableVersion | str) -> ComparableVersion:
    """Accept either a parsed version or version text."""
    if isinstance(version, ComparableVersion):
        return version
    return ComparableVersion.parse(version)
