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

"""Version range specifications for xdeps.

A range is a comma-separated list of bracketed intervals. A version is in
the range when it falls in at least one interval (logical OR).

Grammar:
    range    := interval ("," interval)*
    interval := ("[" | "(") lower "," upper ("]" | ")")
              | "[" version "]"
    lower    := <empty> | version
    upper    := <empty> | version

"[" and "]" are inclusive bounds, "(" and ")" exclusive. An empty bound is
unbounded. "[1.2]" is shorthand for the single point "[1.2,1.2]". A bare
version without brackets is not a range.

Examples:
    - "[1.2,)": 1.2 and everything above
    - "(,1.0]": 1.0 and everything below
    - "[1.2,1.3)": 1.2 up to, but not including, 1.3
    - "(,1.0],[1.2,)": anything except the gap (1.0, 1.2)
    - "[,]": any version

Example:
    Check candidates against a dependency range:
        ```python
        from xdeps.versioning import VersionRange

        required = VersionRange.parse("(,1.0],[1.2,)")
        required.is_in_range("0.9")    # True
        required.is_in_range("1.1.2")  # False
        required.select_best(["0.9", "1.1", "1.4", "1.3"])  # 1.4
        ```
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum

from xdeps.exceptions import InvalidRangeFormat, InvalidVersionFormat
from xdeps.logging import get_global_logger

from .comparable import ComparableVersion, as_version

_OPENERS = {"[": True, "(": False}
_CLOSERS = {"]": True, ")": False}


class RangeKind(str, Enum):
    """Shape of a version range."""

    EXACT = "exact"  # [v] / [v,v]
    AT_LEAST = "at_least"  # [v,) or (v,)
    AT_MOST = "at_most"  # (,v] or (,v)
    BETWEEN = "between"  # [a,b], (a,b), ...
    OUTSIDE = "outside"  # (,a],[b,)
    ANY = "any"  # [,]
    UNION = "union"  # any other multi-interval range


@dataclass(frozen=True)
class Interval:
    """One bracketed lower/upper bound pair.

    Attributes:
        lower: Lower bound, or None when unbounded below.
        lower_inclusive: True for "[", False for "(".
        upper: Upper bound, or None when unbounded above.
        upper_inclusive: True for "]", False for ")".

    """

    lower: ComparableVersion | None
    lower_inclusive: bool
    upper: ComparableVersion | None
    upper_inclusive: bool

    def __post_init__(self) -> None:
        if (
            self.lower is not None
            and self.upper is not None
            and self.lower > self.upper
        ):
            raise InvalidRangeFormat(
                f"lower bound {self.lower} is greater than upper bound {self.upper}",
                interval=str(self),
            )

    @property
    def is_exact(self) -> bool:
        return (
            self.lower is not None
            and self.lower == self.upper
            and self.lower_inclusive
            and self.upper_inclusive
        )

    @property
    def is_empty(self) -> bool:
        """True when no version can satisfy this interval, e.g. (1.2,1.2)."""
        return (
            self.lower is not None
            and self.lower == self.upper
            and not (self.lower_inclusive and self.upper_inclusive)
        )

    def contains(self, version: ComparableVersion) -> bool:
        if self.lower is not None:
            if version < self.lower or (
                version == self.lower and not self.lower_inclusive
            ):
                return False
        if self.upper is not None:
            if version > self.upper or (
                version == self.upper and not self.upper_inclusive
            ):
                return False
        return True

    def __str__(self) -> str:
        opener = "[" if self.lower_inclusive else "("
        closer = "]" if self.upper_inclusive else ")"
        if self.is_exact:
            return f"[{self.lower}]"
        lower = "" if self.lower is None else str(self.lower)
        upper = "" if self.upper is None else str(self.upper)
        return f"{opener}{lower},{upper}{closer}"


# ----------------------------
# Parsing
# ----------------------------


def _split_groups(text: str) -> list[str]:
    """Split range text into bracketed groups on top-level commas.

    Each returned group still carries its brackets, e.g. "[1.2,)".

    Raises:
        InvalidRangeFormat: On empty text, text outside brackets, nested
            or unterminated groups, or empty groups between separators.
    """
    if not text.strip():
        raise InvalidRangeFormat("range specification is empty", interval=text)

    groups: list[str] = []
    start: int | None = None
    expect_group = True

    for i, c in enumerate(text):
        if start is not None:
            if c in _CLOSERS:
                groups.append(text[start : i + 1])
                start = None
                expect_group = False
            elif c in _OPENERS:
                raise InvalidRangeFormat(
                    f"unexpected {c!r} inside interval at offset {i} in {text!r}",
                    interval=text[start : i + 1],
                    index=len(groups),
                )
            continue

        if c.isspace():
            continue
        if c in _OPENERS:
            if not expect_group:
                raise InvalidRangeFormat(
                    f"missing ',' before interval at offset {i} in {text!r}",
                    interval=text,
                    index=len(groups),
                )
            start = i
        elif c == ",":
            if expect_group:
                raise InvalidRangeFormat(
                    f"empty interval at offset {i} in {text!r}",
                    interval=text,
                    index=len(groups),
                )
            expect_group = True
        else:
            raise InvalidRangeFormat(
                f"unexpected {c!r} at offset {i} in {text!r}; "
                "intervals must start with '[' or '('",
                interval=text,
                index=len(groups),
            )

    if start is not None:
        raise InvalidRangeFormat(
            f"unterminated interval {text[start:]!r}",
            interval=text[start:],
            index=len(groups),
        )
    if expect_group:
        raise InvalidRangeFormat(
            f"range ends with ',' in {text!r}", interval=text, index=len(groups)
        )
    return groups


def _parse_bound(part: str, group: str, index: int) -> ComparableVersion | None:
    part = part.strip()
    if not part:
        return None
    try:
        return ComparableVersion.parse(part)
    except InvalidVersionFormat as err:
        raise InvalidRangeFormat(
            f"interval {index} {group!r}: invalid version {part!r}: {err}",
            interval=group,
            index=index,
        ) from err


def _parse_interval(group: str, index: int) -> Interval:
    """Parse one bracketed group such as "[1.2,)" into an Interval."""
    lower_inclusive = _OPENERS[group[0]]
    upper_inclusive = _CLOSERS[group[-1]]
    parts = group[1:-1].split(",")

    if len(parts) == 1:
        # "[1.2]" is a single point
        if not (lower_inclusive and upper_inclusive):
            raise InvalidRangeFormat(
                f"interval {index} {group!r}: a single version must use '[' and ']'",
                interval=group,
                index=index,
            )
        version = _parse_bound(parts[0], group, index)
        if version is None:
            raise InvalidRangeFormat(
                f"interval {index} {group!r}: missing version",
                interval=group,
                index=index,
            )
        return Interval(version, True, version, True)

    if len(parts) > 2:
        raise InvalidRangeFormat(
            f"interval {index} {group!r}: expected 'lower,upper'",
            interval=group,
            index=index,
        )

    lower = _parse_bound(parts[0], group, index)
    upper = _parse_bound(parts[1], group, index)
    if lower is not None and upper is not None and lower > upper:
        raise InvalidRangeFormat(
            f"interval {index} {group!r}: lower bound {lower} is greater than "
            f"upper bound {upper}",
            interval=group,
            index=index,
        )
    return Interval(lower, lower_inclusive, upper, upper_inclusive)


def _classify(intervals: tuple[Interval, ...]) -> RangeKind:
    if len(intervals) == 1:
        only = intervals[0]
        if only.is_exact:
            return RangeKind.EXACT
        if only.lower is None and only.upper is None:
            return RangeKind.ANY
        if only.upper is None:
            return RangeKind.AT_LEAST
        if only.lower is None:
            return RangeKind.AT_MOST
        return RangeKind.BETWEEN
    if len(intervals) == 2:
        first, second = intervals
        if (
            first.lower is None
            and first.upper is not None
            and second.lower is not None
            and second.upper is None
        ):
            return RangeKind.OUTSIDE
    return RangeKind.UNION


# ----------------------------
# Public type
# ----------------------------


@dataclass(frozen=True)
class VersionRange:
    """An immutable union of version intervals.

    Attributes:
        intervals: Parsed intervals in the order they were written.

    """

    intervals: tuple[Interval, ...]

    def __post_init__(self) -> None:
        if not self.intervals:
            raise InvalidRangeFormat("a range needs at least one interval")

    @classmethod
    def parse(cls, text: str) -> VersionRange:
        """Parse range text such as "[1.2,)" or "(,1.0],[1.2,)".

        Args:
            text: The range specification.

        Returns:
            The parsed range.

        Raises:
            InvalidRangeFormat: If any interval is malformed, has a bound
                that is not a valid version, or has lower > upper. The
                whole range is rejected.

        """
        if not isinstance(text, str):
            raise InvalidRangeFormat(
                f"range must be a string, got {type(text).__name__}"
            )
        groups = _split_groups(text)
        intervals = tuple(_parse_interval(g, i) for i, g in enumerate(groups))
        get_global_logger().debug(
            "RANGE", f"Parsed {text!r} into {len(intervals)} interval(s)"
        )
        return cls(intervals)

    @classmethod
    def exact(cls, version: ComparableVersion | str) -> VersionRange:
        """Range matching exactly one version."""
        v = as_version(version)
        return cls((Interval(v, True, v, True),))

    @classmethod
    def between(
        cls,
        lower: ComparableVersion | str | None,
        upper: ComparableVersion | str | None,
        lower_inclusive: bool = True,
        upper_inclusive: bool = True,
    ) -> VersionRange:
        """Range with a single interval; None bounds are unbounded."""
        lo = None if lower is None else as_version(lower)
        hi = None if upper is None else as_version(upper)
        return cls((Interval(lo, lower_inclusive, hi, upper_inclusive),))

    @classmethod
    def any(cls) -> VersionRange:
        """Range matching every version ("[,]")."""
        return cls((Interval(None, True, None, True),))

    @property
    def kind(self) -> RangeKind:
        return _classify(self.intervals)

    def is_in_range(self, version: ComparableVersion | str) -> bool:
        """Return True if version satisfies at least one interval."""
        v = as_version(version)
        return any(interval.contains(v) for interval in self.intervals)

    def __contains__(self, version: object) -> bool:
        if not isinstance(version, (ComparableVersion, str)):
            return False
        return self.is_in_range(version)

    def select_best(
        self, candidates: Iterable[ComparableVersion | str]
    ) -> ComparableVersion | None:
        """Pick the highest candidate inside this range.

        Args:
            candidates: Versions (parsed or text) to choose from.

        Returns:
            The greatest matching version, or None when nothing matches.

        Raises:
            InvalidVersionFormat: If a candidate string does not parse.

        """
        best: ComparableVersion | None = None
        for candidate in candidates:
            v = as_version(candidate)
            if self.is_in_range(v) and (best is None or v > best):
                best = v
        return best

    def __str__(self) -> str:
        return ",".join(str(interval) for interval in self.intervals)
