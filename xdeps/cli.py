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

"""Command-line interface for xdeps.

This module provides the main CLI entry point for the xdeps tool, offering
commands for comparing versions, checking ranges, validating manifests and
resolving dependencies against a local repository.

Commands:

    compare: Compare two versions
    check: Check versions against a range
    validate: Validate manifest syntax and version/range text
    resolve: Pick the highest acceptable version of each dependency

Example:
    Compare two versions:
        ```bash
        $ xdeps compare 1.2 1.2.0
        1.2 == 1.2.0
        ```

    Check versions against a range:
        ```bash
        $ xdeps check "(,1.0],[1.2,)" 0.9 1.1.2
        [IN]  0.9
        [OUT] 1.1.2
        ```

    Resolve dependencies:
        ```bash
        $ xdeps resolve packages/xbase/package.yaml --repo ./repo --platform Win32
        ```

Exit Codes:

- 0: Success
- 1: Error (malformed input, invalid manifest, version out of range, or
  unresolved dependency)

Note:
    The CLI uses argparse for command parsing. Each command has its own
    handler function (cmd_<command>). Verbose mode shows full tracebacks on
    errors for debugging. Debug mode implies verbose mode.

"""

from __future__ import annotations

import argparse
from importlib.metadata import PackageNotFoundError, version
from pathlib import Path
import sys
import traceback

from xdeps.core import resolve_manifest
from xdeps.exceptions import XDepsError
from xdeps.logging import get_logger, set_global_logger
from xdeps.validation import validate_manifest
from xdeps.versioning import ComparableVersion, VersionRange

_SYMBOLS = {-1: "<", 0: "==", 1: ">"}


def _report_error(err: Exception, args: argparse.Namespace) -> int:
    print(f"Error: {err}")
    if getattr(args, "verbose", False) or getattr(args, "debug", False):
        traceback.print_exc()
    return 1


def cmd_compare(args: argparse.Namespace) -> int:
    """Handler for 'xdeps compare' command.

    Args:
        args: Parsed command-line arguments containing the two versions.

    Returns:
        Exit code (0 on success, 1 if a version is malformed).

    """
    set_global_logger(get_logger(verbose=args.verbose))

    try:
        a = ComparableVersion.parse(args.a)
        b = ComparableVersion.parse(args.b)
    except XDepsError as err:
        return _report_error(err, args)

    print(f"{args.a} {_SYMBOLS[a.compare(b)]} {args.b}")
    return 0


def cmd_check(args: argparse.Namespace) -> int:
    """Handler for 'xdeps check' command.

    Prints [IN] or [OUT] for each version.

    Returns:
        Exit code (0 if every version is in range, 1 otherwise or on
        malformed input).

    """
    set_global_logger(get_logger(verbose=args.verbose))

    try:
        version_range = VersionRange.parse(args.range)
        versions = [ComparableVersion.parse(v) for v in args.versions]
    except XDepsError as err:
        return _report_error(err, args)

    all_in = True
    for text, v in zip(args.versions, versions):
        if version_range.is_in_range(v):
            print(f"[IN]  {text}")
        else:
            print(f"[OUT] {text}")
            all_in = False
    return 0 if all_in else 1


def cmd_validate(args: argparse.Namespace) -> int:
    """Handler for 'xdeps validate' command.

    Validates manifest syntax and every version/range it declares without
    looking at any repository.

    Returns:
        Exit code (0 for valid manifest, 1 for invalid).

    """
    set_global_logger(get_logger(verbose=args.verbose))

    manifest_path = Path(args.manifest).resolve()
    print(f"Validating manifest: {manifest_path}")
    print()

    result = validate_manifest(manifest_path)

    print("=" * 70)
    print("VALIDATION RESULTS")
    print("=" * 70)
    print(f"Manifest:      {result.manifest_path}")
    print(f"Status:        {result.status.upper()}")
    print(f"Dependencies:  {result.dependency_count}")
    print()

    if result.warnings:
        print(f"Warnings ({len(result.warnings)}):")
        for warning in result.warnings:
            print(f"  [WARNING] {warning}")
        print()

    if result.errors:
        print(f"Errors ({len(result.errors)}):")
        for error in result.errors:
            print(f"  [X] {error}")
        print()

    print("=" * 70)

    if result.status == "valid":
        print()
        print("[SUCCESS] Manifest is valid!")
        return 0
    print()
    print(f"[FAILED] Manifest validation failed with {len(result.errors)} error(s).")
    return 1


def cmd_resolve(args: argparse.Namespace) -> int:
    """Handler for 'xdeps resolve' command.

    Returns:
        Exit code (0 if every dependency resolved, 1 otherwise).

    """
    set_global_logger(get_logger(verbose=args.verbose, debug=args.debug))

    manifest_path = Path(args.manifest).resolve()
    if not manifest_path.exists():
        print(f"Error: Manifest file not found: {manifest_path}")
        return 1

    repo = Path(args.repo) if args.repo else None

    try:
        result = resolve_manifest(manifest_path, repo, platform=args.platform)
    except XDepsError as err:
        return _report_error(err, args)

    print("=" * 70)
    print("RESOLUTION RESULTS")
    print("=" * 70)
    print(f"Package:     {result.package}")
    print(f"Platform:    {result.platform}")
    print(f"Repository:  {result.repository}")
    print()
    for dep in result.dependencies:
        chosen = str(dep.version) if dep.version is not None else "-"
        marker = "[OK]" if dep.status == "resolved" else "[X] "
        print(
            f"  {marker} {dep.name:<24} {str(dep.range):<20} {chosen:<12} "
            f"({dep.candidate_count} candidate(s))"
        )
    print("=" * 70)

    if result.ok:
        print()
        print("[SUCCESS] All dependencies resolved!")
        return 0
    unresolved = sum(1 for d in result.dependencies if d.status != "resolved")
    print()
    print(f"[FAILED] {unresolved} dependency(ies) could not be resolved.")
    return 1


def _installed_version() -> str:
    try:
        return version("xdeps")
    except PackageNotFoundError:
        from xdeps import __version__

        return __version__


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="xdeps",
        description="xdeps - version ranges and dependency resolution for packages",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "--version",
        action="version",
        version=f"xdeps {_installed_version()}",
    )

    subparsers = parser.add_subparsers(
        dest="command",
        help="Available commands",
        required=True,
    )

    # 'compare' command
    parser_compare = subparsers.add_parser(
        "compare",
        help="Compare two versions",
        description="Print whether version A is less than, equal to or greater than B.",
    )
    parser_compare.add_argument("a", help="First version")
    parser_compare.add_argument("b", help="Second version")
    parser_compare.add_argument(
        "-v", "--verbose", action="store_true", help="Show tracebacks on errors"
    )
    parser_compare.set_defaults(func=cmd_compare)

    # 'check' command
    parser_check = subparsers.add_parser(
        "check",
        help="Check versions against a range",
        description="Report for each version whether it satisfies the range.",
    )
    parser_check.add_argument("range", help='Range specification, e.g. "[1.2,)"')
    parser_check.add_argument("versions", nargs="+", help="Versions to check")
    parser_check.add_argument(
        "-v", "--verbose", action="store_true", help="Show tracebacks on errors"
    )
    parser_check.set_defaults(func=cmd_check)

    # 'validate' command
    parser_validate = subparsers.add_parser(
        "validate",
        help="Validate manifest syntax and versions (no repository access)",
        description="Check a manifest for YAML errors, missing fields and malformed versions or ranges.",
    )
    parser_validate.add_argument("manifest", help="Path to the manifest YAML file")
    parser_validate.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show validation progress and details",
    )
    parser_validate.set_defaults(func=cmd_validate)

    # 'resolve' command
    parser_resolve = subparsers.add_parser(
        "resolve",
        help="Pick the highest acceptable version of each dependency",
        description="Resolve each dependency range against the versions present in a local repository.",
    )
    parser_resolve.add_argument("manifest", help="Path to the manifest YAML file")
    parser_resolve.add_argument(
        "--repo",
        default=None,
        help="Local repository root (default: defaults.repository.path from config)",
    )
    parser_resolve.add_argument(
        "--platform",
        default="*",
        help="Platform to resolve for (default: * for wildcard entries)",
    )
    parser_resolve.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="Show progress and high-level status updates",
    )
    parser_resolve.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Show detailed debugging output (implies --verbose)",
    )
    parser_resolve.set_defaults(func=cmd_resolve)

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point for the xdeps CLI.

    This function is registered as the 'xdeps' console script in
    pyproject.toml.
    """
    parser = build_parser()
    args = parser.parse_args(argv)
    sys.exit(args.func(args))


if __name__ == "__main__":
    main()
