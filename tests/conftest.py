"""
Pytest configuration and shared fixtures for xdeps tests.

This module provides reusable fixtures and test utilities used across
the test suite.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

import pytest
import yaml

from xdeps.logging import SilentLogger, set_global_logger


@pytest.fixture(autouse=True)
def silent_global_logger():
    """
    Reset the global logger around every test.

    CLI handlers install a printing logger; tests must not leak it.
    """
    set_global_logger(SilentLogger())
    yield
    set_global_logger(SilentLogger())


@pytest.fixture
def tmp_test_dir(tmp_path: Path) -> Path:
    """
    Provide a temporary directory for test artifacts.

    Automatically cleaned up after test completion.
    """
    return tmp_path


@pytest.fixture
def sample_manifest_data() -> dict[str, Any]:
    """
    Provide sample manifest data.

    Returns a complete manifest structure for testing. Versions and ranges
    are strings so YAML does not turn them into floats.
    """
    return {
        "apiVersion": "xdeps/v1",
        "package": {
            "name": "xbase",
            "group": "com.virtuos.tnt",
            "versions": [
                {"version": "1.2.23.0", "platform": "*"},
                {"version": "1.3.0", "platform": "x64"},
            ],
        },
        "dependencies": [
            {
                "package": "xunittest",
                "versions": [
                    {"range": "[1.2,)"},
                    {"range": "[1.2,1.3)", "platform": "Win32"},
                ],
            },
            {
                "package": "xmath",
                "versions": [{"range": "(,1.0],[1.2,)"}],
            },
        ],
    }


@pytest.fixture
def create_yaml_file(tmp_test_dir: Path):
    """
    Factory fixture for creating temporary YAML files.

    Usage:
        yaml_path = create_yaml_file("test.yaml", {"key": "value"})
    """
    def _create(filename: str, data: Any) -> Path:
        path = tmp_test_dir / filename
        path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8") as f:
            yaml.dump(data, f)
        return path

    return _create


@pytest.fixture
def make_repo(tmp_test_dir: Path):
    """
    Factory fixture for building a local package repository.

    Creates empty artifact files laid out the way list_candidate_versions
    expects them.

    Usage:
        repo = make_repo([
            ("xunittest", "1.2.0", "default", "Win32"),
            ("xunittest", "1.4", "default", "all"),
        ])
    """
    def _create(
        artifacts: list[tuple[str, str, str, str]],
        group: str = "com.virtuos.tnt",
        toolset: str = "v100",
    ) -> Path:
        repo = tmp_test_dir / "repo"
        repo.mkdir(exist_ok=True)
        for package, version, branch, platform in artifacts:
            parts = (version.split(".") + ["0", "0", "0"])[:3]
            target = repo.joinpath(*group.split("."), package, "version", *parts)
            target.mkdir(parents=True, exist_ok=True)
            name = f"{package}+{version}+{branch}+{platform}+{toolset}.zip"
            (target / name).write_bytes(b"")
        return repo

    return _create
