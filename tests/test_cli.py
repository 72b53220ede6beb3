"""
Tests for xdeps.cli module.

Tests the command handlers through main() including:
- Output format of compare and check
- Exit codes for success, failure and malformed input
- Validation and resolution reports
"""

from __future__ import annotations

import pytest

from xdeps.cli import main


def run_cli(argv: list[str]) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(argv)
    return exc_info.value.code


class TestCompareCommand:
    """Tests for 'xdeps compare'."""

    @pytest.mark.parametrize(
        "a, b, symbol",
        [
            ("1.2", "1.2.0", "=="),
            ("1.10", "1.9", ">"),
            ("1.2", "1.2.a", "<"),
        ],
    )
    def test_compare_output(self, capsys, a, b, symbol):
        """Test the relation printed between the two inputs."""
        assert run_cli(["compare", a, b]) == 0
        assert capsys.readouterr().out.strip() == f"{a} {symbol} {b}"

    def test_malformed_version(self, capsys):
        """Test that a malformed version exits with 1."""
        assert run_cli(["compare", "1..2", "1.0"]) == 1
        assert "Error:" in capsys.readouterr().out


class TestCheckCommand:
    """Tests for 'xdeps check'."""

    def test_mixed_results(self, capsys):
        """Test per-version output and failing exit code."""
        assert run_cli(["check", "(,1.0],[1.2,)", "0.9", "1.1.2"]) == 1
        lines = capsys.readouterr().out.splitlines()
        assert lines == ["[IN]  0.9", "[OUT] 1.1.2"]

    def test_all_in_range(self, capsys):
        """Test that exit code is 0 when every version matches."""
        assert run_cli(["check", "[1.2,)", "1.2", "2.0"]) == 0
        assert "[OUT]" not in capsys.readouterr().out

    def test_malformed_range(self, capsys):
        """Test that an inverted range is reported as an error."""
        assert run_cli(["check", "[2.0,1.0]", "1.5"]) == 1
        assert "Error:" in capsys.readouterr().out


class TestValidateCommand:
    """Tests for 'xdeps validate'."""

    def test_valid_manifest(self, capsys, create_yaml_file, sample_manifest_data):
        """Test the success report."""
        manifest_path = create_yaml_file("package.yaml", sample_manifest_data)

        assert run_cli(["validate", str(manifest_path)]) == 0
        out = capsys.readouterr().out
        assert "VALIDATION RESULTS" in out
        assert "[SUCCESS]" in out

    def test_invalid_manifest(self, capsys, tmp_test_dir):
        """Test the failure report."""
        manifest_path = tmp_test_dir / "package.yaml"
        manifest_path.write_text("package:\n  name: xbase\n")

        assert run_cli(["validate", str(manifest_path)]) == 1
        out = capsys.readouterr().out
        assert "[X] Missing required field: apiVersion" in out
        assert "[FAILED]" in out


class TestResolveCommand:
    """Tests for 'xdeps resolve'."""

    def test_resolved(self, capsys, make_repo, create_yaml_file, sample_manifest_data):
        """Test a fully resolved manifest."""
        repo = make_repo(
            [
                ("xunittest", "1.2.5", "default", "Win32"),
                ("xmath", "1.4", "default", "all"),
            ]
        )
        manifest_path = create_yaml_file("package.yaml", sample_manifest_data)

        code = run_cli(
            ["resolve", str(manifest_path), "--repo", str(repo), "--platform", "Win32"]
        )

        out = capsys.readouterr().out
        assert code == 0
        assert "RESOLUTION RESULTS" in out
        assert "[1/2] Loading manifest..." in out
        assert "1.2.5" in out
        assert "[SUCCESS]" in out

    def test_unresolved(self, capsys, make_repo, create_yaml_file, sample_manifest_data):
        """Test that a missing dependency fails the command."""
        repo = make_repo([("xmath", "1.4", "default", "all")])
        manifest_path = create_yaml_file("package.yaml", sample_manifest_data)

        assert run_cli(["resolve", str(manifest_path), "--repo", str(repo)]) == 1
        assert "1 dependency(ies) could not be resolved" in capsys.readouterr().out

    def test_missing_manifest(self, capsys, tmp_test_dir):
        """Test a manifest path that does not exist."""
        assert run_cli(["resolve", str(tmp_test_dir / "nope.yaml")]) == 1
        assert "Manifest file not found" in capsys.readouterr().out

    def test_missing_repository(self, capsys, create_yaml_file):
        """Test that a missing repository setting is an error."""
        manifest_path = create_yaml_file("package.yaml", {"package": {"name": "xbase"}})

        assert run_cli(["resolve", str(manifest_path)]) == 1
        assert "Error:" in capsys.readouterr().out


class TestParser:
    """Tests for top-level parser behaviour."""

    def test_version_flag(self, capsys):
        """Test that --version prints the program name."""
        assert run_cli(["--version"]) == 0
        assert capsys.readouterr().out.startswith("xdeps ")

    def test_command_required(self):
        """Test that a subcommand must be given."""
        assert run_cli([]) == 2
