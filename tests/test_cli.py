"""
Tests for the FSOps command line interface.
"""

import json
import pytest
from pathlib import Path

from click.testing import CliRunner

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from fsops import fsops


@pytest.fixture
def runner():
    return CliRunner()


@pytest.fixture
def config_path(tmp_path):
    """Config that keeps the audit log inside tmp_path."""
    path = tmp_path / "config.yaml"
    path.write_text(f"fsops:\n  audit_log: {tmp_path / 'data' / 'audit.jsonl'}\n")
    return str(path)


@pytest.fixture
def work(tmp_path):
    work = tmp_path / "work"
    work.mkdir()
    (work / "FILE.txt").write_bytes(b"12345678")
    return work


def invoke(runner, config_path, *args):
    return runner.invoke(fsops, ["--config", config_path, *[str(a) for a in args]])


class TestCommands:
    """Test individual commands."""

    def test_name(self, runner, config_path):
        result = invoke(runner, config_path, "name", "/x/archive.tar.gz", "--no-extension")

        assert result.exit_code == 0
        assert result.output.strip() == "archive.tar"

    def test_size(self, runner, config_path, work):
        result = invoke(runner, config_path, "size", work, "--unit", "byte")

        assert result.exit_code == 0
        assert "8 BYTE" in result.output

    def test_ls_empty(self, runner, config_path, tmp_path):
        (tmp_path / "empty").mkdir()

        result = invoke(runner, config_path, "ls", tmp_path / "empty")

        assert result.exit_code == 0
        assert "empty" in result.output

    def test_ls_bad_depth_is_usage_error(self, runner, config_path, work):
        result = invoke(runner, config_path, "ls", work, "--depth", "0")

        assert result.exit_code == 2
        assert "Error" in result.output

    def test_cp_generates_names(self, runner, config_path, work):
        assert invoke(runner, config_path, "cp", work / "FILE.txt").exit_code == 0
        assert invoke(runner, config_path, "cp", work / "FILE.txt").exit_code == 0

        assert (work / "FILE copy.txt").exists()
        assert (work / "FILE copy (2).txt").exists()

    def test_cp_explicit_name_collision(self, runner, config_path, work):
        result = invoke(runner, config_path, "cp", work / "FILE.txt", "--as", "FILE.txt")

        assert result.exit_code == 2

    def test_mv(self, runner, config_path, work, tmp_path):
        (tmp_path / "dest").mkdir()

        result = invoke(runner, config_path, "mv", work / "FILE.txt", tmp_path / "dest")

        assert result.exit_code == 0
        assert (tmp_path / "dest" / "FILE.txt").exists()
        assert not (work / "FILE.txt").exists()

    def test_rename_rm_and_clear(self, runner, config_path, work):
        assert invoke(runner, config_path, "rename", work / "FILE.txt", "other.txt").exit_code == 0
        assert (work / "other.txt").exists()

        assert invoke(runner, config_path, "mkdir", work / "sub").exit_code == 0
        assert invoke(runner, config_path, "touch", work / "sub" / "a.txt").exit_code == 0
        assert invoke(runner, config_path, "rm", work / "other.txt").exit_code == 0

        assert invoke(runner, config_path, "clear", work).exit_code == 0
        assert work.is_dir()
        assert list(work.iterdir()) == []

    def test_unknown_configured_unit_is_usage_error(self, runner, tmp_path, work):
        path = tmp_path / "bogus.yaml"
        path.write_text(f"fsops:\n  default_unit: BOGUS\n  audit_log: {tmp_path / 'data' / 'audit.jsonl'}\n")

        result = invoke(runner, str(path), "size", work / "FILE.txt")

        assert result.exit_code == 2
        assert "Error" in result.output

    def test_missing_path_is_usage_error(self, runner, config_path, tmp_path):
        result = invoke(runner, config_path, "rm", tmp_path / "missing")

        assert result.exit_code == 2


class TestAuditCommand:
    """Test the audit command."""

    def test_empty_log(self, runner, config_path):
        result = invoke(runner, config_path, "audit")

        assert result.exit_code == 0
        assert "No audit entries" in result.output

    def test_operations_are_recorded(self, runner, config_path, work):
        invoke(runner, config_path, "cp", work / "FILE.txt")

        result = invoke(runner, config_path, "audit", "--export", "json")

        assert result.exit_code == 0
        entries = json.loads(result.output)
        assert [e["action_type"] for e in entries] == ["copy"]

    def test_audit_disabled(self, runner, tmp_path, work):
        path = tmp_path / "quiet.yaml"
        path.write_text(f"fsops:\n  audit_enabled: false\n  audit_log: {tmp_path / 'quiet.jsonl'}\n")

        invoke(runner, str(path), "cp", work / "FILE.txt")

        assert not (tmp_path / "quiet.jsonl").exists()


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
