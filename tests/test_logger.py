"""
Tests for the audit logger.
"""

import json
import pytest
import tempfile
import os
from pathlib import Path

# Add parent directory to path for imports
import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.logger import AuditLogger, AuditEntry, ActionType, ActionStatus


class TestAuditEntry:
    """Test AuditEntry dataclass."""

    def test_create_sets_values(self):
        entry = AuditEntry.create(
            action_type=ActionType.COPY,
            action_description="Copied a to b",
            target="/tmp/b"
        )

        assert entry.action_type == "copy"
        assert entry.status == "executed"
        assert entry.metadata == {}
        assert "T" in entry.timestamp

    def test_json_round_trip(self):
        entry = AuditEntry.create(ActionType.DELETE, "Deleted x", target="/x", metadata={"n": 1})

        assert AuditEntry.from_json(entry.to_json()) == entry


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            yield f.name
        os.unlink(f.name)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger with temp file."""
        return AuditLogger(log_path=temp_log)

    def test_creates_log_directory(self, tmp_path):
        logger = AuditLogger(log_path=str(tmp_path / "nested" / "audit.jsonl"))

        assert logger.log_path.exists()

    def test_log_action(self, logger):
        """Test logging an action."""
        entry = logger.log_action(
            action_type=ActionType.RENAME,
            description="Test action",
            target="/tmp/file"
        )

        assert entry.action_description == "Test action"
        assert entry.status == "executed"

    def test_get_recent(self, logger):
        """Test getting recent entries, most recent first."""
        for i in range(5):
            logger.log_action(action_type=ActionType.CREATE, description=f"Action {i}")

        entries = logger.get_recent(limit=3)

        assert [e.action_description for e in entries] == ["Action 4", "Action 3", "Action 2"]

    def test_skips_corrupt_lines(self, logger, temp_log):
        logger.log_action(action_type=ActionType.CREATE, description="ok")
        with open(temp_log, "a", encoding="utf-8") as f:
            f.write("not json\n")
            f.write(json.dumps({"unexpected": True}) + "\n")

        assert len(logger.get_recent()) == 1

    def test_get_failed(self, logger):
        """Test getting failed operations."""
        logger.log_action(action_type=ActionType.COPY, description="Copied")
        logger.log_action(
            action_type=ActionType.DELETE,
            description="Failed delete",
            status=ActionStatus.FAILED,
            result="Error: busy"
        )

        failed = logger.get_failed()

        assert len(failed) == 1
        assert failed[0].action_description == "Failed delete"

    def test_get_by_action_type(self, logger):
        logger.log_action(action_type=ActionType.COPY, description="a")
        logger.log_action(action_type=ActionType.MOVE, description="b")
        logger.log_action(action_type=ActionType.COPY, description="c")

        entries = logger.get_by_action_type(ActionType.COPY)

        assert [e.action_description for e in entries] == ["a", "c"]

    def test_export_json(self, logger):
        logger.log_action(action_type=ActionType.MOVE, description="Moved x")

        data = json.loads(logger.export("json"))

        assert data[0]["action_description"] == "Moved x"

    def test_export_csv(self, logger):
        logger.log_action(action_type=ActionType.MOVE, description="Moved x", target="/x")

        lines = logger.export("csv").splitlines()

        assert lines[0].startswith("timestamp,")
        assert '"Moved x"' in lines[1]

    def test_export_unknown_format(self, logger):
        with pytest.raises(ValueError):
            logger.export("xml")

    def test_clear_requires_confirmation(self, tmp_path):
        logger = AuditLogger(log_path=str(tmp_path / "audit.jsonl"))
        logger.log_action(action_type=ActionType.CREATE, description="x")

        assert not logger.clear()
        assert len(logger.get_recent()) == 1

        assert logger.clear(confirm=True)
        assert logger.get_recent() == []
        assert len(list(tmp_path.glob("audit.backup.*.jsonl"))) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
