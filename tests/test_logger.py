"""
Tests for the audit logger.
"""

import json
import pytest
import tempfile
import os
from pathlib import Path

import sys
sys.path.insert(0, str(Path(__file__).parent.parent))

from core.logger import AuditLogger, AuditEntry, ActionType, ActionStatus, CSV_HEADER


class TestAuditEntry:
    """Test AuditEntry dataclass."""

    def test_create_sets_values(self):
        entry = AuditEntry.create(
            action_type=ActionType.DELETE,
            action_description="Delete file: /tmp/x",
            status=ActionStatus.FAILED,
            result="Error: nope"
        )

        assert entry.action_type == "delete"
        assert entry.status == "failed"
        assert entry.metadata == {}
        assert "T" in entry.timestamp

    def test_json_round_trip(self):
        entry = AuditEntry.create(ActionType.READ, "Read file: ü.txt", metadata={"path": "ü.txt"})

        assert AuditEntry.from_json(entry.to_json()) == entry


class TestAuditLogger:
    """Test AuditLogger class."""

    @pytest.fixture
    def temp_log(self):
        """Create a temporary log file."""
        with tempfile.NamedTemporaryFile(mode='w', suffix='.jsonl', delete=False) as f:
            yield f.name
        if os.path.exists(f.name):
            os.unlink(f.name)

    @pytest.fixture
    def logger(self, temp_log):
        """Create a logger with temp file."""
        return AuditLogger(log_path=temp_log)

    def test_creates_missing_directory(self, tmp_path):
        """Test the log directory and file are created on init."""
        log_path = tmp_path / "deep" / "dir" / "audit.jsonl"

        AuditLogger(log_path=str(log_path))

        assert log_path.exists()

    def test_log_action(self, logger):
        """Test logging an action."""
        entry = logger.log_action(
            action_type=ActionType.WRITE,
            description="Test action",
            status=ActionStatus.EXECUTED
        )

        assert entry.action_description == "Test action"
        assert entry.status == "executed"

    def test_log_is_append_only(self, logger, temp_log):
        """Test each entry adds exactly one line."""
        logger.log_action(ActionType.READ, "first")
        logger.log_action(ActionType.READ, "second")

        with open(temp_log, "r", encoding="utf-8") as f:
            lines = f.read().splitlines()

        assert len(lines) == 2
        assert json.loads(lines[0])["action_description"] == "first"

    def test_get_recent(self, logger):
        """Test getting recent entries, newest first."""
        for i in range(5):
            logger.log_action(action_type=ActionType.READ, description=f"Action {i}")

        entries = logger.get_recent(limit=3)

        assert [e.action_description for e in entries] == ["Action 4", "Action 3", "Action 2"]

    def test_get_recent_skips_malformed_lines(self, logger, temp_log):
        logger.log_action(ActionType.READ, "good")
        with open(temp_log, "a", encoding="utf-8") as f:
            f.write("not json\n")
            f.write('{"unexpected": 1}\n')

        entries = logger.get_recent()

        assert len(entries) == 1

    def test_get_by_action_type(self, logger):
        logger.log_action(ActionType.READ, "r")
        logger.log_action(ActionType.DELETE, "d")
        logger.log_action(ActionType.READ, "r2")

        entries = logger.get_by_action_type(ActionType.READ)

        assert [e.action_description for e in entries] == ["r", "r2"]

    def test_get_failed(self, logger):
        """Test getting failed operations."""
        logger.log_action(ActionType.WRITE, "ok write")
        logger.log_action(
            action_type=ActionType.DELETE,
            description="Failed delete",
            status=ActionStatus.FAILED,
            result="Error: no such file"
        )

        failed = logger.get_failed()

        assert len(failed) == 1
        assert failed[0].action_description == "Failed delete"

    def test_export_json(self, logger):
        logger.log_action(ActionType.READ, "exported")

        data = json.loads(logger.export("json"))

        assert data[0]["action_description"] == "exported"

    def test_export_csv(self, logger):
        logger.log_action(ActionType.WRITE, 'say "hi"', result="Wrote 2 characters")

        lines = logger.export("csv").splitlines()

        assert lines[0] == CSV_HEADER
        assert '"say ""hi"""' in lines[1]

    def test_export_empty_csv(self, logger):
        assert logger.export("csv") == CSV_HEADER + "\n"

    def test_export_unknown_format(self, logger):
        with pytest.raises(ValueError):
            logger.export("xml")

    def test_clear_requires_confirm(self, logger):
        logger.log_action(ActionType.READ, "kept")

        assert logger.clear() is False
        assert len(logger.get_recent()) == 1

    def test_clear_backs_up(self, tmp_path):
        """Test clearing moves the old log aside."""
        logger = AuditLogger(log_path=str(tmp_path / "audit.jsonl"))
        logger.log_action(ActionType.READ, "old")

        assert logger.clear(confirm=True) is True
        assert logger.get_recent() == []
        assert len(list(tmp_path.glob("audit.backup.*.jsonl"))) == 1


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
