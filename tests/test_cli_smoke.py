"""
Minimal smoke tests for the calisthenics-tracker CLI.

Tests basic functionality:
- App runs without errors
- Exercises list from defaults
- Completion is saved and progresses the target
- Manual resets work
- Wake-ups are registered
"""

import json
import tempfile
from pathlib import Path

import pytest
from typer.testing import CliRunner

from calisthenics_tracker.cli.main import app
from calisthenics_tracker.core.config import RESET_TASK_IDENTIFIER, STORE_KEY, WAKEUPS_FILENAME
from calisthenics_tracker.io.persistence import FileBlobStore


runner = CliRunner()


@pytest.fixture
def data_dir():
    """Create a temporary data directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


def _saved(data_dir: Path) -> list[dict]:
    return json.loads(FileBlobStore(data_dir).path_for(STORE_KEY).read_text())


class TestCLISmoke:
    """Basic smoke tests for CLI commands."""

    def test_app_help(self):
        result = runner.invoke(app, ["--help"])
        assert result.exit_code == 0
        assert "calisthenics" in result.output.lower()

    def test_list_shows_defaults(self, data_dir):
        result = runner.invoke(app, ["list", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "Push-ups" in result.output
        assert "Completed 0/6" in result.output

    def test_no_command_lists(self, data_dir):
        result = runner.invoke(app, [], env={"CALISTHENICS_TRACKER_HOME": str(data_dir)})
        assert result.exit_code == 0
        assert "Pull-ups" in result.output

    def test_complete_saves_progress(self, data_dir):
        result = runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])

        assert result.exit_code == 0
        assert "Completed Push-ups" in result.output
        assert "Next target: 85" in result.output

        saved = _saved(data_dir)
        assert saved[0]["current_target"] == 85
        assert saved[0]["is_completed"] is True
        assert saved[0]["last_completed_date"] is not None

    def test_complete_twice_same_day(self, data_dir):
        runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])
        result = runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "already done" in result.output
        assert _saved(data_dir)[0]["current_target"] == 85

    def test_complete_out_of_range(self, data_dir):
        result = runner.invoke(app, ["complete", "7", "--data-dir", str(data_dir)])
        assert result.exit_code == 1
        assert "between 1 and 6" in result.output

    def test_uncomplete(self, data_dir):
        runner.invoke(app, ["complete", "2", "--data-dir", str(data_dir)])
        result = runner.invoke(app, ["uncomplete", "2", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        saved = _saved(data_dir)
        assert saved[1]["is_completed"] is False
        assert saved[1]["current_target"] == 42

    def test_reset_all(self, data_dir):
        runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])
        runner.invoke(app, ["complete", "3", "--data-dir", str(data_dir)])
        result = runner.invoke(app, ["reset-all", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert not any(e["is_completed"] for e in _saved(data_dir))

    def test_reset_progression_requires_confirmation(self, data_dir):
        runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])
        result = runner.invoke(app, ["reset-progression", "--data-dir", str(data_dir)], input="n\n")
        assert result.exit_code == 0
        assert _saved(data_dir)[0]["current_target"] == 85

    def test_reset_progression_force(self, data_dir):
        runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])
        result = runner.invoke(app, ["reset-progression", "--force", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        saved = _saved(data_dir)
        assert saved[0]["current_target"] == 80
        assert saved[0]["last_completed_date"] is None

    def test_check(self, data_dir):
        runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])
        result = runner.invoke(app, ["check", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "1 exercise(s) still completed" in result.output

    def test_corrupt_data_falls_back_to_defaults(self, data_dir):
        FileBlobStore(data_dir).set(STORE_KEY, b"not json at all")
        result = runner.invoke(app, ["list", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "Front Lever" in result.output

    def test_next_reset(self, data_dir):
        result = runner.invoke(app, ["next-reset", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "04:00" in result.output

    def test_next_reset_uses_configured_hour(self, data_dir):
        (data_dir / "config.yaml").write_text("trigger_hour: 6\n")
        result = runner.invoke(app, ["next-reset", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "06:00" in result.output

    def test_wake_registers_next_reset(self, data_dir):
        result = runner.invoke(app, ["wake", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "No wake-ups due" in result.output

        pending = json.loads((data_dir / WAKEUPS_FILENAME).read_text())
        assert RESET_TASK_IDENTIFIER in pending

    def test_wake_delivers_due_reset(self, data_dir):
        runner.invoke(app, ["complete", "1", "--data-dir", str(data_dir)])
        (data_dir / WAKEUPS_FILENAME).write_text(
            json.dumps({RESET_TASK_IDENTIFIER: "2000-01-01T04:00:00"})
        )

        result = runner.invoke(app, ["wake", "--data-dir", str(data_dir)])

        assert result.exit_code == 0
        assert "Delivered 1 wake-up" in result.output
        # Completed today, so the delivered pass leaves it alone
        assert _saved(data_dir)[0]["is_completed"] is True
        pending = json.loads((data_dir / WAKEUPS_FILENAME).read_text())
        assert pending[RESET_TASK_IDENTIFIER] > "2000-01-01T04:00:00"

    def test_verbose_logs_scheduling_through_console(self, data_dir):
        result = runner.invoke(app, ["-v", "wake", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "Background reset scheduled" in result.output
        assert "INFO" in result.output

    def test_quiet_by_default(self, data_dir):
        result = runner.invoke(app, ["wake", "--data-dir", str(data_dir)])
        assert result.exit_code == 0
        assert "Background reset scheduled" not in result.output
