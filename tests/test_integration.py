"""End-to-end integration tests for tasklist.

This module runs the console as a real user would, feeding the menu through
stdin of a subprocess, to check that all components work together.
"""

import json
import os
import subprocess
import sys
import tempfile
from pathlib import Path

import pytest

PROJECT_ROOT = Path(__file__).resolve().parent.parent


class TestIntegration:
    """E2E integration tests for the complete tasklist workflow."""

    @pytest.fixture
    def temp_dir(self):
        """Create a temporary directory for task files."""
        with tempfile.TemporaryDirectory() as tmpdir:
            yield Path(tmpdir)

    def run_console(self, lines, cwd, args=None, env=None):
        """Run the console with the given lines on stdin.

        Args:
            lines: Lines typed by the user
            cwd: Working directory for the process
            args: Extra command-line arguments
            env: Extra environment variables

        Returns:
            subprocess.CompletedProcess instance
        """
        pythonpath = os.pathsep.join(filter(None, [str(PROJECT_ROOT), os.environ.get("PYTHONPATH")]))
        return subprocess.run(
            [sys.executable, "-m", "tasklist"] + (args or []),
            input="\n".join(lines) + "\n",
            capture_output=True,
            text=True,
            check=False,
            env={**os.environ, "PYTHONPATH": pythonpath, **(env or {})},
            cwd=str(cwd),
        )

    def test_complete_workflow(self, temp_dir):
        """Test add -> edit -> list -> remove -> store in one session."""
        result = self.run_console(
            [
                "1", "Write report", "Q3 summary", "medium",
                "1", "Clean desk", "", "low",
                "3", "Clean desk", "Clean office", "Whole room", "HIGH",
                "2", "Clean office",
                "4", "Write report",
                "5",
                "6", "out.json",
                "8",
            ],
            temp_dir,
        )

        assert result.returncode == 0
        assert 'Task "Clean desk" updated successfully' in result.stdout
        assert "Task found!" in result.stdout
        assert 'Task "Write report" removed successfully' in result.stdout
        assert "Data stored successfully" in result.stdout

        data = json.loads((temp_dir / "out.json").read_text(encoding="utf-8"))
        assert [(t["name"], t["description"], t["priority"]) for t in data] == [
            ("Clean office", "Whole room", "High"),
        ]

    def test_store_then_load_in_new_process(self, temp_dir):
        """Test that a stored file can be loaded by a later session."""
        self.run_console(["1", "Keep me", "notes", "high", "6", "saved.json", "8"], temp_dir)

        result = self.run_console(["7", "saved.json", "5", "8"], temp_dir)

        assert result.returncode == 0
        assert "Data read successfully" in result.stdout
        assert "Keep me | High |" in result.stdout
        assert '"notes"' in result.stdout

    def test_load_option(self, temp_dir):
        """Test the --load command-line option."""
        self.run_console(["1", "Preloaded", "", "low", "6", "seed.json", "8"], temp_dir)

        result = self.run_console(["5", "8"], temp_dir, args=["--load", "seed.json"])

        assert result.returncode == 0
        assert "Preloaded | Low |" in result.stdout

    def test_load_option_missing_file(self, temp_dir):
        """Test that --load with a missing file exits with an error."""
        result = self.run_console([], temp_dir, args=["--load", "missing.json"])

        assert result.returncode == 1
        assert "doesn't exist" in result.stderr

    def test_store_refuses_overwrite(self, temp_dir):
        """Test that storing onto an existing file keeps its content."""
        target = temp_dir / "taken.json"
        target.write_text("do not touch", encoding="utf-8")

        result = self.run_console(["1", "x", "", "low", "6", "taken.json", "8"], temp_dir)

        assert result.returncode == 0
        assert "already exists" in result.stdout
        assert target.read_text(encoding="utf-8") == "do not touch"

    def test_default_file_from_environment(self, temp_dir):
        """Test that an empty file name uses TASKLIST_DEFAULT_FILE."""
        result = self.run_console(
            ["1", "x", "", "low", "6", "", "8"],
            temp_dir,
            env={"TASKLIST_DEFAULT_FILE": "env_default.json"},
        )

        assert result.returncode == 0
        assert (temp_dir / "env_default.json").exists()

    def test_end_of_input_exits_cleanly(self, temp_dir):
        """Test that closing stdin ends the session with exit code 0."""
        result = self.run_console(["9", "5"], temp_dir)

        assert result.returncode == 0
        assert "I don't understand this command :(" in result.stdout
        assert "No tasks found." in result.stdout

    def test_log_file_records_operations(self, temp_dir):
        """Test that TASKLIST_LOG_FILE captures debug logging."""
        log_file = temp_dir / "logs" / "tasklist.log"

        self.run_console(
            ["1", "Logged", "", "low", "6", "logged.json", "8"],
            temp_dir,
            env={"TASKLIST_LOG_FILE": str(log_file)},
        )

        content = log_file.read_text(encoding="utf-8")
        assert "tasklist.manager" in content
        assert "Stored 1 task(s)" in content
