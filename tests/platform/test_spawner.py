"""Tests for command execution."""

import subprocess
import sys
from unittest.mock import MagicMock, patch

from edges.platform.spawner import Spawner


class TestBlocking:
    def test_returns_exit_status(self):
        # Given
        spawner = Spawner(blocking=True)
        # When
        status = spawner.spawn([sys.executable, "-c", "raise SystemExit(3)"])
        # Then
        assert status == 3

    def test_arguments_are_passed_verbatim(self, tmp_path):
        # Given an argument with spaces and shell syntax
        out = tmp_path / "out.txt"
        script = "import sys; open(sys.argv[1], 'w').write(sys.argv[2])"
        # When
        Spawner(blocking=True).spawn(
            (sys.executable, "-c", script, str(out), "$HOME | *")
        )
        # Then
        assert out.read_text() == "$HOME | *"

    def test_child_gets_own_session(self):
        with patch("edges.platform.spawner.subprocess.Popen") as popen:
            popen.return_value.wait.return_value = 0
            Spawner(blocking=True).spawn(["xterm"])
        _, kwargs = popen.call_args
        assert kwargs["start_new_session"] is True
        assert kwargs["stdin"] == subprocess.DEVNULL


class TestNonBlocking:
    def test_does_not_wait(self):
        # Given
        spawner = Spawner(blocking=False)
        with patch("edges.platform.spawner.subprocess.Popen") as popen:
            proc = popen.return_value
            proc.poll.return_value = None
            # When
            status = spawner.spawn(["xterm"])
        # Then
        assert status is None
        proc.wait.assert_not_called()
        assert spawner.reap() == 1

    def test_finished_children_are_reaped(self):
        # Given
        spawner = Spawner(blocking=False)
        proc = MagicMock()
        spawner._children.append(proc)
        # When
        proc.poll.return_value = 0
        remaining = spawner.reap()
        # Then
        assert remaining == 0

    def test_real_child_is_reaped(self):
        spawner = Spawner(blocking=False)
        spawner.spawn([sys.executable, "-c", "pass"])
        spawner._children[0].wait()
        assert spawner.reap() == 0


class TestFailures:
    def test_nul_byte_in_argument_is_logged_not_raised(self, caplog):
        # Given an argument Popen refuses
        spawner = Spawner(blocking=True)
        # When
        with caplog.at_level("WARNING", logger="edges.spawner"):
            status = spawner.spawn(("echo", "a\x00b"))
        # Then
        assert status is None
        assert "Failed to run" in caplog.text

    def test_nul_byte_does_not_stop_later_spawns(self):
        spawner = Spawner(blocking=True)
        spawner.spawn(("echo", "a\x00b"))
        assert spawner.spawn([sys.executable, "-c", "pass"]) == 0

    def test_missing_program_is_logged_not_raised(self, caplog):
        # Given
        spawner = Spawner(blocking=True)
        # When
        with caplog.at_level("WARNING", logger="edges.spawner"):
            status = spawner.spawn(["/nonexistent/program-for-edges-tests"])
        # Then
        assert status is None
        assert "Failed to run" in caplog.text
