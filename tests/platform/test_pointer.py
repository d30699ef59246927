"""Tests for the polling pointer watcher."""

import sys
from unittest.mock import MagicMock, patch

# Mock gi before importing pointer only when PyGObject is unavailable.
try:
    import gi  # type: ignore # noqa: F401

    gi.require_version("Gtk", "3.0")
    from gi.repository import GLib  # noqa: F401
except Exception:
    gi_mock = MagicMock()
    gi_mock.require_version = MagicMock()
    sys.modules["gi"] = gi_mock
    sys.modules["gi.repository"] = gi_mock.repository

from edges.core.zones import Point  # noqa: E402
from edges.platform import timeout as timeout_mod  # noqa: E402
from edges.platform.pointer import PointerWatcher  # noqa: E402


def _fake_glib(source_id=7):
    glib = MagicMock()
    glib.timeout_add.return_value = source_id
    return glib


def _watcher(points, on_sample=None):
    samples = iter(points)
    callback = on_sample or MagicMock(return_value=True)
    return PointerWatcher(
        query=lambda: next(samples), on_sample=callback, interval_ms=16
    ), callback


class TestLifecycle:
    def test_start_registers_timer(self):
        # Given
        glib = _fake_glib()
        watcher, _ = _watcher([])
        # When
        with patch.object(timeout_mod, "GLib", glib):
            watcher.start()
        # Then
        assert glib.timeout_add.call_args.args[0] == 16
        assert watcher.running

    def test_start_twice_registers_once(self):
        glib = _fake_glib()
        watcher, _ = _watcher([])
        with patch.object(timeout_mod, "GLib", glib):
            watcher.start()
            watcher.start()
        assert glib.timeout_add.call_count == 1

    def test_context_manager_removes_timer(self):
        # Given
        glib = _fake_glib(source_id=9)
        watcher, _ = _watcher([])
        # When
        with patch.object(timeout_mod, "GLib", glib):
            with watcher:
                assert watcher.running
        # Then
        glib.source_remove.assert_called_once_with(9)
        assert not watcher.running

    def test_context_manager_removes_timer_on_error(self):
        glib = _fake_glib(source_id=9)
        watcher, _ = _watcher([])
        with patch.object(timeout_mod, "GLib", glib):
            try:
                with watcher:
                    raise RuntimeError("boom")
            except RuntimeError:
                pass
        glib.source_remove.assert_called_once_with(9)


class TestTick:
    def test_delivers_moves_in_order(self):
        # Given
        watcher, callback = _watcher([Point(1, 1), Point(2, 2), Point(0, 0)])
        # When
        for _ in range(3):
            assert watcher._tick() is True
        # Then
        assert [c.args[0] for c in callback.call_args_list] == [
            Point(1, 1),
            Point(2, 2),
            Point(0, 0),
        ]

    def test_unchanged_position_is_not_a_sample(self):
        # Given
        watcher, callback = _watcher([Point(5, 5), Point(5, 5), Point(6, 5)])
        # When
        for _ in range(3):
            watcher._tick()
        # Then
        assert callback.call_count == 2

    def test_callback_false_stops_watching(self):
        # Given a running watcher whose consumer gives up
        glib = _fake_glib(source_id=3)
        watcher, _ = _watcher([Point(0, 0)], on_sample=MagicMock(return_value=False))
        with patch.object(timeout_mod, "GLib", glib):
            watcher.start()
        # When
        keep = watcher._timer._fire(watcher._tick, ())
        # Then
        assert keep is False
        assert not watcher.running
