"""Tests for vibecss watch mode."""

from unittest import mock

import pytest
from watchdog.events import DirModifiedEvent, FileModifiedEvent, FileMovedEvent

import vibecss.watch as watch_mod
from vibecss.scanner_types import GenerationOptions, GenerationResult
from vibecss.watch import StylesheetWatchHandler, report_pass, run_watch_mode

NO_BASE = GenerationOptions(include_base=False)


class FakeClock:
    def __init__(self):
        self.now = 0.0

    def __call__(self):
        return self.now


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def handler(project, clock):
    return StylesheetWatchHandler(project, project / "wwwroot" / "css" / "vibe.css", NO_BASE, 0.5, clock)


# ============================================
# should_handle
# ============================================

class TestShouldHandle:
    """Which paths trigger a pass."""

    def test_scanned_source(self, handler, project):
        assert handler.should_handle(project / "Pages" / "Index.razor")
        assert handler.should_handle(str(project / "Widget.cs"))

    def test_other_extension(self, handler, project):
        assert not handler.should_handle(project / "notes.txt")

    def test_output_file_ignored(self, handler, project):
        """The generated stylesheet never retriggers."""
        assert not handler.should_handle(project / "wwwroot" / "css" / "vibe.css")

    def test_output_matching_pattern_still_ignored(self, project, clock):
        watcher = StylesheetWatchHandler(project, project / "out.html", NO_BASE, 0.5, clock)
        assert not watcher.should_handle(project / "out.html")

    def test_excluded_directory(self, handler, project):
        assert not handler.should_handle(project / "obj" / "Debug" / "Page.razor")
        assert not handler.should_handle(project / "node_modules" / "x" / "index.html")


# ============================================
# on_any_event
# ============================================

class TestEvents:
    """Event filtering before a pass runs."""

    def test_modified_source_runs_pass(self, handler, project):
        with mock.patch.object(handler, "run_pass") as run_pass:
            handler.on_any_event(FileModifiedEvent(str(project / "Pages" / "Index.razor")))
        run_pass.assert_called_once_with()

    def test_directory_event_ignored(self, handler, project):
        with mock.patch.object(handler, "run_pass") as run_pass:
            handler.on_any_event(DirModifiedEvent(str(project / "Pages")))
        run_pass.assert_not_called()

    def test_unrelated_event_type_ignored(self, handler, project):
        event = mock.Mock(is_directory=False, event_type="closed", src_path=str(project / "Widget.cs"))
        with mock.patch.object(handler, "run_pass") as run_pass:
            handler.on_any_event(event)
        run_pass.assert_not_called()

    def test_output_write_ignored(self, handler, project):
        with mock.patch.object(handler, "run_pass") as run_pass:
            handler.on_any_event(FileModifiedEvent(str(project / "wwwroot" / "css" / "vibe.css")))
        run_pass.assert_not_called()

    def test_move_into_scanned_name(self, handler, project):
        """A temp file renamed onto a source file (editor save) counts."""
        event = FileMovedEvent(str(project / "Pages" / ".Index.razor.swp"), str(project / "Pages" / "Index.razor"))
        with mock.patch.object(handler, "run_pass") as run_pass:
            handler.on_any_event(event)
        run_pass.assert_called_once_with()


# ============================================
# run_pass
# ============================================

class TestRunPass:
    """Debounce and reentrancy."""

    def test_pass_writes_output(self, handler, project):
        result = handler.run_pass()
        assert result.success
        assert handler.last_result is result
        assert (project / "wwwroot" / "css" / "vibe.css").exists()

    def test_debounce_window(self, handler, clock):
        assert handler.run_pass() is not None
        clock.now = 0.2
        assert handler.run_pass() is None
        clock.now = 0.6
        assert handler.run_pass() is not None

    def test_discarded_trigger_does_not_extend_window(self, handler, clock):
        handler.run_pass()
        clock.now = 0.4
        handler.run_pass()
        clock.now = 0.55
        assert handler.run_pass() is not None

    def test_force_bypasses_debounce(self, handler, clock):
        handler.run_pass()
        clock.now = 0.1
        assert handler.run_pass(force=True) is not None

    def test_discarded_while_running(self, handler):
        handler._running = True
        assert handler.run_pass(force=True) is None

    def test_running_flag_cleared_after_failure(self, handler):
        with mock.patch.object(watch_mod, "generate_stylesheet", side_effect=RuntimeError("boom")):
            with pytest.raises(RuntimeError):
                handler.run_pass()
        assert handler._running is False

    def test_each_pass_rescans(self, handler, project, clock):
        handler.run_pass()
        (project / "New.razor").write_text('<div class="vibe-grid">', encoding="utf-8")
        clock.now = 1.0
        handler.run_pass()
        css = (project / "wwwroot" / "css" / "vibe.css").read_text(encoding="utf-8")
        assert ".vibe-grid { display: grid; }" in css


# ============================================
# Reporting and the watch loop
# ============================================

class TestReportPass:
    """One-line pass summaries."""

    def test_success(self, capsys):
        report_pass(GenerationResult(
            success=True, total_classes_found=3, classes_generated=2,
            output_path="out.css", css_size=120, unknown_classes={"vibe-x"},
        ))
        out = capsys.readouterr().out
        assert "out.css (2/3 classes, 120 bytes)" in out
        assert "1 unknown class(es)" in out

    def test_failure(self, capsys):
        report_pass(GenerationResult(success=False, error="disk full"))
        assert "Generation failed: disk full" in capsys.readouterr().out


class TestRunWatchMode:
    """run_watch_mode with a mocked observer."""

    def test_initial_pass_then_stop_on_interrupt(self, project, capsys):
        output = project / "out.css"
        with mock.patch.object(watch_mod, "Observer") as observer_cls, \
                mock.patch.object(watch_mod.time, "sleep", side_effect=KeyboardInterrupt):
            assert run_watch_mode(project, output, NO_BASE, 0.25) is True

        observer = observer_cls.return_value
        handler, path = observer.schedule.call_args[0]
        assert isinstance(handler, StylesheetWatchHandler)
        assert handler.debounce_seconds == 0.25
        assert path == str(project.resolve())
        assert observer.schedule.call_args[1] == {"recursive": True}
        observer.start.assert_called_once()
        observer.stop.assert_called_once()
        observer.join.assert_called_once()

        assert output.exists()
        out = capsys.readouterr().out
        assert "Watching" in out
        assert "Watch mode stopped" in out

    def test_initial_failure_aborts(self, project):
        blocker = project / "blocker"
        blocker.write_text("x", encoding="utf-8")
        with mock.patch.object(watch_mod, "Observer") as observer_cls:
            assert run_watch_mode(project, blocker / "out.css", NO_BASE) is False
        observer_cls.assert_not_called()
