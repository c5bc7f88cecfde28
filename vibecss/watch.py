"""
vibecss watch mode - regenerate the stylesheet on save.

Monitors source files under the project and reruns a generate pass when one
changes. Events are discarded while a pass is running or within the debounce
window of the last pass; the output file itself never triggers a pass.
"""

import logging
import threading
import time
from pathlib import Path

from watchdog.events import FileSystemEventHandler
from watchdog.observers import Observer

from .runner import generate_stylesheet
from .scanner_types import GREEN, NC, RED, YELLOW, GenerationOptions, GenerationResult
from .scanner_utils import is_excluded, matches_pattern

logger = logging.getLogger(__name__)

DEFAULT_DEBOUNCE_SECONDS = 0.5

# Event types that can change the set of classes in use
TRIGGER_EVENTS = frozenset({"created", "modified", "moved", "deleted"})


class StylesheetWatchHandler(FileSystemEventHandler):
    """Handle file system events for scanned source files."""

    def __init__(
        self,
        root: str | Path,
        output_path: str | Path,
        options: GenerationOptions | None = None,
        debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
        clock=time.monotonic,
    ):
        self.root = Path(root).resolve()
        self.output_path = Path(output_path).resolve()
        self.options = options or GenerationOptions()
        self.debounce_seconds = debounce_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._running = False
        self._last_start: float | None = None
        self.last_result: GenerationResult | None = None

    def should_handle(self, filepath: str | Path) -> bool:
        """Check if a changed path is a scanned source file."""
        path = Path(filepath).resolve()
        if path == self.output_path:
            return False
        if is_excluded(path, self.root, set(self.options.exclude_dirs)):
            return False
        return matches_pattern(path, self.options.scan_patterns)

    def on_any_event(self, event):
        """Handle file system events."""
        if event.is_directory or event.event_type not in TRIGGER_EVENTS:
            return

        paths = [event.src_path]
        dest_path = getattr(event, "dest_path", "")
        if dest_path:
            paths.append(dest_path)
        if not any(self.should_handle(p) for p in paths):
            return

        logger.debug("Change detected: %s", event.src_path)
        self.run_pass()

    def run_pass(self, force: bool = False) -> GenerationResult | None:
        """Run one generate pass unless one is running or debounced.

        Returns the result, or None when the trigger was discarded.
        """
        with self._lock:
            now = self._clock()
            if self._running:
                return None
            if not force and self._last_start is not None and now - self._last_start < self.debounce_seconds:
                return None
            self._running = True
            self._last_start = now

        try:
            result = generate_stylesheet(self.root, self.output_path, self.options)
        finally:
            with self._lock:
                self._running = False

        self.last_result = result
        report_pass(result)
        return result


def report_pass(result: GenerationResult) -> None:
    """Log a one-line summary of a pass."""
    if not result.success:
        logger.info(f"{RED}✗ Generation failed: {result.error}{NC}")
        return

    logger.info(
        f"{GREEN}✓{NC} {result.output_path} "
        f"({result.classes_generated}/{result.total_classes_found} classes, {result.css_size} bytes)"
    )
    if result.unknown_classes:
        logger.info(f"  {YELLOW}{len(result.unknown_classes)} unknown class(es){NC}")


def run_watch_mode(
    root: str | Path,
    output_path: str | Path,
    options: GenerationOptions | None = None,
    debounce_seconds: float = DEFAULT_DEBOUNCE_SECONDS,
) -> bool:
    """Generate once, then regenerate on every relevant change until Ctrl+C."""
    handler = StylesheetWatchHandler(root, output_path, options, debounce_seconds)

    logger.info(f"Watching {handler.root} for changes...")
    logger.info("Press Ctrl+C to stop")

    initial = handler.run_pass(force=True)
    if initial is not None and not initial.success:
        return False

    observer = Observer()
    observer.schedule(handler, str(handler.root), recursive=True)
    observer.start()

    try:
        while True:
            time.sleep(1)
    except KeyboardInterrupt:
        logger.info(f"{YELLOW}Stopping watch mode...{NC}")
        observer.stop()

    observer.join()
    logger.info(f"{GREEN}Watch mode stopped{NC}")
    return True
