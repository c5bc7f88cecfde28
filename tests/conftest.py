"""Shared test fixtures for vibecss tests."""

import logging
import sys

import pytest

import vibecss.log as log_mod


class _StdoutHandler(logging.Handler):
    """A handler that always writes to the *current* sys.stdout.

    Unlike StreamHandler(sys.stdout), this resolves sys.stdout at emit-time
    so it works with pytest's capsys fixture.
    """

    def emit(self, record):
        try:
            msg = self.format(record)
            sys.stdout.write(msg + "\n")
            sys.stdout.flush()
        except Exception:
            self.handleError(record)


@pytest.fixture(autouse=True)
def _setup_logging(monkeypatch):
    """Route all vibecss loggers to stdout so capsys can capture them."""
    # Keep cli.main() from swapping in its own handlers
    monkeypatch.setattr(log_mod, "_CONFIGURED", True)

    handler = _StdoutHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    handler.setLevel(logging.DEBUG)

    root_logger = logging.getLogger("vibecss")
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.INFO)
    root_logger.propagate = False

    yield

    root_logger.removeHandler(handler)


@pytest.fixture
def project(tmp_path):
    """A small Blazor-style project tree."""
    pages = tmp_path / "Pages"
    pages.mkdir()
    (pages / "Index.razor").write_text(
        '<div class="vibe-flex vibe-p-4 md:vibe-w-1/2 not-a-class">\n'
        '  <span class="hover:vibe-bg-primary vibe-mystery">Hi</span>\n'
        "</div>\n",
        encoding="utf-8",
    )
    (tmp_path / "Widget.cs").write_text(
        'public class Widget { public string CssClass = "vibe-text-red-500"; }\n',
        encoding="utf-8",
    )
    return tmp_path
