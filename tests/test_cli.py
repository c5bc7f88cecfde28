"""Tests for vibecss.cli module.

Tests the scan, generate, init and validate commands end to end through main().
"""

import logging
from pathlib import Path
from unittest.mock import patch

import pytest

from vibecss import __version__
from vibecss.cli import format_size, init_config, main


@pytest.fixture(autouse=True)
def isolated_cwd(tmp_path, monkeypatch):
    """Run each test from an empty directory with no user config."""
    workdir = tmp_path / "cwd"
    workdir.mkdir()
    monkeypatch.chdir(workdir)
    monkeypatch.setattr(Path, "home", lambda: tmp_path / "home")
    return workdir


def run(*argv) -> int:
    with pytest.raises(SystemExit) as exc_info:
        main(list(argv))
    return exc_info.value.code


# ============================================
# scan
# ============================================


class TestScan:
    """vibecss scan."""

    def test_reports_counts(self, project, capsys):
        assert run("scan", str(project)) == 0
        out = capsys.readouterr().out
        assert "Total classes found: 6" in out
        assert "vibe-mystery" in out
        assert "vibe-flex" in out

    def test_writes_nothing(self, project):
        run("scan", str(project))
        assert not (project / "wwwroot").exists()

    def test_missing_directory(self, tmp_path, capsys):
        assert run("scan", str(tmp_path / "nowhere")) == 1
        assert "Directory not found" in capsys.readouterr().out

    def test_prefix_override(self, project, capsys):
        assert run("scan", str(project), "--prefix", "ui") == 0
        assert "Total classes found: 0" in capsys.readouterr().out

    def test_patterns(self, project, capsys):
        assert run("scan", str(project), "--patterns", "*.cs") == 0
        assert "Total classes found: 1" in capsys.readouterr().out

    def test_verbose_enables_debug(self, project):
        run("scan", str(project), "-v")
        assert logging.getLogger("vibecss").level == logging.DEBUG


# ============================================
# generate
# ============================================


class TestGenerate:
    """vibecss generate."""

    def test_default_output(self, project, capsys):
        assert run("generate", str(project)) == 0
        output = project / "wwwroot" / "css" / "vibe.css"
        assert output.exists()
        out = capsys.readouterr().out
        assert "CSS rules generated: 5" in out
        assert "1 unknown classes were skipped" in out
        assert "CSS generated successfully" in out

    def test_explicit_output(self, project, tmp_path):
        output = tmp_path / "site.css"
        assert run("generate", str(project), "-o", str(output)) == 0
        assert ".vibe-flex { display: flex; }" in output.read_text(encoding="utf-8")

    def test_with_base_false(self, project, tmp_path):
        output = tmp_path / "site.css"
        run("generate", str(project), "-o", str(output), "--with-base", "false")
        assert output.read_text(encoding="utf-8").startswith(".hover\\:vibe-bg-primary:hover")

    def test_with_base_flag(self, project, tmp_path):
        output = tmp_path / "site.css"
        run("generate", str(project), "-o", str(output), "--with-base")
        assert output.read_text(encoding="utf-8").startswith("/* vibecss base")

    def test_bad_with_base_value(self, project):
        assert run("generate", str(project), "--with-base", "maybe") == 2

    def test_config_output_is_relative_to_project(self, project, isolated_cwd):
        (isolated_cwd / "vibecss.yaml").write_text(
            'version: "1.0"\noutput: out/site.css\ninclude_base: false\n', encoding="utf-8"
        )
        assert run("generate", str(project)) == 0
        assert (project / "out" / "site.css").read_text(encoding="utf-8").startswith(".hover")

    def test_explicit_config(self, project, tmp_path):
        config = tmp_path / "custom.yaml"
        config.write_text('version: "1.0"\nprefix: ui\n', encoding="utf-8")
        output = tmp_path / "site.css"
        assert run("generate", str(project), "-c", str(config), "-o", str(output), "--with-base=false") == 0
        assert output.read_text(encoding="utf-8") == ""

    def test_invalid_config(self, project, isolated_cwd, capsys):
        (isolated_cwd / "vibecss.yaml").write_text('version: "1.0"\nprefix: 3\n', encoding="utf-8")
        assert run("generate", str(project)) == 1
        out = capsys.readouterr().out
        assert "Invalid config" in out
        assert "'prefix' must be a string" in out

    def test_output_failure(self, project, capsys):
        blocker = project / "blocker"
        blocker.write_text("x", encoding="utf-8")
        assert run("generate", str(project), "-o", str(blocker / "out.css")) == 1
        assert "Error:" in capsys.readouterr().out

    def test_watch_delegates(self, project, tmp_path):
        output = tmp_path / "site.css"
        with patch("vibecss.watch.run_watch_mode", return_value=True) as watch:
            assert run("generate", str(project), "-o", str(output), "--watch") == 0
        args = watch.call_args[0]
        assert args[0] == project
        assert args[1] == output
        assert args[3] == 0.5

    def test_watch_failure_exit_code(self, project):
        with patch("vibecss.watch.run_watch_mode", return_value=False):
            assert run("generate", str(project), "-w") == 1


# ============================================
# init / validate
# ============================================


class TestInit:
    """vibecss init."""

    def test_creates_config(self, isolated_cwd, capsys):
        assert run("init") == 0
        assert (isolated_cwd / "vibecss.yaml").exists()
        assert "Next steps" in capsys.readouterr().out

    def test_refuses_to_overwrite(self, isolated_cwd, capsys):
        (isolated_cwd / "vibecss.yaml").write_text("keep: me\n", encoding="utf-8")
        assert run("init") == 1
        assert "already exists" in capsys.readouterr().out
        assert (isolated_cwd / "vibecss.yaml").read_text(encoding="utf-8") == "keep: me\n"

    def test_custom_target(self, tmp_path):
        target = tmp_path / "vibecss.yaml"
        assert init_config(target) is True
        assert target.exists()

    def test_missing_default(self, tmp_path, capsys):
        with patch("vibecss.cli.get_default_config_path", return_value=tmp_path / "gone.yaml"):
            assert init_config(tmp_path / "vibecss.yaml") is False
        assert "Default config not found" in capsys.readouterr().out


class TestValidate:
    """vibecss validate."""

    def test_no_config(self, capsys):
        assert run("validate") == 1
        assert "No vibecss.yaml found" in capsys.readouterr().out

    def test_generated_config_is_valid(self, capsys):
        run("init")
        assert run("validate") == 0
        assert "is valid" in capsys.readouterr().out

    def test_errors_listed(self, isolated_cwd, capsys):
        (isolated_cwd / "vibecss.yaml").write_text("prefix: vibe\ncolours: {}\n", encoding="utf-8")
        assert run("validate") == 1
        out = capsys.readouterr().out
        assert "Missing 'version' field" in out
        assert "Unknown key: 'colours'" in out

    def test_malformed_yaml(self, tmp_path, capsys):
        config = tmp_path / "bad.yaml"
        config.write_text("prefix: [\n", encoding="utf-8")
        assert run("validate", "--config", str(config)) == 1
        assert "Invalid YAML" in capsys.readouterr().out

    def test_missing_explicit_config(self, tmp_path, capsys):
        assert run("validate", "-c", str(tmp_path / "nope.yaml")) == 1
        assert "Config not found" in capsys.readouterr().out


# ============================================
# Misc
# ============================================


class TestMisc:
    """Version flag and helpers."""

    def test_version(self, capsys):
        assert run("--version") == 0
        assert f"vibecss {__version__}" in capsys.readouterr().out

    def test_command_required(self):
        assert run() == 2

    @pytest.mark.parametrize("size, expected", [
        (0, "0 B"),
        (512, "512 B"),
        (1536, "1.5 KB"),
        (2 * 1024 * 1024, "2.0 MB"),
    ])
    def test_format_size(self, size, expected):
        assert format_size(size) == expected
