"""
Tests for CLI Commands

Tests the process and config commands through typer's CliRunner.
"""

import json
import logging

import pytest
import yaml
from typer.testing import CliRunner

from gitcontext import __version__
from gitcontext.cli.main import app as main_app


@pytest.fixture(autouse=True)
def restore_logging():
    """setup_logging replaces root handlers; put the originals back afterwards."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.mark.cli
@pytest.mark.usefixtures("isolated_cwd", "clean_env")
class TestProcessCommand:
    """Test the process command."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_writes_default_output_file(self, sample_repo, isolated_cwd):
        """Test process writes context.txt by default."""
        result = self.runner.invoke(main_app, ["process", str(sample_repo), "-t", "#file_name"])
        assert result.exit_code == 0, result.output
        assert "Context saved to" in result.output
        lines = (isolated_cwd / "context.txt").read_text(encoding="utf-8").splitlines()
        assert "main.py" in lines
        assert "logo.png" not in lines

    def test_custom_output_and_excludes(self, sample_repo, tmp_path):
        """Test output path and exclusion options."""
        out = tmp_path / "out" / "ctx.txt"
        result = self.runner.invoke(main_app, [
            "process", str(sample_repo),
            "-o", str(out),
            "-t", "#file_name",
            "-e", "node_modules",
            "-e", "*.tmp",
        ])
        assert result.exit_code == 0, result.output
        assert out.read_text(encoding="utf-8") == ".gitignore\nMakefile\nREADME.md\nmain.py\nhelpers.py\n"

    def test_console_output(self, tmp_path):
        """Test process with the console sink."""
        root = tmp_path / "r"
        root.mkdir()
        (root / "a.txt").write_bytes(b"hello")
        (root / "bin.dat").write_bytes(b"\x00\x01")
        result = self.runner.invoke(main_app, [
            "process", str(root), "--console", "-t", "#file_name:#file_size:#file_content",
        ])
        assert result.exit_code == 0, result.output
        assert "a.txt:5:hello" in result.output
        assert "bin.dat" not in result.output
        assert "Processed 1 files" in result.output

    def test_decode_errors_option(self, tmp_path):
        """Test --decode-errors strict skips files with invalid bytes."""
        root = tmp_path / "r"
        root.mkdir()
        (root / "a.txt").write_bytes(b"caf\xe9")
        (root / "b.txt").write_bytes(b"ok")
        result = self.runner.invoke(main_app, [
            "process", str(root), "--console", "-t", "#file_name", "--decode-errors", "strict",
        ])
        assert result.exit_code == 0, result.output
        assert "b.txt" in result.output
        assert "Processed 1 files" in result.output

    def test_preset(self, sample_repo):
        """Test the preset option."""
        result = self.runner.invoke(main_app, [
            "process", str(sample_repo), "--console", "--preset", "markdown", "-e", "src",
        ])
        assert result.exit_code == 0, result.output
        assert "```md" in result.output

    def test_template_file(self, sample_repo, tmp_path):
        """Test the template file option."""
        template = tmp_path / "tpl.txt"
        template.write_text(">> #file_extension", encoding="utf-8")
        result = self.runner.invoke(main_app, [
            "process", str(sample_repo), "--console", "--template-file", str(template), "-e", "src",
        ])
        assert result.exit_code == 0, result.output
        assert ">> md" in result.output

    def test_config_file_is_used(self, sample_repo, tmp_path):
        """Test the config option."""
        config_file = tmp_path / "gc.yaml"
        config_file.write_text(yaml.safe_dump({
            "template": "[#file_name]",
            "exclude_patterns": ["src", "node_modules", "*.md"],
            "output": {"sink": "console"},
        }), encoding="utf-8")
        result = self.runner.invoke(main_app, ["process", str(sample_repo), "-c", str(config_file)])
        assert result.exit_code == 0, result.output
        assert "[Makefile]" in result.output
        assert "[README.md]" not in result.output

    def test_missing_root_is_fatal(self, tmp_path):
        """Test a missing root exits with status 1."""
        result = self.runner.invoke(main_app, ["process", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert "RootPathError" in result.output

    def test_missing_root_keeps_previous_output(self, tmp_path, isolated_cwd):
        """Test a failed run leaves the previous output alone."""
        previous = isolated_cwd / "context.txt"
        previous.write_text("previous", encoding="utf-8")
        result = self.runner.invoke(main_app, ["process", str(tmp_path / "missing")])
        assert result.exit_code == 1
        assert previous.read_text(encoding="utf-8") == "previous"

    def test_missing_config_file_is_fatal(self, sample_repo, tmp_path):
        """Test a missing config file exits with status 1."""
        result = self.runner.invoke(main_app, ["process", str(sample_repo), "-c", str(tmp_path / "none.yaml")])
        assert result.exit_code == 1
        assert "ConfigurationError" in result.output

    def test_unknown_preset_is_fatal(self, sample_repo):
        """Test an unknown preset exits with status 1."""
        result = self.runner.invoke(main_app, ["process", str(sample_repo), "--preset", "html"])
        assert result.exit_code == 1
        assert "ConfigurationError" in result.output

    def test_configuration_warnings_shown(self, sample_repo):
        """Test configuration warnings are printed."""
        result = self.runner.invoke(main_app, ["process", str(sample_repo), "--console", "-t", "static"])
        assert result.exit_code == 0, result.output
        assert "Configuration warnings" in result.output


@pytest.mark.cli
@pytest.mark.usefixtures("isolated_cwd", "clean_env")
class TestConfigCommands:
    """Test the config sub-commands."""

    def setup_method(self):
        self.runner = CliRunner()

    def test_init_writes_file(self, isolated_cwd):
        """Test config init writes a starter file."""
        result = self.runner.invoke(main_app, ["config", "init"])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load((isolated_cwd / "gitcontext.yaml").read_text(encoding="utf-8"))
        assert "node_modules" in data["exclude_patterns"]

    def test_init_profile(self, isolated_cwd):
        """Test config init with a profile."""
        result = self.runner.invoke(main_app, ["config", "init", "md.yaml", "--profile", "markdown"])
        assert result.exit_code == 0, result.output
        data = yaml.safe_load((isolated_cwd / "md.yaml").read_text(encoding="utf-8"))
        assert data["template_preset"] == "markdown"

    def test_init_unknown_profile(self):
        """Test config init rejects unknown profiles."""
        result = self.runner.invoke(main_app, ["config", "init", "x.yaml", "--profile", "fancy"])
        assert result.exit_code == 1
        assert "Unknown profile" in result.output

    def test_init_declined_overwrite(self, isolated_cwd):
        """Test config init keeps the file when overwrite is declined."""
        existing = isolated_cwd / "gitcontext.yaml"
        existing.write_text("template: keep\n", encoding="utf-8")
        result = self.runner.invoke(main_app, ["config", "init"], input="n\n")
        assert result.exit_code == 1
        assert existing.read_text(encoding="utf-8") == "template: keep\n"

    def test_init_force_overwrites(self, isolated_cwd):
        """Test config init --force overwrites."""
        existing = isolated_cwd / "gitcontext.yaml"
        existing.write_text("template: keep\n", encoding="utf-8")
        result = self.runner.invoke(main_app, ["config", "init", "--force"])
        assert result.exit_code == 0, result.output
        assert "template_preset" in existing.read_text(encoding="utf-8")

    def test_show_effective_config(self, isolated_cwd):
        """Test config show prints the merged config."""
        (isolated_cwd / "gitcontext.yaml").write_text("template: shown-template\n", encoding="utf-8")
        result = self.runner.invoke(main_app, ["config", "show"])
        assert result.exit_code == 0, result.output
        assert "shown-template" in result.output

    def test_schema_to_file(self, tmp_path):
        """Test config schema writes to a file."""
        out = tmp_path / "schema.json"
        result = self.runner.invoke(main_app, ["config", "schema", "-o", str(out)])
        assert result.exit_code == 0, result.output
        assert "exclude_patterns" in json.loads(out.read_text(encoding="utf-8"))["properties"]

    def test_schema_to_stdout(self):
        """Test config schema prints to stdout."""
        result = self.runner.invoke(main_app, ["config", "schema"])
        assert result.exit_code == 0, result.output
        assert "exclude_patterns" in result.output


@pytest.mark.cli
class TestMainApp:
    """Test the top-level application."""

    def test_version(self):
        """Test version option works."""
        result = CliRunner().invoke(main_app, ["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output
