"""
Tests for Configuration Models

Tests pydantic validation and template resolution.
"""

from pathlib import Path

import pytest
from pydantic import ValidationError

from gitcontext.core.config.models import AppConfig, OutputConfig
from gitcontext.core.exceptions import ConfigurationError, ErrorCode
from gitcontext.core.templates import PRESETS


class TestOutputConfig:
    """Test output sink settings."""

    def test_defaults(self):
        """Test output defaults."""
        output = OutputConfig()
        assert output.path == Path("context.txt")
        assert output.sink == "file"

    def test_sink_is_normalised(self):
        """Test sink names are lower-cased."""
        assert OutputConfig(sink="CONSOLE").sink == "console"

    def test_unknown_sink_rejected(self):
        """Test unknown sinks fail validation."""
        with pytest.raises(ValidationError):
            OutputConfig(sink="database")

    def test_extra_fields_forbidden(self):
        """Test unknown output keys are rejected."""
        with pytest.raises(ValidationError):
            OutputConfig(format="json")


class TestAppConfig:
    """Test root configuration validation."""

    def test_defaults(self):
        """Test application defaults."""
        config = AppConfig()
        assert config.template is None
        assert config.template_preset == "default"
        assert config.exclude_patterns == []
        assert config.encoding == "utf-8"
        assert config.decode_errors == "replace"
        assert config.sort_entries is True
        assert config.follow_symlinks is False

    def test_blank_patterns_dropped(self):
        """Test blank exclusion patterns are dropped."""
        config = AppConfig(exclude_patterns=[" *.log ", "", "   ", "node_modules"])
        assert config.exclude_patterns == ["*.log", "node_modules"]

    def test_unknown_preset_rejected(self):
        """Test unknown template presets fail validation."""
        with pytest.raises(ValidationError):
            AppConfig(template_preset="html")

    def test_unknown_encoding_rejected(self):
        """Test unknown encodings fail validation."""
        with pytest.raises(ValidationError):
            AppConfig(encoding="not-a-codec")

    def test_unknown_decode_error_handler_rejected(self):
        """Test unknown decode error handlers fail validation."""
        with pytest.raises(ValidationError):
            AppConfig(decode_errors="not-a-handler")

    def test_assignment_is_validated(self):
        """Test assignments are validated."""
        config = AppConfig()
        with pytest.raises(ValidationError):
            config.encoding = "not-a-codec"

    def test_unknown_key_rejected(self):
        """Test unknown top-level keys are rejected."""
        with pytest.raises(ValidationError):
            AppConfig(excludes=["*.log"])


class TestResolveTemplate:
    """Test template precedence: inline, file, preset."""

    def test_inline_template_wins(self, tmp_path):
        """Test an inline template takes precedence."""
        template_file = tmp_path / "t.txt"
        template_file.write_text("#file_path", encoding="utf-8")
        config = AppConfig(template="#file_name", template_file=template_file, template_preset="plain")
        assert config.resolve_template() == "#file_name"

    def test_template_file(self, tmp_path):
        """Test the template file contents are used."""
        template_file = tmp_path / "t.txt"
        template_file.write_text("== #file_path ==\n", encoding="utf-8")
        config = AppConfig(template_file=template_file)
        assert config.resolve_template() == "== #file_path ==\n"

    def test_unreadable_template_file(self, tmp_path):
        """Test a missing template file is a configuration error."""
        config = AppConfig(template_file=tmp_path / "missing.txt")
        with pytest.raises(ConfigurationError) as exc_info:
            config.resolve_template()
        assert exc_info.value.error_code == ErrorCode.CONFIG_FILE_NOT_FOUND
        assert exc_info.value.context.user_context["config_key"] == "template_file"

    def test_preset(self):
        """Test a named preset is used."""
        assert AppConfig(template_preset="markdown").resolve_template() == PRESETS["markdown"]

    def test_default_preset(self):
        """Test the default preset applies when nothing is set."""
        assert AppConfig().resolve_template() == PRESETS["default"]

    def test_nothing_configured(self):
        """Test a missing template is fatal."""
        with pytest.raises(ConfigurationError) as exc_info:
            AppConfig(template_preset=None).resolve_template()
        assert exc_info.value.error_code == ErrorCode.CONFIG_MISSING_REQUIRED
        assert exc_info.value.context.user_context["config_key"] == "template"
        assert exc_info.value.suggestions[0].command == "gitcontext config init"
