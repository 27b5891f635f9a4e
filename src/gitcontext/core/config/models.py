"""
Configuration Models

Pydantic models for type-safe configuration with validation, defaults and
field documentation.
"""

from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from gitcontext.core.exceptions import ErrorCode, config_error
from gitcontext.core.templates import PRESETS


SUPPORTED_SINKS = {'file', 'console'}


class OutputConfig(BaseModel):
    """Configuration for where rendered output goes."""

    path: Path = Field(
        default=Path("context.txt"),
        description="Output file, truncated at the start of every run"
    )
    sink: str = Field(
        default="file",
        description="Output sink: 'file' writes to path, 'console' prints to stdout"
    )

    model_config = ConfigDict(extra="forbid", validate_assignment=True)

    @field_validator('sink')
    @classmethod
    def validate_sink(cls, v):
        """Validate the sink name is supported."""
        if v.lower() not in SUPPORTED_SINKS:
            raise ValueError(f"Unsupported output sink: {v} (expected one of {', '.join(sorted(SUPPORTED_SINKS))})")
        return v.lower()


class AppConfig(BaseModel):
    """Root application configuration model."""

    version: str = Field(default="1.0", description="Configuration version")

    # Template
    template: Optional[str] = Field(
        default=None,
        description="Inline template text with #file_* placeholders"
    )
    template_file: Optional[Path] = Field(
        default=None,
        description="File whose contents are used as the template"
    )
    template_preset: Optional[str] = Field(
        default="default",
        description=f"Named template used when no template is given ({', '.join(PRESETS)})"
    )

    # Selection
    exclude_patterns: List[str] = Field(
        default_factory=list,
        description="Wildcard patterns of paths to skip (**, *, ?, literal .)"
    )

    # Reading and traversal
    encoding: str = Field(
        default="utf-8",
        description="Text encoding used to read file content"
    )
    decode_errors: str = Field(
        default="replace",
        description="Handling of bytes invalid in the encoding: 'replace' inserts U+FFFD, 'strict' skips the file"
    )
    sort_entries: bool = Field(
        default=True,
        description="Visit directory entries in name order for reproducible output"
    )
    follow_symlinks: bool = Field(
        default=False,
        description="Descend into symlinked directories"
    )

    output: OutputConfig = Field(default_factory=OutputConfig, description="Output configuration")

    # General Settings
    verbose: bool = Field(
        default=False,
        description="Enable verbose logging output"
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode with detailed logging"
    )

    model_config = ConfigDict(
        extra="forbid",
        validate_assignment=True,
    )

    @field_validator('template_preset')
    @classmethod
    def validate_template_preset(cls, v):
        """Validate the preset name exists."""
        if v is not None and v not in PRESETS:
            raise ValueError(f"Unknown template preset: {v} (available: {', '.join(PRESETS)})")
        return v

    @field_validator('exclude_patterns')
    @classmethod
    def validate_exclude_patterns(cls, v):
        """Strip whitespace and drop blank patterns."""
        return [pattern.strip() for pattern in v if pattern and pattern.strip()]

    @field_validator('encoding')
    @classmethod
    def validate_encoding(cls, v):
        """Validate the encoding is known to Python."""
        import codecs
        try:
            codecs.lookup(v)
        except LookupError:
            raise ValueError(f"Unknown text encoding: {v}")
        return v

    @field_validator('decode_errors')
    @classmethod
    def validate_decode_errors(cls, v):
        """Validate the codec error handler is registered."""
        import codecs
        try:
            codecs.lookup_error(v)
        except LookupError:
            raise ValueError(f"Unknown decode error handler: {v}")
        return v

    def resolve_template(self) -> str:
        """
        Get the effective template text.

        Precedence: inline template, template file, preset.

        Raises:
            ConfigurationError: If no template can be determined
        """
        if self.template:
            return self.template

        if self.template_file is not None:
            try:
                text = Path(self.template_file).read_text(encoding='utf-8')
            except OSError as e:
                raise config_error(
                    f"Cannot read template file {self.template_file}: {e}",
                    key="template_file",
                    config_value=str(self.template_file),
                    error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                    cause=e
                )
            if text:
                return text

        if self.template_preset:
            return PRESETS[self.template_preset]

        raise config_error(
            "No template configured",
            key="template",
            error_code=ErrorCode.CONFIG_MISSING_REQUIRED
        )
