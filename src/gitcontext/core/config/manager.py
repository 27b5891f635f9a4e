"""
Configuration Manager

Handles hierarchical configuration loading, validation, and management
with support for CLI args → environment variables → config files → defaults.
"""

import json
import os
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import yaml
from pydantic import ValidationError

from gitcontext.core.config.models import AppConfig, OutputConfig
from gitcontext.core.exceptions import ConfigurationError, ErrorCode
from gitcontext.core.templates import TemplateRenderer


# Spring-style documents nest everything under this key
LEGACY_ROOT_KEY = "file-processor"

DEFAULT_EXCLUDE_PATTERNS = [
    ".git",
    ".idea",
    ".vscode",
    "node_modules",
    "__pycache__",
    "*.log",
    "*.pyc",
    "*.class",
    "*.lock",
]


class ConfigManager:
    """
    Manages application configuration with hierarchical loading and validation.

    Configuration sources in order of precedence:
    1. CLI arguments (highest priority)
    2. Environment variables
    3. Configuration files
    4. Default values (lowest priority)
    """

    def __init__(self, config_file: Optional[Union[str, Path]] = None):
        """
        Initialize configuration manager.

        Args:
            config_file: Optional path to configuration file
        """
        self.config_file = Path(config_file) if config_file else None
        self._config: Optional[AppConfig] = None
        self._config_paths = self._get_default_config_paths()

    def _get_default_config_paths(self) -> List[Path]:
        """Get default configuration file search paths."""
        search_paths = [
            Path.cwd() / "gitcontext.yaml",
            Path.cwd() / "gitcontext.yml",
            Path.cwd() / ".gitcontext.yaml",
            Path.cwd() / ".gitcontext.yml",
            Path.home() / ".config" / "gitcontext" / "config.yaml",
        ]

        xdg_config = os.environ.get('XDG_CONFIG_HOME')
        if xdg_config:
            search_paths.append(Path(xdg_config) / "gitcontext" / "config.yaml")

        return search_paths

    def load_config(
        self,
        cli_args: Optional[Dict[str, Any]] = None,
        env_prefix: str = "GITCONTEXT_"
    ) -> AppConfig:
        """
        Load and validate configuration from all sources.

        Args:
            cli_args: Dictionary of CLI arguments
            env_prefix: Prefix for environment variables

        Returns:
            Validated AppConfig instance

        Raises:
            ConfigurationError: If configuration is invalid
        """
        config_data: Dict[str, Any] = {}

        file_config = self._load_config_file()
        if file_config:
            config_data.update(file_config)

        env_config = self._load_env_config(env_prefix)
        if env_config:
            config_data = self._deep_merge(config_data, env_config)

        if cli_args:
            cli_config = self._normalize_cli_args(cli_args)
            # --exclude adds to the configured patterns instead of replacing them
            extra_excludes = cli_config.pop('extra_exclude_patterns', None)
            config_data = self._deep_merge(config_data, cli_config)
            if extra_excludes:
                config_data['exclude_patterns'] = list(config_data.get('exclude_patterns') or []) + list(extra_excludes)

        try:
            self._config = AppConfig(**config_data)
            return self._config
        except ValidationError as e:
            raise ConfigurationError(
                f"Configuration validation failed: {e}",
                error_code=ErrorCode.CONFIG_INVALID_VALUE,
                cause=e
            )

    def _load_config_file(self) -> Optional[Dict[str, Any]]:
        """Load configuration from file."""
        config_file = self.config_file

        if config_file is not None and not config_file.exists():
            raise ConfigurationError(
                f"Configuration file not found: {config_file}",
                error_code=ErrorCode.CONFIG_FILE_NOT_FOUND,
                config_key="config",
                config_value=str(config_file)
            )

        if not config_file:
            for path in self._config_paths:
                if path.exists() and path.is_file():
                    config_file = path
                    break

        if not config_file:
            return None

        try:
            with open(config_file, 'r', encoding='utf-8') as f:
                if config_file.suffix.lower() in {'.yaml', '.yml'}:
                    data = yaml.safe_load(f) or {}
                elif config_file.suffix.lower() == '.json':
                    data = json.load(f)
                else:
                    # Try YAML first, then JSON
                    content = f.read()
                    try:
                        data = yaml.safe_load(content) or {}
                    except yaml.YAMLError:
                        data = json.loads(content)
        except (IOError, yaml.YAMLError, json.JSONDecodeError) as e:
            raise ConfigurationError(
                f"Failed to load config file {config_file}: {e}",
                cause=e
            )

        if not isinstance(data, dict):
            raise ConfigurationError(f"Config file {config_file} must contain a mapping")

        return self._normalize_file_config(data)

    def _normalize_file_config(self, data: Dict[str, Any]) -> Dict[str, Any]:
        """
        Accept Spring-style documents.

        ``file-processor:`` wrappers are unwrapped and kebab-case keys become
        snake_case, so ``exclude-patterns`` and ``output.path`` both load.
        """
        if LEGACY_ROOT_KEY in data and isinstance(data[LEGACY_ROOT_KEY], dict):
            data = data[LEGACY_ROOT_KEY]

        def snake(value: Any) -> Any:
            if isinstance(value, dict):
                return {str(k).replace('-', '_'): snake(v) for k, v in value.items()}
            return value

        return snake(data)

    def _load_env_config(self, prefix: str) -> Dict[str, Any]:
        """Load configuration from environment variables."""
        env_config: Dict[str, Any] = {}

        env_mappings = {
            f"{prefix}TEMPLATE": ("template", None, str),
            f"{prefix}TEMPLATE_FILE": ("template_file", None, str),
            f"{prefix}TEMPLATE_PRESET": ("template_preset", None, str),
            f"{prefix}EXCLUDE_PATTERNS": ("exclude_patterns", None, self._parse_list),
            f"{prefix}ENCODING": ("encoding", None, str),
            f"{prefix}DECODE_ERRORS": ("decode_errors", None, str),
            f"{prefix}SORT_ENTRIES": ("sort_entries", None, self._parse_bool),
            f"{prefix}FOLLOW_SYMLINKS": ("follow_symlinks", None, self._parse_bool),
            f"{prefix}OUTPUT_PATH": ("output", "path", str),
            f"{prefix}OUTPUT_SINK": ("output", "sink", str),
            f"{prefix}VERBOSE": ("verbose", None, self._parse_bool),
            f"{prefix}DEBUG": ("debug", None, self._parse_bool),
        }

        for env_var, (section, key, parser) in env_mappings.items():
            value = os.environ.get(env_var)
            if value is not None:
                try:
                    parsed_value = parser(value)
                except (ValueError, TypeError) as e:
                    raise ConfigurationError(
                        f"Invalid value for {env_var}: {value} ({e})",
                        error_code=ErrorCode.CONFIG_INVALID_VALUE,
                        config_key=env_var,
                        config_value=value
                    )
                if key is None:
                    env_config[section] = parsed_value
                else:
                    env_config.setdefault(section, {})[key] = parsed_value

        return env_config

    def _normalize_cli_args(self, cli_args: Dict[str, Any]) -> Dict[str, Any]:
        """Normalize CLI arguments to configuration structure."""
        normalized: Dict[str, Any] = {}

        cli_mappings = {
            'verbose': 'verbose',
            'debug': 'debug',
            'template': 'template',
            'template_file': 'template_file',
            'preset': 'template_preset',
            'encoding': 'encoding',
            'decode_errors': 'decode_errors',
            'sort': 'sort_entries',
            'follow_symlinks': 'follow_symlinks',
            'exclude': 'extra_exclude_patterns',
            'output': ('output', 'path'),
            'sink': ('output', 'sink'),
        }

        for cli_key, value in cli_args.items():
            if value is None:
                continue

            if cli_key == 'console':
                if value:
                    normalized.setdefault('output', {})['sink'] = 'console'
                continue

            mapping = cli_mappings.get(cli_key)
            if mapping:
                if isinstance(mapping, tuple):
                    section, key = mapping
                    normalized.setdefault(section, {})[key] = value
                else:
                    normalized[mapping] = value

        return normalized

    def _deep_merge(self, base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    @staticmethod
    def _parse_bool(value: Union[str, bool]) -> bool:
        """Parse boolean value from string."""
        if isinstance(value, bool):
            return value
        if isinstance(value, str):
            return value.lower() in {'true', '1', 'yes', 'on', 'enabled'}
        return bool(value)

    @staticmethod
    def _parse_list(value: Union[str, List[str]]) -> List[str]:
        """Parse list value from string."""
        if isinstance(value, list):
            return value
        if isinstance(value, str):
            return [item.strip() for item in value.split(',') if item.strip()]
        return []

    def validate_config(self, config: Optional[AppConfig] = None) -> List[str]:
        """
        Validate configuration and return list of warnings.

        Args:
            config: Configuration to validate (uses loaded config if None)

        Returns:
            List of validation warnings
        """
        if config is None:
            config = self._config

        if config is None:
            return ["No configuration loaded"]

        warnings = []

        try:
            template = config.resolve_template()
        except ConfigurationError as e:
            warnings.append(e.message)
        else:
            warnings.extend(TemplateRenderer().validate_template(template))

        if config.template and config.template_file:
            warnings.append("Both template and template_file are set; the inline template wins")

        if config.output.sink == 'file':
            parent = config.output.path.parent
            if parent.exists() and not os.access(parent, os.W_OK):
                warnings.append(f"Output directory is not writable: {parent}")

        return warnings

    def generate_schema(self, output_file: Optional[Path] = None) -> Dict[str, Any]:
        """
        Generate JSON schema for configuration.

        Args:
            output_file: Optional file to write schema to

        Returns:
            JSON schema dictionary
        """
        schema = AppConfig.model_json_schema()

        if output_file:
            with open(output_file, 'w', encoding='utf-8') as f:
                json.dump(schema, f, indent=2)

        return schema

    def create_example_config(self, output_file: Path, profile: str = "default") -> None:
        """
        Create example configuration file.

        Args:
            output_file: Path to write configuration file
            profile: Configuration profile (default, markdown, minimal)
        """
        if profile == "markdown":
            config = AppConfig(
                template_preset="markdown",
                exclude_patterns=DEFAULT_EXCLUDE_PATTERNS,
                output=OutputConfig(path=Path("context.md"))
            )
        elif profile == "minimal":
            config = AppConfig(template_preset="plain")
        else:
            config = AppConfig(exclude_patterns=DEFAULT_EXCLUDE_PATTERNS)

        # mode='json' serializes Path objects as strings
        config_dict = config.model_dump(mode='json', exclude_none=True)

        with open(output_file, 'w', encoding='utf-8') as f:
            yaml.safe_dump(config_dict, f, default_flow_style=False, indent=2, sort_keys=False)

    @property
    def config(self) -> Optional[AppConfig]:
        """Get the loaded configuration."""
        return self._config
