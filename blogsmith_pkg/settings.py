#!/usr/bin/env python3
"""
Settings loader for the Blogsmith site builder.
Supports configuration from blogsmith.yml, blogsmith.yaml, or blogsmith.json files.
"""

import os
import glob
import json
import yaml
from dataclasses import dataclass
from typing import Dict, Any, Optional

from .errors import ConfigError
from .posts import SORT_CHOICES


@dataclass(frozen=True)
class BuildConfig:
    """Resolved, absolute paths and options for one build."""
    posts_dir: str
    output_dir: str
    assets_dir: str
    templates_dir: Optional[str] = None
    sort_by: str = 'date'
    minify: bool = True
    ignore_asset_errors: bool = False

    @property
    def posts_pattern(self) -> str:
        return os.path.join(glob.escape(self.posts_dir), '*.md')


class BlogsmithSettings:
    """Load and manage Blogsmith configuration settings."""

    # Default configuration
    DEFAULT_SETTINGS = {
        'posts': 'posts',
        'output': 'gen',
        'assets': 'assets',
        'templates': None,
        'sort_by': 'date',
        'minify': True,
        'ignore_asset_errors': False,
        'log_level': 'INFO',
        'log_dir': None
    }

    # Config file names to look for (in order of preference)
    CONFIG_FILES = ['blogsmith.yml', 'blogsmith.yaml', 'blogsmith.json']

    def __init__(self, config_dir: str = None):
        """
        Initialize settings loader.

        Args:
            config_dir: Directory to look for config files. Defaults to current directory.
        """
        self.config_dir = config_dir or os.getcwd()
        self.settings = self.DEFAULT_SETTINGS.copy()
        self.config_file_path = None

    def load_settings(self) -> Dict[str, Any]:
        """
        Load settings from configuration file if it exists.

        Returns:
            Dictionary of configuration settings
        """
        config_file = self._find_config_file()

        if config_file:
            self.config_file_path = config_file
            loaded_settings = self._load_config_file(config_file)
            if not isinstance(loaded_settings, dict):
                raise ConfigError(f"Configuration file {config_file} must contain a mapping")
            unknown = set(loaded_settings) - set(self.DEFAULT_SETTINGS)
            if unknown:
                raise ConfigError(f"Unknown settings in {config_file}: {', '.join(sorted(unknown))}")
            self.settings.update(loaded_settings)

        return self.settings.copy()

    def _find_config_file(self) -> Optional[str]:
        """Find the first available configuration file."""
        for filename in self.CONFIG_FILES:
            config_path = os.path.join(self.config_dir, filename)
            if os.path.exists(config_path):
                return config_path
        return None

    def _load_config_file(self, config_path: str) -> Dict[str, Any]:
        file_ext = os.path.splitext(config_path)[1].lower()
        try:
            with open(config_path, 'r', encoding='utf-8') as f:
                if file_ext in ['.yml', '.yaml']:
                    return yaml.safe_load(f) or {}
                elif file_ext == '.json':
                    return json.load(f) or {}
                else:
                    raise ConfigError(f"Unsupported config file format: {file_ext}")
        except yaml.YAMLError as e:
            raise ConfigError(f"Invalid YAML in configuration file {config_path}: {e}") from e
        except json.JSONDecodeError as e:
            raise ConfigError(f"Invalid JSON in configuration file {config_path}: {e}") from e
        except OSError as e:
            raise ConfigError(f"Error reading configuration file {config_path}: {e}") from e

    def create_sample_config(self, file_format: str = 'yml') -> str:
        """
        Create a sample configuration file.

        Args:
            file_format: Format for config file ('yml', 'yaml', or 'json')

        Returns:
            Path to created sample config file
        """
        filename = f'blogsmith.{file_format}'
        config_path = os.path.join(self.config_dir, filename)

        try:
            with open(config_path, 'w', encoding='utf-8') as f:
                if file_format in ['yml', 'yaml']:
                    f.write("# Blogsmith Configuration File\n\n")
                    f.write("# Source and output directories\n")
                    f.write("posts: posts\n")
                    f.write("assets: assets\n")
                    f.write("output: gen\n")
                    f.write("# templates: templates\n\n")
                    f.write("# Index settings\n")
                    f.write("sort_by: date  # date, title, filename, none\n\n")
                    f.write("# Build settings\n")
                    f.write("minify: true\n")
                    f.write("ignore_asset_errors: false\n")
                    f.write("log_level: INFO\n")
                elif file_format == 'json':
                    sample_config = {k: v for k, v in self.DEFAULT_SETTINGS.items() if v is not None}
                    json.dump(sample_config, f, indent=2)
                else:
                    raise ConfigError(f"Unsupported config file format: {file_format}")
        except OSError as e:
            raise ConfigError(f"Error writing configuration file {config_path}: {e}") from e

        return config_path

    def merge_with_args(self, args_dict: Dict[str, Any]) -> Dict[str, Any]:
        """
        Merge configuration settings with command-line arguments.
        Command-line arguments take precedence over config file settings.
        """
        merged = self.settings.copy()
        for key, value in args_dict.items():
            if value is not None and key in merged:
                merged[key] = value
        return merged

    def resolve(self, settings: Dict[str, Any], base_dir: str = None) -> BuildConfig:
        """
        Turn a settings dictionary into a BuildConfig.

        Relative paths are resolved against ``base_dir`` (the current directory by default).
        """
        base_dir = base_dir or os.getcwd()

        def absolute(path):
            if path is None:
                return None
            return os.path.abspath(os.path.join(base_dir, os.path.expanduser(str(path))))

        sort_by = settings.get('sort_by', 'date')
        if sort_by not in SORT_CHOICES:
            raise ConfigError(f"Invalid sort_by '{sort_by}', expected one of: {', '.join(SORT_CHOICES)}")

        # A quoted "false" in YAML is a string, not a boolean
        for key in ('minify', 'ignore_asset_errors'):
            if not isinstance(settings.get(key, self.DEFAULT_SETTINGS[key]), bool):
                raise ConfigError(f"Setting '{key}' must be true or false, got {settings.get(key)!r}")
        for key in ('log_level', 'log_dir'):
            value = settings.get(key)
            if value is not None and not isinstance(value, str):
                raise ConfigError(f"Setting '{key}' must be a string, got {value!r}")

        return BuildConfig(
            posts_dir=absolute(settings['posts']),
            output_dir=absolute(settings['output']),
            assets_dir=absolute(settings['assets']),
            templates_dir=absolute(settings.get('templates')),
            sort_by=sort_by,
            minify=settings.get('minify', True),
            ignore_asset_errors=settings.get('ignore_asset_errors', False)
        )
