"""Tests for configuration loading."""

import pytest
import os
import glob
import json
import logging

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from blogsmith_pkg.core import setup_logging
from blogsmith_pkg.errors import ConfigError
from blogsmith_pkg.settings import BlogsmithSettings


class TestBlogsmithSettings:
    """Test cases for BlogsmithSettings."""

    def test_defaults_without_config_file(self, temp_dir):
        loader = BlogsmithSettings(temp_dir)
        settings = loader.load_settings()

        assert settings == BlogsmithSettings.DEFAULT_SETTINGS
        assert loader.config_file_path is None

    def test_load_yaml(self, temp_dir):
        with open(os.path.join(temp_dir, 'blogsmith.yml'), 'w') as f:
            f.write("output: public\nsort_by: title\nminify: false\n")

        loader = BlogsmithSettings(temp_dir)
        settings = loader.load_settings()

        assert settings['output'] == 'public'
        assert settings['sort_by'] == 'title'
        assert settings['minify'] is False
        assert settings['posts'] == 'posts'
        assert loader.config_file_path.endswith('blogsmith.yml')

    def test_load_json(self, temp_dir):
        with open(os.path.join(temp_dir, 'blogsmith.json'), 'w') as f:
            json.dump({'posts': 'articles'}, f)

        assert BlogsmithSettings(temp_dir).load_settings()['posts'] == 'articles'

    def test_yml_preferred_over_json(self, temp_dir):
        with open(os.path.join(temp_dir, 'blogsmith.yml'), 'w') as f:
            f.write("output: from-yml\n")
        with open(os.path.join(temp_dir, 'blogsmith.json'), 'w') as f:
            json.dump({'output': 'from-json'}, f)

        assert BlogsmithSettings(temp_dir).load_settings()['output'] == 'from-yml'

    def test_invalid_yaml(self, temp_dir):
        with open(os.path.join(temp_dir, 'blogsmith.yml'), 'w') as f:
            f.write("output: [unclosed\n")
        with pytest.raises(ConfigError, match="Invalid YAML"):
            BlogsmithSettings(temp_dir).load_settings()

    def test_unknown_setting(self, temp_dir):
        with open(os.path.join(temp_dir, 'blogsmith.yml'), 'w') as f:
            f.write("outptu: typo\n")
        with pytest.raises(ConfigError, match="outptu"):
            BlogsmithSettings(temp_dir).load_settings()

    def test_merge_with_args(self, temp_dir):
        loader = BlogsmithSettings(temp_dir)
        loader.load_settings()
        merged = loader.merge_with_args({'output': 'site', 'minify': False, 'init': None, 'sort_by': None})

        assert merged['output'] == 'site'
        assert merged['minify'] is False
        assert merged['sort_by'] == 'date'
        assert 'init' not in merged

    def test_resolve_relative_paths(self, temp_dir):
        loader = BlogsmithSettings(temp_dir)
        config = loader.resolve(loader.load_settings(), temp_dir)

        assert config.posts_dir == os.path.join(os.path.abspath(temp_dir), 'posts')
        assert config.output_dir == os.path.join(os.path.abspath(temp_dir), 'gen')
        assert config.assets_dir == os.path.join(os.path.abspath(temp_dir), 'assets')
        assert config.templates_dir is None
        assert config.posts_pattern == os.path.join(config.posts_dir, '*.md')
        assert config.minify is True

    def test_resolve_keeps_absolute_paths(self, temp_dir):
        loader = BlogsmithSettings(temp_dir)
        settings = loader.merge_with_args({'output': os.path.join(temp_dir, 'elsewhere')})
        config = loader.resolve(settings, '/some/other/base')
        assert config.output_dir == os.path.join(temp_dir, 'elsewhere')

    def test_resolve_rejects_bad_sort_order(self, temp_dir):
        loader = BlogsmithSettings(temp_dir)
        settings = loader.merge_with_args({'sort_by': 'random'})
        with pytest.raises(ConfigError, match="sort_by"):
            loader.resolve(settings, temp_dir)

    def test_posts_pattern_escapes_glob_characters(self, temp_dir):
        loader = BlogsmithSettings(temp_dir)
        config = loader.resolve(loader.load_settings(), os.path.join(temp_dir, 'my[blog]'))

        assert config.posts_pattern == os.path.join(glob.escape(config.posts_dir), '*.md')
        assert '[[]' in config.posts_pattern

    @pytest.mark.parametrize('key', ['minify', 'ignore_asset_errors'])
    def test_quoted_boolean_rejected(self, temp_dir, key):
        """Test that a quoted "false" in YAML is not silently read as True."""
        with open(os.path.join(temp_dir, 'blogsmith.yml'), 'w') as f:
            f.write(f'{key}: "false"\n')
        loader = BlogsmithSettings(temp_dir)

        with pytest.raises(ConfigError, match=key):
            loader.resolve(loader.load_settings(), temp_dir)

    def test_unquoted_false_accepted(self, temp_dir):
        with open(os.path.join(temp_dir, 'blogsmith.yml'), 'w') as f:
            f.write("minify: false\nignore_asset_errors: true\n")
        loader = BlogsmithSettings(temp_dir)
        config = loader.resolve(loader.load_settings(), temp_dir)

        assert config.minify is False
        assert config.ignore_asset_errors is True

    @pytest.mark.parametrize('content', ["log_level: 10\n", "log_dir: [logs]\n"])
    def test_non_string_logging_settings_rejected(self, temp_dir, content):
        with open(os.path.join(temp_dir, 'blogsmith.yml'), 'w') as f:
            f.write(content)
        loader = BlogsmithSettings(temp_dir)

        with pytest.raises(ConfigError, match="must be a string"):
            loader.resolve(loader.load_settings(), temp_dir)

    @pytest.mark.parametrize('file_format', ['yml', 'json'])
    def test_sample_config_round_trip(self, temp_dir, file_format):
        """Test that the sample config loads back to the defaults."""
        loader = BlogsmithSettings(temp_dir)
        path = loader.create_sample_config(file_format)

        assert os.path.exists(path)
        assert BlogsmithSettings(temp_dir).load_settings() == BlogsmithSettings.DEFAULT_SETTINGS


class TestSetupLogging:
    """Test cases for logger configuration."""

    def test_default_level(self, monkeypatch):
        monkeypatch.delenv('BLOGSMITH_LOG_LEVEL', raising=False)
        logger = setup_logging()
        assert logger.level == logging.INFO
        assert len(logger.handlers) == 1

    def test_environment_overrides_setting(self, monkeypatch):
        monkeypatch.setenv('BLOGSMITH_LOG_LEVEL', 'debug')
        logger = setup_logging('WARNING')
        assert logger.level == logging.DEBUG
        assert logger.handlers[0].level == logging.DEBUG

    def test_setting_level(self, monkeypatch):
        monkeypatch.delenv('BLOGSMITH_LOG_LEVEL', raising=False)
        assert setup_logging('warning').level == logging.WARNING

    def test_unknown_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.setenv('BLOGSMITH_LOG_LEVEL', 'LOUD')
        assert setup_logging().level == logging.INFO

    def test_non_string_level_falls_back_to_info(self, monkeypatch):
        monkeypatch.delenv('BLOGSMITH_LOG_LEVEL', raising=False)
        assert setup_logging(10).level == logging.INFO

    def test_log_file(self, monkeypatch, temp_dir):
        monkeypatch.delenv('BLOGSMITH_LOG_LEVEL', raising=False)
        log_dir = os.path.join(temp_dir, 'logs')
        logger = setup_logging('INFO', log_dir)
        logger.debug("written to file only")
        for handler in logger.handlers:
            handler.flush()

        log_files = os.listdir(log_dir)
        assert len(log_files) == 1
        with open(os.path.join(log_dir, log_files[0])) as f:
            assert "written to file only" in f.read()
