"""Test configuration and fixtures for Blogsmith tests."""

import pytest
import tempfile
import shutil
import logging
import os
from pathlib import Path

import sys
sys.path.insert(0, os.path.join(os.path.dirname(__file__), '..'))

from blogsmith_pkg.settings import BuildConfig


@pytest.fixture
def temp_dir():
    """Create a temporary directory for tests."""
    temp_dir = tempfile.mkdtemp()
    yield temp_dir
    shutil.rmtree(temp_dir, ignore_errors=True)


@pytest.fixture(autouse=True)
def reset_logging():
    """Drop handlers added by setup_logging so they don't outlive the captured streams."""
    yield
    logger = logging.getLogger('Blogsmith')
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def site_dir(temp_dir):
    """Create a site source tree with empty posts/ and an assets/ directory."""
    root = Path(temp_dir)
    (root / 'posts').mkdir()
    assets_dir = root / 'assets'
    (assets_dir / 'css').mkdir(parents=True)
    (assets_dir / 'css' / 'style.css').write_text("body { color: black; }\n")
    (assets_dir / 'logo.txt').write_text("logo\n")
    return root


@pytest.fixture
def write_post(site_dir):
    """Return a helper that writes posts/<name> and optionally sets its mtime."""
    def _write_post(name, content, mtime=None):
        path = site_dir / 'posts' / name
        path.write_text(content, encoding='utf-8')
        if mtime is not None:
            os.utime(path, (mtime, mtime))
        return str(path)
    return _write_post


@pytest.fixture
def build_config(site_dir):
    """A BuildConfig pointing at the site_dir fixture tree."""
    return BuildConfig(
        posts_dir=str(site_dir / 'posts'),
        output_dir=str(site_dir / 'gen'),
        assets_dir=str(site_dir / 'assets')
    )


@pytest.fixture
def custom_templates_dir(temp_dir):
    """Create a templates directory with minimal index.html and post.html."""
    templates_dir = Path(temp_dir) / 'templates'
    templates_dir.mkdir()
    (templates_dir / 'index.html').write_text(
        "<html><body><!-- index -->\n"
        "{% for post in posts %}<a href=\"{{ post.filename }}\">{{ post.title }}</a>\n{% endfor %}"
        "<p>{{ posts|length }} posts</p></body></html>"
    )
    (templates_dir / 'post.html').write_text(
        "<html><head><title>{{ post.title|striptags }}</title></head>\n"
        "<body><!-- post -->\n    {{ post.content }}\n</body></html>"
    )
    return str(templates_dir)
