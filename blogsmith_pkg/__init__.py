"""
Blogsmith - a small Markdown blog builder.

Blogsmith reads a directory of Markdown posts, renders each one and an index
page through Jinja2 templates, minifies the HTML and writes the site next to
a copy of the static assets.
"""

__version__ = "1.0.0"

from .core import Blogsmith, BuildReport, BuildStage
from .posts import Post, load_posts
from .settings import BlogsmithSettings, BuildConfig

__all__ = ['Blogsmith', 'BuildReport', 'BuildStage', 'Post', 'load_posts', 'BlogsmithSettings', 'BuildConfig']
