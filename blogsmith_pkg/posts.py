"""
Discover Markdown posts and turn them into Post records.
"""

import glob
import logging
import os
from dataclasses import dataclass
from datetime import datetime
from typing import List, Tuple

from .errors import FileAccessError, InvalidPathError, NoTitleFoundError, PostError, PostLoadError
from .markup import convert, extract_title

DATE_FORMAT = '%Y-%m-%d %H:%M:%S %Z'
MARKDOWN_EXTENSIONS = ('.md', '.markdown')
SORT_CHOICES = ('date', 'title', 'filename', 'none')

logger = logging.getLogger('Blogsmith.posts')


@dataclass(frozen=True)
class Post:
    """A single post, rendered once on its own page and once in the index."""
    filename: str
    title: str
    content: str
    date: str
    source: str
    modified: datetime


def derive_filename(path):
    """
    Turn a Markdown source path into the name of its generated HTML page.

    Only the basename's extension is replaced, so 'posts/commands.md'
    becomes 'commands.html'.
    """
    try:
        path.encode('utf-8')
    except UnicodeEncodeError as e:
        raise InvalidPathError("Filename does not create a valid string", path=repr(path)) from e

    stem, ext = os.path.splitext(os.path.basename(path))
    if ext.lower() not in MARKDOWN_EXTENSIONS:
        stem = stem + ext
    if not stem:
        raise InvalidPathError("Filename is empty", path=path)
    return f"{stem}.html"


def modification_time(path):
    """Return the local, timezone-aware modification time of a file."""
    try:
        mtime = os.stat(path).st_mtime
    except OSError as e:
        raise FileAccessError(f"Failed to read modification time: {e}", path=path) from e
    return datetime.fromtimestamp(mtime).astimezone()


def format_date(moment):
    """Format a datetime for display, e.g. '2024-03-01 09:15:00 CET'."""
    return moment.strftime(DATE_FORMAT)


def load_post(path):
    """Build a Post from one Markdown file."""
    filename = derive_filename(path)

    try:
        with open(path, 'r', encoding='utf-8') as f:
            markdown_content = f.read()
    except (OSError, UnicodeDecodeError) as e:
        raise FileAccessError(f"Failed to read markdown file: {e}", path=path) from e

    html_content = convert(markdown_content)

    try:
        title = extract_title(html_content)
    except NoTitleFoundError as e:
        e.path = path
        raise

    modified = modification_time(path)
    return Post(
        filename=filename,
        title=title,
        content=html_content,
        date=format_date(modified),
        source=path,
        modified=modified
    )


def find_markdown_files(pattern):
    """Return the files matching a glob pattern, sorted so builds are repeatable."""
    return sorted(path for path in glob.glob(pattern) if os.path.isfile(path))


def collect_posts(paths) -> Tuple[List[Post], List[PostError]]:
    """Try to load every path, keeping the posts and the errors apart."""
    posts = []
    errors = []
    for path in paths:
        try:
            post = load_post(path)
        except PostError as e:
            logger.error(f"Error loading post {e}")
            errors.append(e)
        else:
            logger.debug(f"Parsed post {post.source} -> {post.filename} ({post.title!r}, {post.date})")
            posts.append(post)
    return posts, errors


def load_posts(pattern) -> List[Post]:
    """
    Load every post matching ``pattern``.

    All or nothing: if any file fails, none of the posts are returned.

    Raises:
        PostLoadError: Carrying every per-file error that occurred.
    """
    paths = find_markdown_files(pattern)
    if not paths:
        logger.warning(f"No markdown files found matching {pattern}")

    posts, errors = collect_posts(paths)
    if errors:
        raise PostLoadError(errors)
    return posts


def sort_posts(posts, sort_by='date'):
    """Order posts for the index page."""
    if sort_by == 'date':
        return sorted(posts, key=lambda p: p.modified, reverse=True)
    elif sort_by == 'title':
        return sorted(posts, key=lambda p: p.title.lower())
    elif sort_by == 'filename':
        return sorted(posts, key=lambda p: p.filename)
    elif sort_by == 'none':
        return list(posts)
    raise ValueError(f"Unknown sort order: {sort_by}")
