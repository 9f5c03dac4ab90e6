"""
Markdown conversion and title extraction for posts.
"""

import mistune
from bs4 import BeautifulSoup

from .errors import NoTitleFoundError

TITLE_TAG = 'h2'


def create_markdown_parser():
    """Create a Mistune markdown parser that keeps raw HTML and supports ~~strikethrough~~."""
    return mistune.create_markdown(
        renderer=mistune.HTMLRenderer(escape=False),
        plugins=['strikethrough']
    )


_markdown_parser = create_markdown_parser()


def convert(markdown_text):
    """Convert markdown text to an HTML fragment."""
    return _markdown_parser(markdown_text)


def extract_title(html_fragment):
    """
    Return the inner HTML of the first level-2 heading in an HTML fragment.

    Markup nested inside the heading (emphasis, links, code) is kept as-is.

    Raises:
        NoTitleFoundError: If the fragment has no <h2>, or the first one is empty.
    """
    soup = BeautifulSoup(html_fragment, 'html.parser')
    heading = soup.find(TITLE_TAG)
    if heading is None:
        raise NoTitleFoundError("Post has no title")

    title = heading.decode_contents()
    if not title.strip():
        raise NoTitleFoundError("Post title is empty")
    return title
