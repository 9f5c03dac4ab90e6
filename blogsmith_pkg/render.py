"""
Template rendering, HTML minification and page output.
"""

import logging
import os

from jinja2 import (ChoiceLoader, Environment, FileSystemLoader, PackageLoader,
                    StrictUndefined, TemplateError)

from .errors import FileAccessError, TemplateRenderError

INDEX_FILENAME = 'index.html'

logger = logging.getLogger('Blogsmith.render')


def minify_html(html):
    """Strip comments and collapse whitespace without touching text or <pre> blocks."""
    import htmlmin
    return htmlmin.minify(
        html,
        remove_comments=True,
        remove_empty_space=False,
        remove_optional_attribute_quotes=False,
        # Leave entity references as written in the rendered page
        convert_charrefs=False
    )


class Renderable:
    """Something that can be turned into a page by a named template."""
    template_name = None

    def context(self):
        raise NotImplementedError

    def render(self, env):
        """Render the view with ``env``, wrapping any Jinja2 failure."""
        try:
            template = env.get_template(self.template_name)
            return template.render(**self.context())
        except TemplateError as e:
            raise TemplateRenderError(f"{self.template_name} template error: {e}") from e


class IndexView(Renderable):
    template_name = 'index.html'

    def __init__(self, posts):
        # Posts are shared with the per-post pages; hand the template a read-only sequence.
        self.posts = tuple(posts)

    def context(self):
        return {'posts': self.posts}


class PostView(Renderable):
    template_name = 'post.html'

    def __init__(self, post):
        self.post = post

    def context(self):
        return {'post': self.post}


def create_environment(templates_dir=None):
    """
    Set up the Jinja2 environment.

    Templates in ``templates_dir`` take precedence over the defaults
    bundled with the package.
    """
    loaders = []
    if templates_dir:
        loaders.append(FileSystemLoader(templates_dir))
    loaders.append(PackageLoader('blogsmith_pkg', 'templates'))
    return Environment(loader=ChoiceLoader(loaders), undefined=StrictUndefined)


class Renderer:
    def __init__(self, templates_dir=None, minify=True):
        self.templates_dir = templates_dir
        self.minify = minify
        self.env = create_environment(templates_dir)

    def render_view(self, view):
        """Render a view to final HTML, minified if enabled."""
        html = view.render(self.env)
        if self.minify:
            html = minify_html(html)
        return html

    def render_index(self, posts, output_root):
        """Render the post list into ``<output_root>/index.html``."""
        output_path = os.path.join(output_root, INDEX_FILENAME)
        self.write(output_path, self.render_view(IndexView(posts)))
        logger.info(f"Generated index page with {len(posts)} posts at {output_path}")
        return output_path

    def render_post(self, post, output_root):
        """Render a single post into ``<output_root>/<post.filename>``."""
        output_path = os.path.join(output_root, post.filename)
        self.write(output_path, self.render_view(PostView(post)))
        logger.debug(f"Generated HTML: {output_path}")
        return output_path

    def write(self, output_path, html):
        try:
            with open(output_path, 'w', encoding='utf-8') as output_file:
                output_file.write(html)
        except OSError as e:
            raise FileAccessError(f"Failed to write HTML file: {e}", path=output_path) from e
