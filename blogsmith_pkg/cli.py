#!/usr/bin/env python3
"""
Command-line interface for Blogsmith - Markdown blog builder.
"""

import os
import sys
import argparse
import time
from typing import List, Optional

from . import __version__
from .core import Blogsmith, setup_logging
from .errors import BlogsmithError
from .posts import SORT_CHOICES
from .settings import BlogsmithSettings

SAMPLE_POST = """## Welcome to your new blog

This post was created by `blogsmith --init`. Every file in `posts/` becomes a page,
and the first `##` heading is its title.

Markdown works as usual: *emphasis*, **bold**, ~~strikethrough~~ and
[links](https://example.com).
"""

SAMPLE_STYLESHEET = """body {
    font-family: sans-serif;
    max-width: 42rem;
    margin: 2rem auto;
    line-height: 1.6;
}
"""


def create_starter_structure(base_dir: str) -> None:
    """Create posts/ and assets/ with a sample post and stylesheet."""
    starter_files = {
        os.path.join('posts', 'welcome.md'): SAMPLE_POST,
        os.path.join('assets', 'style.css'): SAMPLE_STYLESHEET,
    }

    for relative_path, content in starter_files.items():
        path = os.path.join(base_dir, relative_path)
        os.makedirs(os.path.dirname(path), exist_ok=True)
        if os.path.exists(path):
            print(f"File already exists: {relative_path}")
        else:
            with open(path, 'w', encoding='utf-8') as f:
                f.write(content)
            print(f"Created file: {relative_path}")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Blogsmith - Markdown blog builder')
    parser.add_argument('--posts', type=str,
                        help='Directory containing the markdown posts')
    parser.add_argument('--output', type=str,
                        help='Output directory for the generated site')
    parser.add_argument('--assets', type=str,
                        help='Static assets directory to copy to output')
    parser.add_argument('--templates', type=str,
                        help='Directory with index.html/post.html overriding the built-in templates')
    parser.add_argument('--sort-by', type=str, choices=SORT_CHOICES,
                        help='Order of posts on the index page')
    parser.add_argument('--no-minify', dest='minify', action='store_false', default=None,
                        help='Write rendered HTML without minifying it')
    parser.add_argument('--ignore-asset-errors', action='store_true', default=None,
                        help='Keep building when copying assets fails')
    parser.add_argument('--init', type=str, choices=['yml', 'yaml', 'json'],
                        help='Create a sample configuration file and starter posts')
    parser.add_argument('--version', action='version', version=f'%(prog)s {__version__}')
    return parser


def main(argv: Optional[List[str]] = None) -> None:
    """Main CLI entry point."""
    args = build_parser().parse_args(argv)
    base_dir = os.getcwd()
    settings_loader = BlogsmithSettings(base_dir)

    try:
        if args.init:
            config_path = settings_loader.create_sample_config(args.init)
            print(f"Created sample configuration file: {config_path}")
            create_starter_structure(base_dir)
            print("\nRun 'blogsmith' to build your site.")
            return

        settings_loader.load_settings()

        # Command line arguments take precedence over the config file
        args_dict = {k: v for k, v in vars(args).items() if v is not None}
        final_settings = settings_loader.merge_with_args(args_dict)
        config = settings_loader.resolve(final_settings, base_dir)

        logger = setup_logging(final_settings['log_level'], final_settings['log_dir'])
        if settings_loader.config_file_path:
            logger.info(f"Loaded configuration from: {os.path.relpath(settings_loader.config_file_path)}")

        start_time = time.time()
        report = Blogsmith(config).build()
        logger.info(f"Site build completed in {time.time() - start_time:.6f} seconds.")
        logger.info(f"Total posts generated: {len(report.post_paths)}")

    except BlogsmithError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(1)


if __name__ == '__main__':
    main()
