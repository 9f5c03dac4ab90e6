import os
import logging
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import List, Optional

from .errors import AssetCopyError
from .posts import load_posts, sort_posts
from .render import Renderer
from .site import copy_assets, ensure_directories

LOG_LEVEL_ENV = 'BLOGSMITH_LOG_LEVEL'


def setup_logging(level=None, log_dir=None):
    """
    Set up the 'Blogsmith' logger.

    The level comes from $BLOGSMITH_LOG_LEVEL, then ``level``, then INFO.
    When ``log_dir`` is given, everything down to DEBUG is also written to a
    timestamped log file there.
    """
    logger = logging.getLogger('Blogsmith')
    level_name = str(os.environ.get(LOG_LEVEL_ENV) or level or 'INFO').upper()
    console_level = getattr(logging, level_name, None)
    unknown_level = not isinstance(console_level, int)
    if unknown_level:
        console_level = logging.INFO
    logger.setLevel(logging.DEBUG if log_dir else console_level)

    if not logger.handlers:
        console_handler = logging.StreamHandler()
        console_handler.setLevel(console_level)
        console_handler.setFormatter(logging.Formatter('%(message)s'))
        logger.addHandler(console_handler)

        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
            log_filename = datetime.now().strftime('blogsmith_%Y-%m-%d_%H-%M-%S.log')
            file_handler = logging.FileHandler(os.path.join(log_dir, log_filename))
            file_handler.setLevel(logging.DEBUG)
            file_handler.setFormatter(logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s'))
            logger.addHandler(file_handler)

    if unknown_level:
        logger.warning(f"Unknown log level '{level_name}', using INFO")
    return logger


class BuildStage(Enum):
    INIT = 'init'
    DIRECTORIES_READY = 'directories ready'
    POSTS_LOADED = 'posts loaded'
    ASSETS_COPIED = 'assets copied'
    INDEX_RENDERED = 'index rendered'
    POSTS_RENDERED = 'posts rendered'
    DONE = 'done'


@dataclass
class BuildReport:
    """What a finished build produced."""
    created_directories: List[str] = field(default_factory=list)
    posts: list = field(default_factory=list)
    assets_copied: Optional[int] = None
    index_path: Optional[str] = None
    post_paths: List[str] = field(default_factory=list)


class Blogsmith:
    """
    Runs the build pipeline once:
    directories -> posts -> assets -> index -> post pages.

    Any failing stage raises and stops the build; files already written stay.
    """

    def __init__(self, config, renderer=None):
        self.config = config
        self.renderer = renderer or Renderer(config.templates_dir, minify=config.minify)
        self.logger = logging.getLogger('Blogsmith')
        self.stage = BuildStage.INIT

    def _advance(self, stage):
        self.stage = stage
        self.logger.debug(f"Build stage: {stage.value}")

    def build(self):
        """Main build process."""
        config = self.config
        report = BuildReport()

        self.logger.info("Checking required file structures for generation.")
        report.created_directories = ensure_directories(config.output_dir)
        self._advance(BuildStage.DIRECTORIES_READY)

        self.logger.info(f"Generating posts list from {config.posts_dir}.")
        posts = load_posts(config.posts_pattern)
        report.posts = sort_posts(posts, config.sort_by)
        self.logger.info(f"Loaded {len(posts)} posts.")
        self._advance(BuildStage.POSTS_LOADED)

        self.logger.info("Copying static assets.")
        report.assets_copied = self.copy_assets()
        self._advance(BuildStage.ASSETS_COPIED)

        self.logger.info("Generating index page from the post list.")
        report.index_path = self.renderer.render_index(report.posts, config.output_dir)
        self._advance(BuildStage.INDEX_RENDERED)

        self.logger.info("Generating files for each post.")
        for post in report.posts:
            report.post_paths.append(self.renderer.render_post(post, config.output_dir))
        self._advance(BuildStage.POSTS_RENDERED)

        self._advance(BuildStage.DONE)
        self.logger.info(f"Generated {len(report.post_paths)} post pages in {config.output_dir}.")
        return report

    def copy_assets(self):
        try:
            return copy_assets(self.config.assets_dir, self.config.output_dir)
        except AssetCopyError as e:
            if not self.config.ignore_asset_errors:
                raise
            self.logger.warning(f"Ignoring asset copy failure: {e}")
            return None
