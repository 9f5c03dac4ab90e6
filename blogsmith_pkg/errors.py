"""
Exception types raised while building a Blogsmith site.
"""

from typing import List, Optional


class BlogsmithError(Exception):
    """Base class for every error the build can raise."""


class ConfigError(BlogsmithError):
    """Raised when a configuration file cannot be read or is invalid."""


class PostError(BlogsmithError):
    """An error tied to a single Markdown source file."""

    def __init__(self, message: str, path: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.path = path

    def __str__(self) -> str:
        if self.path:
            return f"{self.path}: {self.message}"
        return self.message


class FileAccessError(PostError):
    """Reading, writing or stat-ing a file failed."""


class InvalidPathError(PostError):
    """A path cannot be represented as text."""


class NoTitleFoundError(PostError):
    """The rendered post body has no level-2 heading."""


class TemplateRenderError(BlogsmithError):
    """A Jinja2 template failed to load or render."""


class DirectoryCreationError(BlogsmithError):
    """An output directory could not be created."""


class AssetCopyError(BlogsmithError):
    """Copying static assets into the output tree failed."""


class PostLoadError(BlogsmithError):
    """
    Raised when one or more posts failed to load.

    Carries every per-file error so they can all be fixed in one pass.
    """

    def __init__(self, errors: List[PostError]):
        self.errors = list(errors)
        noun = 'post' if len(self.errors) == 1 else 'posts'
        details = '; '.join(str(error) for error in self.errors)
        super().__init__(f"{len(self.errors)} {noun} failed to load: {details}")
