"""
Output tree setup and static asset copying.
"""

import logging
import os
import shutil

from .errors import AssetCopyError, DirectoryCreationError

OUTPUT_SUBDIRECTORIES = ('posts', 'assets')

logger = logging.getLogger('Blogsmith.site')


def ensure_directories(root):
    """
    Make sure the output root and its posts/ and assets/ subdirectories exist.

    Existing directories are left untouched.

    Returns:
        The directories that had to be created, in creation order.
    """
    paths = [root] + [os.path.join(root, name) for name in OUTPUT_SUBDIRECTORIES]
    created = []
    for path in paths:
        if os.path.isdir(path):
            continue
        try:
            os.makedirs(path)
        except OSError as e:
            raise DirectoryCreationError(f"Failed to create directory {path}: {e}") from e
        logger.info(f"Created path: {path}")
        created.append(path)
    return created


def copy_assets(source_dir, output_dir):
    """
    Copy the static assets directory into ``<output_dir>/assets``.

    Files already in the destination are overwritten; nothing is removed.

    Returns:
        The number of files copied, or None when there is no assets directory.
    """
    if not source_dir or not os.path.isdir(source_dir):
        logger.warning(f"Assets directory not found, skipping copy: {source_dir}")
        return None

    destination = os.path.join(output_dir, 'assets')
    try:
        shutil.copytree(source_dir, destination, dirs_exist_ok=True)
    except (shutil.Error, OSError) as e:
        raise AssetCopyError(f"Failed to copy assets from {source_dir}: {e}") from e

    copied = sum(len(files) for _, _, files in os.walk(source_dir))
    logger.info(f"Copied {copied} asset files from {source_dir}")
    return copied
