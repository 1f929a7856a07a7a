"""
Provides the service that discovers the video files to convert.

The discovery pass walks the input tree recursively and yields every regular
file with a recognized video extension, as a `VideoFile` relative to the input
root. The walk is lazy, so the pipeline can start converting while the tree is
still being scanned, and its order is deterministic for a given tree
(directory entries are visited in sorted order).
"""

import os
from pathlib import Path
from typing import Iterator, Tuple

from loguru import logger

from ..config.video import VIDEO_EXTENSIONS
from ..domain.exceptions import DirectoryTraversalException
from ..domain.media import VideoFile


def _raise_walk_error(error: OSError):
    raise error


class ProcessVideoFiles:
    """
    Discovers video files under an input directory.

    Attributes:
        source_dir (Path): The root directory being scanned.
        extensions (Tuple[str, ...]): Lowercase extensions (with leading dot)
                                      that identify a video file.
    """

    def __init__(self, source_dir: Path, extensions: Tuple[str, ...] = VIDEO_EXTENSIONS):
        self.source_dir = Path(source_dir)
        self.extensions = tuple(ext.lower() for ext in extensions)

    def is_target(self, path: Path) -> bool:
        return path.suffix.lower() in self.extensions

    def iter_files(self) -> Iterator[VideoFile]:
        """
        Yields the video files under `source_dir`, relative to it.

        Raises:
            DirectoryTraversalException: If `source_dir` does not exist or a
                directory in the tree cannot be listed. Files yielded before
                the error remain valid.
        """
        walker = os.walk(self.source_dir, onerror=_raise_walk_error)
        try:
            for dir_path, dir_names, file_names in walker:
                # Sorting in place also fixes the order in which os.walk descends.
                dir_names.sort()
                current_dir = Path(dir_path)
                for file_name in sorted(file_names):
                    file_path = current_dir / file_name
                    if not self.is_target(file_path) or not file_path.is_file():
                        continue
                    relative_path = file_path.relative_to(self.source_dir)
                    logger.trace(f"Discovered video: {relative_path}")
                    yield VideoFile(relative_path)
        except OSError as e:
            failed_path = Path(e.filename) if e.filename else self.source_dir
            raise DirectoryTraversalException(
                f"failed to traverse directory {failed_path}: {e.strerror or e}", failed_path
            ) from e

    def count(self) -> int:
        """Counts the video files under `source_dir` with a full walk of the tree."""
        total = sum(1 for _ in self.iter_files())
        logger.debug(f"Found {total} video file(s) in {self.source_dir}")
        return total
