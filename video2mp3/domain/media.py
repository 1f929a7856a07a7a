import hashlib
from pathlib import Path

from ..config.video import COVER_SUFFIX, MP3_EXTENSION, PARTIAL_SUFFIX


class VideoFile:
    """
    Represents one discovered video file awaiting conversion.

    A `VideoFile` is identified by its path relative to the input root. It is
    produced by the discovery pass and consumed exactly once by one worker.
    All other paths involved in converting it (the source on disk, the output
    directory and MP3, the temporary cover image) are derived from that
    relative path, so the output tree mirrors the input tree.

    Attributes:
        relative_path (Path): The path of the video relative to the input root.
        filename (str): The name of the file, including its extension.
        stem (str): The filename without its extension. Used for the MP3 name
                    and its title tag.
        relative_dir (Path): The directory part of `relative_path`.
    """

    __slots__ = ("_relative_path",)

    def __init__(self, relative_path: Path):
        relative_path = Path(relative_path)
        if relative_path.is_absolute():
            raise ValueError(f"VideoFile expects a path relative to the input root, got {relative_path}")
        self._relative_path = relative_path

    @property
    def relative_path(self) -> Path:
        return self._relative_path

    @property
    def filename(self) -> str:
        return self._relative_path.name

    @property
    def stem(self) -> str:
        return self._relative_path.stem

    @property
    def relative_dir(self) -> Path:
        return self._relative_path.parent

    def source_path(self, input_root: Path) -> Path:
        return input_root / self._relative_path

    def output_dir(self, output_root: Path) -> Path:
        return output_root / self.relative_dir

    def output_path(self, output_root: Path) -> Path:
        """Path of the MP3, e.g. `sub/a.mp4` maps to `<output_root>/sub/a.mp3`."""
        return self.output_dir(output_root) / f"{self.stem}{MP3_EXTENSION}"

    def partial_output_path(self, output_root: Path) -> Path:
        """
        Path the MP3 is written to before it replaces `output_path()`.

        `a.mkv` and `a.mp4` share one `output_path()`, so the digest keeps their
        in-progress files apart.
        """
        return self.output_dir(output_root) / f".{self.stem}-{self._path_digest()}{PARTIAL_SUFFIX}{MP3_EXTENSION}"

    def cover_path(self, temp_dir: Path) -> Path:
        """
        Path of the transient cover image in the shared scratch directory.

        The name carries a short digest of the full relative path, so two
        videos with the same name in different subdirectories never share a
        cover file.
        """
        return temp_dir / f"{self.stem}-{self._path_digest()}{COVER_SUFFIX}"

    def _path_digest(self) -> str:
        return hashlib.md5(self._relative_path.as_posix().encode("utf-8")).hexdigest()[:12]

    def __eq__(self, other):
        if not isinstance(other, VideoFile):
            return NotImplemented
        return self._relative_path == other._relative_path

    def __hash__(self):
        return hash(self._relative_path)

    def __repr__(self):
        return f"VideoFile({self._relative_path.as_posix()!r})"

    def __str__(self):
        return self._relative_path.as_posix()
