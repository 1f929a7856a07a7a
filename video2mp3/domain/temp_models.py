"""
Defines data models for the outcome of individual conversions.
"""

from datetime import datetime
from pathlib import Path
from typing import Optional

from ..config.common import STATUS_CONVERTED, STATUS_FAILED
from .media import VideoFile


class ConversionResult:
    """
    Records the outcome of converting one video file.

    Workers create one `ConversionResult` per attempted file. The results are
    collected by the pipeline and written to the run report once every worker
    has finished.

    Attributes:
        video (VideoFile): The work item that was attempted.
        status (str): `converted` or `failed` (see `video2mp3.config.common`).
        output_path (Optional[Path]): The MP3 written, if the conversion succeeded.
        error_message (Optional[str]): A short description of the failure, if any.
        finished_at (str): ISO 8601 timestamp of when the attempt ended.
    """

    def __init__(
        self,
        video: VideoFile,
        status: str,
        output_path: Optional[Path] = None,
        error_message: Optional[str] = None,
    ):
        self.video = video
        self.status = status
        self.output_path = output_path
        self.error_message = error_message
        self.finished_at = datetime.now().isoformat(timespec="seconds")

    @classmethod
    def converted(cls, video: VideoFile, output_path: Path) -> "ConversionResult":
        return cls(video, STATUS_CONVERTED, output_path=output_path)

    @classmethod
    def failed(cls, video: VideoFile, error: Exception) -> "ConversionResult":
        return cls(video, STATUS_FAILED, error_message=str(error))

    @property
    def succeeded(self) -> bool:
        return self.status == STATUS_CONVERTED

    def to_dict(self) -> dict:
        """Serializable form used in the YAML run report."""
        return {
            "source": self.video.relative_path.as_posix(),
            "status": self.status,
            "output": str(self.output_path) if self.output_path else None,
            "error": self.error_message,
            "finished_at": self.finished_at,
        }
