import concurrent.futures
import queue
import tempfile
import threading
import traceback
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from loguru import logger

from ..config.common import DEFAULT_MAX_WORKERS, DEFAULT_OUTPUT_DIR, TEMP_DIR_PREFIX
from ..config.video import DEFAULT_SCREENSHOT_TIME
from ..domain.exceptions import (
    ConfigurationException,
    ConversionException,
    DirectoryTraversalException,
    InvalidScreenshotTimeException,
    OutputDirectoryException,
)
from ..domain.media import VideoFile
from ..domain.temp_models import ConversionResult
from ..services.conversion_service import Mp3Converter
from ..services.file_processing_service import ProcessVideoFiles
from ..services.logging_service import ConversionLog, ErrorLog
from ..services.progress_service import ProgressTracker
from ..utils.format_utils import format_timedelta

# Put on the work queue once per worker after the last video; a worker stops when it takes one.
_QUEUE_CLOSED = None


class ConversionPipeline:
    """
    Converts every video under an input directory to MP3, using a fixed pool of workers.

    The calling thread walks the input tree and feeds the discovered videos into
    an unbounded FIFO queue while `workers` threads drain it. Each worker
    converts one video at a time and records it on the shared progress tracker,
    whether the conversion succeeded or not. A failed file is logged and never
    stops the pool; only a failure to walk the input tree fails the run, and
    that error is raised after the workers have drained the queue.
    """

    def __init__(
        self,
        input_dir: Path,
        output_dir: Optional[Path] = None,
        screenshot_time: float = DEFAULT_SCREENSHOT_TIME,
        workers: int = DEFAULT_MAX_WORKERS,
        ffmpeg_path: str = "ffmpeg",
        temp_work_dir: Optional[Path] = None,
        progress: Optional[ProgressTracker] = None,
    ):
        self.input_dir = Path(input_dir)
        self.output_dir = Path(output_dir) if output_dir else DEFAULT_OUTPUT_DIR
        self.screenshot_time = screenshot_time
        self.workers = workers
        self.ffmpeg_path = ffmpeg_path
        self.temp_work_dir = temp_work_dir
        self.progress = progress or ProgressTracker()
        self.file_finder = ProcessVideoFiles(self.input_dir)
        self.results: List[ConversionResult] = []
        self._results_lock = threading.Lock()
        self._error_log: Optional[ErrorLog] = None

    def _validate(self):
        if self.screenshot_time < 0:
            raise InvalidScreenshotTimeException(
                f"Screenshot time must be non-negative, got {self.screenshot_time}"
            )
        if self.workers < 1:
            raise ConfigurationException(f"Number of workers must be at least 1, got {self.workers}")

    def _prepare_output_dir(self):
        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputDirectoryException(
                f"failed to create output directory {self.output_dir}: {e}"
            ) from e
        self._error_log = ErrorLog(self.output_dir)

    def run(self) -> List[ConversionResult]:
        """
        Runs the whole batch and returns one `ConversionResult` per attempted video.

        Raises:
            ConfigurationException: Before any work, for a negative screenshot
                time, fewer than one worker or an output directory that cannot
                be created.
            DirectoryTraversalException: If the input tree cannot be walked.
                Conversions finished before the error are kept.
        """
        self._validate()
        self._prepare_output_dir()
        self.results = []
        started_at = datetime.now()

        with tempfile.TemporaryDirectory(prefix=TEMP_DIR_PREFIX, dir=self.temp_work_dir) as temp_dir_str:
            temp_dir = Path(temp_dir_str)
            logger.debug(f"Using scratch directory {temp_dir}")
            converter = Mp3Converter(
                self.input_dir,
                self.output_dir,
                temp_dir,
                screenshot_time=self.screenshot_time,
                ffmpeg_path=self.ffmpeg_path,
            )

            total = self.file_finder.count()
            logger.info(f"Found {total} video file(s) to convert. Using {self.workers} worker(s).")
            self.progress.initialize(total)

            work_queue: "queue.Queue[Optional[VideoFile]]" = queue.Queue()
            traversal_error: Optional[DirectoryTraversalException] = None

            with concurrent.futures.ThreadPoolExecutor(
                max_workers=self.workers, thread_name_prefix="worker"
            ) as executor:
                futures = [
                    executor.submit(self._worker_loop, work_queue, converter)
                    for _ in range(self.workers)
                ]
                try:
                    for video in self.file_finder.iter_files():
                        work_queue.put(video)
                except DirectoryTraversalException as e:
                    traversal_error = e
                finally:
                    for _ in range(self.workers):
                        work_queue.put(_QUEUE_CLOSED)

                concurrent.futures.wait(futures)

            self.progress.finish()

        self._write_report()
        self._log_summary(datetime.now() - started_at)

        if traversal_error is not None:
            raise traversal_error
        return self.results

    def _worker_loop(self, work_queue: "queue.Queue[Optional[VideoFile]]", converter: Mp3Converter):
        while True:
            video = work_queue.get()
            if video is _QUEUE_CLOSED:
                break
            try:
                result = self._process_single_file(video, converter)
                with self._results_lock:
                    self.results.append(result)
            finally:
                self.progress.record_completion()

    def _process_single_file(self, video: VideoFile, converter: Mp3Converter) -> ConversionResult:
        try:
            mp3_path = converter.convert(video)
        except ConversionException as e:
            self._report_failure(video, e)
            return ConversionResult.failed(video, e)
        except Exception as e:
            # Any other error is still confined to this file.
            tb_str = "".join(traceback.format_exception(e))
            self._report_failure(video, e, tb_str)
            return ConversionResult.failed(video, e)
        return ConversionResult.converted(video, mp3_path)

    def _report_failure(self, video: VideoFile, error: Exception, tb_str: str = ""):
        with self.progress.paused():
            logger.error(f"Conversion failed for {video}: {error}")
            if tb_str:
                logger.debug(f"Traceback:\n{tb_str}")
        if self._error_log:
            messages = [f"Conversion failed for: {video}", f"Error: {error}"]
            if tb_str:
                messages.append(f"Traceback:\n{tb_str}")
            self._error_log.write(*messages)

    def _write_report(self):
        report = ConversionLog.build_report(self.results, self.input_dir.resolve(), self.output_dir.resolve())
        ConversionLog(self.output_dir).write(report)

    def _log_summary(self, elapsed):
        converted = sum(1 for result in self.results if result.succeeded)
        failed = len(self.results) - converted
        message = (
            f"Converted {converted} of {len(self.results)} file(s) in {format_timedelta(elapsed)}"
            f" ({failed} failed). Output: {self.output_dir}"
        )
        if failed:
            logger.warning(message)
        else:
            logger.info(message)
