"""
This module provides classes for writing log files next to the converted MP3s.

It separates logging concerns into a plain-text error log (ErrorLog), which
collects one entry per failed conversion for later inspection, and a YAML run
report (ConversionLog), which records the outcome of every attempted file in a
machine-readable form. Both are separate from the real-time console logging
done with loguru.
"""

import threading
from datetime import datetime
from pathlib import Path
from typing import Iterable, List, Union

import yaml
from loguru import logger

from ..config.common import (
    CONVERSION_LOG_FILE_NAME,
    ERROR_LOG_FILE_NAME,
    STATUS_CONVERTED,
    STATUS_FAILED,
)
from ..domain.temp_models import ConversionResult


class Log:
    """
    A base class for all file logging operations.

    Handles the setup of the log directory shared by the specific log writers.
    """

    # A decorative separator line used in text-based logs for better readability.
    linesep_marker: str = "=" * 50

    def __init__(self, log_base_path: Path):
        """
        Args:
            log_base_path: The base path for logging. If it's a directory,
                           log files will be created inside it. If it's a file path,
                           its parent will be used as the log directory.
        """
        self.log_file_path: Path
        if log_base_path.is_dir():
            self.log_dir: Path = log_base_path.resolve()
        else:
            self.log_dir: Path = log_base_path.parent.resolve()
        self.log_dir.mkdir(parents=True, exist_ok=True)

    def write(self, log_content: Union[dict, list, str]):
        raise NotImplementedError("Subclasses must implement the write() method.")


class ErrorLog(Log):
    """
    Appends human-readable error entries to a plain text file.

    Workers share one `ErrorLog`, so appends are serialized with a lock to
    keep entries from interleaving.
    """

    _write_lock = threading.Lock()

    def __init__(self, error_log_dir: Path, filename: str = ERROR_LOG_FILE_NAME):
        super().__init__(error_log_dir)
        self.log_file_path = self.log_dir / filename

    def write(self, *error_messages: str):
        """
        Appends one error entry made of the given lines, followed by a separator line.
        """
        if not error_messages:
            return

        timestamp = datetime.now().isoformat(timespec="seconds")
        content_to_write = f"[{timestamp}]\n" + "\n".join(error_messages) + "\n" + self.linesep_marker + "\n"

        with self._write_lock:
            try:
                with self.log_file_path.open("a", encoding="utf-8") as f:
                    f.write(content_to_write)
            except OSError as e:
                # Keep the messages visible on the console if the file cannot be written.
                logger.error(f"Failed to write to error log {self.log_file_path}: {e}")
                for msg in error_messages:
                    logger.error(f"  - {msg}")


class ConversionLog(Log):
    """
    Writes the YAML report summarizing one run of the pipeline.

    The report holds the input and output roots, totals per status, and one
    entry per attempted file, sorted by source path so that reports of
    repeated runs are easy to compare.
    """

    def __init__(self, output_dir: Path, filename: str = CONVERSION_LOG_FILE_NAME):
        super().__init__(output_dir)
        self.log_file_path = self.log_dir / filename

    @staticmethod
    def build_report(
        results: Iterable[ConversionResult], input_dir: Path, output_dir: Path
    ) -> dict:
        entries: List[dict] = sorted(
            (result.to_dict() for result in results), key=lambda entry: entry["source"]
        )
        for index, entry in enumerate(entries, start=1):
            entry["index"] = index
        return {
            "input_dir": str(input_dir),
            "output_dir": str(output_dir),
            "generated_at": datetime.now().isoformat(timespec="seconds"),
            "total": len(entries),
            STATUS_CONVERTED: sum(1 for entry in entries if entry["status"] == STATUS_CONVERTED),
            STATUS_FAILED: sum(1 for entry in entries if entry["status"] == STATUS_FAILED),
            "files": entries,
        }

    def write(self, report: dict):
        """
        Overwrites the report file with the given report dictionary.

        A report that cannot be written is logged but does not fail the run;
        the MP3 files themselves are already in place at this point.
        """
        if not isinstance(report, dict):
            logger.error("ConversionLog.write expects a dictionary as the report.")
            return

        try:
            with self.log_file_path.open("w", encoding="utf-8") as f:
                yaml.dump(
                    report,
                    f,
                    default_flow_style=False,
                    sort_keys=False,
                    allow_unicode=True,
                    indent=4,
                    width=220,
                )
            logger.debug(f"Conversion report written to {self.log_file_path}")
        except OSError as e:
            logger.error(f"Failed to write conversion report {self.log_file_path}: {e}")

    @staticmethod
    def load(report_path: Path) -> dict:
        """Reads a report written by `write()`. Returns an empty dict if the file is missing or invalid."""
        if not report_path.is_file():
            return {}
        try:
            with report_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except (OSError, yaml.YAMLError) as e:
            logger.error(f"Error reading conversion report {report_path}: {e}")
            return {}
        return loaded if isinstance(loaded, dict) else {}
