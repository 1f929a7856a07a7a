"""
Provides the thread-safe progress tracker shared by the conversion workers.

The tracker counts attempted files and redraws a single progress line, e.g.

    [====================>                   ] 1/2 (50.0%)

every time a worker finishes a file. Counting and drawing happen under one
lock, so the displayed line always matches a count that was actually reached.
"""

import sys
import threading
from contextlib import contextmanager
from typing import Iterator, Optional, TextIO

from loguru import logger

from ..config.common import PROGRESS_WIDTH


class ProgressTracker:
    """
    Counts completed work items and renders them as a progress bar.

    `initialize()` must be called once with the number of items before the
    workers start; `record_completion()` is then called once per attempted
    item from any worker thread. The count never decreases and never exceeds
    the total.

    A run with zero items renders a full bar reading `0/0 (100.0%)`: there is
    nothing left to do, and no division is performed.
    """

    def __init__(self, width: int = PROGRESS_WIDTH, stream: Optional[TextIO] = None):
        if width < 1:
            raise ValueError(f"Progress bar width must be at least 1, got {width}")
        self.width = width
        self.stream = stream if stream is not None else sys.stdout
        self._lock = threading.Lock()
        self._total = 0
        self._completed = 0
        self._line_active = False

    @property
    def total(self) -> int:
        return self._total

    @property
    def completed(self) -> int:
        with self._lock:
            return self._completed

    def initialize(self, total: int):
        if total < 0:
            raise ValueError(f"Total must be non-negative, got {total}")
        with self._lock:
            self._total = total
            self._completed = 0
            self._draw()

    def record_completion(self):
        """Counts one finished item and redraws the progress line."""
        with self._lock:
            if self._completed >= self._total:
                logger.warning(
                    f"Progress already at {self._completed}/{self._total}; ignoring extra completion."
                )
                return
            self._completed += 1
            self._draw()

    @contextmanager
    def paused(self) -> Iterator[None]:
        """
        Ends the current progress line so other output can be printed cleanly.

        The lock is held for the duration of the block, so no redraw can
        interleave with the output written inside it. The bar is redrawn on
        the next completion.
        """
        with self._lock:
            self._break_line()
            yield

    def finish(self):
        """Terminates the progress line with a newline."""
        with self._lock:
            self._break_line()

    def render(self) -> str:
        with self._lock:
            return self.render_bar(self._completed, self._total, self.width)

    @staticmethod
    def render_bar(completed: int, total: int, width: int = PROGRESS_WIDTH) -> str:
        if total <= 0:
            filled = width
            percentage = 100.0
        else:
            filled = width * completed // total
            percentage = completed * 100 / total

        bar = "=" * filled
        if filled < width:
            bar += ">" + " " * (width - filled - 1)
        return f"[{bar}] {completed}/{total} ({percentage:.1f}%)"

    def _draw(self):
        self.stream.write("\r" + self.render_bar(self._completed, self._total, self.width))
        self.stream.flush()
        self._line_active = True

    def _break_line(self):
        if self._line_active:
            self.stream.write("\n")
            self.stream.flush()
            self._line_active = False
