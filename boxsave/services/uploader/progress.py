"""
Upload progress tracking

``next_progress`` decides whether a byte count is worth showing; the tracker
and reader below feed it from the streaming upload and forward the result to
a ``ProgressReporter``.
"""

from dataclasses import dataclass
from typing import Optional

from tqdm import tqdm

from boxsave.services.uploader.interfaces import ProgressReporter


@dataclass(frozen=True)
class ProgressUpdate:
    sent: int
    total: int
    percent: int
    clear_line: bool = True  # replace the previous progress line, don't append


def percent_complete(sent: int, total: int) -> int:
    if total <= 0:
        return 100
    return max(0, min(100, round(sent / total * 100)))


def next_progress(sent: int, total: int, previous_percent: Optional[int]) -> Optional[ProgressUpdate]:
    """Return an update only when the rounded percentage changed"""
    percent = percent_complete(sent, total)
    if percent == previous_percent:
        return None
    return ProgressUpdate(sent=sent, total=total, percent=percent)


class ProgressTracker:
    """Accumulates sent bytes for one upload and notifies the reporter"""

    def __init__(self, reporter: ProgressReporter, total: int):
        self.reporter = reporter
        self.total = total
        self.sent = 0
        self.last_percent: Optional[int] = None

    def advance(self, nbytes: int) -> Optional[ProgressUpdate]:
        self.sent += nbytes
        update = next_progress(self.sent, self.total, self.last_percent)
        if update is None:
            return None

        self.last_percent = update.percent
        if update.clear_line:
            self.reporter.clear_line()
        self.reporter.report_progress(update.sent, update.total)
        return update


class ProgressReader:
    """
    Read-only file wrapper that reports every chunk handed to the transport.

    The length is derived from the size captured before the upload started,
    so the file is never stat'ed again while streaming.
    """

    def __init__(self, fileobj, size: int, tracker: ProgressTracker):
        self._fileobj = fileobj
        self._size = size
        self._tracker = tracker
        self._consumed = 0

    def __len__(self):
        return max(0, self._size - self._consumed)

    def read(self, size: int = -1) -> bytes:
        remaining = len(self)
        if remaining == 0 or size == 0:
            return b""
        if size is None or size < 0 or size > remaining:
            size = remaining

        chunk = self._fileobj.read(size)
        if not chunk:
            raise OSError(f"File shrank during upload: {self._consumed} of {self._size} bytes read")

        self._consumed += len(chunk)
        self._tracker.advance(len(chunk))
        return chunk


class ConsoleProgressReporter(ProgressReporter):
    """Renders upload progress on the terminal with a tqdm bar"""

    def __init__(self, desc: str = "Uploading"):
        self.desc = desc
        self._bar: Optional[tqdm] = None

    def info(self, message: str) -> None:
        tqdm.write(message)

    def clear_line(self) -> None:
        if self._bar is None:
            return
        # the last sub-percent bytes are never reported, close once at 100%
        if percent_complete(self._bar.n, self._bar.total or 0) == 100:
            self.close()
        else:
            self._bar.clear()

    def report_progress(self, sent: int, total: int) -> None:
        if self._bar is not None and self._bar.total != total:
            self.close()
        if self._bar is None:
            self._bar = tqdm(total=total, desc=self.desc, unit="B", unit_scale=True, leave=False)
        self._bar.update(sent - self._bar.n)
        if sent >= total:
            self.close()

    def close(self) -> None:
        if self._bar is not None:
            self._bar.close()
            self._bar = None
