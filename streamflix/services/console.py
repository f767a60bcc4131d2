"""Console sink shared by worker threads. One writer at a time."""
from __future__ import annotations
import sys
import threading
from typing import Optional, TextIO


class ConsoleSink:
    def __init__(self, stream: Optional[TextIO] = None):
        self._stream = stream
        self._lock = threading.Lock()

    @property
    def stream(self) -> TextIO:
        return self._stream if self._stream is not None else sys.stdout

    def write_line(self, line: str = "") -> None:
        with self._lock:
            self.stream.write(line + "\n")
            self.stream.flush()

    def write_block(self, text: str) -> None:
        """Write a multi-line block without interleaving from other threads."""
        with self._lock:
            self.stream.write(text if text.endswith("\n") else text + "\n")
            self.stream.flush()
