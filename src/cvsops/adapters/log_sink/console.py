import sys
from typing import TextIO


class ConsoleLogSink:
    """Writes each chunk as-is, without adding newlines.

    Chunks are also kept in ``transcript`` in the order they arrived.
    """

    def __init__(self, stream: TextIO | None = None) -> None:
        self._stream = stream
        self.transcript: list[str] = []

    def print_to_log(self, text: str) -> None:
        self.transcript.append(text)
        stream = self._stream or sys.stderr
        stream.write(text)
        stream.flush()
