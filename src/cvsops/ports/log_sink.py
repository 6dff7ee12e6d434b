from typing import Protocol


class LogSinkPort(Protocol):
    def print_to_log(self, text: str) -> None: ...
