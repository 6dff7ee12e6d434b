from typing import Protocol


class CommentStorePort(Protocol):
    def set_last_comment(self, text: str) -> None: ...

    def get_last_comment(self) -> str | None: ...
