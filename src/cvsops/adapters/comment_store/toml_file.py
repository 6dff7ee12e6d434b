from __future__ import annotations

import tomllib
from pathlib import Path

import tomli_w

from cvsops.adapters.errors import CommentStoreError

STATE_TABLE = "state"
LAST_COMMENT_KEY = "last_comment"


class TomlCommentStore:
    def __init__(self, path: Path) -> None:
        self.path = path

    def _read(self) -> dict[str, object]:
        if not self.path.exists():
            return {}
        try:
            return dict(tomllib.loads(self.path.read_text(encoding="utf-8")))
        except (OSError, tomllib.TOMLDecodeError) as e:
            raise CommentStoreError(
                f"Could not read {self.path.name}",
                details={"path": str(self.path)},
                cause=e,
            )

    def get_last_comment(self) -> str | None:
        state = self._read().get(STATE_TABLE)
        if not isinstance(state, dict):
            return None
        value = state.get(LAST_COMMENT_KEY)
        return value if isinstance(value, str) else None

    def set_last_comment(self, text: str) -> None:
        data = self._read()
        state = data.get(STATE_TABLE)
        state = dict(state) if isinstance(state, dict) else {}
        state[LAST_COMMENT_KEY] = text
        data[STATE_TABLE] = state
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(tomli_w.dumps(data), encoding="utf-8")
        except OSError as e:
            raise CommentStoreError(
                f"Could not write {self.path.name}",
                details={"path": str(self.path)},
                cause=e,
            )
