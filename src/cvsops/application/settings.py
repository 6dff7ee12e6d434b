from __future__ import annotations

import codecs
import os
import tomllib
from dataclasses import dataclass
from pathlib import Path

from cvsops.adapters.errors import ConfigError
from cvsops.application.command_runner import DEFAULT_EXECUTABLE

CONFIG_FILENAME = ".cvsops.toml"
STATE_FILENAME = ".cvsops-state.toml"
DEFAULT_ENCODING = "utf-8"


@dataclass(frozen=True)
class Settings:
    cvsroot: str
    work_dir: Path
    state_file: Path
    executable: str = DEFAULT_EXECUTABLE
    encoding: str = DEFAULT_ENCODING


def read_config(work_dir: Path) -> dict[str, object]:
    path = work_dir / CONFIG_FILENAME
    if not path.exists():
        return {}
    try:
        raw = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(
            f"Could not parse {CONFIG_FILENAME}",
            details={"path": str(path)},
            cause=e,
        )
    section = raw.get("cvsops")
    return dict(section) if isinstance(section, dict) else {}


def _pick(*candidates: object) -> str | None:
    for value in candidates:
        if isinstance(value, str) and value:
            return value
    return None


def _checked_encoding(name: str) -> str:
    try:
        codecs.lookup(name)
    except LookupError as e:
        raise ConfigError(
            f"Unknown encoding: {name}",
            details={"encoding": name},
            hint=f"Fix encoding in {CONFIG_FILENAME}",
            cause=e,
        )
    return name


def resolve_state_file(work_dir: Path, config: dict[str, object]) -> Path:
    return work_dir / (_pick(config.get("state_file")) or STATE_FILENAME)


def load_settings(
    work_dir: Path,
    cvsroot: str | None = None,
    executable: str | None = None,
) -> Settings:
    config = read_config(work_dir)
    root = _pick(cvsroot, os.environ.get("CVSROOT"), config.get("cvsroot"))
    if root is None:
        raise ConfigError(
            "CVSROOT is not set",
            hint=f"Pass --cvsroot, export CVSROOT or set cvsroot in {CONFIG_FILENAME}",
        )
    return Settings(
        cvsroot=root,
        work_dir=work_dir,
        state_file=resolve_state_file(work_dir, config),
        executable=_pick(
            executable, os.environ.get("CVSOPS_EXECUTABLE"), config.get("executable")
        )
        or DEFAULT_EXECUTABLE,
        encoding=_checked_encoding(_pick(config.get("encoding")) or DEFAULT_ENCODING),
    )
