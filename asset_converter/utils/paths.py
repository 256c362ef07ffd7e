"""Project root discovery for config and cache paths."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional, Union


ROOT_ENV_VAR = "ASSET_CONVERTER_ROOT"
ROOT_MARKERS = ("pyproject.toml", "config.yaml", ".git")


def _walk_up(start: Path) -> Iterator[Path]:
    yield start
    yield from start.parents


def find_project_root(start: Optional[Path] = None) -> Path:
    """
    Directory holding one of ROOT_MARKERS, searched upward from `start`,
    the working directory, then this package. ASSET_CONVERTER_ROOT wins
    when it names an existing directory; the working directory is the
    last resort.
    """
    override = os.getenv(ROOT_ENV_VAR)
    if override:
        root = Path(override).expanduser().resolve()
        if root.is_dir():
            return root

    origins = [Path(start).resolve()] if start is not None else []
    origins += [Path.cwd(), Path(__file__).resolve().parent]

    for origin in origins:
        for directory in _walk_up(origin):
            if any((directory / marker).exists() for marker in ROOT_MARKERS):
                return directory
    return Path.cwd()


def resolve_project_path(path: Union[str, Path], root: Optional[Path] = None) -> Path:
    """Absolute paths pass through; relative ones are anchored at the project root."""
    candidate = Path(path).expanduser()
    if candidate.is_absolute():
        return candidate
    return ((root or find_project_root()) / candidate).resolve()
