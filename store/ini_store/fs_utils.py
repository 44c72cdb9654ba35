from __future__ import annotations
import shutil
from pathlib import Path
from typing import Union

PathLike = Union[str, Path]


def expand_tilde(path: PathLike) -> Path:
    """Expand a leading ``~`` / ``~user`` to the home directory."""
    return Path(path).expanduser()


def create_file(path: PathLike) -> Path:
    """Ensure `path` and its parent directories exist. Existing content is left untouched."""
    p = expand_tilde(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    p.touch(exist_ok=True)
    return p


def copy_file(src: PathLike, dst: PathLike) -> Path:
    """Copy file contents from `src` to `dst`, overwriting `dst`. Raises OSError on failure."""
    target = expand_tilde(dst)
    shutil.copyfile(expand_tilde(src), target)
    return target
