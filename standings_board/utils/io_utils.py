"""Atomic file writes for the board's HTML and JSON outputs.

Writes go to ``<path>.tmp`` first and are moved into place with
``os.replace`` so a reader never sees a half-written board.
"""

import json
import os
from pathlib import Path
from typing import Any, Union


def _tmp_path(path: Path) -> Path:
    return path.with_suffix(path.suffix + ".tmp")


def write_atomic_text(path: Union[str, Path], content: str, *, encoding: str = "utf-8") -> None:
    """Write string content to ``path`` atomically."""
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    tmp = _tmp_path(target)
    with tmp.open("w", encoding=encoding) as handle:
        handle.write(content)
    os.replace(tmp, target)


def write_atomic_json(path: Union[str, Path], payload: Any) -> None:
    """Serialize ``payload`` as indented JSON and write it atomically."""
    write_atomic_text(path, json.dumps(payload, indent=4, ensure_ascii=False))
