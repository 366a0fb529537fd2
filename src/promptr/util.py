from __future__ import annotations
from collections.abc import Container
from pathlib import Path


def cat(path: Path) -> str | None:
    """
    Return the contents of the given file with leading & trailing whitespace
    stripped.  If the file does not exist, return `None`.
    """
    try:
        return path.read_text(encoding="utf-8").strip()
    except FileNotFoundError:
        return None


def read_counter(path: Path) -> int:
    """
    Read a file containing a single non-negative integer, like the progress
    counters Git keeps while rebasing

    :raises ValueError: if the file is missing or does not contain an integer
    """
    s = cat(path)
    if s is None:
        raise ValueError(f"{path} does not exist")
    if not s.isdigit():
        raise ValueError(f"{path} does not contain a counter: {s!r}")
    return int(s)


def find_upwards(name: str, start: Path, skip: Container[Path] = ()) -> Path | None:
    """
    Search ``start`` and its ancestors for an entry named ``name`` and return
    the path to the first one found.  Directories in ``skip`` are not
    searched (but their ancestors are).
    """
    for d in [start, *start.parents]:
        if d not in skip and (d / name).exists():
            return d / name
    return None
