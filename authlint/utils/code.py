"""Source code helper utilities."""

from __future__ import annotations

from fnmatch import fnmatch
from pathlib import Path
from typing import Generator, Iterable, Sequence


def iter_code_files(
    root_paths: Iterable[str],
    extensions: tuple[str, ...] = (".py",),
    exclude: Sequence[str] = (),
) -> Generator[Path, None, None]:
    """Yield code files beneath the provided paths, skipping excluded ones."""

    for root in root_paths:
        root_path = Path(root)
        candidates = [root_path] if root_path.is_file() else sorted(root_path.rglob("*"))
        for path in candidates:
            if path.suffix in extensions and path.is_file() and not is_excluded(path, exclude):
                yield path


def is_excluded(path: Path, patterns: Sequence[str]) -> bool:
    posix = path.as_posix()
    return any(fnmatch(posix, pattern) or fnmatch(path.name, pattern) for pattern in patterns)
