from __future__ import annotations

import os
from pathlib import Path
from typing import Callable, Optional

from routecurl.repo.ignore import is_module_root, should_ignore_dir


def find_module_root(path: Path) -> Path:
    """
    Nearest ancestor (or the directory itself) holding a Maven/Gradle build
    file. Falls back to the file's own directory when there is none.
    """
    path = path.resolve()
    start = path if path.is_dir() else path.parent
    for candidate in (start, *start.parents):
        if is_module_root(candidate):
            return candidate
    return start


def scan_module_files(
    module_root: Path,
    accept: Callable[[str], bool],
    max_files: Optional[int] = None,
) -> list[str]:
    """
    Absolute paths of files under module_root whose name passes accept().

    Build/VCS directories are pruned, and so are nested directories with
    their own build file: those belong to a different module.
    Deterministic order (sorted walk).
    """
    module_root = module_root.resolve()
    out: list[str] = []
    for root, dirs, files in _walk(module_root):
        root_p = Path(root)

        dirs[:] = sorted(
            d
            for d in dirs
            if not should_ignore_dir(root_p / d) and not is_module_root(root_p / d)
        )

        for f in sorted(files):
            if accept(f):
                out.append(str((root_p / f).resolve()))
                if max_files is not None and len(out) >= max_files:
                    return out
    return out


def scan_java_files(module_root: Path, max_files: Optional[int] = None) -> list[str]:
    return scan_module_files(module_root, lambda name: name.endswith(".java"), max_files=max_files)


def _walk(root: Path):
    # Separate helper to make unit testing easier (can be mocked)
    return os.walk(root)
