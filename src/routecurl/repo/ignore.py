from __future__ import annotations

from pathlib import Path

DEFAULT_IGNORES = {
    ".git",
    ".gradle",
    ".idea",
    ".mvn",
    ".venv",
    "venv",
    "__pycache__",
    "node_modules",
    "target",
    "build",
    "out",
    "bin",
}

BUILD_FILES = ("pom.xml", "build.gradle", "build.gradle.kts")


def should_ignore_dir(dir_path: Path) -> bool:
    return dir_path.name in DEFAULT_IGNORES


def is_module_root(dir_path: Path) -> bool:
    return any((dir_path / name).is_file() for name in BUILD_FILES)
