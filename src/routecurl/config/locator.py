from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from routecurl.domain.models import ConfigDocument
from routecurl.repo.scanner import find_module_root, scan_module_files
from routecurl.settings import InspectorSettings

logger = logging.getLogger(__name__)


def read_config_document(path: Path, priority: int) -> Optional[ConfigDocument]:
    """Read one candidate file; None when it can't be read."""
    try:
        content = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        logger.debug("skipping unreadable config %s: %s", path, exc)
        return None
    return ConfigDocument(
        name=path.name,
        content=content,
        priority=priority,
        source_path=str(path),
    )


def locate_config_documents(
    source_path: Path,
    extra_roots: Iterable[Path] = (),
    settings: Optional[InspectorSettings] = None,
) -> list[ConfigDocument]:
    """
    Collect application*.yml|yaml|properties candidates visible to the
    module that owns source_path.

    Scope: the module root (nearest build file) plus any extra roots given
    for its dependency modules. Nested modules and build output are not
    searched. Priority follows discovery order: module first, then extra
    roots in the order given.
    """
    settings = settings or InspectorSettings()
    wanted = set(settings.config_file_names)

    module_root = find_module_root(source_path)
    roots = [module_root]
    for extra in extra_roots:
        resolved = Path(extra).expanduser().resolve()
        if resolved not in roots:
            roots.append(resolved)

    docs: list[ConfigDocument] = []
    for root in roots:
        if not root.is_dir():
            logger.debug("config root %s is not a directory, skipped", root)
            continue
        for p in scan_module_files(root, lambda name: name in wanted):
            logger.debug("config candidate: %s", p)
            doc = read_config_document(Path(p), priority=len(docs))
            if doc is not None:
                docs.append(doc)

    logger.debug("module root %s: %d config document(s)", module_root, len(docs))
    return docs
