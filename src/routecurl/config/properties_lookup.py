from __future__ import annotations

import re
from typing import Optional


def extract_property(content: str, key: str) -> Optional[str]:
    # key=value or key = value; first match wins
    pattern = re.compile(r"^\s*" + re.escape(key) + r"\s*=\s*(.+)$", re.MULTILINE)
    m = pattern.search(content)
    if m is None:
        return None
    return m.group(1).strip()
