from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Optional

from routecurl.domain.models import TypeDefinition, TypeRef
from routecurl.errors import SourceParseError
from routecurl.extractors.spring.parser import JavaSourceFile, parse_java_file
from routecurl.repo.scanner import scan_java_files

logger = logging.getLogger(__name__)


class SourceTypeIndex:
    """
    TypeResolver over the Java sources of one module.

    A reference is looked up in the scope of the file it is written in (the
    referrer's file, or the home file when no referrer is given):
      1. exact qualified name (com.acme.dto.UserDto)
      2. member types of the referrer and its enclosing types, then any
         type declared in the same file
      3. single-type imports
      4. the file's own package
      5. on-demand (wildcard) imports
    Outer.Inner resolves Outer this way and appends the rest. When the scope
    has no answer, a global fallback applies: qualified-name suffix, then
    simple name ranked by home file, home package and qualified name.
    """

    def __init__(self, sources: Iterable[JavaSourceFile] = (), home: Optional[JavaSourceFile] = None) -> None:
        self._by_qualified: dict[str, TypeDefinition] = {}
        self._by_simple: dict[str, list[TypeDefinition]] = {}
        self._file_of: dict[str, JavaSourceFile] = {}
        self._home: Optional[JavaSourceFile] = None
        self._home_types: set[str] = set()
        for src in sources:
            self.add(src)
        if home is not None:
            self.set_home(home)

    def add(self, source: JavaSourceFile) -> None:
        for parsed in source.types:
            d = parsed.definition
            if d.qualified_name in self._by_qualified:
                continue
            self._by_qualified[d.qualified_name] = d
            self._by_simple.setdefault(d.name, []).append(d)
            self._file_of[d.qualified_name] = source

    def set_home(self, source: JavaSourceFile) -> None:
        """The controller file: default scope and tie-breaker for lookups."""
        self.add(source)
        self._home = source
        self._home_types = {t.definition.qualified_name for t in source.types}

    def __len__(self) -> int:
        return len(self._by_qualified)

    def resolve(self, ref: TypeRef, referrer: Optional[str] = None) -> Optional[TypeDefinition]:
        if ref.is_array:
            return None

        raw = ref.name.split("<", 1)[0].strip()
        hit = self._by_qualified.get(raw)
        if hit is not None:
            return hit

        source = self._file_of.get(referrer or "", self._home)
        if source is not None:
            first, _, rest = raw.partition(".")
            scoped = self._in_scope(first, source, referrer)
            if scoped is not None:
                qualified = f"{scoped.qualified_name}.{rest}" if rest else scoped.qualified_name
                hit = self._by_qualified.get(qualified)
                if hit is not None:
                    return hit

        if "." in raw:
            suffix = "." + raw
            matches = sorted(q for q in self._by_qualified if q.endswith(suffix))
            if matches:
                return self._by_qualified[matches[0]]

        candidates = self._by_simple.get(ref.simple_name, [])
        if not candidates:
            logger.debug("unresolved type %s", ref.name)
            return None
        return min(candidates, key=self._rank)

    def _in_scope(self, name: str, source: JavaSourceFile, referrer: Optional[str]) -> Optional[TypeDefinition]:
        # member types of the referrer, then of each enclosing type
        if referrer and self._file_of.get(referrer) is source:
            scope = referrer
            while scope and scope != source.package:
                hit = self._by_qualified.get(f"{scope}.{name}")
                if hit is not None:
                    return hit
                scope = scope.rpartition(".")[0]

        declared = [t.definition for t in source.types if t.definition.name == name]
        if declared:
            return min(declared, key=lambda d: d.qualified_name.count("."))

        for imp in source.imports:
            if not imp.endswith(".*") and imp.rsplit(".", 1)[-1] == name:
                hit = self._by_qualified.get(imp)
                if hit is not None:
                    return hit

        own_package = f"{source.package}.{name}" if source.package else name
        hit = self._by_qualified.get(own_package)
        if hit is not None:
            return hit

        for imp in source.imports:
            if imp.endswith(".*"):
                hit = self._by_qualified.get(f"{imp[:-2]}.{name}")
                if hit is not None:
                    return hit
        return None

    def _rank(self, d: TypeDefinition) -> tuple[int, int, str]:
        in_home = d.qualified_name in self._home_types
        package = self._file_of[d.qualified_name].package
        home = self._home.package if self._home is not None else ""
        same_package = bool(home) and (package == home or package.startswith(home + "."))
        return (0 if in_home else 1, 0 if same_package else 1, d.qualified_name)

    @classmethod
    def from_roots(
        cls,
        roots: Iterable[Path],
        home: Optional[JavaSourceFile] = None,
        max_files: Optional[int] = 20_000,
    ) -> "SourceTypeIndex":
        index = cls()
        for root in roots:
            for p in scan_java_files(root, max_files=max_files):
                try:
                    index.add(parse_java_file(Path(p)))
                except SourceParseError as exc:
                    logger.debug("skipping %s: %s", p, exc)
        if home is not None:
            index.set_home(home)
        logger.debug("type index: %d type(s)", len(index))
        return index
