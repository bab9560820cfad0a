from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional

from routecurl.config.locator import locate_config_documents
from routecurl.domain.annotations import MAPPING_KINDS, has_annotation
from routecurl.domain.models import RoutingMethod
from routecurl.errors import MethodNotFoundError
from routecurl.extractors.spring.parser import JavaSourceFile, parse_java_file
from routecurl.extractors.spring.types import SourceTypeIndex
from routecurl.repo.scanner import find_module_root
from routecurl.request.generator import RouteInspector
from routecurl.settings import InspectorSettings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class InspectResult:
    source_path: str
    module_root: str
    method: RoutingMethod
    url: Optional[str]
    http_method: Optional[str]
    command: Optional[str]
    config_files: list[str]


@dataclass(frozen=True)
class RouteRow:
    class_name: str
    method_name: str
    http_method: str
    url: str
    line: int


@dataclass(frozen=True)
class Workspace:
    source: JavaSourceFile
    module_root: Path
    inspector: RouteInspector
    config_files: list[str]


def open_workspace(
    source_path: Path,
    extra_roots: Iterable[Path] = (),
    settings: Optional[InspectorSettings] = None,
) -> Workspace:
    """
    Everything one resolution needs: the parsed controller file, the config
    documents visible to its module and a type index over the module sources.
    """
    source_path = source_path.resolve()
    extra = [Path(r).expanduser().resolve() for r in extra_roots]

    source = parse_java_file(source_path)
    module_root = find_module_root(source_path)
    docs = locate_config_documents(source_path, extra_roots=extra, settings=settings)
    index = SourceTypeIndex.from_roots([module_root, *extra], home=source)

    inspector = RouteInspector(config_documents=docs, type_resolver=index, settings=settings)
    return Workspace(
        source=source,
        module_root=module_root,
        inspector=inspector,
        config_files=[d.source_path or d.name for d in docs],
    )


def select_method(
    source: JavaSourceFile,
    name: Optional[str] = None,
    line: Optional[int] = None,
) -> RoutingMethod:
    if line is not None:
        found = source.method_at_line(line)
        if found is None:
            raise MethodNotFoundError(f"no method encloses line {line}")
        return found

    if name is not None:
        matches = source.find_methods(name)
        if not matches:
            raise MethodNotFoundError(f"no method named {name!r}")
        # overloads: prefer the mapped one
        mapped = [m for m in matches if has_annotation(m.annotations, MAPPING_KINDS)]
        return (mapped or matches)[0]

    routes = source.routing_methods
    if len(routes) == 1:
        return routes[0]
    raise MethodNotFoundError(
        f"{len(routes)} mapped methods in file; pick one with --method or --line"
    )


def run_inspect(
    source_path: Path,
    method_name: Optional[str] = None,
    line: Optional[int] = None,
    extra_roots: Iterable[Path] = (),
    settings: Optional[InspectorSettings] = None,
) -> InspectResult:
    ws = open_workspace(source_path, extra_roots=extra_roots, settings=settings)
    method = select_method(ws.source, name=method_name, line=line)

    result = ws.inspector.inspect(method)
    return InspectResult(
        source_path=ws.source.path,
        module_root=str(ws.module_root),
        method=method,
        url=result.url if result else None,
        http_method=result.http_method if result else None,
        command=result.command if result else None,
        config_files=ws.config_files,
    )


def run_list_routes(
    source_path: Path,
    extra_roots: Iterable[Path] = (),
    settings: Optional[InspectorSettings] = None,
) -> list[RouteRow]:
    ws = open_workspace(source_path, extra_roots=extra_roots, settings=settings)

    rows: list[RouteRow] = []
    for m in ws.source.routing_methods:
        result = ws.inspector.inspect(m)
        if result is None:
            continue
        rows.append(
            RouteRow(
                class_name=m.owner.name if m.owner else "",
                method_name=m.name,
                http_method=result.http_method,
                url=result.url,
                line=m.start_line,
            )
        )
    logger.debug("%d route(s) in %s", len(rows), source_path)
    return rows
