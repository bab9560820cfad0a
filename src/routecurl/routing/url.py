from __future__ import annotations

from typing import Optional

from routecurl.config.resolver import server_origin
from routecurl.domain.annotations import MAPPING_KINDS, annotation_path, find_annotation
from routecurl.domain.models import ResolvedServerConfig, RoutingClass, RoutingMethod
from routecurl.settings import InspectorSettings


def _normalize_segment(segment: str) -> str:
    # "users/" -> "/users", "/" -> ""
    if not segment.startswith("/"):
        segment = "/" + segment
    if segment.endswith("/"):
        segment = segment[:-1]
    return segment


def join_path(context_path: str, controller_path: str, method_path: str) -> str:
    """
    Join context + controller + method into one absolute path.

    join_path("", "", "/x")               -> "/x"
    join_path("/api", "/users", "/{id}")  -> "/api/users/{id}"
    join_path("", "", "")                 -> "/"
    """
    parts = [
        _normalize_segment(seg)
        for seg in (context_path, controller_path, method_path)
        if seg
    ]
    path = "".join(parts)
    return path or "/"


def controller_base_path(owner: Optional[RoutingClass]) -> str:
    if owner is None:
        return ""
    return annotation_path(find_annotation(owner.annotations, ("RequestMapping",)))


def method_path(method: RoutingMethod) -> Optional[str]:
    """None when the method carries no mapping annotation at all."""
    ann = find_annotation(method.annotations, MAPPING_KINDS)
    if ann is None:
        return None
    return annotation_path(ann)


def resolve_url(
    method: RoutingMethod,
    server: ResolvedServerConfig,
    settings: Optional[InspectorSettings] = None,
) -> Optional[str]:
    path = method_path(method)
    if path is None:
        return None

    full_path = join_path(
        server.context_path or "",
        controller_base_path(method.owner),
        path,
    )
    return server_origin(server, settings) + full_path
