from __future__ import annotations

from routecurl.domain.annotations import MAPPING_KINDS, find_annotation
from routecurl.domain.models import Annotation, RoutingMethod

_DIRECT_VERBS = {
    "GetMapping": "GET",
    "PostMapping": "POST",
    "PutMapping": "PUT",
    "DeleteMapping": "DELETE",
    "PatchMapping": "PATCH",
}

# checked in this order against @RequestMapping(method = ...)
_REQUEST_MAPPING_VERBS = ("POST", "PUT", "DELETE", "PATCH")

DEFAULT_VERB = "GET"


def _verb_from_request_mapping(annotation: Annotation) -> str:
    value = annotation.attribute("method")
    if value is None:
        return DEFAULT_VERB
    text = value.render()
    for verb in _REQUEST_MAPPING_VERBS:
        if verb in text:
            return verb
    return DEFAULT_VERB


def infer_http_method(method: RoutingMethod) -> str:
    ann = find_annotation(method.annotations, MAPPING_KINDS)
    if ann is None:
        return DEFAULT_VERB
    if ann.kind == "RequestMapping":
        return _verb_from_request_mapping(ann)
    return _DIRECT_VERBS[ann.kind]
