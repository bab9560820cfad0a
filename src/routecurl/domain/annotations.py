from __future__ import annotations

from typing import Callable, Iterable, Optional

from routecurl.domain.models import Annotation, BoolValue, TextListValue, TextValue

MAPPING_KINDS = (
    "RequestMapping",
    "GetMapping",
    "PostMapping",
    "PutMapping",
    "DeleteMapping",
    "PatchMapping",
)

PATH_VARIABLE_KINDS = ("PathVariable",)
REQUEST_BODY_KINDS = ("RequestBody",)
REQUEST_PARAM_KINDS = ("RequestParam",)
IGNORE_KINDS = ("JsonIgnore", "Transient")
RENAME_KINDS = ("JsonProperty",)


def first_non_empty(*extractors: Callable[[], Optional[str]]) -> str:
    """
    Try each extractor in order and return the first non-empty result.
    Returns "" when every extractor comes up empty.
    """
    for extract in extractors:
        value = extract()
        if value:
            return value
    return ""


def find_annotation(annotations: Iterable[Annotation], kinds: Iterable[str]) -> Optional[Annotation]:
    # first match in declaration order wins
    wanted = set(kinds)
    for ann in annotations:
        if ann.kind in wanted:
            return ann
    return None


def has_annotation(annotations: Iterable[Annotation], kinds: Iterable[str]) -> bool:
    return find_annotation(annotations, kinds) is not None


def attribute_text(annotation: Annotation, key: str) -> Optional[str]:
    """
    String view of one attribute. None when the attribute is absent.

    A list value yields its first element ("" if the list is empty). Booleans
    and non-literal expressions have no string form and yield "".
    """
    value = annotation.attribute(key)
    if value is None:
        return None
    if isinstance(value, TextValue):
        return value.text if value.literal else ""
    if isinstance(value, TextListValue):
        return value.items[0] if value.items else ""
    return ""


def attribute_bool(annotation: Annotation, key: str, default: bool) -> bool:
    value = annotation.attribute(key)
    if isinstance(value, BoolValue):
        return value.flag
    return default


def annotation_path(annotation: Optional[Annotation]) -> str:
    # value -> path -> ""
    if annotation is None:
        return ""
    return first_non_empty(
        lambda: attribute_text(annotation, "value"),
        lambda: attribute_text(annotation, "path"),
    )


def bound_name(annotation: Annotation, declared: str) -> str:
    # value -> name -> declared identifier
    return first_non_empty(
        lambda: attribute_text(annotation, "value"),
        lambda: attribute_text(annotation, "name"),
        lambda: declared,
    )
