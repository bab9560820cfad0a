from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from routecurl.domain.annotations import (
    PATH_VARIABLE_KINDS,
    REQUEST_BODY_KINDS,
    REQUEST_PARAM_KINDS,
    attribute_bool,
    attribute_text,
    bound_name,
    find_annotation,
)
from routecurl.domain.models import Parameter, RoutingMethod, TypeRef
from routecurl.settings import InspectorSettings

# Unannotated parameters of these types bind from the query string.
SIMPLE_TYPES = frozenset(
    {
        "String",
        "char", "Character",
        "byte", "Byte",
        "short", "Short",
        "int", "Integer",
        "long", "Long",
        "float", "Float",
        "double", "Double",
        "boolean", "Boolean",
    }
)


@dataclass(frozen=True)
class PathVariableSpec:
    name: str
    type_name: str


@dataclass(frozen=True)
class QueryParamSpec:
    name: str
    type_name: str
    required: bool = True
    default_value: Optional[str] = None


@dataclass(frozen=True)
class RequestBodySpec:
    name: str
    type: TypeRef


@dataclass(frozen=True)
class ClassifiedParameters:
    path_variables: tuple[PathVariableSpec, ...] = ()
    query_params: tuple[QueryParamSpec, ...] = ()
    body: Optional[RequestBodySpec] = None


def is_simple_type(ref: TypeRef) -> bool:
    return not ref.is_array and not ref.arguments and ref.simple_name in SIMPLE_TYPES


def _query_param(param: Parameter) -> Optional[QueryParamSpec]:
    ann = find_annotation(param.annotations, REQUEST_PARAM_KINDS)
    if ann is not None:
        return QueryParamSpec(
            name=bound_name(ann, param.name),
            type_name=param.type.name,
            required=attribute_bool(ann, "required", True),
            default_value=attribute_text(ann, "defaultValue"),
        )

    if is_simple_type(param.type):
        return QueryParamSpec(name=param.name, type_name=param.type.name, required=False)

    return None


def classify_parameters(method: RoutingMethod) -> ClassifiedParameters:
    """
    Split method parameters into path variables, query parameters and at
    most one request body.

    Precedence per parameter: @PathVariable, @RequestBody, @RequestParam,
    then unannotated simple types as optional query parameters. Only the
    first @RequestBody counts; anything else is left out.
    """
    path_vars: list[PathVariableSpec] = []
    query: list[QueryParamSpec] = []
    body: Optional[RequestBodySpec] = None

    for param in method.parameters:
        pv = find_annotation(param.annotations, PATH_VARIABLE_KINDS)
        if pv is not None:
            path_vars.append(PathVariableSpec(name=bound_name(pv, param.name), type_name=param.type.name))
            continue

        if find_annotation(param.annotations, REQUEST_BODY_KINDS) is not None:
            if body is None:
                body = RequestBodySpec(name=param.name, type=param.type)
            continue

        qp = _query_param(param)
        if qp is not None:
            query.append(qp)

    return ClassifiedParameters(
        path_variables=tuple(path_vars),
        query_params=tuple(query),
        body=body,
    )


def resolve_content_type(
    method: RoutingMethod,
    body: Optional[RequestBodySpec],
    settings: Optional[InspectorSettings] = None,
) -> Optional[str]:
    if body is None:
        return None
    settings = settings or InspectorSettings()

    ann = find_annotation(method.annotations, ("RequestMapping",))
    if ann is not None:
        consumes = attribute_text(ann, "consumes")
        if consumes:
            return consumes
    return settings.default_content_type
