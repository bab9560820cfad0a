from routecurl.domain.models import (
    Annotation,
    BoolValue,
    Parameter,
    RoutingMethod,
    TextValue,
    TypeRef,
)
from routecurl.request.params import classify_parameters, resolve_content_type


def param(name: str, type_name: str, *annotations: Annotation) -> Parameter:
    return Parameter(name=name, type=TypeRef(name=type_name), annotations=annotations)


def test_path_variable_name_fallbacks():
    m = RoutingMethod(
        name="m",
        parameters=(
            param("a", "Long", Annotation(name="PathVariable", attributes={"value": TextValue(text="userId")})),
            param("b", "String", Annotation(name="PathVariable", attributes={"name": TextValue(text="slug")})),
            param("c", "int", Annotation(name="PathVariable")),
        ),
    )
    res = classify_parameters(m)
    assert [(p.name, p.type_name) for p in res.path_variables] == [
        ("userId", "Long"),
        ("slug", "String"),
        ("c", "int"),
    ]
    assert res.query_params == ()
    assert res.body is None


def test_request_param_attributes():
    m = RoutingMethod(
        name="m",
        parameters=(
            param(
                "page",
                "int",
                Annotation(
                    name="RequestParam",
                    attributes={
                        "value": TextValue(text="p"),
                        "required": BoolValue(flag=False),
                        "defaultValue": TextValue(text="0"),
                    },
                ),
            ),
            param("q", "String", Annotation(name="RequestParam")),
        ),
    )
    first, second = classify_parameters(m).query_params
    assert (first.name, first.required, first.default_value) == ("p", False, "0")
    assert (second.name, second.required, second.default_value) == ("q", True, None)


def test_non_boolean_required_defaults_to_true():
    m = RoutingMethod(
        name="m",
        parameters=(
            param("q", "String", Annotation(name="RequestParam", attributes={"required": TextValue(text="x")})),
        ),
    )
    assert classify_parameters(m).query_params[0].required is True


def test_unannotated_simple_types_become_optional_query_params():
    m = RoutingMethod(
        name="m",
        parameters=(
            param("limit", "Integer"),
            param("flag", "boolean"),
        ),
    )
    qps = classify_parameters(m).query_params
    assert [(q.name, q.required, q.default_value) for q in qps] == [
        ("limit", False, None),
        ("flag", False, None),
    ]


def test_unannotated_complex_type_is_ignored():
    m = RoutingMethod(
        name="m",
        parameters=(
            param("request", "HttpServletRequest"),
            param("filter", "UserFilter"),
            param("ids", "List<Long>"),
        ),
    )
    res = classify_parameters(m)
    assert res.path_variables == ()
    assert res.query_params == ()
    assert res.body is None


def test_only_first_request_body_counts():
    m = RoutingMethod(
        name="m",
        parameters=(
            param("first", "UserDto", Annotation(name="RequestBody")),
            param("second", "OtherDto", Annotation(name="RequestBody")),
        ),
    )
    res = classify_parameters(m)
    assert res.body.name == "first"
    assert res.body.type.name == "UserDto"
    assert res.query_params == ()


def test_path_variable_takes_precedence_over_other_annotations():
    m = RoutingMethod(
        name="m",
        parameters=(param("id", "Long", Annotation(name="RequestParam"), Annotation(name="PathVariable")),),
    )
    res = classify_parameters(m)
    assert [p.name for p in res.path_variables] == ["id"]
    assert res.query_params == ()


def test_content_type():
    body_method = RoutingMethod(
        name="m",
        annotations=(Annotation(name="RequestMapping", attributes={"consumes": TextValue(text="application/xml")}),),
        parameters=(param("dto", "Dto", Annotation(name="RequestBody")),),
    )
    body = classify_parameters(body_method).body
    assert resolve_content_type(body_method, body) == "application/xml"

    post = RoutingMethod(name="m", annotations=(Annotation(name="PostMapping"),))
    assert resolve_content_type(post, body) == "application/json"
    assert resolve_content_type(post, None) is None
