from routecurl.domain.models import (
    Annotation,
    Parameter,
    ResolvedServerConfig,
    RoutingClass,
    RoutingMethod,
    TextListValue,
    TextValue,
    TypeRef,
)
from routecurl.request.generator import RouteInspector
from routecurl.routing.url import join_path, method_path, resolve_url


def ann(name: str, **attrs) -> Annotation:
    values = {}
    for k, v in attrs.items():
        values[k] = TextListValue(items=tuple(v)) if isinstance(v, (list, tuple)) else TextValue(text=v)
    return Annotation(name=name, attributes=values)


def test_join_path():
    assert join_path("", "", "/x") == "/x"
    assert join_path("/api", "/users", "/{id}") == "/api/users/{id}"
    assert join_path("", "", "") == "/"
    assert join_path("api/", "users/", "list/") == "/api/users/list"
    assert join_path("/", "", "") == "/"


def test_no_mapping_annotation_means_no_url():
    m = RoutingMethod(name="helper", annotations=(ann("Transactional"),))
    assert method_path(m) is None
    assert resolve_url(m, ResolvedServerConfig()) is None


def test_value_then_path_attribute_and_list_values():
    owner = RoutingClass(name="C", annotations=(ann("RequestMapping", path=["/v2", "/v2-alt"]),))
    m = RoutingMethod(name="list", annotations=(ann("GetMapping", value="", path="/items"),), owner=owner)
    assert resolve_url(m, ResolvedServerConfig()) == "http://localhost:8080/v2/items"


def test_mapping_without_path_uses_class_path():
    owner = RoutingClass(name="C", annotations=(ann("RequestMapping", value="/users"),))
    m = RoutingMethod(name="all", annotations=(ann("GetMapping"),), owner=owner)
    assert resolve_url(m, ResolvedServerConfig()) == "http://localhost:8080/users"


def test_first_mapping_annotation_wins():
    m = RoutingMethod(
        name="x",
        annotations=(ann("PostMapping", value="/first"), ann("GetMapping", value="/second")),
    )
    assert resolve_url(m, ResolvedServerConfig(port="80")) == "http://localhost/first"


def test_class_without_request_mapping_contributes_nothing():
    owner = RoutingClass(name="C", annotations=(ann("RestController"),))
    m = RoutingMethod(name="x", annotations=(ann("DeleteMapping", value="items/{id}"),), owner=owner)
    assert resolve_url(m, ResolvedServerConfig(context_path="ctx")) == "http://localhost:8080/ctx/items/{id}"


def test_end_to_end_users_by_id():
    owner = RoutingClass(name="UserController", annotations=(ann("RequestMapping", value="/users"),))
    m = RoutingMethod(
        name="getUser",
        annotations=(ann("GetMapping", value="/{id}"),),
        parameters=(
            Parameter(name="id", type=TypeRef(name="Long"), annotations=(ann("PathVariable"),)),
        ),
        owner=owner,
    )
    inspector = RouteInspector(server_config=ResolvedServerConfig(context_path="/api/v1"))

    assert inspector.resolve_url(m) == "http://localhost:8080/api/v1/users/{id}"

    command = inspector.generate_request(m)
    assert command.startswith("curl -X GET")
    assert '"http://localhost:8080/api/v1/users/${ID}"' in command
    assert "-d '" not in command
    assert "Content-Type" not in command
    assert "# ID - Path variable (Long)" in command


def test_generate_request_is_none_without_mapping():
    inspector = RouteInspector()
    assert inspector.generate_request(RoutingMethod(name="helper")) is None
