from routecurl.request.command import (
    append_query_string,
    assemble_command,
    substitute_path_variables,
)
from routecurl.request.params import PathVariableSpec, QueryParamSpec


def test_path_variables_become_placeholders():
    url = "http://localhost:8080/users/{userId}/orders/{id:\\d+}/{userId}"
    out = substitute_path_variables(
        url, [PathVariableSpec("userId", "Long"), PathVariableSpec("id", "long")]
    )
    assert out == "http://localhost:8080/users/${USERID}/orders/${ID}/${USERID}"


def test_query_string_separator():
    qps = [QueryParamSpec("page", "int"), QueryParamSpec("size", "int")]
    assert append_query_string("http://h/x", qps) == "http://h/x?page=${PAGE}&size=${SIZE}"
    assert append_query_string("http://h/x?a=1", qps[:1]) == "http://h/x?a=1&page=${PAGE}"
    assert append_query_string("http://h/x", []) == "http://h/x"


def test_get_without_body():
    out = assemble_command(
        "http://localhost:8080/users/{id}",
        "GET",
        [PathVariableSpec("id", "Long")],
        [],
    )
    assert out == (
        "curl -X GET \\\n"
        '  -H "Accept: application/json" \\\n'
        '  "http://localhost:8080/users/${ID}"\n'
        "\n"
        "# Variables to replace:\n"
        "# ID - Path variable (Long)"
    )


def test_post_with_body_and_params():
    out = assemble_command(
        "http://localhost:8080/users",
        "POST",
        [],
        [
            QueryParamSpec("notify", "Boolean", required=False),
            QueryParamSpec("source", "String", required=True, default_value="web"),
        ],
        body='{\n  "name": "example"\n}',
        content_type="application/json",
    )
    lines = out.splitlines()
    assert lines[0] == "curl -X POST \\"
    assert lines[1] == '  -H "Content-Type: application/json" \\'
    assert lines[2] == '  -H "Accept: application/json" \\'
    assert lines[3] == "  -d '{"
    assert '"http://localhost:8080/users?notify=${NOTIFY}&source=${SOURCE}"' in out
    assert "# NOTIFY - Request parameter (Boolean) [optional]" in lines
    assert "# SOURCE - Request parameter (String) [default: web]" in lines
