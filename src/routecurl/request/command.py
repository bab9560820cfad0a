from __future__ import annotations

import re
from typing import Optional, Sequence

from routecurl.request.params import PathVariableSpec, QueryParamSpec

_CONTINUATION = " \\\n  "


def placeholder(name: str) -> str:
    return "${" + name.upper() + "}"


def substitute_path_variables(url: str, path_variables: Sequence[PathVariableSpec]) -> str:
    # {id} and {id:\d+} both become ${ID}
    for pv in path_variables:
        pattern = re.compile(r"\{" + re.escape(pv.name) + r"(?::[^}]*)?\}")
        url = pattern.sub(lambda _m, pv=pv: placeholder(pv.name), url)
    return url


def append_query_string(url: str, query_params: Sequence[QueryParamSpec]) -> str:
    if not query_params:
        return url
    query = "&".join(f"{qp.name}={placeholder(qp.name)}" for qp in query_params)
    sep = "&" if "?" in url else "?"
    return url + sep + query


def describe_variables(
    path_variables: Sequence[PathVariableSpec],
    query_params: Sequence[QueryParamSpec],
) -> list[str]:
    lines = ["# Variables to replace:"]
    for pv in path_variables:
        lines.append(f"# {pv.name.upper()} - Path variable ({pv.type_name})")
    for qp in query_params:
        line = f"# {qp.name.upper()} - Request parameter ({qp.type_name})"
        if not qp.required:
            line += " [optional]"
        if qp.default_value is not None:
            line += f" [default: {qp.default_value}]"
        lines.append(line)
    return lines


def assemble_command(
    url: str,
    http_method: str,
    path_variables: Sequence[PathVariableSpec],
    query_params: Sequence[QueryParamSpec],
    body: Optional[str] = None,
    content_type: Optional[str] = None,
    accept: str = "application/json",
) -> str:
    """
    Render a curl command for one route, followed by a comment block that
    lists every placeholder the caller still has to fill in.
    """
    final_url = append_query_string(substitute_path_variables(url, path_variables), query_params)

    parts = [f"curl -X {http_method}"]
    if content_type is not None:
        parts.append(f'-H "Content-Type: {content_type}"')
    parts.append(f'-H "Accept: {accept}"')
    if body is not None:
        parts.append(f"-d '{body}'")
    parts.append(f'"{final_url}"')

    command = _CONTINUATION.join(parts)
    return command + "\n\n" + "\n".join(describe_variables(path_variables, query_params))
