from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator, Optional

import tree_sitter_java
from tree_sitter import Language, Node, Parser

from routecurl.domain.annotations import MAPPING_KINDS, has_annotation
from routecurl.domain.models import (
    Annotation,
    BoolValue,
    FieldDefinition,
    Parameter,
    RoutingClass,
    RoutingMethod,
    TextListValue,
    TextValue,
    TypeDefinition,
    TypeRef,
)
from routecurl.errors import SourceParseError

logger = logging.getLogger(__name__)

JAVA_LANGUAGE = Language(tree_sitter_java.language())

TYPE_DECLARATIONS = {
    "class_declaration": "class",
    "interface_declaration": "interface",
    "enum_declaration": "enum",
    "record_declaration": "record",
    "annotation_type_declaration": "annotation",
}

_ANNOTATION_NODES = ("annotation", "marker_annotation")
_COMMENT_NODES = ("line_comment", "block_comment")
_FIELD_NODES = ("field_declaration", "constant_declaration")
_ESCAPES = {"n": "\n", "t": "\t", "r": "\r", "b": "\b", "f": "\f", "s": " ", "0": "\0"}


@dataclass(frozen=True)
class ParsedType:
    kind: str  # class | interface | enum | record | annotation
    definition: TypeDefinition
    routing_class: RoutingClass
    methods: tuple[RoutingMethod, ...]
    start_line: int
    end_line: int


@dataclass(frozen=True)
class JavaSourceFile:
    path: str
    package: str
    imports: tuple[str, ...]  # single-type (a.b.C) and on-demand (a.b.*), no static imports
    types: tuple[ParsedType, ...] = ()

    @property
    def methods(self) -> list[RoutingMethod]:
        out = [m for t in self.types for m in t.methods]
        out.sort(key=lambda m: (m.start_line, m.name))
        return out

    @property
    def routing_methods(self) -> list[RoutingMethod]:
        return [m for m in self.methods if has_annotation(m.annotations, MAPPING_KINDS)]

    def method_at_line(self, line: int) -> Optional[RoutingMethod]:
        """Innermost method whose declaration span covers line (1-based)."""
        best: Optional[RoutingMethod] = None
        for m in self.methods:
            if m.start_line <= line <= m.end_line:
                if best is None or m.start_line >= best.start_line:
                    best = m
        return best

    def find_methods(self, name: str) -> list[RoutingMethod]:
        return [m for m in self.methods if m.name == name]


# ----------------------------
# Node helpers
# ----------------------------


def _text(node: Node) -> str:
    return node.text.decode("utf-8", errors="replace")


def _named(node: Optional[Node]) -> list[Node]:
    if node is None:
        return []
    return [c for c in node.named_children if c.type not in _COMMENT_NODES]


def _walk(node: Node) -> Iterator[Node]:
    stack = [node]
    while stack:
        current = stack.pop()
        yield current
        stack.extend(reversed(current.named_children))


def _modifiers(node: Node) -> tuple[set[str], list[Node]]:
    """Keyword modifiers and annotation nodes of a declaration."""
    keywords: set[str] = set()
    annotations: list[Node] = []
    for child in node.children:
        if child.type != "modifiers":
            continue
        for m in child.children:
            if m.type in _ANNOTATION_NODES:
                annotations.append(m)
            elif not m.is_named:
                keywords.add(m.type)
    return keywords, annotations


def _line(point) -> int:
    return point[0] + 1


# ----------------------------
# Expressions / annotation values
# ----------------------------


def _string_literal(node: Node) -> str:
    out: list[str] = []
    for part in node.named_children:
        if part.type == "escape_sequence":
            raw = _text(part)[1:]
            out.append(_ESCAPES.get(raw, raw))
        else:
            out.append(_text(part))
    return "".join(out)


def resolve_string_expr(node: Node, constants: dict[str, str]) -> Optional[str]:
    """
    "a" + "b", CONST + "/x", Outer.CONST -> resolved text; None if any
    operand is not a literal or a known String constant.
    """
    if node.type == "string_literal":
        return _string_literal(node)
    if node.type == "parenthesized_expression":
        inner = _named(node)
        return resolve_string_expr(inner[0], constants) if inner else None
    if node.type == "binary_expression":
        op = node.child_by_field_name("operator")
        if op is None or op.type != "+":
            return None
        left = resolve_string_expr(node.child_by_field_name("left"), constants)
        right = resolve_string_expr(node.child_by_field_name("right"), constants)
        if left is None or right is None:
            return None
        return left + right
    if node.type == "identifier":
        return constants.get(_text(node))
    if node.type == "field_access":
        return constants.get(_text(node.child_by_field_name("field")))
    return None


def annotation_value(node: Node, constants: dict[str, str]):
    if node.type == "element_value_array_initializer":
        items = []
        for item in _named(node):
            resolved = resolve_string_expr(item, constants)
            items.append(resolved if resolved is not None else _text(item))
        return TextListValue(items=tuple(items))
    if node.type in ("true", "false"):
        return BoolValue(flag=node.type == "true")

    resolved = resolve_string_expr(node, constants)
    if resolved is not None:
        return TextValue(text=resolved)
    return TextValue(text=" ".join(_text(node).split()), literal=False)


def parse_annotation(node: Node, constants: dict[str, str]) -> Annotation:
    """
    @GetMapping                        -> {}
    @GetMapping("/x")                  -> {"value": "/x"}
    @RequestMapping(path = "/x", ...)  -> {"path": "/x", ...}
    """
    name = _text(node.child_by_field_name("name"))
    attrs = {}
    for arg in _named(node.child_by_field_name("arguments")):
        if arg.type == "element_value_pair":
            key = _text(arg.child_by_field_name("key"))
            attrs[key] = annotation_value(arg.child_by_field_name("value"), constants)
        else:
            attrs["value"] = annotation_value(arg, constants)
    return Annotation(name=name, attributes=attrs)


# ----------------------------
# Types
# ----------------------------


def type_ref(node: Node) -> TypeRef:
    """
    generic_type   Map<String, List<UserDto>> -> TypeRef with nested arguments
    array_type     String[]                   -> array TypeRef with a component
    wildcard       ? extends Foo              -> Foo
    """
    if node.type == "generic_type":
        base, *rest = _named(node)
        args = tuple(type_ref(a) for a in _named(rest[0])) if rest else ()
        base_name = _text(base)
        if not args:
            return TypeRef(name=base_name)
        return TypeRef(name=base_name + "<" + ", ".join(a.name for a in args) + ">", arguments=args)

    if node.type == "array_type":
        ref = type_ref(node.child_by_field_name("element"))
        return with_dimensions(ref, node.child_by_field_name("dimensions"))

    if node.type in ("wildcard", "annotated_type"):
        inner = [c for c in _named(node) if c.type not in _ANNOTATION_NODES]
        if not inner:
            return TypeRef(name="Object")
        return type_ref(inner[-1])

    return TypeRef(name=" ".join(_text(node).split()))


def with_dimensions(ref: TypeRef, dimensions: Optional[Node]) -> TypeRef:
    if dimensions is None:
        return ref
    for _ in range(_text(dimensions).count("[")):
        ref = TypeRef(name=ref.name + "[]", component=ref)
    return ref


def _parameter(node: Node, constants: dict[str, str]) -> Optional[Parameter]:
    _, annotation_nodes = _modifiers(node)
    annotations = tuple(parse_annotation(a, constants) for a in annotation_nodes)

    if node.type == "spread_parameter":
        # T... name
        declarator = next((c for c in _named(node) if c.type == "variable_declarator"), None)
        type_node = next(
            (c for c in _named(node) if c.type not in ("modifiers", "variable_declarator", *_ANNOTATION_NODES)),
            None,
        )
        if declarator is None or type_node is None:
            return None
        component = type_ref(type_node)
        return Parameter(
            name=_text(declarator.child_by_field_name("name")),
            type=TypeRef(name=component.name + "[]", component=component),
            annotations=annotations,
        )

    type_node = node.child_by_field_name("type")
    name_node = node.child_by_field_name("name")
    if type_node is None or name_node is None:
        return None
    ref = with_dimensions(type_ref(type_node), node.child_by_field_name("dimensions"))
    return Parameter(name=_text(name_node), type=ref, annotations=annotations)


def _parameters(node: Optional[Node], constants: dict[str, str]) -> tuple[Parameter, ...]:
    out = []
    for p in _named(node):
        if p.type not in ("formal_parameter", "spread_parameter"):
            continue  # receiver parameter
        param = _parameter(p, constants)
        if param is not None:
            out.append(param)
    return tuple(out)


def _fields(node: Node, constants: dict[str, str], implicit_static: bool) -> list[FieldDefinition]:
    keywords, annotation_nodes = _modifiers(node)
    annotations = tuple(parse_annotation(a, constants) for a in annotation_nodes)
    type_node = node.child_by_field_name("type")
    if type_node is None:
        return []
    base = type_ref(type_node)

    out = []
    for declarator in node.children_by_field_name("declarator"):
        name_node = declarator.child_by_field_name("name")
        if name_node is None:
            continue
        name = _text(name_node)
        out.append(
            FieldDefinition(
                name=name,
                type=with_dimensions(base, declarator.child_by_field_name("dimensions")),
                annotations=annotations,
                is_static=implicit_static or "static" in keywords,
                is_final=(not implicit_static) and "final" in keywords,
                is_synthetic=name.startswith("$"),
            )
        )
    return out


# ----------------------------
# Compilation unit
# ----------------------------


class _JavaReader:
    def __init__(self, package: str, constants: dict[str, str]) -> None:
        self.package = package
        self.constants = constants
        self.types: list[ParsedType] = []

    def read_type(self, node: Node, outer: list[str]) -> None:
        kind = TYPE_DECLARATIONS[node.type]
        name_node = node.child_by_field_name("name")
        if name_node is None:
            return
        name = _text(name_node)
        names = outer + [name]
        qualified = ".".join(([self.package] if self.package else []) + names)

        _, annotation_nodes = _modifiers(node)
        routing_class = RoutingClass(
            name=name,
            qualified_name=qualified,
            annotations=tuple(parse_annotation(a, self.constants) for a in annotation_nodes),
        )

        supertype = None
        superclass = node.child_by_field_name("superclass")
        if superclass is not None:
            supertype = type_ref(_named(superclass)[0])

        fields: list[FieldDefinition] = []
        if kind == "record":
            for p in _parameters(node.child_by_field_name("parameters"), self.constants):
                fields.append(FieldDefinition(name=p.name, type=p.type, annotations=p.annotations))

        body = node.child_by_field_name("body")
        members = _named(body)
        enum_constants: list[str] = []
        if kind == "enum":
            enum_constants = [_text(c.child_by_field_name("name")) for c in members if c.type == "enum_constant"]
            members = [m for block in members if block.type == "enum_body_declarations" for m in _named(block)]

        methods: list[RoutingMethod] = []
        for member in members:
            if member.type in TYPE_DECLARATIONS:
                self.read_type(member, names)
            elif member.type == "method_declaration" and member.child_by_field_name("name") is not None:
                methods.append(self.read_method(member, routing_class))
            elif member.type in _FIELD_NODES:
                fields.extend(_fields(member, self.constants, implicit_static=kind in ("interface", "annotation")))

        self.types.append(
            ParsedType(
                kind=kind,
                definition=TypeDefinition(
                    qualified_name=qualified,
                    name=name,
                    fields=tuple(fields),
                    supertype=supertype,
                    enum_constants=tuple(enum_constants),
                ),
                routing_class=routing_class,
                methods=tuple(methods),
                start_line=_line(node.start_point),
                end_line=_line(node.end_point),
            )
        )

    def read_method(self, node: Node, owner: RoutingClass) -> RoutingMethod:
        _, annotation_nodes = _modifiers(node)
        return RoutingMethod(
            name=_text(node.child_by_field_name("name")),
            annotations=tuple(parse_annotation(a, self.constants) for a in annotation_nodes),
            parameters=_parameters(node.child_by_field_name("parameters"), self.constants),
            owner=owner,
            start_line=_line(node.start_point),
            end_line=_line(node.end_point),
        )


def collect_constants(root: Node) -> dict[str, str]:
    """String constants declared anywhere in the file, by simple name."""
    pending: dict[str, Node] = {}
    for node in _walk(root):
        if node.type not in _FIELD_NODES:
            continue
        keywords, _ = _modifiers(node)
        implicit = node.type == "constant_declaration"
        if not implicit and not {"static", "final"} <= keywords:
            continue
        type_node = node.child_by_field_name("type")
        if type_node is None or _text(type_node) != "String":
            continue
        for declarator in node.children_by_field_name("declarator"):
            name_node = declarator.child_by_field_name("name")
            value = declarator.child_by_field_name("value")
            if name_node is not None and value is not None:
                pending[_text(name_node)] = value

    # constants may refer to each other; resolve until nothing changes
    constants: dict[str, str] = {}
    changed = True
    while changed:
        changed = False
        for name, value in pending.items():
            if name in constants:
                continue
            resolved = resolve_string_expr(value, constants)
            if resolved is not None:
                constants[name] = resolved
                changed = True
    return constants


def _package_and_imports(root: Node) -> tuple[str, tuple[str, ...]]:
    package = ""
    imports: list[str] = []
    for node in _named(root):
        if node.type == "package_declaration":
            names = [c for c in _named(node) if c.type in ("identifier", "scoped_identifier")]
            if names:
                package = _text(names[0])
        elif node.type == "import_declaration":
            if any(c.type == "static" for c in node.children):
                continue
            names = [c for c in _named(node) if c.type in ("identifier", "scoped_identifier")]
            if not names:
                continue
            wildcard = any(c.type == "asterisk" for c in node.children)
            imports.append(_text(names[0]) + (".*" if wildcard else ""))
    return package, tuple(imports)


def parse_java_source(source: str, path: str = "") -> JavaSourceFile:
    """
    Structural read of one Java compilation unit.

    Produces the routing view (classes, methods, parameters, annotations)
    and the type view (fields, supertype, enum constants) from the
    tree-sitter syntax tree. Syntax errors are tolerated: whatever the
    parser could recover is kept.
    """
    tree = Parser(JAVA_LANGUAGE).parse(source.encode("utf-8"))
    root = tree.root_node
    if root.has_error:
        logger.debug("syntax errors in %s; reading what parsed", path or "<source>")

    package, imports = _package_and_imports(root)
    reader = _JavaReader(package, collect_constants(root))
    for node in _named(root):
        if node.type in TYPE_DECLARATIONS:
            reader.read_type(node, [])

    types = sorted(reader.types, key=lambda t: (t.start_line, t.definition.qualified_name))
    return JavaSourceFile(path=path, package=package, imports=imports, types=tuple(types))


def parse_java_file(path: Path, max_bytes: int = 2_000_000) -> JavaSourceFile:
    try:
        data = path.read_bytes()[:max_bytes]
    except OSError as exc:
        raise SourceParseError(f"cannot read {path}: {exc}") from exc
    source = data.decode("utf-8", errors="ignore")
    logger.debug("parsing %s (%d bytes)", path, len(data))
    return parse_java_source(source, path=str(path.resolve()))
