from __future__ import annotations

from typing import Annotated, Literal, Optional, Protocol, Union, get_args

from pydantic import BaseModel, ConfigDict, Field

AnnotationKind = Literal[
    "RequestMapping",
    "GetMapping",
    "PostMapping",
    "PutMapping",
    "DeleteMapping",
    "PatchMapping",
    "PathVariable",
    "RequestParam",
    "RequestBody",
    "JsonIgnore",
    "Transient",
    "JsonProperty",
]

_KNOWN_KINDS = frozenset(get_args(AnnotationKind))


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class TextValue(_Frozen):
    type: Literal["text"] = "text"
    text: str
    literal: bool = True  # False for expressions kept as written (RequestMethod.POST)

    def render(self) -> str:
        return self.text


class TextListValue(_Frozen):
    type: Literal["text_list"] = "text_list"
    items: tuple[str, ...] = ()

    def render(self) -> str:
        return "{" + ", ".join(self.items) + "}"


class BoolValue(_Frozen):
    type: Literal["bool"] = "bool"
    flag: bool

    def render(self) -> str:
        return "true" if self.flag else "false"


AnnotationValue = Annotated[
    Union[TextValue, TextListValue, BoolValue],
    Field(discriminator="type"),
]


class Annotation(_Frozen):
    """A single annotation as written on a class, method, parameter or field."""

    name: str  # short name: GetMapping, RequestParam, ...
    attributes: dict[str, AnnotationValue] = Field(default_factory=dict)

    @property
    def kind(self) -> Optional[str]:
        short = self.name.rsplit(".", 1)[-1]
        return short if short in _KNOWN_KINDS else None

    def attribute(self, key: str) -> Optional[TextValue | TextListValue | BoolValue]:
        return self.attributes.get(key)


class TypeRef(_Frozen):
    name: str                              # presentable text, e.g. List<UserDto>
    arguments: tuple[TypeRef, ...] = ()    # generic type arguments
    component: Optional[TypeRef] = None    # array component type

    @property
    def simple_name(self) -> str:
        # java.util.List<Foo> -> List
        raw = self.name.split("<", 1)[0].strip()
        return raw.rsplit(".", 1)[-1]

    @property
    def is_array(self) -> bool:
        return self.component is not None


class Parameter(_Frozen):
    name: str
    type: TypeRef
    annotations: tuple[Annotation, ...] = ()


class RoutingClass(_Frozen):
    name: str
    qualified_name: str = ""
    annotations: tuple[Annotation, ...] = ()


class RoutingMethod(_Frozen):
    name: str
    annotations: tuple[Annotation, ...] = ()
    parameters: tuple[Parameter, ...] = ()
    owner: Optional[RoutingClass] = None
    start_line: int = 0
    end_line: int = 0


class FieldDefinition(_Frozen):
    name: str
    type: TypeRef
    annotations: tuple[Annotation, ...] = ()
    is_static: bool = False
    is_final: bool = False
    is_synthetic: bool = False


class TypeDefinition(_Frozen):
    qualified_name: str
    name: str = ""
    fields: tuple[FieldDefinition, ...] = ()
    supertype: Optional[TypeRef] = None
    enum_constants: tuple[str, ...] = ()


class TypeResolver(Protocol):
    def resolve(self, ref: TypeRef, referrer: Optional[str] = None) -> Optional[TypeDefinition]:
        """referrer: qualified name of the type the reference is written in."""
        ...


class ConfigDocument(_Frozen):
    name: str        # file name, e.g. application-dev.yml
    content: str
    priority: int = 0
    source_path: str = ""


class ResolvedServerConfig(_Frozen):
    context_path: Optional[str] = None
    host: Optional[str] = None
    port: Optional[str] = None
    ssl_enabled: Optional[bool] = None
