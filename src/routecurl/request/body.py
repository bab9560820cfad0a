from __future__ import annotations

import logging
from typing import AbstractSet, Optional

from routecurl.domain.annotations import IGNORE_KINDS, RENAME_KINDS, attribute_text, find_annotation, has_annotation
from routecurl.domain.models import FieldDefinition, TypeDefinition, TypeRef, TypeResolver
from routecurl.settings import InspectorSettings

logger = logging.getLogger(__name__)

ROOT_TYPE = "java.lang.Object"
_PLATFORM_PREFIXES = ("java.", "javax.", "jakarta.")

_EXEMPLARS = {
    "String": '"example"',
    "CharSequence": '"example"',
    "char": '"example"',
    "Character": '"example"',
    "byte": "0",
    "Byte": "0",
    "short": "0",
    "Short": "0",
    "int": "0",
    "Integer": "0",
    "long": "0",
    "Long": "0",
    "BigInteger": "0",
    "float": "0.0",
    "Float": "0.0",
    "double": "0.0",
    "Double": "0.0",
    "boolean": "false",
    "Boolean": "false",
    "BigDecimal": "0.00",
    "Date": '"2024-01-01"',
    "LocalDate": '"2024-01-01"',
    "LocalDateTime": '"2024-01-01T12:00:00"',
    "Timestamp": '"2024-01-01T12:00:00"',
    "OffsetDateTime": '"2024-01-01T12:00:00"',
    "ZonedDateTime": '"2024-01-01T12:00:00"',
    "Instant": '"2024-01-01T12:00:00"',
    "UUID": '"123e4567-e89b-12d3-a456-426614174000"',
}

COLLECTION_TYPES = frozenset(
    {
        "List", "ArrayList", "LinkedList",
        "Set", "HashSet", "LinkedHashSet", "TreeSet", "SortedSet",
        "Collection", "Iterable",
    }
)

MAP_TYPES = frozenset({"Map", "HashMap", "LinkedHashMap", "TreeMap", "SortedMap", "ConcurrentHashMap"})


def is_platform_type(qualified_name: str) -> bool:
    return qualified_name.startswith(_PLATFORM_PREFIXES)


class BodySynthesizer:
    """
    Builds an exemplar JSON document from a declared type.

    The walk is bounded twice: by depth (settings.max_body_depth) and by the
    set of type names currently being expanded on the path from the root.
    That set belongs to one branch only; sibling fields never see each
    other's entries.
    """

    def __init__(self, resolver: TypeResolver, settings: Optional[InspectorSettings] = None) -> None:
        self.resolver = resolver
        self.settings = settings or InspectorSettings()

    def synthesize_ref(self, ref: Optional[TypeRef], referrer: Optional[str] = None) -> str:
        """
        Top-level entry point for a @RequestBody parameter type. referrer is
        the qualified name of the controller the parameter is declared in.
        """
        if ref is None:
            return "{}"
        return self.synthesize(self.resolver.resolve(ref, referrer), frozenset(), 0)

    def synthesize(
        self,
        type_def: Optional[TypeDefinition],
        visiting: AbstractSet[str],
        depth: int,
    ) -> str:
        if type_def is None:
            return "{}"
        if depth > self.settings.max_body_depth:
            logger.debug("depth %d exceeded at %s", depth, type_def.qualified_name)
            return "{}"
        if type_def.qualified_name in visiting:
            logger.debug("cycle at %s", type_def.qualified_name)
            return "{}"

        visiting = frozenset(visiting) | {type_def.qualified_name}
        indent = self.settings.indent

        entries: list[str] = []
        for declared_in, f in self.fields_of(type_def):
            value = self.value_for(f.type, visiting, depth + 1, declared_in)
            entries.append(f'{indent * (depth + 1)}"{json_name(f)}": {value}')

        if not entries:
            return "{}"
        return "{\n" + ",\n".join(entries) + "\n" + indent * depth + "}"

    def fields_of(self, type_def: TypeDefinition) -> list[tuple[str, FieldDefinition]]:
        """
        Own fields first, then each supertype's, minus the ones JSON never
        sees. Each field comes paired with the type that declares it.
        """
        out: list[tuple[str, FieldDefinition]] = []
        seen_types: set[str] = set()
        current: Optional[TypeDefinition] = type_def

        while current is not None and current.qualified_name != ROOT_TYPE:
            if current.qualified_name in seen_types:
                break
            seen_types.add(current.qualified_name)

            out.extend((current.qualified_name, f) for f in current.fields if _serialized(f))

            if current.supertype is None:
                break
            current = self.resolver.resolve(current.supertype, current.qualified_name)

        return out

    def value_for(
        self,
        ref: TypeRef,
        visiting: AbstractSet[str],
        depth: int,
        referrer: Optional[str] = None,
    ) -> str:
        simple = ref.simple_name

        if not ref.is_array and simple in _EXEMPLARS:
            return _EXEMPLARS[simple]

        if not ref.is_array and simple in COLLECTION_TYPES:
            if ref.arguments:
                return "[" + self.value_for(ref.arguments[0], visiting, depth, referrer) + "]"
            return "[]"

        if not ref.is_array and simple in MAP_TYPES:
            if len(ref.arguments) > 1:
                return '{"key": ' + self.value_for(ref.arguments[1], visiting, depth, referrer) + "}"
            return "{}"

        if not ref.is_array:
            resolved = self.resolver.resolve(ref, referrer)
            if resolved is not None and not is_platform_type(resolved.qualified_name):
                if resolved.enum_constants:
                    return f'"{resolved.enum_constants[0]}"'
                return self.synthesize(resolved, visiting, depth)

        if ref.component is not None:
            return "[" + self.value_for(ref.component, visiting, depth, referrer) + "]"

        logger.debug("no exemplar for %s", ref.name)
        return "null"


def _serialized(f: FieldDefinition) -> bool:
    if f.is_static or f.is_final or f.is_synthetic:
        return False
    return not has_annotation(f.annotations, IGNORE_KINDS)


def json_name(f: FieldDefinition) -> str:
    ann = find_annotation(f.annotations, RENAME_KINDS)
    if ann is not None:
        renamed = attribute_text(ann, "value")
        if renamed:
            return renamed
    return f.name
