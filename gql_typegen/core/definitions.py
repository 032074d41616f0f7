"""Generated type definitions.

These dataclasses are the output of a generation pass: an ordered list of
named definitions, each tagged with the category it belongs to. They carry
no target-language syntax; a renderer turns them into source code.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Iterator, Union

from .errors import DuplicateDefinitionError, DuplicateFieldError


class DefinitionCategory(Enum):
    BUILTIN = "builtin"
    SCALAR = "scalar"
    ENUM = "enum"
    INPUT = "input"
    VARIABLES = "variables"
    FRAGMENT = "fragment"
    RESPONSE = "response"


@dataclass(frozen=True)
class NamedTypeRef:
    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class ListTypeRef:
    of_type: "TypeRef"

    def __str__(self) -> str:
        return f"List[{self.of_type}]"


@dataclass(frozen=True)
class OptionalTypeRef:
    of_type: "TypeRef"

    def __str__(self) -> str:
        return f"Optional[{self.of_type}]"


TypeRef = Union[NamedTypeRef, ListTypeRef, OptionalTypeRef]


@dataclass
class ScalarAlias:
    """An alias from a GraphQL scalar name to an external representation."""
    name: str
    target: str
    import_statement: str | None = None
    category: DefinitionCategory = DefinitionCategory.SCALAR

    kind: ClassVar[str] = "alias"


@dataclass
class EnumVariant:
    name: str
    value: str
    description: str | None = None
    deprecation_reason: str | None = None


@dataclass
class EnumDefinition:
    """An enum with the schema's values plus a catch-all for unknown ones."""
    name: str
    variants: list[EnumVariant]
    unknown_variant: str = "UNKNOWN"
    description: str | None = None
    derives: tuple[str, ...] = ()
    category: DefinitionCategory = DefinitionCategory.ENUM

    kind: ClassVar[str] = "enum"


@dataclass
class RecordField:
    """One field of a record.

    ``flatten`` fields are read from the same level as the record's own
    fields rather than from a nested key.
    """
    name: str
    serialized_name: str
    type: TypeRef
    flatten: bool = False
    description: str | None = None
    deprecation_reason: str | None = None


@dataclass
class DefaultAccessor:
    """Signature of a per-variable default value accessor.

    Only the name and return type are fixed here; the body is supplied by
    whatever later stage translates GraphQL default literals.
    """
    name: str
    variable_name: str
    type: TypeRef
    default_literal: str | None = None


@dataclass
class RecordDefinition:
    name: str
    category: DefinitionCategory
    fields: list[RecordField] = field(default_factory=list)
    derives: tuple[str, ...] = ()
    accessors: list[DefaultAccessor] = field(default_factory=list)
    description: str | None = None

    kind: ClassVar[str] = "record"

    @property
    def flattened_fields(self) -> list[RecordField]:
        return [f for f in self.fields if f.flatten]

    def get_field(self, name: str) -> RecordField:
        for record_field in self.fields:
            if record_field.name == name:
                return record_field
        raise KeyError(name)


@dataclass
class UnionVariant:
    """A variant of a tagged union and the runtime type names selecting it."""
    name: str
    record: str
    typenames: tuple[str, ...]


@dataclass
class TaggedUnionDefinition:
    name: str
    category: DefinitionCategory
    discriminant: str
    variants: list[UnionVariant] = field(default_factory=list)
    derives: tuple[str, ...] = ()

    kind: ClassVar[str] = "union"

    def get_variant(self, name: str) -> UnionVariant:
        for variant in self.variants:
            if variant.name == name:
                return variant
        raise KeyError(name)


Definition = Union[ScalarAlias, EnumDefinition, RecordDefinition, TaggedUnionDefinition]


@dataclass
class GeneratedModule:
    """The full typed surface generated for one operation."""
    operation_name: str
    operation_kind: str
    definitions: list[Definition] = field(default_factory=list)

    def __iter__(self) -> Iterator[Definition]:
        return iter(self.definitions)

    def __len__(self) -> int:
        return len(self.definitions)

    def add(self, definition: Definition):
        """Append a definition, rejecting names the module already holds.

        Raises:
            DuplicateDefinitionError: a definition with this name exists
            DuplicateFieldError: a record has two fields with one name
        """
        if any(d.name == definition.name for d in self.definitions):
            raise DuplicateDefinitionError(definition.name)
        if isinstance(definition, RecordDefinition):
            seen = set()
            for record_field in definition.fields:
                if record_field.name in seen:
                    raise DuplicateFieldError(definition.name, record_field.name)
                seen.add(record_field.name)
        self.definitions.append(definition)

    def extend(self, definitions):
        for definition in definitions:
            self.add(definition)

    @property
    def names(self) -> list[str]:
        return [d.name for d in self.definitions]

    def by_category(self, category: DefinitionCategory) -> list[Definition]:
        return [d for d in self.definitions if d.category is category]

    def get(self, name: str) -> Definition:
        """Return the definition named ``name``, raising KeyError if absent."""
        for definition in self.definitions:
            if definition.name == name:
                return definition
        raise KeyError(name)

    @property
    def imports(self) -> list[str]:
        """Import statements needed by scalar aliases, deduplicated in order."""
        seen: dict[str, None] = {}
        for definition in self.definitions:
            statement = getattr(definition, "import_statement", None)
            if statement:
                seen.setdefault(statement, None)
        return list(seen)
