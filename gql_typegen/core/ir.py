"""Intermediate Representation (IR) for GraphQL schemas and query documents.

This module defines dataclasses that represent a resolved GraphQL type
system and the operations written against it, independent of the parser
that produced them.

Named types and selections compare by identity (``eq=False``) so they can
be used as members of ordered sets: two distinct definitions that happen to
share a name are never confused.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Union

from .errors import (
    UnknownFieldError,
    UnknownOperationError,
    UnknownTypeError,
    UnresolvedFragmentError,
)

BUILTIN_SCALARS = ("Boolean", "Float", "ID", "Int", "String")

TYPENAME_FIELD = "__typename"


class TypeKind(Enum):
    """The closed set of named type kinds a schema can define."""
    SCALAR = "scalar"
    ENUM = "enum"
    INPUT_OBJECT = "input_object"
    OBJECT = "object"
    INTERFACE = "interface"
    UNION = "union"


class TypeQualifier(Enum):
    """A nullability or list wrapper around a named type."""
    LIST = "list"
    REQUIRED = "required"


class OperationKind(Enum):
    QUERY = "query"
    MUTATION = "mutation"
    SUBSCRIPTION = "subscription"
    FRAGMENT = "fragment"


@dataclass(frozen=True)
class IRTypeRef:
    """A reference to a named type as written, e.g. ``[ID!]!``.

    Qualifiers are stored outer-to-inner in authored order, so ``[ID!]!``
    is ``(REQUIRED, LIST, REQUIRED)``.
    """
    name: str
    qualifiers: tuple[TypeQualifier, ...] = ()

    def __str__(self) -> str:
        rendered = self.name
        for qualifier in reversed(self.qualifiers):
            if qualifier is TypeQualifier.LIST:
                rendered = f"[{rendered}]"
            else:
                rendered = f"{rendered}!"
        return rendered


@dataclass(eq=False)
class IRArgument:
    """An argument to a field, or a field of an input object."""
    name: str
    type: IRTypeRef
    default_value: str | None = None
    description: str | None = None


@dataclass(eq=False)
class IRField:
    """A field of an object or interface type."""
    name: str
    type: IRTypeRef
    arguments: list[IRArgument] = field(default_factory=list)
    description: str | None = None
    # None unless the field carries @deprecated
    deprecation_reason: str | None = None

    @property
    def is_deprecated(self) -> bool:
        return self.deprecation_reason is not None


@dataclass(eq=False)
class IREnumValue:
    """A single value of a GraphQL enum."""
    name: str
    description: str | None = None
    deprecation_reason: str | None = None


@dataclass(eq=False)
class IRScalar:
    name: str
    description: str | None = None
    is_builtin: bool = False

    kind: ClassVar[TypeKind] = TypeKind.SCALAR


@dataclass(eq=False)
class IREnum:
    name: str
    values: list[IREnumValue]
    description: str | None = None

    kind: ClassVar[TypeKind] = TypeKind.ENUM


@dataclass(eq=False)
class IRInputObject:
    name: str
    fields: list[IRArgument]
    description: str | None = None

    kind: ClassVar[TypeKind] = TypeKind.INPUT_OBJECT


@dataclass(eq=False)
class IRObject:
    name: str
    fields: dict[str, IRField]
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None

    kind: ClassVar[TypeKind] = TypeKind.OBJECT


@dataclass(eq=False)
class IRInterface:
    name: str
    fields: dict[str, IRField]
    interfaces: list[str] = field(default_factory=list)
    description: str | None = None

    kind: ClassVar[TypeKind] = TypeKind.INTERFACE


@dataclass(eq=False)
class IRUnion:
    name: str
    members: list[str]
    description: str | None = None

    kind: ClassVar[TypeKind] = TypeKind.UNION


IRNamedType = Union[IRScalar, IREnum, IRInputObject, IRObject, IRInterface, IRUnion]

COMPOSITE_KINDS = (TypeKind.OBJECT, TypeKind.INTERFACE, TypeKind.UNION)


@dataclass
class IRSchema:
    """Complete intermediate representation of a GraphQL type system."""
    types: dict[str, IRNamedType] = field(default_factory=dict)
    query_type: str = "Query"
    mutation_type: str = "Mutation"
    subscription_type: str = "Subscription"
    # Runtime field every composite value answers with its concrete type name
    typename_field: str = TYPENAME_FIELD

    def __post_init__(self):
        for name in BUILTIN_SCALARS:
            self.types.setdefault(name, IRScalar(name=name, is_builtin=True))

    def add_type(self, named_type: IRNamedType):
        self.types[named_type.name] = named_type

    def get_type(self, name: str) -> IRNamedType:
        """Look up a named type, raising UnknownTypeError when absent."""
        try:
            return self.types[name]
        except KeyError:
            raise UnknownTypeError(name) from None

    def get_field(self, type_name: str, field_name: str) -> IRField:
        """Look up a field on an object or interface type."""
        named_type = self.get_type(type_name)
        fields = getattr(named_type, "fields", None)
        if not isinstance(fields, dict) or field_name not in fields:
            raise UnknownFieldError(field_name, type_name)
        return fields[field_name]

    def root_type(self, kind: OperationKind) -> IRNamedType:
        """Return the root object type for an operation kind."""
        names = {
            OperationKind.QUERY: self.query_type,
            OperationKind.MUTATION: self.mutation_type,
            OperationKind.SUBSCRIPTION: self.subscription_type,
        }
        return self.get_type(names[kind])

    def possible_types(self, named_type: IRNamedType) -> list[IRObject]:
        """Return the concrete object types a composite type can resolve to.

        Order follows the union's member list, or schema definition order
        for interfaces.
        """
        if named_type.kind is TypeKind.OBJECT:
            return [named_type]
        if named_type.kind is TypeKind.UNION:
            return [self.get_type(member) for member in named_type.members]
        if named_type.kind is TypeKind.INTERFACE:
            return [
                t for t in self.types.values()
                if t.kind is TypeKind.OBJECT and named_type.name in t.interfaces
            ]
        return []

    def condition_applies(self, condition: IRNamedType, target: IRNamedType) -> bool:
        """Check whether a type condition holds for every value of ``target``."""
        if condition is target:
            return True
        if target.kind in (TypeKind.OBJECT, TypeKind.INTERFACE):
            if condition.kind is TypeKind.INTERFACE and condition.name in target.interfaces:
                return True
        if target.kind is TypeKind.OBJECT and condition.kind is TypeKind.UNION:
            return target.name in condition.members
        return False

    @staticmethod
    def is_composite(named_type: IRNamedType) -> bool:
        return named_type.kind in COMPOSITE_KINDS


@dataclass(eq=False)
class IRFieldSelection:
    """A field requested in a selection set, optionally aliased."""
    name: str
    alias: str | None = None
    selections: list["IRSelection"] = field(default_factory=list)

    @property
    def response_key(self) -> str:
        """The key this field appears under in the response."""
        return self.alias or self.name


@dataclass(eq=False)
class IRFragmentSpread:
    fragment_name: str


@dataclass(eq=False)
class IRInlineFragment:
    """An inline fragment; ``type_condition`` is None for ``... { }``."""
    type_condition: str | None
    selections: list["IRSelection"] = field(default_factory=list)


IRSelection = Union[IRFieldSelection, IRFragmentSpread, IRInlineFragment]


@dataclass(eq=False)
class IRVariable:
    """A variable declared by an operation."""
    name: str
    type: IRTypeRef
    # Default literal printed back as GraphQL source, if declared
    default_value: str | None = None


@dataclass(eq=False)
class IRFragment:
    """A named fragment definition."""
    name: str
    type_condition: str
    selections: list[IRSelection] = field(default_factory=list)


@dataclass(eq=False)
class IROperation:
    """A query, mutation or subscription, or a fragment generated on its own.

    For ``OperationKind.FRAGMENT`` the ``type_condition`` holds the
    fragment's target type and ``variables`` is always empty.
    """
    name: str
    kind: OperationKind
    selections: list[IRSelection] = field(default_factory=list)
    variables: list[IRVariable] = field(default_factory=list)
    type_condition: str | None = None

    @property
    def has_no_variables(self) -> bool:
        return not self.variables

    def target_type(self, schema: IRSchema) -> IRNamedType:
        """Resolve the type the root selection set is evaluated against."""
        if self.kind is OperationKind.FRAGMENT:
            return schema.get_type(self.type_condition)
        return schema.root_type(self.kind)


@dataclass
class IRQueryDocument:
    """The operations and fragments of one query document."""
    operations: list[IROperation] = field(default_factory=list)
    fragments: dict[str, IRFragment] = field(default_factory=dict)

    def get_fragment(self, name: str) -> IRFragment:
        """Look up a fragment by name, raising UnresolvedFragmentError."""
        try:
            return self.fragments[name]
        except KeyError:
            raise UnresolvedFragmentError(name) from None

    @property
    def operation_names(self) -> list[str]:
        return [op.name for op in self.operations]

    def get_operation(self, name: str | None = None) -> IROperation:
        """Pick an operation by name.

        Without a name the document must define exactly one operation. A
        fragment name selects that fragment as a standalone operation.
        """
        if name is None:
            if len(self.operations) == 1:
                return self.operations[0]
            raise UnknownOperationError(None, self.operation_names)

        for operation in self.operations:
            if operation.name == name:
                return operation

        if name in self.fragments:
            fragment = self.fragments[name]
            return IROperation(
                name=fragment.name,
                kind=OperationKind.FRAGMENT,
                selections=fragment.selections,
                type_condition=fragment.type_condition,
            )

        raise UnknownOperationError(name, self.operation_names)
