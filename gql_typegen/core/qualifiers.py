"""Nullability and list wrapping of named types."""

from .definitions import ListTypeRef, NamedTypeRef, OptionalTypeRef, TypeRef
from .errors import MalformedQualifiersError
from .ir import IRTypeRef, TypeQualifier


def decorate_type(name: str, qualifiers: tuple[TypeQualifier, ...] | list[TypeQualifier]) -> TypeRef:
    """Wrap a named type according to its GraphQL qualifiers.

    Qualifiers are given outer-to-inner as authored, so ``[T!]!`` is
    ``[REQUIRED, LIST, REQUIRED]``. Everything is nullable unless marked
    required:

        T      -> Optional[T]
        T!     -> T
        [T]    -> Optional[List[Optional[T]]]
        [T!]   -> Optional[List[T]]
        [T]!   -> List[Optional[T]]
        [T!]!  -> List[T]

    Raises:
        MalformedQualifiersError: two REQUIRED qualifiers in a row.
    """
    qualified: TypeRef = NamedTypeRef(name)
    non_null = False

    # Walk from the innermost qualifier outwards.
    for qualifier in reversed(qualifiers):
        if qualifier is TypeQualifier.LIST:
            if non_null:
                qualified = ListTypeRef(qualified)
                non_null = False
            else:
                qualified = ListTypeRef(OptionalTypeRef(qualified))
        elif non_null:
            raise MalformedQualifiersError(name, tuple(qualifiers))
        else:
            non_null = True

    if not non_null:
        qualified = OptionalTypeRef(qualified)

    return qualified


def decorate_ref(type_ref: IRTypeRef, name: str | None = None) -> TypeRef:
    """Decorate a schema type reference, optionally renaming its base type."""
    return decorate_type(name or type_ref.name, type_ref.qualifiers)


def is_optional(type_ref: TypeRef) -> bool:
    return isinstance(type_ref, OptionalTypeRef)
