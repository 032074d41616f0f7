"""Core modules for GraphQL type generation."""

from .definitions import (
    DefaultAccessor,
    DefinitionCategory,
    EnumDefinition,
    EnumVariant,
    GeneratedModule,
    ListTypeRef,
    NamedTypeRef,
    OptionalTypeRef,
    RecordDefinition,
    RecordField,
    ScalarAlias,
    TaggedUnionDefinition,
    UnionVariant,
)
from .errors import (
    AmbiguousTypeConditionError,
    CodegenError,
    DeprecatedFieldError,
    DuplicateDefinitionError,
    DuplicateFieldError,
    MalformedQualifiersError,
    UnknownFieldError,
    UnknownOperationError,
    UnknownTypeError,
    UnresolvedFragmentError,
)
from .generator import ModuleGenerator, generate_all, generate_module
from .hooks import AddHeaderHook, HookRunner, PostGenerateHook
from .ir import (
    IRQueryDocument,
    IRSchema,
    IRTypeRef,
    OperationKind,
    TypeKind,
    TypeQualifier,
)
from .options import CodegenOptions, DeprecationStrategy
from .parser import QueryParser, SchemaParser, parse_query, parse_schema
from .qualifiers import decorate_type
from .renderer import PythonRenderer
from .scalars import ImportedType, ScalarHandler, ScalarRegistry
from .used_types import UsedTypes, collect_used_types

__all__ = [
    # Definitions
    "DefaultAccessor",
    "DefinitionCategory",
    "EnumDefinition",
    "EnumVariant",
    "GeneratedModule",
    "ListTypeRef",
    "NamedTypeRef",
    "OptionalTypeRef",
    "RecordDefinition",
    "RecordField",
    "ScalarAlias",
    "TaggedUnionDefinition",
    "UnionVariant",
    # Errors
    "AmbiguousTypeConditionError",
    "CodegenError",
    "DeprecatedFieldError",
    "DuplicateDefinitionError",
    "DuplicateFieldError",
    "MalformedQualifiersError",
    "UnknownFieldError",
    "UnknownOperationError",
    "UnknownTypeError",
    "UnresolvedFragmentError",
    # Generation
    "ModuleGenerator",
    "generate_all",
    "generate_module",
    "decorate_type",
    "UsedTypes",
    "collect_used_types",
    # Hooks
    "AddHeaderHook",
    "HookRunner",
    "PostGenerateHook",
    # IR
    "IRQueryDocument",
    "IRSchema",
    "IRTypeRef",
    "OperationKind",
    "TypeKind",
    "TypeQualifier",
    # Options
    "CodegenOptions",
    "DeprecationStrategy",
    # Parsers
    "QueryParser",
    "SchemaParser",
    "parse_query",
    "parse_schema",
    # Rendering
    "PythonRenderer",
    # Scalars
    "ImportedType",
    "ScalarHandler",
    "ScalarRegistry",
]
