"""Definitions for the scalars, enums and input objects an operation uses."""

from .definitions import (
    DefinitionCategory,
    EnumDefinition,
    EnumVariant,
    RecordDefinition,
    RecordField,
    ScalarAlias,
)
from .naming import field_name, safe_name
from .options import CodegenOptions
from .qualifiers import decorate_ref
from .used_types import UsedTypes

# Built-in GraphQL scalars and the Python types they alias.
BUILTIN_SCALAR_TYPES = {
    "Boolean": "bool",
    "Float": "float",
    "Int": "int",
    "ID": "str",
    "String": "str",
}

UNKNOWN_ENUM_VARIANT = "UNKNOWN"


def builtin_scalar_definitions() -> list[ScalarAlias]:
    """The prelude every generated module starts with."""
    return [
        ScalarAlias(name=name, target=target, category=DefinitionCategory.BUILTIN)
        for name, target in BUILTIN_SCALAR_TYPES.items()
    ]


def generate_scalar_definitions(used: UsedTypes, options: CodegenOptions) -> list[ScalarAlias]:
    definitions = []
    for scalar in used.scalars:
        handler = options.scalars.resolve(scalar.name)
        definitions.append(
            ScalarAlias(
                name=scalar.name,
                target=handler.python_type,
                import_statement=handler.import_statement or None,
            )
        )
    return definitions


def generate_enum_definitions(used: UsedTypes, options: CodegenOptions) -> list[EnumDefinition]:
    """One enum per used enum type.

    Variants follow schema order. A catch-all ``UNKNOWN`` variant absorbs
    values added to the schema after the code was generated.
    """
    definitions = []
    for enum in used.enums:
        variants = [
            EnumVariant(
                name=safe_name(value.name),
                value=value.name,
                description=value.description,
                deprecation_reason=value.deprecation_reason,
            )
            for value in enum.values
        ]
        definitions.append(
            EnumDefinition(
                name=enum.name,
                variants=variants,
                unknown_variant=UNKNOWN_ENUM_VARIANT,
                description=enum.description,
                derives=options.response_derives,
            )
        )
    return definitions


def generate_input_object_definitions(
    used: UsedTypes, options: CodegenOptions
) -> list[RecordDefinition]:
    definitions = []
    for input_object in used.inputs:
        fields = [
            RecordField(
                name=field_name(input_field.name),
                serialized_name=input_field.name,
                type=decorate_ref(input_field.type),
                description=input_field.description,
            )
            for input_field in input_object.fields
        ]
        definitions.append(
            RecordDefinition(
                name=input_object.name,
                category=DefinitionCategory.INPUT,
                fields=fields,
                derives=options.variables_derives,
                description=input_object.description,
            )
        )
    return definitions
