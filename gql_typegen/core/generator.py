"""Generation of the typed surface of one GraphQL operation.

The generator resolves the used-types catalog once, then emits, in order:

1. the built-in scalar prelude
2. custom scalar aliases
3. enums
4. input objects
5. the variables record
6. one shape per fragment
7. the response shape and everything nested in it

Example:
    schema = parse_schema(sdl)
    document = parse_query(query)
    module = generate_module(schema, document, CodegenOptions(operation_name="Hero"))
"""

import logging

from .definitions import DefinitionCategory, GeneratedModule
from .emitters import (
    builtin_scalar_definitions,
    generate_enum_definitions,
    generate_input_object_definitions,
    generate_scalar_definitions,
)
from .ir import IROperation, IRQueryDocument, IRSchema, OperationKind
from .options import CodegenOptions
from .selection import SelectionShapeBuilder
from .used_types import UsedTypes, collect_used_types
from .variables import build_variables

log = logging.getLogger(__name__)


class ModuleGenerator:
    """Generates the definitions for a single operation."""

    def __init__(
        self,
        schema: IRSchema,
        document: IRQueryDocument,
        operation: IROperation,
        options: CodegenOptions | None = None,
    ):
        self.schema = schema
        self.document = document
        self.operation = operation
        self.options = options or CodegenOptions()

    def generate(self) -> GeneratedModule:
        used = collect_used_types(self.operation, self.document, self.schema)

        module = GeneratedModule(
            operation_name=self.operation.name,
            operation_kind=self.operation.kind.value,
        )
        module.extend(builtin_scalar_definitions())
        module.extend(generate_scalar_definitions(used, self.options))
        module.extend(generate_enum_definitions(used, self.options))
        module.extend(generate_input_object_definitions(used, self.options))
        module.add(build_variables(self.operation, self.options))
        module.extend(self._generate_fragment_definitions(used))
        module.extend(self._generate_response_definitions())

        log.debug(
            "Generated %d definitions for %s %s",
            len(module),
            self.operation.kind.value,
            self.operation.name,
        )
        return module

    def _generate_fragment_definitions(self, used: UsedTypes) -> list:
        """One shape per fragment, shared by every site that spreads it."""
        builder = SelectionShapeBuilder(self.schema, self.document, self.options)
        for fragment in used.fragments:
            builder.build(
                fragment.name,
                fragment.selections,
                self.schema.get_type(fragment.type_condition),
                DefinitionCategory.FRAGMENT,
            )
        return builder.definitions

    def _generate_response_definitions(self) -> list:
        # A fragment generated on its own is fully described by its fragment shape.
        if self.operation.kind is OperationKind.FRAGMENT:
            return []
        builder = SelectionShapeBuilder(self.schema, self.document, self.options)
        builder.build(
            self.options.response_name,
            self.operation.selections,
            self.operation.target_type(self.schema),
            DefinitionCategory.RESPONSE,
        )
        return builder.definitions


def generate_module(
    schema: IRSchema,
    document: IRQueryDocument,
    options: CodegenOptions | None = None,
) -> GeneratedModule:
    """Generate the definitions for the operation selected by ``options``.

    Raises:
        UnknownOperationError: the operation name is missing or ambiguous
        CodegenError: any resolution failure; no partial output is returned
    """
    options = options or CodegenOptions()
    operation = document.get_operation(options.operation_name)
    return ModuleGenerator(schema, document, operation, options).generate()


def generate_all(
    schema: IRSchema,
    document: IRQueryDocument,
    options: CodegenOptions | None = None,
) -> dict[str, GeneratedModule]:
    """Generate one module per operation in the document, keyed by operation name."""
    options = options or CodegenOptions()
    return {
        operation.name: ModuleGenerator(schema, document, operation, options).generate()
        for operation in document.operations
    }

