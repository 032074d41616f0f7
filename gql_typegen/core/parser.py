"""GraphQL schema and query parsers using graphql-core.

Parses SDL and executable documents and produces IRSchema / IRQueryDocument.
Neither parser validates the documents beyond what graphql-core's ``parse``
rejects as syntax errors.
"""

import logging
import os

from graphql import (
    DirectiveNode,
    DocumentNode,
    EnumTypeDefinitionNode,
    EnumTypeExtensionNode,
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    InputObjectTypeDefinitionNode,
    InputObjectTypeExtensionNode,
    InterfaceTypeDefinitionNode,
    InterfaceTypeExtensionNode,
    ListTypeNode,
    NamedTypeNode,
    NonNullTypeNode,
    ObjectTypeDefinitionNode,
    ObjectTypeExtensionNode,
    OperationDefinitionNode,
    ScalarTypeDefinitionNode,
    SchemaDefinitionNode,
    SelectionSetNode,
    StringValueNode,
    TypeNode,
    UnionTypeDefinitionNode,
    UnionTypeExtensionNode,
    parse,
    print_ast,
)

from .ir import (
    IRArgument,
    IREnum,
    IREnumValue,
    IRField,
    IRFieldSelection,
    IRFragment,
    IRFragmentSpread,
    IRInlineFragment,
    IRInputObject,
    IRInterface,
    IRObject,
    IROperation,
    IRQueryDocument,
    IRScalar,
    IRSchema,
    IRSelection,
    IRTypeRef,
    IRUnion,
    IRVariable,
    OperationKind,
    TypeQualifier,
)

log = logging.getLogger(__name__)

SCHEMA_EXTENSIONS = (".graphql", ".graphqls", ".gql")

DEFAULT_DEPRECATION_REASON = "No longer supported"


def type_ref_from_node(type_node: TypeNode) -> IRTypeRef:
    """Unwrap a type node into a named type and its outer-to-inner qualifiers."""
    qualifiers = []
    while not isinstance(type_node, NamedTypeNode):
        if isinstance(type_node, NonNullTypeNode):
            qualifiers.append(TypeQualifier.REQUIRED)
        elif isinstance(type_node, ListTypeNode):
            qualifiers.append(TypeQualifier.LIST)
        else:
            raise TypeError(f"Unexpected type node: {type_node!r}")
        type_node = type_node.type
    return IRTypeRef(name=type_node.name.value, qualifiers=tuple(qualifiers))


def _description(node) -> str | None:
    return node.description.value if getattr(node, "description", None) else None


def _deprecation_reason(directives: tuple[DirectiveNode, ...] | None) -> str | None:
    for directive in directives or ():
        if directive.name.value != "deprecated":
            continue
        for argument in directive.arguments or ():
            if argument.name.value == "reason" and isinstance(argument.value, StringValueNode):
                return argument.value.value
        return DEFAULT_DEPRECATION_REASON
    return None


def _collect_files(path: str) -> list[str]:
    """Collect GraphQL files from a file or directory path."""
    if os.path.isfile(path):
        return [path]
    files = []
    for root, _, filenames in os.walk(path):
        for filename in filenames:
            if filename.endswith(SCHEMA_EXTENSIONS):
                files.append(os.path.join(root, filename))
    return sorted(files)


def _read_files(path: str) -> str:
    contents = []
    for file_path in _collect_files(path):
        with open(file_path) as f:
            contents.append(f.read())
    return "\n".join(contents)


class SchemaParser:
    """Parses GraphQL SDL into IR."""

    def __init__(self, source: str):
        """Initialize a parser with SDL source text."""
        self.source = source
        self.ir = IRSchema()

    @classmethod
    def from_path(cls, schema_path: str) -> "SchemaParser":
        """Create a parser over a schema file or a directory of schema files."""
        return cls(_read_files(schema_path))

    def parse_all(self) -> IRSchema:
        """Parse the SDL and return the complete IR."""
        ast = parse(self.source)
        extensions = []
        for definition in ast.definitions:
            if isinstance(definition, SchemaDefinitionNode):
                self._process_schema_definition(definition)
            elif isinstance(definition, ScalarTypeDefinitionNode):
                self._process_scalar(definition)
            elif isinstance(definition, EnumTypeDefinitionNode):
                self._process_enum(definition)
            elif isinstance(definition, InterfaceTypeDefinitionNode):
                self._process_interface(definition)
            elif isinstance(definition, ObjectTypeDefinitionNode):
                self._process_object_type(definition)
            elif isinstance(definition, UnionTypeDefinitionNode):
                self._process_union(definition)
            elif isinstance(definition, InputObjectTypeDefinitionNode):
                self._process_input_type(definition)
            elif isinstance(
                definition,
                (
                    ObjectTypeExtensionNode,
                    InterfaceTypeExtensionNode,
                    EnumTypeExtensionNode,
                    UnionTypeExtensionNode,
                    InputObjectTypeExtensionNode,
                ),
            ):
                extensions.append(definition)

        # Extensions may precede the types they extend.
        for extension in extensions:
            self._process_extension(extension)

        log.debug("Parsed schema with %d types", len(self.ir.types))
        return self.ir

    def _process_schema_definition(self, node: SchemaDefinitionNode):
        for operation_type in node.operation_types:
            name = operation_type.type.name.value
            kind = operation_type.operation.value
            if kind == "query":
                self.ir.query_type = name
            elif kind == "mutation":
                self.ir.mutation_type = name
            elif kind == "subscription":
                self.ir.subscription_type = name

    def _process_scalar(self, node: ScalarTypeDefinitionNode):
        self.ir.add_type(IRScalar(name=node.name.value, description=_description(node)))

    def _process_enum(self, node: EnumTypeDefinitionNode):
        self.ir.add_type(
            IREnum(
                name=node.name.value,
                values=self._process_enum_values(node.values),
                description=_description(node),
            )
        )

    @staticmethod
    def _process_enum_values(value_nodes) -> list[IREnumValue]:
        return [
            IREnumValue(
                name=v.name.value,
                description=_description(v),
                deprecation_reason=_deprecation_reason(v.directives),
            )
            for v in value_nodes or ()
        ]

    def _process_interface(self, node: InterfaceTypeDefinitionNode):
        self.ir.add_type(
            IRInterface(
                name=node.name.value,
                fields=self._process_fields(node.fields),
                interfaces=[i.name.value for i in node.interfaces or ()],
                description=_description(node),
            )
        )

    def _process_object_type(self, node: ObjectTypeDefinitionNode):
        self.ir.add_type(
            IRObject(
                name=node.name.value,
                fields=self._process_fields(node.fields),
                interfaces=[i.name.value for i in node.interfaces or ()],
                description=_description(node),
            )
        )

    def _process_union(self, node: UnionTypeDefinitionNode):
        self.ir.add_type(
            IRUnion(
                name=node.name.value,
                members=[t.name.value for t in node.types or ()],
                description=_description(node),
            )
        )

    def _process_input_type(self, node: InputObjectTypeDefinitionNode):
        self.ir.add_type(
            IRInputObject(
                name=node.name.value,
                fields=self._process_arguments(node.fields),
                description=_description(node),
            )
        )

    def _process_extension(self, node):
        """Merge an ``extend`` definition into the type it extends."""
        existing = self.ir.get_type(node.name.value)
        if isinstance(node, (ObjectTypeExtensionNode, InterfaceTypeExtensionNode)):
            for name, field in self._process_fields(node.fields).items():
                existing.fields.setdefault(name, field)
            for interface in node.interfaces or ():
                if interface.name.value not in existing.interfaces:
                    existing.interfaces.append(interface.name.value)
        elif isinstance(node, EnumTypeExtensionNode):
            existing.values.extend(self._process_enum_values(node.values))
        elif isinstance(node, UnionTypeExtensionNode):
            existing.members.extend(t.name.value for t in node.types or ())
        elif isinstance(node, InputObjectTypeExtensionNode):
            existing.fields.extend(self._process_arguments(node.fields))

    def _process_fields(self, field_nodes) -> dict[str, IRField]:
        """Process field definitions into IRFields keyed by name."""
        fields = {}
        for node in field_nodes or ():
            fields[node.name.value] = IRField(
                name=node.name.value,
                type=type_ref_from_node(node.type),
                arguments=self._process_arguments(node.arguments),
                description=_description(node),
                deprecation_reason=_deprecation_reason(node.directives),
            )
        return fields

    @staticmethod
    def _process_arguments(argument_nodes) -> list[IRArgument]:
        return [
            IRArgument(
                name=node.name.value,
                type=type_ref_from_node(node.type),
                default_value=print_ast(node.default_value) if node.default_value else None,
                description=_description(node),
            )
            for node in argument_nodes or ()
        ]


class QueryParser:
    """Parses an executable GraphQL document into IR."""

    def __init__(self, source: str):
        self.source = source

    @classmethod
    def from_path(cls, query_path: str) -> "QueryParser":
        """Create a parser over a query file or a directory of query files."""
        return cls(_read_files(query_path))

    def parse_all(self) -> IRQueryDocument:
        ast: DocumentNode = parse(self.source)
        document = IRQueryDocument()
        for definition in ast.definitions:
            if isinstance(definition, OperationDefinitionNode):
                document.operations.append(self._process_operation(definition))
            elif isinstance(definition, FragmentDefinitionNode):
                fragment = IRFragment(
                    name=definition.name.value,
                    type_condition=definition.type_condition.name.value,
                    selections=self._process_selection_set(definition.selection_set),
                )
                document.fragments[fragment.name] = fragment
        log.debug(
            "Parsed %d operations and %d fragments",
            len(document.operations),
            len(document.fragments),
        )
        return document

    def _process_operation(self, node: OperationDefinitionNode) -> IROperation:
        kind = OperationKind(node.operation.value)
        variables = [
            IRVariable(
                name=definition.variable.name.value,
                type=type_ref_from_node(definition.type),
                default_value=print_ast(definition.default_value) if definition.default_value else None,
            )
            for definition in node.variable_definitions or ()
        ]
        return IROperation(
            # Anonymous operations are named after their kind, e.g. "Query".
            name=node.name.value if node.name else kind.value.capitalize(),
            kind=kind,
            selections=self._process_selection_set(node.selection_set),
            variables=variables,
        )

    def _process_selection_set(self, node: SelectionSetNode | None) -> list[IRSelection]:
        if node is None:
            return []
        selections: list[IRSelection] = []
        for selection in node.selections:
            if isinstance(selection, FieldNode):
                selections.append(
                    IRFieldSelection(
                        name=selection.name.value,
                        alias=selection.alias.value if selection.alias else None,
                        selections=self._process_selection_set(selection.selection_set),
                    )
                )
            elif isinstance(selection, FragmentSpreadNode):
                selections.append(IRFragmentSpread(fragment_name=selection.name.value))
            elif isinstance(selection, InlineFragmentNode):
                selections.append(
                    IRInlineFragment(
                        type_condition=(
                            selection.type_condition.name.value
                            if selection.type_condition
                            else None
                        ),
                        selections=self._process_selection_set(selection.selection_set),
                    )
                )
        return selections


def parse_schema(source: str) -> IRSchema:
    """Parse SDL source text into an IRSchema."""
    return SchemaParser(source).parse_all()


def parse_query(source: str) -> IRQueryDocument:
    """Parse an executable document into an IRQueryDocument."""
    return QueryParser(source).parse_all()
