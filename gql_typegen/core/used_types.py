"""Collection of every schema type an operation touches."""

import logging
from dataclasses import dataclass

from .ir import (
    IREnum,
    IRFieldSelection,
    IRFragment,
    IRFragmentSpread,
    IRInlineFragment,
    IRInputObject,
    IRNamedType,
    IROperation,
    IRQueryDocument,
    IRScalar,
    IRSchema,
    IRSelection,
    OperationKind,
    TypeKind,
)

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class UsedTypes:
    """Custom scalars, enums, input objects and fragments used by an operation.

    Each tuple is deduplicated by identity and ordered by first use.
    """
    scalars: tuple[IRScalar, ...] = ()
    enums: tuple[IREnum, ...] = ()
    inputs: tuple[IRInputObject, ...] = ()
    fragments: tuple[IRFragment, ...] = ()

    def __len__(self) -> int:
        return len(self.scalars) + len(self.enums) + len(self.inputs) + len(self.fragments)

    def __contains__(self, item: object) -> bool:
        return any(
            item is entry
            for group in (self.scalars, self.enums, self.inputs, self.fragments)
            for entry in group
        )


class UsedTypesCollector:
    """Walks an operation's selections and variables.

    Ordered dicts double as identity-keyed ordered sets: the IR types hash by
    identity.
    """

    def __init__(self, schema: IRSchema, document: IRQueryDocument):
        self.schema = schema
        self.document = document
        self._scalars: dict[IRScalar, None] = {}
        self._enums: dict[IREnum, None] = {}
        self._inputs: dict[IRInputObject, None] = {}
        self._fragments: dict[IRFragment, None] = {}

    def collect(self, operation: IROperation) -> UsedTypes:
        if operation.kind is OperationKind.FRAGMENT:
            self._visit_fragment(self.document.get_fragment(operation.name))
        else:
            self._visit_selections(operation.selections, operation.target_type(self.schema))

        for variable in operation.variables:
            self._visit_input_type(self.schema.get_type(variable.type.name))

        used = UsedTypes(
            scalars=tuple(self._scalars),
            enums=tuple(self._enums),
            inputs=tuple(self._inputs),
            fragments=tuple(self._fragments),
        )
        log.debug(
            "Operation %s uses %d scalars, %d enums, %d inputs, %d fragments",
            operation.name,
            len(used.scalars),
            len(used.enums),
            len(used.inputs),
            len(used.fragments),
        )
        return used

    def _visit_selections(self, selections: list[IRSelection], target: IRNamedType):
        for selection in selections:
            if isinstance(selection, IRFieldSelection):
                self._visit_field(selection, target)
            elif isinstance(selection, IRFragmentSpread):
                self._visit_fragment(self.document.get_fragment(selection.fragment_name))
            elif isinstance(selection, IRInlineFragment):
                condition = target
                if selection.type_condition is not None:
                    condition = self.schema.get_type(selection.type_condition)
                self._visit_selections(selection.selections, condition)
            else:
                raise TypeError(f"Unexpected selection: {selection!r}")

    def _visit_field(self, selection: IRFieldSelection, target: IRNamedType):
        if selection.name == self.schema.typename_field:
            return
        schema_field = self.schema.get_field(target.name, selection.name)
        field_type = self.schema.get_type(schema_field.type.name)
        if self.schema.is_composite(field_type):
            self._visit_selections(selection.selections, field_type)
        else:
            self._record_leaf(field_type)

    def _visit_fragment(self, fragment: IRFragment):
        if fragment in self._fragments:
            return
        self._fragments[fragment] = None
        self._visit_selections(
            fragment.selections, self.schema.get_type(fragment.type_condition)
        )

    def _visit_input_type(self, named_type: IRNamedType):
        if named_type.kind is TypeKind.INPUT_OBJECT:
            # The membership check doubles as the visited set for
            # self-referencing input objects.
            if named_type in self._inputs:
                return
            self._inputs[named_type] = None
            for input_field in named_type.fields:
                self._visit_input_type(self.schema.get_type(input_field.type.name))
        else:
            self._record_leaf(named_type)

    def _record_leaf(self, named_type: IRNamedType):
        if named_type.kind is TypeKind.SCALAR:
            if not named_type.is_builtin:
                self._scalars.setdefault(named_type, None)
        elif named_type.kind is TypeKind.ENUM:
            self._enums.setdefault(named_type, None)
        elif named_type.kind is TypeKind.INPUT_OBJECT:
            self._visit_input_type(named_type)


def collect_used_types(
    operation: IROperation, document: IRQueryDocument, schema: IRSchema
) -> UsedTypes:
    """Collect the used-types catalog for one operation."""
    return UsedTypesCollector(schema, document).collect(operation)
