"""Record and tagged-union shapes for selection sets.

A selection set becomes one record. Fields selected directly, and fragments
whose type condition always holds, live at the record's own level.
Selections narrowed by a type condition become variants of an auxiliary
tagged union ``<Record>On``, held by a flattened ``on`` field and
discriminated by ``__typename``.

When several type conditions reach the same concrete type their selections
are merged into a single variant for that type. Concrete types covered by
the same set of conditions share one variant, built against the first of
them; the others must give every selected field the same type.
"""

import logging
from dataclasses import dataclass, field

from .definitions import (
    Definition,
    DefinitionCategory,
    NamedTypeRef,
    RecordDefinition,
    RecordField,
    TaggedUnionDefinition,
    UnionVariant,
)
from .errors import AmbiguousTypeConditionError, DeprecatedFieldError
from .ir import (
    IRField,
    IRFieldSelection,
    IRFragment,
    IRFragmentSpread,
    IRInlineFragment,
    IRNamedType,
    IRObject,
    IRQueryDocument,
    IRSchema,
    IRSelection,
    TypeQualifier,
)
from .naming import field_name, pascal_case
from .options import CodegenOptions, DeprecationStrategy
from .qualifiers import decorate_ref, decorate_type

log = logging.getLogger(__name__)

ON_FIELD = "on"


@dataclass
class _SelectionPlan:
    # Response key -> field selections, or fragment -> [] for same-level spreads
    entries: dict[str | IRFragment, list[IRFieldSelection]] = field(default_factory=dict)
    branches: list[tuple[IRNamedType, list[IRSelection]]] = field(default_factory=list)


def _entry_name(key: str | IRFragment) -> str:
    return key.name if isinstance(key, IRFragment) else key


class SelectionShapeBuilder:
    """Builds records for selection sets, collecting every definition produced.

    Definitions are appended in dependency order: nested records and
    tagged unions come before the record that refers to them.
    """

    def __init__(self, schema: IRSchema, document: IRQueryDocument, options: CodegenOptions):
        self.schema = schema
        self.document = document
        self.options = options
        self.definitions: list[Definition] = []

    def build(
        self,
        name: str,
        selections: list[IRSelection],
        target: IRNamedType,
        category: DefinitionCategory,
        conditions: tuple[str, ...] | None = None,
    ) -> RecordDefinition:
        """Build the record ``name`` for ``selections`` evaluated on ``target``.

        Args:
            name: Name of the generated record
            selections: The selection set
            target: The type the selections apply to
            category: Category for this record and everything nested in it
            conditions: Type conditions the selections were merged from,
                        used in error messages

        Raises:
            UnknownFieldError: a field is not defined on ``target``
            UnresolvedFragmentError: a spread names an unknown fragment
            AmbiguousTypeConditionError: two selections disagree on one key
        """
        conditions = conditions or (target.name,)
        plan = _SelectionPlan()
        self._partition(selections, target, plan)

        fields = []
        for key, group in plan.entries.items():
            if isinstance(key, IRFragment):
                fields.append(self._fragment_field(key))
            else:
                fields.append(self._build_field(name, key, group, target, category, conditions))

        if plan.branches:
            union = self._build_union(name, plan.branches, target, category)
            fields.append(
                RecordField(
                    name=ON_FIELD,
                    serialized_name=ON_FIELD,
                    type=NamedTypeRef(union.name),
                    flatten=True,
                )
            )

        record = RecordDefinition(
            name=name,
            category=category,
            fields=fields,
            derives=self.options.response_derives,
        )
        self.definitions.append(record)
        return record

    def _partition(self, selections: list[IRSelection], target: IRNamedType, plan: _SelectionPlan):
        """Split selections into same-level entries and type-conditioned branches."""
        for selection in selections:
            if isinstance(selection, IRFieldSelection):
                plan.entries.setdefault(selection.response_key, []).append(selection)
            elif isinstance(selection, IRFragmentSpread):
                fragment = self.document.get_fragment(selection.fragment_name)
                condition = self.schema.get_type(fragment.type_condition)
                if self.schema.condition_applies(condition, target):
                    plan.entries.setdefault(fragment, [])
                else:
                    plan.branches.append((condition, [selection]))
            elif isinstance(selection, IRInlineFragment):
                if selection.type_condition is None:
                    self._partition(selection.selections, target, plan)
                    continue
                condition = self.schema.get_type(selection.type_condition)
                if self.schema.condition_applies(condition, target):
                    self._partition(selection.selections, target, plan)
                else:
                    plan.branches.append((condition, selection.selections))
            else:
                raise TypeError(f"Unexpected selection: {selection!r}")

    @staticmethod
    def _fragment_field(fragment: IRFragment) -> RecordField:
        name = field_name(fragment.name)
        return RecordField(
            name=name,
            serialized_name=name,
            type=NamedTypeRef(fragment.name),
            flatten=True,
        )

    def _build_field(
        self,
        parent_name: str,
        response_key: str,
        group: list[IRFieldSelection],
        target: IRNamedType,
        category: DefinitionCategory,
        conditions: tuple[str, ...],
    ) -> RecordField:
        if len({selection.name for selection in group}) > 1:
            raise AmbiguousTypeConditionError(target.name, response_key, conditions)
        selection = group[0]

        if selection.name == self.schema.typename_field:
            return RecordField(
                name=field_name(response_key),
                serialized_name=response_key,
                type=decorate_type("String", (TypeQualifier.REQUIRED,)),
            )

        schema_field = self.schema.get_field(target.name, selection.name)
        deprecation_reason = self._check_deprecation(schema_field, target)
        field_type = self.schema.get_type(schema_field.type.name)

        type_name = field_type.name
        if self.schema.is_composite(field_type):
            nested = self.build(
                parent_name + pascal_case(response_key),
                [s for same_key in group for s in same_key.selections],
                field_type,
                category,
            )
            type_name = nested.name

        return RecordField(
            name=field_name(response_key),
            serialized_name=response_key,
            type=decorate_ref(schema_field.type, type_name),
            description=schema_field.description,
            deprecation_reason=deprecation_reason,
        )

    def _check_deprecation(self, schema_field: IRField, target: IRNamedType) -> str | None:
        if not schema_field.is_deprecated:
            return None
        strategy = self.options.deprecation_strategy
        if strategy is DeprecationStrategy.DENY:
            raise DeprecatedFieldError(schema_field.name, target.name, schema_field.deprecation_reason)
        if strategy is DeprecationStrategy.WARN:
            log.warning(
                "Field %s.%s is deprecated: %s",
                target.name,
                schema_field.name,
                schema_field.deprecation_reason,
            )
            return schema_field.deprecation_reason
        return None

    def _build_union(
        self,
        name: str,
        branches: list[tuple[IRNamedType, list[IRSelection]]],
        target: IRNamedType,
        category: DefinitionCategory,
    ) -> TaggedUnionDefinition:
        union_name = f"{name}On"

        # Repeated conditions collapse into one branch.
        conditions: dict[IRNamedType, list[IRSelection]] = {}
        for condition, selections in branches:
            conditions.setdefault(condition, []).extend(selections)

        candidates = list(self.schema.possible_types(target))
        for condition in conditions:
            for obj in self.schema.possible_types(condition):
                if obj not in candidates:
                    candidates.append(obj)

        # Group concrete types by the exact set of conditions covering them.
        groups: dict[tuple[IRNamedType, ...], list[IRObject]] = {}
        covered: set[IRObject] = set()
        for condition in conditions:
            for obj in candidates:
                if obj in covered or not self._covers(condition, obj):
                    continue
                covered.add(obj)
                key = tuple(c for c in conditions if self._covers(c, obj))
                groups.setdefault(key, []).append(obj)
        for condition in conditions:
            if not any(condition in key for key in groups):
                groups[(condition,)] = []

        variants = []
        for key, objects in groups.items():
            variant_name = self._variant_name(key, objects)
            variant_target = key[0] if len(key) == 1 else objects[0]
            merged = [s for condition in key for s in conditions[condition]]
            condition_names = tuple(c.name for c in key)
            if len(key) > 1 and len(objects) > 1:
                self._check_shared_shape(merged, objects, condition_names)
            record = self.build(
                f"{union_name}{variant_name}",
                merged,
                variant_target,
                category,
                conditions=condition_names,
            )
            typenames = tuple(obj.name for obj in objects) or (key[0].name,)
            variants.append(UnionVariant(name=variant_name, record=record.name, typenames=typenames))

        # Concrete types no branch selects still need a variant to parse into.
        for obj in self.schema.possible_types(target):
            if obj in covered:
                continue
            record = RecordDefinition(
                name=f"{union_name}{obj.name}",
                category=category,
                derives=self.options.response_derives,
            )
            self.definitions.append(record)
            variants.append(UnionVariant(name=obj.name, record=record.name, typenames=(obj.name,)))

        union = TaggedUnionDefinition(
            name=union_name,
            category=category,
            discriminant=self.schema.typename_field,
            variants=variants,
            derives=self.options.response_derives,
        )
        self.definitions.append(union)
        log.debug("Built %s with variants %s", union_name, [v.name for v in variants])
        return union

    def _check_shared_shape(
        self,
        selections: list[IRSelection],
        objects: list[IRObject],
        conditions: tuple[str, ...],
    ):
        """Check that every object sharing a variant resolves it like the first one.

        The variant record is built against ``objects[0]``, so the others must
        select the same keys and see the same field types under them.
        """
        first = _SelectionPlan()
        self._partition(selections, objects[0], first)
        for obj in objects[1:]:
            plan = _SelectionPlan()
            self._partition(selections, obj, plan)
            for key in [*first.entries, *plan.entries]:
                if key not in first.entries or key not in plan.entries:
                    raise AmbiguousTypeConditionError(obj.name, _entry_name(key), conditions)
            for key, group in first.entries.items():
                if isinstance(key, IRFragment):
                    continue
                for selection in group:
                    if selection.name == self.schema.typename_field:
                        continue
                    expected = self.schema.get_field(objects[0].name, selection.name).type
                    if self.schema.get_field(obj.name, selection.name).type != expected:
                        raise AmbiguousTypeConditionError(obj.name, key, conditions)

    def _covers(self, condition: IRNamedType, obj: IRObject) -> bool:
        return obj in self.schema.possible_types(condition)

    @staticmethod
    def _variant_name(key: tuple[IRNamedType, ...], objects: list[IRObject]) -> str:
        if len(key) == 1:
            return key[0].name
        if len(objects) == 1:
            return objects[0].name
        return "".join(condition.name for condition in key)
