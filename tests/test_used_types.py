"""Tests for the used-types collector."""

import pytest

from gql_typegen.core.errors import UnknownFieldError, UnresolvedFragmentError
from gql_typegen.core.parser import parse_query
from gql_typegen.core.used_types import UsedTypes, collect_used_types

from .conftest import HERO_QUERY


def collect(schema, query, name=None):
    document = parse_query(query)
    return collect_used_types(document.get_operation(name), document, schema)


def names(entries):
    return [entry.name for entry in entries]


class TestCollectSelections:
    """Types reached through selections."""

    def test_hero_query(self, schema):
        used = collect(schema, HERO_QUERY)
        assert names(used.enums) == ["Episode"]
        assert names(used.fragments) == ["CharacterFields"]
        assert used.scalars == ()
        assert used.inputs == ()

    def test_builtin_scalars_are_not_recorded(self, schema):
        used = collect(schema, "{ starship(id: 1) { id name } }")
        assert len(used) == 0

    def test_custom_scalars_in_first_seen_order(self, schema):
        used = collect(
            schema,
            "{ starship(id: 1) { price } hero { ... on Human { born } } }",
        )
        assert names(used.scalars) == ["Money", "DateTime"]

    def test_nested_fragments_are_recorded(self, schema):
        used = collect(
            schema,
            """
            { hero { ...Outer } }
            fragment Outer on Character { friends { ...Inner } }
            fragment Inner on Character { appearsIn }
            """,
        )
        assert names(used.fragments) == ["Outer", "Inner"]
        assert names(used.enums) == ["Episode"]

    def test_fragment_used_twice_is_recorded_once(self, schema):
        used = collect(
            schema,
            """
            { hero { ...CharacterFields friends { ...CharacterFields } } }
            fragment CharacterFields on Character { id appearsIn }
            """,
        )
        assert names(used.fragments) == ["CharacterFields"]

    def test_unused_fragments_are_ignored(self, schema):
        used = collect(
            schema,
            """
            query Only { hero { id } }
            fragment Unused on Character { appearsIn }
            """,
        )
        assert used.fragments == ()
        assert used.enums == ()

    def test_inline_fragment_types(self, schema):
        used = collect(schema, "{ search(text: \"x\") { ... on Starship { price } } }")
        assert names(used.scalars) == ["Money"]

    def test_membership_is_by_identity(self, schema):
        used = collect(schema, HERO_QUERY)
        assert schema.get_type("Episode") in used
        assert schema.get_type("Unit") not in used


class TestCollectVariables:
    """Types reached through variable declarations."""

    def test_input_object_and_nested_types(self, schema):
        used = collect(
            schema,
            """
            mutation CreateReview($review: ReviewInput!) {
              createReview(review: $review) { stars }
            }
            """,
        )
        assert names(used.inputs) == ["ReviewInput"]
        assert names(used.enums) == ["Episode"]

    def test_self_referencing_input_terminates(self, schema):
        used = collect(
            schema,
            """
            query Reviews($filter: ReviewFilter) {
              reviews(filter: $filter) { stars }
            }
            """,
        )
        # ReviewFilter -> ReviewWindow -> ReviewFilter
        assert names(used.inputs) == ["ReviewFilter", "ReviewWindow"]
        assert names(used.scalars) == ["DateTime"]

    def test_enum_variable(self, schema):
        used = collect(
            schema,
            """
            query Height($unit: Unit) { hero { ... on Human { height(unit: $unit) } } }
            """,
        )
        assert names(used.enums) == ["Unit"]


class TestCollectDeterminism:
    """Collection is idempotent and order-stable."""

    def test_idempotent(self, schema):
        document = parse_query(HERO_QUERY)
        operation = document.get_operation()
        first = collect_used_types(operation, document, schema)
        second = collect_used_types(operation, document, schema)
        assert first == second
        assert [names(group) for group in (first.enums, first.fragments)] == [
            names(group) for group in (second.enums, second.fragments)
        ]

    def test_empty_catalog(self):
        assert len(UsedTypes()) == 0


class TestCollectErrors:
    def test_unknown_field(self, schema):
        with pytest.raises(UnknownFieldError) as exc_info:
            collect(schema, "{ hero { nope } }")
        assert exc_info.value.field_name == "nope"
        assert exc_info.value.type_name == "Character"

    def test_unresolved_fragment(self, schema):
        with pytest.raises(UnresolvedFragmentError) as exc_info:
            collect(schema, "{ hero { ...Missing } }")
        assert exc_info.value.fragment_name == "Missing"
