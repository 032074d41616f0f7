"""Tests for response shapes built from selection sets."""

import pytest

from gql_typegen.core.definitions import (
    DefinitionCategory,
    ListTypeRef,
    NamedTypeRef,
    OptionalTypeRef,
    RecordDefinition,
    TaggedUnionDefinition,
)
from gql_typegen.core.errors import (
    AmbiguousTypeConditionError,
    DeprecatedFieldError,
    UnknownFieldError,
)
from gql_typegen.core.generator import generate_module
from gql_typegen.core.options import CodegenOptions, DeprecationStrategy
from gql_typegen.core.parser import parse_query, parse_schema

from .conftest import NODE_SDL

SEARCH_QUERY = """
query Search {
  search(text: "luke") {
    __typename
    ... on Node { id }
    ... on Human { name }
  }
}
"""


def unions(module):
    return [d for d in module if isinstance(d, TaggedUnionDefinition)]


def field_names(record):
    return [f.name for f in record.fields]


class TestNodeExample:
    """interface Node { id } with User implementing it."""

    @pytest.fixture
    def module(self):
        schema = parse_schema(NODE_SDL)
        document = parse_query("query NodeQuery { node { id ... on User { name } } }")
        return generate_module(schema, document)

    def test_direct_field_is_required(self, module):
        node = module.get("ResponseDataNode")
        assert node.get_field("id").type == NamedTypeRef("ID")

    def test_on_field_is_flattened_union(self, module):
        on = module.get("ResponseDataNode").get_field("on")
        assert on.flatten
        assert on.type == NamedTypeRef("ResponseDataNodeOn")

    def test_union_variant(self, module):
        union = module.get("ResponseDataNodeOn")
        assert union.discriminant == "__typename"
        assert [v.name for v in union.variants] == ["User"]
        variant = union.get_variant("User")
        assert variant.typenames == ("User",)
        record = module.get(variant.record)
        assert record.get_field("name").type == OptionalTypeRef(NamedTypeRef("String"))

    def test_root_field_is_optional(self, module):
        root = module.get("ResponseData")
        assert root.category is DefinitionCategory.RESPONSE
        assert root.get_field("node").type == OptionalTypeRef(NamedTypeRef("ResponseDataNode"))


class TestDirectFields:
    def test_nested_records_are_named_by_path(self, generate):
        module = generate("{ hero { name friends { name } } }")
        friends = module.get("ResponseDataHero").get_field("friends")
        assert friends.type == OptionalTypeRef(
            ListTypeRef(OptionalTypeRef(NamedTypeRef("ResponseDataHeroFriends")))
        )
        assert field_names(module.get("ResponseDataHeroFriends")) == ["name"]

    def test_nested_records_precede_parents(self, generate):
        module = generate("{ hero { friends { name } } }")
        order = module.names
        assert order.index("ResponseDataHeroFriends") < order.index("ResponseDataHero")
        assert order.index("ResponseDataHero") < order.index("ResponseData")

    def test_alias(self, generate):
        module = generate("{ hero { heroName: name } }")
        field = module.get("ResponseDataHero").get_field("hero_name")
        assert field.serialized_name == "heroName"

    def test_typename(self, generate):
        module = generate("{ hero { __typename } }")
        field = module.get("ResponseDataHero").get_field("typename__")
        assert field.serialized_name == "__typename"
        assert field.type == NamedTypeRef("String")

    def test_enum_and_list_types(self, generate):
        module = generate("{ hero { appearsIn } search(text: \"x\") { __typename } }")
        assert module.get("ResponseDataHero").get_field("appears_in").type == ListTypeRef(
            OptionalTypeRef(NamedTypeRef("Episode"))
        )
        assert module.get("ResponseData").get_field("search").type == ListTypeRef(
            NamedTypeRef("ResponseDataSearch")
        )

    def test_duplicate_selections_merge(self, generate):
        module = generate("{ hero { name name friends { id } friends { name } } }")
        assert field_names(module.get("ResponseDataHero")) == ["name", "friends"]
        assert field_names(module.get("ResponseDataHeroFriends")) == ["id", "name"]

    def test_conflicting_aliases_fail(self, generate):
        with pytest.raises(AmbiguousTypeConditionError) as exc_info:
            generate("{ hero { label: name label: id } }")
        assert exc_info.value.response_key == "label"

    def test_unknown_field(self, generate):
        with pytest.raises(UnknownFieldError) as exc_info:
            generate("{ starship(id: 1) { pilot } }")
        assert exc_info.value.field_name == "pilot"
        assert exc_info.value.type_name == "Starship"

    def test_fields_are_not_selectable_on_unions(self, generate):
        with pytest.raises(UnknownFieldError) as exc_info:
            generate("{ search(text: \"x\") { id } }")
        assert exc_info.value.type_name == "SearchResult"

    def test_mutation_root(self, generate):
        module = generate(
            """
            mutation CreateReview($review: ReviewInput!) {
              createReview(review: $review) { stars commentary }
            }
            """
        )
        review = module.get("ResponseDataCreateReview")
        assert review.get_field("stars").type == NamedTypeRef("Int")


class TestTypeConditions:
    def test_no_branches_no_union(self, generate):
        module = generate("{ starship(id: 1) { id name } hero { name ...CharacterFields } } "
                          "fragment CharacterFields on Character { id }")
        assert unions(module) == []
        assert all(f.name != "on" for f in module.get("ResponseDataHero").fields)

    def test_inline_fragment_on_same_type_merges(self, generate):
        module = generate("{ hero { ... on Character { name } ... { id } } }")
        assert unions(module) == []
        assert field_names(module.get("ResponseDataHero")) == ["name", "id"]

    def test_inline_fragment_on_implemented_interface_merges(self, generate):
        module = generate("{ starship(id: 1) { ... on Node { id } } }")
        assert unions(module) == []
        assert field_names(module.get("ResponseDataStarship")) == ["id"]

    def test_branch_creates_union(self, hero_module):
        union = hero_module.get("ResponseDataHeroOn")
        assert [v.name for v in union.variants] == ["Droid", "Human"]
        droid = hero_module.get(union.get_variant("Droid").record)
        assert field_names(droid) == ["primary_function"]

    def test_uncovered_types_get_empty_variants(self, hero_module):
        union = hero_module.get("ResponseDataHeroOn")
        human = union.get_variant("Human")
        assert human.typenames == ("Human",)
        assert hero_module.get(human.record).fields == []

    def test_union_precedes_record(self, hero_module):
        order = hero_module.names
        assert order.index("ResponseDataHeroOnDroid") < order.index("ResponseDataHeroOn")
        assert order.index("ResponseDataHeroOn") < order.index("ResponseDataHero")

    def test_fragment_spread_on_subtype_is_a_branch(self, generate):
        module = generate(
            """
            { hero { ...DroidFields } }
            fragment DroidFields on Droid { primaryFunction }
            """
        )
        variant = module.get("ResponseDataHeroOn").get_variant("Droid")
        record = module.get(variant.record)
        field = record.get_field("droid_fields")
        assert field.flatten
        assert field.type == NamedTypeRef("DroidFields")

    def test_repeated_condition_is_one_variant(self, generate):
        module = generate(
            "{ hero { ... on Droid { name } ... on Droid { primaryFunction } } }"
        )
        union = module.get("ResponseDataHeroOn")
        assert [v.name for v in union.variants] == ["Droid", "Human"]
        droid = module.get(union.get_variant("Droid").record)
        assert field_names(droid) == ["name", "primary_function"]

    def test_nested_branches_inside_variants(self, generate):
        module = generate(
            "{ search(text: \"x\") { ... on Human { friends { ... on Droid { primaryFunction } } } } }"
        )
        assert "ResponseDataSearchOnHumanFriendsOn" in module.names


class TestOverlappingConditions:
    """One concrete type reachable through several type conditions."""

    def test_fields_merge_into_one_variant(self, generate):
        module = generate(SEARCH_QUERY)
        union = module.get("ResponseDataSearchOn")
        assert [v.name for v in union.variants] == ["Human", "Node"]

        human = union.get_variant("Human")
        assert human.typenames == ("Human",)
        assert field_names(module.get(human.record)) == ["id", "name"]

        node = union.get_variant("Node")
        assert node.typenames == ("Droid", "Starship")
        assert field_names(module.get(node.record)) == ["id"]

    def test_each_type_in_exactly_one_variant(self, generate):
        module = generate(SEARCH_QUERY)
        typenames = [t for v in module.get("ResponseDataSearchOn").variants for t in v.typenames]
        assert sorted(typenames) == ["Droid", "Human", "Starship"]

    def test_conflicting_fields_fail(self, generate):
        with pytest.raises(AmbiguousTypeConditionError) as exc_info:
            generate(
                """
                { search(text: "x") {
                    ... on Node { label: id }
                    ... on Human { label: name }
                } }
                """
            )
        error = exc_info.value
        assert error.type_name == "Human"
        assert error.response_key == "label"
        assert error.conditions == ("Node", "Human")

    def test_two_abstract_conditions(self, generate):
        module = generate(
            "{ search(text: \"x\") { ... on Node { id } ... on Character { name } } }"
        )
        union = module.get("ResponseDataSearchOn")
        assert [(v.name, v.typenames) for v in union.variants] == [
            ("NodeCharacter", ("Human", "Droid")),
            ("Node", ("Starship",)),
        ]

    def test_shared_variant_field_types_must_agree(self):
        schema = parse_schema(
            """
            interface Named { name: String }
            interface Befriended { friend: Named }
            type Cat implements Named & Befriended { name: String friend: Cat }
            type Dog implements Named & Befriended { name: String friend: Dog }
            union Pet = Cat | Dog
            type Query { pets: [Pet] }
            """
        )
        document = parse_query(
            "{ pets { ... on Named { name } ... on Befriended { friend { name } } } }"
        )
        with pytest.raises(AmbiguousTypeConditionError) as exc_info:
            generate_module(schema, document)
        error = exc_info.value
        assert error.type_name == "Dog"
        assert error.response_key == "friend"
        assert error.conditions == ("Named", "Befriended")


class TestDeprecation:
    QUERY = "{ hero { ... on Human { homePlanet } } }"

    def test_warn_marks_field(self, generate, caplog):
        module = generate(self.QUERY)
        record = module.get("ResponseDataHeroOnHuman")
        assert record.get_field("home_planet").deprecation_reason == "Planets were retired"
        assert "deprecated" in caplog.text

    def test_allow(self, generate):
        module = generate(self.QUERY, deprecation_strategy=DeprecationStrategy.ALLOW)
        record = module.get("ResponseDataHeroOnHuman")
        assert record.get_field("home_planet").deprecation_reason is None

    def test_deny(self, generate):
        with pytest.raises(DeprecatedFieldError) as exc_info:
            generate(self.QUERY, deprecation_strategy=DeprecationStrategy.DENY)
        assert exc_info.value.field_name == "homePlanet"


class TestDerives:
    def test_response_derives_pass_through(self, generate):
        module = generate(
            "{ hero { name ... on Droid { primaryFunction } } }",
            response_derives=("dataclass_transform", "frozen"),
        )
        for definition in module.by_category(DefinitionCategory.RESPONSE):
            assert definition.derives == ("dataclass_transform", "frozen")

    def test_custom_response_name(self, schema):
        module = generate_module(
            schema,
            parse_query("{ hero { name } }"),
            CodegenOptions(response_name="HeroData"),
        )
        assert isinstance(module.get("HeroData"), RecordDefinition)
        assert "HeroDataHero" in module.names
