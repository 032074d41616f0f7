"""Shared fixtures: a small Star Wars schema and helpers to generate from it."""

import pytest

from gql_typegen.core.generator import generate_module
from gql_typegen.core.options import CodegenOptions
from gql_typegen.core.parser import parse_query, parse_schema

STAR_WARS_SDL = """
schema {
  query: Query
  mutation: Mutation
}

scalar DateTime
scalar Money

enum Episode {
  NEWHOPE
  EMPIRE
  JEDI
}

enum Unit {
  METER
  FOOT @deprecated(reason: "Use METER")
}

interface Node {
  id: ID!
}

interface Character implements Node {
  id: ID!
  name: String
  friends: [Character]
  appearsIn: [Episode]!
}

type Human implements Node & Character {
  id: ID!
  name: String
  friends: [Character]
  appearsIn: [Episode]!
  height(unit: Unit): Float
  homePlanet: String @deprecated(reason: "Planets were retired")
  born: DateTime
}

type Droid implements Node & Character {
  id: ID!
  name: String
  friends: [Character]
  appearsIn: [Episode]!
  primaryFunction: String
}

type Starship implements Node {
  id: ID!
  name: String!
  price: Money
}

union SearchResult = Human | Droid | Starship

input ReviewInput {
  stars: Int!
  commentary: String
  episode: Episode
  tags: [String!]
  followUp: ReviewInput
}

input ReviewFilter {
  tag: String
  and: [ReviewFilter!]
  within: ReviewWindow
}

input ReviewWindow {
  since: DateTime
  filter: ReviewFilter
}

type Review {
  stars: Int!
  commentary: String
}

type Query {
  hero(episode: Episode): Character
  node(id: ID!): Node
  search(text: String!): [SearchResult!]!
  starship(id: ID!): Starship
  reviews(filter: ReviewFilter): [Review]
}

type Mutation {
  createReview(episode: Episode, review: ReviewInput!): Review
}
"""

HERO_QUERY = """
query HeroQuery($episode: Episode) {
  hero(episode: $episode) {
    __typename
    name
    ...CharacterFields
    ... on Droid {
      primaryFunction
    }
  }
}

fragment CharacterFields on Character {
  id
  appearsIn
}
"""

NODE_SDL = """
interface Node {
  id: ID!
}

type User implements Node {
  id: ID!
  name: String
}

type Query {
  node: Node
}
"""


@pytest.fixture
def schema():
    """The Star Wars schema as IR."""
    return parse_schema(STAR_WARS_SDL)


@pytest.fixture
def generate(schema):
    """Generate a module for a query against the Star Wars schema."""

    def _generate(query: str, **options):
        return generate_module(schema, parse_query(query), CodegenOptions(**options))

    return _generate


@pytest.fixture
def hero_module(generate):
    return generate(HERO_QUERY)
