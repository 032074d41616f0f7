"""Command-line interface for gql-typegen."""

import logging
from pathlib import Path

import click
from graphql import GraphQLError

from .core.errors import CodegenError
from .core.generator import ModuleGenerator
from .core.hooks import AddHeaderHook, HookRunner
from .core.naming import snake_case
from .core.options import CodegenOptions, DeprecationStrategy
from .core.parser import QueryParser, SchemaParser
from .core.renderer import PythonRenderer
from .core.scalars import ImportedType, ScalarRegistry


def parse_scalar_mappings(mappings: tuple[str, ...]) -> ScalarRegistry:
    """Build a registry from ``NAME=module.Type`` options."""
    registry = ScalarRegistry()
    for mapping in mappings:
        name, sep, path = mapping.partition("=")
        if not sep or not name or not path:
            raise click.BadParameter(
                f"Expected NAME=module.Type, got {mapping!r}", param_hint="--scalar"
            )
        try:
            registry.register(name, ImportedType.from_path(path))
        except ValueError as e:
            raise click.BadParameter(str(e), param_hint="--scalar") from e
    return registry


@click.group()
@click.version_option(package_name="gql-typegen")
def main():
    """Typed response and variables models for GraphQL operations.

    Generate pydantic models describing exactly what a query returns.
    """
    pass


@main.command()
@click.option(
    "--schema",
    "-s",
    required=True,
    type=click.Path(exists=True),
    help="Path to a GraphQL schema file or a directory of schema files.",
)
@click.option(
    "--query",
    "-q",
    required=True,
    type=click.Path(exists=True),
    help="Path to a query document or a directory of query documents.",
)
@click.option(
    "--output",
    "-o",
    required=True,
    type=click.Path(),
    help="Output directory; one module is written per operation.",
)
@click.option(
    "--operation",
    "operation_name",
    default=None,
    help="Only generate this operation (or fragment).",
)
@click.option(
    "--scalar",
    "scalars",
    multiple=True,
    metavar="NAME=module.Type",
    help="Map a custom scalar to a Python type. Repeatable.",
)
@click.option("--response-derive", "response_derives", multiple=True, help="Decorator for response models. Repeatable.")
@click.option("--variables-derive", "variables_derives", multiple=True, help="Decorator for variables models. Repeatable.")
@click.option(
    "--deprecation",
    type=click.Choice([s.value for s in DeprecationStrategy]),
    default=DeprecationStrategy.WARN.value,
    show_default=True,
    help="How to treat selected deprecated fields.",
)
@click.option(
    "--template-dir",
    type=click.Path(exists=True, file_okay=False),
    default=None,
    help="Directory with templates overriding the built-in ones.",
)
@click.option("--header", default=None, help="Header prepended to every generated file.")
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output.",
)
def generate(
    schema: str,
    query: str,
    output: str,
    operation_name: str | None,
    scalars: tuple[str, ...],
    response_derives: tuple[str, ...],
    variables_derives: tuple[str, ...],
    deprecation: str,
    template_dir: str | None,
    header: str | None,
    verbose: bool,
):
    """Generate typed models for the operations of a query document.

    Examples:

        gql-typegen generate --schema ./schema.graphql --query ./queries --output ./generated

        gql-typegen generate -s ./schema -q ./hero.graphql -o ./out --operation HeroQuery

        gql-typegen generate -s ./schema -q ./q.graphql -o ./out --scalar DateTime=datetime.datetime
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")

    output_path = Path(output).resolve()
    options = CodegenOptions(
        operation_name=operation_name,
        response_derives=response_derives,
        variables_derives=variables_derives,
        scalars=parse_scalar_mappings(scalars),
        deprecation_strategy=DeprecationStrategy(deprecation),
    )

    try:
        click.echo("Parsing schema...")
        ir_schema = SchemaParser.from_path(schema).parse_all()
        click.echo("Parsing queries...")
        document = QueryParser.from_path(query).parse_all()
    except (GraphQLError, CodegenError) as e:
        raise click.ClickException(str(e)) from e

    if verbose:
        click.echo(f"  Types: {len(ir_schema.types)}")
        click.echo(f"  Operations: {len(document.operations)}")
        click.echo(f"  Fragments: {len(document.fragments)}")

    hooks = HookRunner()
    if header:
        hooks.add_post_hook(AddHeaderHook(header))
    renderer = PythonRenderer(template_dir=template_dir, hooks=hooks)

    try:
        if operation_name is not None:
            operations = [document.get_operation(operation_name)]
        else:
            operations = document.operations

        click.echo("Generating code...")
        for operation in operations:
            module = ModuleGenerator(ir_schema, document, operation, options).generate()
            target = output_path / f"{snake_case(operation.name)}.py"
            renderer.write(module, str(target))
            if verbose:
                click.echo(f"  {operation.name}: {len(module)} definitions -> {target.name}")
    except CodegenError as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Done! Generated {len(operations)} module(s) in {output_path}")


if __name__ == "__main__":
    main()
