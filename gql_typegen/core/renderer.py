"""Python renderer for generated modules.

Renders Jinja2 templates to produce a module of pydantic models from a
GeneratedModule.

Generated modules reach typing, enum and pydantic only through the
``_typing``, ``_enum`` and ``_pydantic`` module aliases, so a schema type named
``Field`` or ``Optional`` cannot shadow them.

Supports custom templates via the template_dir parameter:
    renderer = PythonRenderer(template_dir="./my_templates")

Template lookup order:
1. User's template directory (if provided)
2. Package default templates
"""

import ast
import re
from pathlib import Path
from typing import Optional

from jinja2 import ChoiceLoader, Environment, FileSystemLoader, PackageLoader, select_autoescape

from .definitions import (
    GeneratedModule,
    ListTypeRef,
    NamedTypeRef,
    OptionalTypeRef,
    RecordField,
    TaggedUnionDefinition,
    TypeRef,
)
from .hooks import HookRunner
from .qualifiers import is_optional


def safe_docstring(text: str) -> str:
    """Escape text for use in docstrings."""
    if not text:
        return ""
    text = text.replace("\\", "\\\\").replace('"""', '\\"\\"\\"')
    if text.endswith('"'):
        text += " "
    return text


def safe_comment(text: str) -> str:
    """Make text safe for a single-line Python comment."""
    if not text:
        return ""
    text = text.replace("\n", " ").replace("\r", "")
    text = re.sub(r"\s+", " ", text)
    if len(text) > 120:
        text = text[:117] + "..."
    return text.strip()


def annotation(type_ref: TypeRef) -> str:
    """Render a type descriptor as a typing annotation."""
    if isinstance(type_ref, NamedTypeRef):
        return type_ref.name
    if isinstance(type_ref, ListTypeRef):
        return f"_typing.List[{annotation(type_ref.of_type)}]"
    if isinstance(type_ref, OptionalTypeRef):
        return f"_typing.Optional[{annotation(type_ref.of_type)}]"
    raise TypeError(f"Unexpected type descriptor: {type_ref!r}")


def field_default(record_field: RecordField) -> str:
    """Render the ``= ...`` part of a model field, if any."""
    arguments = []
    if is_optional(record_field.type):
        arguments.append("default=None")
    if record_field.serialized_name != record_field.name:
        arguments.append(f"alias={record_field.serialized_name!r}")
    if not arguments:
        return ""
    if arguments == ["default=None"]:
        return " = None"
    return f" = _pydantic.Field({', '.join(arguments)})"


class PythonRenderer:
    """Renders GeneratedModules as Python source.

    Available templates to override:
        - module.py.j2: the whole generated module

    Example:
        renderer = PythonRenderer(template_dir="./my_templates")
        source = renderer.render(module)
    """

    def __init__(self, template_dir: Optional[str] = None, hooks: Optional[HookRunner] = None):
        """Initialize the renderer.

        Args:
            template_dir: Optional directory with custom Jinja2 templates.
                          Templates here override the built-in templates.
            hooks: Optional post-generation hooks applied to rendered source.
        """
        self.template_dir = template_dir
        self.hooks = hooks or HookRunner()

        # Build template loader - custom templates take precedence
        loaders = []
        if template_dir:
            template_path = Path(template_dir)
            if template_path.is_dir():
                loaders.append(FileSystemLoader(str(template_path)))
        loaders.append(PackageLoader("gql_typegen", "templates"))

        self.env = Environment(
            loader=ChoiceLoader(loaders),
            autoescape=select_autoescape(),
            trim_blocks=True,
            lstrip_blocks=True,
            keep_trailing_newline=True,
        )
        self.env.filters["annotation"] = annotation
        self.env.filters["field_default"] = field_default
        self.env.filters["repr"] = repr
        self.env.filters["safe_docstring"] = safe_docstring
        self.env.filters["safe_comment"] = safe_comment

    def render(self, module: GeneratedModule, filename: str = "module.py") -> str:
        """Render a module to Python source and run post-generation hooks.

        Raises:
            ValueError: the rendered source is not valid Python
        """
        template = self.env.get_template("module.py.j2")
        content = template.render(
            module=module,
            imports=module.imports,
            variants=self._variant_typenames(module),
        )

        # Validate Python syntax
        try:
            ast.parse(content)
        except SyntaxError as e:
            raise ValueError(
                f"Generated invalid Python for {module.operation_name}: {e}\n"
                f"Template: module.py.j2"
            ) from e

        return self.hooks.run_post_hooks(filename, content)

    def write(self, module: GeneratedModule, output_path: str) -> str:
        """Render a module and write it to ``output_path``."""
        path = Path(output_path)
        content = self.render(module, path.name)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
        return content

    @staticmethod
    def _variant_typenames(module: GeneratedModule) -> dict[str, dict]:
        """Map each variant record to its union's discriminant and type names."""
        variants = {}
        for definition in module:
            if isinstance(definition, TaggedUnionDefinition):
                for variant in definition.variants:
                    variants[variant.record] = {
                        "discriminant": definition.discriminant,
                        "typenames": variant.typenames,
                    }
        return variants
