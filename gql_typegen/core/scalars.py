"""Custom scalar mappings.

A schema says nothing about a custom scalar beyond its name, so generated
modules alias each one to a Python type chosen by the caller. Scalars with
no mapping are aliased to ``typing.Any``.

Example usage:
    from gql_typegen.core.scalars import ImportedType, ScalarRegistry

    registry = ScalarRegistry()
    registry.register("Money", ImportedType.from_path("decimal.Decimal"))
    registry.register_path("Url", "pydantic.AnyUrl")
"""

from typing import Protocol, runtime_checkable

# Generated modules import typing as _typing
PLACEHOLDER_TYPE = "_typing.Any"


@runtime_checkable
class ScalarHandler(Protocol):
    """How a scalar appears in generated code.

    Attributes:
        python_type: The name used in annotations (e.g. "Decimal")
        import_statement: The import that brings it into scope, or "" for builtins
    """

    python_type: str
    import_statement: str


class ImportedType:
    """A scalar mapped to a type imported from a module."""

    def __init__(self, python_type: str, import_statement: str = ""):
        self.python_type = python_type
        self.import_statement = import_statement

    def __repr__(self) -> str:
        return f"ImportedType({self.python_type!r}, {self.import_statement!r})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ImportedType):
            return NotImplemented
        return (self.python_type, self.import_statement) == (other.python_type, other.import_statement)

    def __hash__(self) -> int:
        return hash((self.python_type, self.import_statement))

    @classmethod
    def from_path(cls, path: str) -> "ImportedType":
        """Build a mapping from a dotted path such as ``decimal.Decimal``.

        A bare name (no dot) is taken to be a builtin such as ``int``.
        """
        module, _, attribute = path.rpartition(".")
        if not attribute:
            raise ValueError(f"Invalid type path: {path!r}")
        if not module:
            return cls(attribute)
        return cls(attribute, f"from {module} import {attribute}")


PLACEHOLDER = ImportedType(PLACEHOLDER_TYPE)

# Common scalar names and the types they usually carry
DEFAULT_SCALARS = {
    "DateTime": ImportedType.from_path("datetime.datetime"),
    "Date": ImportedType.from_path("datetime.date"),
    "Time": ImportedType.from_path("datetime.time"),
    "UUID": ImportedType.from_path("uuid.UUID"),
    "Decimal": ImportedType.from_path("decimal.Decimal"),
    "JSON": PLACEHOLDER,
    "JSONObject": PLACEHOLDER,
}


class ScalarRegistry:
    """Maps GraphQL scalar names to handlers.

    Example:
        registry = ScalarRegistry()
        registry.resolve("DateTime").python_type  # "datetime"
        registry.resolve("Money").python_type     # "_typing.Any"
    """

    def __init__(self, defaults: bool = True):
        self._handlers: dict[str, ScalarHandler] = dict(DEFAULT_SCALARS) if defaults else {}

    def register(self, scalar_name: str, handler: ScalarHandler):
        self._handlers[scalar_name] = handler

    def register_path(self, scalar_name: str, path: str):
        """Register a scalar mapped to a dotted import path."""
        self.register(scalar_name, ImportedType.from_path(path))

    def get(self, scalar_name: str) -> ScalarHandler | None:
        return self._handlers.get(scalar_name)

    def has(self, scalar_name: str) -> bool:
        return scalar_name in self._handlers

    def resolve(self, scalar_name: str) -> ScalarHandler:
        """Get the handler for a scalar, falling back to the ``typing.Any`` placeholder."""
        return self._handlers.get(scalar_name, PLACEHOLDER)
