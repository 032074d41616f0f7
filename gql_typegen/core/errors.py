"""Errors raised while resolving an operation against a schema.

Every error aborts generation for the whole operation. There is no partial
output: callers either get a complete module or one of these exceptions.
"""


class CodegenError(Exception):
    """Base class for all generation errors."""


class MalformedQualifiersError(CodegenError):
    """Raised when a type reference carries two consecutive required markers."""

    def __init__(self, type_name: str, qualifiers: tuple):
        self.type_name = type_name
        self.qualifiers = qualifiers
        rendered = ", ".join(q.name for q in qualifiers)
        super().__init__(
            f"Double required annotation on type {type_name!r}: [{rendered}]"
        )


class UnknownTypeError(CodegenError):
    """Raised when a type name is not defined in the schema."""

    def __init__(self, type_name: str):
        self.type_name = type_name
        super().__init__(f"Unknown type {type_name!r}")


class UnknownFieldError(CodegenError):
    """Raised when a selection names a field its enclosing type does not have."""

    def __init__(self, field_name: str, type_name: str):
        self.field_name = field_name
        self.type_name = type_name
        super().__init__(f"Unknown field {field_name!r} on type {type_name!r}")


class UnresolvedFragmentError(CodegenError):
    """Raised when a spread references a fragment missing from the document."""

    def __init__(self, fragment_name: str):
        self.fragment_name = fragment_name
        super().__init__(f"Unresolved fragment {fragment_name!r}")


class UnknownOperationError(CodegenError):
    """Raised when the requested operation is not in the query document."""

    def __init__(self, operation_name: str | None, available: list[str]):
        self.operation_name = operation_name
        self.available = available
        if operation_name is None:
            message = (
                "The document defines several operations, pick one of: "
                + ", ".join(available)
            )
        else:
            message = f"Unknown operation {operation_name!r}"
            if available:
                message += f" (available: {', '.join(available)})"
        super().__init__(message)


class AmbiguousTypeConditionError(CodegenError):
    """Raised when merged selections disagree on the shape of one output field.

    Selections reaching the same concrete type through several type
    conditions are merged; merging fails when two of them put different
    fields under the same response key.
    """

    def __init__(self, type_name: str, response_key: str, conditions: tuple[str, ...]):
        self.type_name = type_name
        self.response_key = response_key
        self.conditions = conditions
        super().__init__(
            f"Conflicting selections for {response_key!r} on type {type_name!r} "
            f"(type conditions: {', '.join(conditions)})"
        )


class DeprecatedFieldError(CodegenError):
    """Raised when a deprecated field is selected and deprecations are denied."""

    def __init__(self, field_name: str, type_name: str, reason: str):
        self.field_name = field_name
        self.type_name = type_name
        self.reason = reason
        super().__init__(
            f"Field {field_name!r} on type {type_name!r} is deprecated: {reason}"
        )


class DuplicateDefinitionError(CodegenError):
    """Raised when two generated definitions end up with the same name.

    Nested record names are derived from their parent's name and the
    response key, so a fragment or schema type can collide with one.
    """

    def __init__(self, name: str):
        self.name = name
        super().__init__(
            f"Definition {name!r} is generated twice; rename a fragment, alias or type"
        )


class DuplicateFieldError(CodegenError):
    """Raised when two fields of one generated record share a name."""

    def __init__(self, record_name: str, field_name: str):
        self.record_name = record_name
        self.field_name = field_name
        super().__init__(
            f"Field {field_name!r} appears twice on {record_name!r}; rename a fragment or alias"
        )
