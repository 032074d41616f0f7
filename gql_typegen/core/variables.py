"""The variables record of an operation."""

from .definitions import DefaultAccessor, DefinitionCategory, RecordDefinition, RecordField
from .ir import IROperation
from .naming import field_name
from .options import CodegenOptions
from .qualifiers import decorate_ref


def build_variables(operation: IROperation, options: CodegenOptions) -> RecordDefinition:
    """Build the variables record for an operation.

    An operation without variables still gets an empty record, so callers
    always have a variables value to construct. Each variable also gets a
    ``default_<name>`` accessor whose body is left to a later stage.
    """
    record = RecordDefinition(
        name=options.variables_name,
        category=DefinitionCategory.VARIABLES,
        derives=options.variables_derives,
    )
    if operation.has_no_variables:
        return record

    for variable in operation.variables:
        type_ref = decorate_ref(variable.type)
        name = field_name(variable.name)
        record.fields.append(
            RecordField(name=name, serialized_name=variable.name, type=type_ref)
        )
        record.accessors.append(
            DefaultAccessor(
                name=f"default_{name.rstrip('_')}",
                variable_name=variable.name,
                type=type_ref,
                default_literal=variable.default_value,
            )
        )
    return record
