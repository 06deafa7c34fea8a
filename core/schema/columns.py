"""Column extraction from column-builder call chains."""

import logging

from core.models import Column
from core.schema.expressions import (
    ArrayLiteral,
    ArrowFunction,
    BooleanLiteral,
    CallFrame,
    Expression,
    Identifier,
    NumberLiteral,
    ObjectLiteral,
    PropertyAccess,
    StringLiteral,
    TaggedTemplate,
    call_chain,
    is_true,
    root_call,
)
from core.schema.vocabulary import CREATED_AT_KEY, CURRENT_TIMESTAMP_PATTERN, UPDATED_AT_KEY, map_column_type

logger = logging.getLogger(__name__)


def _enum_value(element: Expression) -> str:
    match element:
        case StringLiteral(value=value):
            return value
        case PropertyAccess(name=name):
            return name
        case Identifier(name=name):
            return name
    return element.text


def _apply_options(column: Column, options: ObjectLiteral) -> None:
    for key, value in options.properties:
        match key, value:
            case ("length" | "precision" | "scale"), NumberLiteral(value=number):
                setattr(column, key, number)
            case "enum", ArrayLiteral(elements=elements):
                column.enum = [_enum_value(element) for element in elements]
                column.type = "enum"
            case "withTimezone", BooleanLiteral(value=True):
                column.type = "timestamptz"


def sql_timestamp_default(arg: Expression | None) -> str | None:
    """Return ``'CURRENT_TIMESTAMP'`` for a ``sql`` template asking for it."""
    if isinstance(arg, TaggedTemplate) and arg.tag == "sql" and CURRENT_TIMESTAMP_PATTERN.search(arg.template):
        return "'CURRENT_TIMESTAMP'"
    return None


def coerce_default(arg: Expression | None) -> bool | int | float | str | None:
    """Coerce the argument of ``.default(...)`` into an emitted default.

    Returns True when no argument is given and None for unsupported values.
    """
    if arg is None:
        return True

    sql_default = sql_timestamp_default(arg)
    if sql_default is not None:
        return sql_default

    match arg:
        case NumberLiteral(value=value):
            return value
        case StringLiteral(value=value):
            return f"'{value}'"
        case BooleanLiteral(value=value):
            return value
    return None


def _apply_references(column: Column, frame: CallFrame) -> None:
    target = frame.args[0] if frame.args else None
    if isinstance(target, ArrowFunction) and isinstance(target.body, PropertyAccess):
        receiver = target.body.object
        if isinstance(receiver, Identifier):
            column.references_var = receiver.name

    options = frame.args[1] if len(frame.args) > 1 else None
    if not isinstance(options, ObjectLiteral):
        return
    for key, value in options.properties:
        match key, value:
            case "onDelete", StringLiteral(value=action):
                column.on_delete = action
            case "onUpdate", StringLiteral(value=action):
                column.on_update = action
            case "cascade", _ if is_true(value):
                column.cascade = True


def _apply_modifier(column: Column, frame: CallFrame, property_name: str) -> None:
    arg = frame.args[0] if frame.args else None
    match frame.name:
        case "notNull":
            column.nullable = False
        case "primaryKey":
            column.primary = True
            column.nullable = False
        case "unique":
            column.unique = True
        case "array":
            column.array = True
        case "$onUpdate" | "$onUpdateFn":
            column.update_date = True
        case "default":
            column.default = coerce_default(arg)
        case "defaultRandom":
            column.generated = "uuid"
            column.type = "uuid"
            column.nullable = False
        case "defaultNow":
            if property_name != CREATED_AT_KEY:
                column.default = True
        case "references":
            _apply_references(column, frame)


def extract_column(initializer: Expression, property_name: str) -> Column:
    """Turn one column-builder expression into a column descriptor.

    Unrecognized shapes yield a nullable ``text`` column.

    Args:
        initializer: Expression assigned to the column property
        property_name: Property key of the column in the table object

    Returns:
        Column descriptor
    """
    column = Column()
    frames = call_chain(initializer)
    if not frames:
        logger.debug(f"Column '{property_name}' is not a builder call, defaulting to text")
        return column

    root = root_call(frames)
    modifiers = frames[:-1] if root is not None else frames
    if root is not None:
        column.type = map_column_type(root.name)
        name_arg = root.args[0] if root.args else None
        if isinstance(name_arg, StringLiteral) and name_arg.value != property_name:
            column.name = name_arg.value
        options = root.args[1] if len(root.args) > 1 else None
        if isinstance(options, ObjectLiteral):
            _apply_options(column, options)

    # Innermost modifier first, so later calls in source order win
    for frame in reversed(modifiers):
        _apply_modifier(column, frame, property_name)

    if property_name == CREATED_AT_KEY:
        column.create_date = True
        column.nullable = False
    if property_name == UPDATED_AT_KEY:
        column.update_date = True
    return column


def extract_columns(columns_object: Expression | None) -> dict[str, Column]:
    """Extract every ``key: builder(...)`` property of a table's column object."""
    if not isinstance(columns_object, ObjectLiteral):
        return {}
    return {key: extract_column(value, key) for key, value in columns_object.properties}
