"""Entity registry: first pass over all schema files."""

import logging
from typing import TypeGuard

from core.schema.context import ConversionContext
from core.schema.expressions import Call, Expression, Identifier, StringLiteral
from core.schema.vocabulary import TABLE_BUILDER, pascal, snake_to_pascal

logger = logging.getLogger(__name__)


def is_table_declaration(initializer: Expression) -> TypeGuard[Call]:
    """Whether an initializer is a ``pgTable(...)`` call."""
    return isinstance(initializer, Call) and initializer.callee == Identifier(name=TABLE_BUILDER)


def entity_name_for(var_name: str, table_call: Call) -> str:
    """Derive the entity name of a table declaration.

    A string table name is converted from snake_case to PascalCase, otherwise
    the variable identifier is used.
    """
    first = table_call.args[0] if table_call.args else None
    if isinstance(first, StringLiteral):
        return snake_to_pascal(first.value)
    return pascal(var_name)


def register_entities(context: ConversionContext) -> None:
    """Map every table variable to its entity name and owning file.

    Later declarations of the same variable override earlier ones silently.
    The entity pass re-points each built entity at the file that built it.
    """
    for source in context.files:
        for declaration in context.declarations.get(source.file_name, []):
            initializer = declaration.initializer
            if not is_table_declaration(initializer):
                continue
            entity = entity_name_for(declaration.name, initializer)
            context.var_to_entity[declaration.name] = entity
            context.entity_to_file[entity] = source.file_name
            logger.debug(f"Registered table '{declaration.name}' as entity {entity} ({source.file_name})")
