"""Schema conversion: Drizzle table declarations to TypeORM entity schemas.

The conversion runs in three passes over the parsed files:

1. register every table variable as an entity,
2. build each entity's columns, composite keys and indices,
3. collect relation stubs once every entity exists, then pair them.

The result is rendered into one output module per source file.
"""

import logging

from core.models import Entity, SourceFile
from core.schema.columns import extract_columns
from core.schema.context import ConversionContext
from core.schema.emitter import emit
from core.schema.expressions import StringLiteral
from core.schema.parser import parse_declarations
from core.schema.registry import is_table_declaration, register_entities
from core.schema.relations import (
    attach_relations,
    collect_relation_stubs,
    is_relations_declaration,
    resolve_relations,
)
from core.schema.table_extras import extract_table_extras

logger = logging.getLogger(__name__)


def build_entities_pass(context: ConversionContext) -> None:
    """Second pass: create entities with their columns and table extras."""
    for source in context.files:
        for declaration in context.declarations[source.file_name]:
            initializer = declaration.initializer
            if not is_table_declaration(initializer):
                continue

            # The variable map holds the last declaration; the first one builds the entity
            entity_name = context.var_to_entity[declaration.name]
            if entity_name in context.entities:
                logger.debug(f"Entity {entity_name} already built, ignoring '{declaration.name}' in {source.file_name}")
                continue

            args = initializer.args
            table_arg = args[0] if args else None
            columns = extract_columns(args[1] if len(args) > 1 else None)
            indices = extract_table_extras(columns, args[2] if len(args) > 2 else None)
            context.entity_to_file[entity_name] = source.file_name
            context.entities[entity_name] = Entity(
                name=entity_name,
                table_name=table_arg.value if isinstance(table_arg, StringLiteral) else declaration.name,
                file_name=source.file_name,
                columns=columns,
                indices=indices,
            )


def collect_relations_pass(context: ConversionContext) -> None:
    """Third pass: collect relation stubs, pair them and attach them."""
    for source in context.files:
        for declaration in context.declarations[source.file_name]:
            initializer = declaration.initializer
            if is_relations_declaration(initializer):
                context.stubs.extend(collect_relation_stubs(initializer, context))

    resolve_relations(context.stubs)
    attach_relations(context.stubs, context)


def build_context(files: list[SourceFile]) -> ConversionContext:
    """Parse ``files`` and run all extraction passes.

    Raises:
        SchemaParseError: If any file fails to parse; no partial result is produced
    """
    context = ConversionContext(files=list(files))
    for source in context.files:
        context.declarations[source.file_name] = parse_declarations(source)

    register_entities(context)
    build_entities_pass(context)
    collect_relations_pass(context)

    logger.info(
        f"Built {len(context.entities)} entit(ies) and {len(context.stubs)} relation(s) from {len(files)} file(s)"
    )
    return context


def build_entities(files: list[SourceFile]) -> list[Entity]:
    """Return the finished entity model in declaration order."""
    return list(build_context(files).entities.values())


def convert_schemas(files: list[SourceFile], output_extension: str = ".js") -> dict[str, str]:
    """Convert schema source files into TypeORM entity schema modules.

    Args:
        files: Source files in processing order
        output_extension: Extension replacing the source file extension

    Returns:
        Mapping of output file name to generated source text, one entry per
        input file declaring at least one table
    """
    return emit(build_entities(files), output_extension)
