"""Rendering of the entity model as TypeORM ``EntitySchema`` modules."""

import os
import re

from core.models import Column, Entity, Index, Relation
from core.schema.vocabulary import type_category

# Emitted column attribute -> Column field, in emission order
COLUMN_FIELDS = (
    ("type", "type"),
    ("enum", "enum"),
    ("precision", "precision"),
    ("scale", "scale"),
    ("length", "length"),
    ("name", "name"),
    ("array", "array"),
    ("primary", "primary"),
    ("generated", "generated"),
    ("unique", "unique"),
    ("nullable", "nullable"),
    ("default", "default"),
    ("createDate", "create_date"),
    ("updateDate", "update_date"),
)

SINGULAR_TYPES = ("one-to-one", "many-to-one")

PRELUDE = ["const typeorm = require('typeorm');", "const { EntitySchema } = typeorm;", ""]

_QUOTED = re.compile(r"^'.*'$", re.DOTALL)


def format_value(value: bool | int | float | str) -> str:
    """Render a scalar as a JavaScript literal."""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, str):
        return value if _QUOTED.match(value) else f"'{value}'"
    return str(value)


def quoted_list(values: list[str]) -> str:
    return "[" + ", ".join(f"'{value}'" for value in values) + "]"


def render_column(key: str, column: Column) -> list[str]:
    lines = [f"      {key}: {{"]
    for attribute, field_name in COLUMN_FIELDS:
        value = getattr(column, field_name)
        if value is None:
            continue
        if attribute == "length" and column.type == "enum":
            continue
        if attribute == "enum":
            if column.type == "enum":
                lines.append(f"        enum: {quoted_list(value)},")
            continue
        lines.append(f"        {attribute}: {format_value(value)},")
    lines.append("      },")
    return lines


def render_relation(relation: Relation) -> list[str]:
    lines = [
        f"      {relation.local_name}: {{",
        f"        target: '{relation.to_entity}',",
        f"        type: '{relation.rel_type}',",
    ]
    if relation.inverse_side:
        lines.append(f"        inverseSide: '{relation.inverse_side}',")

    singular = relation.rel_type in SINGULAR_TYPES
    if singular and relation.join_column_name:
        lines.append(f"        joinColumn: {{ name: '{relation.join_column_name}' }},")
    if relation.rel_type == "many-to-many" and relation.is_owner:
        lines.append("        joinTable: true,")
    if singular:
        if relation.on_delete:
            lines.append(f"        onDelete: '{relation.on_delete}',")
        if relation.on_update:
            lines.append(f"        onUpdate: '{relation.on_update}',")
        if relation.cascade:
            lines.append("        cascade: true,")
    lines.append("      },")
    return lines


def render_index(index: Index) -> str:
    parts = []
    if index.name is not None:
        parts.append(f"name: '{index.name}'")
    parts.append(f"columns: {quoted_list(index.columns)}")
    if index.unique:
        parts.append("unique: true")
    return "      { " + ", ".join(parts) + " },"


def render_entity(entity: Entity) -> str:
    """Render one ``Name: new EntitySchema({...})`` member without trailing comma."""
    lines = [
        f"{entity.name}: new EntitySchema({{",
        f"    name: '{entity.name}',",
        f"    tableName: '{entity.table_name}',",
        "    columns: {",
    ]
    for key, column in entity.columns.items():
        lines.extend(render_column(key, column))
    lines.append("    },")

    if entity.relations:
        lines.append("    relations: {")
        for relation in entity.relations:
            lines.extend(render_relation(relation))
        lines.append("    },")

    if entity.indices:
        lines.append("    indices: [")
        lines.extend(render_index(index) for index in entity.indices)
        lines.append("    ],")

    lines.append("  })")
    return "\n".join(lines)


def render_typedef(entity: Entity) -> str:
    """JSDoc ``@typedef`` listing the entity's properties."""
    lines = ["/**", f" * @typedef {{Object}} {entity.name}"]
    for key, column in entity.columns.items():
        if column.enum:
            category = " | ".join(f"'{value}'" for value in column.enum)
        else:
            category = type_category(column.type)
        lines.append(f" * @property {{{category}}} {key}")
    lines.append(" */")
    return "\n".join(lines)


def render_module(entities: list[Entity]) -> str:
    """Render the output module for the entities of one source file."""
    members = ",\n".join(
        f"  /** @type {{typeorm.EntitySchema<{entity.name}>}} */\n  {render_entity(entity)}" for entity in entities
    )
    lines = [
        *PRELUDE,
        *(render_typedef(entity) for entity in entities),
        "",
        "module.exports = {",
        members,
        "};",
    ]
    return "\n".join(lines) + "\n"


def output_file_name(file_name: str, extension: str = ".js") -> str:
    """Replace the extension of ``file_name``: ``schema/users.ts`` -> ``schema/users.js``."""
    base, _ = os.path.splitext(file_name)
    return base + extension


def emit(entities: list[Entity], extension: str = ".js") -> dict[str, str]:
    """Group entities by source file and render one module per file.

    Files keep the order in which their first entity was declared.
    """
    grouped: dict[str, list[Entity]] = {}
    for entity in entities:
        grouped.setdefault(entity.file_name, []).append(entity)
    return {output_file_name(file_name, extension): render_module(group) for file_name, group in grouped.items()}
