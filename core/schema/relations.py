"""Relation collection and inverse-side resolution."""

import logging
from typing import TypeGuard

from core.models import Entity, Relation, RelationType
from core.schema.context import ConversionContext
from core.schema.expressions import (
    ArrayLiteral,
    ArrowFunction,
    Call,
    Expression,
    Identifier,
    ObjectLiteral,
    StringLiteral,
    callee_name,
    is_true,
    member_name,
    unwrap_parens,
)
from core.schema.vocabulary import RELATIONS_BUILDER, camel_to_snake, pascal

logger = logging.getLogger(__name__)


def is_relations_declaration(initializer: Expression) -> TypeGuard[Call]:
    return isinstance(initializer, Call) and callee_name(initializer) == RELATIONS_BUILDER


def _has_fields(options: Expression | None) -> bool:
    return isinstance(options, ObjectLiteral) and isinstance(options.get("fields"), ArrayLiteral)


def relation_type_for(kind: str | None, options: Expression | None) -> RelationType:
    """Classify a relation marker (``many``, ``one``, ...) into a cardinality."""
    match kind:
        case "many":
            return "one-to-many"
        case "one":
            return "many-to-one" if _has_fields(options) else "one-to-one"
        case "oneToOne":
            return "one-to-one"
    return "many-to-one"


def _apply_relation_options(relation: Relation, options: ObjectLiteral) -> str | None:
    """Copy explicit options onto ``relation``; return the foreign key property."""
    foreign_key = None
    for key, value in options.properties:
        match key, value:
            case "relationName", StringLiteral(value=label):
                relation.custom_name = label
            case "onDelete", StringLiteral(value=action):
                relation.on_delete = action
            case "onUpdate", StringLiteral(value=action):
                relation.on_update = action
            case "cascade", _ if is_true(value):
                relation.cascade = True
            case "fields", ArrayLiteral(elements=elements) if elements:
                foreign_key = member_name(elements[0])
    return foreign_key


def discover_foreign_key(target: Entity | None, source_var: str) -> str | None:
    """First column of ``target`` that references the table ``source_var``."""
    if target is None:
        return None
    for name, column in target.columns.items():
        if column.references_var == source_var:
            return name
    return None


def _resolve_join_column(relation: Relation, context: ConversionContext) -> None:
    owner = context.entities.get(relation.from_entity)
    target = context.entities.get(relation.to_entity)
    foreign_key = relation.foreign_key or discover_foreign_key(target, relation.from_var)
    if foreign_key is None:
        logger.debug(f"No foreign key found for {relation.from_entity}.{relation.local_name}")
        return

    relation.foreign_key = foreign_key
    owner_column = owner.columns.get(foreign_key) if owner else None
    target_column = target.columns.get(foreign_key) if target else None
    relation.join_column_name = (
        (owner_column.name if owner_column else None)
        or (target_column.name if target_column else None)
        or camel_to_snake(foreign_key)
    )

    if owner_column is not None:
        if owner_column.on_delete and not relation.on_delete:
            relation.on_delete = owner_column.on_delete
        if owner_column.on_update and not relation.on_update:
            relation.on_update = owner_column.on_update
        if owner_column.cascade and not relation.cascade:
            relation.cascade = owner_column.cascade


def collect_relation_stubs(call: Call, context: ConversionContext) -> list[Relation]:
    """Turn one ``relations(table, ({ one, many }) => ({...}))`` call into stubs.

    Args:
        call: The relations declaration call
        context: Conversion context with every entity already built

    Returns:
        One-directional relation stubs in declaration order
    """
    source = call.args[0] if call.args else None
    builder = call.args[1] if len(call.args) > 1 else None
    if not isinstance(source, Identifier) or not isinstance(builder, ArrowFunction):
        return []
    body = unwrap_parens(builder.body)
    if not isinstance(body, ObjectLiteral):
        return []

    from_var = source.name
    from_entity = context.var_to_entity.get(from_var) or pascal(from_var)
    stubs = []
    for local_name, value in body.properties:
        if not isinstance(value, Call):
            continue
        target = value.args[0] if value.args else None
        if not isinstance(target, Identifier):
            continue

        kind = callee_name(value)
        options = value.args[1] if len(value.args) > 1 else None
        relation = Relation(
            from_entity=from_entity,
            from_var=from_var,
            local_name=local_name,
            to_entity=context.var_to_entity.get(target.name) or pascal(target.name),
            to_var=target.name,
            rel_type=relation_type_for(kind, options),
            orig_kind=kind,
        )
        if isinstance(options, ObjectLiteral):
            relation.foreign_key = _apply_relation_options(relation, options)

        _resolve_join_column(relation, context)
        stubs.append(relation)
    return stubs


def _pair(first: Relation, second: Relation) -> None:
    first.inverse_side = second.local_name
    second.inverse_side = first.local_name

    if first.orig_kind == "many" and second.orig_kind == "many":
        first.rel_type = second.rel_type = "many-to-many"
        first.is_owner = True
    elif first.is_singular and second.is_singular:
        first.rel_type = second.rel_type = "one-to-one"
        owner = next((side for side in (first, second) if side.join_column_name), None)
        if owner is not None:
            owner.is_owner = True


def resolve_relations(stubs: list[Relation]) -> None:
    """Pair stubs into mutual inverses, refining cardinality and ownership.

    The first unpaired stub with the reversed entity pair wins.
    """
    for first in stubs:
        if first.inverse_side is not None:
            continue
        second = next(
            (
                other
                for other in stubs
                if other is not first
                and other.inverse_side is None
                and other.from_entity == first.to_entity
                and other.to_entity == first.from_entity
            ),
            None,
        )
        if second is not None:
            _pair(first, second)


def attach_relations(stubs: list[Relation], context: ConversionContext) -> None:
    """Append resolved relations to their entities, skipping duplicate names."""
    for relation in stubs:
        entity = context.entities.get(relation.from_entity)
        if entity is None:
            logger.warning(f"Dropping relation '{relation.local_name}' of unknown entity {relation.from_entity}")
            continue
        if any(existing.local_name == relation.local_name for existing in entity.relations):
            continue
        entity.relations.append(relation)
