"""Composite primary keys and indices from a table's extra configuration."""

import logging

from core.models import Column, Index
from core.schema.expressions import (
    ArrayLiteral,
    ArrowFunction,
    Expression,
    ObjectLiteral,
    StringLiteral,
    call_chain,
    member_name,
    root_call,
    unwrap_parens,
)

logger = logging.getLogger(__name__)

INDEX_MARKERS = {"index": False, "uniqueIndex": True}


def _config_entries(config: Expression | None) -> list[Expression]:
    if not isinstance(config, ArrowFunction):
        return []
    body = unwrap_parens(config.body)
    match body:
        case ArrayLiteral(elements=elements):
            return list(elements)
        case ObjectLiteral(properties=properties):
            return [value for _, value in properties]
    return []


def _apply_primary_key(columns: dict[str, Column], args: tuple[Expression, ...]) -> None:
    options = args[0] if args else None
    if not isinstance(options, ObjectLiteral):
        return
    listed = options.get("columns")
    if not isinstance(listed, ArrayLiteral):
        return
    for element in listed.elements:
        name = member_name(element)
        if name and name in columns:
            columns[name].primary = True
            columns[name].nullable = False
        elif name:
            logger.debug(f"Primary key references unknown column '{name}'")


def extract_index(entry: Expression) -> Index | None:
    """Parse ``index(name).on(t.a, ...)`` or ``uniqueIndex(name)...`` chains.

    Returns:
        The index, or None if the entry is not an index declaration
    """
    frames = call_chain(entry)
    root = root_call(frames)
    if root is None or root.name not in INDEX_MARKERS:
        return None

    name_arg = root.args[0] if root.args else None
    columns: list[str] = []
    # frames run outermost first; walk them back into source order
    for frame in reversed(frames[:-1]):
        if frame.name != "on":
            continue
        columns.extend(name for name in (member_name(arg) for arg in frame.args) if name)

    return Index(
        name=name_arg.value if isinstance(name_arg, StringLiteral) else None,
        columns=columns,
        unique=INDEX_MARKERS[root.name],
    )


def extract_table_extras(columns: dict[str, Column], config: Expression | None) -> list[Index]:
    """Apply composite primary keys to ``columns`` and collect indices.

    Args:
        columns: Column map of the table, updated in place
        config: Third argument of the table declaration, if any

    Returns:
        Indices in declaration order
    """
    indices = []
    for entry in _config_entries(config):
        frames = call_chain(entry)
        root = root_call(frames)
        if root is not None and root.name == "primaryKey" and len(frames) == 1:
            _apply_primary_key(columns, root.args)
            continue

        index = extract_index(entry)
        if index is not None:
            indices.append(index)
    return indices
