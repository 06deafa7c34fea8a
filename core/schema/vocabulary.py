"""Builder-call vocabulary and type mapping utilities."""

import re

TABLE_BUILDER = "pgTable"
RELATIONS_BUILDER = "relations"

CREATED_AT_KEY = "createdAt"
UPDATED_AT_KEY = "updatedAt"

# Column builder function -> column type
COLUMN_TYPES = {
    "uuid": "uuid",
    "varchar": "varchar",
    "char": "char",
    "text": "text",
    "bigint": "bigint",
    "int": "int",
    "integer": "int",
    "smallint": "smallint",
    "numeric": "numeric",
    "decimal": "decimal",
    "float": "float",
    "double": "double",
    "boolean": "boolean",
    "timestamp": "timestamp",
    "timestamptz": "timestamptz",
    "date": "date",
    "time": "time",
    "json": "json",
    "jsonb": "jsonb",
    "geometry": "geometry",
    "geography": "geography",
}

# Column type -> JSDoc primitive category
TYPE_CATEGORIES = {
    "uuid": "string",
    "varchar": "string",
    "char": "string",
    "text": "string",
    "boolean": "boolean",
    "int": "number",
    "integer": "number",
    "smallint": "number",
    "bigint": "number",
    "numeric": "number",
    "decimal": "number",
    "float": "number",
    "double": "number",
    "timestamp": "Date",
    "timestamptz": "Date",
    "date": "Date",
    "time": "Date",
    "json": "object",
    "jsonb": "object",
    "geometry": "object",
    "geography": "object",
}

CURRENT_TIMESTAMP_PATTERN = re.compile(r"current_timestamp", re.IGNORECASE)


def map_column_type(builder: str | None) -> str:
    """Map a column builder name to a column type.

    Args:
        builder: Name of the column builder function (e.g. 'varchar', 'integer')

    Returns:
        The column type, 'text' if the builder is unknown
    """
    if builder is None:
        return "text"
    return COLUMN_TYPES.get(builder, "text")


def type_category(column_type: str) -> str:
    """JSDoc category of a column type, 'any' if unknown."""
    return TYPE_CATEGORIES.get(column_type, "any")


def snake_to_pascal(value: str) -> str:
    """Convert ``user_profiles`` to ``UserProfiles``."""
    words = [word for word in value.strip("_").split("_") if word]
    return "".join(word[0].upper() + word[1:] for word in words)


def pascal(value: str) -> str:
    """Upper-case the first letter: ``userProfiles`` -> ``UserProfiles``."""
    return value[0].upper() + value[1:] if value else ""


def camel_to_snake(value: str) -> str:
    """Convert ``authorId`` to ``author_id``."""
    return re.sub(r"([a-z])([A-Z])", r"\1_\2", value).lower()
