"""Drizzle to TypeORM schema converter

This package provides the schema conversion core and the directory-level
conversion runs built on top of it.
"""

from core.converter import build_entities, convert_schemas
from core.models import ConversionSummary, SourceFile
from core.pipeline import convert_local_schemas, fetch_and_convert_schemas

__all__ = [
    "ConversionSummary",
    "SourceFile",
    "build_entities",
    "convert_local_schemas",
    "convert_schemas",
    "fetch_and_convert_schemas",
]
