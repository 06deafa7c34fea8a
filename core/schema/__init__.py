"""Schema extraction and emission.

This package turns parsed schema declarations into the entity model and
renders that model as TypeORM entity schemas.
"""

from core.schema.columns import extract_column
from core.schema.emitter import emit, output_file_name
from core.schema.expressions import CallFrame, call_chain, root_call
from core.schema.parser import SchemaParseError, parse_declarations
from core.schema.relations import collect_relation_stubs, resolve_relations
from core.schema.table_extras import extract_table_extras

__all__ = [
    # Parsing
    "SchemaParseError",
    "parse_declarations",
    "CallFrame",
    "call_chain",
    "root_call",
    # Extraction
    "extract_column",
    "extract_table_extras",
    "collect_relation_stubs",
    "resolve_relations",
    # Emission
    "emit",
    "output_file_name",
]
