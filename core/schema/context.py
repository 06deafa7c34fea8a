"""Run-local state shared by the conversion passes."""

from dataclasses import dataclass, field

from core.models import Entity, Relation, SourceFile
from core.schema.parser import Declaration


@dataclass
class ConversionContext:
    """State of one conversion run, owned by that run only."""

    files: list[SourceFile]
    # Parsed declarations per file name, filled once before pass 1
    declarations: dict[str, list[Declaration]] = field(default_factory=dict)
    var_to_entity: dict[str, str] = field(default_factory=dict)
    entity_to_file: dict[str, str] = field(default_factory=dict)
    entities: dict[str, Entity] = field(default_factory=dict)
    stubs: list[Relation] = field(default_factory=list)
