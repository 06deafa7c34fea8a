"""Pydantic models for the schema conversion entity model"""

from typing import Literal

from pydantic import BaseModel, Field

RelationType = Literal["one-to-many", "many-to-one", "one-to-one", "many-to-many"]

# ============================================================================
# Input Models
# ============================================================================


class SourceFile(BaseModel):
    """One schema source file handed to the converter"""

    file_name: str = Field(description="Path or name of the source file")
    content: str = Field(description="Source text of the file")

    model_config = {"frozen": True}


# ============================================================================
# Entity Models
# ============================================================================


class Column(BaseModel):
    """Storage type and constraints of one entity property"""

    type: str = Field(default="text", description="Column type from the fixed type vocabulary")
    nullable: bool = Field(default=True, description="Whether the column accepts NULL")
    primary: bool | None = Field(default=None, description="Part of the primary key")
    unique: bool | None = Field(default=None, description="Unique constraint on the column")
    array: bool | None = Field(default=None, description="Column holds an array of the base type")
    generated: str | None = Field(default=None, description="Generation strategy (e.g. 'uuid')")
    default: bool | int | float | str | None = Field(
        default=None, description="Literal default, or True for a runtime-computed default"
    )
    create_date: bool | None = Field(default=None, description="Set on insert")
    update_date: bool | None = Field(default=None, description="Set on update")
    enum: list[str] | None = Field(default=None, description="Allowed enum values in declaration order")
    length: int | float | None = Field(default=None, description="Declared length")
    precision: int | float | None = Field(default=None, description="Declared numeric precision")
    scale: int | float | None = Field(default=None, description="Declared numeric scale")
    name: str | None = Field(default=None, description="Physical column name when it differs from the property")
    references_var: str | None = Field(default=None, description="Variable of the referenced table")
    on_delete: str | None = Field(default=None, description="Foreign key ON DELETE action")
    on_update: str | None = Field(default=None, description="Foreign key ON UPDATE action")
    cascade: bool | None = Field(default=None, description="Cascade flag of the foreign key")


class Index(BaseModel):
    """Index declared in a table's extra configuration"""

    name: str | None = Field(default=None, description="Index name")
    columns: list[str] = Field(default_factory=list, description="Indexed properties in source order")
    unique: bool = Field(default=False, description="Whether the index is unique")


class Relation(BaseModel):
    """Association between two entities, seen from its owning entity"""

    from_entity: str = Field(description="Entity declaring the relation")
    from_var: str = Field(description="Table variable of the declaring entity")
    local_name: str = Field(description="Relation property name on the declaring entity")
    to_entity: str = Field(description="Target entity")
    to_var: str = Field(description="Table variable of the target entity")
    rel_type: RelationType = Field(description="Resolved cardinality")
    orig_kind: str | None = Field(default=None, description="Relation marker as declared (many, one, ...)")
    inverse_side: str | None = Field(default=None, description="Relation property name on the other side")
    join_column_name: str | None = Field(default=None, description="Physical join column")
    foreign_key: str | None = Field(default=None, description="Foreign key property backing the join column")
    is_owner: bool = Field(default=False, description="Side holding the join column or join table")
    on_delete: str | None = Field(default=None, description="ON DELETE action")
    on_update: str | None = Field(default=None, description="ON UPDATE action")
    cascade: bool | None = Field(default=None, description="Cascade flag")
    custom_name: str | None = Field(default=None, description="Declared relationName grouping label")

    @property
    def is_singular(self) -> bool:
        return self.orig_kind in ("one", "oneToOne")


class Entity(BaseModel):
    """Logical record type derived from one table declaration"""

    name: str = Field(description="Entity name, unique per conversion run")
    table_name: str = Field(description="Physical table name")
    file_name: str = Field(description="Source file the entity is emitted into")
    columns: dict[str, Column] = Field(default_factory=dict, description="Columns keyed by property name")
    relations: list[Relation] = Field(default_factory=list, description="Resolved relations")
    indices: list[Index] = Field(default_factory=list, description="Declared indices")


# ============================================================================
# Pipeline Models
# ============================================================================


class ConversionSummary(BaseModel):
    """Result of a conversion run over a directory"""

    mode: Literal["local", "git"] = Field(description="Where the source files came from")
    files_converted: int = Field(default=0, ge=0, description="Number of source files read")
    outputs: list[str] = Field(default_factory=list, description="Paths of the written output files")
