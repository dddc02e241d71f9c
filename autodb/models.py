from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field as ModelField, ValidationError, field_validator

from autodb.errors import MalformedSchemaError

DEFAULT_RELATIONSHIP_LABEL = "related to"


class RelationshipType(str, Enum):
    ONE_TO_ONE = "One-to-One"
    ONE_TO_MANY = "One-to-Many"
    MANY_TO_ONE = "Many-to-One"
    MANY_TO_MANY = "Many-to-Many"


class SchemaPart(BaseModel):
    """Base for every part of a schema document.

    Documents come straight from a language model, so any member may be
    missing or null. A null is replaced by the field's default before
    validation, which lets the generators read attributes without checks.
    Unknown keys are kept so that exporting a document loses nothing.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow", frozen=True)

    @field_validator("*", mode="before")
    @classmethod
    def _null_to_default(cls, value: Any, info) -> Any:
        if value is None:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)
        return value


# A single column in a table
class Field(SchemaPart):
    name: str = ""
    type: str = ""
    primary_key: bool = ModelField(default=False, alias="isPK")
    foreign_key: bool = ModelField(default=False, alias="isFK")


# A table
class Entity(SchemaPart):
    name: str = ""
    description: Optional[str] = None
    fields: list[Field] = ModelField(default_factory=list)

    @property
    def primary_key_field(self) -> Optional[Field]:
        """First field flagged as primary key"""
        return next((f for f in self.fields if f.primary_key), None)


# A relationship between two tables
class Relationship(SchemaPart):
    from_entity: str = ModelField(default="", alias="from")
    to_entity: str = ModelField(default="", alias="to")
    type: str = ""
    label: Optional[str] = None

    @property
    def display_label(self) -> str:
        return self.label or DEFAULT_RELATIONSHIP_LABEL


# The full schema
class SchemaDocument(SchemaPart):
    entities: list[Entity] = ModelField(default_factory=list)
    relationships: list[Relationship] = ModelField(default_factory=list)

    @property
    def is_empty(self) -> bool:
        return not self.entities and not self.relationships

    def find_entity(self, name: str) -> Optional[Entity]:
        """Return the first entity called `name`, if any"""
        return next((e for e in self.entities if e.name == name), None)

    def to_dict(self) -> dict:
        return self.model_dump(by_alias=True)


def normalize_schema(data: Any) -> SchemaDocument:
    """Build a SchemaDocument from decoded JSON, filling in missing parts"""
    if not isinstance(data, dict):
        raise MalformedSchemaError(f"Expected a JSON object, got {type(data).__name__}")

    try:
        return SchemaDocument.model_validate(data)
    except ValidationError as e:
        raise MalformedSchemaError(str(e)) from e
