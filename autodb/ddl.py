import logging

from autodb.models import Entity, Relationship, RelationshipType, SchemaDocument

logger = logging.getLogger(__name__)

HEADER = "-- Generated SQL Schema\n-- System: AutoDB Architect\n\n"

# Only these relationship types get a foreign key column on the `to` table
FOREIGN_KEY_TYPES = (RelationshipType.ONE_TO_MANY, RelationshipType.MANY_TO_ONE)

DEFAULT_KEY_TYPE = "INT"
DEFAULT_KEY_NAME = "id"


def create_table_statement(entity: Entity) -> str:
    """CREATE TABLE for one entity; only the first PK-flagged field gets the constraint"""
    columns = []
    pk_written = False

    for field in entity.fields:
        column = " ".join(part for part in (field.name, field.type) if part)
        if field.primary_key and not pk_written:
            column += " PRIMARY KEY"
            pk_written = True
        columns.append(f"  {column}")

    body = ",\n".join(columns)
    if body:
        return f"CREATE TABLE {entity.name} (\n{body}\n);"
    return f"CREATE TABLE {entity.name} (\n);"


def foreign_key_statements(schema: SchemaDocument, rel: Relationship) -> str:
    """ALTER TABLE statements adding `<from>_id` to the `to` table"""
    fk_table = rel.to_entity
    pk_table = rel.from_entity

    referenced = schema.find_entity(pk_table)
    pk_field = referenced.primary_key_field if referenced else None
    pk_type = (pk_field.type if pk_field else "") or DEFAULT_KEY_TYPE
    pk_name = (pk_field.name if pk_field else "") or DEFAULT_KEY_NAME
    column = f"{pk_table.lower()}_id"

    return "\n".join([
        f"-- Relationship: {pk_table} {rel.display_label} {fk_table} ({rel.type})",
        f"ALTER TABLE {fk_table} ADD COLUMN {column} {pk_type};",
        f"ALTER TABLE {fk_table} ADD CONSTRAINT fk_{fk_table}_{pk_table} "
        f"FOREIGN KEY ({column}) REFERENCES {pk_table}({pk_name});",
    ])


def generate_ddl(schema: SchemaDocument) -> str:
    """Convert a schema to a SQL script.

    Tables come first in entity order, then one block of ALTER statements
    per one-to-many / many-to-one relationship in relationship order. No
    reordering is done, so a table may reference one declared later (or
    never declared at all).
    """
    statements = [create_table_statement(entity) for entity in schema.entities]

    for rel in schema.relationships:
        if rel.type in FOREIGN_KEY_TYPES:
            statements.append(foreign_key_statements(schema, rel))
        else:
            logger.debug("No foreign key for %s relationship %s -> %s", rel.type, rel.from_entity, rel.to_entity)

    if not statements:
        return ""
    return HEADER + "\n\n".join(statements) + "\n"
