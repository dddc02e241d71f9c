from typing import Optional

from pydantic import BaseModel

from autodb.ddl import generate_ddl
from autodb.errors import NoSchemaError
from autodb.models import SchemaDocument


class ExportFile(BaseModel):
    filename: str
    media_type: str
    content: str


def generate_json(schema: SchemaDocument) -> str:
    """The document itself, pretty-printed with its original key names"""
    return schema.model_dump_json(by_alias=True, indent=2)


def export_sql(schema: Optional[SchemaDocument]) -> ExportFile:
    if schema is None:
        raise NoSchemaError()
    return ExportFile(filename="schema.sql", media_type="text/plain", content=generate_ddl(schema))


def export_json(schema: Optional[SchemaDocument]) -> ExportFile:
    if schema is None:
        raise NoSchemaError()
    return ExportFile(filename="schema.json", media_type="application/json", content=generate_json(schema))


EXPORTERS = {
    "sql": export_sql,
    "json": export_json,
}
