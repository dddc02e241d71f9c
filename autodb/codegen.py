from typing import Callable

from autodb.models import Entity, SchemaDocument

HEADER = "from dataclasses import dataclass\nfrom datetime import date, datetime\n\n"

DEFAULT_PYTHON_TYPE = "str"


def _contains(*needles: str) -> Callable[[str], bool]:
    return lambda sql_type: any(needle in sql_type for needle in needles)


# Checked in order against the upper-cased SQL type, first match wins.
# "BIGINT" is an int, "DATETIME" is a date, "DECIMAL(10,2)" is a float.
TYPE_RULES: list[tuple[Callable[[str], bool], str]] = [
    (_contains("INT"), "int"),
    (_contains("BOOL"), "bool"),
    (_contains("DATE"), "date"),
    (_contains("TIMESTAMP"), "datetime"),
    (_contains("FLOAT", "DECIMAL"), "float"),
]


def python_type(sql_type: str) -> str:
    """Map a free-form SQL type to a Python annotation"""
    upper = (sql_type or "").upper()
    for matches, py_type in TYPE_RULES:
        if matches(upper):
            return py_type
    return DEFAULT_PYTHON_TYPE


def entity_to_dataclass(entity: Entity) -> str:
    docstring = entity.description or f"Model for {entity.name}"
    # Backslashes first, so the escapes added for quotes stay intact
    docstring = docstring.replace("\\", "\\\\").replace('"', '\\"')
    lines = [
        "@dataclass",
        f"class {entity.name}:",
        f'    """{docstring}"""',
    ]
    for field in entity.fields:
        lines.append(f"    {field.name}: {python_type(field.type)}")
    return "\n".join(lines)


def generate_models(schema: SchemaDocument) -> str:
    """Render every entity as a dataclass, in document order"""
    if not schema.entities:
        return ""

    classes = [entity_to_dataclass(entity) for entity in schema.entities]
    return HEADER + "\n\n".join(classes) + "\n"
