"""Tests for Python dataclass generation."""

import ast

import pytest

from autodb.codegen import DEFAULT_PYTHON_TYPE, generate_models, python_type
from autodb.models import normalize_schema


@pytest.mark.parametrize("sql_type,expected", [
    ("INT", "int"),
    ("bigint", "int"),
    ("SMALLINT", "int"),
    ("BOOLEAN", "bool"),
    ("bool", "bool"),
    ("DATE", "date"),
    ("DATETIME", "date"),
    ("TIMESTAMP", "datetime"),
    ("timestamp with time zone", "datetime"),
    ("FLOAT", "float"),
    ("DECIMAL(10,2)", "float"),
    ("VARCHAR(255)", "str"),
    ("TEXT", "str"),
    ("", "str"),
])
def test_python_type(sql_type, expected):
    assert python_type(sql_type) == expected


def test_first_matching_rule_wins():
    # INT is checked before TIMESTAMP and DECIMAL
    assert python_type("INTERVAL TIMESTAMP") == "int"
    assert python_type("POINT") == "int"
    # BOOL is checked before DATE
    assert python_type("BOOL_DATE") == "bool"
    # DATE is checked before TIMESTAMP
    assert python_type("DATE_TIMESTAMP") == "date"


def test_none_type_is_default():
    assert python_type(None) == DEFAULT_PYTHON_TYPE


def test_one_dataclass_per_entity(sample_schema):
    code = generate_models(sample_schema)
    tree = ast.parse(code)
    classes = [node for node in tree.body if isinstance(node, ast.ClassDef)]

    assert [c.name for c in classes] == ["Author", "Book", "Tag"]
    for cls, entity in zip(classes, sample_schema.entities):
        fields = [node for node in cls.body if isinstance(node, ast.AnnAssign)]
        assert len(fields) == len(entity.fields)
        assert [f.target.id for f in fields] == [f.name for f in entity.fields]


def test_field_annotations(sample_schema):
    code = generate_models(sample_schema)
    assert "    authorId: int\n" in code
    assert "    price: float\n" in code
    assert "    publishedOn: date\n" in code
    assert "    title: str\n" in code


def test_docstrings(sample_schema):
    code = generate_models(sample_schema)
    assert '@dataclass\nclass Author:\n    """A person who writes books"""' in code
    assert '    """Model for Tag"""' in code


def test_header(sample_schema):
    code = generate_models(sample_schema)
    assert code.startswith("from dataclasses import dataclass\nfrom datetime import date, datetime\n\n")


def test_entity_without_fields_is_valid_python():
    schema = normalize_schema({"entities": [{"name": "Marker"}]})
    tree = ast.parse(generate_models(schema))
    assert tree.body[-1].name == "Marker"


def test_empty_document(empty_schema):
    assert generate_models(empty_schema) == ""


@pytest.mark.parametrize("description", [
    'Has a "nickname"',
    'Quoted """ inside',
    "Path like C:\\temp\\",
    'Ends with a backslash quote \\"',
])
def test_docstring_escaping_keeps_source_valid(description):
    schema = normalize_schema({"entities": [{"name": "Person", "description": description}]})
    tree = ast.parse(generate_models(schema))
    assert ast.get_docstring(tree.body[-1]) == description
