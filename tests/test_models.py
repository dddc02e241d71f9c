"""Tests for schema document normalization."""

import pytest
from pydantic import ValidationError

from autodb.errors import MalformedSchemaError
from autodb.models import RelationshipType, SchemaDocument, normalize_schema


def test_normalize_reads_aliases(sample_schema):
    author = sample_schema.entities[0]
    assert author.name == "Author"
    assert author.fields[0].primary_key is True
    assert sample_schema.entities[1].fields[-1].foreign_key is True

    rel = sample_schema.relationships[0]
    assert rel.from_entity == "Author"
    assert rel.to_entity == "Book"
    assert rel.type == RelationshipType.ONE_TO_MANY


def test_missing_collections_become_empty():
    schema = normalize_schema({})
    assert schema.entities == []
    assert schema.relationships == []
    assert schema.is_empty


def test_null_members_take_defaults():
    schema = normalize_schema({
        "entities": [{"name": "User", "description": None, "fields": None}, {"fields": [{"name": "x", "type": None, "isPK": None}]}],
        "relationships": None,
    })

    assert schema.entities[0].fields == []
    assert schema.entities[0].description is None
    assert schema.entities[1].name == ""
    field = schema.entities[1].fields[0]
    assert field.type == ""
    assert field.primary_key is False
    assert field.foreign_key is False
    assert schema.relationships == []


def test_relationship_label_defaults():
    schema = normalize_schema({"relationships": [{"from": "A", "to": "B", "type": "One-to-One"}]})
    assert schema.relationships[0].label is None
    assert schema.relationships[0].display_label == "related to"


def test_find_entity_returns_first_match():
    schema = normalize_schema({
        "entities": [
            {"name": "User", "description": "first"},
            {"name": "User", "description": "second"},
        ]
    })
    assert schema.find_entity("User").description == "first"
    assert schema.find_entity("Missing") is None


def test_primary_key_field_is_first_flagged():
    schema = normalize_schema({
        "entities": [{
            "name": "Pair",
            "fields": [
                {"name": "a", "type": "INT"},
                {"name": "b", "type": "UUID", "isPK": True},
                {"name": "c", "type": "INT", "isPK": True},
            ],
        }]
    })
    assert schema.entities[0].primary_key_field.name == "b"


def test_unknown_keys_survive_dump():
    schema = normalize_schema({"entities": [{"name": "A", "color": "blue"}], "version": 2})
    data = schema.to_dict()
    assert data["version"] == 2
    assert data["entities"][0]["color"] == "blue"


def test_dump_uses_original_key_names(sample_schema):
    data = sample_schema.to_dict()
    assert set(data["relationships"][0]) >= {"from", "to", "type", "label"}
    assert set(data["entities"][0]["fields"][0]) >= {"name", "type", "isPK", "isFK"}


def test_document_is_immutable(sample_schema):
    with pytest.raises(ValidationError):
        sample_schema.entities = []
    with pytest.raises(ValidationError):
        sample_schema.entities[0].name = "Writer"


@pytest.mark.parametrize("data", [None, [], "schema", 42])
def test_non_object_is_malformed(data):
    with pytest.raises(MalformedSchemaError):
        normalize_schema(data)


def test_wrong_member_shape_is_malformed():
    with pytest.raises(MalformedSchemaError):
        normalize_schema({"entities": ["User", "Order"]})


def test_populate_by_field_name():
    schema = SchemaDocument(relationships=[{"from_entity": "A", "to_entity": "B"}])
    assert schema.relationships[0].from_entity == "A"
