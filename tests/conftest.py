"""Pytest fixtures and configuration."""

import json
from types import SimpleNamespace

import pytest
from fastapi.testclient import TestClient

from autodb import main
from autodb.generator import SchemaGenerator
from autodb.handlers import SchemaSession
from autodb.models import normalize_schema


class FakeModels:
    """Stands in for `genai.Client().models`."""

    def __init__(self, text=None, error=None):
        self.text = text
        self.error = error
        self.calls = []

    def generate_content(self, model, contents, config):
        self.calls.append({"model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        part = SimpleNamespace(text=self.text)
        return SimpleNamespace(candidates=[SimpleNamespace(content=SimpleNamespace(parts=[part]))])


class FakeClient:
    def __init__(self, text=None, error=None):
        self.models = FakeModels(text=text, error=error)


@pytest.fixture
def sample_schema_data():
    """Library schema as the model would return it."""
    return {
        "entities": [
            {
                "name": "Author",
                "description": "A person who writes books",
                "fields": [
                    {"name": "authorId", "type": "BIGINT", "isPK": True, "isFK": False},
                    {"name": "name", "type": "VARCHAR(100)", "isPK": False, "isFK": False},
                ],
            },
            {
                "name": "Book",
                "description": "A published title",
                "fields": [
                    {"name": "bookId", "type": "INT", "isPK": True, "isFK": False},
                    {"name": "title", "type": "VARCHAR(255)", "isPK": False, "isFK": False},
                    {"name": "price", "type": "DECIMAL(10,2)", "isPK": False, "isFK": False},
                    {"name": "publishedOn", "type": "DATE", "isPK": False, "isFK": False},
                    {"name": "authorId", "type": "BIGINT", "isPK": False, "isFK": True},
                ],
            },
            {
                "name": "Tag",
                "fields": [
                    {"name": "label", "type": "TEXT"},
                ],
            },
        ],
        "relationships": [
            {"from": "Author", "to": "Book", "type": "One-to-Many", "label": "writes"},
            {"from": "Book", "to": "Tag", "type": "Many-to-Many", "label": "tagged with"},
        ],
    }


@pytest.fixture
def sample_schema(sample_schema_data):
    return normalize_schema(sample_schema_data)


@pytest.fixture
def empty_schema():
    return normalize_schema({"entities": [], "relationships": []})


@pytest.fixture
def fake_client_factory():
    return FakeClient


@pytest.fixture
def fake_generator(sample_schema_data):
    """SchemaGenerator answering with the sample schema."""
    return SchemaGenerator(client=FakeClient(text=json.dumps(sample_schema_data)))


@pytest.fixture
def failing_generator():
    """SchemaGenerator whose upstream call always fails."""
    return SchemaGenerator(client=FakeClient(error=ConnectionError("unreachable")))


@pytest.fixture
def session():
    return SchemaSession()


@pytest.fixture
def client(fake_generator):
    """Test client for the FastAPI app with the fake generator."""
    main.sessions.clear()
    main.app.dependency_overrides[main.get_generator] = lambda: fake_generator
    yield TestClient(main.app)
    main.app.dependency_overrides.clear()
    main.sessions.clear()
