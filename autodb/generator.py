import json
import logging
from typing import Optional

from google import genai
from google.genai import types

from autodb import config
from autodb.errors import GenerationError, MalformedSchemaError, PromptRequiredError
from autodb.models import SchemaDocument, normalize_schema

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = """You are an expert Database Architect. Output ONLY a valid JSON object with:
{
  "entities": [{ "name": "PascalCase", "description": "short", "fields": [{ "name": "camelCase", "type": "SQL_TYPE", "isPK": boolean, "isFK": boolean }] }],
  "relationships": [{ "from": "EntityName", "to": "EntityName", "type": "One-to-One|One-to-Many|Many-to-One|Many-to-Many", "label": "verb" }]
}

## Guidelines:
- Use standard SQL data types: INT, VARCHAR(n), TEXT, DATE, TIMESTAMP, BOOLEAN, DECIMAL(p,s)
- Every entity should have exactly one primary key field
- Relationship endpoints must be names of entities you declared

No markdown, no extra text.
"""


def extract_text(response) -> Optional[str]:
    """Text of the first part of the first candidate, if the reply has one"""
    if not response.candidates:
        return None
    content = response.candidates[0].content
    if content is None or not content.parts:
        return None
    return content.parts[0].text


class SchemaGenerator:
    """Turns a domain description into a SchemaDocument using Gemini"""

    def __init__(self, client=None, model_id: str = config.MODEL_ID, api_key: Optional[str] = None):
        self._client = client
        self.model_id = model_id
        self.api_key = api_key or config.GEMINI_API_KEY

    @property
    def client(self):
        # Created on first use so that importing without a key works
        if self._client is None:
            if not self.api_key:
                raise GenerationError("GEMINI_API_KEY is not set")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def generate_schema(self, prompt: str) -> SchemaDocument:
        prompt = (prompt or "").strip()
        if not prompt:
            raise PromptRequiredError()

        logger.info("Requesting schema from %s (%d chars of prompt)", self.model_id, len(prompt))

        try:
            response = self.client.models.generate_content(
                model=self.model_id,
                contents=prompt,
                config=types.GenerateContentConfig(
                    system_instruction=SYSTEM_PROMPT,
                    response_mime_type="application/json",
                ),
            )
        except GenerationError:
            raise
        except Exception as e:
            logger.error("Upstream request failed: %s", e)
            raise GenerationError("Upstream request failed") from e

        text = extract_text(response)
        if not text:
            raise GenerationError("Bad AI response")

        # Deeply nested replies overflow the decoder and validator as RecursionError
        try:
            data = json.loads(text)
        except (ValueError, RecursionError) as e:
            raise MalformedSchemaError("Failed to parse AI JSON") from e

        if not isinstance(data, dict) or "entities" not in data:
            raise MalformedSchemaError("AI response is not a schema")

        try:
            schema = normalize_schema(data)
        except RecursionError as e:
            raise MalformedSchemaError("AI response is nested too deeply") from e
        logger.info(
            "Received schema with %d entities and %d relationships",
            len(schema.entities),
            len(schema.relationships),
        )
        return schema
