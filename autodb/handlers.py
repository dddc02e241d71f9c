import logging
import threading

from autodb.errors import (
    GENERATION_FAILED_MESSAGE,
    GENERATION_IN_PROGRESS_MESSAGE,
    PROMPT_REQUIRED_MESSAGE,
    GenerationError,
    PromptRequiredError,
)
from autodb.export import EXPORTERS, ExportFile
from autodb.generator import SchemaGenerator
from autodb.view import Tab, ViewController

logger = logging.getLogger(__name__)


class SchemaSession:
    """One user's current schema and view, and the actions they can take"""

    def __init__(self):
        self.view = ViewController()
        # Held for the whole of a generation; only one request may be in flight
        self.generate_lock = threading.Lock()

    @property
    def schema(self):
        return self.view.schema

    def handle_generate(self, prompt: str, generator: SchemaGenerator) -> dict:
        """Generate a new schema from `prompt` and show it on the ERD tab"""
        if not (prompt or "").strip():
            return {"success": False, "error": PROMPT_REQUIRED_MESSAGE}

        if not self.generate_lock.acquire(blocking=False):
            return {"success": False, "error": GENERATION_IN_PROGRESS_MESSAGE, "in_progress": True}

        try:
            return self._generate(prompt, generator)
        finally:
            self.generate_lock.release()

    def _generate(self, prompt: str, generator: SchemaGenerator) -> dict:
        previous, previous_tab = self.view.schema, self.view.active_tab
        # Nothing is shown while the request is in flight
        self.view.clear()

        try:
            schema = generator.generate_schema(prompt)
        except Exception as e:
            if isinstance(e, PromptRequiredError):
                error = str(e)
            elif isinstance(e, GenerationError):
                logger.error("Generation failed: %s", e)
                error = GENERATION_FAILED_MESSAGE
            else:
                logger.exception("Generation failed unexpectedly")
                error = GENERATION_FAILED_MESSAGE
            if previous is not None:
                self.view.load(previous, previous_tab)
            return {"success": False, "error": error}

        self.view.load(schema)
        return {
            "success": True,
            "message": f"Schema created with {len(schema.entities)} entities and {len(schema.relationships)} relationships.",
            "schema": schema.to_dict(),
        }

    def handle_select_tab(self, tab: str) -> dict:
        try:
            content = self.view.select(tab)
        except ValueError:
            return {"success": False, "error": f"Unknown tab: {tab}"}
        return {"success": True, "tab": self.view.active_tab.value, "content": content}

    def handle_export(self, kind: str) -> ExportFile:
        """Build the `sql` or `json` download; raises NoSchemaError with no schema"""
        exporter = EXPORTERS.get(kind)
        if exporter is None:
            raise ValueError(f"Unknown export format: {kind}")
        return exporter(self.view.schema)

    def handle_reset(self) -> dict:
        self.view.clear()
        self.view.select(Tab.ERD)
        return {"success": True}
