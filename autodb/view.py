"""Tab state machine for the four schema representations.

Exactly one tab is active. The controller keeps a single reference to the
current schema, replaced whole on each generation and never mutated, and
re-renders the active tab whenever the schema or the tab changes.
Listeners (the presentation layer) are told about every new output.
"""

import logging
from enum import Enum
from typing import Callable, Optional, Union

from autodb.codegen import generate_models
from autodb.ddl import generate_ddl
from autodb.diagram import DiagramDescriptor, render_diagram
from autodb.export import generate_json
from autodb.models import SchemaDocument

logger = logging.getLogger(__name__)

TabContent = Union[DiagramDescriptor, str]
Listener = Callable[["Tab", TabContent], None]


class Tab(str, Enum):
    ERD = "erd"
    SQL = "sql"
    MODELS = "models"
    JSON = "json"


TAB_LABELS = {
    Tab.ERD: "ERD Diagram",
    Tab.SQL: "SQL Script",
    Tab.MODELS: "Python Models",
    Tab.JSON: "JSON",
}

RENDERERS: dict[Tab, Callable[[SchemaDocument], TabContent]] = {
    Tab.ERD: render_diagram,
    Tab.SQL: generate_ddl,
    Tab.MODELS: generate_models,
    Tab.JSON: generate_json,
}


def render_tab(schema: Optional[SchemaDocument], tab: Tab) -> TabContent:
    """Output of `tab` for `schema`; empty when there is no schema"""
    if schema is None:
        return DiagramDescriptor() if tab == Tab.ERD else ""
    return RENDERERS[tab](schema)


class ViewController:
    def __init__(self):
        self._schema: Optional[SchemaDocument] = None
        self._active_tab = Tab.ERD
        self._content: TabContent = render_tab(None, Tab.ERD)
        self._listeners: list[Listener] = []

    @property
    def schema(self) -> Optional[SchemaDocument]:
        return self._schema

    @property
    def active_tab(self) -> Tab:
        return self._active_tab

    @property
    def content(self) -> TabContent:
        return self._content

    def subscribe(self, listener: Listener) -> None:
        self._listeners.append(listener)

    def load(self, schema: SchemaDocument, tab: Tab = Tab.ERD) -> None:
        """Replace the current schema and show it on `tab`"""
        self._schema = schema
        self._active_tab = Tab(tab)
        self._refresh()

    def clear(self) -> None:
        """Drop the current schema; every tab renders empty"""
        self._schema = None
        self._refresh()

    def select(self, tab: Union[Tab, str]) -> TabContent:
        """Make `tab` active. Selecting the active tab changes nothing."""
        tab = Tab(tab)
        if tab != self._active_tab:
            self._active_tab = tab
            self._refresh()
        return self._content

    def render(self, tab: Union[Tab, str, None] = None) -> TabContent:
        """Render any tab for the current schema without switching to it"""
        return render_tab(self._schema, Tab(tab) if tab is not None else self._active_tab)

    def _refresh(self) -> None:
        self._content = render_tab(self._schema, self._active_tab)
        logger.debug("Showing tab %s (schema loaded: %s)", self._active_tab.value, self._schema is not None)
        for listener in self._listeners:
            listener(self._active_tab, self._content)
