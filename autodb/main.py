import logging
import threading
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import Any, Optional

from fastapi import Depends, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from autodb import config
from autodb.diagram import render_diagram, schema_to_mermaid
from autodb.diagram_html import diagram_to_html
from autodb.errors import PROMPT_REQUIRED_MESSAGE, NoSchemaError
from autodb.generator import SchemaGenerator
from autodb.handlers import SchemaSession
from autodb.view import TAB_LABELS, Tab

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    if not config.GEMINI_API_KEY:
        logger.error("GEMINI_API_KEY is not set; schema generation will fail")
    logger.info("AutoDB Architect API ready")
    yield
    logger.info("AutoDB Architect API shutting down")


app = FastAPI(title="AutoDB Architect API", lifespan=lifespan)

# CORS for the browser frontend
app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Schema and view state per session (simple in-memory)
sessions: dict[str, SchemaSession] = {}
sessions_lock = threading.Lock()


@lru_cache
def get_generator() -> SchemaGenerator:
    return SchemaGenerator()


def get_session(session_id: str = "default") -> SchemaSession:
    with sessions_lock:
        if session_id not in sessions:
            sessions[session_id] = SchemaSession()
        return sessions[session_id]


class GenerateRequest(BaseModel):
    prompt: Optional[str] = None
    session_id: Optional[str] = "default"


class ViewResponse(BaseModel):
    active_tab: Tab
    tabs: dict[str, str]
    content: Any


def view_response(session: SchemaSession) -> ViewResponse:
    return ViewResponse(
        active_tab=session.view.active_tab,
        tabs={tab.value: label for tab, label in TAB_LABELS.items()},
        content=session.view.content,
    )


@app.post("/api/generate")
def generate(request: GenerateRequest, generator: SchemaGenerator = Depends(get_generator)):
    if not (request.prompt or "").strip():
        return JSONResponse(status_code=400, content={"error": PROMPT_REQUIRED_MESSAGE})

    session = get_session(request.session_id or "default")
    result = session.handle_generate(request.prompt, generator)
    if result.get("in_progress"):
        return JSONResponse(status_code=409, content={"error": result["error"]})
    if not result["success"]:
        return JSONResponse(status_code=500, content={"error": result["error"]})
    return result["schema"]


@app.get("/api/view", response_model=ViewResponse)
async def get_view(session: SchemaSession = Depends(get_session)):
    return view_response(session)


@app.post("/api/view/{tab}", response_model=ViewResponse)
async def select_tab(tab: Tab, session: SchemaSession = Depends(get_session)):
    session.view.select(tab)
    return view_response(session)


@app.get("/api/export/{kind}")
async def export(kind: str, session: SchemaSession = Depends(get_session)):
    if kind not in ("sql", "json"):
        return JSONResponse(status_code=404, content={"error": f"Unknown export format: {kind}"})
    try:
        file = session.handle_export(kind)
    except NoSchemaError as e:
        return JSONResponse(status_code=404, content={"error": str(e)})

    return Response(
        content=file.content,
        media_type=file.media_type,
        headers={"Content-Disposition": f'attachment; filename="{file.filename}"'},
    )


@app.get("/api/schema")
async def get_schema(session: SchemaSession = Depends(get_session)):
    schema = session.schema
    if schema is None:
        return {"schema_data": None}
    return {
        "schema_data": schema.to_dict(),
        "diagram_html": diagram_to_html(render_diagram(schema)),
        "mermaid_code": schema_to_mermaid(schema),
    }


@app.post("/api/reset")
async def reset(session: SchemaSession = Depends(get_session)):
    return session.handle_reset()


@app.get("/health")
async def health():
    return {"status": "healthy"}


def run():
    import uvicorn

    config.configure_logging()
    uvicorn.run(app, host=config.HOST, port=config.PORT)


if __name__ == "__main__":
    run()
