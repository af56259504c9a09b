from __future__ import annotations

from pathlib import Path

from fastapi import FastAPI, HTTPException, Response
from pydantic import BaseModel, ValidationError

from octoflow.graph import DEFAULT_FORMAT, render_graph
from octoflow.payload import ExportPayload, load_payload
from .settings import EXPORTS_DIR

# -------------------- Schemas --------------------

class GraphResponse(BaseModel):
    format: str
    graph: str

class HealthResponse(BaseModel):
    ok: bool

# -------------------- Storage --------------------

def export_filename(owner: str, repo: str, run_id: int) -> str:
    return f"{owner}__{repo}__{run_id}.json"


def _load(exports_dir: Path, owner: str, repo: str, run_id: int) -> ExportPayload:
    path = exports_dir / export_filename(owner, repo, run_id)
    if not path.is_file():
        raise HTTPException(status_code=404, detail="Run export not found")
    try:
        return load_payload(path)
    except ValidationError as e:
        raise HTTPException(status_code=422, detail=f"Invalid export file: {e.error_count()} error(s)")

# -------------------- App --------------------

def create_app(exports_dir: str | Path | None = None) -> FastAPI:
    root = Path(exports_dir or EXPORTS_DIR)
    app = FastAPI(title="OctoFlow Viewer")

    @app.get("/healthz", response_model=HealthResponse)
    async def healthz():
        return HealthResponse(ok=True)

    @app.get("/run/{owner}/{repo}/{run_id}", response_model=ExportPayload)
    def get_run(owner: str, repo: str, run_id: int):
        payload = _load(root, owner, repo, run_id)
        return Response(content=payload.to_json(), media_type="application/json")

    @app.get("/run/{owner}/{repo}/{run_id}/graph", response_model=GraphResponse)
    def get_graph(owner: str, repo: str, run_id: int):
        payload = _load(root, owner, repo, run_id)
        graph = render_graph(payload.job_nodes(), payload.logical_edges(), DEFAULT_FORMAT)
        return GraphResponse(format=DEFAULT_FORMAT, graph=graph)

    return app
