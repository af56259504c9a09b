# payload.py
"""
Export payload consumed by the viewer and any other downstream tool.

The schema is versioned by the integer `version` field. Fields may be added
in later versions but never removed or renamed within a version.
"""
from __future__ import annotations

import json
from pathlib import Path
from typing import List, Literal, Optional, Sequence, Tuple

from pydantic import BaseModel, ConfigDict, Field

from .github.models import RunInfo
from .model import JobNode, LogicalEdge, StepRecord

PAYLOAD_VERSION = 1
EXPORT_FILENAME = "octoflow.json"


class _Frozen(BaseModel):
    model_config = ConfigDict(frozen=True)


class RunSummary(_Frozen):
    id: int
    name: str
    status: Optional[str] = None
    conclusion: Optional[str] = None
    created_at: Optional[str] = None
    run_started_at: Optional[str] = None
    sha: Optional[str] = None


class StepPayload(_Frozen):
    name: str
    status: str
    conclusion: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    def to_record(self) -> StepRecord:
        return StepRecord(**self.model_dump())


class JobPayload(_Frozen):
    id: int
    name: str
    status: str
    conclusion: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    steps: List[StepPayload] = Field(default_factory=list)

    @classmethod
    def from_node(cls, job: JobNode) -> JobPayload:
        return cls.model_validate(job.to_dict())

    def to_node(self) -> JobNode:
        return JobNode(
            id=self.id,
            name=self.name,
            status=self.status,
            conclusion=self.conclusion,
            started_at=self.started_at,
            completed_at=self.completed_at,
            steps=tuple(s.to_record() for s in self.steps),
        )


class ExportPayload(_Frozen):
    version: Literal[1] = PAYLOAD_VERSION
    repo: str
    run: RunSummary
    jobs: List[JobPayload]
    edges: List[Tuple[str, str]]
    workflow_path: Optional[str] = None

    def job_nodes(self) -> List[JobNode]:
        return [j.to_node() for j in self.jobs]

    def logical_edges(self) -> List[LogicalEdge]:
        return [(a, b) for a, b in self.edges]

    def to_json(self) -> str:
        data = self.model_dump(mode="json")
        if data["run"].get("sha") is None:
            data["run"].pop("sha", None)
        if data.get("workflow_path") is None:
            data.pop("workflow_path", None)
        return json.dumps(data, indent=2, ensure_ascii=False)


def build_payload(
    repo: str,
    run: RunInfo,
    jobs: Sequence[JobNode],
    edges: Sequence[LogicalEdge],
    workflow_path: Optional[str] = None,
    sha: Optional[str] = None,
) -> ExportPayload:
    """
    Snapshot a run for export.

    `edges` are the logical edges exactly as parsed, not the subset that
    resolved onto runtime jobs, so consumers can apply their own matching.
    """
    return ExportPayload(
        repo=repo,
        run=RunSummary(
            id=run.id,
            name=run.name or f"#{run.id}",
            status=run.status,
            conclusion=run.conclusion,
            created_at=run.created_at,
            run_started_at=run.run_started_at,
            sha=sha or run.head_sha,
        ),
        jobs=[JobPayload.from_node(j) for j in jobs],
        edges=[(str(a), str(b)) for a, b in edges],
        workflow_path=workflow_path,
    )


def write_payload(payload: ExportPayload, path: str | Path) -> Path:
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_text(payload.to_json() + "\n", encoding="utf-8")
    return out


def load_payload(path: str | Path) -> ExportPayload:
    """Read and validate an export file. Raises pydantic.ValidationError on bad content."""
    return ExportPayload.model_validate_json(Path(path).read_text(encoding="utf-8"))
