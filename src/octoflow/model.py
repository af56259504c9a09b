# model.py
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Iterable, List, Optional, Tuple

# (from_id, to_id) as authored in the workflow file
LogicalEdge = Tuple[str, str]


@dataclass(frozen=True)
class StepRecord:
    """A single step inside a runtime job, in execution order."""
    name: str
    status: str
    conclusion: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> StepRecord:
        return cls(
            name=str(data.get("name") or ""),
            status=str(data.get("status") or ""),
            conclusion=data.get("conclusion"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "name": self.name,
            "status": self.status,
            "conclusion": self.conclusion,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
        }


@dataclass(frozen=True)
class JobNode:
    """
    A job as reported by the hosting platform for one run.

    `id` is unique per run. `name` is not: matrix expansion produces
    siblings such as "build (linux)" and "build (windows)".
    """
    id: int
    name: str
    status: str
    conclusion: Optional[str] = None
    started_at: Optional[str] = None
    completed_at: Optional[str] = None
    steps: Tuple[StepRecord, ...] = field(default_factory=tuple)

    @property
    def result(self) -> str:
        """Conclusion once finished, otherwise the lifecycle status."""
        return self.conclusion if self.conclusion else self.status

    @classmethod
    def from_api(cls, data: Dict[str, Any]) -> JobNode:
        """Create a JobNode from a jobs API record."""
        steps = data.get("steps") or []
        return cls(
            id=int(data["id"]),
            name=str(data.get("name") or ""),
            status=str(data.get("status") or ""),
            conclusion=data.get("conclusion"),
            started_at=data.get("started_at"),
            completed_at=data.get("completed_at"),
            steps=tuple(StepRecord.from_api(s) for s in steps if s),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "status": self.status,
            "conclusion": self.conclusion,
            "started_at": self.started_at,
            "completed_at": self.completed_at,
            "steps": [s.to_dict() for s in self.steps],
        }


def normalize_jobs(records: Iterable[Optional[Dict[str, Any]]]) -> List[JobNode]:
    """
    Normalize raw API job records into JobNodes.

    Empty records are skipped; order is kept as returned by the API.
    """
    return [JobNode.from_api(r) for r in records if r]
